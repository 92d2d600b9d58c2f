# -*- coding: utf-8 -*-
"""
novelcheck/stages/base.py

目的：
- 定义 Stage 的“接口形状”和运行上下文 StageContext。
- 让每个阶段都遵循同一种调用方式：run(paths, ctx)。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from novelcheck.checks.statistical import CheckConfig
from novelcheck.core.io import NovelPaths
from novelcheck.core.segmenter import SegmentConfig
from novelcheck.skills.verify_integrity.schema import Oracle, VerifyPolicy


@dataclass
class StageContext:
	"""
	运行上下文：
	- novel_id：写 meta 用
	- seg_cfg/check_cfg/policy：各阶段的可调参数
	- oracle：显式注入的 oracle；为 None 且 use_llm=True 时从 .env 加载 LLM
	"""
	novel_id: str
	seg_cfg: SegmentConfig = field(default_factory=SegmentConfig)
	check_cfg: CheckConfig = field(default_factory=CheckConfig)
	policy: VerifyPolicy = field(default_factory=VerifyPolicy)
	oracle: Optional[Oracle] = None
	use_llm: bool = True


class Stage(Protocol):
	name: str

	def run(self, paths: NovelPaths, ctx: StageContext) -> None:
		...
