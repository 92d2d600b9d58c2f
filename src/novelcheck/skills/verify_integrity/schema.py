# -*- coding: utf-8 -*-
"""
verify_integrity/schema.py

- OracleRequest：发给 oracle 的摘录与统计摘要
- Oracle：oracle 的调用形状（普通函数或实现了 __call__ 的对象都行）
- VerifyPolicy：融合策略的参数
- oracle 的判断用 core.schemas.LLMCheck 表示（共享契约）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

from novelcheck.core.schemas import LLMCheck


__all__ = ["LLMCheck", "OracleRequest", "Oracle", "VerifyPolicy"]


HEAD_EXCERPT_CHARS = 2000
TAIL_EXCERPT_CHARS = 2000


@dataclass
class OracleRequest:
	"""
	head_excerpt / tail_excerpt：
	- 正文开头、结尾各不超过 2000 字符

	title_samples：
	- 前几章与最后几章的标题

	statistical_summary：
	- 结构摘要 + 脚本检查的 issues/stats
	"""
	head_excerpt: str
	tail_excerpt: str
	title_samples: List[str] = field(default_factory=list)
	statistical_summary: Dict[str, Any] = field(default_factory=dict)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"head_excerpt": self.head_excerpt,
			"tail_excerpt": self.tail_excerpt,
			"title_samples": list(self.title_samples),
			"statistical_summary": self.statistical_summary,
		}


# 返回 dict（会被 validator 校验）或已经校验过的 LLMCheck
Oracle = Callable[[OracleRequest], Union[Dict[str, Any], LLMCheck]]


@dataclass
class VerifyPolicy:
	"""
	rescue_confidence：
	- 脚本检查不通过时，oracle 必须 is_complete 且 confidence 严格大于它才能“救回”

	timeout_s：
	- 单次 oracle 调用的上限；None 表示不设上限（由 oracle 自己的超时兜底）

	consult_on_pass：
	- 脚本检查通过时是否也调用 oracle（结果只做审计记录，不会推翻通过）
	"""
	rescue_confidence: float = 0.8
	timeout_s: float | None = 60.0
	consult_on_pass: bool = False
