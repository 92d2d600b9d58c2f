# -*- coding: utf-8 -*-
"""
novelcheck/core/schemas/verdict.py

完整性判定的数据结构。

- ScriptCheck：脚本（统计）检查的结果
- LLMCheck：oracle 给出的判断（只记录，不改）
- IntegrityVerdict：一次校验的最终结论；构造后不再修改，落盘时用 to_dict() 取新副本
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ScriptCheck:
	valid: bool
	issues: List[str] = field(default_factory=list)
	stats: Dict[str, Any] = field(default_factory=dict)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"valid": self.valid,
			"issues": list(self.issues),
			"stats": copy.deepcopy(self.stats),
		}


@dataclass(frozen=True)
class LLMCheck:
	is_complete: bool
	confidence: float
	analysis: str = ""
	issues: List[str] = field(default_factory=list)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"is_complete": self.is_complete,
			"confidence": self.confidence,
			"analysis": self.analysis,
			"issues": list(self.issues),
		}


@dataclass(frozen=True)
class IntegrityVerdict:
	exists: bool
	valid: bool
	script_check: ScriptCheck
	llm_check: Optional[LLMCheck] = None

	def to_dict(self) -> Dict[str, Any]:
		return {
			"exists": self.exists,
			"valid": self.valid,
			"script_check": self.script_check.to_dict(),
			"llm_check": self.llm_check.to_dict() if self.llm_check else None,
		}
