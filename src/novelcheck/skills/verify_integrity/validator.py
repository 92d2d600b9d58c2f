# -*- coding: utf-8 -*-
"""
verify_integrity/validator.py

这个文件做什么：
- 对 oracle 返回的 JSON 做强校验，转成 LLMCheck。
- 任何不合规：直接 raise ValueError，让上层按“oracle 失败”处理。
"""

from __future__ import annotations

from typing import Any, Dict

from .schema import LLMCheck


def _pick(data: Dict[str, Any], *keys: str) -> Any:
	for k in keys:
		if k in data:
			return data[k]
	return None


def parse_oracle_response(data: Any) -> LLMCheck:
	if not isinstance(data, dict):
		raise ValueError("oracle response must be a JSON object")

	is_complete = _pick(data, "is_complete", "isComplete")
	if not isinstance(is_complete, bool):
		raise ValueError("is_complete must be bool")

	confidence = data.get("confidence")
	# bool 是 int 的子类，要单独排除
	if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
		raise ValueError("confidence must be a number")
	if not 0.0 <= confidence <= 1.0:
		raise ValueError(f"confidence out of range: {confidence}")

	analysis = data.get("analysis", "")
	if analysis is None:
		analysis = ""
	if not isinstance(analysis, str):
		raise ValueError("analysis must be a string")

	issues = data.get("issues", [])
	if issues is None:
		issues = []
	if not isinstance(issues, list) or not all(isinstance(i, str) for i in issues):
		raise ValueError("issues must be a list of strings")

	return LLMCheck(
		is_complete=is_complete,
		confidence=float(confidence),
		analysis=analysis,
		issues=list(issues),
	)
