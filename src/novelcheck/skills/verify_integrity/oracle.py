# -*- coding: utf-8 -*-
"""
verify_integrity/oracle.py

LLM 版 oracle：OracleRequest -> prompt -> llm_client.chat_json -> dict。

只依赖一个 llm_client 接口：
  llm_client.chat_json(system_prompt: str, user_prompt: str) -> dict
返回值的校验交给 skill（validator.parse_oracle_response）。
"""

from __future__ import annotations

from typing import Any, Dict

from .prompt import SYSTEM_PROMPT, build_user_prompt
from .schema import OracleRequest


class LLMOracle:
	def __init__(self, llm_client: Any):
		self.llm_client = llm_client

	def __call__(self, req: OracleRequest) -> Dict[str, Any]:
		return self.llm_client.chat_json(SYSTEM_PROMPT, build_user_prompt(req))
