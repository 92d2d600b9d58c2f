# -*- coding: utf-8 -*-
"""
verify_integrity/skill.py

这个文件做什么：
- 把“脚本检查”与 oracle 的判断融合成最终的 IntegrityVerdict。

融合策略（按顺序判定）：
1) 文档不存在 -> exists=False, valid=False
2) 脚本检查通过 -> valid=True，无条件；consult_on_pass 时也会问 oracle，
   但结果只挂在 llm_check 上做审计，永远不会把通过改成不通过
3) 脚本检查不通过且 oracle 可用 -> valid = is_complete 且 confidence > rescue_confidence
   （唯一能把“不通过”救回“通过”的路径）
4) oracle 超时/报错/返回不合规 -> 退化为只看脚本检查，llm_check=None，不抛异常

注意：
- oracle 是注入的能力（普通函数或对象），这里不持有任何全局状态。
- oracle 超时按失败处理；超时后后台线程不会被等待。
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from novelcheck.core.encoding import RawDocument
from novelcheck.core.schemas import IntegrityVerdict, LLMCheck, ScriptCheck, SegmentationResult
from novelcheck.checks.statistical import ISSUE_MISSING

from .prompt import build_oracle_request
from .schema import Oracle, OracleRequest, VerifyPolicy
from .validator import parse_oracle_response


logger = logging.getLogger(__name__)


class IntegrityVerifySkill:
	def __init__(self, oracle: Optional[Oracle] = None, policy: Optional[VerifyPolicy] = None):
		self.oracle = oracle
		self.policy = policy or VerifyPolicy()

	def run(
		self,
		document: Optional[RawDocument],
		script_check: Optional[ScriptCheck],
		seg: Optional[SegmentationResult] = None,
	) -> IntegrityVerdict:
		if document is None:
			logger.info("document absent")
			return IntegrityVerdict(
				exists=False,
				valid=False,
				script_check=script_check or ScriptCheck(valid=False, issues=[ISSUE_MISSING]),
			)

		if script_check is None:
			raise ValueError("script_check is required when the document exists")

		if script_check.valid:
			llm_check = None
			if self.policy.consult_on_pass:
				llm_check = self.consult(build_oracle_request(document.text, seg, script_check))
			logger.info("script check passed; verdict valid")
			return IntegrityVerdict(exists=True, valid=True, script_check=script_check, llm_check=llm_check)

		llm_check = self.consult(build_oracle_request(document.text, seg, script_check))
		if llm_check is None:
			logger.info("oracle unavailable; falling back to script check (valid=%s)", script_check.valid)
			return IntegrityVerdict(exists=True, valid=script_check.valid, script_check=script_check)

		rescued = llm_check.is_complete and llm_check.confidence > self.policy.rescue_confidence
		logger.info(
			"oracle is_complete=%s confidence=%.2f; verdict valid=%s",
			llm_check.is_complete,
			llm_check.confidence,
			rescued,
		)
		return IntegrityVerdict(exists=True, valid=rescued, script_check=script_check, llm_check=llm_check)

	def consult(self, req: OracleRequest) -> Optional[LLMCheck]:
		"""
		调用 oracle；任何失败都返回 None（记 warning）。
		"""
		if self.oracle is None:
			return None

		try:
			raw = self._call_oracle(req)
			# 直接返回 LLMCheck 的 oracle 也要过同一套校验（confidence 范围等）
			if isinstance(raw, LLMCheck):
				raw = raw.to_dict()
			return parse_oracle_response(raw)
		except Exception as e:
			logger.warning("oracle failed: %s: %s", type(e).__name__, e)
			return None

	def _call_oracle(self, req: OracleRequest):
		if self.policy.timeout_s is None:
			return self.oracle(req)

		executor = ThreadPoolExecutor(max_workers=1)
		try:
			future = executor.submit(self.oracle, req)
			return future.result(timeout=self.policy.timeout_s)
		finally:
			executor.shutdown(wait=False, cancel_futures=True)
