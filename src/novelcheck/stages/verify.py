# -*- coding: utf-8 -*-
"""
novelcheck/stages/verify.py

目的：
- “完整性校验阶段”：脚本检查 + oracle 融合，结论写进 meta.json 的 integrity。

输入：
- NovelPack/text/novel.txt（不存在时判定 exists=False，不抛异常）
- meta.json 里的 declared_word_count

输出：
- meta.json：integrity，stage -> verified

LLM：
- ctx.oracle 已注入就用它；否则 use_llm=True 时从 .env 加载，缺 key 则只跑脚本检查。
- 脚本检查已通过且不要求审计时，不加载 LLM。
"""

from __future__ import annotations

import logging

from novelcheck.checks.statistical import check_by_script
from novelcheck.core.encoding import load_document
from novelcheck.core.io import NovelPaths
from novelcheck.core.meta import load_meta, new_meta, save_meta
from novelcheck.core.segmenter import segment_chapters
from novelcheck.skills.verify_integrity import IntegrityVerifySkill, LLMOracle
from novelcheck.stages.base import StageContext


logger = logging.getLogger(__name__)


class VerifyStage:
	name = "verify"

	def run(self, paths: NovelPaths, ctx: StageContext) -> None:
		if not paths.meta.exists():
			paths.ensure_dirs()
			save_meta(paths.meta, new_meta(ctx.novel_id))

		m = load_meta(paths.meta)

		if not paths.text.exists():
			verdict = IntegrityVerifySkill(policy=ctx.policy).run(None, None)
		else:
			doc = load_document(paths.text)
			seg = segment_chapters(doc.text, ctx.seg_cfg)
			script = check_by_script(doc.text, seg, m.declared_word_count, ctx.check_cfg)

			need_oracle = not script.valid or ctx.policy.consult_on_pass
			if ctx.oracle is not None or not need_oracle or not ctx.use_llm:
				verdict = IntegrityVerifySkill(ctx.oracle, ctx.policy).run(doc, script, seg)
			else:
				verdict = _run_with_llm(ctx, doc, script, seg)

		m.set_integrity(verdict.to_dict())
		m.set_stage("verified")
		m.mark_done("verify")
		save_meta(paths.meta, m)


def _run_with_llm(ctx, doc, script, seg):
	from novelcheck.providers.llm.chat_client import load_chat_client

	try:
		llm = load_chat_client()
	except ValueError as e:
		logger.warning("LLM unavailable, script check only: %s", e)
		return IntegrityVerifySkill(None, ctx.policy).run(doc, script, seg)

	try:
		return IntegrityVerifySkill(LLMOracle(llm), ctx.policy).run(doc, script, seg)
	finally:
		llm.close()
