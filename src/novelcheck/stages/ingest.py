# -*- coding: utf-8 -*-
"""
novelcheck/stages/ingest.py

目的：
- “输入准备阶段”：识别 source.txt 的编码，转成 UTF-8 写到 text/novel.txt。

输入：
- NovelPack/source.txt（必须存在）

输出：
- NovelPack/text/novel.txt
- meta.json：meta.encoding，stage -> ingested

注意：
- 解码失败（DecodeError）直接抛出，整条流水线中止。
"""

from __future__ import annotations

import logging

from novelcheck.core.encoding import load_document
from novelcheck.core.io import NovelPaths
from novelcheck.core.meta import load_meta, new_meta, save_meta
from novelcheck.stages.base import StageContext


logger = logging.getLogger(__name__)


class IngestStage:
	name = "ingest"

	def run(self, paths: NovelPaths, ctx: StageContext) -> None:
		paths.ensure_dirs()

		if not paths.meta.exists():
			save_meta(paths.meta, new_meta(ctx.novel_id))

		if not paths.source.exists():
			raise FileNotFoundError(f"missing {paths.source} (请先用 init 放入下载的 txt)")

		doc = load_document(paths.source)
		logger.info("decoded %s as %s (%d bytes)", paths.source, doc.encoding, len(doc.data))

		paths.text.write_text(doc.text, encoding="utf-8")

		m = load_meta(paths.meta)
		m.meta["encoding"] = doc.encoding
		m.set_stage("ingested")
		m.mark_done("ingest")
		save_meta(paths.meta, m)
