# -*- coding: utf-8 -*-
"""
novelcheck/stages/segment.py

目的：
- “拆章阶段”：把 text/novel.txt 切成章节文件。

输入：
- NovelPack/text/novel.txt

输出：
- chapters/0001.txt ...：按出现顺序编号，内容为 “【标题】\\n\\n正文”
- chapters/index.json：章节索引 + 丢弃片段审计
- meta.json：chapters 统计，stage -> segmented
"""

from __future__ import annotations

import json

from novelcheck.core.io import NovelPaths
from novelcheck.core.meta import load_meta, save_meta
from novelcheck.core.schemas import SegmentationResult
from novelcheck.core.segmenter import segment_chapters
from novelcheck.stages.base import StageContext


def write_chapters(paths: NovelPaths, seg: SegmentationResult) -> None:
	paths.chapters_dir.mkdir(parents=True, exist_ok=True)

	# 上一次的章节文件可能更多，先清掉
	for old in paths.chapters_dir.glob("[0-9]*.txt"):
		old.unlink()

	width = max(4, len(str(seg.chapter_count)))
	index = seg.to_index()

	for i, (c, entry) in enumerate(zip(seg.chapters, index["chapters"]), start=1):
		p = paths.chapter_file(i, width)
		p.write_text(f"【{c.title}】\n\n{c.content}\n", encoding="utf-8")
		entry["file"] = f"chapters/{p.name}"

	paths.chapters_index.write_text(
		json.dumps(index, ensure_ascii=False, indent=2) + "\n",
		encoding="utf-8",
	)


class SegmentStage:
	name = "segment"

	def run(self, paths: NovelPaths, ctx: StageContext) -> None:
		if not paths.text.exists():
			raise FileNotFoundError(f"missing {paths.text}")

		text = paths.text.read_text(encoding="utf-8")
		seg = segment_chapters(text, ctx.seg_cfg)
		write_chapters(paths, seg)

		m = load_meta(paths.meta)
		m.chapters = {
			"count": seg.chapter_count,
			"total_words": seg.total_words,
			"discarded_count": seg.discarded_count,
		}
		m.set_stage("segmented")
		m.mark_done("segment")
		save_meta(paths.meta, m)
