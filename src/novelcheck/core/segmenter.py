# -*- coding: utf-8 -*-
"""
novelcheck/core/segmenter.py

这个文件做什么：
- 把整本小说文本按章节标题切成 ChapterRecord 列表，并给出统计。
- 纯函数：输入文本 -> SegmentationResult，不读写文件。

切分策略：
1) 逐行扫描，标题行交给 boundary.classify_line 判断
2) 遇到标题：结算上一章，再开新章
   - 上一章正文（去首尾空白）>= min_chapter_length，或 include_empty=True，才输出
   - 否则整段丢弃，只计入 discarded_count / discarded_samples
   - 标题下一行正文都没有（卷标题紧跟章标题）时同样丢弃并计入审计
3) 第一个标题之前的内容（简介、广告等）直接丢弃
4) 章节号：标题里解析出的号；解析不出（或为 0）时用“第几个标题”的流水号
5) 文末再按同样规则结算最后一章
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from novelcheck.core.boundary import classify_line
from novelcheck.core.schemas import ChapterRecord, ChapterStats, SegmentationResult


logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+", flags=re.UNICODE)


@dataclass
class SegmentConfig:
	min_chapter_length: int = 100
	include_empty: bool = False
	max_discarded_samples: int = 10


def count_words(text: str) -> int:
	"""
	字数：去掉所有空白后的字符数（中文按字计）。
	"""
	if not text:
		return 0
	return len(_WS_RE.sub("", text))


def chapter_stats(chapters: List[ChapterRecord]) -> ChapterStats:
	if not chapters:
		return ChapterStats()

	counts = [c.word_count for c in chapters]
	total = sum(counts)

	return ChapterStats(
		count=len(chapters),
		total_words=total,
		avg_words=int(total / len(chapters) + 0.5),
		max_words=max(counts),
		min_words=min(counts),
	)


@dataclass
class _Pending:
	number: int
	title: str
	lines: List[str]


def segment_chapters(text: str, cfg: Optional[SegmentConfig] = None) -> SegmentationResult:
	cfg = cfg or SegmentConfig()
	logger.info("segmenting chapters (%d chars)", len(text or ""))

	chapters: List[ChapterRecord] = []
	discarded: List[str] = []
	discarded_count = 0

	cur: Optional[_Pending] = None
	boundary_count = 0

	def flush() -> None:
		nonlocal discarded_count
		if cur is None:
			return

		content = "\n".join(cur.lines).strip()
		# 没有任何正文行的标题（如紧跟章标题的卷标题）即使 include_empty 也不输出
		if cur.lines and (cfg.include_empty or len(content) >= cfg.min_chapter_length):
			chapters.append(
				ChapterRecord(
					number=cur.number,
					title=cur.title,
					content=content,
					word_count=count_words(content),
					line_count=len(cur.lines),
				)
			)
			return

		discarded_count += 1
		if len(discarded) < cfg.max_discarded_samples:
			discarded.append(cur.title)

	for line in (text or "").splitlines():
		b = classify_line(line)
		if b is None:
			if cur is not None:
				cur.lines.append(line)
			continue

		flush()
		boundary_count += 1
		cur = _Pending(number=b.number or boundary_count, title=b.title, lines=[])

	flush()

	if discarded_count:
		logger.debug("discarded %d short fragment(s): %s", discarded_count, discarded)
	logger.info("segmented %d chapter(s)", len(chapters))

	return SegmentationResult(
		chapters=chapters,
		stats=chapter_stats(chapters),
		discarded_count=discarded_count,
		discarded_samples=discarded,
	)
