# -*- coding: utf-8 -*-
"""
novelcheck/core/summary.py

拆章结果的结构摘要与文本截断工具（给 oracle 请求和报告用）。
"""

from __future__ import annotations

from typing import Any, Dict

from novelcheck.core.schemas import SegmentationResult


def truncate_content(content: str, max_chars: int) -> str:
	"""
	截到 max_chars 以内：最后一个句号落在 80% 之后就断在句号，否则截断并加 "..."。
	"""
	if not content or len(content) <= max_chars:
		return content or ""

	truncated = content[:max_chars]
	last_period = truncated.rfind("。")

	if last_period > max_chars * 0.8:
		return truncated[:last_period + 1]

	return truncated[:max_chars - 3] + "..."


def tail_content(content: str, max_chars: int) -> str:
	if not content or len(content) <= max_chars:
		return content or ""
	return content[-max_chars:]


def format_file_size(size: int) -> str:
	if size <= 0:
		return "0 B"

	units = ["B", "KB", "MB", "GB"]
	i = 0
	value = float(size)
	while value >= 1024 and i < len(units) - 1:
		value /= 1024
		i += 1

	# 1.50 -> 1.5，2.00 -> 2
	text = f"{value:.2f}".rstrip("0").rstrip(".")
	return f"{text} {units[i]}"


def structure_summary(seg: SegmentationResult, title_samples: int = 10) -> Dict[str, Any]:
	avg = seg.stats.avg_words
	short = sum(1 for c in seg.chapters if c.word_count < avg * 0.5)
	long = sum(1 for c in seg.chapters if c.word_count > avg * 1.5)

	return {
		"total_chapters": seg.chapter_count,
		"total_words": seg.total_words,
		"average_chapter_length": avg,
		"length_distribution": {
			"short": short,
			"medium": seg.chapter_count - short - long,
			"long": long,
		},
		"chapter_title_samples": seg.titles()[:title_samples],
	}
