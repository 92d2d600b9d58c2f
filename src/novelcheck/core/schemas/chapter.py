# -*- coding: utf-8 -*-
"""
novelcheck/core/schemas/chapter.py

拆章结果的数据结构：segmenter 产出，statistical check 与章节落盘使用。
- 不依赖任何业务层（LLM、文件布局等）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ChapterRecord:
	"""
	一个章节。

	number：
	- 标题里解析出的章节号；解析不出时为按边界递增的序号
	- 不保证单调（原文乱序或误判都会出现）

	word_count：
	- 去掉空白后的字符数（中文按字计）
	"""
	number: int
	title: str
	content: str
	word_count: int
	line_count: int


@dataclass(frozen=True)
class ChapterStats:
	count: int = 0
	total_words: int = 0
	avg_words: int = 0
	max_words: int = 0
	min_words: int = 0

	def to_dict(self) -> Dict[str, int]:
		return {
			"count": self.count,
			"total_words": self.total_words,
			"avg_words": self.avg_words,
			"max_words": self.max_words,
			"min_words": self.min_words,
		}


@dataclass
class SegmentationResult:
	"""
	chapters 按原文出现顺序排列，stats 只统计 chapters。

	discarded_count / discarded_samples：
	- 因内容太短被丢掉的片段（不会变成 ChapterRecord），留作审计
	- samples 只记标题，最多 SegmentConfig.max_discarded_samples 条
	"""
	chapters: List[ChapterRecord]
	stats: ChapterStats
	discarded_count: int = 0
	discarded_samples: List[str] = field(default_factory=list)

	@property
	def chapter_count(self) -> int:
		return len(self.chapters)

	@property
	def total_words(self) -> int:
		return self.stats.total_words

	def titles(self) -> List[str]:
		return [c.title for c in self.chapters]

	def to_index(self) -> Dict[str, Any]:
		return {
			"total_chapters": self.chapter_count,
			"total_words": self.total_words,
			"stats": self.stats.to_dict(),
			"discarded_count": self.discarded_count,
			"discarded_samples": list(self.discarded_samples),
			"chapters": [
				{
					"number": c.number,
					"title": c.title,
					"word_count": c.word_count,
					"line_count": c.line_count,
				}
				for c in self.chapters
			],
		}
