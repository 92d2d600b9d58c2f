# -*- coding: utf-8 -*-
"""
novelcheck/checks/statistical.py

这个文件做什么：
- “脚本检查”：只用拆章结果 + 声明字数判断一本小说是否完整。
- 便宜、可复现、偏保守；判不过的再交给 oracle 去“救”（见 skills/verify_integrity）。

检查项（除第一条外互不短路，全部跑完再汇总 issues）：
a) 文件不存在 / 正文不足 min_chars 个字符 -> 直接返回 valid=False
b) 章节数 < min_chapters -> 章节数量过少
c) 声明字数可解析且 > 0，实际总字数 < min_word_ratio × 声明字数 -> 字数严重不足
d) 最后一章以 "..." 或 “未完待续” 结尾 -> 结尾疑似截断（只是信号，不是证据）

valid = 没有 issues 且 章节数 >= min_chapters
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from novelcheck.core.schemas import ScriptCheck, SegmentationResult
from novelcheck.core.segmenter import SegmentConfig, segment_chapters
from novelcheck.core.summary import format_file_size


ISSUE_MISSING = "文件不存在"
ISSUE_TOO_SHORT = "文件内容过短"
ISSUE_TOO_FEW_CHAPTERS = "章节数量过少"
ISSUE_WORDS_INSUFFICIENT = "字数严重不足"
ISSUE_TRUNCATED = "结尾疑似截断"

TRUNCATION_MARKERS = ("...", "未完待续")

_WORD_COUNT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(百万|万|千)?")
_MULTIPLIERS = {"万": 10_000, "千": 1_000, "百万": 1_000_000}

# 结尾常见的包裹：（未完待续）、【未完待续】
_TAIL_WRAPPERS = " \t\r\n　)）]】」』"


@dataclass
class CheckConfig:
	min_chars: int = 1000
	min_chapters: int = 10
	min_word_ratio: float = 0.5


def parse_word_count(s: Optional[str]) -> int:
	"""
	"446.53万" -> 4465300；"12千" -> 12000；"1.2百万" -> 1200000；"8000" -> 8000。
	解析不出返回 0。
	"""
	if not s:
		return 0

	m = _WORD_COUNT_RE.search(s)
	if not m:
		return 0

	num = float(m.group(1)) * _MULTIPLIERS.get(m.group(2) or "", 1)
	return int(num + 0.5)


def ends_truncated(content: str) -> bool:
	tail = (content or "").rstrip(_TAIL_WRAPPERS)
	return any(tail.endswith(marker) for marker in TRUNCATION_MARKERS)


def check_by_script(
	text: Optional[str],
	seg: Optional[SegmentationResult] = None,
	declared_word_count: Optional[str] = None,
	cfg: Optional[CheckConfig] = None,
	seg_cfg: Optional[SegmentConfig] = None,
) -> ScriptCheck:
	cfg = cfg or CheckConfig()

	if text is None:
		return ScriptCheck(valid=False, issues=[ISSUE_MISSING])

	if len(text) < cfg.min_chars:
		return ScriptCheck(
			valid=False,
			issues=[f"{ISSUE_TOO_SHORT} ({len(text)} 字符)"],
			stats={"file_size": len(text), "file_size_formatted": format_file_size(len(text))},
		)

	if seg is None:
		seg = segment_chapters(text, seg_cfg)

	issues: List[str] = []
	stats: Dict[str, Any] = {
		"file_size": len(text),
		"file_size_formatted": format_file_size(len(text)),
		"chapter_count": seg.chapter_count,
		"total_words": seg.total_words,
		"avg_words_per_chapter": seg.stats.avg_words,
	}

	if seg.chapter_count < cfg.min_chapters:
		issues.append(f"{ISSUE_TOO_FEW_CHAPTERS} ({seg.chapter_count} 章)")

	expected = parse_word_count(declared_word_count)
	if expected > 0 and seg.total_words < expected * cfg.min_word_ratio:
		issues.append(f"{ISSUE_WORDS_INSUFFICIENT} (实际 {seg.total_words} 字，声明 {expected} 字)")

	if seg.chapters and ends_truncated(seg.chapters[-1].content):
		issues.append(f"{ISSUE_TRUNCATED} (最后一章: {seg.chapters[-1].title})")

	valid = not issues and seg.chapter_count >= cfg.min_chapters
	return ScriptCheck(valid=valid, issues=issues, stats=stats)
