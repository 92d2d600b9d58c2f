# -*- coding: utf-8 -*-
"""脚本（统计）完整性检查测试。"""

from __future__ import annotations

import pytest

from novelcheck.checks.statistical import (
	ISSUE_MISSING,
	ISSUE_TOO_FEW_CHAPTERS,
	ISSUE_TOO_SHORT,
	ISSUE_TRUNCATED,
	ISSUE_WORDS_INSUFFICIENT,
	CheckConfig,
	check_by_script,
	ends_truncated,
	parse_word_count,
)
from novelcheck.core.schemas import ChapterRecord, SegmentationResult
from novelcheck.core.segmenter import chapter_stats


def _has(issues, prefix):
	return any(i.startswith(prefix) for i in issues)


def _seg_with_words(n_chapters: int, words_each: int) -> SegmentationResult:
	chapters = [
		ChapterRecord(number=i, title=f"第{i}章", content="正文。", word_count=words_each, line_count=1)
		for i in range(1, n_chapters + 1)
	]
	return SegmentationResult(chapters=chapters, stats=chapter_stats(chapters))


class TestParseWordCount:
	@pytest.mark.parametrize(
		"s, expected",
		[
			("446.53万", 4465300),
			("100万", 1000000),
			("12千", 12000),
			("1.2百万", 1200000),
			("8000", 8000),
			("约50万字", 500000),
			("", 0),
			(None, 0),
			("未知", 0),
		],
	)
	def test_parse(self, s, expected):
		assert parse_word_count(s) == expected


class TestCheckByScript:
	def test_complete_novel_passes(self, make_novel):
		r = check_by_script(make_novel(12))
		assert r.valid
		assert r.issues == []
		assert r.stats["chapter_count"] == 12
		assert r.stats["total_words"] > 0
		assert r.stats["file_size_formatted"].endswith("B")

	def test_too_few_chapters(self, make_novel):
		r = check_by_script(make_novel(5))
		assert not r.valid
		assert _has(r.issues, ISSUE_TOO_FEW_CHAPTERS)
		assert "(5 章)" in r.issues[0]

	def test_truncation_marker_regardless_of_count(self, make_novel):
		r = check_by_script(make_novel(12, ending="未完待续"))
		assert not r.valid
		assert _has(r.issues, ISSUE_TRUNCATED)

		r = check_by_script(make_novel(4, ending="（未完待续）"))
		assert _has(r.issues, ISSUE_TRUNCATED)
		assert _has(r.issues, ISSUE_TOO_FEW_CHAPTERS)

	def test_ellipsis_ending(self, make_novel):
		r = check_by_script(make_novel(12, ending="他回头看了一眼..."))
		assert _has(r.issues, ISSUE_TRUNCATED)

	def test_word_count_insufficient(self):
		seg = _seg_with_words(20, 20000)
		assert seg.total_words == 400000

		r = check_by_script("正" * 2000, seg, declared_word_count="100万")
		assert not r.valid
		assert _has(r.issues, ISSUE_WORDS_INSUFFICIENT)

	def test_word_count_enough(self):
		seg = _seg_with_words(20, 30000)
		r = check_by_script("正" * 2000, seg, declared_word_count="100万")
		assert r.valid

	def test_unparsable_declared_count_ignored(self):
		seg = _seg_with_words(20, 10)
		r = check_by_script("正" * 2000, seg, declared_word_count="未知")
		assert r.valid

	def test_all_checks_accumulate(self):
		chapters = [
			ChapterRecord(number=1, title="第1章", content="他走了...", word_count=10, line_count=1),
		]
		seg = SegmentationResult(chapters=chapters, stats=chapter_stats(chapters))
		r = check_by_script("正" * 2000, seg, declared_word_count="1万")
		assert _has(r.issues, ISSUE_TOO_FEW_CHAPTERS)
		assert _has(r.issues, ISSUE_WORDS_INSUFFICIENT)
		assert _has(r.issues, ISSUE_TRUNCATED)
		assert len(r.issues) == 3

	def test_too_short_returns_early(self):
		r = check_by_script("第一章\n短")
		assert not r.valid
		assert len(r.issues) == 1
		assert _has(r.issues, ISSUE_TOO_SHORT)
		assert "chapter_count" not in r.stats

	def test_missing(self):
		r = check_by_script(None)
		assert not r.valid
		assert r.issues == [ISSUE_MISSING]

	def test_config_thresholds(self, make_novel):
		r = check_by_script(make_novel(5), cfg=CheckConfig(min_chapters=5))
		assert r.valid


def test_ends_truncated():
	assert ends_truncated("……他走了...")
	assert ends_truncated("他走了。\n\n【未完待续】\n")
	assert not ends_truncated("全书完。")
	assert not ends_truncated("")
