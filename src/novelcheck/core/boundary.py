# -*- coding: utf-8 -*-
"""
novelcheck/core/boundary.py

这个文件做什么：
- 判断“一行文本是不是章节标题”，是的话顺便取出章节号和标题。

模式顺序：
- 这些模式并不互斥（“第一卷”同时命中 standard 和 volume）。
- 按 BOUNDARY_PATTERNS 的顺序逐条试，先命中者胜。

规则：
- 去掉首尾空白后超过 60 个字符的行一律不是标题。
- 章节号：先找“第X章/节/回”，X 交给 parse_cn_numeral；
  找不到再取行首阿拉伯数字；仍然没有就是 None（由 segmenter 给流水号）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from novelcheck.core.cn_numeral import parse_cn_numeral


MAX_TITLE_LEN = 60

_NUM = "零一二三四五六七八九十百千万两〇○0-9"
_CN_NUM = "零一二三四五六七八九十百千万两〇○"


def _pattern(regex: str, flags: int = 0) -> Callable[[str], bool]:
	compiled = re.compile(regex, flags)
	return lambda line: compiled.match(line) is not None


# (name, predicate)，顺序即优先级
BOUNDARY_PATTERNS: List[Tuple[str, Callable[[str], bool]]] = [
	# 第一章 标题 / 第12节：标题 / 第三集
	("standard", _pattern(rf"^第[{_NUM}]+[章节回卷部集]\s*[：:_·]?\s*.{{0,50}}$")),
	# 【第一章】标题 / [第12章]标题
	("bracketed", _pattern(r"^[【\[](第.{1,5}[章节回])[】\]].{0,50}$")),
	# 12、标题 / 3.标题
	("arabic_list", _pattern(r"^[0-9]+[、.．].{1,50}$")),
	# 一、标题
	("cn_list", _pattern(rf"^[{_CN_NUM}]+[、.．].{{1,50}}$")),
	# Chapter 12
	("chapter_en", _pattern(r"^Chapter\s*[0-9]+.*$", re.IGNORECASE)),
	# 第一卷 / 第二部
	("volume", _pattern(rf"^第[{_NUM}]+[卷部].{{0,30}}$")),
	# 第12 标题
	("loose_digits", _pattern(r"^第[0-9]+.{0,30}$")),
]

_NUMBER_RE = re.compile(rf"第([{_NUM}]+)[章节回]")
_LEADING_DIGITS_RE = re.compile(r"^([0-9]+)")


@dataclass(frozen=True)
class Boundary:
	"""
	一行标题的识别结果。

	- number：解析出的章节号；None 表示需要流水号
	- title：去掉首尾空白的整行
	- pattern：命中的模式名（BOUNDARY_PATTERNS 里的 name）
	"""
	number: Optional[int]
	title: str
	pattern: str


def match_pattern(line: str) -> Optional[str]:
	"""
	返回第一个命中的模式名；不是标题返回 None。
	"""
	if not line:
		return None

	s = line.strip()
	if not s or len(s) > MAX_TITLE_LEN:
		return None

	for name, predicate in BOUNDARY_PATTERNS:
		if predicate(s):
			return name

	return None


def is_chapter_title(line: str) -> bool:
	return match_pattern(line) is not None


def extract_number(title: str) -> Optional[int]:
	m = _NUMBER_RE.search(title)
	if m:
		return parse_cn_numeral(m.group(1))

	m = _LEADING_DIGITS_RE.match(title)
	if m:
		return int(m.group(1))

	return None


def classify_line(line: str) -> Optional[Boundary]:
	name = match_pattern(line)
	if name is None:
		return None

	title = line.strip()
	return Boundary(number=extract_number(title), title=title, pattern=name)
