# -*- coding: utf-8 -*-
"""
novelcheck/core/encoding.py

这个文件做什么：
- 判断下载得到的 txt 字节流是什么编码（只处理本语料常见的 GBK / UTF-8 歧义）。
- 把字节解码成文本，得到不可变的 RawDocument。

识别规则：
1) 先看 BOM：EF BB BF -> utf-8；FF FE -> utf-16le；FE FF -> utf-16be
2) 否则取前 10000 字节，用 2 字节滑窗统计：
   - gbk_score：GBK 双字节区间的字节对
   - utf8_score：常见中文 UTF-8 首字节（0xE4-0xE9）
3) gbk_score > 1.5 * utf8_score 才判定为 gbk，否则返回 None（调用方按 utf-8 处理）

注意：
- detect_encoding 从不抛异常，空 buffer 返回 None。
- 解码失败（或文件读不到）才是 DecodeError，这是整条流水线唯一的致命错误。
- UTF-8 下载在半个字符处被截断不算解码失败：丢掉那半个字符，交给完整性检查。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


SAMPLE_BYTES = 10000
GBK_RATIO = 1.5

_BOMS = [
	(b"\xef\xbb\xbf", "utf-8"),
	(b"\xff\xfe", "utf-16le"),
	(b"\xfe\xff", "utf-16be"),
]

# 标签 -> Python codec。gb18030 是 gbk 的超集，解码更宽容。
_CODECS = {
	"utf-8": "utf-8-sig",
	"utf-16le": "utf-16-le",
	"utf-16be": "utf-16-be",
	"gbk": "gb18030",
}


class DecodeError(ValueError):
	"""文件读不到，或字节无法按识别出的编码解码。"""


@dataclass(frozen=True)
class RawDocument:
	"""
	一次下载得到的原始文档。

	- data：原始字节
	- encoding：识别出的编码标签（utf-8/utf-16le/utf-16be/gbk）
	- text：解码后的文本（已去掉 BOM）
	"""
	data: bytes
	encoding: str
	text: str


def _is_gbk_pair(b1: int, b2: int) -> bool:
	if 0x81 <= b1 <= 0xFE and 0x40 <= b2 <= 0xFE:
		return True
	return 0xA1 <= b1 <= 0xF7 and 0xA1 <= b2 <= 0xFE


def detect_encoding(data: bytes) -> Optional[str]:
	for bom, label in _BOMS:
		if data.startswith(bom):
			return label

	sample = data[:SAMPLE_BYTES]
	gbk_score = 0
	utf8_score = 0

	for i in range(len(sample) - 1):
		b1 = sample[i]
		b2 = sample[i + 1]

		if _is_gbk_pair(b1, b2):
			gbk_score += 1

		if 0xE4 <= b1 <= 0xE9:
			utf8_score += 1

	if gbk_score > utf8_score * GBK_RATIO:
		return "gbk"

	return None


def _decode_utf8(data: bytes) -> Optional[str]:
	"""
	按 UTF-8 严格解码；只有末尾 1-3 字节是半个字符（下载被截断）时，丢掉这半个字符。
	其他非法字节返回 None。
	"""
	try:
		return data.decode("utf-8")
	except UnicodeDecodeError as e:
		if e.reason == "unexpected end of data" and e.start >= len(data) - 3:
			return data[:e.start].decode("utf-8")
		return None


def decode_document(data: bytes) -> RawDocument:
	"""
	识别编码并解码。识别不出时按 utf-8（非法字节替换成 U+FFFD）。

	UTF-8 的续字节也落在 GBK 双字节区间里，无 BOM 的 UTF-8 中文同样会被打成 gbk；
	能按 UTF-8 解码（容忍末尾被截断的半个字符）时以 UTF-8 为准。
	"""
	label = detect_encoding(data)

	if label in (None, "gbk"):
		text = _decode_utf8(data)
		if text is not None:
			return RawDocument(data=data, encoding="utf-8", text=text)

	if label is None:
		return RawDocument(data=data, encoding="utf-8", text=data.decode("utf-8", errors="replace"))

	try:
		text = data.decode(_CODECS[label])
	except UnicodeDecodeError as e:
		raise DecodeError(f"cannot decode as {label}: {e}") from e

	# utf-16 的 BOM 在 -le/-be codec 下会留成 U+FEFF
	if text.startswith("\ufeff"):
		text = text[1:]

	return RawDocument(data=data, encoding=label, text=text)


def load_document(path: str | Path) -> RawDocument:
	p = Path(path)
	try:
		data = p.read_bytes()
	except OSError as e:
		raise DecodeError(f"cannot read {p}: {e}") from e

	return decode_document(data)
