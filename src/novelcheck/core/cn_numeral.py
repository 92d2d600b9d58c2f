# -*- coding: utf-8 -*-
"""
novelcheck/core/cn_numeral.py

中文/阿拉伯混合章节号 -> int。

- 纯 ASCII 数字直接 int()。
- 否则从右往左扫：单位字（十百千万）决定当前位的权重，数字字只改写“待定位”的值，
  不累加；遇到下一个单位或扫描结束时才把“待定位 × 权重”计入结果。
- 开头的裸单位（“十”“十二”里的十）按 1 计。
- 零/〇 只是占位，不改写待定位。
- 不认识的字符直接跳过；解析不出任何值返回 0。

已知局限：只到“万”级，超过一亿（或 万万/亿 这类复合单位）的结果不可靠。
章节号不会到这个量级，这里保持原样。
"""

from __future__ import annotations


_DIGITS = {
	"一": 1, "二": 2, "两": 2, "三": 3, "四": 4,
	"五": 5, "六": 6, "七": 7, "八": 8, "九": 9,
}
_UNITS = {"十": 10, "百": 100, "千": 1000, "万": 10000}


def parse_cn_numeral(s: str) -> int:
	s = (s or "").strip()
	if not s:
		return 0

	if s.isascii() and s.isdigit():
		return int(s)

	result = 0
	temp = 0        # 待定位的数字
	weight = 1      # 待定位的权重
	section = 1     # 过了“万”之后为 10000
	bare = False    # 当前单位还没有遇到数字

	for ch in reversed(s):
		if ch in _UNITS:
			result += temp * weight
			temp = 0

			u = _UNITS[ch]
			if u == 10000:
				section = 10000
				weight = 10000
			else:
				weight = u * section
			bare = True
			continue

		# 零是占位、其他字符忽略，都不改写待定位
		if ch in _DIGITS:
			temp = _DIGITS[ch]
			bare = False

	if bare and temp == 0:
		temp = 1

	return result + temp * weight
