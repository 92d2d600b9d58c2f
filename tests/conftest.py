# -*- coding: utf-8 -*-
"""测试用的合成小说。"""

from __future__ import annotations

import pytest


PARAGRAPH = "　　" + "他走进山门，看见云海翻涌，心中一片宁静。" * 8


def build_novel(n_chapters: int = 12, ending: str = "全书完。", front: str = "书名：测试之书\n作者：无名\n") -> str:
	parts = [front]
	for i in range(1, n_chapters + 1):
		parts.append(f"第{i}章 风起{i}")
		parts.append(PARAGRAPH)
		parts.append("")
		parts.append(PARAGRAPH)
	parts[-1] = parts[-1] + ending
	return "\n".join(parts) + "\n"


@pytest.fixture
def make_novel():
	return build_novel
