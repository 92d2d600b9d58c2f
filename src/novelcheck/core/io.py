# -*- coding: utf-8 -*-
"""
novelcheck/core/io.py

目的：
- 统一管理 NovelPack 的路径约定（哪些文件放哪里）。
- 统一创建 NovelPack 的目录骨架（ensure_dirs）。

NovelPack 约定（v0.1）核心路径：
- source.txt            : 下载得到的原始字节（编码未知）
- meta.json             : 声明信息、阶段状态、最近一次完整性判定
- text/novel.txt        : 解码后的 UTF-8 正文
- chapters/NNNN.txt     : 每章一个文件（按出现顺序编号）
- chapters/index.json   : 章节索引 + 被丢弃片段的审计信息
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class NovelPaths:
	"""
	把 NovelPack 内部常用文件路径集中在一个结构体里。

	注意：
	- 只存路径，不做读写。
	- ensure_dirs() 负责创建目录骨架。
	"""
	root: Path
	source: Path
	meta: Path
	text: Path
	chapters_dir: Path
	chapters_index: Path

	def ensure_dirs(self) -> None:
		"""
		只 mkdir，不写任何业务文件；重复执行安全。
		"""
		for d in (self.root, self.text.parent, self.chapters_dir):
			d.mkdir(parents=True, exist_ok=True)

	def chapter_file(self, seq: int, width: int = 4) -> Path:
		return self.chapters_dir / f"{seq:0{width}d}.txt"


def novel_paths(novel_dir: str | Path) -> NovelPaths:
	"""
	根据 novel_dir 生成 NovelPaths（不创建目录）。
	"""
	root = Path(novel_dir)

	return NovelPaths(
		root=root,
		source=root / "source.txt",
		meta=root / "meta.json",
		text=root / "text" / "novel.txt",
		chapters_dir=root / "chapters",
		chapters_index=root / "chapters" / "index.json",
	)
