# -*- coding: utf-8 -*-
"""
novelcheck/core/meta.py

目的：
- 定义 meta.json 的数据结构与读写方法。
- 记录下载方声明的信息（书名、作者、声明字数）和识别出的编码。
- 维护 NovelPack 的“状态机”：每个 stage 跑完更新一次。
- 保存最近一次完整性判定（每次都是 verdict.to_dict() 的新副本）。

meta 的核心字段：
- status.stage      : 当前阶段（empty/ingested/segmented/verified）
- status.done       : 已完成阶段
- status.failed     : 失败阶段
- status.last_error : 最近一次错误信息
- integrity         : 最近一次判定

注意：
- 同一本书被两个调用方同时校验时，读-改-写会互相覆盖；串行化由调用方负责。
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


STAGES = [
	"empty",
	"ingested",
	"segmented",
	"verified",
]


@dataclass
class NovelMeta:
	schema_version: str
	meta: Dict[str, Any]
	status: Dict[str, Any]
	chapters: Dict[str, Any]
	integrity: Dict[str, Any]

	@property
	def stage(self) -> str:
		return self.status.get("stage", "empty")

	@property
	def declared_word_count(self) -> Optional[str]:
		return self.meta.get("declared_word_count") or None

	def set_stage(self, stage: str) -> None:
		if stage not in STAGES:
			raise ValueError(f"invalid stage: {stage}")

		self.status["stage"] = stage

	def mark_done(self, key: str) -> None:
		done = self.status.setdefault("done", [])
		if key in done:
			return

		done.append(key)

	def mark_failed(self, key: str, err: str) -> None:
		failed = self.status.setdefault("failed", [])
		if key not in failed:
			failed.append(key)

		self.status["last_error"] = err

	def set_integrity(self, verdict: Dict[str, Any]) -> None:
		self.integrity = dict(verdict)
		self.integrity["checked_at"] = datetime.now().isoformat(timespec="seconds")


def new_meta(
	novel_id: str,
	title: str = "",
	author: str = "",
	declared_word_count: str = "",
) -> NovelMeta:
	return NovelMeta(
		schema_version="novelpack.v0.1",
		meta={
			"novel_id": novel_id,
			"title": title,
			"author": author,
			"declared_word_count": declared_word_count,
			"encoding": "",
			"created_at": datetime.now().isoformat(timespec="seconds"),
		},
		status={
			"stage": "empty",
			"done": [],
			"failed": [],
			"last_error": "",
		},
		chapters={
			"count": 0,
			"total_words": 0,
			"discarded_count": 0,
		},
		integrity={},
	)


def load_meta(path: Path) -> NovelMeta:
	"""
	从 meta.json 加载；缺字段就用空 dict。
	"""
	data = json.loads(path.read_text(encoding="utf-8"))

	return NovelMeta(
		schema_version=data.get("schema_version", ""),
		meta=data.get("meta", {}),
		status=data.get("status", {}),
		chapters=data.get("chapters", {}),
		integrity=data.get("integrity", {}),
	)


def save_meta(path: Path, m: NovelMeta) -> None:
	data = {
		"schema_version": m.schema_version,
		"meta": m.meta,
		"status": m.status,
		"chapters": m.chapters,
		"integrity": m.integrity,
	}

	path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
