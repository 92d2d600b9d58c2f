# -*- coding: utf-8 -*-
"""Pipeline 集成测试：init + run（无 LLM，oracle 用本地 mock）。"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from novelcheck.cli import cmd_init
from novelcheck.core.io import novel_paths
from novelcheck.core.meta import load_meta
from novelcheck.pipeline.orchestrator import run_until, verify_novel_file
from novelcheck.stages.base import StageContext
from novelcheck.stages.verify import VerifyStage


def _init_pack(tmp_path: Path, text: str, word_count: str = "") -> Path:
	src = tmp_path / "download.txt"
	src.write_bytes(text.encode("gbk"))

	pack = tmp_path / "book1"
	cmd_init(str(pack), str(src), novel_id="book1", title="测试之书", author="无名", word_count=word_count)
	return pack


def test_run_full_pipeline(tmp_path: Path, make_novel):
	text = make_novel(12)
	pack = _init_pack(tmp_path, text)

	ctx = StageContext(novel_id="book1", use_llm=False)
	run_until(novel_dir=str(pack), ctx=ctx, until="verify")

	paths = novel_paths(pack)
	assert paths.text.read_text(encoding="utf-8") == text

	files = sorted(p.name for p in paths.chapters_dir.glob("[0-9]*.txt"))
	assert files[0] == "0001.txt"
	assert len(files) == 12
	first = (paths.chapters_dir / "0001.txt").read_text(encoding="utf-8")
	assert first.startswith("【第1章 风起1】\n\n")
	assert sorted(p.name for p in pack.iterdir()) == ["chapters", "meta.json", "source.txt", "text"]

	index = json.loads(paths.chapters_index.read_text(encoding="utf-8"))
	assert index["total_chapters"] == 12
	assert index["chapters"][0]["file"] == "chapters/0001.txt"
	assert index["discarded_count"] == 0

	m = load_meta(paths.meta)
	assert m.stage == "verified"
	assert m.status["done"] == ["ingest", "segment", "verify"]
	assert m.meta["encoding"] == "gbk"
	assert m.meta["title"] == "测试之书"
	assert m.chapters["count"] == 12
	assert m.integrity["exists"] is True
	assert m.integrity["valid"] is True
	assert m.integrity["llm_check"] is None
	assert "checked_at" in m.integrity


def test_run_until_segment(tmp_path: Path, make_novel):
	pack = _init_pack(tmp_path, make_novel(12))
	run_until(novel_dir=str(pack), ctx=StageContext(novel_id="book1", use_llm=False), until="segment")

	m = load_meta(novel_paths(pack).meta)
	assert m.stage == "segmented"
	assert m.integrity == {}


def test_rescue_through_pipeline(tmp_path: Path, make_novel):
	pack = _init_pack(tmp_path, make_novel(5), word_count="1万")
	calls = []

	def oracle(req):
		calls.append(req)
		return {"is_complete": True, "confidence": 0.9, "analysis": "短篇，已完结", "issues": []}

	ctx = StageContext(novel_id="book1", oracle=oracle)
	run_until(novel_dir=str(pack), ctx=ctx)

	m = load_meta(novel_paths(pack).meta)
	assert len(calls) == 1
	assert m.integrity["valid"] is True
	assert m.integrity["script_check"]["valid"] is False
	assert m.integrity["llm_check"]["confidence"] == 0.9


def test_missing_source_marks_failed(tmp_path: Path):
	pack = tmp_path / "empty_pack"
	with pytest.raises(FileNotFoundError):
		run_until(novel_dir=str(pack), ctx=StageContext(novel_id="x", use_llm=False))

	m = load_meta(novel_paths(pack).meta)
	assert m.status["failed"] == ["ingest"]
	assert "FileNotFoundError" in m.status["last_error"]


def test_verify_stage_without_text(tmp_path: Path):
	paths = novel_paths(tmp_path / "pack")
	VerifyStage().run(paths, StageContext(novel_id="x", use_llm=False))

	m = load_meta(paths.meta)
	assert m.integrity["exists"] is False
	assert m.integrity["valid"] is False


class TestVerifyNovelFile:
	def test_missing(self, tmp_path: Path):
		v = verify_novel_file(tmp_path / "nope.txt")
		assert v.exists is False
		assert v.valid is False

	def test_gbk_file(self, tmp_path: Path, make_novel):
		p = tmp_path / "n.txt"
		p.write_bytes(make_novel(12).encode("gbk"))
		v = verify_novel_file(p)
		assert v.exists and v.valid
		assert v.script_check.stats["chapter_count"] == 12

	def test_declared_word_count(self, tmp_path: Path, make_novel):
		p = tmp_path / "n.txt"
		p.write_text(make_novel(12), encoding="utf-8")
		v = verify_novel_file(p, declared_word_count="100万")
		assert v.valid is False
		assert any(i.startswith("字数严重不足") for i in v.script_check.issues)

	def test_utf8_cut_mid_character(self, tmp_path: Path, make_novel):
		p = tmp_path / "n.txt"
		p.write_bytes(make_novel(12).encode("utf-8")[:-3])
		v = verify_novel_file(p)
		assert v.exists is True
		assert v.script_check.stats["chapter_count"] == 12
