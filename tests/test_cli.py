# -*- coding: utf-8 -*-
"""CLI 测试（--no_llm）。"""

from __future__ import annotations

from pathlib import Path

from novelcheck.cli import build_parser, main
from novelcheck.core.io import novel_paths
from novelcheck.core.meta import load_meta


def test_parser_defaults():
	args = build_parser().parse_args(["run", "--novel_dir", "out/x"])
	assert args.until == "verify"
	assert args.no_llm is False
	assert args.timeout == 60.0


def test_check_ok(tmp_path: Path, make_novel, capsys):
	p = tmp_path / "n.txt"
	p.write_bytes(make_novel(12).encode("gbk"))

	assert main(["check", "--in_path", str(p), "--no_llm"]) == 0
	out = capsys.readouterr().out
	assert "[OK] valid=True" in out
	assert '"script_check"' in out


def test_check_invalid_exit_code(tmp_path: Path, make_novel, capsys):
	p = tmp_path / "n.txt"
	p.write_text(make_novel(5), encoding="utf-8")

	assert main(["check", "--in_path", str(p), "--no_llm"]) == 1
	out = capsys.readouterr().out
	assert "[WARN] 章节数量过少 (5 章)" in out


def test_check_missing_file(tmp_path: Path, capsys):
	assert main(["check", "--in_path", str(tmp_path / "nope.txt"), "--no_llm"]) == 1
	assert "[FAIL] file not found" in capsys.readouterr().out


def test_init_and_run(tmp_path: Path, make_novel):
	src = tmp_path / "download.txt"
	src.write_bytes(make_novel(12).encode("gbk"))
	pack = tmp_path / "book1"

	assert main(["init", "--novel_dir", str(pack), "--source", str(src), "--word_count", "0.5万"]) == 0
	m = load_meta(novel_paths(pack).meta)
	assert m.meta["novel_id"] == "book1"
	assert m.declared_word_count == "0.5万"

	assert main(["run", "--novel_dir", str(pack), "--no_llm"]) == 0
	assert load_meta(novel_paths(pack).meta).integrity["valid"] is True


def test_run_declared_word_count_not_met(tmp_path: Path, make_novel, capsys):
	src = tmp_path / "download.txt"
	src.write_text(make_novel(12), encoding="utf-8")
	pack = tmp_path / "book1"

	assert main(["init", "--novel_dir", str(pack), "--source", str(src), "--word_count", "1万"]) == 0
	assert main(["run", "--novel_dir", str(pack), "--no_llm"]) == 1
	assert "[WARN] 字数严重不足" in capsys.readouterr().out
