# -*- coding: utf-8 -*-
"""
novelcheck/cli.py

目的：
- 提供项目的命令行入口。
- init：创建 NovelPack，放入下载的原始 txt，写 meta.json（声明的书名/作者/字数）。
- run：调用 pipeline/orchestrator.py 运行若干 stage（支持 --until）。
- check：不建 NovelPack，直接校验单个 txt，打印判定 JSON。

注意：
- CLI 不做业务细节：不解析小说、不拼 prompt。
- CLI 只负责参数解析 + 把任务交给 orchestrator。
- check 的退出码：判定通过 0，不通过 1。
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
from pathlib import Path

from novelcheck.pipeline.orchestrator import STAGE_ORDER


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="novelcheck",
		description="Web-novel txt ingestion and integrity verification",
	)
	p.add_argument("-v", "--verbose", action="store_true", help="输出 DEBUG 日志")

	sub = p.add_subparsers(dest="cmd", required=True)

	initp = sub.add_parser("init", help="创建 NovelPack 并放入下载的原始 txt")
	initp.add_argument("--novel_dir", required=True, help="e.g. output/novel_001")
	initp.add_argument("--source", required=True, help="下载得到的 txt（编码任意）")
	initp.add_argument("--novel_id", default=None, help="小说 ID，缺省为 novel_dir 目录名")
	initp.add_argument("--title", default="")
	initp.add_argument("--author", default="")
	initp.add_argument("--word_count", default="", help="声明字数，如 446.53万")

	runp = sub.add_parser("run", help="对已有 NovelPack 运行流水线")
	runp.add_argument("--novel_dir", required=True)
	runp.add_argument("--novel_id", default=None)
	runp.add_argument("--until", default="verify", choices=STAGE_ORDER)
	_add_verify_args(runp)

	checkp = sub.add_parser("check", help="直接校验单个 txt")
	checkp.add_argument("--in_path", required=True)
	checkp.add_argument("--word_count", default=None, help="声明字数，如 446.53万")
	_add_verify_args(checkp)

	return p


def _add_verify_args(p: argparse.ArgumentParser) -> None:
	p.add_argument("--no_llm", action="store_true", help="只跑脚本检查，不调用 LLM")
	p.add_argument("--consult_on_pass", action="store_true", help="脚本检查通过时也请 LLM 复核（只记录）")
	p.add_argument("--timeout", type=float, default=60.0, help="LLM 单次调用超时（秒）")
	p.add_argument("--min_chapter_length", type=int, default=100)


def _policy(args):
	from novelcheck.skills.verify_integrity.schema import VerifyPolicy

	return VerifyPolicy(timeout_s=args.timeout, consult_on_pass=args.consult_on_pass)


def cmd_init(
	novel_dir: str,
	source: str,
	novel_id: str | None = None,
	title: str = "",
	author: str = "",
	word_count: str = "",
) -> None:
	from novelcheck.core.io import novel_paths
	from novelcheck.core.meta import new_meta, save_meta

	src = Path(source)
	if not src.exists():
		raise FileNotFoundError(f"source not found: {src}")

	paths = novel_paths(novel_dir)
	paths.ensure_dirs()
	shutil.copyfile(src, paths.source)

	resolved_novel_id = novel_id or paths.root.resolve().name
	m = new_meta(resolved_novel_id, title=title, author=author, declared_word_count=word_count)
	save_meta(paths.meta, m)

	print(f"[OK] NovelPack created: {paths.root} (novel_id={resolved_novel_id})")


def cmd_run(novel_dir: str, until: str, novel_id: str | None = None, args=None) -> int:
	from novelcheck.core.io import novel_paths
	from novelcheck.core.meta import load_meta
	from novelcheck.core.segmenter import SegmentConfig
	from novelcheck.pipeline.orchestrator import run_until
	from novelcheck.stages.base import StageContext

	novel_path = Path(novel_dir)
	ctx = StageContext(novel_id=novel_id or novel_path.resolve().name)
	if args is not None:
		ctx.use_llm = not args.no_llm
		ctx.policy = _policy(args)
		ctx.seg_cfg = SegmentConfig(min_chapter_length=args.min_chapter_length)

	run_until(novel_dir=novel_dir, ctx=ctx, until=until)

	paths = novel_paths(novel_dir)
	integrity = load_meta(paths.meta).integrity
	if until == "verify" and integrity:
		_print_report(integrity)
		return 0 if integrity.get("valid") else 1
	return 0


def cmd_check(in_path: str, word_count: str | None, args) -> int:
	from novelcheck.core.segmenter import SegmentConfig
	from novelcheck.pipeline.orchestrator import verify_novel_file
	from novelcheck.skills.verify_integrity import LLMOracle

	seg_cfg = SegmentConfig(min_chapter_length=args.min_chapter_length)
	policy = _policy(args)

	llm = None
	if not args.no_llm:
		from novelcheck.providers.llm.chat_client import load_chat_client

		try:
			llm = load_chat_client()
		except ValueError as e:
			print(f"[WARN] LLM unavailable, script check only: {e}")

	try:
		oracle = LLMOracle(llm) if llm is not None else None
		verdict = verify_novel_file(in_path, word_count, oracle=oracle, policy=policy, seg_cfg=seg_cfg)
	finally:
		if llm is not None:
			llm.close()

	report = verdict.to_dict()
	_print_report(report)
	print(json.dumps(report, ensure_ascii=False, indent=2))
	return 0 if verdict.valid else 1


def _print_report(report: dict) -> None:
	if not report.get("exists", True):
		print("[FAIL] file not found")
		return

	script = report.get("script_check") or {}
	for issue in script.get("issues", []):
		print(f"[WARN] {issue}")

	llm = report.get("llm_check")
	if llm:
		print(f"[INFO] llm is_complete={llm.get('is_complete')} confidence={llm.get('confidence')}")

	tag = "OK" if report.get("valid") else "FAIL"
	print(f"[{tag}] valid={report.get('valid')}")


def main(argv=None) -> int:
	args = build_parser().parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)

	if args.cmd == "init":
		cmd_init(
			args.novel_dir,
			args.source,
			novel_id=args.novel_id,
			title=args.title,
			author=args.author,
			word_count=args.word_count,
		)
		return 0

	if args.cmd == "run":
		return cmd_run(args.novel_dir, args.until, novel_id=args.novel_id, args=args)

	if args.cmd == "check":
		return cmd_check(args.in_path, args.word_count, args)

	return 2
