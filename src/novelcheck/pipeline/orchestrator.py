# -*- coding: utf-8 -*-
"""
novelcheck/pipeline/orchestrator.py

目的：
- 作为“阶段调度器”：按固定顺序执行 ingest -> segment -> verify。
- 支持 `run_until(..., until="segment")`：跑到指定阶段停止。
- 失败时把阶段名与错误写进 meta.json（status.failed / last_error）再抛出。
- verify_novel_file()：不建 NovelPack，直接校验单个 txt（下载后快速判定用）。

注意：
- orchestrator 不关心任何具体业务（如何拆章、如何调用模型）。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from novelcheck.checks.statistical import CheckConfig, check_by_script
from novelcheck.core.encoding import load_document
from novelcheck.core.io import novel_paths
from novelcheck.core.meta import load_meta, save_meta
from novelcheck.core.schemas import IntegrityVerdict
from novelcheck.core.segmenter import SegmentConfig, segment_chapters
from novelcheck.skills.verify_integrity import IntegrityVerifySkill
from novelcheck.skills.verify_integrity.schema import Oracle, VerifyPolicy
from novelcheck.stages.base import StageContext
from novelcheck.stages.ingest import IngestStage
from novelcheck.stages.segment import SegmentStage
from novelcheck.stages.verify import VerifyStage


STAGE_ORDER = [
	"ingest",
	"segment",
	"verify",
]


def run_until(novel_dir: str, ctx: StageContext, until: str = "verify") -> None:
	if until not in STAGE_ORDER:
		raise ValueError(f"unknown stage: {until}")

	paths = novel_paths(novel_dir)
	paths.ensure_dirs()

	stages = {
		"ingest": IngestStage(),
		"segment": SegmentStage(),
		"verify": VerifyStage(),
	}

	for name in STAGE_ORDER:
		print(f"[RUN] stage={name}")
		try:
			stages[name].run(paths, ctx)
		except Exception as e:
			if paths.meta.exists():
				m = load_meta(paths.meta)
				m.mark_failed(name, f"{type(e).__name__}: {e}")
				save_meta(paths.meta, m)
			raise

		if name == until:
			break

	if paths.meta.exists():
		m = load_meta(paths.meta)
		print(f"[OK] current stage = {m.stage}")


def verify_novel_file(
	path: str | Path,
	declared_word_count: Optional[str] = None,
	oracle: Optional[Oracle] = None,
	policy: Optional[VerifyPolicy] = None,
	seg_cfg: Optional[SegmentConfig] = None,
	check_cfg: Optional[CheckConfig] = None,
) -> IntegrityVerdict:
	"""
	单文件校验：文件不存在 -> exists=False；解码失败 -> DecodeError 抛出。
	"""
	skill = IntegrityVerifySkill(oracle, policy)

	p = Path(path)
	if not p.exists():
		return skill.run(None, None)

	doc = load_document(p)
	seg = segment_chapters(doc.text, seg_cfg)
	script = check_by_script(doc.text, seg, declared_word_count, check_cfg)
	return skill.run(doc, script, seg)
