# -*- coding: utf-8 -*-
"""
verify_integrity/prompt.py

这个文件做什么：
- 从正文 + 拆章结果 + 脚本检查结果组装 OracleRequest。
- 把 OracleRequest 拼成让 LLM 只输出判定 JSON 的 prompt。
- 这里不调用模型。
"""

from __future__ import annotations

import json
from typing import List, Optional

from novelcheck.core.schemas import ScriptCheck, SegmentationResult
from novelcheck.core.summary import structure_summary, tail_content, truncate_content

from .schema import HEAD_EXCERPT_CHARS, TAIL_EXCERPT_CHARS, OracleRequest


SYSTEM_PROMPT = (
	"你是“网络小说完整性审核员”。\n"
	"你会看到一本小说的开头摘录、结尾摘录、部分章节标题和统计摘要。\n"
	"判断这本小说文件是否完整（从第一章到完结，没有被截断或缺失大量章节）。\n"
	"你必须只输出一个 JSON 对象，不要解释，不要 Markdown，不要代码块。\n"
)


def sample_titles(seg: Optional[SegmentationResult], head: int = 5, tail: int = 5) -> List[str]:
	if seg is None:
		return []

	titles = seg.titles()
	if len(titles) <= head + tail:
		return titles
	return titles[:head] + titles[-tail:]


def build_oracle_request(
	text: str,
	seg: Optional[SegmentationResult],
	script_check: ScriptCheck,
) -> OracleRequest:
	summary = structure_summary(seg) if seg is not None else {}
	summary["script_issues"] = list(script_check.issues)
	summary["script_stats"] = dict(script_check.stats)

	body = (text or "").strip()
	return OracleRequest(
		head_excerpt=truncate_content(body, HEAD_EXCERPT_CHARS),
		tail_excerpt=tail_content(body, TAIL_EXCERPT_CHARS),
		title_samples=sample_titles(seg),
		statistical_summary=summary,
	)


def build_user_prompt(req: OracleRequest) -> str:
	rules = (
		"输出格式：\n"
		"{\n"
		'  "is_complete": true/false,\n'
		'  "confidence": 0.0~1.0,\n'
		'  "analysis": "一两句话说明理由",\n'
		'  "issues": ["发现的问题", ...]\n'
		"}\n"
		"\n"
		"判断依据：\n"
		"- 结尾是否像全书完结（大结局、完本感言、番外），而不是停在章节中间或“未完待续”\n"
		"- 章节标题是否连续，有没有明显缺号\n"
		"- 统计摘要里脚本检查提出的问题是否真的成立（可能是误判）\n"
		"- 不确定时降低 confidence，不要臆测\n"
	)

	return rules + "\n输入数据(JSON)：\n" + json.dumps(req.to_dict(), ensure_ascii=False)
