# -*- coding: utf-8 -*-
from .chapter import ChapterRecord, ChapterStats, SegmentationResult
from .verdict import IntegrityVerdict, LLMCheck, ScriptCheck

__all__ = [
	"ChapterRecord",
	"ChapterStats",
	"SegmentationResult",
	"IntegrityVerdict",
	"LLMCheck",
	"ScriptCheck",
]
