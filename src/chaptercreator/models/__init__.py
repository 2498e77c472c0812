"""Pydantic data models for Chapter Creator."""

from chaptercreator.models.segment import Chapter, Segment, SegmentType
from chaptercreator.models.config import (
    BatchPolicy,
    ChapterCreatorConfig,
    SynthesisConfig,
)

__all__ = [
    "Chapter",
    "Segment",
    "SegmentType",
    "BatchPolicy",
    "ChapterCreatorConfig",
    "SynthesisConfig",
]
