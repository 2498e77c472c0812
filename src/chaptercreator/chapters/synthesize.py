"""Chapter synthesis from sorted media segments.

Turns a sparse list of typed segments into a gapless chapter list. Gaps of at
least ``max_gap_ticks`` become placeholder chapters named by position:

- ``prologue`` for the gap right before the first intro,
- ``epilogue`` for any gap after an outro has been seen,
- ``main`` otherwise.

A trailing placeholder up to the runtime is only added once an outro has been
seen.
"""

from __future__ import annotations

from collections.abc import Sequence

from chaptercreator.chapters.timefmt import format_ticks
from chaptercreator.models.config import SynthesisConfig
from chaptercreator.models.segment import Chapter, Segment, SegmentType
from chaptercreator.utils.progress import log_debug


def synthesize_chapters(
    segments: Sequence[Segment],
    runtime_ticks: int,
    config: SynthesisConfig,
) -> list[Chapter]:
    """Build the chapter list for one item.

    ``segments`` must already be sorted by ``start_ticks``. ``runtime_ticks``
    is 0 when the runtime is unknown.
    """
    if not segments:
        return []

    max_gap = config.max_gap_ticks
    chapters: list[Chapter] = []
    placeholders = 0

    previous_end = 0
    has_seen_intro = False
    has_seen_outro = False
    last_index = len(segments) - 1

    for index, segment in enumerate(segments):
        is_intro = segment.type == SegmentType.INTRO

        if segment.start_ticks - previous_end >= max_gap:
            if is_intro and not has_seen_intro:
                title = config.prologue
            elif has_seen_outro:
                title = config.epilogue
            else:
                title = config.main
            chapters.append(_chapter(previous_end, segment.start_ticks, title))
            placeholders += 1

        # Flags update after the gap decision
        has_seen_intro = has_seen_intro or is_intro
        has_seen_outro = has_seen_outro or segment.type == SegmentType.OUTRO

        label = config.label_for(segment.type)
        if label:
            chapters.append(_chapter(segment.start_ticks, segment.end_ticks, label))

        if (
            index == last_index
            and has_seen_outro
            and runtime_ticks > 0
            and runtime_ticks - segment.end_ticks >= max_gap
        ):
            chapters.append(_chapter(segment.end_ticks, runtime_ticks, config.epilogue))
            placeholders += 1

        previous_end = segment.end_ticks

    log_debug(
        "Synthesize",
        f"{len(segments)} segments → {len(chapters)} chapters ({placeholders} placeholders)",
    )
    return chapters


def _chapter(start_ticks: int, end_ticks: int, title: str) -> Chapter:
    return Chapter(
        start_time=format_ticks(start_ticks),
        end_time=format_ticks(end_ticks),
        title=title,
    )


class ChapterSynthesizer:
    """Synthesizer bound to one configuration."""

    def __init__(self, config: SynthesisConfig) -> None:
        self.config = config

    def synthesize(self, segments: Sequence[Segment], runtime_ticks: int = 0) -> list[Chapter]:
        return synthesize_chapters(segments, runtime_ticks, self.config)
