"""Per-item chapter file creation."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from chaptercreator.chapters.synthesize import ChapterSynthesizer
from chaptercreator.chapters.writer import (
    ChapterWriteError,
    WriteOutcome,
    chapter_path_for,
    write_chapter_file,
)
from chaptercreator.library.catalog import MediaCatalog
from chaptercreator.models.config import ChapterCreatorConfig
from chaptercreator.models.segment import Chapter, Segment
from chaptercreator.utils.progress import log_debug, log_error, log_warning


class ItemOutcome(str, Enum):
    """Result of processing one media item."""

    WRITTEN = "written"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_EXISTS = "skipped_exists"
    SKIPPED_EMBEDDED = "skipped_embedded"
    MISSING_PATH = "missing_path"
    MEDIA_FILE_ABSENT = "media_file_absent"
    FAILED = "failed"
    CANCELLED = "cancelled"


_WRITE_OUTCOMES = {
    WriteOutcome.WRITTEN: ItemOutcome.WRITTEN,
    WriteOutcome.SKIPPED_EMPTY: ItemOutcome.SKIPPED_EMPTY,
    WriteOutcome.SKIPPED_EXISTS: ItemOutcome.SKIPPED_EXISTS,
}


class ChapterManager:
    """Synthesizes and writes the chapter file for single media items."""

    def __init__(self, catalog: MediaCatalog, config: ChapterCreatorConfig) -> None:
        self.catalog = catalog
        self.config = config
        self.synthesizer = ChapterSynthesizer(config.synthesis)

    def log_configuration(self) -> None:
        log_debug("Config", f"Overwrite chapter files: {self.config.overwrite_files}")
        log_debug("Config", f"Max parallelism: {self.config.max_parallelism}")
        log_debug("Config", f"Max gap: {self.config.synthesis.max_gap_seconds}s")
        log_debug("Config", f"Skip embedded chapters: {self.config.skip_embedded_chapters}")

    def to_chapters(self, item_id: str, segments: Sequence[Segment]) -> list[Chapter]:
        """Synthesize chapters for an item using its catalog runtime."""
        if not segments:
            return []
        item = self.catalog.get_item(item_id)
        runtime = item.runtime_ticks if item else 0
        return self.synthesizer.synthesize(segments, runtime)

    def update_chapter_file(
        self,
        item_id: str,
        segments: Sequence[Segment],
        *,
        force_overwrite: bool = False,
        overwrite: bool | None = None,
    ) -> ItemOutcome:
        """Create or refresh the chapter file for one item.

        ``segments`` must be sorted by start time. ``overwrite`` defaults to
        the configured policy or ``force_overwrite``. Write failures are
        logged and re-raised.
        """
        item = self.catalog.get_item(item_id)
        if overwrite is None:
            overwrite = self.config.overwrite_files or force_overwrite

        if (
            item is not None
            and item.has_embedded_chapters
            and self.config.skip_embedded_chapters
            and not force_overwrite
        ):
            log_debug("Chapters", f"Skipping {item_id}: media already has embedded chapters")
            return ItemOutcome.SKIPPED_EMBEDDED

        log_debug("Chapters", f"Processing chapters for {item_id}")
        runtime = item.runtime_ticks if item else 0
        chapters = self.synthesizer.synthesize(segments, runtime)
        if not chapters:
            log_debug("Chapters", f"Skipping {item_id}: no chapter data generated")
            return ItemOutcome.SKIPPED_EMPTY

        if item is None or not item.path:
            log_warning(f"Skip {item_id}: unable to get item path")
            return ItemOutcome.MISSING_PATH

        media_path = Path(item.path)
        if not media_path.is_file():
            log_warning(f"Skip {item_id}: media file not found at {media_path}")
            return ItemOutcome.MEDIA_FILE_ABSENT

        chapter_path = chapter_path_for(media_path)
        try:
            outcome = write_chapter_file(chapter_path, chapters, overwrite=overwrite)
        except ChapterWriteError as e:
            log_error(f"Failed to create chapter file for {item_id}: {e}")
            raise

        log_debug("Chapters", f"{item_id} → {chapter_path.name}: {outcome.value}")
        return _WRITE_OUTCOMES[outcome]
