"""Configuration models for chapter synthesis and batch runs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from chaptercreator.models.segment import SegmentType
from chaptercreator.utils.io import read_yaml, write_yaml

TICKS_PER_SECOND = 10_000_000


class SynthesisConfig(BaseModel):
    """Gap threshold and chapter labels used during synthesis.

    An empty label suppresses chapters of that segment type.
    """

    max_gap_seconds: int = Field(default=3, ge=0)
    intro: str = "Opening"
    outro: str = "Ending"
    recap: str = "Recap"
    preview: str = "Preview"
    commercial: str = "Commercial"
    unknown: str = "Unknown"
    prologue: str = "Prologue"
    epilogue: str = "Epilogue"
    main: str = "Main"

    @property
    def max_gap_ticks(self) -> int:
        return self.max_gap_seconds * TICKS_PER_SECOND

    def label_for(self, segment_type: SegmentType) -> str:
        labels = {
            SegmentType.INTRO: self.intro,
            SegmentType.OUTRO: self.outro,
            SegmentType.RECAP: self.recap,
            SegmentType.PREVIEW: self.preview,
            SegmentType.COMMERCIAL: self.commercial,
        }
        return labels.get(segment_type, self.unknown)


class BatchPolicy(BaseModel):
    """Overwrite and parallelism settings for a batch run."""

    overwrite_existing: bool = True
    max_parallelism: int = Field(default=2, ge=1)


class ChapterCreatorConfig(BaseModel):
    """All Chapter Creator settings."""

    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    batch: BatchPolicy = Field(default_factory=BatchPolicy)
    skip_embedded_chapters: bool = False

    @property
    def overwrite_files(self) -> bool:
        return self.batch.overwrite_existing

    @property
    def max_parallelism(self) -> int:
        return self.batch.max_parallelism


def load_config(path: Path | str | None = None) -> ChapterCreatorConfig:
    """Load configuration from a YAML file, or defaults when no path is given."""
    if path is None:
        return ChapterCreatorConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    return ChapterCreatorConfig(**(read_yaml(path) or {}))


def save_config(path: Path | str, config: ChapterCreatorConfig) -> None:
    """Write configuration to a YAML file atomically."""
    write_yaml(path, config.model_dump(mode="json"))
