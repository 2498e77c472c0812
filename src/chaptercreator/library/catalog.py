"""Media catalog and segment inputs.

The catalog maps an item id to its media file, runtime and embedded-chapter
flag. Segments come from the segment provider as a flat dump.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, field_validator

from chaptercreator.models.segment import Segment
from chaptercreator.utils.io import read_data_file
from chaptercreator.utils.progress import log_step


class MediaItem(BaseModel):
    """A library item as seen by Chapter Creator."""

    id: str
    path: str = ""
    runtime_ticks: int = Field(default=0, ge=0)
    has_embedded_chapters: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        return value if isinstance(value, str) else str(value)


class MediaCatalog(Protocol):
    """Lookup interface for the host library."""

    def get_item(self, item_id: str) -> MediaItem | None: ...


class FileCatalog:
    """Catalog backed by an in-memory mapping, usually loaded from a file."""

    def __init__(self, items: list[MediaItem] | None = None) -> None:
        self._items = {item.id: item for item in items or []}

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: str) -> MediaItem | None:
        return self._items.get(item_id)

    @classmethod
    def load(cls, path: Path | str) -> FileCatalog:
        """Load a catalog from YAML or JSON.

        Accepts either ``{"items": [...]}`` or a bare list of items.
        """
        data = read_data_file(path)
        raw_items = data.get("items", []) if isinstance(data, dict) else data
        if not isinstance(raw_items, list):
            raise ValueError(f"Catalog {path} must contain a list of items")

        catalog = cls([MediaItem(**raw) for raw in raw_items])
        log_step("Catalog", f"Loaded {len(catalog)} item(s) from {Path(path).name}")
        return catalog


def load_segments(path: Path | str) -> list[Segment]:
    """Load a flat segment dump (YAML or JSON) in file order."""
    data = read_data_file(path)
    raw_segments = data.get("segments", []) if isinstance(data, dict) else data
    if not isinstance(raw_segments, list):
        raise ValueError(f"Segment file {path} must contain a list of segments")

    segments = [Segment(**raw) for raw in raw_segments]
    log_step("Segments", f"Loaded {len(segments)} segment(s) from {Path(path).name}")
    return segments
