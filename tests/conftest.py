from pathlib import Path

import pytest

from chaptercreator.library.catalog import FileCatalog, MediaItem
from chaptercreator.models.config import ChapterCreatorConfig, SynthesisConfig
from chaptercreator.models.segment import Segment, SegmentType

SECOND = 10_000_000


def seg(start_s: float, end_s: float, type_: SegmentType, item_id: str = "item-1") -> Segment:
    return Segment(
        item_id=item_id,
        start_ticks=int(start_s * SECOND),
        end_ticks=int(end_s * SECOND),
        type=type_,
    )


@pytest.fixture
def synthesis_config() -> SynthesisConfig:
    return SynthesisConfig(max_gap_seconds=1, intro="Opening", outro="Ending")


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    media = tmp_path / "media"
    media.mkdir()
    for name in ("ep1.mkv", "ep2.mkv", "ep3.mkv"):
        (media / name).write_bytes(b"")
    return media


@pytest.fixture
def catalog(media_dir: Path) -> FileCatalog:
    return FileCatalog([
        MediaItem(id="ep1", path=str(media_dir / "ep1.mkv"), runtime_ticks=1200 * SECOND),
        MediaItem(id="ep2", path=str(media_dir / "ep2.mkv"), runtime_ticks=1300 * SECOND),
        MediaItem(
            id="ep3",
            path=str(media_dir / "ep3.mkv"),
            runtime_ticks=1400 * SECOND,
            has_embedded_chapters=True,
        ),
        MediaItem(id="no-path", path=""),
        MediaItem(id="gone", path=str(media_dir / "deleted.mkv")),
    ])


@pytest.fixture
def config() -> ChapterCreatorConfig:
    return ChapterCreatorConfig(synthesis=SynthesisConfig(max_gap_seconds=3))
