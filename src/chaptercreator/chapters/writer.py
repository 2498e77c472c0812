"""Matroska-style XML chapter file writer."""

from __future__ import annotations

import re
import secrets
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from chaptercreator.models.segment import Chapter
from chaptercreator.utils.progress import log_debug

CHAPTER_FILE_SUFFIX = "_chapters.xml"
UID_MASK = 0x7FFFFFFFFFFFFFFF

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff\ud800-\udfff]"
)


class ChapterWriteError(OSError):
    """Raised when a chapter file cannot be checked or written."""


class WriteOutcome(str, Enum):
    WRITTEN = "written"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_EXISTS = "skipped_exists"


class ExistingFile(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"


def chapter_path_for(media_path: Path | str) -> Path:
    """Return the chapter file path that sits next to a media file."""
    media_path = Path(media_path)
    return media_path.parent / f"{media_path.stem}{CHAPTER_FILE_SUFFIX}"


def xml_safe(text: str) -> str:
    """Drop characters that cannot appear in an XML document."""
    return _XML_ILLEGAL_RE.sub("", text)


def generate_uid() -> int:
    """Random positive 63-bit identifier."""
    return secrets.randbits(64) & UID_MASK


def probe_existing(path: Path | str) -> ExistingFile:
    """Check whether a chapter file is already present at ``path``.

    A missing file is not an error. A target that exists but cannot be
    inspected, or is not a regular file, raises ChapterWriteError.
    """
    path = Path(path)
    try:
        st = path.stat()
    except FileNotFoundError:
        return ExistingFile.ABSENT
    except OSError as e:
        raise ChapterWriteError(f"Cannot inspect existing chapter file {path}: {e}") from e

    if path.is_dir():
        raise ChapterWriteError(f"Chapter file path is a directory: {path}")
    log_debug("Writer", f"Existing chapter file {path} ({st.st_size} bytes)")
    return ExistingFile.PRESENT


def build_chapter_document(chapters: Sequence[Chapter]) -> ET.ElementTree:
    """Build the Chapters > EditionEntry > ChapterAtom* tree."""
    root = ET.Element("Chapters")
    edition = ET.SubElement(root, "EditionEntry")
    ET.SubElement(edition, "EditionUID").text = str(generate_uid())
    ET.SubElement(edition, "EditionFlagDefault").text = "1"
    ET.SubElement(edition, "EditionFlagHidden").text = "0"

    for chapter in chapters:
        atom = ET.SubElement(edition, "ChapterAtom")
        ET.SubElement(atom, "ChapterUID").text = str(generate_uid())
        ET.SubElement(atom, "ChapterFlagHidden").text = "0"
        ET.SubElement(atom, "ChapterFlagEnabled").text = "1"
        ET.SubElement(atom, "ChapterTimeStart").text = chapter.start_time
        ET.SubElement(atom, "ChapterTimeEnd").text = chapter.end_time

        display = ET.SubElement(atom, "ChapterDisplay")
        ET.SubElement(display, "ChapterString").text = xml_safe(chapter.title)
        ET.SubElement(display, "ChapterLanguage").text = "und"

    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    return tree


def write_chapter_file(
    path: Path | str,
    chapters: Sequence[Chapter],
    *,
    overwrite: bool,
) -> WriteOutcome:
    """Write ``chapters`` to ``path`` honouring the overwrite policy.

    The document is written in place. An I/O failure part way through can
    leave a truncated file behind until the next successful run.
    """
    path = Path(path)

    if not chapters:
        log_debug("Writer", f"No chapters for {path}")
        return WriteOutcome.SKIPPED_EMPTY

    if probe_existing(path) is ExistingFile.PRESENT:
        if not overwrite:
            log_debug("Writer", f"Keeping existing {path} (overwrite disabled)")
            return WriteOutcome.SKIPPED_EXISTS
        log_debug("Writer", f"Overwriting {path}")

    tree = build_chapter_document(chapters)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tree.write(path, encoding="utf-8", xml_declaration=True)
    except OSError as e:
        raise ChapterWriteError(f"Failed to write chapter file {path}: {e}") from e

    log_debug("Writer", f"Wrote {len(chapters)} chapters to {path}")
    return WriteOutcome.WRITTEN


def read_chapter_file(path: Path | str) -> list[Chapter]:
    """Read chapters back from a document produced by write_chapter_file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Chapter file not found: {path}")

    root = ET.parse(path).getroot()
    chapters = []
    for atom in root.iter("ChapterAtom"):
        chapters.append(Chapter(
            start_time=atom.findtext("ChapterTimeStart", default=""),
            end_time=atom.findtext("ChapterTimeEnd", default=""),
            title=atom.findtext("ChapterDisplay/ChapterString", default=""),
        ))
    return chapters
