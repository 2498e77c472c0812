import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from chaptercreator.chapters.writer import (
    UID_MASK,
    ChapterWriteError,
    ExistingFile,
    WriteOutcome,
    chapter_path_for,
    generate_uid,
    probe_existing,
    read_chapter_file,
    write_chapter_file,
    xml_safe,
)
from chaptercreator.models.segment import Chapter

CHAPTERS = [
    Chapter(start_time="00:00:00.00", end_time="00:00:05.00", title="Opening"),
    Chapter(start_time="00:00:05.00", end_time="00:00:15.00", title="Main"),
    Chapter(start_time="00:00:15.00", end_time="00:00:18.00", title="Ending & Credits"),
]


def test_chapter_path_sits_next_to_media():
    assert chapter_path_for("/library/Show/S01/ep.1.mkv") == Path("/library/Show/S01/ep.1_chapters.xml")


def test_empty_chapters_skip_without_touching_disk(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    assert write_chapter_file(target, [], overwrite=True) is WriteOutcome.SKIPPED_EMPTY
    assert not target.exists()


def test_existing_file_kept_when_overwrite_disabled(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    target.write_bytes(b"<custom>hand edited</custom>")

    outcome = write_chapter_file(target, CHAPTERS, overwrite=False)

    assert outcome is WriteOutcome.SKIPPED_EXISTS
    assert target.read_bytes() == b"<custom>hand edited</custom>"


def test_existing_file_regenerated_when_overwrite_enabled(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    target.write_text("stale")

    assert write_chapter_file(target, CHAPTERS, overwrite=True) is WriteOutcome.WRITTEN
    assert read_chapter_file(target) == CHAPTERS


def test_creates_missing_parent_directories(tmp_path):
    target = tmp_path / "a" / "b" / "ep_chapters.xml"
    assert write_chapter_file(target, CHAPTERS, overwrite=False) is WriteOutcome.WRITTEN
    assert target.exists()


def test_document_structure(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    write_chapter_file(target, CHAPTERS, overwrite=True)

    text = target.read_text(encoding="utf-8")
    assert text.startswith("<?xml version=")
    assert "\n  <EditionEntry>" in text

    root = ET.parse(target).getroot()
    assert root.tag == "Chapters"
    editions = root.findall("EditionEntry")
    assert len(editions) == 1
    edition = editions[0]
    assert [child.tag for child in edition][:3] == [
        "EditionUID",
        "EditionFlagDefault",
        "EditionFlagHidden",
    ]
    assert edition.findtext("EditionFlagDefault") == "1"
    assert edition.findtext("EditionFlagHidden") == "0"

    atoms = edition.findall("ChapterAtom")
    assert len(atoms) == 3
    first = atoms[0]
    assert [child.tag for child in first] == [
        "ChapterUID",
        "ChapterFlagHidden",
        "ChapterFlagEnabled",
        "ChapterTimeStart",
        "ChapterTimeEnd",
        "ChapterDisplay",
    ]
    assert first.findtext("ChapterFlagHidden") == "0"
    assert first.findtext("ChapterFlagEnabled") == "1"
    assert first.findtext("ChapterDisplay/ChapterString") == "Opening"
    assert first.findtext("ChapterDisplay/ChapterLanguage") == "und"
    assert atoms[2].findtext("ChapterDisplay/ChapterString") == "Ending & Credits"

    uids = [edition.findtext("EditionUID")] + [a.findtext("ChapterUID") for a in atoms]
    assert len(set(uids)) == len(uids)
    assert all(0 <= int(uid) <= UID_MASK for uid in uids)


def test_generate_uid_is_non_negative_63_bit():
    for _ in range(200):
        uid = generate_uid()
        assert 0 <= uid <= UID_MASK


def test_probe_distinguishes_absent_and_present(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    assert probe_existing(target) is ExistingFile.ABSENT
    target.write_text("x")
    assert probe_existing(target) is ExistingFile.PRESENT


def test_directory_at_target_is_an_error(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    target.mkdir()
    with pytest.raises(ChapterWriteError):
        write_chapter_file(target, CHAPTERS, overwrite=True)


def test_write_failure_is_wrapped(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    with pytest.raises(ChapterWriteError):
        write_chapter_file(blocker / "ep_chapters.xml", CHAPTERS, overwrite=True)


def test_control_characters_are_dropped_from_titles(tmp_path):
    target = tmp_path / "ep_chapters.xml"
    chapters = [Chapter(start_time="00:00:00.00", end_time="00:00:05.00", title="bad\x01title\x0b")]

    assert write_chapter_file(target, chapters, overwrite=True) is WriteOutcome.WRITTEN
    assert read_chapter_file(target)[0].title == "badtitle"


def test_xml_safe_keeps_tabs_newlines_and_unicode():
    assert xml_safe("Épisode\t1\nPart 2 🎬") == "Épisode\t1\nPart 2 🎬"
