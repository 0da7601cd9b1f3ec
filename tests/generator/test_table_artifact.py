from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from emojiseq.generator import (
    TableArtifact,
    load_artifact,
    parse_lines,
    read_artifact,
    to_artifact,
    write_artifact,
)

LINES = [
    "# Date: 2023-06-05, 21:39:54 GMT",
    "1F600..1F601 ; Basic_Emoji ; grinning",
    "1F1FA 1F1F8  ; RGI_Emoji_Flag_Sequence ; flag: United States",
    "1F468 200D 1F469 200D 1F467 ; RGI_Emoji_ZWJ_Sequence ; family",
]


def test_artifact_carries_version_and_order() -> None:
    gen = parse_lines(LINES)
    artifact = to_artifact(gen)
    assert artifact.version == "2023-06-05, 21:39:54 GMT"
    assert artifact.reference.startswith("https://www.unicode.org/")
    assert [r.codepoints for r in artifact.records] == [list(r.codepoints) for r in gen.records]
    assert artifact.records[-1].label == "RGI_Emoji_ZWJ_Sequence ==> \U0001F468\u200d\U0001F469\u200d\U0001F467"


def test_write_then_load(tmp_path: Path) -> None:
    gen = parse_lines(LINES)
    path = write_artifact(tmp_path / "out" / "sequences.json", gen)
    assert path.is_file()
    assert [p.name for p in path.parent.iterdir()] == ["sequences.json"]

    table, version = load_artifact(path)
    assert version == gen.version
    assert table.frozen
    assert len(table) == 6
    assert (0x1F600, 0xFE0E) in table
    assert table.has_emoji_prefix_runes("\U0001F1FA\U0001F1F8x") == (True, 2)


def test_write_replaces_previous_table(tmp_path: Path) -> None:
    target = tmp_path / "sequences.json"
    write_artifact(target, parse_lines(LINES))
    write_artifact(target, parse_lines(["1F680 ; Basic_Emoji"]))
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["version"] == ""
    assert [r["codepoints"] for r in payload["records"]] == [[0x1F680], [0x1F680, 0xFE0E]]


def test_empty_codepoints_rejected(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(
        json.dumps({"version": "x", "records": [{"codepoints": [], "label": ""}]}),
        encoding="utf-8",
    )
    with pytest.raises(ValidationError):
        read_artifact(bad)


def test_defaults() -> None:
    artifact = TableArtifact()
    assert artifact.records == []
    assert artifact.version == ""


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_written_table_is_readable_by_other_users(tmp_path: Path) -> None:
    previous = os.umask(0o022)
    try:
        path = write_artifact(tmp_path / "sequences.json", parse_lines(LINES))
    finally:
        os.umask(previous)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644
