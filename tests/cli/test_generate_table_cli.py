from __future__ import annotations

from pathlib import Path

import pytest

from cli.generate_table import main
from emojiseq.generator import read_artifact

pytestmark = pytest.mark.usefixtures("restore_root_logging")


def _sources(tmp_path: Path) -> tuple[Path, Path]:
    basic = tmp_path / "emoji-sequences.txt"
    basic.write_text(
        "# Date: 2023-06-05, 21:39:54 GMT\n"
        "231A..231B    ; Basic_Emoji ; watch..hourglass done\n"
        "annotation without fields\n",
        encoding="utf-8",
    )
    zwj = tmp_path / "emoji-zwj-sequences.txt"
    zwj.write_text("1F468 200D 1F469 ; RGI_Emoji_ZWJ_Sequence ; pair\n", encoding="utf-8")
    return basic, zwj


def test_generates_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    basic, zwj = _sources(tmp_path)
    out = tmp_path / "table.json"
    rc = main(["--sequences", str(basic), "--zwj", str(zwj), "--output", str(out), "--plain-logs"])
    assert rc == 0
    artifact = read_artifact(out)
    assert artifact.version == "2023-06-05, 21:39:54 GMT"
    assert len(artifact.records) == 5
    assert f"Wrote {out}: 5 records, 5 sequences" in capsys.readouterr().out


def test_output_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    basic, zwj = _sources(tmp_path)
    out = tmp_path / "env" / "table.json"
    monkeypatch.setenv("EMOJISEQ_SEQUENCES_PATH", str(basic))
    monkeypatch.setenv("EMOJISEQ_ZWJ_SEQUENCES_PATH", str(zwj))
    monkeypatch.setenv("EMOJISEQ_OUTPUT_PATH", str(out))
    monkeypatch.setenv("EMOJISEQ_LOG_LEVEL", "warning")
    assert main([]) == 0
    assert out.is_file()


def test_malformed_source_fails_without_output(tmp_path: Path) -> None:
    basic, zwj = _sources(tmp_path)
    zwj.write_text("1F468 200D XYZ ; RGI_Emoji_ZWJ_Sequence\n", encoding="utf-8")
    out = tmp_path / "table.json"
    rc = main(["--sequences", str(basic), "--zwj", str(zwj), "--output", str(out)])
    assert rc == 1
    assert not out.exists()


def test_missing_source_fails(tmp_path: Path) -> None:
    out = tmp_path / "table.json"
    rc = main(["--sequences", str(tmp_path / "missing.txt"), "--output", str(out)])
    assert rc == 1
    assert not out.exists()
