from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from emojiseq.generator.parser import Generation, StrPath
from emojiseq.trie import SequenceSet

_log = logging.getLogger(__name__)

REFERENCE_URL = "https://www.unicode.org/Public/emoji/latest/emoji-sequences.txt"


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; published tables follow the umask instead.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ArtifactRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    codepoints: List[int] = Field(min_length=1)
    label: str = ""


class TableArtifact(BaseModel):
    """On-disk form of a generated table: provenance header plus records."""

    version: str = ""
    reference: str = REFERENCE_URL
    records: List[ArtifactRecord] = Field(default_factory=list)


def to_artifact(generation: Generation) -> TableArtifact:
    return TableArtifact(
        version=generation.version,
        records=[
            ArtifactRecord(codepoints=list(r.codepoints), label=r.comment.strip())
            for r in generation.records
        ],
    )


def write_artifact(path: StrPath, generation: Generation) -> Path:
    """
    Persist ``generation`` as JSON at ``path``, replacing any previous table.

    The file is written next to its destination and renamed into place, so a
    failed run never leaves a truncated table behind.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = to_artifact(generation).model_dump_json(indent=1)

    tmp_fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.write("\n")
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, target)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)

    _log.info(
        "wrote sequence table",
        extra={"path": str(target), "records": len(generation.records), "version": generation.version},
    )
    return target


def read_artifact(path: StrPath) -> TableArtifact:
    with Path(path).open("r", encoding="utf-8") as fh:
        return TableArtifact.model_validate_json(fh.read())


def load_artifact(path: StrPath) -> Tuple[SequenceSet, str]:
    """Rebuild a frozen SequenceSet from a generated table; returns (table, version)."""
    artifact = read_artifact(path)
    table = SequenceSet()
    for record in artifact.records:
        table.add_sequence(record.codepoints, record.label)
    return table.freeze(), artifact.version
