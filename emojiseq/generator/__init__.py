"""Build-time compiler from Unicode emoji sequence files to a SequenceSet."""

from __future__ import annotations

from emojiseq.generator.artifact import (
    ArtifactRecord,
    TableArtifact,
    load_artifact,
    read_artifact,
    to_artifact,
    write_artifact,
)
from emojiseq.generator.parser import (
    VARIATION_SELECTOR_TEXT,
    Generation,
    Record,
    build_sequence_set,
    generate,
    parse_file,
    parse_line,
    parse_lines,
)

__all__ = [
    "VARIATION_SELECTOR_TEXT",
    "ArtifactRecord",
    "Generation",
    "Record",
    "TableArtifact",
    "build_sequence_set",
    "generate",
    "load_artifact",
    "parse_file",
    "parse_line",
    "parse_lines",
    "read_artifact",
    "to_artifact",
    "write_artifact",
]
