"""Process-wide table of the official Unicode emoji sequences.

The table is built on first use, exactly once per process, and is read-only
afterwards. A generated ``sequences.json`` next to this module is preferred;
without it the bundled Unicode source files in ``data/`` are compiled in
process.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from emojiseq.generator import build_sequence_set, generate, load_artifact
from emojiseq.observability.metrics import table_loaded
from emojiseq.settings import (
    DEFAULT_ARTIFACT_PATH,
    DEFAULT_SEQUENCES_PATH,
    DEFAULT_ZWJ_SEQUENCES_PATH,
)
from emojiseq.trie import SequenceSet

__all__ = ["all_sequences", "data_version"]

_log = logging.getLogger(__name__)

_lock = threading.Lock()
_table: Optional[SequenceSet] = None
_version = ""


def _build() -> Tuple[SequenceSet, str]:
    if DEFAULT_ARTIFACT_PATH.is_file():
        table, version = load_artifact(DEFAULT_ARTIFACT_PATH)
        origin = "artifact"
    else:
        generation = generate([DEFAULT_SEQUENCES_PATH, DEFAULT_ZWJ_SEQUENCES_PATH])
        table = build_sequence_set(generation.records)
        version = generation.version
        origin = "sources"

    table_loaded(origin=origin, sequences=len(table))
    _log.info(
        "loaded emoji sequence table",
        extra={"origin": origin, "sequences": len(table), "version": version},
    )
    return table, version


def all_sequences() -> SequenceSet:
    global _table, _version
    table = _table
    if table is not None:
        return table
    with _lock:
        if _table is None:
            _table, _version = _build()
        return _table


def data_version() -> str:
    """The ``# Date:`` provenance of the loaded table."""
    all_sequences()
    return _version
