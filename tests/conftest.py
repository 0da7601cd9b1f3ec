# tests/conftest.py
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from emojiseq.telemetry.logging import reset_logging_configuration  # noqa: E402
from emojiseq.trie import SequenceSet  # noqa: E402

_ROCKET = 0x1F680
_VS_TEXT = 0xFE0E
_RI_U = 0x1F1FA
_RI_S = 0x1F1F8
_MAN = 0x1F468
_WOMAN = 0x1F469
_GIRL = 0x1F467
_ZWJ = 0x200D


@pytest.fixture()
def small_table() -> SequenceSet:
    """A hand-built table with nested prefixes; independent of Unicode data."""
    table = SequenceSet()
    table.add_sequence([_ROCKET], "rocket")
    table.add_sequence([_ROCKET, _VS_TEXT], "rocket text")
    table.add_sequence([_RI_U, _RI_S], "flag: US")
    table.add_sequence([_MAN], "man")
    table.add_sequence([_WOMAN], "woman")
    table.add_sequence([_MAN, _ZWJ, _WOMAN, _ZWJ, _GIRL], "family")
    return table.freeze()


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    reset_logging_configuration()
    try:
        yield
    finally:
        # drop handlers installed by configure_root_logging(); pytest manages its own
        for h in list(root.handlers):
            if h not in before and not type(h).__module__.startswith("_pytest"):
                root.removeHandler(h)
        root.setLevel(level)
        reset_logging_configuration()
