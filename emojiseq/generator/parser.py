"""Parse Unicode emoji sequence files into expanded sequence records.

Accepted line shapes (``emoji-sequences.txt`` / ``emoji-zwj-sequences.txt``)::

    # Date: 2023-06-05, 21:39:54 GMT
    231A..231B    ; Basic_Emoji            ; watch..hourglass done   # E0.6 [2]
    0023 FE0F 20E3; Emoji_Keycap_Sequence  ; keycap: #               # E0.6 [1]

Ranges expand to one record per code point, and every single code point also
gets a ``<cp> FE0E`` (text presentation) record, since the files never list
those forms.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable, List, Optional, Union

from emojiseq.errors import MalformedRecordError
from emojiseq.observability.metrics import generator_report
from emojiseq.telemetry.logging import bind
from emojiseq.trie import CodepointSequence, SequenceSet

_log = logging.getLogger(__name__)

VARIATION_SELECTOR_TEXT = 0xFE0E

_DATE_PREFIX = "# Date: "
_RANGE_SEP = ".."
_HEX = re.compile(r"[0-9A-Fa-f]{1,6}")
_MAX_CODEPOINT = 0x10FFFF

StrPath = Union[str, "PathLike[str]"]


@dataclass(frozen=True)
class Record:
    codepoints: CodepointSequence
    comment: str


@dataclass
class Generation:
    """Accumulator for one generator run; always starts empty."""

    records: List[Record] = field(default_factory=list)
    version: str = ""
    skipped: int = 0

    def add(self, codepoints: CodepointSequence, comment: str) -> None:
        if codepoints:
            self.records.append(Record(tuple(codepoints), comment))


def _render(codepoints: CodepointSequence) -> str:
    # Lone surrogates cannot be serialized; show them as U+XXXX.
    return "".join(
        f"U+{cp:04X}" if 0xD800 <= cp <= 0xDFFF else chr(cp) for cp in codepoints
    )


def _parse_hex(token: str, *, source: str, lineno: Optional[int], line: str) -> int:
    if not _HEX.fullmatch(token):
        raise MalformedRecordError(
            f"invalid hexadecimal code point {token!r}", source=source, lineno=lineno, line=line
        )
    value = int(token, 16)
    if value > _MAX_CODEPOINT:
        raise MalformedRecordError(
            f"code point {token!r} is beyond U+10FFFF", source=source, lineno=lineno, line=line
        )
    return value


def parse_line(
    line: str,
    generation: Generation,
    *,
    source: str = "",
    lineno: Optional[int] = None,
) -> int:
    """
    Apply one source line to ``generation`` and return how many records it added.

    Raises MalformedRecordError when the code point field is not hexadecimal.
    """
    line = line.strip()
    if not line:
        return 0

    if line.startswith("#"):
        if line.startswith(_DATE_PREFIX):
            generation.version = line[len(_DATE_PREFIX) :].strip()
        return 0

    fields = line.split(";")
    if len(fields) < 2:
        generation.skipped += 1
        _log.info(
            "skip line without type field",
            extra={"source": source, "line_no": lineno, "line": line},
        )
        return 0

    cp_field = fields[0].strip()
    kind = fields[1].strip()
    before = len(generation.records)

    if _RANGE_SEP in cp_field:
        low_s, _, high_s = cp_field.partition(_RANGE_SEP)
        low = _parse_hex(low_s.strip(), source=source, lineno=lineno, line=line)
        high = _parse_hex(high_s.strip(), source=source, lineno=lineno, line=line)
        for cp in range(low, high + 1):
            comment = f"{kind} ==> {_render((cp,))}"
            generation.add((cp,), comment)
            generation.add((cp, VARIATION_SELECTOR_TEXT), comment)
    else:
        codepoints = tuple(
            _parse_hex(token, source=source, lineno=lineno, line=line)
            for token in cp_field.split(" ")
        )
        comment = f"{kind} ==> {_render(codepoints)}"
        generation.add(codepoints, comment)
        if len(codepoints) == 1:
            generation.add((codepoints[0], VARIATION_SELECTOR_TEXT), comment)

    added = len(generation.records) - before
    if _log.isEnabledFor(logging.DEBUG):
        for record in generation.records[before:]:
            _log.debug(
                "add record",
                extra={"codepoints": record.codepoints, "comment": record.comment},
            )
    return added


def parse_lines(
    lines: Iterable[str],
    generation: Optional[Generation] = None,
    *,
    source: str = "",
) -> Generation:
    """Parse every line of one source into ``generation`` (a new one if omitted)."""
    gen = generation if generation is not None else Generation()
    log = bind(_log, source=source or "<input>")
    records_before = len(gen.records)
    skipped_before = gen.skipped

    for lineno, line in enumerate(lines, start=1):
        parse_line(line, gen, source=source, lineno=lineno)

    added = len(gen.records) - records_before
    skipped = gen.skipped - skipped_before
    generator_report(source=source, records=added, skipped=skipped)
    log.info("parsed source", extra={"records": added, "skipped": skipped})
    return gen


def parse_file(path: StrPath, generation: Optional[Generation] = None) -> Generation:
    """Parse a Unicode emoji sequence file. I/O errors propagate."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as fh:
        return parse_lines(fh, generation, source=p.name)


def generate(paths: Iterable[StrPath]) -> Generation:
    """
    Run a full generation over ``paths`` in order.

    Pass the basic sequences file before the ZWJ file; record order follows
    file order, then line order, then ascending code point within a range.
    """
    generation = Generation()
    for path in paths:
        parse_file(path, generation)
    return generation


def build_sequence_set(records: Iterable[Record]) -> SequenceSet:
    """Insert every record into a fresh SequenceSet and freeze it."""
    table = SequenceSet()
    for record in records:
        table.add_sequence(record.codepoints, record.comment)
    return table.freeze()
