from __future__ import annotations

from typing import AnyStr, Callable, List, Optional

from emojiseq.official import all_sequences
from emojiseq.trie import SequenceSet, decode_codepoint

__all__ = [
    "ReplaceFunc",
    "has_emoji",
    "filter_emoji",
    "replace_emoji",
]

# (offset, matched emoji) -> replacement. Offsets are str indexes for str
# input and byte offsets for bytes input.
ReplaceFunc = Callable[[int, AnyStr], AnyStr]


def _resolve(table: Optional[SequenceSet]) -> SequenceSet:
    return table if table is not None else all_sequences()


def _width_at(data: bytes, pos: int) -> int:
    # Malformed bytes advance one at a time.
    decoded = decode_codepoint(data, pos)
    return decoded[1] if decoded is not None else 1


def has_emoji(text: AnyStr, table: Optional[SequenceSet] = None) -> bool:
    """Return True as soon as any position of ``text`` starts an emoji sequence."""
    seqs = _resolve(table)
    if isinstance(text, str):
        for pos in range(len(text)):
            if seqs.has_emoji_prefix_runes(text, pos)[0]:
                return True
        return False

    data = bytes(text)
    pos = 0
    while pos < len(data):
        if seqs.has_emoji_prefix(data, pos)[0]:
            return True
        pos += _width_at(data, pos)
    return False


def _replace_text(text: str, func: Optional[ReplaceFunc], seqs: SequenceSet) -> str:
    out: List[str] = []
    pos = 0
    n = len(text)
    while pos < n:
        matched, length = seqs.has_emoji_prefix_runes(text, pos)
        if not matched:
            out.append(text[pos])
            pos += 1
            continue
        if func is not None:
            out.append(func(pos, text[pos : pos + length]))
        # Bytes inside a match are never re-examined.
        pos += length
    return "".join(out)


def _replace_bytes(data: bytes, func: Optional[ReplaceFunc], seqs: SequenceSet) -> bytes:
    out = bytearray()
    pos = 0
    n = len(data)
    while pos < n:
        matched, length = seqs.has_emoji_prefix(data, pos)
        if not matched:
            width = _width_at(data, pos)
            out += data[pos : pos + width]
            pos += width
            continue
        if func is not None:
            out += func(pos, data[pos : pos + length])
        pos += length
    return bytes(out)


def replace_emoji(
    text: AnyStr,
    func: Optional[ReplaceFunc],
    table: Optional[SequenceSet] = None,
) -> AnyStr:
    """
    Replace every emoji sequence in ``text`` with ``func(offset, emoji)``.

    Matching is greedy: the longest sequence at a position wins and scanning
    resumes right after it. Text outside matches is copied unchanged. A None
    ``func`` deletes the matches.
    """
    seqs = _resolve(table)
    if isinstance(text, str):
        return _replace_text(text, func, seqs)
    return _replace_bytes(bytes(text), func, seqs)  # type: ignore[return-value]


def filter_emoji(text: AnyStr, table: Optional[SequenceSet] = None) -> AnyStr:
    """Remove every emoji sequence from ``text``."""
    return replace_emoji(text, None, table)
