"""Prefix matching over emoji code point sequences.

``SequenceSet`` stores every known emoji sequence in a trie laid out as an
arena: node ``i`` owns ``_children[i]`` (code point -> child node id),
``_terminal[i]`` and ``_labels[i]``. Node 0 is the root.

The set is filled once (by the generator or the artifact loader), frozen, and
only read afterwards, so lookups need no locking.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from emojiseq.errors import SequenceSetFrozenError

CodepointSequence = Tuple[int, ...]
Codepoints = Union[str, Sequence[int]]

_ROOT = 0


def decode_codepoint(data: bytes, offset: int) -> Optional[Tuple[int, int]]:
    """
    Decode the UTF-8 code point starting at ``data[offset]``.

    Returns ``(codepoint, width_in_bytes)`` or None when the bytes at
    ``offset`` are not a complete, well-formed UTF-8 sequence.
    """
    lead = data[offset]
    if lead < 0x80:
        return lead, 1
    if 0xC2 <= lead <= 0xDF:
        width = 2
    elif 0xE0 <= lead <= 0xEF:
        width = 3
    elif 0xF0 <= lead <= 0xF4:
        width = 4
    else:
        return None
    chunk = bytes(data[offset : offset + width])
    if len(chunk) < width:
        return None
    try:
        ch = chunk.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return ord(ch), width


def _as_codepoints(seq: Union[str, Iterable[int]]) -> CodepointSequence:
    if isinstance(seq, str):
        return tuple(ord(ch) for ch in seq)
    return tuple(int(cp) for cp in seq)


class SequenceSet:
    """Trie of emoji code point sequences with longest-match lookup."""

    def __init__(self) -> None:
        self._children: List[Dict[int, int]] = [{}]
        self._terminal: List[bool] = [False]
        self._labels: List[Optional[str]] = [None]
        self._count = 0
        self._frozen = False

    # ------------------------------------------------------------------ build

    def add_sequence(self, seq: Union[str, Iterable[int]], label: str = "") -> None:
        """
        Insert ``seq`` and mark its last node terminal.

        Re-inserting a known sequence only replaces its label.
        """
        if self._frozen:
            raise SequenceSetFrozenError("SequenceSet is frozen; no further insertion")
        points = _as_codepoints(seq)
        if not points:
            raise ValueError("cannot add an empty code point sequence")

        node = _ROOT
        for cp in points:
            children = self._children[node]
            nxt = children.get(cp)
            if nxt is None:
                nxt = len(self._children)
                self._children.append({})
                self._terminal.append(False)
                self._labels.append(None)
                children[cp] = nxt
            node = nxt

        if not self._terminal[node]:
            self._terminal[node] = True
            self._count += 1
        self._labels[node] = label

    def freeze(self) -> "SequenceSet":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ----------------------------------------------------------------- lookup

    def has_emoji_prefix(self, data: bytes, start: int = 0) -> Tuple[bool, int]:
        """
        Longest known sequence at the head of UTF-8 ``data[start:]``.

        Returns ``(True, length_in_bytes)`` for the longest terminal reached,
        or ``(False, 0)``. A shorter terminal found on the way is only kept
        until a longer one is reached. Malformed UTF-8 ends the walk.
        """
        node = _ROOT
        matched = False
        best = 0
        pos = start
        end = len(data)
        while pos < end:
            decoded = decode_codepoint(data, pos)
            if decoded is None:
                break
            cp, width = decoded
            nxt = self._children[node].get(cp)
            if nxt is None:
                break
            node = nxt
            pos += width
            if self._terminal[node]:
                matched = True
                best = pos - start
        return matched, best

    def has_emoji_prefix_runes(self, codepoints: Codepoints, start: int = 0) -> Tuple[bool, int]:
        """Same as has_emoji_prefix, over code points; the length is a code point count."""
        is_text = isinstance(codepoints, str)
        node = _ROOT
        matched = False
        best = 0
        for pos in range(start, len(codepoints)):
            item = codepoints[pos]
            cp = ord(item) if is_text else item  # type: ignore[arg-type]
            nxt = self._children[node].get(cp)  # type: ignore[arg-type]
            if nxt is None:
                break
            node = nxt
            if self._terminal[node]:
                matched = True
                best = pos - start + 1
        return matched, best

    # ---------------------------------------------------------- introspection

    def _find(self, seq: Union[str, Iterable[int]]) -> Optional[int]:
        node = _ROOT
        for cp in _as_codepoints(seq):
            nxt = self._children[node].get(cp)
            if nxt is None:
                return None
            node = nxt
        return node

    def __contains__(self, seq: object) -> bool:
        if not isinstance(seq, (str, tuple, list)):
            return False
        node = self._find(seq)
        return node is not None and node != _ROOT and self._terminal[node]

    def __len__(self) -> int:
        return self._count

    def label_of(self, seq: Union[str, Iterable[int]]) -> Optional[str]:
        node = self._find(seq)
        if node is None or not self._terminal[node]:
            return None
        return self._labels[node]

    def sequences(self) -> Iterator[Tuple[CodepointSequence, str]]:
        """Yield ``(codepoints, label)`` for every sequence, in code point order."""
        stack: List[Tuple[int, CodepointSequence]] = [(_ROOT, ())]
        while stack:
            node, prefix = stack.pop()
            if self._terminal[node]:
                yield prefix, self._labels[node] or ""
            children = self._children[node]
            for cp in sorted(children, reverse=True):
                stack.append((children[cp], prefix + (cp,)))
