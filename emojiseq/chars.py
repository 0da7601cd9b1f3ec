from __future__ import annotations

from typing import NamedTuple, Optional

from emojiseq.official import all_sequences
from emojiseq.trie import SequenceSet

__all__ = ["Char", "CharIterator", "iterate_chars"]


class Char(NamedTuple):
    text: str
    is_emoji: bool


class CharIterator:
    """
    Cursor over ``text`` that yields one character per step, where a
    character is a whole emoji sequence or a single other code point.

        it = iterate_chars("hi 👨‍👩‍👧")
        while it.next():
            print(it.current(), it.current_is_emoji())

    There is no reset; build a new iterator to scan again.
    """

    def __init__(self, text: str, table: Optional[SequenceSet] = None) -> None:
        self._text = text
        self._table = table if table is not None else all_sequences()
        self._index = 0
        self._current = ""
        self._emoji = False

    def next(self) -> bool:
        """Advance to the next character; False once the text is exhausted."""
        if self._index >= len(self._text):
            return False

        matched, length = self._table.has_emoji_prefix_runes(self._text, self._index)
        if not matched:
            length = 1
        self._current = self._text[self._index : self._index + length]
        self._emoji = matched
        self._index += length
        return True

    def current(self) -> str:
        return self._current

    def current_is_emoji(self) -> bool:
        return self._emoji

    @property
    def offset(self) -> int:
        """Index into the text just past the current character."""
        return self._index

    def __iter__(self) -> "CharIterator":
        return self

    def __next__(self) -> Char:
        if not self.next():
            raise StopIteration
        return Char(self._current, self._emoji)


def iterate_chars(text: str, table: Optional[SequenceSet] = None) -> CharIterator:
    return CharIterator(text, table)
