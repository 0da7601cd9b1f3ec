"""
Recognize Unicode emoji sequences in text.

Every emoji the Unicode emoji sequence files define is matched as one unit:
single code points, text/emoji presentation variants, keycaps, flags, tag
sequences, skin tone modifiers and ZWJ combinations.

    >>> from emojiseq import has_emoji, filter_emoji, replace_emoji
    >>> has_emoji("ship it 🚀")
    True
    >>> filter_emoji("ship it 🚀")
    'ship it '
    >>> replace_emoji("ok 👍🏽", lambda i, e: f"<{i}>")
    'ok <3>'

Reference: https://www.unicode.org/Public/emoji/
"""

from __future__ import annotations

from emojiseq.chars import Char, CharIterator, iterate_chars
from emojiseq.errors import GeneratorError, MalformedRecordError, SequenceSetFrozenError
from emojiseq.official import all_sequences, data_version
from emojiseq.scanner import ReplaceFunc, filter_emoji, has_emoji, replace_emoji
from emojiseq.trie import CodepointSequence, SequenceSet

__version__ = "0.1.0"

__all__ = [
    "Char",
    "CharIterator",
    "CodepointSequence",
    "GeneratorError",
    "MalformedRecordError",
    "ReplaceFunc",
    "SequenceSet",
    "SequenceSetFrozenError",
    "all_sequences",
    "data_version",
    "filter_emoji",
    "has_emoji",
    "iterate_chars",
    "replace_emoji",
]
