from __future__ import annotations

from typing import Optional


class SequenceSetFrozenError(RuntimeError):
    """Raised when a sequence is added to a SequenceSet after freeze()."""


class GeneratorError(Exception):
    """Base class for failures while compiling the emoji sequence table."""


class MalformedRecordError(GeneratorError, ValueError):
    """A record line whose code point field is not valid hexadecimal."""

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        lineno: Optional[int] = None,
        line: str = "",
    ) -> None:
        self.source = source
        self.lineno = lineno
        self.line = line
        where = source or "<input>"
        if lineno is not None:
            where = f"{where}:{lineno}"
        super().__init__(f"{where}: {message}")
