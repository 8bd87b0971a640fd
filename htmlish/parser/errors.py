from __future__ import annotations

import contextlib

from .. import t
from .nodes import Span

if t.TYPE_CHECKING:
    from .stream import Stream  # pylint: disable=cyclic-import


class ParseError(Exception):
    """
    A rule was committed (it saw enough to know it applies here)
    but couldn't finish.
    Unlike an Err result, this aborts the whole parse.

    As the error unwinds, each enclosing rule can add a context entry,
    so the full chain (innermost first) is available for diagnostics.
    """

    def __init__(self, message: str, span: Span, loc: str) -> None:
        super().__init__(message)
        self.message = message
        self.span = span
        self.loc = loc
        self.contexts: list[tuple[str, str]] = []

    @classmethod
    def fromStream(cls, s: Stream, start: int, end: int, message: str) -> ParseError:
        return cls(message, s.span(start, end), s.loc(start))

    def addContext(self, label: str, loc: str) -> ParseError:
        self.contexts.append((label, loc))
        return self

    def describe(self) -> str:
        # The message plus its context chain, without the location prefix.
        lines = [self.message]
        for label, loc in self.contexts:
            lines.append(f"  {label} (at {loc})")
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"{self.loc}: {self.describe()}"


@contextlib.contextmanager
def errorContext(s: Stream, start: int, label: str) -> t.Generator[None, None, None]:
    try:
        yield
    except ParseError as e:
        e.addContext(label, s.loc(start))
        raise
