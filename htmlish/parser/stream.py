from __future__ import annotations

import bisect
import dataclasses
from dataclasses import dataclass, field

from .. import t
from . import preds
from .nodes import SourceText, Span
from .result import Err, Ok, ResultT


@dataclass
class ParseConfig:
    # Attributes whose values are taken verbatim, without decoding escapes.
    rawTextAttributes: frozenset[str] = field(default_factory=lambda: frozenset({"style"}))
    # Tags nested deeper than this are a parse error,
    # so hostile input can't exhaust the Python stack.
    maxDepth: int = 256
    lintDuplicateAttributes: bool = True
    context: str | None = None

    def replace(self, **kwargs: t.Any) -> ParseConfig:
        return dataclasses.replace(self, **kwargs)


DEFAULT_PARSE_CONFIG = ParseConfig()


@dataclass
class Stream:
    _chars: str
    _len: int
    _lineBreaks: list[int]
    startLine: int
    config: ParseConfig

    def __init__(self, chars: str, config: ParseConfig | None = None, startLine: int = 1) -> None:
        self._chars = chars
        self._len = len(chars)
        self._lineBreaks = []
        self.startLine = startLine
        self.config = config if config is not None else DEFAULT_PARSE_CONFIG
        for i, char in enumerate(chars):
            if char == "\n":
                self._lineBreaks.append(i)

    def __getitem__(self, key: int) -> str:
        if key < 0 or key >= self._len:
            return ""
        return self._chars[key]

    def slice(self, start: int | None, stop: int | None) -> str:
        if start is not None and start < 0:
            start = 0
        if stop is not None and stop < 0:
            stop = 0
        return self._chars[start:stop]

    def eof(self, index: int) -> bool:
        return index >= self._len

    def __len__(self) -> int:
        return self._len

    @property
    def text(self) -> str:
        return self._chars

    def line(self, index: int) -> int:
        # Zero-based line index
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        return lineIndex + self.startLine

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.config.context is None:
            return rc
        return f"{rc} of {self.config.context}"

    def span(self, start: int, end: int) -> Span:
        return Span(start, end)

    def borrow(self, start: int, end: int) -> SourceText:
        return SourceText(self._chars, start, end)

    def skipWhitespace(self, start: int) -> int:
        # Whitespace between tokens is insignificant;
        # rules that need it (literals, text) just don't call this.
        i = start
        while preds.isWhitespace(self[i]):
            i += 1
        return i

    def startsWith(self, start: int, text: str) -> bool:
        return self._chars.startswith(text, start)

    def takeWhile(self, start: int, pred: t.Callable[[str], bool]) -> ResultT[str]:
        # Produces the maximal run of chars matching pred,
        # or fails if there isn't at least one.
        i = start
        while pred(self[i]):
            i += 1
        if i == start:
            return Err(start)
        return Ok(self.slice(start, i), i)

    def remainingTextOnLine(self, start: int) -> str:
        # The text on the current line from the start point on,
        # not including the newline.
        lineIndex = bisect.bisect_left(self._lineBreaks, start)
        if lineIndex >= len(self._lineBreaks):
            return self.slice(start, None)
        return self.slice(start, self._lineBreaks[lineIndex])
