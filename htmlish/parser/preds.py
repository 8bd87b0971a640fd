from __future__ import annotations

# Character predicates for the grammar.
# All of them take a single-char string, as returned by Stream.__getitem__,
# and return False for the empty string Stream produces past eof.


def isASCIIAlpha(ch: str) -> bool:
    return ch != "" and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def isDigit(ch: str) -> bool:
    return ch != "" and "0" <= ch <= "9"


def isASCIIAlphanum(ch: str) -> bool:
    return isASCIIAlpha(ch) or isDigit(ch)


def isIdentStart(ch: str) -> bool:
    return isASCIIAlpha(ch)


def isIdentChar(ch: str) -> bool:
    return isASCIIAlphanum(ch) or ch == "-" or ch == "_"


def isWhitespace(ch: str) -> bool:
    # ASCII whitespace, per HTML
    return ch != "" and ch in "\t\n\x0c\r "


def isTextChar(ch: str) -> bool:
    return ch != "" and ch != "<"
