from __future__ import annotations

from .. import config, t
from .. import messages as m
from . import preds
from .errors import ParseError, errorContext
from .nodes import (
    Attribute,
    ClosingTag,
    Identifier,
    LiteralKind,
    OpeningTag,
    SourceText,
    StringLiteral,
    Tag,
    TagTerminator,
    Text,
)
from .result import Err, Ok, ResultT
from .stream import Stream

# The complete set of escapes allowed in (non-raw) attribute values.
# Note that &#39; decodes to an ampersand, not an apostrophe.
ESCAPES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&#39;": "&",
    "&quot;": '"',
}


def parseIdentifier(s: Stream, start: int) -> ResultT[Identifier]:
    i = s.skipWhitespace(start)
    if not preds.isIdentStart(s[i]):
        return Err(start)
    nameStart = i
    i += 1
    while preds.isIdentChar(s[i]):
        i += 1
    return Ok(Identifier(s.borrow(nameStart, i), s.span(nameStart, i)), i)


def parseEscape(s: Stream, start: int) -> ResultT[str]:
    if s[start] != "&":
        return Err(start)
    for escape, ch in ESCAPES.items():
        if s.startsWith(start, escape):
            return Ok(ch, start + len(escape))
    return Err(start)


def parseEscapedLiteral(s: Stream, start: int) -> ResultT[StringLiteral]:
    i = s.skipWhitespace(start)
    if s[i] != '"':
        return Err(start)
    litStart = i
    i += 1

    # Could decode into a fresh string from the start,
    # but most values have no escapes at all,
    # so stay a view of the source until the first escape shows up,
    # then copy what came before and append whole segments after that.
    val: str | None = None
    startSeg = i
    while s[i] != '"':
        if s.eof(i):
            raise ParseError.fromStream(s, litStart, i, "Quoted attribute value was never closed.")
        if s[i] == "&":
            startRef = i
            ch, i, _ = parseEscape(s, i)
            if ch is None:
                raise ParseError.fromStream(
                    s,
                    startRef,
                    startRef + 1,
                    f"Unknown escape sequence '{s.slice(startRef, startRef + 6)}'; expected "
                    + config.englishFromList(ESCAPES.keys())
                    + ".",
                )
            if val is None:
                val = ""
            val += s.slice(startSeg, startRef) + ch
            startSeg = i
            continue
        i += 1

    text: SourceText
    if val is None:
        text = s.borrow(startSeg, i)
    else:
        text = SourceText.fromString(val + s.slice(startSeg, i))
    i += 1
    return Ok(StringLiteral(LiteralKind.Escaped, text, s.span(litStart, i)), i)


def parseRawLiteral(s: Stream, start: int) -> ResultT[StringLiteral]:
    i = s.skipWhitespace(start)
    if s[i] != '"':
        return Err(start)
    litStart = i
    i += 1

    innerStart = i
    while s[i] != '"':
        if s.eof(i):
            raise ParseError.fromStream(s, litStart, i, "Quoted attribute value was never closed.")
        i += 1
    text = s.borrow(innerStart, i)
    i += 1
    return Ok(StringLiteral(LiteralKind.Raw, text, s.span(litStart, i)), i)


def parseAttribute(s: Stream, start: int) -> ResultT[Attribute]:
    name, i, _ = parseIdentifier(s, start)
    if name is None:
        return Err(start)

    # Committed to an attribute

    i = s.skipWhitespace(i)
    if s[i] != "=":
        raise ParseError.fromStream(s, i, i + 1, f"Expected '=' after the attribute name '{name}'.")
    i += 1

    # Now committed to a value too

    if name.content in s.config.rawTextAttributes:
        value, i, _ = parseRawLiteral(s, i)
    else:
        value, i, _ = parseEscapedLiteral(s, i)
    if value is None:
        raise ParseError.fromStream(s, i, i + 1, f"Expected a quoted value after {name}=.")

    return Ok(Attribute(name, value), i)


def parseAttributeList(s: Stream, start: int) -> ResultT[tuple[Attribute, ...]]:
    # Never fails; stops at the first thing that doesn't start an attribute.
    i = start
    attrs: list[Attribute] = []
    while True:
        with errorContext(s, s.skipWhitespace(i), "expected attribute"):
            attr, i, _ = parseAttribute(s, i)
        if attr is None:
            break
        if s.config.lintDuplicateAttributes and any(x.name == attr.name for x in attrs):
            m.lint(
                f"Attribute '{attr.name}' appears twice in the tag; both are kept.",
                lineNum=s.loc(attr.name.span.start),
            )
        attrs.append(attr)
    return Ok(tuple(attrs), i)


def parseOpeningTag(s: Stream, start: int) -> ResultT[OpeningTag]:
    i = s.skipWhitespace(start)
    if s[i] != "<":
        return Err(start)
    tagStart = i
    i += 1

    # After this point we're committed to a start tag,
    # so failure will really be a parse error.

    name, i, _ = parseIdentifier(s, i)
    if name is None:
        raise ParseError.fromStream(s, i, i + 1, "Expected a tag name after '<'.")

    attrs, i, _ = parseAttributeList(s, i)
    assert attrs is not None

    i = s.skipWhitespace(i)
    if s.startsWith(i, "/>"):
        terminator = TagTerminator.SelfClosing
        i += 2
    elif s[i] == ">":
        terminator = TagTerminator.Open
        i += 1
    elif s.eof(i):
        raise ParseError.fromStream(s, tagStart, i, f"Tag <{name}> wasn't closed at end of input.")
    else:
        # If I can, guess at what the 'garbage' is so I can display it.
        # Only look at next 20 chars, tho, so I don't spam the console.
        next20 = s.slice(i, i + 20)
        if ">" in next20 or " " in next20:
            garbageEnd = min(config.safeIndex(next20, ">", 20), config.safeIndex(next20, " ", 20))
            garbage = f" ({next20[:garbageEnd]})" if garbageEnd > 0 else ""
        else:
            garbage = ""
        raise ParseError.fromStream(
            s,
            i,
            i + 1,
            f"While trying to parse a <{name}> start tag, ran into some unparseable stuff{garbage}. Expected '>' or '/>'.",
        )

    return Ok(OpeningTag(name, attrs, terminator, s.span(tagStart, i)), i)


def parseClosingTag(s: Stream, start: int) -> ResultT[ClosingTag]:
    i = s.skipWhitespace(start)
    if not s.startsWith(i, "</"):
        return Err(start)
    tagStart = i
    i += 2

    # committed now

    name, i, _ = parseIdentifier(s, i)
    if name is None:
        if s.eof(s.skipWhitespace(i)):
            raise ParseError.fromStream(s, tagStart, i, "Hit EOF in the middle of an end tag.")
        if s[s.skipWhitespace(i)] == ">":
            raise ParseError.fromStream(s, tagStart, i, "Missing end tag name. (Got </>.)")
        raise ParseError.fromStream(s, tagStart, i, "Garbage in an end tag; expected a tag name after '</'.")
    i = s.skipWhitespace(i)
    if s.eof(i):
        raise ParseError.fromStream(s, tagStart, i, f"Hit EOF in the middle of an end tag </{name}>.")
    if s[i] != ">":
        raise ParseError.fromStream(s, tagStart, i, f"Garbage after the tagname in </{name}>; expected '>'.")
    i += 1
    return Ok(ClosingTag(name, s.span(tagStart, i)), i)


def parseText(s: Stream, start: int) -> ResultT[Text]:
    # Text runs keep their whitespace, and stop at the next <.
    _, i, _ = s.takeWhile(start, preds.isTextChar)
    if i == start:
        return Err(start)
    return Ok(Text(s.borrow(start, i), s.span(start, i)), i)


def parseTag(s: Stream, start: int, depth: int = 1) -> ResultT[Tag]:
    with errorContext(s, s.skipWhitespace(start), "expected opening tag"):
        openingTag, i, _ = parseOpeningTag(s, start)
    if openingTag is None:
        return Err(start)
    tagStart = openingTag.span.start
    if depth > s.config.maxDepth:
        raise ParseError.fromStream(
            s,
            tagStart,
            i,
            f"Tags are nested more than {s.config.maxDepth} deep, at <{openingTag.name}>.",
        )
    if openingTag.selfClosing:
        return Ok(Tag(openingTag, (), None, s.span(tagStart, i)), i)

    content: list[Text | Tag] = []
    closingTag: ClosingTag | None = None
    while True:
        # i is always the start of the next run of content;
        # nothing past it has been consumed yet,
        # so "rewinding" is just not moving i.
        endTag, endI, _ = parseClosingTag(s, i)
        if endTag is not None:
            if endTag.name == openingTag.name:
                closingTag = endTag
                i = endI
            # Otherwise it closes some ancestor;
            # this tag is implicitly closed,
            # and the end tag is left for the ancestor to consume.
            break

        if s[i] == "<":
            with errorContext(s, i, "expected tag"):
                child, i, _ = parseTag(s, i, depth + 1)
            assert child is not None
            content.append(child)
        else:
            text, i, _ = parseText(s, i)
            if text is None:
                # Hit eof, so the tag's closed by the end of input.
                break
            content.append(text)

    return Ok(Tag(openingTag, tuple(content), closingTag, s.span(tagStart, i)), i)


def parseTagContent(s: Stream, start: int, depth: int = 1) -> ResultT[Text | Tag]:
    if s[start] == "<":
        with errorContext(s, start, "expected tag"):
            return parseTag(s, start, depth)
    return parseText(s, start)
