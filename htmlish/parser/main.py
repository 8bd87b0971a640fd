from __future__ import annotations

import json

from .. import t
from .. import messages as m
from ..config import getjson
from .errors import ParseError
from .nodes import Tag, Text
from .parser import parseClosingTag, parseTag, parseTagContent
from .stream import ParseConfig, Stream


def tagFromHtml(
    text: str,
    config: ParseConfig | None = None,
    startLine: int = 1,
) -> Tag:
    # Parses a single root tag.
    # Anything left over afterwards (most likely an end tag
    # that didn't match any open tag) is warned about, not rejected.
    s = Stream(text, config=config, startLine=startLine)
    tag, i, _ = parseTag(s, 0)
    if tag is None:
        start = s.skipWhitespace(0)
        raise ParseError.fromStream(s, start, start, "Expected a tag.")
    restStart = s.skipWhitespace(i)
    if not s.eof(restStart):
        m.warn(
            f"Unconsumed input after the <{tag.name}> tag: {s.remainingTextOnLine(restStart)[:20]}",
            lineNum=s.loc(restStart),
        )
    return tag


def contentFromHtml(
    text: str,
    config: ParseConfig | None = None,
    startLine: int = 1,
) -> list[Text | Tag]:
    # Parses a fragment: any mix of text and tags, until eof.
    s = Stream(text, config=config, startLine=startLine)
    nodes: list[Text | Tag] = []
    i = 0
    while not s.eof(i):
        endTag, _, _ = parseClosingTag(s, i)
        if endTag is not None:
            # Inside a tag this would just implicitly close things,
            # but at the top level there's nothing left to close.
            raise ParseError.fromStream(
                s,
                endTag.span.start,
                endTag.span.end,
                f"End tag </{endTag.name}> doesn't match any open tag.",
            )
        node, i, _ = parseTagContent(s, i)
        if node is None:
            break
        nodes.append(node)
    return nodes


def debugTag(node: Text | Tag, indent: int = 0) -> list[str]:
    pad = "  " * indent
    if isinstance(node, Text):
        return [pad + json.dumps(node.content)]
    if node.openingTag.selfClosing:
        lines = [f"{pad}<{node.name}/>"]
    else:
        lines = [f"{pad}<{node.name}>"]
    for attr in node.attributes:
        line = f"{pad}  {attr.name}={json.dumps(attr.value.content)}"
        if attr.value.isRaw:
            line += " (raw)"
        lines.append(line)
    for child in node.content:
        lines.extend(debugTag(child, indent + 1))
    if node.closingTag is not None:
        lines.append(f"{pad}</{node.closingTag.name}>")
    elif not node.openingTag.selfClosing:
        lines.append(f"{pad}(implicitly closed)")
    return lines


def strFromTag(nodes: Text | Tag | t.Iterable[Text | Tag]) -> str:
    if isinstance(nodes, (Text, Tag)):
        nodes = [nodes]
    lines = []
    for node in nodes:
        lines.extend(debugTag(node))
    return "".join(line + "\n" for line in lines)


def jsonFromTag(nodes: Text | Tag | t.Iterable[Text | Tag], indent: int | None = 2) -> str:
    if not isinstance(nodes, (Text, Tag)):
        nodes = list(nodes)
    return json.dumps(nodes, indent=indent, default=getjson)
