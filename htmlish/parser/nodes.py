from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .. import t


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def __json__(self) -> list[int]:
        return [self.start, self.end]


@dataclass(frozen=True, eq=False)
class SourceText:
    """
    Text that's either a view into the source (borrowed)
    or a freshly built string (owned).

    Borrowed text is only sliced out of the source when .content is read,
    so nodes that never decoded anything never copy.
    A node picks one or the other when it's built; it never changes after.
    """

    source: str
    start: int
    end: int
    owned: str | None = field(default=None, repr=False)

    @classmethod
    def fromString(cls, text: str) -> SourceText:
        return cls("", 0, 0, owned=text)

    @property
    def content(self) -> str:
        if self.owned is not None:
            return self.owned
        return self.source[self.start : self.end]

    @property
    def isBorrowed(self) -> bool:
        return self.owned is None

    def __str__(self) -> str:
        return self.content

    def __repr__(self) -> str:
        kind = "borrowed" if self.isBorrowed else "owned"
        return f"SourceText({self.content!r}, {kind})"

    def __len__(self) -> int:
        if self.owned is not None:
            return len(self.owned)
        return self.end - self.start

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SourceText):
            return self.content == other.content
        if isinstance(other, str):
            return self.content == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.content)


@dataclass(frozen=True, eq=False)
class Identifier:
    text: SourceText
    span: Span

    @property
    def content(self) -> str:
        return self.text.content

    def __str__(self) -> str:
        return self.content

    # Identifiers compare by name alone; where they came from doesn't matter.
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Identifier):
            return self.content == other.content
        if isinstance(other, str):
            return self.content == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.content)

    def __json__(self) -> str:
        return self.content


class LiteralKind(Enum):
    Escaped = "escaped"
    Raw = "raw"


@dataclass(frozen=True, eq=False)
class StringLiteral:
    kind: LiteralKind
    text: SourceText
    # Covers the whole literal, quotes included.
    span: Span

    @property
    def content(self) -> str:
        return self.text.content

    @property
    def isRaw(self) -> bool:
        if self.kind is LiteralKind.Raw:
            return True
        elif self.kind is LiteralKind.Escaped:
            return False
        else:
            t.assert_never(self.kind)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.content == other
        if isinstance(other, StringLiteral):
            return self.kind is other.kind and self.content == other.content
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.content))

    def __json__(self) -> t.JSONT:
        return {"kind": self.kind.value, "content": self.content, "span": self.span.__json__()}


# An attribute value is one of the two literal kinds;
# callers that only want the text just read .content.
AttributeValue = StringLiteral


@dataclass(frozen=True)
class Attribute:
    name: Identifier
    value: AttributeValue

    def __json__(self) -> t.JSONT:
        return {"name": self.name.content, "value": self.value.__json__()}


class TagTerminator(Enum):
    SelfClosing = "/>"
    Open = ">"


@dataclass(frozen=True)
class OpeningTag:
    name: Identifier
    attributes: tuple[Attribute, ...]
    terminator: TagTerminator
    span: Span

    @property
    def selfClosing(self) -> bool:
        return self.terminator is TagTerminator.SelfClosing

    def get(self, attrName: str, default: str | None = None) -> str | None:
        # Duplicate attributes are all kept; the first one wins here.
        for attr in self.attributes:
            if attr.name == attrName:
                return attr.value.content
        return default

    def __json__(self) -> t.JSONT:
        return {
            "name": self.name.content,
            "attributes": [attr.__json__() for attr in self.attributes],
            "selfClosing": self.selfClosing,
            "span": self.span.__json__(),
        }


@dataclass(frozen=True)
class ClosingTag:
    name: Identifier
    span: Span

    def __json__(self) -> t.JSONT:
        return {"name": self.name.content, "span": self.span.__json__()}


@dataclass(frozen=True)
class Text:
    text: SourceText
    span: Span

    @property
    def content(self) -> str:
        return self.text.content

    def __json__(self) -> t.JSONT:
        return {"type": "text", "content": self.content, "span": self.span.__json__()}


@dataclass(frozen=True)
class Tag:
    openingTag: OpeningTag
    content: tuple[Text | Tag, ...]
    closingTag: ClosingTag | None
    span: Span

    @property
    def name(self) -> str:
        return self.openingTag.name.content

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return self.openingTag.attributes

    @property
    def implicitlyClosed(self) -> bool:
        return self.closingTag is None and not self.openingTag.selfClosing

    def textContent(self) -> str:
        return "".join(textsFromContent(self.content))

    def descendants(self) -> t.Generator[Tag, None, None]:
        for child in self.content:
            if isinstance(child, Tag):
                yield child
                yield from child.descendants()

    def __json__(self) -> t.JSONT:
        return {
            "type": "tag",
            "openingTag": self.openingTag.__json__(),
            "content": [child.__json__() for child in self.content],
            "closingTag": self.closingTag.__json__() if self.closingTag is not None else None,
            "span": self.span.__json__(),
        }


def textsFromContent(content: t.Iterable[Text | Tag]) -> t.Generator[str, None, None]:
    for child in content:
        if isinstance(child, Text):
            yield child.content
        else:
            yield from textsFromContent(child.content)
