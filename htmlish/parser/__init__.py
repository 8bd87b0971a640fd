from . import result
from .errors import ParseError, errorContext
from .main import (
    contentFromHtml,
    debugTag,
    jsonFromTag,
    strFromTag,
    tagFromHtml,
)
from .nodes import (
    Attribute,
    AttributeValue,
    ClosingTag,
    Identifier,
    LiteralKind,
    OpeningTag,
    SourceText,
    Span,
    StringLiteral,
    Tag,
    TagTerminator,
    Text,
)
from .parser import (
    ESCAPES,
    parseAttribute,
    parseAttributeList,
    parseClosingTag,
    parseEscapedLiteral,
    parseIdentifier,
    parseOpeningTag,
    parseRawLiteral,
    parseTag,
    parseTagContent,
    parseText,
)
from .stream import (
    DEFAULT_PARSE_CONFIG,
    ParseConfig,
    Stream,
)
