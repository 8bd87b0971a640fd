"""Tests for the character stream and its position bookkeeping."""

import unittest

from htmlish.parser import DEFAULT_PARSE_CONFIG, ParseConfig, Stream
from htmlish.parser import preds


class TestStreamIndexing(unittest.TestCase):
    def test_out_of_range_is_empty(self):
        s = Stream("ab")
        assert s[0] == "a"
        assert s[2] == ""
        assert s[-1] == ""
        assert s.eof(2)
        assert not s.eof(1)

    def test_predicates_reject_eof(self):
        s = Stream("")
        assert not preds.isWhitespace(s[0])
        assert not preds.isIdentStart(s[0])
        assert not preds.isTextChar(s[0])

    def test_ident_chars(self):
        assert preds.isIdentStart("a")
        assert not preds.isIdentStart("1")
        assert not preds.isIdentStart("-")
        assert preds.isIdentChar("-")
        assert preds.isIdentChar("_")
        assert preds.isIdentChar("9")
        assert not preds.isIdentChar(":")


class TestStreamLocations(unittest.TestCase):
    def test_line_and_column(self):
        s = Stream("ab\ncd")
        assert s.loc(0) == "1:1"
        # The newline itself belongs to the line it ends.
        assert s.loc(2) == "1:3"
        assert s.loc(3) == "2:1"
        assert s.line(4) == 2
        assert s.col(4) == 2

    def test_start_line(self):
        s = Stream("a\nb", startLine=10)
        assert s.loc(2) == "11:1"

    def test_context(self):
        s = Stream("a", config=ParseConfig(context="foo.html"))
        assert s.loc(0) == "1:1 of foo.html"


class TestStreamHelpers(unittest.TestCase):
    def test_skip_whitespace(self):
        s = Stream(" \t\r\n\x0cx ")
        assert s.skipWhitespace(0) == 5
        assert s.skipWhitespace(5) == 5
        assert s.skipWhitespace(6) == 7

    def test_take_while(self):
        s = Stream("abc1 ")
        assert s.takeWhile(0, preds.isASCIIAlpha) == ("abc", 3, False)
        assert s.takeWhile(3, preds.isASCIIAlpha) == (None, 3, True)

    def test_starts_with(self):
        s = Stream("<a></a>")
        assert s.startsWith(3, "</")
        assert not s.startsWith(0, "</")
        assert not s.startsWith(6, "/>")

    def test_remaining_text_on_line(self):
        s = Stream("ab\ncd")
        assert s.remainingTextOnLine(1) == "b"
        assert s.remainingTextOnLine(3) == "cd"

    def test_borrow_is_a_view(self):
        s = Stream("hello world")
        text = s.borrow(6, 11)
        assert text.isBorrowed
        assert text.source is s.text
        assert text == "world"
        assert len(text) == 5


class TestParseConfig(unittest.TestCase):
    def test_config_replace(self):
        config = DEFAULT_PARSE_CONFIG.replace(context="a.html")
        assert config.context == "a.html"
        assert config.maxDepth == DEFAULT_PARSE_CONFIG.maxDepth
        assert DEFAULT_PARSE_CONFIG.context is None
