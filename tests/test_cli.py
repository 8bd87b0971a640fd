"""Tests for the htmlish command line."""

import io
import json
import os
import sys
import tempfile
import unittest
from unittest import mock

from htmlish import messages as m
from htmlish.cli import main


def runCli(*args):
    fh = io.StringIO()
    exitCode = 0
    with m.withMessageState(fh=fh), mock.patch.object(sys, "argv", ["htmlish", "--print", "plain", *args]):
        try:
            main()
        except SystemExit as e:
            exitCode = e.code
    return fh.getvalue(), exitCode


class TestParseCommand(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def writeInput(self, text):
        path = os.path.join(self.tmpdir.name, "input.html")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path

    def test_dump(self):
        path = self.writeInput("<div><p>Hi There!</div>\n")
        output, exitCode = runCli("parse", path)
        assert exitCode == 0
        assert output == '<div>\n  <p>\n    "Hi There!"\n  (implicitly closed)\n</div>\n'

    def test_json(self):
        path = self.writeInput('<a href="x"/>')
        output, exitCode = runCli("parse", "--json", path)
        assert exitCode == 0
        data = json.loads(output)
        assert data["openingTag"]["attributes"][0]["name"] == "href"

    def test_fragment(self):
        path = self.writeInput("one <b>two</b>")
        output, exitCode = runCli("parse", "--fragment", path)
        assert exitCode == 0
        assert output == '"one "\n<b>\n  "two"\n</b>\n'

    def test_parse_error_fails(self):
        path = self.writeInput("just text")
        output, exitCode = runCli("parse", path)
        assert exitCode == 2
        assert output.startswith("LINE 1:1: Expected a tag.\n")

    def test_force_ignores_errors(self):
        path = self.writeInput("just text")
        output, exitCode = runCli("-f", "parse", path)
        assert exitCode == 0
        assert "Expected a tag." in output

    def test_missing_file(self):
        output, exitCode = runCli("parse", os.path.join(self.tmpdir.name, "nope.html"))
        assert exitCode == 2
        assert "Couldn't read the input file" in output


class TestTestCommand(unittest.TestCase):
    def test_runs_selected_golden_files(self):
        output, exitCode = runCli("test", "--file", "simple")
        assert exitCode == 0
        assert "All tests passed." in output
