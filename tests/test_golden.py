"""Runs the golden tests: each tests/*.html against its .txt and .console.txt."""

import io
import os
import unittest

from htmlish import messages as m
from htmlish import test as testsuite


class TestGoldenFiles(unittest.TestCase):
    def test_all_golden_files(self):
        paths = testsuite.testPaths()
        assert paths
        for path in paths:
            with self.subTest(testsuite.testNameForPath(path)):
                assert testsuite.runTest(path)


class TestRunner(unittest.TestCase):
    def test_only_html_files(self):
        paths = testsuite.testPaths()
        assert all(path.endswith(".html") for path in paths)
        assert "simple.html" in [testsuite.testNameForPath(path) for path in paths]

    def test_file_filter(self):
        names = [testsuite.testNameForPath(path) for path in testsuite.testPaths(["implicit"])]
        assert names == ["implicit-close.html"]

    def test_run_reports_success(self):
        fh = io.StringIO()
        with m.withMessageState(fh=fh, printMode="plain"):
            assert testsuite.run(["simple"])
        assert "All tests passed." in fh.getvalue()

    def test_mismatch_prints_a_diff(self):
        fh = io.StringIO()
        with m.withMessageState(fh=fh, printMode="plain"):
            assert not testsuite.compare("a\nb\n", "a\nc\n", "x.html")
        assert "-c" in fh.getvalue()
        assert "+b" in fh.getvalue()

    def test_replace_extension(self):
        path = os.path.join("a", "b.html")
        assert testsuite.replaceExtension(path, ".console.txt") == os.path.join("a", "b.console.txt")
