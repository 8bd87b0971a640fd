from __future__ import annotations

import difflib
import io
import os

from alive_progress import alive_it

from . import config, t
from . import messages as m
from .parser import ParseError, strFromTag, tagFromHtml

TEST_DIR = os.path.abspath(config.scriptPath("..", "tests"))
TEST_FILE_EXTENSION = ".html"

# Each tests/**/NAME.html is parsed as a single root tag.
# NAME.txt holds the expected debug dump (empty if the parse fails),
# NAME.console.txt whatever was printed along the way.


def testPaths(files: t.Sequence[str] | None = None) -> list[str]:
    paths = []
    for root, _, filenames in os.walk(TEST_DIR):
        for filename in filenames:
            if not filename.endswith(TEST_FILE_EXTENSION):
                continue
            if files and not any(substring in filename for substring in files):
                continue
            paths.append(os.path.join(root, filename))
    return sorted(paths)


def testNameForPath(path: str) -> str:
    return os.path.relpath(path, TEST_DIR)


def run(files: t.Sequence[str] | None = None) -> bool:
    paths = testPaths(files)
    if not paths:
        m.p("No tests were found.")
        return True
    fails = []
    progress = alive_it(paths, dual_line=True, length=20)
    for path in progress:
        progress.text(testNameForPath(path))
        if not runTest(path):
            fails.append(testNameForPath(path))
    if not fails:
        m.p(m.printColor("✔ All tests passed.", color="green"))
        return True
    m.p(m.printColor(f"✘ {len(paths) - len(fails)}/{len(paths)} tests passed.", color="red"))
    for fail in fails:
        m.p("* " + fail)
    return False


def runTest(path: str) -> bool:
    output, console = processTest(path)
    # Compare both, so both diffs get printed.
    outputMatches = compare(output, readGolden(path, ".txt"), path)
    consoleMatches = compare(console, readGolden(path, ".console.txt"), path)
    return outputMatches and consoleMatches


def rebase(files: t.Sequence[str] | None = None) -> bool:
    paths = testPaths(files)
    for path in alive_it(paths, dual_line=True, length=20):
        output, console = processTest(path)
        for ext, text in ((".txt", output), (".console.txt", console)):
            with open(replaceExtension(path, ext), "w", encoding="utf-8") as fh:
                fh.write(text)
    return True


def processTest(path: str) -> tuple[str, str]:
    with open(path, encoding="utf-8") as fh:
        text = fh.read()
    console = io.StringIO()
    output = ""
    with m.withMessageState(fh=console, printMode="plain", dieOn="nothing"):
        try:
            output = strFromTag(tagFromHtml(text))
        except ParseError as e:
            m.die(e.describe(), lineNum=e.loc)
    return output, console.getvalue()


def readGolden(path: str, ext: str) -> str:
    with open(replaceExtension(path, ext), encoding="utf-8") as fh:
        return fh.read()


def compare(suspect: str, golden: str, path: str) -> bool:
    if suspect == golden:
        return True
    m.p(f"FILE: {path}")
    for line in difflib.unified_diff(golden.split("\n"), suspect.split("\n"), fromfile="golden", tofile="suspect"):
        if line.startswith("-"):
            m.p(m.printColor(line, color="red"))
        elif line.startswith("+"):
            m.p(m.printColor(line, color="green"))
        else:
            m.p(line)
    return False


def replaceExtension(path: str, newExt: str) -> str:
    return os.path.splitext(path)[0] + newExt
