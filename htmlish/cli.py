from __future__ import annotations

import argparse
import os
import sys

from . import config
from . import messages as m


def main() -> None:
    # argparse has no optional subparsers, so default one in by hand
    if len(sys.argv) == 1:
        sys.argv.append("parse")

    options = argParser().parse_args()
    applyMessageOptions(options)

    if options.subparserName == "parse":
        handleParse(options)
    elif options.subparserName == "test":
        handleTest(options)


def argParser() -> argparse.ArgumentParser:
    with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
        semver = fh.read().strip()

    argparser = argparse.ArgumentParser(description=f"htmlish v{semver}: parses HTML-ish markup into a tag tree.")
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Hide the least important kind of message; repeat to hide more.",
    )
    argparser.add_argument("-s", "--silent", action="store_true", help="Print no messages at all.")
    argparser.add_argument(
        "-f",
        "--force",
        dest="dieOn",
        action="store_const",
        const="nothing",
        help="Exit successfully no matter what was reported. Same as --die-on=nothing.",
    )
    argparser.add_argument("-a", "--ascii-only", dest="asciiOnly", action="store_true", help="Keep messages ASCII.")
    argparser.add_argument("--print", dest="printMode", choices=m.PRINT_MODES, help="Message format. Default 'console'.")
    argparser.add_argument(
        "--die-on",
        dest="dieOn",
        choices=list(m.MESSAGE_LEVELS.keys()),
        help="The least severe kind of message that makes the run fail. Default 'fatal'.",
    )
    argparser.add_argument(
        "--die-when",
        dest="dieWhen",
        choices=m.DEATH_TIMING,
        default="late",
        help="Fail at the first failing message ('early') or after finishing ('late').",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    parseParser = subparsers.add_parser("parse", help="Parse markup and print its tag tree.")
    parseParser.add_argument("infile", nargs="?", default="-", help="A path, an https: URL, or '-' for stdin.")
    parseParser.add_argument("--fragment", action="store_true", help="Accept any mix of text and tags.")
    parseParser.add_argument("--json", action="store_true", help="Print JSON instead of the debug dump.")

    testParser = subparsers.add_parser("test", help="Run the golden tests in tests/.")
    testParser.add_argument("--rebase", action="store_true", help="Rewrite the golden files from the current output.")
    testParser.add_argument("--file", dest="files", nargs="+", help="Only tests whose names contain one of these.")

    return argparser


def applyMessageOptions(options: argparse.Namespace) -> None:
    if options.silent:
        m.state.silent = True
    else:
        m.state.printOn = m.MessagesState.categoryName(options.quiet)
    if options.dieOn is not None:
        m.state.dieOn = options.dieOn
    m.state.dieWhen = options.dieWhen
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is not None:
        m.state.printMode = options.printMode
    elif "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        m.state.printMode = "plain"
    else:
        m.state.printMode = "console"


def handleParse(options: argparse.Namespace) -> None:
    from . import InputSource
    from .parser import ParseError, contentFromHtml, jsonFromTag, strFromTag, tagFromHtml

    source = InputSource.inputFromName(options.infile)
    try:
        text = source.read().text
        nodes = contentFromHtml(text) if options.fragment else tagFromHtml(text)
    except OSError as e:
        m.die(f"Couldn't read the input file '{source}':\n{e}")
    except ParseError as e:
        m.die(e.describe(), lineNum=e.loc)
    else:
        if options.json:
            m.p(jsonFromTag(nodes))
        else:
            m.p(strFromTag(nodes), end="")
    m.retroactivelyCheckErrorLevel(timing="late")


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    m.state.dieOn = "nothing"
    if options.rebase:
        test.rebase(options.files)
    else:
        sys.exit(0 if test.run(options.files) else 1)
