from __future__ import annotations

import contextlib
import dataclasses
import io
import json
import sys
from collections import Counter

from . import t

# Ordered least to most severe.
# "everything" and "nothing" are only useful as thresholds.
MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "lint": 2,
    "warning": 3,
    "fatal": 4,
    "nothing": 5,
}

DEATH_TIMING = [
    "early",  # die as soon as the first disallowed error occurs
    "late",  # die at the end of processing
]

PRINT_MODES = [
    "plain",
    "console",
    "markup",
    "json",
]

HEADINGS = {
    "fatal": ("FATAL ERROR", "red"),
    "lint": ("LINT", "yellow"),
    "warning": ("WARNING", "light cyan"),
}

COLORS = {
    "red": 31,
    "green": 32,
    "yellow": 33,
    "light cyan": 96,
    "white": 97,
}

STYLES = {
    "bold": 1,
    "invert": 7,
}


@dataclasses.dataclass()
class MessagesState:
    # Messages at this category (or above) make the run fail
    dieOn: str = "fatal"
    # Whether a failing message exits right away, or only at the end
    dieWhen: str = "late"
    # Messages below this category aren't printed
    printOn: str = "everything"
    # Print nothing at all, not even the final failure line
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    fh: io.TextIOWrapper = t.cast("io.TextIOWrapper", sys.stdout)  # noqa: RUF009
    seenMessages: set[str | tuple[str, str]] = dataclasses.field(default_factory=set)
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def record(self, category: str, message: str | tuple[str, str]) -> None:
        self.categoryCounts[category] += 1
        self.seenMessages.add(message)

    def replace(self, **kwargs: t.Any) -> MessagesState:
        # Message history is never shared with the replacement.
        return dataclasses.replace(self, seenMessages=set(), categoryCounts=Counter(), **kwargs)

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if self.dieWhen == "late" and timing == "early":
            return False
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category == "failure":
            return True
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]

    @staticmethod
    def categoryName(categoryNum: int) -> str:
        # -q counts map onto levels; too many just means "nothing".
        assert categoryNum >= 0
        names = list(MESSAGE_LEVELS.keys())
        if categoryNum >= len(names):
            return "nothing"
        return names[categoryNum]


state = MessagesState()


def p(msg: str | tuple[str, str], sep: str | None = None, end: str | None = None) -> None:
    # A tuple is (unicode, ascii) versions of the same message.
    if isinstance(msg, tuple):
        msg, ascii = msg
    else:
        ascii = msg.encode("ascii", "replace").decode()
    if state.asciiOnly:
        msg = ascii
    try:
        print(msg, sep=sep, end=end, file=state.fh)
    except UnicodeEncodeError:
        print(ascii, sep=sep, end=end, file=state.fh)


def emit(category: str, msg: str, lineNum: str | int | None = None) -> None:
    formattedMsg = formatMessage(category, msg, lineNum=lineNum)
    if formattedMsg not in state.seenMessages:
        state.record(category, formattedMsg)
        if state.shouldPrint(category):
            p(formattedMsg)
    if state.shouldDie(category):
        errorAndExit()


def die(msg: str, lineNum: str | int | None = None) -> None:
    emit("fatal", msg, lineNum)


def warn(msg: str, lineNum: str | int | None = None) -> None:
    emit("warning", msg, lineNum)


def lint(msg: str, lineNum: str | int | None = None) -> None:
    emit("lint", msg, lineNum)


def failure(msg: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage("failure", msg))


def retroactivelyCheckErrorLevel(timing: str = "early") -> None:
    # For when the death settings only become final after messages were emitted,
    # or at the end of a "late" run.
    for category, count in state.categoryCounts.items():
        if count > 0 and state.shouldDie(category, timing):
            errorAndExit()


def printColor(text: str, color: str = "white", *styles: str) -> str:
    if state.printMode != "console":
        return text
    colorNum = COLORS[color]
    styleNum = ";".join(str(STYLES[style]) for style in styles)
    return f"\033[{styleNum};{colorNum}m{text}\033[0m"


def formatMessage(type: str, text: str, lineNum: str | int | None = None) -> str | tuple[str, str]:
    if state.printMode == "markup":
        text = text.replace("<", "&lt;")
        if type == "failure":
            return f"<final-failure>{text}</final-failure>"
        return f"<{type}>{text}</{type}>"
    if state.printMode == "json":
        # A JSON array, opened by the first message and closed by the final one.
        jsonText = "[\n" if not state.seenMessages else ""
        jsonText += "  " + json.dumps({"lineNum": lineNum, "messageType": type, "text": text})
        jsonText += "\n]" if type == "failure" else ", "
        return jsonText

    if type == "message":
        return text
    if type == "failure":
        return (
            printColor(" ✘ ", "red", "invert") + " " + text,
            printColor("ERR", "red", "invert") + " " + text,
        )
    headingText, color = HEADINGS[type]
    if lineNum is not None:
        headingText = f"LINE {lineNum}"
    return printColor(headingText + ":", color, "bold") + " " + text


def errorAndExit() -> None:
    failure("Did not finish, due to errors exceeding the allowed error level.")
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(
    fh: io.TextIOWrapper | io.StringIO,
    **kwargs: t.Any,
) -> t.Generator[io.TextIOWrapper | io.StringIO, None, None]:
    # Temporarily redirects (and reconfigures) messaging,
    # so a caller can capture exactly what one parse printed.
    global state
    oldState = state
    state = oldState.replace(fh=fh, **kwargs)
    try:
        yield fh
    finally:
        state = oldState
