from __future__ import annotations

import errno
import sys
from abc import abstractmethod

import attr
import requests
import tenacity


@attr.s(auto_attribs=True, frozen=True)
class InputContent:
    text: str
    sourceName: str


def inputFromName(sourceName: str) -> InputSource:
    # "-" is stdin, https: is fetched, anything else is a path.
    if sourceName == "-":
        return StdinInputSource()
    if sourceName.startswith("https:"):
        return UrlInputSource(sourceName)
    return FileInputSource(sourceName)


class InputSource:
    """Somewhere markup can be read from, all at once."""

    sourceName: str

    def __str__(self) -> str:
        return self.sourceName

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sourceName!r})"

    @abstractmethod
    def read(self) -> InputContent:
        pass


class StdinInputSource(InputSource):
    sourceName = "-"

    def read(self) -> InputContent:
        return InputContent(sys.stdin.read(), self.sourceName)


class FileInputSource(InputSource):
    def __init__(self, sourceName: str) -> None:
        self.sourceName = sourceName

    def read(self) -> InputContent:
        with open(self.sourceName, encoding="utf-8") as fh:
            return InputContent(fh.read(), self.sourceName)


class UrlInputSource(InputSource):
    def __init__(self, sourceName: str) -> None:
        assert sourceName.startswith("https:")
        self.sourceName = sourceName

    # Flaky networks get a couple more tries;
    # a 404 is a real answer, so it doesn't.
    @tenacity.retry(
        reraise=True,
        stop=tenacity.stop_after_attempt(3),
        wait=tenacity.wait_random(1, 2),
        retry=tenacity.retry_if_not_exception_type(FileNotFoundError),
    )
    def read(self) -> InputContent:
        response = requests.get(self.sourceName, timeout=10)
        if response.status_code == 404:
            raise FileNotFoundError(errno.ENOENT, "Not found", self.sourceName)
        response.raise_for_status()
        return InputContent(response.text, self.sourceName)
