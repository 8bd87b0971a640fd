# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 9):
        print(
            """htmlish requires Python 3.9 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import messages, parser
from .cli import main
from .parser import (
    ParseConfig,
    ParseError,
    Tag,
    contentFromHtml,
    tagFromHtml,
)
