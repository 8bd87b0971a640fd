# pylint: skip-file
# Module for holding types, for easy importing into the rest of the codebase
from __future__ import annotations

import sys

# The only things that should be available during runtime.
from typing import TYPE_CHECKING, TypeVar, cast

# Only available in 3.11, so stub them out for earlier versions
if sys.version_info >= (3, 11):
    from typing import assert_never
else:
    from typing_extensions import assert_never


if TYPE_CHECKING:
    from typing import (
        Any,
        Callable,
        Generator,
        Iterable,
        Literal,
        Sequence,
        TypeAlias,
    )

    # JSON-ready values, as produced by the nodes' __json__() methods
    JSONT: TypeAlias = dict[str, Any]
