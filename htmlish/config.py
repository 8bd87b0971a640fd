from __future__ import annotations

import os

from . import t


def englishFromList(items: t.Iterable[str], conjunction: str = "or") -> str:
    # Format a list of strings into an English list.
    items = list(items)
    assert len(items) > 0
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return "{0} {2} {1}".format(items[0], items[1], conjunction)
    return "{0}, {2} {1}".format(", ".join(items[:-1]), items[-1], conjunction)


def safeIndex(coll: t.Sequence, needle: t.Any, default: t.Any = None) -> t.Any:
    try:
        return coll.index(needle)
    except ValueError:
        return default


def scriptPath(*pathSegs: str) -> str:
    startPath = os.path.dirname(os.path.realpath(__file__))
    path = os.path.join(startPath, *pathSegs)
    return path


def getjson(x: t.Any) -> t.Any:
    # json.dumps() default= hook; nodes know how to turn themselves into JSON.
    try:
        return x.__json__()
    except AttributeError:
        msg = f"Object of type {type(x).__name__} is not JSON serializable"
        raise TypeError(msg) from None
