from __future__ import annotations

from .. import t

ResultValT_co = t.TypeVar("ResultValT_co", covariant=True)
ResultValT_contra = t.TypeVar("ResultValT_contra", contravariant=True)
OkT: t.TypeAlias = "tuple[ResultValT_co, int, t.Literal[False]]"
ErrT: t.TypeAlias = "tuple[None, int, t.Literal[True]]"
ResultT: t.TypeAlias = "OkT[ResultValT_co] | ErrT"

# Err is a *mismatch*: the rule doesn't apply at this index,
# and the caller is free to try something else from the same spot.
# Committed failures are raised as ParseError instead.


def Ok(val: ResultValT_contra, index: int) -> OkT[ResultValT_contra]:
    return (val, index, False)


def Err(index: int) -> ErrT:
    return (None, index, True)

