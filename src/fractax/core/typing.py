from __future__ import annotations

from functools import lru_cache
from typing import Any, Union

import numpy as np

from fractax.core.constants import DEFAULT_BACKING

# Values accepted as exact integer components
IntegerLike = Union[
    int,
    bool,
    np.bool_,
    np.integer,
]

# Values which promote an operation to floating point
FloatLike = Union[
    float,
    np.floating,
]

# Python scalars and numpy booleans adopt the backing type of the other operand
WeakIntegerLike = Union[
    int,
    bool,
    np.bool_,
]

# Either the arbitrary precision python int or a fixed-width numpy integer dtype
Backing = Union[type[int], np.dtype]


def as_backing(dtype: Any) -> Backing:
    """Resolves a user supplied backing type.

    Args:
        dtype (Any): ``int`` for arbitrary precision, or anything ``np.dtype`` accepts that names an
            integer type (``np.int8``, ``"uint16"``, ``np.dtype("int32")``, ...)

    Returns:
        Backing: ``int`` or an integer ``np.dtype``
    """
    if dtype is int:
        return int
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise TypeError(f"Invalid backing type for fraction: {dtype!r}") from e
    if dt.kind not in "iu":
        raise TypeError(f"Backing type of a fraction must be an integer type, got {dt}")
    return dt


def is_fixed_width(backing: Backing) -> bool:
    return backing is not int


def is_bounded_signed(backing: Backing) -> bool:
    """Signed fixed-width integers have a minimum value without positive counterpart"""
    return backing is not int and backing.kind == "i"


def is_unsigned(backing: Backing) -> bool:
    return backing is not int and backing.kind == "u"


@lru_cache(maxsize=None)
def integer_bounds(backing: np.dtype) -> tuple[int, int]:
    info = np.iinfo(backing)
    return int(info.min), int(info.max)


def backings_equal(a: Backing, b: Backing) -> bool:
    # np.dtype("int64") == int holds, so the arbitrary precision int is compared by identity
    if a is int or b is int:
        return a is b
    return a == b


def promote_backings(a: Backing, b: Backing) -> Backing:
    """
    Widest backing type of two strong operands. The arbitrary precision int absorbs everything, and
    numpy promotions which leave the integer kinds (int64 with uint64 becomes float64) fall back to int.
    """
    if a is int or b is int:
        return int
    if backings_equal(a, b):
        return a
    promoted = np.promote_types(a, b)
    if promoted.kind not in "iu":
        return int
    return promoted


def infer_backing(*backings: Backing | None) -> Backing:
    """Promotes the backing types of all strong operands. ``None`` marks a weak operand."""
    strong = [b for b in backings if b is not None]
    if not strong:
        return DEFAULT_BACKING
    result = strong[0]
    for b in strong[1:]:
        result = promote_backings(result, b)
    return result
