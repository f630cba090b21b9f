from __future__ import annotations

import math
from typing import Any

import numpy as np

from fractax.core.errors import InexactConversion
from fractax.core.typing import Backing, FloatLike, IntegerLike, integer_bounds, is_fixed_width


def exact_integer(value: Any) -> int:
    """
    Widens an integer-like or integral floating point value to a python int. Floats with a fractional
    part, infinities and NaN cannot be represented exactly.
    """
    if isinstance(value, IntegerLike):
        return int(value)
    if isinstance(value, FloatLike):
        if not math.isfinite(value) or not float(value).is_integer():
            raise InexactConversion(f"Cannot represent {value} exactly as an integer")
        return int(value)
    raise TypeError(f"Expected an integer-like value, got {type(value).__name__}: {value!r}")


def check_in_range(value: int, backing: Backing) -> int:
    """Checked narrowing: a value that does not fit a fixed-width backing type is an OverflowError."""
    if not is_fixed_width(backing):
        return value
    low, high = integer_bounds(backing)
    if value < low or value > high:
        raise OverflowError(f"Integer {value} out of bounds for {backing}")
    return value


def to_component(value: Any, backing: Backing) -> int:
    return check_in_range(exact_integer(value), backing)


def narrow(value: int, backing: Backing) -> int | np.integer:
    """Stores an in-range python int in the backing type"""
    if not is_fixed_width(backing):
        return value
    return backing.type(value)


def sign_of(value: int) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def exact_quotient(num: int, den: int) -> float:
    """Correctly rounded num / den, where a zero denominator yields the infinity with the sign of num"""
    if den == 0:
        return math.copysign(math.inf, num)
    try:
        return num / den
    except OverflowError:
        # den is positive, so the quotient overflows towards the sign of num
        return math.copysign(math.inf, num)
