# ruff: noqa: F811
from typing import Any

import numpy as np
from plum import dispatch, overload

from fractax.core.errors import InexactConversion
from fractax.core.fraction import Fraction
from fractax.core.typing import FloatLike, IntegerLike, as_backing, integer_bounds, is_fixed_width


## to_fraction ##################################
@overload
def to_fraction(x: Fraction, dtype: Any = None) -> Fraction:
    if dtype is None:
        return x
    return x.astype(dtype)


@overload
def to_fraction(x: IntegerLike, dtype: Any = None) -> Fraction:
    return Fraction.from_integer(x, dtype=dtype)


@overload
def to_fraction(x: FloatLike, dtype: Any = None) -> Fraction:
    return Fraction.from_float(x, dtype=dtype)


@dispatch
def to_fraction(x, dtype=None):
    """
    Converts ``x`` to an equivalent fraction. Fractions are returned unchanged unless a different
    backing type is requested, integers become ``x/1`` and floats must be integral or infinite.

    Args:
        x: Fraction, integer or floating point value
        dtype (optional): Backing type of the result, inferred from ``x`` if None

    Returns:
        Fraction: Fraction with the same value as x
    """
    del x, dtype
    raise NotImplementedError()


## to_integer ###################################
@overload
def to_integer(x: Fraction, dtype: Any = int) -> int | np.integer:
    if x.den != 1:
        raise InexactConversion(f"Cannot convert {x} to an integer")
    backing = as_backing(dtype)
    value = int(x.num)
    if not is_fixed_width(backing):
        return value
    low, high = integer_bounds(backing)
    if value < low or value > high:
        raise InexactConversion(f"Cannot convert {x} to {backing}")
    return backing.type(value)


@dispatch
def to_integer(x, dtype=int):
    del x, dtype
    raise NotImplementedError()


## to_float #####################################
@overload
def to_float(x: Fraction, dtype: Any = float) -> FloatLike:
    value = x.value()
    if dtype is float:
        return value
    dt = np.dtype(dtype)
    if dt.kind != "f":
        raise TypeError(f"Expected a floating point type, got {dt}")
    return dt.type(value)


@dispatch
def to_float(x, dtype=float):
    del x, dtype
    raise NotImplementedError()


## numerator / denominator ######################
@overload
def numerator(x: Fraction) -> int | np.integer:
    return x.num


@overload
def numerator(x: IntegerLike) -> IntegerLike:
    return x


@dispatch
def numerator(x):
    del x
    raise NotImplementedError()


@overload
def denominator(x: Fraction) -> int | np.integer:
    return x.den


@overload
def denominator(x: np.integer) -> np.integer:
    return x.dtype.type(1)


@overload
def denominator(x: int) -> int:
    return 1


@dispatch
def denominator(x):
    del x
    raise NotImplementedError()
