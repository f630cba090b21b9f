# ruff: noqa: F811
from typing import Union

import numpy as np
from plum import dispatch, overload

from fractax.core.errors import InexactConversion
from fractax.core.fraction import Fraction, backing_of
from fractax.core.typing import FloatLike, IntegerLike, infer_backing
from fractax.functional.conversion import to_fraction

NumberLike = Union[Fraction, IntegerLike, FloatLike]


## divide #######################################
@overload
def divide(x: NumberLike, y: NumberLike) -> Fraction:
    # both operands are converted, floats are not promoted here
    dtype = infer_backing(backing_of(x), backing_of(y))
    return to_fraction(x, dtype=dtype) / to_fraction(y, dtype=dtype)


@dispatch
def divide(x, y):
    """
    Fraction equivalent to dividing ``x`` by ``y``. Both operands must be convertible to fractions, e.g.
    ``divide(Fraction(5, 2), 3) == Fraction(5, 6)``.
    """
    del x, y
    raise NotImplementedError()


## reciprocal ###################################
@overload
def reciprocal(x: Fraction) -> Fraction:
    return x.reciprocal()


@overload
def reciprocal(x: IntegerLike | FloatLike) -> Fraction:
    return to_fraction(x).reciprocal()


@dispatch
def reciprocal(x):
    del x
    raise NotImplementedError()


## sign #########################################
@overload
def sign(x: Fraction) -> int:
    return x.sign()


@overload
def sign(x: IntegerLike) -> int:
    return to_fraction(x).sign()


@overload
def sign(x: FloatLike) -> int:
    if np.isnan(x):
        raise InexactConversion(f"Cannot take the sign of {x}")
    return int(np.sign(x))


@dispatch
def sign(x):
    del x
    raise NotImplementedError()
