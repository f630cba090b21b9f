from __future__ import annotations

import fractions
import math
import operator
from typing import Any, Callable, Union, overload

import numpy as np
import pytreeclass as tc

from fractax.core.errors import InexactConversion, InvalidFraction, UndefinedResult, UnsignedNegation
from fractax.core.typing import (
    Backing,
    FloatLike,
    IntegerLike,
    as_backing,
    backings_equal,
    infer_backing,
    integer_bounds,
    is_bounded_signed,
    is_unsigned,
    promote_backings,
)
from fractax.core.utils import exact_integer, exact_quotient, narrow, sign_of, to_component


def backing_of(value: Any) -> Backing | None:
    """Backing type imposed by an operand during promotion, None for weak operands (python scalars)"""
    if isinstance(value, Fraction):
        return value.dtype
    if isinstance(value, np.integer):
        return value.dtype
    return None


class Fraction(tc.TreeClass):
    """
    Exact fraction with numerator ``num`` and denominator ``den``.

    The backing integer type is either given by ``dtype`` (``int`` for arbitrary precision or a numpy
    integer dtype), or inferred as the widest type of the inputs. Python scalars adopt the type of the
    other input, numpy integers impose theirs and two python scalars give ``int``.

    Numerator and denominator are always reduced to canonical form, e.g. ``Fraction(2, 4)`` is stored as
    ``Fraction(1, 2)`` and ``Fraction(5, -2)`` as ``Fraction(-5, 2)``. ``Fraction(1, 0)`` and
    ``Fraction(-1, 0)`` represent plus and minus infinity, ``Fraction(0, 0)`` is invalid. For fixed-width
    signed types the minimum value of the type cannot be used as numerator or denominator.

    Fixed-width components are checked: any value which does not fit the backing type raises an
    OverflowError. Use ``int`` as backing type to avoid overflow altogether.
    """

    num: int | np.integer
    den: int | np.integer

    def __init__(
        self,
        num: IntegerLike | FloatLike,
        den: IntegerLike | FloatLike = 1,
        *,
        dtype: Any = None,
    ):
        backing = infer_backing(backing_of(num), backing_of(den)) if dtype is None else as_backing(dtype)
        n = to_component(num, backing)
        d = to_component(den, backing)
        if n == 0 and d == 0:
            raise InvalidFraction("Invalid fraction: zero over zero")
        # reduce on widened integers, gcd(n, 0) == |n| normalizes infinities to +-1
        g = math.gcd(n, d)
        n, d = n // g, d // g
        if is_bounded_signed(backing):
            low, _ = integer_bounds(backing)
            if n == low or d == low:
                raise InvalidFraction(f"Invalid fraction: cannot use minimum value {low} of {backing}")
        if d < 0:
            n, d = -n, -d
        self.num = narrow(n, backing)
        self.den = narrow(d, backing)

    ## construction #################################
    @classmethod
    def from_integer(cls, x: IntegerLike, dtype: Any = None) -> Fraction:
        return cls(x, 1, dtype=dtype)

    @classmethod
    def from_float(cls, x: FloatLike, dtype: Any = None) -> Fraction:
        """Converts an integral or infinite floating point value. Other floats are not representable."""
        if math.isinf(x):
            return cls(1 if x > 0 else -1, 0, dtype=dtype)
        return cls(exact_integer(x), 1, dtype=dtype)

    @classmethod
    def zero(cls, dtype: Any = int) -> Fraction:
        return cls(0, 1, dtype=dtype)

    @classmethod
    def one(cls, dtype: Any = int) -> Fraction:
        return cls(1, 1, dtype=dtype)

    @classmethod
    def min_value(cls, dtype: Any = int) -> Fraction:
        """Smallest representable fraction: minus infinity, or zero for unsigned backing types"""
        if is_unsigned(as_backing(dtype)):
            return cls.zero(dtype)
        return cls(-1, 0, dtype=dtype)

    @classmethod
    def max_value(cls, dtype: Any = int) -> Fraction:
        return cls(1, 0, dtype=dtype)

    def astype(self, dtype: Any) -> Fraction:
        backing = as_backing(dtype)
        if backings_equal(backing, self.dtype):
            return self
        n, d = self._ints()
        return Fraction(n, d, dtype=backing)

    ## properties ###################################
    @property
    def dtype(self) -> Backing:
        if isinstance(self.num, np.integer):
            return self.num.dtype
        return int

    @property
    def is_infinite(self) -> bool:
        return bool(self.den == 0)

    @property
    def is_zero(self) -> bool:
        return bool(self.num == 0)

    def _ints(self) -> tuple[int, int]:
        return int(self.num), int(self.den)

    def sign(self) -> int:
        return sign_of(int(self.num))

    def value(self) -> float:
        return exact_quotient(*self._ints())

    ## conversion ###################################
    def __float__(self) -> float:
        return self.value()

    def __int__(self) -> int:
        if self.den != 1:
            raise InexactConversion(f"Cannot convert {self} to an integer")
        return int(self.num)

    def __bool__(self) -> bool:
        return bool(self.num != 0)

    def __hash__(self) -> int:
        n, d = self._ints()
        if d == 0:
            return hash(math.copysign(math.inf, n))
        # agrees with the hash of equal ints and floats
        return hash(fractions.Fraction(n, d))

    def __repr__(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"Fraction({self.num}, {self.den})"

    ## unary ########################################
    def __neg__(self) -> Fraction:
        if is_unsigned(self.dtype):
            raise UnsignedNegation(f"Cannot negate {self} with unsigned backing type {self.dtype}")
        n, d = self._ints()
        return Fraction(-n, d, dtype=self.dtype)

    def __pos__(self) -> Fraction:
        n, d = self._ints()
        return Fraction(n, d, dtype=self.dtype)

    def __abs__(self) -> Fraction:
        n, d = self._ints()
        return Fraction(abs(n), d, dtype=self.dtype)

    def reciprocal(self) -> Fraction:
        """Swaps numerator and denominator, zero and infinity are reciprocals of each other"""
        n, d = self._ints()
        return Fraction(d, n, dtype=self.dtype)

    ## binary #######################################
    def _promote(self, other: Any) -> Fraction | None:
        """Integer operands become fractions over the backing type shared with this fraction"""
        if isinstance(other, Fraction):
            return other
        if isinstance(other, IntegerLike):
            return Fraction(other, 1, dtype=infer_backing(self.dtype, backing_of(other)))
        return None

    def _binary_op(
        self,
        other: Any,
        fraction_op: Callable[[Fraction, Fraction], Fraction],
        float_op: Callable[[Any, Any], Any],
        reflected: bool = False,
    ) -> Any:
        if isinstance(other, FloatLike):
            x = _float_like(self, other)
            return float_op(other, x) if reflected else float_op(x, other)
        y = self._promote(other)
        if y is None:
            return NotImplemented
        return fraction_op(y, self) if reflected else fraction_op(self, y)

    @overload
    def __add__(self, other: Fraction | IntegerLike) -> Fraction: ...

    @overload
    def __add__(self, other: FloatLike) -> float: ...

    def __add__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _add, operator.add)

    def __radd__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _add, operator.add, reflected=True)

    @overload
    def __sub__(self, other: Fraction | IntegerLike) -> Fraction: ...

    @overload
    def __sub__(self, other: FloatLike) -> float: ...

    def __sub__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _sub, operator.sub)

    def __rsub__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _sub, operator.sub, reflected=True)

    @overload
    def __mul__(self, other: Fraction | IntegerLike) -> Fraction: ...

    @overload
    def __mul__(self, other: FloatLike) -> float: ...

    def __mul__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _mul, operator.mul)

    def __rmul__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _mul, operator.mul, reflected=True)

    @overload
    def __truediv__(self, other: Fraction | IntegerLike) -> Fraction: ...

    @overload
    def __truediv__(self, other: FloatLike) -> float: ...

    def __truediv__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _div, operator.truediv)

    def __rtruediv__(self, other: Any) -> Union[Fraction, float]:
        return self._binary_op(other, _div, operator.truediv, reflected=True)

    @overload
    def __pow__(self, exponent: IntegerLike) -> Fraction: ...

    @overload
    def __pow__(self, exponent: FloatLike) -> float: ...

    def __pow__(self, exponent: Any) -> Union[Fraction, float]:
        if isinstance(exponent, FloatLike):
            return _float_like(self, exponent) ** exponent
        if isinstance(exponent, IntegerLike):
            return _pow(self, int(exponent))
        return NotImplemented

    ## comparison ###################################
    def _comparable(self, other: Any) -> Fraction | None:
        # ordering widens internally, so integers are compared as python ints
        if isinstance(other, Fraction):
            return other
        if isinstance(other, IntegerLike):
            return Fraction(int(other), 1)
        return None

    def _compare(
        self,
        other: Any,
        fraction_cmp: Callable[[Fraction, Fraction], bool],
    ) -> Any:
        if isinstance(other, FloatLike):
            y = _exact_float(other)
            # nan is unordered and unequal to everything
            if y is None:
                return False
            return fraction_cmp(self, y)
        y = self._comparable(other)
        if y is None:
            return NotImplemented
        return fraction_cmp(self, y)

    def __eq__(self, other: Any) -> bool:
        result = self._compare(other, _eq)
        if result is NotImplemented:
            return False
        return result

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, _lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, lambda x, y: _lt(x, y) or _eq(x, y))

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, lambda x, y: _lt(y, x))

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, lambda x, y: _lt(y, x) or _eq(x, y))


def _exact_float(x: FloatLike) -> Fraction | None:
    """The exact value of a float as an int-backed fraction, or None for nan"""
    if math.isnan(x):
        return None
    if math.isinf(x):
        return Fraction(1 if x > 0 else -1, 0)
    num, den = x.as_integer_ratio()
    return Fraction(num, den)


def _float_like(x: Fraction, like: FloatLike) -> FloatLike:
    """Converts a fraction to the floating point type of the other operand"""
    if isinstance(like, np.floating):
        return like.dtype.type(x.value())
    return x.value()


def _add(x: Fraction, y: Fraction) -> Fraction:
    backing = promote_backings(x.dtype, y.dtype)
    xn, xd = x._ints()
    yn, yd = y._ints()
    if xd == 0 and yd == 0:
        if sign_of(xn) != sign_of(yn):
            raise UndefinedResult(f"Undefined result: {x} + {y}")
        return Fraction(xn, 0, dtype=backing)
    # cross multiply with the reduced factors of the denominators
    g = math.gcd(xd, yd)
    x_factor = yd // g
    y_factor = xd // g
    den = x_factor * y_factor * g
    return Fraction(xn * x_factor + yn * y_factor, den, dtype=backing)


def _sub(x: Fraction, y: Fraction) -> Fraction:
    return _add(x, -y)


def _mul(x: Fraction, y: Fraction) -> Fraction:
    if (x.is_zero and y.is_infinite) or (x.is_infinite and y.is_zero):
        raise UndefinedResult(f"Undefined result: {x} * {y}")
    backing = promote_backings(x.dtype, y.dtype)
    xn, xd = x._ints()
    yn, yd = y._ints()
    # reduce each numerator against the other denominator before multiplying
    a = Fraction(xn, yd, dtype=backing)
    b = Fraction(yn, xd, dtype=backing)
    an, ad = a._ints()
    bn, bd = b._ints()
    return Fraction(an * bn, ad * bd, dtype=backing)


def _div(x: Fraction, y: Fraction) -> Fraction:
    return _mul(x, y.reciprocal())


def _pow(x: Fraction, n: int) -> Fraction:
    xn, xd = x._ints()
    if n >= 0:
        return Fraction(xn**n, xd**n, dtype=x.dtype)
    return Fraction(xd ** (-n), xn ** (-n), dtype=x.dtype)


def _eq(x: Fraction, y: Fraction) -> bool:
    return x._ints() == y._ints()


def _lt(x: Fraction, y: Fraction) -> bool:
    xn, xd = x._ints()
    yn, yd = y._ints()
    if xn == 0 and yn == 0:
        return False
    if xd == 0 and yd == 0:
        return xn == -1 and yn == 1
    x_sign, y_sign = sign_of(xn), sign_of(yn)
    if x_sign != y_sign:
        return x_sign < y_sign
    if xn == yn and xd == yd:
        return False
    # same sign and at most one of them infinite: the quotient is positive.
    # it is computed over arbitrary precision ints so that comparing never overflows
    f = _div(x.astype(int), y.astype(int))
    fn, fd = f._ints()
    return (x_sign == 1) != (fn > fd)
