import math

import jax
import numpy as np
import pytest

from fractax import Fraction, InexactConversion, InvalidFraction, to_fraction


def test_inferred_backing_type_from_numpy_operand():
    """Python scalars adopt the numpy integer type of the other component"""
    f = Fraction(True, np.uint8(15))
    assert f == Fraction(1, 15, dtype=np.uint8)
    assert f.dtype == np.dtype(np.uint8)
    assert isinstance(f.num, np.uint8)
    assert isinstance(f.den, np.uint8)


def test_python_scalars_give_arbitrary_precision():
    f = Fraction(10**30, 3)
    assert f.dtype is int
    assert f.num == 10**30
    assert f.den == 3


def test_mixed_numpy_components_promote():
    f = Fraction(np.int8(3), np.uint8(6))
    assert f.dtype == np.dtype(np.int16)
    assert f == Fraction(1, 2)


def test_zero_of_unsigned_type_is_allowed():
    """Zero is the minimum of unsigned types, but only signed minimum values are rejected"""
    f = Fraction(np.uint8(0), 5)
    assert f == Fraction(0, 1)
    assert f.den == 1


def test_reduction():
    assert Fraction(2, 4) == Fraction(1, 2)
    assert Fraction(2, 4).num == 1
    assert Fraction(2, 4).den == 2
    assert Fraction(-6, 9) == Fraction(-2, 3)
    assert Fraction(0, 5) == Fraction(0, 1)


def test_sign_normalization():
    f = Fraction(5, -2)
    assert f == Fraction(-5, 2)
    assert f.num < 0
    assert f.den > 0
    assert Fraction(-4, -8) == Fraction(1, 2)


def test_infinities():
    assert Fraction(2, 0) == Fraction(1, 0)
    assert Fraction(-2, 0) == Fraction(-1, 0)
    assert Fraction(3, 0).num == 1
    assert Fraction(-3, 0).num == -1
    assert Fraction(7, 0).is_infinite
    assert not Fraction(7, 1).is_infinite


def test_zero_over_zero_is_invalid():
    with pytest.raises(InvalidFraction):
        Fraction(0, 0)
    with pytest.raises(InvalidFraction):
        Fraction(np.int8(0), np.int8(0))


def test_minimum_of_signed_type_is_invalid():
    with pytest.raises(InvalidFraction):
        Fraction(np.int8(-128), np.int8(5))
    with pytest.raises(InvalidFraction):
        Fraction(np.int8(5), np.int8(-128))
    with pytest.raises(InvalidFraction):
        Fraction(-128, 1, dtype=np.int8)


def test_minimum_value_checked_after_reduction():
    """-128/-128 reduces to 1/1, while -128/2 reduces to -64/1"""
    assert Fraction(np.int8(-128), np.int8(-128)) == Fraction(1, 1)
    assert Fraction(np.int8(-128), np.int8(2)) == Fraction(-64, 1)


def test_arbitrary_precision_has_no_minimum():
    f = Fraction(-(2**63), 1)
    assert f.num == -(2**63)


def test_components_out_of_range():
    with pytest.raises(OverflowError):
        Fraction(200, 1, dtype=np.int8)
    with pytest.raises(OverflowError):
        Fraction(-1, 2, dtype=np.uint8)
    with pytest.raises(OverflowError):
        Fraction(256, 2, dtype=np.uint8)


def test_explicit_backing_type():
    f = Fraction(1, 2, dtype=np.uint8)
    assert f == Fraction(np.uint8(1), np.uint8(2))
    assert isinstance(f.num, np.uint8)
    assert Fraction(1.0, 2.0, dtype=int) == Fraction(1, 2)
    assert Fraction(1, 2, dtype="int32").dtype == np.dtype(np.int32)


def test_invalid_backing_type():
    with pytest.raises(TypeError):
        Fraction(1, 2, dtype=np.float32)
    with pytest.raises(TypeError):
        Fraction(1, 2, dtype=bool)


def test_non_integral_components():
    with pytest.raises(InexactConversion):
        Fraction(0.5)
    with pytest.raises(InexactConversion):
        Fraction(1, math.nan)
    with pytest.raises(TypeError):
        Fraction("1", 2)


def test_single_argument_constructors():
    assert Fraction(0) == Fraction(0, 1)
    assert Fraction(2) == Fraction(2, 1)
    assert Fraction(2.0) == Fraction(2, 1)
    assert Fraction.from_float(2.0, dtype=np.uint8) == Fraction(np.uint8(2), np.uint8(1))
    assert Fraction.from_float(2.0, dtype=np.uint8).dtype == np.dtype(np.uint8)
    assert Fraction.from_float(math.inf) == Fraction(1, 0)
    assert Fraction.from_float(-math.inf) == Fraction(-1, 0)
    assert Fraction.from_integer(np.int16(4)).dtype == np.dtype(np.int16)


def test_astype():
    f = Fraction(1, 2)
    assert f.astype(int) is f
    assert f.astype(np.uint8).dtype == np.dtype(np.uint8)
    assert f.astype(np.uint8) == f
    assert to_fraction(f, dtype=np.uint8) == Fraction(np.uint8(1), np.uint8(2))
    with pytest.raises(OverflowError):
        Fraction(-1, 2).astype(np.uint8)


def test_canonical_form_on_grid():
    for backing in (int, np.int8, np.int64):
        for n in range(-12, 13):
            for d in range(-12, 13):
                if n == 0 and d == 0:
                    continue
                f = Fraction(n, d, dtype=backing)
                num, den = int(f.num), int(f.den)
                assert den >= 0
                if den == 0:
                    assert abs(num) == 1
                else:
                    assert math.gcd(num, den) == 1
                    assert num * d == n * den


def test_representation():
    assert repr(Fraction(2, 4)) == "Fraction(1, 2)"
    assert str(Fraction(-3, 0, dtype=np.int16)) == "Fraction(-1, 0)"
    assert str(Fraction(np.uint8(4))) == "Fraction(4, 1)"


def test_immutable():
    f = Fraction(1, 2)
    with pytest.raises(AttributeError):
        f.num = 3
    assert f == Fraction(1, 2)


def test_pytree_leaves():
    """Fractions flatten into their numerator and denominator"""
    assert jax.tree.leaves(Fraction(2, 4)) == [1, 2]
    assert jax.tree.leaves([Fraction(1, 3), Fraction(-1, 0)]) == [1, 3, -1, 0]


def test_hash_matches_equal_numbers():
    assert hash(Fraction(2)) == hash(2)
    assert hash(Fraction(1, 2)) == hash(0.5)
    assert hash(Fraction(1, 0)) == hash(math.inf)
    assert hash(Fraction(1, 2, dtype=np.int8)) == hash(Fraction(2, 4))
    assert len({Fraction(1, 2), Fraction(2, 4), Fraction(1, 2, dtype=np.uint8)}) == 1


@pytest.mark.parametrize(
    "value", [0.5, 1 / 3, 0.1, -2.0, 3.0, 2.0**-40, np.float32(0.1), np.float16(-1.5), math.inf, -math.inf]
)
def test_hash_agrees_with_float_equality(value):
    """A fraction equals a float only when it has exactly the float's value, so equal objects hash alike"""
    num, den = float(value).as_integer_ratio() if math.isfinite(value) else (int(math.copysign(1, value)), 0)
    candidates = [Fraction(num, den), Fraction(1, 3), Fraction(-1, 0), Fraction(1, 10)]
    for f in candidates:
        if f == value:
            assert hash(f) == hash(value)
            assert value in {f}
    assert Fraction(num, den) == value


def test_fraction_is_not_equal_to_rounded_float():
    assert Fraction(1, 3) != 1 / 3
    assert Fraction(1, 10) != 0.1
    assert 1 / 3 not in {Fraction(1, 3)}
    assert Fraction(1, 3) < 1 / 3 or Fraction(1, 3) > 1 / 3


def test_truthiness():
    assert Fraction(1, 2)
    assert Fraction(-1, 0)
    assert not Fraction(0, 3)
    assert not Fraction(np.uint8(0))


def test_special_values():
    assert Fraction.one(np.uint8) == Fraction(np.uint8(1))
    assert Fraction.one(np.uint8).dtype == np.dtype(np.uint8)
    assert Fraction.one() == Fraction(1)
    assert Fraction.zero(np.uint8) == Fraction(np.uint8(0))
    assert Fraction.zero() == Fraction(0)
    assert Fraction.min_value(int) == Fraction(-1, 0)
    assert Fraction.min_value(np.int32) == Fraction(-1, 0)
    assert Fraction.min_value(np.uint8) == Fraction(np.uint8(0))
    assert Fraction.max_value(int) == Fraction(1, 0)
    assert Fraction.max_value(np.uint8) == Fraction(np.uint8(1), np.uint8(0))
