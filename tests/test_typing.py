import numpy as np
import pytest

from fractax.core.typing import (
    as_backing,
    backings_equal,
    infer_backing,
    is_bounded_signed,
    is_unsigned,
    promote_backings,
)


def test_as_backing_accepts_integer_types():
    assert as_backing(int) is int
    assert as_backing(np.int8) == np.dtype(np.int8)
    assert as_backing("uint16") == np.dtype(np.uint16)
    assert as_backing(np.dtype(np.int64)) == np.dtype(np.int64)


def test_as_backing_rejects_other_types():
    for dtype in (np.float32, bool, complex, "float64"):
        with pytest.raises(TypeError):
            as_backing(dtype)
    with pytest.raises(TypeError):
        as_backing("not a dtype")


def test_backing_kinds():
    assert is_bounded_signed(np.dtype(np.int8))
    assert not is_bounded_signed(int)
    assert not is_bounded_signed(np.dtype(np.uint8))
    assert is_unsigned(np.dtype(np.uint32))
    assert not is_unsigned(int)


def test_arbitrary_precision_is_not_int64():
    """np.dtype("int64") == int holds, but the backing types differ"""
    assert not backings_equal(int, np.dtype(np.int64))
    assert backings_equal(int, int)
    assert backings_equal(np.dtype(np.int8), np.dtype("int8"))


def test_promote_backings():
    assert promote_backings(np.dtype(np.int8), np.dtype(np.uint8)) == np.dtype(np.int16)
    assert promote_backings(np.dtype(np.int8), np.dtype(np.int32)) == np.dtype(np.int32)
    assert promote_backings(np.dtype(np.int8), int) is int
    assert promote_backings(np.dtype(np.int64), np.dtype(np.uint64)) is int


def test_infer_backing():
    assert infer_backing() is int
    assert infer_backing(None, None) is int
    assert infer_backing(None, np.dtype(np.int32)) == np.dtype(np.int32)
    assert infer_backing(np.dtype(np.uint8), None, np.dtype(np.int8)) == np.dtype(np.int16)
