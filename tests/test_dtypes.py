import math

import pytest

from strided.dtypes import DType


INTEGER_TYPES = [DType.BYTE, DType.CHAR, DType.SHORT, DType.INT, DType.LONG]


@pytest.mark.parametrize("dtype", INTEGER_TYPES)
def test_integer_types_are_not_floating(dtype):
    assert DType.is_floating(dtype) is False
    assert dtype.accumulator is DType.LONG


@pytest.mark.parametrize("dtype", [DType.FLOAT, DType.DOUBLE])
def test_floating_types(dtype):
    assert dtype.is_floating() is True
    assert dtype.accumulator is DType.DOUBLE


@pytest.mark.parametrize("dtype", INTEGER_TYPES)
def test_integer_cast_wraps_modulo_width(dtype):
    period = 1 << dtype.bits
    for value in (-3, 0, 5, 100, 127):
        assert DType.cast(dtype, value + period) == DType.cast(dtype, value)


def test_byte_is_unsigned():
    assert DType.BYTE.cast(-1) == (1 << DType.BYTE.bits) - 1
    assert DType.BYTE.signed is False


def test_char_wraps_to_negative():
    assert DType.CHAR.cast(127) == 127
    assert DType.CHAR.cast(128) == -128


def test_int_truncates_toward_zero():
    assert DType.INT.cast(2.9) == 2
    assert DType.INT.cast(-2.9) == -2


def test_int_cast_rejects_non_finite():
    with pytest.raises(ValueError):
        DType.INT.cast(math.inf)
    with pytest.raises(ValueError):
        DType.LONG.cast(math.nan)


def test_float_cast_is_idempotent_and_close():
    for value in (0.1, 1.0 / 3.0, 12345.678):
        once = DType.FLOAT.cast(value)
        assert DType.FLOAT.cast(once) == once
        assert math.isclose(once, value, rel_tol=1e-6)


def test_float_overflow_becomes_infinite():
    assert math.isinf(DType.FLOAT.cast(1e300))
    assert DType.FLOAT.cast(-1e300) < 0


def test_double_returns_float():
    result = DType.DOUBLE.cast(3)
    assert isinstance(result, float) and result == 3