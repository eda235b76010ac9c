"""Element types a tensor can hold, with C-like conversion rules."""

from __future__ import annotations

import enum
import math
import struct


class DType(enum.Enum):
    """The seven element types: five integer types and two floating ones."""

    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def bits(self) -> int:
        """Width of one element in bits."""
        return _BITS[self]

    @property
    def signed(self) -> bool:
        """Whether the type holds negative values."""
        return self is not DType.BYTE

    @property
    def accumulator(self) -> DType:
        """The wider type used when summing elements of this type."""
        return DType.DOUBLE if self.is_floating() else DType.LONG

    def is_floating(self) -> bool:
        """Return True for FLOAT and DOUBLE."""
        return self in (DType.FLOAT, DType.DOUBLE)

    def cast(self, value):
        """Convert ``value`` the way a C assignment to this type would.

        Integers wrap around to the type's width, floating values assigned
        to an integer type are truncated toward zero, and FLOAT rounds to
        single precision.
        """
        if self is DType.DOUBLE:
            return float(value)
        if self is DType.FLOAT:
            return _to_float32(float(value))
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"cannot convert {value!r} to {self.value}")
            value = math.trunc(value)
        number = int(value)
        width = self.bits
        number &= (1 << width) - 1
        if self.signed and number >= 1 << (width - 1):
            number -= 1 << width
        return number


_BITS = {
    DType.BYTE: 8,
    DType.CHAR: 8,
    DType.SHORT: 16,
    DType.INT: 32,
    DType.LONG: 64,
    DType.FLOAT: 32,
    DType.DOUBLE: 64,
}


def _to_float32(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)