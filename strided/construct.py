"""Building tensors: constant fills, ranges, reshaping and concatenation."""

from __future__ import annotations

import math

from .dtypes import DType
from .pointwise import _c_div, _c_pow, fill
from .tensor import Tensor, TensorError


def _require_floating(dtype: DType, name: str) -> None:
    if not dtype.is_floating():
        raise TypeError(f"{name} requires a floating-point element type")


def zeros(size, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return a tensor of the given size filled with zeros."""
    return fill(Tensor(size, dtype), 0)


def ones(size, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return a tensor of the given size filled with ones."""
    return fill(Tensor(size, dtype), 1)


def arange(xmin, xmax, step=1, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return the vector ``xmin, xmin + step, ...`` up to and including ``xmax``.

    The element count is ``(xmax - xmin) / step + 1`` truncated, computed
    in the element type (so integer types divide with truncation).
    """
    cast = dtype.cast
    xmin = cast(xmin)
    xmax = cast(xmax)
    step = cast(step)
    if not (step > 0 or step < 0):
        raise TensorError("step must be a non-null number")
    if not ((step > 0 and xmax >= xmin) or (step < 0 and xmax <= xmin)):
        raise TensorError("upper bound and larger bound incoherent with step sign")
    floating = dtype.is_floating()
    quotient = cast(_c_div(cast(xmax - xmin), step, floating))
    count = cast(quotient + 1)
    if not math.isfinite(count):
        raise TensorError("invalid range size")
    length = int(math.trunc(count))
    result = Tensor((length,), dtype)
    values = []
    i = cast(0)
    for _ in range(length):
        values.append(cast(xmin + cast(i * step)))
        i = cast(i + 1)
    return result.assign(values)


def _check_points(a, b, n: int) -> None:
    if not (n > 1 or (n == 1 and a == b)):
        raise TensorError("invalid number of points")
    if not a <= b:
        raise TensorError("end range should be greater than start range")


def _spaced(a, b, n: int, cast) -> list:
    """Return the ``n`` evenly spaced exponents or values from ``a`` to ``b``."""
    if n == 1:
        return [a]
    width = cast(b - a)
    gaps = cast(n - 1)
    points = []
    i = cast(0)
    for _ in range(n):
        points.append(cast(a + cast(_c_div(cast(i * width), gaps, True))))
        i = cast(i + 1)
    return points


def linspace(a, b, n: int = 100, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return ``n`` evenly spaced values from ``a`` to ``b`` inclusive."""
    _require_floating(dtype, "linspace")
    cast = dtype.cast
    a = cast(a)
    b = cast(b)
    _check_points(a, b, n)
    return Tensor((n,), dtype).assign(_spaced(a, b, n, cast))


def logspace(a, b, n: int = 100, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return ``n`` values ``10 ** x`` for ``x`` evenly spaced from ``a`` to ``b``."""
    _require_floating(dtype, "logspace")
    cast = dtype.cast
    a = cast(a)
    b = cast(b)
    _check_points(a, b, n)
    return Tensor((n,), dtype).assign(
        _c_pow(10.0, x) for x in _spaced(a, b, n, cast)
    )


def reshape(t: Tensor, size) -> Tensor:
    """Return a new tensor of ``size`` holding the elements of ``t`` in order."""
    return Tensor(size, t.dtype).copy_from(t)


def cat(ta: Tensor, tb: Tensor, dimension: int) -> Tensor:
    """Concatenate ``ta`` and ``tb`` along ``dimension``.

    Missing trailing dimensions count as size 1, so vectors can be joined
    side by side along a new dimension.
    """
    if dimension < 0:
        raise TensorError("invalid dimension")
    ndim = max(ta.dim(), tb.dim(), dimension + 1)

    def extent(t: Tensor, d: int) -> int:
        return t.size[d] if d < t.dim() else 1

    size = []
    for d in range(ndim):
        a, b = extent(ta, d), extent(tb, d)
        if d == dimension:
            size.append(a + b)
        elif a != b:
            raise TensorError("inconsistent tensor sizes")
        else:
            size.append(a)
    result = Tensor(size, ta.dtype)
    len_a = extent(ta, dimension)
    len_b = extent(tb, dimension)
    if len_a > 0:
        result.narrow(dimension, 0, len_a).copy_from(ta)
    if len_b > 0:
        result.narrow(dimension, len_a, len_b).copy_from(tb)
    return result


def numel(t: Tensor) -> int:
    """Return the number of elements of ``t``."""
    return t.nelement()