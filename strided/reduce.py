"""Reductions over whole tensors and along one dimension.

Functions working along a dimension return a new tensor whose size along
that dimension is 1 (or, for cumulative ones, the input's shape).
Sums are accumulated in the wider accumulator type of the element type.
"""

from __future__ import annotations

import math

from .dimapply import dim_lines
from .dtypes import DType
from .pointwise import _c_div, _c_pow
from .tensor import Tensor, TensorError


def _require_floating(t: Tensor, name: str) -> None:
    if not t.dtype.is_floating():
        raise TypeError(f"{name} requires a floating-point tensor")


def _check_dim(t: Tensor, dimension: int, message: str) -> None:
    if not 0 <= dimension < t.dim():
        raise TensorError(message)


def _reduced(t: Tensor, dimension: int, dtype: DType | None = None) -> Tensor:
    size = list(t.size)
    size[dimension] = 1
    return Tensor(size, dtype or t.dtype)


def _fdiv(a, b) -> float:
    return _c_div(a, b, True)


# ---------------------------------------------------------------- whole tensor


def _nonempty_values(t: Tensor) -> list:
    if t.dim() == 0:
        raise TensorError("tensor must have one dimension")
    values = list(t.values())
    if not values:
        raise TensorError("tensor must have one dimension")
    return values


def minall(t: Tensor):
    """Return the smallest element."""
    return min(_nonempty_values(t))


def maxall(t: Tensor):
    """Return the largest element."""
    return max(_nonempty_values(t))


def sumall(t: Tensor):
    """Return the sum of all elements in the accumulator type."""
    acc = t.dtype.accumulator
    if acc.is_floating():
        total = 0.0
        for v in t.values():
            total += v
        return total
    return acc.cast(sum(t.values()))


def prodall(t: Tensor):
    """Return the product of all elements in the accumulator type."""
    acc = t.dtype.accumulator
    if acc.is_floating():
        total = 1.0
        for v in t.values():
            total *= v
        return total
    return acc.cast(math.prod(t.values()))


# ---------------------------------------------------------------- along a dimension


def _extreme_dim(t: Tensor, dimension: int, better) -> tuple[Tensor, Tensor]:
    _check_dim(t, dimension, "dimension out of range")
    values = _reduced(t, dimension)
    indices = _reduced(t, dimension, DType.LONG)
    for line, vline, iline in dim_lines(dimension, t, values, indices):
        best_index = 0
        best = line[0]
        for i in range(1, len(line)):
            if better(line[i], best):
                best_index = i
                best = line[i]
        vline[0] = best
        iline[0] = best_index
    return values, indices


def max_dim(t: Tensor, dimension: int) -> tuple[Tensor, Tensor]:
    """Return the maxima along ``dimension`` and their zero-based indices."""
    return _extreme_dim(t, dimension, lambda a, b: a > b)


def min_dim(t: Tensor, dimension: int) -> tuple[Tensor, Tensor]:
    """Return the minima along ``dimension`` and their zero-based indices."""
    return _extreme_dim(t, dimension, lambda a, b: a < b)


def _accumulate(t: Tensor, dimension: int, start, step, cumulative: bool) -> Tensor:
    _check_dim(t, dimension, "dimension out of range")
    acc_cast = t.dtype.accumulator.cast
    out = Tensor(t.size, t.dtype) if cumulative else _reduced(t, dimension)
    for line, rline in dim_lines(dimension, t, out):
        total = acc_cast(start)
        for i, value in enumerate(line):
            total = acc_cast(step(total, value))
            if cumulative:
                rline[i] = total
        if not cumulative:
            rline[0] = total
    return out


def sum_dim(t: Tensor, dimension: int) -> Tensor:
    """Return the sums along ``dimension``."""
    return _accumulate(t, dimension, 0, lambda a, b: a + b, False)


def prod_dim(t: Tensor, dimension: int) -> Tensor:
    """Return the products along ``dimension``."""
    return _accumulate(t, dimension, 1, lambda a, b: a * b, False)


def cumsum(t: Tensor, dimension: int) -> Tensor:
    """Return the running sums along ``dimension``."""
    return _accumulate(t, dimension, 0, lambda a, b: a + b, True)


def cumprod(t: Tensor, dimension: int) -> Tensor:
    """Return the running products along ``dimension``."""
    return _accumulate(t, dimension, 1, lambda a, b: a * b, True)


def mean(t: Tensor, dimension: int) -> Tensor:
    """Return the means along ``dimension``."""
    _require_floating(t, "mean")
    _check_dim(t, dimension, "invalid dimension")
    cast = t.dtype.cast
    out = _reduced(t, dimension)
    for line, rline in dim_lines(dimension, t, out):
        total = 0.0
        for value in line:
            total += value
        rline[0] = _fdiv(cast(total), len(line))
    return out


def _variance(line, flag, cast) -> float:
    n = len(line)
    total = 0.0
    total2 = 0.0
    for z in line:
        total += z
        total2 += cast(z * z)
    total = _fdiv(total, n)
    if flag:
        total2 = _fdiv(total2, n)
        total2 -= total * total
    else:
        total2 = _fdiv(total2, n - 1)
        ratio = cast(_fdiv(cast(n), cast(n - 1)))
        total2 -= ratio * total * total
    return 0.0 if total2 < 0 else total2


def _spread(t: Tensor, dimension: int, flag, name: str, finish) -> Tensor:
    _require_floating(t, name)
    _check_dim(t, dimension, "invalid dimension")
    cast = t.dtype.cast
    out = _reduced(t, dimension)
    for line, rline in dim_lines(dimension, t, out):
        rline[0] = finish(_variance(line, flag, cast))
    return out


def std(t: Tensor, dimension: int, flag=False) -> Tensor:
    """Return standard deviations along ``dimension``.

    With ``flag`` true the biased estimate (divide by n) is used,
    otherwise the unbiased one (divide by n - 1).
    """
    return _spread(t, dimension, flag, "std", math.sqrt)


def var(t: Tensor, dimension: int, flag=False) -> Tensor:
    """Return variances along ``dimension``; ``flag`` selects the biased estimate."""
    return _spread(t, dimension, flag, "var", lambda v: v)


def norm(t: Tensor, value, dimension: int) -> Tensor:
    """Return the ``value``-norms along ``dimension``; norm 0 counts non-zeros."""
    _require_floating(t, "norm")
    _check_dim(t, dimension, "invalid dimension")
    value = t.dtype.cast(value)
    out = _reduced(t, dimension)
    for line, rline in dim_lines(dimension, t, out):
        if value == 0:
            rline[0] = sum(1 for x in line if x != 0.0)
        else:
            total = 0.0
            for x in line:
                total += _c_pow(math.fabs(x), value)
            rline[0] = _c_pow(total, 1.0 / value)
    return out


def normall(t: Tensor, value) -> float:
    """Return the ``value``-norm of all elements; norm 0 counts non-zeros."""
    _require_floating(t, "normall")
    value = t.dtype.cast(value)
    if value == 0:
        return float(sum(1 for x in t.values() if x != 0.0))
    total = 0.0
    if value == 1:
        for x in t.values():
            total += math.fabs(x)
        return total
    if value == 2:
        for x in t.values():
            total += x * x
        return math.sqrt(total)
    for x in t.values():
        total += _c_pow(math.fabs(x), value)
    return _c_pow(total, 1.0 / value)


def renorm(src: Tensor, value, dimension: int, maxnorm) -> Tensor:
    """Return ``src`` with each slice along ``dimension`` scaled so that its
    ``value``-norm does not exceed ``maxnorm``."""
    _require_floating(src, "renorm")
    _check_dim(src, dimension, "invalid dimension")
    cast = src.dtype.cast
    value = cast(value)
    maxnorm = cast(maxnorm)
    if not value > 0:
        raise TensorError("non-positive-norm not supported")
    if src.dim() <= 1:
        raise TensorError("need at least 2 dimensions")
    res = Tensor(src.size, src.dtype)
    for i in range(src.size[dimension]):
        row_s = src.select(dimension, i)
        row_r = res.select(dimension, i)
        row_norm = cast(0)
        for x in row_s.values():
            if value == 1:
                row_norm = cast(row_norm + math.fabs(x))
            elif value == 2:
                row_norm = cast(row_norm + x * x)
            else:
                row_norm = cast(row_norm + _c_pow(math.fabs(x), value))
        row_norm = cast(_c_pow(row_norm, cast(1 / value)))
        if row_norm > maxnorm:
            factor = cast(maxnorm / (row_norm + 1e-7))
            row_r.assign(x * factor for x in row_s.values())
        else:
            row_r.copy_from(row_s)
    return res


def dist(a: Tensor, b: Tensor, value) -> float:
    """Return the ``value``-norm of ``a - b``."""
    _require_floating(a, "dist")
    cast = a.dtype.cast
    value = cast(value)
    total = cast(0)
    for pa, pb in zip_pairs(a, b):
        total = cast(total + _c_pow(math.fabs(cast(pa - pb)), value))
    return _c_pow(total, 1.0 / value)


def zip_pairs(a: Tensor, b: Tensor):
    from .tensor import zip_positions

    return ((a.storage[i], b.storage[j]) for i, j in zip_positions(a, b))


def meanall(t: Tensor) -> float:
    """Return the mean of all elements."""
    _require_floating(t, "meanall")
    if t.dim() == 0:
        raise TensorError("empty Tensor")
    return _fdiv(sumall(t), t.nelement())


def varall(t: Tensor) -> float:
    """Return the unbiased variance of all elements."""
    average = meanall(t)
    total = 0.0
    for x in t.values():
        total += (x - average) * (x - average)
    return _fdiv(total, t.nelement() - 1)


def stdall(t: Tensor) -> float:
    """Return the unbiased standard deviation of all elements."""
    v = varall(t)
    return math.sqrt(v) if v >= 0 else math.nan


def histc(t: Tensor, nbins: int, minvalue=0, maxvalue=0) -> Tensor:
    """Count elements into ``nbins`` equal bins between the bounds.

    Equal bounds mean the tensor's own minimum and maximum; if those are
    equal too, the range is widened by one on each side.
    """
    _require_floating(t, "histc")
    cast = t.dtype.cast
    hist = Tensor((nbins,), t.dtype)
    low = cast(minvalue)
    high = cast(maxvalue)
    if low == high:
        low = minall(t)
        high = maxall(t)
    if low == high:
        low = cast(low - 1)
        high = cast(high + 1)
    bins = cast(nbins - 1e-6)
    shift = cast(-low)
    width = cast(high - low)
    counts = [0] * nbins
    for x in t.values():
        v = cast(x + shift)
        v = cast(_fdiv(v, width))
        v = cast(v * bins)
        v = cast(math.floor(v)) if math.isfinite(v) else v
        v = cast(v + 1)
        if 1 <= v <= nbins:
            counts[int(v) - 1] += 1
    return hist.assign(counts)


def _logical(t: Tensor, name: str, start: int, combine) -> int:
    if t.dtype is not DType.BYTE:
        raise TypeError(f"{name} requires a byte tensor")
    if t.dim() == 0:
        raise TensorError("empty Tensor")
    result = start
    for x in t.values():
        result = combine(result, x)
    return result


def logicalall(t: Tensor) -> int:
    """Bitwise AND of all elements of a byte tensor, starting from 1."""
    return _logical(t, "logicalall", 1, lambda a, b: a & b)


def logicalany(t: Tensor) -> int:
    """Bitwise OR of all elements of a byte tensor, starting from 0."""
    return _logical(t, "logicalany", 0, lambda a, b: a | b)