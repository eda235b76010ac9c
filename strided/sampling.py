"""Filling tensors with random numbers and drawing samples.

A ``generator`` is a :class:`random.Random` instance (or anything offering
``random``, ``getrandbits``, ``gauss``, ``expovariate`` and
``lognormvariate``); ``None`` means a shared module-level generator.
Fill functions modify their tensor in place and return it.
"""

from __future__ import annotations

import math
import random

from .dtypes import DType
from .pointwise import _c_div
from .tensor import Tensor, TensorError

_shared = random.Random()

_RANDOM_MODULUS = {
    DType.BYTE: 1 << 8,
    DType.CHAR: 1 << 7,
    DType.SHORT: 1 << 15,
    DType.INT: 1 << 31,
    DType.LONG: 1 << 63,
    DType.FLOAT: (1 << 24) + 1,
    DType.DOUBLE: (1 << 53) + 1,
}


def _rng(generator):
    return _shared if generator is None else generator


def _require_floating(t: Tensor, name: str) -> None:
    if not t.dtype.is_floating():
        raise TypeError(f"{name} requires a floating-point tensor")


def _fill_with(t: Tensor, draw) -> Tensor:
    return t.assign(draw() for _ in range(t.nelement()))


def _random_word(rng) -> int:
    return rng.getrandbits(32)


def random_fill(t: Tensor, generator=None) -> Tensor:
    """Fill ``t`` with random 32-bit integers reduced into the type's range."""
    rng = _rng(generator)
    modulus = _RANDOM_MODULUS[t.dtype]
    return _fill_with(t, lambda: _random_word(rng) % modulus)


def geometric(t: Tensor, generator=None, p: float = 0.5) -> Tensor:
    """Fill ``t`` with the number of trials up to the first success."""
    if not 0 < p <= 1:
        raise ValueError("p must lie in (0, 1]")
    rng = _rng(generator)
    if p == 1:
        return _fill_with(t, lambda: 1)
    log_q = math.log1p(-p)
    return _fill_with(t, lambda: int(math.log1p(-rng.random()) / log_q) + 1)


def bernoulli(t: Tensor, generator=None, p: float = 0.5) -> Tensor:
    """Fill ``t`` with 1 with probability ``p`` and 0 otherwise."""
    if not 0 <= p <= 1:
        raise ValueError("p must lie in [0, 1]")
    rng = _rng(generator)
    return _fill_with(t, lambda: 1 if rng.random() < p else 0)


def uniform(t: Tensor, generator=None, a: float = 0.0, b: float = 1.0) -> Tensor:
    """Fill ``t`` with values drawn uniformly from ``[a, b)``."""
    _require_floating(t, "uniform")
    rng = _rng(generator)
    return _fill_with(t, lambda: a + (b - a) * rng.random())


def normal(t: Tensor, generator=None, mean: float = 0.0, stdv: float = 1.0) -> Tensor:
    """Fill ``t`` with normally distributed values."""
    _require_floating(t, "normal")
    rng = _rng(generator)
    return _fill_with(t, lambda: rng.gauss(mean, stdv))


def exponential(t: Tensor, generator=None, lambd: float = 1.0) -> Tensor:
    """Fill ``t`` with exponentially distributed values of rate ``lambd``."""
    _require_floating(t, "exponential")
    if not lambd > 0:
        raise ValueError("lambd must be positive")
    rng = _rng(generator)
    return _fill_with(t, lambda: rng.expovariate(lambd))


def cauchy(t: Tensor, generator=None, median: float = 0.0, sigma: float = 1.0) -> Tensor:
    """Fill ``t`` with Cauchy distributed values."""
    _require_floating(t, "cauchy")
    rng = _rng(generator)
    return _fill_with(
        t, lambda: median + sigma * math.tan(math.pi * (rng.random() - 0.5))
    )


def log_normal(t: Tensor, generator=None, mean: float = 1.0, stdv: float = 2.0) -> Tensor:
    """Fill ``t`` with ``exp(x)`` for normal ``x`` of the given mean and deviation."""
    _require_floating(t, "log_normal")
    if not stdv > 0:
        raise ValueError("stdv must be positive")
    rng = _rng(generator)
    return _fill_with(t, lambda: rng.lognormvariate(mean, stdv))


def _search(cum: list, u: float) -> int:
    left, right = 0, len(cum)
    while right - left > 0:
        mid = left + (right - left) // 2
        if cum[mid] < u:
            left = mid + 1
        else:
            right = mid
    return left


def _draw_row(rng, row: list, n_sample: int, with_replacement: bool, cast) -> list:
    cum = []
    total = cast(0)
    for p in row:
        total = cast(total + p)
        cum.append(total)
    if not total > 0:
        raise TensorError(
            "invalid multinomial distribution (sum of probabilities <= 0)"
        )
    cum = [cast(_c_div(c, total, True)) for c in cum]
    samples = []
    for _ in range(n_sample):
        idx = _search(cum, rng.random())
        samples.append(idx)
        if with_replacement or idx >= len(cum):
            continue
        below = cum[idx - 1] if idx else cast(0)
        diff = cast(cum[idx] - below)
        remaining = cast(1.0 - diff)
        cum = [
            cast(_c_div(cast(c - diff) if k >= idx else c, remaining, True))
            for k, c in enumerate(cum)
        ]
    return samples


def multinomial(generator, prob_dist: Tensor, n_sample: int, with_replacement: bool = False) -> Tensor:
    """Draw category indices from each row of ``prob_dist``.

    ``prob_dist`` is a vector or a matrix of non-negative weights, one
    distribution per row; rows need not sum to one. Returns a LONG tensor
    of zero-based indices, shaped ``(n_sample,)`` for a vector and
    ``(rows, n_sample)`` for a matrix.
    """
    _require_floating(prob_dist, "multinomial")
    if prob_dist.dim() == 1:
        rows = [prob_dist.tolist()]
    elif prob_dist.dim() == 2:
        rows = prob_dist.tolist()
    else:
        raise TensorError("vector or matrix expected")
    n_categories = prob_dist.size[-1]
    if not n_sample > 0:
        raise TensorError("cannot sample n_sample < 0 samples")
    if not with_replacement and n_sample > n_categories:
        raise TensorError(
            "cannot sample n_sample > prob_dist:size(1) samples without replacement"
        )
    rng = _rng(generator)
    cast = prob_dist.dtype.cast
    drawn = [_draw_row(rng, row, n_sample, with_replacement, cast) for row in rows]
    if prob_dist.dim() == 1:
        return Tensor((n_sample,), DType.LONG).assign(drawn[0])
    result = Tensor((len(rows), n_sample), DType.LONG)
    return result.assign(i for samples in drawn for i in samples)


def rand(generator, size, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return a tensor of ``size`` with values uniform in ``[0, 1)``."""
    return uniform(Tensor(size, dtype), generator, 0, 1)


def randn(generator, size, dtype: DType = DType.DOUBLE) -> Tensor:
    """Return a tensor of ``size`` with standard normal values."""
    return normal(Tensor(size, dtype), generator, 0, 1)


def randperm(generator, n: int, dtype: DType = DType.LONG) -> Tensor:
    """Return a random permutation of ``0 .. n-1``."""
    if not n > 0:
        raise TensorError("must be strictly positive")
    rng = _rng(generator)
    values = list(range(n))
    for i in range(n - 1):
        z = _random_word(rng) % (n - i)
        values[i], values[z + i] = values[z + i], values[i]
    return Tensor((n,), dtype).assign(values)