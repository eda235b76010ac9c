"""Walking a tensor one line at a time along a chosen dimension."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from .tensor import Tensor, TensorError


class Line:
    """The elements of a tensor along one dimension, read and written in place."""

    __slots__ = ("storage", "start", "stride", "length", "_cast")

    def __init__(self, tensor: Tensor, start: int, dimension: int):
        self.storage = tensor.storage
        self.start = start
        self.stride = tensor.stride[dimension]
        self.length = tensor.size[dimension]
        self._cast = tensor.dtype.cast

    def _position(self, i: int) -> int:
        if not 0 <= i < self.length:
            raise IndexError("line index out of range")
        return self.start + i * self.stride

    def __getitem__(self, i: int):
        return self.storage[self._position(i)]

    def __setitem__(self, i: int, value) -> None:
        self.storage[self._position(i)] = self._cast(value)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator:
        storage = self.storage
        for i in range(self.length):
            yield storage[self.start + i * self.stride]

    def __repr__(self) -> str:
        return f"Line({list(self)!r})"


def dim_lines(dimension: int, *args: Tensor) -> Iterator[tuple[Line, ...]]:
    """Yield, for every position outside ``dimension``, one line per tensor.

    All tensors must have the same number of dimensions and the same sizes
    except along ``dimension``. The first dimension varies fastest.
    """
    if not args:
        raise TensorError("at least one tensor expected")
    first = args[0]
    ndim = first.dim()
    if not 0 <= dimension < ndim:
        raise TensorError("invalid dimension")
    for other in args[1:]:
        if other.dim() != ndim:
            raise TensorError("inconsistent tensor sizes")
        for d, (a, b) in enumerate(zip(first.size, other.size)):
            if d != dimension and a != b:
                raise TensorError("inconsistent tensor sizes")
    return _walk(dimension, args)


def _walk(dimension: int, tensors: tuple[Tensor, ...]) -> Iterator[tuple[Line, ...]]:
    first = tensors[0]
    outer = [d for d in range(first.dim()) if d != dimension]
    ranges = [range(first.size[d]) for d in reversed(outer)]
    for reversed_index in itertools.product(*ranges):
        index = tuple(reversed(reversed_index))
        yield tuple(
            Line(
                t,
                t.offset + sum(i * t.stride[d] for i, d in zip(index, outer)),
                dimension,
            )
            for t in tensors
        )