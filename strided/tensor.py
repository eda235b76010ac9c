"""Strided n-dimensional tensors over a shared flat storage."""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterable, Iterator, Sequence

from .dtypes import DType


class TensorError(ValueError):
    """Raised on invalid shapes, dimensions or indices."""


def _check_size(size) -> tuple[int, ...]:
    if isinstance(size, int):
        size = (size,)
    size = tuple(int(s) for s in size)
    if any(s < 0 for s in size):
        raise TensorError(f"invalid size {size}")
    return size


def _contiguous_strides(size: Sequence[int]) -> tuple[int, ...]:
    strides = []
    acc = 1
    for extent in reversed(size):
        strides.append(acc)
        acc *= extent
    return tuple(reversed(strides))


def _count(size: Sequence[int]) -> int:
    return math.prod(size) if size else 0


def _nested_shape(data) -> tuple[int, ...]:
    if isinstance(data, (list, tuple)):
        if not data:
            return (0,)
        shapes = {_nested_shape(item) for item in data}
        if len(shapes) != 1:
            raise TensorError("ragged nested data")
        return (len(data),) + shapes.pop()
    return ()


def _flatten(data) -> Iterator:
    if isinstance(data, (list, tuple)):
        for item in data:
            yield from _flatten(item)
    else:
        yield data


class Tensor:
    """A view of ``storage`` given by an offset, sizes and strides."""

    __slots__ = ("dtype", "storage", "offset", "size", "stride")

    def __init__(self, size=(), dtype: DType = DType.DOUBLE):
        size = _check_size(size)
        self.dtype = dtype
        self.size = size
        self.stride = _contiguous_strides(size)
        self.storage = [dtype.cast(0)] * _count(size)
        self.offset = 0

    @classmethod
    def _view(cls, base: Tensor, offset: int, size, stride) -> Tensor:
        view = cls.__new__(cls)
        view.dtype = base.dtype
        view.storage = base.storage
        view.offset = offset
        view.size = tuple(size)
        view.stride = tuple(stride)
        return view

    @classmethod
    def from_nested(cls, data, dtype: DType = DType.DOUBLE) -> Tensor:
        """Build a contiguous tensor from nested lists of numbers."""
        shape = _nested_shape(data)
        if not shape:
            raise TensorError("nested sequence expected")
        tensor = cls(shape, dtype)
        tensor.assign(_flatten(data))
        return tensor

    def tolist(self) -> list:
        """Return the elements as nested lists."""
        if not self.size:
            return []
        last = len(self.size) - 1

        def build(d: int, base: int) -> list:
            step = self.stride[d]
            if d == last:
                return [self.storage[base + i * step] for i in range(self.size[d])]
            return [build(d + 1, base + i * step) for i in range(self.size[d])]

        return build(0, self.offset)

    def dim(self) -> int:
        """Number of dimensions."""
        return len(self.size)

    def nelement(self) -> int:
        """Number of elements; zero for a tensor with no dimension."""
        return _count(self.size)

    def is_contiguous(self) -> bool:
        """Whether elements lie densely in row-major order."""
        expected = 1
        for extent, step in zip(reversed(self.size), reversed(self.stride)):
            if extent != 1:
                if step != expected:
                    return False
                expected *= extent
        return True

    def _position(self, index: Sequence[int]) -> int:
        if len(index) != len(self.size):
            raise TensorError(
                f"expected {len(self.size)} indices, got {len(index)}"
            )
        position = self.offset
        for i, extent, step in zip(index, self.size, self.stride):
            if not 0 <= i < extent:
                raise TensorError("index out of bounds")
            position += i * step
        return position

    def get(self, *args):
        """Return the element at the given indices."""
        if len(args) == 1 and isinstance(args[0], (tuple, list)):
            args = tuple(args[0])
        return self.storage[self._position(args)]

    def set(self, index, value) -> None:
        """Store ``value``, converted to the tensor's type, at ``index``."""
        if isinstance(index, int):
            index = (index,)
        self.storage[self._position(tuple(index))] = self.dtype.cast(value)

    def _check_dim(self, dim: int) -> None:
        if not 0 <= dim < len(self.size):
            raise TensorError("dimension out of range")

    def select(self, dim: int, index: int) -> Tensor:
        """Return the slice at ``index`` along ``dim``, one dimension fewer."""
        if len(self.size) <= 1:
            raise TensorError("cannot select on a vector")
        self._check_dim(dim)
        if not 0 <= index < self.size[dim]:
            raise TensorError("out of range")
        return Tensor._view(
            self,
            self.offset + index * self.stride[dim],
            self.size[:dim] + self.size[dim + 1:],
            self.stride[:dim] + self.stride[dim + 1:],
        )

    def narrow(self, dim: int, start: int, length: int) -> Tensor:
        """Return the view of ``length`` entries from ``start`` along ``dim``."""
        self._check_dim(dim)
        if start < 0 or start >= self.size[dim]:
            raise TensorError("out of range")
        if length <= 0 or start + length > self.size[dim]:
            raise TensorError("out of range")
        size = list(self.size)
        size[dim] = length
        return Tensor._view(
            self, self.offset + start * self.stride[dim], size, self.stride
        )

    def transpose(self, dim0: int, dim1: int) -> Tensor:
        """Return a view with two dimensions swapped."""
        self._check_dim(dim0)
        self._check_dim(dim1)
        size = list(self.size)
        stride = list(self.stride)
        size[dim0], size[dim1] = size[dim1], size[dim0]
        stride[dim0], stride[dim1] = stride[dim1], stride[dim0]
        return Tensor._view(self, self.offset, size, stride)

    def contiguous(self) -> Tensor:
        """Return self if contiguous, otherwise a contiguous copy."""
        return self if self.is_contiguous() else self.clone()

    def clone(self) -> Tensor:
        """Return a contiguous copy with its own storage."""
        copy = Tensor(self.size, self.dtype)
        copy.storage = list(self.values())
        return copy

    def resize(self, size) -> Tensor:
        """Change the shape in place, growing the storage if needed."""
        size = _check_size(size)
        if size == self.size:
            return self
        self.size = size
        self.stride = _contiguous_strides(size)
        needed = self.offset + _count(size)
        if len(self.storage) < needed:
            self.storage.extend([self.dtype.cast(0)] * (needed - len(self.storage)))
        return self

    def resize_as(self, other: Tensor) -> Tensor:
        """Resize to the shape of ``other``."""
        return self.resize(other.size)

    def copy_from(self, src: Tensor) -> Tensor:
        """Copy the elements of ``src`` in order; element counts must match."""
        cast = self.dtype.cast
        for dst_pos, src_pos in zip_positions(self, src):
            self.storage[dst_pos] = cast(src.storage[src_pos])
        return self

    def positions(self) -> Iterator[int]:
        """Yield the storage position of each element in row-major order."""
        if not self.size:
            return
        for index in itertools.product(*(range(extent) for extent in self.size)):
            yield self.offset + sum(i * s for i, s in zip(index, self.stride))

    def values(self) -> Iterator:
        """Yield the elements in row-major order."""
        storage = self.storage
        return (storage[p] for p in self.positions())

    def assign(self, values: Iterable) -> Tensor:
        """Write values in row-major order; extra values are left unused."""
        cast = self.dtype.cast
        source = iter(values)
        for position in self.positions():
            try:
                value = next(source)
            except StopIteration:
                raise TensorError("not enough values to assign") from None
            self.storage[position] = cast(value)
        return self

    def __repr__(self) -> str:
        return f"Tensor({self.tolist()!r}, dtype={self.dtype.name})"


def zip_positions(*args: Tensor) -> Iterator[tuple[int, ...]]:
    """Walk several tensors with equal element counts together.

    Yields one tuple of storage positions per element.
    """
    if not args:
        raise TensorError("at least one tensor expected")
    if len({t.nelement() for t in args}) != 1:
        raise TensorError("inconsistent tensor size")
    return zip(*(t.positions() for t in args))