"""Sorting and order statistics along one dimension.

Indices in results are zero-based positions along the dimension.
"""

from __future__ import annotations

import operator
from collections.abc import Callable

from .dimapply import dim_lines
from .dtypes import DType
from .tensor import Tensor, TensorError

_SMALL = 10


def _swapper(arr: list, idx: list) -> Callable[[int, int], None]:
    def swap(a: int, b: int) -> None:
        arr[a], arr[b] = arr[b], arr[a]
        idx[a], idx[b] = idx[b], idx[a]

    return swap


def _partition(arr: list, idx: list, left: int, right: int, less) -> tuple[int, int]:
    """Median-of-three partition of ``arr[left..right]``; returns (i, j)."""
    swap = _swapper(arr, idx)
    swap((left + right) >> 1, left + 1)
    if less(arr[right], arr[left + 1]):
        swap(left + 1, right)
    if less(arr[right], arr[left]):
        swap(left, right)
    if less(arr[left], arr[left + 1]):
        swap(left + 1, left)
    i, j = left + 1, right
    pivot = arr[left]
    while True:
        i += 1
        while less(arr[i], pivot):
            i += 1
        j -= 1
        while less(pivot, arr[j]):
            j -= 1
        if j < i:
            break
        swap(i, j)
    swap(left, j)
    return i, j


def _quicksort(arr: list, idx: list, less) -> None:
    """Sort ``arr`` by ``less``, carrying ``idx`` along."""
    n = len(arr)
    stack: list[tuple[int, int]] = []
    left, right = 0, n - 1
    done = n - 1 <= _SMALL
    while not done:
        i, j = _partition(arr, idx, left, right, less)
        size_left = j - left
        size_right = right - i + 1
        if size_left <= _SMALL and size_right <= _SMALL:
            if stack:
                left, right = stack.pop()
            else:
                done = True
        elif size_left <= _SMALL or size_right <= _SMALL:
            if size_left > size_right:
                right = j - 1
            else:
                left = i
        elif size_left > size_right:
            stack.append((left, j - 1))
            left = i
        else:
            stack.append((i, right))
            right = j - 1
    # Finish with an insertion sort over the nearly sorted sequence.
    for i in range(n - 2, -1, -1):
        if less(arr[i + 1], arr[i]):
            pivot, pivot_index = arr[i], idx[i]
            j = i + 1
            while True:
                arr[j - 1] = arr[j]
                idx[j - 1] = idx[j]
                j += 1
                if not (j < n and less(arr[j], pivot)):
                    break
            arr[j - 1] = pivot
            idx[j - 1] = pivot_index


def _quickselect(arr: list, idx: list, k: int) -> None:
    """Rearrange ``arr`` so that ``arr[k]`` holds its k-th smallest value."""
    swap = _swapper(arr, idx)
    left, right = 0, len(arr) - 1
    while True:
        if right <= left:
            return
        if right == left + 1:
            if arr[left] > arr[right]:
                swap(left, right)
            return
        i, j = _partition(arr, idx, left, right, operator.lt)
        if j <= k:
            left = i
        if j >= k:
            right = j - 1


def sort(t: Tensor, dimension: int, descending: bool = False) -> tuple[Tensor, Tensor]:
    """Sort ``t`` along ``dimension``; return the sorted values and the
    original positions of each value."""
    if not 0 <= dimension < t.dim():
        raise TensorError("invalid dimension")
    values = t.clone()
    indices = Tensor(t.size, DType.LONG)
    less = operator.gt if descending else operator.lt
    for vline, iline in dim_lines(dimension, values, indices):
        arr = list(vline)
        idx = list(range(len(arr)))
        _quicksort(arr, idx, less)
        for i, (value, position) in enumerate(zip(arr, idx)):
            vline[i] = value
            iline[i] = position
    return values, indices


def kthvalue(t: Tensor, k: int, dimension: int) -> tuple[Tensor, Tensor]:
    """Return the ``k``-th smallest values (zero-based) along ``dimension``
    and their positions."""
    if not 0 <= dimension < t.dim():
        raise TensorError("dimension out of range")
    if not 0 <= k < t.size[dimension]:
        raise TensorError("selected index out of range")
    size = list(t.size)
    size[dimension] = 1
    values = Tensor(size, t.dtype)
    indices = Tensor(size, DType.LONG)
    for line, vline, iline in dim_lines(dimension, t, values, indices):
        arr = list(line)
        idx = list(range(len(arr)))
        _quickselect(arr, idx, k)
        vline[0] = arr[k]
        iline[0] = idx[k]
    return values, indices


def median(t: Tensor, dimension: int) -> tuple[Tensor, Tensor]:
    """Return the medians along ``dimension`` (the lower middle for even
    lengths) and their positions."""
    if not 0 <= dimension < t.dim():
        raise TensorError("dimension out of range")
    return kthvalue(t, (t.size[dimension] - 1) >> 1, dimension)