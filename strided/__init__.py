"""Strided n-dimensional tensors with pointwise math, reductions, sorting and random sampling."""

__version__ = "0.1.0"

__all__ = [
    "construct",
    "dimapply",
    "dtypes",
    "pointwise",
    "reduce",
    "sampling",
    "sorting",
    "tensor",
]