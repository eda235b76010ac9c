# strided

This package provides strided n-dimensional tensors in plain Python. A `Tensor` is a view onto a flat storage list. The view is defined by an offset plus a size and a stride for each dimension. Because of this, `select`, `narrow` and `transpose` share data with the tensor they come from instead of copying it.

Every tensor holds one of seven element types from `strided.dtypes.DType`: `BYTE`, `CHAR`, `SHORT`, `INT`, `LONG`, `FLOAT` and `DOUBLE`. Values written into a tensor follow C conversion rules. Integers wrap around to the width of their type. Floating values stored into an integer type are truncated toward zero. `FLOAT` rounds to single precision.

## Modules

- `strided.dtypes` provides `DType`, with `cast` and `is_floating`.
- `strided.tensor` provides `Tensor` and `TensorError`, plus `zip_positions` for walking several tensors in step.
  - Building a tensor: `Tensor(size, dtype)` and `Tensor.from_nested(data, dtype)`.
  - Inspecting it: `tolist`, `dim`, `nelement`, `is_contiguous`, `get`, `set`.
  - Views: `select`, `narrow`, `transpose`.
  - Copies and resizing: `contiguous`, `clone`, `resize`, `resize_as`, `copy_from`.
  - Row-major iteration: `positions`, `values`, `assign`.
- `strided.dimapply` provides `dim_lines(dimension, *tensors)`. It yields one `Line` per tensor for every position outside `dimension`. A `Line` reads and writes the tensor's elements along that dimension in place.
- `strided.pointwise` provides element-wise operations:
  - In-place filling: `fill` and `zero`.
  - In-place masking and indexing: `masked_fill`, `masked_copy`, `index_copy` and `index_fill`.
  - Selection into a new tensor: `masked_select` and `index_select`.
  - Arithmetic: `add`, `mul`, `div`, `clamp`, `cadd`, `cmul`, `cpow`, `cdiv`, `tpow`, `addcmul` and `addcdiv`.
  - Comparisons: `lt`, `gt`, `le`, `ge`, `eq` and `ne`. Each returns 0/1 tensors of a chosen type, `BYTE` by default.
  - Sign and absolute value: `sign` and `abs`.
  - Floating-only math functions: `log`, `log1p`, `exp`, `cos`, `acos`, `cosh`, `sin`, `asin`, `sinh`, `tan`, `atan`, `tanh`, `sqrt`, `ceil`, `floor`, `round`, `pow` and `atan2`.
- `strided.reduce` provides reductions:
  - Whole-tensor: `minall`, `maxall`, `sumall`, `prodall`, `meanall`, `varall`, `stdall`, `normall` and `dist`.
  - Along a dimension: `max_dim` and `min_dim` (both with indices), `sum_dim`, `prod_dim`, `cumsum`, `cumprod`, `mean`, `std`, `var`, `norm` and `renorm`.
  - Other: `histc`, and `logicalall`/`logicalany` for byte tensors.
- `strided.sorting` provides `sort`, `kthvalue` and `median` along a dimension.
- `strided.construct` provides `zeros`, `ones`, `arange`, `linspace`, `logspace`, `reshape`, `cat` and `numel`.
- `strided.sampling` provides random generation:
  - In-place fills: `random_fill`, `geometric`, `bernoulli`, `uniform`, `normal`, `exponential`, `cauchy` and `log_normal`.
  - New tensors: `multinomial`, `rand`, `randn` and `randperm`.
  - A generator is a `random.Random` instance; `None` uses a shared one.

Indices given to and returned by the functions count from zero. Functions that compute a result return a new tensor. The fill, masked and indexed copy/fill functions are the exception: they modify their tensor in place and return it.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Example

```python
from strided.dtypes import DType
from strided.tensor import Tensor
from strided import pointwise, reduce, sorting, construct

a = Tensor.from_nested([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], DType.DOUBLE)

row = a.select(0, 1)                  # a view, shares storage with `a`
print(row.tolist())                   # [4.0, 5.0, 6.0]

print(a.transpose(0, 1).is_contiguous())  # False

print(reduce.sumall(a))               # 21.0
print(reduce.sum_dim(a, 1).tolist())  # [[6.0], [15.0]]

b = pointwise.add(a, 1.0)             # new tensor
print(b.tolist())                     # [[2.0, 3.0, 4.0], [5.0, 6.0, 7.0]]

values, indices = sorting.sort(a, 1, True)
print(values.tolist())                # [[3.0, 2.0, 1.0], [6.0, 5.0, 4.0]]

print(construct.linspace(0.0, 1.0, 5, DType.DOUBLE).tolist())
# [0.0, 0.25, 0.5, 0.75, 1.0]
```

## Errors

Operations that do not fit their inputs raise `strided.tensor.TensorError`, which is a subclass of `ValueError`. This covers:

- mismatched element counts or sizes;
- a dimension or index out of range;
- a mask value other than 0 or 1.

Functions that only make sense for floating-point tensors raise `TypeError` when given an integer tensor.

## What it does not do

The package has no linear algebra. There is no dot product, no matrix-vector or matrix-matrix product (plain or batched), and no outer product. It also has no trace, no cross product, no `diag`, `tril`, `triu` or identity-matrix constructor. Everything is computed element by element in pure Python, so it is not meant for large numerical workloads.