"""Element-wise operations: filling, masking, indexing, arithmetic,
comparisons and the usual mathematical functions.

Operations that compute a result return a new tensor shaped like their
first operand; ``fill``, ``zero``, ``masked_fill``, ``masked_copy``,
``index_copy`` and ``index_fill`` modify their tensor in place and return it.
Scalar operands are first converted to the tensor's element type, and
results follow C conversion rules for that type.
"""

from __future__ import annotations

import builtins
import math
import operator
from collections.abc import Callable, Iterable

from .dtypes import DType
from .tensor import Tensor, TensorError, zip_positions

_ABS_TYPES = (DType.INT, DType.LONG, DType.FLOAT, DType.DOUBLE)


# ---------------------------------------------------------------- helpers


def _require_floating(t: Tensor, name: str) -> None:
    if not t.dtype.is_floating():
        raise TypeError(f"{name} requires a floating-point tensor")


def _mapped(t: Tensor, func: Callable) -> Tensor:
    out = Tensor(t.size, t.dtype)
    out.assign(func(v) for v in t.values())
    return out


def _combined(t: Tensor, others: Iterable[Tensor], func: Callable) -> Tensor:
    tensors = (t, *others)
    out = Tensor(t.size, t.dtype)
    out.assign(
        func(*(tensor.storage[p] for tensor, p in zip(tensors, positions)))
        for positions in zip_positions(*tensors)
    )
    return out


def _c_div(a, b, floating: bool):
    if floating:
        a = float(a)
        b = float(b)
        if b == 0:
            if a == 0 or math.isnan(a):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = builtins.abs(a) // builtins.abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and float(y).is_integer() and int(y) % 2 == 1


def _c_pow(x, y) -> float:
    x = float(x)
    y = float(y)
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        if x == 0:
            return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
        return math.nan


def _nan_on_domain(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x):
        try:
            return func(float(x))
        except ValueError:
            return math.nan

    return wrapped


def _c_log(x) -> float:
    x = float(x)
    if x == 0:
        return -math.inf
    if x < 0 or math.isnan(x):
        return math.nan
    return math.log(x)


def _c_log1p(x) -> float:
    x = float(x)
    if x == -1:
        return -math.inf
    if x < -1 or math.isnan(x):
        return math.nan
    return math.log1p(x)


def _c_exp(x) -> float:
    try:
        return math.exp(float(x))
    except OverflowError:
        return math.inf


def _c_cosh(x) -> float:
    try:
        return math.cosh(float(x))
    except OverflowError:
        return math.inf


def _c_sinh(x) -> float:
    x = float(x)
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _c_ceil(x) -> float:
    x = float(x)
    return float(math.ceil(x)) if math.isfinite(x) else x


def _c_floor(x) -> float:
    x = float(x)
    return float(math.floor(x)) if math.isfinite(x) else x


def _c_round(x) -> float:
    """Round half away from zero."""
    x = float(x)
    if not math.isfinite(x):
        return x
    magnitude = builtins.abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), x)


def _mask_flag(value) -> bool:
    if value == 1:
        return True
    if value == 0:
        return False
    raise TensorError("Mask tensor can take 0 and 1 values only")


def _index_list(index) -> list[int]:
    if isinstance(index, Tensor):
        if index.dim() != 1:
            raise TensorError("Index is supposed to be a vector")
        return [int(v) for v in index.values()]
    return [int(v) for v in index]


# ---------------------------------------------------------------- filling


def fill(tensor: Tensor, value) -> Tensor:
    """Set every element of ``tensor`` to ``value``."""
    value = tensor.dtype.cast(value)
    for position in tensor.positions():
        tensor.storage[position] = value
    return tensor


def zero(tensor: Tensor) -> Tensor:
    """Set every element of ``tensor`` to zero."""
    return fill(tensor, 0)


# ---------------------------------------------------------------- masking


def masked_fill(tensor: Tensor, mask: Tensor, value) -> Tensor:
    """Set elements of ``tensor`` to ``value`` where ``mask`` is 1."""
    value = tensor.dtype.cast(value)
    for t_pos, m_pos in zip_positions(tensor, mask):
        if _mask_flag(mask.storage[m_pos]):
            tensor.storage[t_pos] = value
    return tensor


def masked_copy(tensor: Tensor, mask: Tensor, src: Tensor) -> Tensor:
    """Copy successive elements of ``src`` into ``tensor`` where ``mask`` is 1."""
    if tensor.nelement() != mask.nelement():
        raise TensorError(
            "Number of elements of destination tensor != Number of elements in mask"
        )
    source = iter(list(src.values()))
    cast = tensor.dtype.cast
    for t_pos, m_pos in zip_positions(tensor, mask):
        if _mask_flag(mask.storage[m_pos]):
            try:
                value = next(source)
            except StopIteration:
                raise TensorError(
                    "Number of elements of src < number of ones in mask"
                ) from None
            tensor.storage[t_pos] = cast(value)
    return tensor


def masked_select(src: Tensor, mask: Tensor) -> Tensor:
    """Return a vector of the elements of ``src`` where ``mask`` is 1."""
    selected = [
        src.storage[s_pos]
        for s_pos, m_pos in zip_positions(src, mask)
        if _mask_flag(mask.storage[m_pos])
    ]
    return Tensor((len(selected),), src.dtype).assign(selected)


# ---------------------------------------------------------------- indexing


def index_select(src: Tensor, dim: int, index) -> Tensor:
    """Gather the slices of ``src`` along ``dim`` at zero-based ``index``."""
    indices = _index_list(index)
    if dim >= src.dim():
        raise TensorError("Indexing dim is out of bounds")
    if src.dim() == 0:
        raise TensorError("Source tensor is empty")
    size = list(src.size)
    size[dim] = len(indices)
    result = Tensor(size, src.dtype)
    for i, idx in enumerate(indices):
        if src.dim() > 1:
            result.select(dim, i).copy_from(src.select(dim, idx))
        else:
            result.set(i, src.get(idx))
    return result


def index_copy(tensor: Tensor, dim: int, index, src: Tensor) -> Tensor:
    """Copy slice ``i`` of ``src`` along ``dim`` to slice ``index[i]`` of ``tensor``."""
    indices = _index_list(index)
    if dim >= src.dim():
        raise TensorError("Indexing dim is out of bounds")
    if len(indices) != src.size[dim]:
        raise TensorError("Number of indices should be equal to source:size(dim)")
    for i, idx in enumerate(indices):
        if tensor.dim() > 1:
            tensor.select(dim, idx).copy_from(src.select(dim, i))
        else:
            tensor.set(idx, src.get(i))
    return tensor


def index_fill(tensor: Tensor, dim: int, index, value) -> Tensor:
    """Fill the slices of ``tensor`` along ``dim`` at ``index`` with ``value``."""
    indices = _index_list(index)
    if dim >= tensor.dim():
        raise TensorError("Indexing dim is out of bounds")
    for idx in indices:
        if tensor.dim() > 1:
            fill(tensor.select(dim, idx), value)
        else:
            tensor.set(idx, value)
    return tensor


# ---------------------------------------------------------------- arithmetic


def add(t: Tensor, value) -> Tensor:
    """Return ``t + value``."""
    value = t.dtype.cast(value)
    return _mapped(t, lambda x: x + value)


def mul(t: Tensor, value) -> Tensor:
    """Return ``t * value``."""
    value = t.dtype.cast(value)
    return _mapped(t, lambda x: x * value)


def div(t: Tensor, value) -> Tensor:
    """Return ``t / value``; integer types truncate toward zero."""
    value = t.dtype.cast(value)
    floating = t.dtype.is_floating()
    return _mapped(t, lambda x: _c_div(x, value, floating))


def clamp(t: Tensor, min_value, max_value) -> Tensor:
    """Return ``t`` with every element limited to ``[min_value, max_value]``."""
    low = t.dtype.cast(min_value)
    high = t.dtype.cast(max_value)
    return _mapped(t, lambda x: low if x < low else (high if x > high else x))


def cadd(t: Tensor, value, src: Tensor) -> Tensor:
    """Return ``t + value * src`` element by element."""
    value = t.dtype.cast(value)
    return _combined(t, (src,), lambda a, b: a + value * b)


def cmul(t: Tensor, src: Tensor) -> Tensor:
    """Return the element-wise product of ``t`` and ``src``."""
    return _combined(t, (src,), operator.mul)


def cpow(t: Tensor, src: Tensor) -> Tensor:
    """Return ``t`` raised element-wise to the powers in ``src``."""
    return _combined(t, (src,), _c_pow)


def cdiv(t: Tensor, src: Tensor) -> Tensor:
    """Return the element-wise quotient of ``t`` by ``src``."""
    floating = t.dtype.is_floating()
    return _combined(t, (src,), lambda a, b: _c_div(a, b, floating))


def tpow(value, t: Tensor) -> Tensor:
    """Return ``value`` raised to each element of ``t``."""
    value = t.dtype.cast(value)
    return _mapped(t, lambda x: _c_pow(value, x))


def addcmul(t: Tensor, value, src1: Tensor, src2: Tensor) -> Tensor:
    """Return ``t + value * src1 * src2`` element by element."""
    value = t.dtype.cast(value)
    return _combined(t, (src1, src2), lambda r, a, b: r + value * a * b)


def addcdiv(t: Tensor, value, src1: Tensor, src2: Tensor) -> Tensor:
    """Return ``t + value * src1 / src2`` element by element."""
    value = t.dtype.cast(value)
    floating = t.dtype.is_floating()
    return _combined(
        t, (src1, src2), lambda r, a, b: r + _c_div(value * a, b, floating)
    )


# ---------------------------------------------------------------- comparisons


def _compare(op: Callable, t: Tensor, other, dtype: DType) -> Tensor:
    out = Tensor(t.size, dtype)
    if isinstance(other, Tensor):
        pairs = (
            (t.storage[a], other.storage[b]) for a, b in zip_positions(t, other)
        )
    else:
        value = t.dtype.cast(other)
        pairs = ((x, value) for x in t.values())
    return out.assign(1 if op(a, b) else 0 for a, b in pairs)


def lt(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t < other`` and 0 elsewhere."""
    return _compare(operator.lt, t, other, dtype)


def gt(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t > other`` and 0 elsewhere."""
    return _compare(operator.gt, t, other, dtype)


def le(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t <= other`` and 0 elsewhere."""
    return _compare(operator.le, t, other, dtype)


def ge(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t >= other`` and 0 elsewhere."""
    return _compare(operator.ge, t, other, dtype)


def eq(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t == other`` and 0 elsewhere."""
    return _compare(operator.eq, t, other, dtype)


def ne(t: Tensor, other, dtype: DType = DType.BYTE) -> Tensor:
    """Return 1 where ``t != other`` and 0 elsewhere."""
    return _compare(operator.ne, t, other, dtype)


# ---------------------------------------------------------------- functions


def sign(t: Tensor) -> Tensor:
    """Return -1, 0 or 1 by the sign of each element (0 or 1 for bytes)."""
    if t.dtype is DType.BYTE:
        return _mapped(t, lambda x: 1 if x > 0 else 0)
    return _mapped(t, lambda x: 1 if x > 0 else (-1 if x < 0 else 0))


def abs(t: Tensor) -> Tensor:
    """Return the absolute value of each element (int, long and floating types)."""
    if t.dtype not in _ABS_TYPES:
        raise TypeError(f"abs is not defined for {t.dtype.value} tensors")
    return _mapped(t, builtins.abs)


def _floating_map(t: Tensor, func: Callable, name: str) -> Tensor:
    _require_floating(t, name)
    return _mapped(t, func)


def log(t: Tensor) -> Tensor:
    """Return the natural logarithm of each element."""
    return _floating_map(t, _c_log, "log")


def log1p(t: Tensor) -> Tensor:
    """Return ``log(1 + x)`` for each element."""
    return _floating_map(t, _c_log1p, "log1p")


def exp(t: Tensor) -> Tensor:
    """Return the exponential of each element."""
    return _floating_map(t, _c_exp, "exp")


def cos(t: Tensor) -> Tensor:
    """Return the cosine of each element."""
    return _floating_map(t, _nan_on_domain(math.cos), "cos")


def acos(t: Tensor) -> Tensor:
    """Return the arc cosine of each element."""
    return _floating_map(t, _nan_on_domain(math.acos), "acos")


def cosh(t: Tensor) -> Tensor:
    """Return the hyperbolic cosine of each element."""
    return _floating_map(t, _c_cosh, "cosh")


def sin(t: Tensor) -> Tensor:
    """Return the sine of each element."""
    return _floating_map(t, _nan_on_domain(math.sin), "sin")


def asin(t: Tensor) -> Tensor:
    """Return the arc sine of each element."""
    return _floating_map(t, _nan_on_domain(math.asin), "asin")


def sinh(t: Tensor) -> Tensor:
    """Return the hyperbolic sine of each element."""
    return _floating_map(t, _c_sinh, "sinh")


def tan(t: Tensor) -> Tensor:
    """Return the tangent of each element."""
    return _floating_map(t, _nan_on_domain(math.tan), "tan")


def atan(t: Tensor) -> Tensor:
    """Return the arc tangent of each element."""
    return _floating_map(t, _nan_on_domain(math.atan), "atan")


def tanh(t: Tensor) -> Tensor:
    """Return the hyperbolic tangent of each element."""
    return _floating_map(t, _nan_on_domain(math.tanh), "tanh")


def sqrt(t: Tensor) -> Tensor:
    """Return the square root of each element."""
    return _floating_map(t, _nan_on_domain(math.sqrt), "sqrt")


def ceil(t: Tensor) -> Tensor:
    """Round each element up."""
    return _floating_map(t, _c_ceil, "ceil")


def floor(t: Tensor) -> Tensor:
    """Round each element down."""
    return _floating_map(t, _c_floor, "floor")


def round(t: Tensor) -> Tensor:
    """Round each element to the nearest integer, halves away from zero."""
    return _floating_map(t, _c_round, "round")


def pow(t: Tensor, value) -> Tensor:
    """Raise each element to the power ``value``."""
    _require_floating(t, "pow")
    value = t.dtype.cast(value)
    return _mapped(t, lambda x: _c_pow(x, value))


def atan2(tx: Tensor, ty: Tensor) -> Tensor:
    """Return ``atan2(tx, ty)`` element by element."""
    _require_floating(tx, "atan2")
    return _combined(tx, (ty,), lambda a, b: math.atan2(float(a), float(b)))