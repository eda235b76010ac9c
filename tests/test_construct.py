import pytest

from strided.construct import (
    arange,
    cat,
    linspace,
    logspace,
    numel,
    ones,
    reshape,
    zeros,
)
from strided.dtypes import DType
from strided.tensor import Tensor, TensorError


def test_zeros_shape_and_values():
    t = zeros((2, 3))
    assert t.size == (2, 3)
    assert all(v == 0 for v in t.values())


def test_ones_byte():
    t = ones((4,), DType.BYTE)
    assert t.dtype is DType.BYTE
    assert list(t.values()) == [1, 1, 1, 1]


def test_arange_unit_step():
    assert arange(1, 5, 1).tolist() == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_arange_integer_truncates():
    assert arange(0, 7, 2, DType.LONG).tolist() == [0, 2, 4, 6]


def test_arange_negative_step_is_decreasing():
    values = arange(5, 1, -1).tolist()
    assert values[0] == 5
    assert values[-1] == 1
    assert all(a > b for a, b in zip(values, values[1:]))


def test_arange_zero_step_raises():
    with pytest.raises(TensorError):
        arange(0, 3, 0)


def test_arange_incoherent_sign_raises():
    with pytest.raises(TensorError):
        arange(0, 3, -1)


def test_linspace_endpoints_and_even_spacing():
    values = linspace(0, 1, 5).tolist()
    assert len(values) == 5
    assert values[0] == 0.0
    assert values[-1] == 1.0
    gaps = [b - a for a, b in zip(values, values[1:])]
    assert all(g == pytest.approx(gaps[0]) for g in gaps)


def test_linspace_single_point():
    assert linspace(3, 3, 1).tolist() == [3.0]


def test_linspace_invalid_arguments():
    with pytest.raises(TensorError):
        linspace(0, 1, 1)
    with pytest.raises(TensorError):
        linspace(2, 1, 4)


def test_linspace_requires_floating():
    with pytest.raises(TypeError):
        linspace(0, 1, 3, DType.INT)


def test_logspace_values():
    assert logspace(0, 2, 3).tolist() == pytest.approx([1.0, 10.0, 100.0])


def test_logspace_matches_linspace_exponents():
    exponents = linspace(-1, 1, 7).tolist()
    values = logspace(-1, 1, 7).tolist()
    assert values == pytest.approx([10.0 ** e for e in exponents])


def test_reshape_keeps_order():
    t = Tensor.from_nested([[1, 2, 3], [4, 5, 6]])
    r = reshape(t, (3, 2))
    assert r.size == (3, 2)
    assert list(r.values()) == list(t.values())


def test_reshape_size_mismatch():
    t = Tensor.from_nested([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(TensorError):
        reshape(t, (4,))


def test_cat_along_first_dimension():
    ta = Tensor.from_nested([[1, 2], [3, 4]])
    tb = Tensor.from_nested([[5, 6]])
    r = cat(ta, tb, 0)
    assert r.tolist() == ta.tolist() + tb.tolist()


def test_cat_vectors_along_new_dimension():
    ta = Tensor.from_nested([1, 2])
    tb = Tensor.from_nested([3, 4])
    r = cat(ta, tb, 1)
    assert r.size == (2, 2)
    assert r.select(1, 0).tolist() == ta.tolist()
    assert r.select(1, 1).tolist() == tb.tolist()


def test_cat_inconsistent_sizes():
    ta = Tensor.from_nested([[1, 2], [3, 4]])
    tb = Tensor.from_nested([[5, 6, 7]])
    with pytest.raises(TensorError):
        cat(ta, tb, 0)


def test_cat_negative_dimension():
    ta = Tensor.from_nested([1, 2])
    with pytest.raises(TensorError):
        cat(ta, ta, -1)


def test_numel_counts_elements():
    t = Tensor((2, 3, 4))
    assert numel(t) == len(list(t.values()))