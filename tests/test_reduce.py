import math
import statistics

import pytest

from strided import reduce
from strided.dtypes import DType
from strided.tensor import Tensor, TensorError

DATA = [[1.0, 5.0, 3.0], [-2.0, 0.0, 4.0]]


def _t(data=DATA, dtype=DType.DOUBLE):
    return Tensor.from_nested(data, dtype)


def _flat(data=DATA):
    return [x for row in data for x in row]


def test_minall_maxall_match_builtins():
    t = _t()
    assert reduce.minall(t) == min(_flat())
    assert reduce.maxall(t) == max(_flat())


def test_minall_on_empty_raises():
    with pytest.raises(TensorError):
        reduce.minall(Tensor(()))


def test_sumall_equals_sum_of_dim_sums():
    t = _t()
    assert reduce.sumall(t) == pytest.approx(reduce.sumall(reduce.sum_dim(t, 1)))
    assert reduce.sumall(t) == pytest.approx(reduce.sumall(reduce.sum_dim(t, 0)))


def test_sumall_byte_uses_wide_accumulator():
    t = _t([200, 100], DType.BYTE)
    assert reduce.sumall(t) == 200 + 100


def test_prodall_equals_product_of_dim_products():
    t = _t([[1.0, 2.0], [3.0, 4.0]])
    assert reduce.prodall(t) == pytest.approx(reduce.prodall(reduce.prod_dim(t, 0)))


def test_max_dim_values_and_indices_agree():
    t = _t()
    values, indices = reduce.max_dim(t, 1)
    assert values.size == (2, 1)
    assert indices.dtype is DType.LONG
    for r in range(2):
        idx = indices.get(r, 0)
        assert t.get(r, idx) == values.get(r, 0) == max(DATA[r])


def test_min_dim_values_and_indices_agree():
    t = _t()
    values, indices = reduce.min_dim(t, 0)
    assert values.size == (1, 3)
    for c in range(3):
        assert t.get(indices.get(0, c), c) == values.get(0, c)
        assert values.get(0, c) == min(DATA[0][c], DATA[1][c])


def test_max_dim_ties_pick_first():
    _, indices = reduce.max_dim(_t([[3.0, 3.0, 1.0]]), 1)
    assert indices.tolist() == [[0]]


def test_dimension_out_of_range():
    with pytest.raises(TensorError):
        reduce.sum_dim(_t(), 2)
    with pytest.raises(TensorError):
        reduce.max_dim(_t(), -1)


def test_cumsum_last_equals_sum():
    t = _t()
    c = reduce.cumsum(t, 1)
    s = reduce.sum_dim(t, 1)
    assert [row[-1] for row in c.tolist()] == [row[0] for row in s.tolist()]
    assert [row[0] for row in c.tolist()] == [row[0] for row in DATA]


def test_cumprod_last_equals_prod():
    t = _t()
    c = reduce.cumprod(t, 0)
    p = reduce.prod_dim(t, 0)
    assert c.tolist()[-1] == p.tolist()[0]


def test_mean_times_count_is_sum():
    t = _t()
    m = reduce.mean(t, 1)
    s = reduce.sum_dim(t, 1)
    for mv, sv in zip(m.values(), s.values()):
        assert mv * 3 == pytest.approx(sv)


def test_mean_requires_floating():
    with pytest.raises(TypeError):
        reduce.mean(_t([[1, 2]], DType.INT), 1)


def test_var_matches_statistics():
    t = _t()
    biased = reduce.var(t, 1, True)
    unbiased = reduce.var(t, 1, False)
    for row, b, u in zip(DATA, biased.values(), unbiased.values()):
        assert b == pytest.approx(statistics.pvariance(row))
        assert u == pytest.approx(statistics.variance(row))


def test_std_squared_is_var():
    t = _t()
    for flag in (True, False):
        s = reduce.std(t, 0, flag)
        v = reduce.var(t, 0, flag)
        for sv, vv in zip(s.values(), v.values()):
            assert sv * sv == pytest.approx(vv)


def test_constant_rows_have_no_spread():
    t = _t([[2.0, 2.0, 2.0]])
    assert list(reduce.std(t, 1, False).values()) == [0.0]


def test_norm_two_matches_hypot():
    n = reduce.norm(_t(), 2, 1)
    for row, value in zip(DATA, n.values()):
        assert value == pytest.approx(math.hypot(*row))


def test_norm_zero_counts_nonzeros():
    n = reduce.norm(_t(), 0, 1)
    assert list(n.values()) == [sum(1 for x in row if x != 0) for row in DATA]


def test_normall_variants():
    t = _t()
    assert reduce.normall(t, 1) == pytest.approx(sum(abs(x) for x in _flat()))
    assert reduce.normall(t, 2) == pytest.approx(math.hypot(*_flat()))
    assert reduce.normall(t, 0) == sum(1 for x in _flat() if x != 0)
    assert reduce.normall(t, 3) == pytest.approx(
        sum(abs(x) ** 3 for x in _flat()) ** (1 / 3)
    )


def test_renorm_caps_row_norms():
    t = _t([[3.0, 4.0], [0.3, 0.4]])
    res = reduce.renorm(t, 2, 0, 1.0)
    rows = res.tolist()
    assert math.hypot(*rows[0]) == pytest.approx(1.0, rel=1e-5)
    assert rows[1] == [0.3, 0.4]


def test_renorm_errors():
    with pytest.raises(TensorError):
        reduce.renorm(_t(), 0, 0, 1.0)
    with pytest.raises(TensorError):
        reduce.renorm(_t([1.0, 2.0]), 2, 0, 1.0)


def test_dist_matches_math_dist():
    a = _t([1.0, 2.0, 3.0])
    b = _t([4.0, 6.0, 3.0])
    assert reduce.dist(a, b, 2) == pytest.approx(math.dist(_flat([[1, 2, 3]]), [4, 6, 3]))


def test_whole_tensor_statistics():
    t = _t()
    flat = _flat()
    assert reduce.meanall(t) == pytest.approx(statistics.mean(flat))
    assert reduce.varall(t) == pytest.approx(statistics.variance(flat))
    assert reduce.stdall(t) == pytest.approx(statistics.stdev(flat))


def test_meanall_empty_raises():
    with pytest.raises(TensorError):
        reduce.meanall(Tensor(()))


def test_histc_counts_every_element_in_range():
    t = _t([1.0, 2.0, 3.0, 4.0, 2.5])
    hist = reduce.histc(t, 4, 0, 0)
    assert hist.size == (4,)
    assert sum(hist.values()) == t.nelement()


def test_histc_ignores_values_outside_bounds():
    t = _t([-5.0, 0.5, 1.5, 9.0])
    hist = reduce.histc(t, 2, 0, 2)
    assert list(hist.values()) == [1.0, 1.0]


def test_logical_reductions():
    ones = _t([1, 1, 1], DType.BYTE)
    mixed = _t([1, 0, 1], DType.BYTE)
    assert reduce.logicalall(ones) == 1
    assert reduce.logicalall(mixed) == 0
    assert reduce.logicalany(mixed) == reduce.logicalall(ones)


def test_logical_requires_byte():
    with pytest.raises(TypeError):
        reduce.logicalany(_t([1.0]))