import pytest

from strided.dimapply import Line, dim_lines
from strided.dtypes import DType
from strided.tensor import Tensor, TensorError


def _matrix():
    return Tensor.from_nested([[1, 2, 3], [4, 5, 6]])


def test_lines_along_last_dimension_are_rows():
    t = _matrix()
    rows = [list(line) for (line,) in dim_lines(1, t)]
    assert rows == t.tolist()


def test_lines_along_first_dimension_are_columns():
    t = _matrix()
    cols = [list(line) for (line,) in dim_lines(0, t)]
    assert cols == t.transpose(0, 1).tolist()


def test_line_length_matches_dimension_size():
    t = _matrix()
    lengths = {len(line) for (line,) in dim_lines(0, t)}
    assert lengths == {t.size[0]}


def test_setitem_writes_through_and_casts():
    t = Tensor((2, 2), DType.INT)
    for (line,) in dim_lines(1, t):
        line[1] = 2.7
    assert [row[1] for row in t.tolist()] == [DType.INT.cast(2.7)] * 2
    assert [row[0] for row in t.tolist()] == [0, 0]


def test_first_dimension_varies_fastest():
    t = Tensor.from_nested(
        [[[i * 100 + j * 10 + k for k in range(4)] for j in range(3)] for i in range(2)]
    )
    lines = [line for (line,) in dim_lines(2, t)]
    assert len(lines) == 6
    assert lines[0][0] == t.get(0, 0, 0)
    assert lines[1][0] == t.get(1, 0, 0)
    assert lines[2][0] == t.get(0, 1, 0)


def test_several_tensors_walk_together():
    a = _matrix()
    b = Tensor((2, 1))
    for la, lb in dim_lines(1, a, b):
        lb[0] = la[len(la) - 1]
    assert [row[0] for row in b.tolist()] == [row[-1] for row in a.tolist()]


def test_non_contiguous_view():
    t = _matrix().transpose(0, 1)
    rows = [list(line) for (line,) in dim_lines(1, t)]
    assert rows == t.tolist()


def test_one_dimensional_gives_single_line():
    t = Tensor.from_nested([7, 8, 9])
    lines = list(dim_lines(0, t))
    assert len(lines) == 1
    assert list(lines[0][0]) == t.tolist()


def test_invalid_dimension():
    with pytest.raises(TensorError):
        dim_lines(2, _matrix())
    with pytest.raises(TensorError):
        dim_lines(-1, _matrix())


def test_inconsistent_sizes():
    with pytest.raises(TensorError):
        dim_lines(1, _matrix(), Tensor((3, 1)))


def test_inconsistent_dimension_count():
    with pytest.raises(TensorError):
        dim_lines(0, _matrix(), Tensor((2,)))


def test_line_index_out_of_range():
    (line,) = next(dim_lines(1, _matrix()))
    assert isinstance(line, Line)
    assert len(line) == 3
    assert line[2] == 3
    with pytest.raises(IndexError):
        line[3]
    with pytest.raises(IndexError):
        line[-1] = 0