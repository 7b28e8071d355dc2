import pytest

from threadcraft.matrix import Matrix, MatrixSizeError


def _filled(rows, columns):
    m = Matrix(rows, columns)
    for i in range(rows):
        for j in range(columns):
            m.set_value(i, j, i * columns + j + 1)
    return m


def _identity(n):
    m = Matrix(n, n)
    for i in range(n):
        m.set_value(i, i, 1)
    return m


def _values(m):
    return [[m.get_value(i, j) for j in range(m.columns)] for i in range(m.rows)]


def test_new_matrix_is_zero():
    m = Matrix(3, 4)
    assert _values(m) == [[0] * 4] * 3


def test_set_all_and_set_value():
    m = Matrix(2, 2)
    m.set_all(7)
    m.set_value(1, 0, 3)
    assert _values(m) == [[7, 7], [3, 7]]


def test_get_value_out_of_range():
    with pytest.raises(IndexError):
        Matrix(2, 2).get_value(2, 0)


def test_multiply_by_identity():
    a = _filled(4, 4)
    result = Matrix(4, 4)
    Matrix.multiply(a, _identity(4), result)
    assert _values(result) == _values(a)


def test_multiply_non_square_by_identity():
    a = _filled(3, 5)
    result = Matrix(3, 5)
    Matrix.multiply(a, _identity(5), result)
    assert _values(result) == _values(a)


def test_multiply_all_ones_gives_inner_dimension():
    a = Matrix(6, 4)
    b = Matrix(4, 6)
    a.set_all(1)
    b.set_all(1)
    result = Matrix(6, 6)
    Matrix.multiply(a, b, result)
    assert _values(result) == [[4] * 6] * 6


def test_parallel_multiply_matches_sequential():
    a = _filled(150, 2)
    b = _filled(2, 150)
    seq = Matrix(150, 150)
    par = Matrix(150, 150)
    Matrix.multiply(a, b, seq)
    Matrix.parallel_multiply(a, b, par)
    assert _values(par) == _values(seq)


def test_multiply_size_errors():
    with pytest.raises(MatrixSizeError):
        Matrix.multiply(Matrix(2, 3), Matrix(2, 3), Matrix(2, 3))
    with pytest.raises(MatrixSizeError):
        Matrix.parallel_multiply(Matrix(2, 3), Matrix(3, 2), Matrix(3, 3))


def test_transpose_swaps_indices():
    a = _filled(5, 8)
    result = Matrix(8, 5)
    Matrix.transpose(a, result)
    assert all(
        result.get_value(j, i) == a.get_value(i, j) for i in range(5) for j in range(8)
    )


def test_transpose_twice_round_trips():
    a = _filled(3, 7)
    t = Matrix(7, 3)
    back = Matrix(3, 7)
    Matrix.transpose(a, t)
    Matrix.transpose(t, back)
    assert _values(back) == _values(a)


def test_parallel_transpose_matches_sequential():
    a = _filled(200, 250)
    seq = Matrix(250, 200)
    par = Matrix(250, 200)
    Matrix.transpose(a, seq)
    Matrix.parallel_transpose(a, par)
    assert _values(par) == _values(seq)


def test_transpose_size_error():
    with pytest.raises(MatrixSizeError):
        Matrix.transpose(Matrix(2, 3), Matrix(2, 3))
    with pytest.raises(MatrixSizeError):
        Matrix.parallel_transpose(Matrix(2, 3), Matrix(3, 3))


def test_format_small_matrix():
    m = Matrix(2, 3)
    m.set_all(1)
    assert m.format() == "1 1 1 \n1 1 1 \n\n"


def test_format_large_matrix_is_empty():
    assert Matrix(50, 2).format() == ""