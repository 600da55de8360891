import pytest

from errors import ErrorKind
from linear_solver import (
    INVALID_MATRIX_VALUE,
    INVALID_VECTOR_VALUE,
    LinearSystemSpec,
    solve_linear_spec,
    solve_linear_system,
)


def test_identity_system():
    result = solve_linear_system([[1, 0], [0, 1]], [3, 4])
    assert result.ok
    assert result.solution == ["3.00000", "4.00000"]


def test_text_cells_are_parsed():
    result = solve_linear_system([["2", "1"], ["1", "3"]], ["3", "5"])
    assert result.solution == ["0.80000", "1.40000"]


def test_three_by_three():
    matrix = [["1", "1", "1"], ["0", "2", "5"], ["2", "5", "-1"]]
    result = solve_linear_system(matrix, ["6", "-4", "27"])
    assert result.solution == ["5.00000", "3.00000", "-2.00000"]


@pytest.mark.parametrize(
    "matrix, vector, message",
    [
        ([["1", "x"], ["0", "1"]], ["1", "2"], INVALID_MATRIX_VALUE),
        ([["1", ""], ["0", "1"]], ["1", "2"], INVALID_MATRIX_VALUE),
        ([["1", "0"], ["0", "1"]], ["1", "nan"], INVALID_VECTOR_VALUE),
    ],
)
def test_invalid_cells_abort_before_solving(matrix, vector, message):
    result = solve_linear_system(matrix, vector)
    assert not result.ok
    assert result.error == message
    assert result.error_kind == ErrorKind.INVALID_INPUT
    assert result.solution == []


def test_shape_mismatch_is_invalid_input():
    result = solve_linear_system([["1", "0"], ["0", "1"]], ["1"])
    assert result.error_kind == ErrorKind.INVALID_INPUT


def test_singular_matrix_reports_message():
    result = solve_linear_system([[1, 2], [2, 4]], [1, 2])
    assert not result.ok
    assert result.error_kind == ErrorKind.EVALUATION


def test_spec_sizes():
    spec = LinearSystemSpec(3)
    assert spec.matrix == [[""] * 3 for _ in range(3)]
    assert spec.vector == [""] * 3
    assert spec.resize(4).size == 4
    with pytest.raises(ValueError):
        LinearSystemSpec(5)
    spec.matrix = [["1", "0", "0"], ["0", "1", "0"], ["0", "0", "1"]]
    spec.vector = ["1", "2", "3"]
    assert solve_linear_spec(spec).solution == ["1.00000", "2.00000", "3.00000"]
