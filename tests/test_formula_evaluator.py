import pytest

from arbitrary_precision_engine import MPMathProvider
from errors import EvaluationError
from formula_evaluator import FormulaEvaluator


@pytest.fixture
def evaluator():
    return FormulaEvaluator(MPMathProvider())


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("3×2÷1", "3*2/1"),
        ("2^3", "2**3"),
        ("√(4)", "sqrt(4)"),
        ("5!", "factorial(5)"),
        ("50%", "(50*0.01)"),
        ("2(3)", "2*(3)"),
        ("(1)(2)", "(1)*(2)"),
        ("2pi", "2*pi"),
        ("log10(5)", "log10(5)"),
        ("0x1F+0b11", "31+3"),
        ("17o", "15"),
    ],
)
def test_prepare_rewrites_ui_text(evaluator, expression, expected):
    assert evaluator.prepare(expression) == expected


@pytest.mark.parametrize("expression", ["   ", "1;2", "x+1", "sqrt 4", "pi(2)", "0b12", "a[0]"])
def test_prepare_rejects_invalid_text(evaluator, expression):
    with pytest.raises(EvaluationError):
        evaluator.prepare(expression)


def test_namespace_exposes_functions_and_constants(evaluator):
    namespace = evaluator.namespace()
    for name in ("sin", "cot", "log2", "nthRoot", "PI", "i"):
        assert name in namespace
