import pytest
from mpmath import mp

from arbitrary_precision_engine import ArbitraryPrecisionEngine
from errors import EvaluationError, FormattingError


@pytest.fixture
def engine():
    return ArbitraryPrecisionEngine()


def _auto(engine, expression, precision=16):
    return engine.format_value(engine.evaluate(expression, precision), precision)


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2^10", "1024"),
        ("1/3", "0.3333333333333333"),
        ("5!", "120"),
        ("10%", "0.1"),
        ("2×3−1", "5"),
        ("log(8, 2)", "3"),
        ("log10(1000)", "3"),
        ("nthRoot(27, 3)", "3"),
        ("0b101+0x10", "21"),
        ("101b+1Fh", "36"),
        ("sqrt(-4)", "2i"),
        ("2pi", "6.283185307179586"),
        ("2^3^2", "512"),
        ("(-2)^3", "-8"),
    ],
)
def test_evaluates_expressions(engine, expression, expected):
    assert _auto(engine, expression) == expected


def test_degree_mode_applies_to_trig(engine):
    engine.angle_mode = "deg"
    assert _auto(engine, "sin(30)") == "0.5"
    with pytest.raises(ValueError):
        engine.angle_mode = "grad"


@pytest.mark.parametrize("expression", ["1/", "foo(2)", "sin", "2 __import__", "pi(2)", ""])
def test_malformed_expressions_raise(engine, expression):
    with pytest.raises(EvaluationError):
        engine.evaluate(expression, 16)


def test_division_by_zero_raises(engine):
    with pytest.raises(ZeroDivisionError):
        engine.evaluate("1/0", 16)


def test_auto_notation_switches_to_exponential():
    fmt = ArbitraryPrecisionEngine.format_value
    assert fmt(mp.mpf(123456), 16) == "1.23456e+5"
    assert fmt(mp.mpf(99999), 16) == "99999"
    assert fmt(mp.mpf("0.001"), 16) == "0.001"
    assert fmt(mp.mpf("0.0001"), 16) == "1e-4"
    assert fmt(mp.mpf(0), 16) == "0"


def test_fixed_notation():
    fmt = ArbitraryPrecisionEngine.format_value
    assert fmt(mp.mpf(3), 5, "fixed") == "3.00000"
    assert fmt(mp.mpf("-2.5"), 2, "fixed") == "-2.50"
    assert fmt(mp.mpc(-1, 2), 4, "fixed") == "-1.0000 + 2.0000i"
    assert fmt(mp.mpc(-1, -2), 4, "fixed") == "-1.0000 - 2.0000i"


def test_complex_formatting_special_cases():
    fmt = ArbitraryPrecisionEngine.format_value
    assert fmt(mp.mpc(0, 1), 16) == "i"
    assert fmt(mp.mpc(0, -1), 16) == "-i"
    assert fmt(mp.mpc(3, 0), 16) == "3"
    assert fmt(mp.mpc(2, 1), 16) == "2 + i"


def test_formatting_errors():
    fmt = ArbitraryPrecisionEngine.format_value
    with pytest.raises(FormattingError):
        fmt(mp.mpf(1), 16, "engineering")
    with pytest.raises(FormattingError):
        fmt((1, 2), 16)


def test_integer_detection(engine):
    assert engine.is_integer(mp.mpf(3), 16)
    assert engine.is_integer(mp.mpc(2, 0), 16)
    assert not engine.is_integer(mp.mpf("3.5"), 16)
    assert not engine.is_integer(mp.mpc(1, 1), 16)
    assert engine.round_to_integer(mp.mpf(-7), 16) == -7


def test_lu_solve(engine):
    solution = engine.lu_solve([[2, 1], [1, 3]], [3, 5])
    assert [engine.format_value(x, 5, "fixed") for x in solution] == ["0.80000", "1.40000"]
    with pytest.raises(ZeroDivisionError):
        engine.lu_solve([[1, 2], [2, 4]], [1, 2])


def test_only_last_exponent_of_power_chain_stays_integer():
    promoted = ArbitraryPrecisionEngine._promote_numeric_literals("9**9**9")
    assert promoted.count('mpf("9")') == 2
    assert promoted.rstrip().endswith("**9")


def test_power_tower_overflows_instead_of_hanging(engine):
    with pytest.raises(OverflowError):
        engine.evaluate("9^9^9^9", 16)
