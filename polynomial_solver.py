"""Solver de polinomios de grado <= 2 por fórmula cerrada."""

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from arbitrary_precision_engine import ArbitraryPrecisionEngine
from errors import InvalidInputError
from logging_config import get_logger


logger = get_logger(__name__)

MIN_DEGREE = 1
MAX_DEGREE = 5
COMPLEX_ROOT_DECIMALS = 4

INFINITE_SOLUTIONS = "Infinite solutions"
NO_SOLUTION = "No solution"
UNSUPPORTED_DEGREE = f"Solver supports up to degree {MAX_DEGREE}."
INVALID_COEFFICIENTS = "Invalid coefficients"

_TERM_LABELS = ["x⁵", "x⁴", "x³", "x²", "x", "#"]


def format_real(value: float) -> str:
    """Representación más corta del número; enteros sin '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _format_complex_root(real: float, imag: float) -> str:
    root = ArbitraryPrecisionEngine.complex_number(real, imag)
    return ArbitraryPrecisionEngine.format_value(root, COMPLEX_ROOT_DECIMALS, "fixed")


def solve_quadratic(a: float, b: float, c: float) -> List[str]:
    """Raíces de a·x² + b·x + c = 0 como textos listos para mostrar."""
    a, b, c = float(a), float(b), float(c)

    if a == 0:
        if b == 0:
            return [INFINITE_SOLUTIONS] if c == 0 else [NO_SOLUTION]
        return [f"x = {format_real(-c / b)}"]

    discriminant = b * b - 4 * a * c
    logger.debug("Discriminante de (%s, %s, %s): %s", a, b, c, discriminant)

    if discriminant > 0:
        x1 = (-b + math.sqrt(discriminant)) / (2 * a)
        x2 = (-b - math.sqrt(discriminant)) / (2 * a)
        return [f"x₁ = {format_real(x1)}", f"x₂ = {format_real(x2)}"]

    if discriminant == 0:
        return [f"x = {format_real(-b / (2 * a))}"]

    real_part = -b / (2 * a)
    imag_part = math.sqrt(-discriminant) / (2 * a)
    return [
        f"x₁ = {_format_complex_root(real_part, imag_part)}",
        f"x₂ = {_format_complex_root(real_part, -imag_part)}",
    ]


def _coefficient(coeffs: Sequence[float], index: int) -> float:
    try:
        value = coeffs[index]
    except IndexError:
        return 0.0
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0.0
    return value


def solve_polynomial(coeffs: Sequence[float]) -> List[str]:
    """Coeficientes de mayor a menor grado; grado = len(coeffs) - 1.

    Grados 3 a 5 devuelven un aviso: no hay método numérico implementado.
    """
    degree = len(coeffs) - 1
    if degree > MAX_DEGREE:
        return [UNSUPPORTED_DEGREE]
    if degree <= 1:
        return solve_quadratic(0, _coefficient(coeffs, 0), _coefficient(coeffs, 1))
    if degree == 2:
        return solve_quadratic(coeffs[0], coeffs[1], coeffs[2])

    return [
        f"Solving polynomials of degree {degree} requires advanced numerical methods.",
        "This feature is a placeholder.",
    ]


# ── Datos del modal de polinomios ────────────────────────────────

def coefficient_labels(degree: int) -> List[str]:
    return _TERM_LABELS[-(degree + 1):]


def parse_coefficient(text: str) -> float:
    text = (text or "").strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError as exc:
        raise InvalidInputError(f"Coeficiente inválido: {text}") from exc
    if not math.isfinite(value):
        raise InvalidInputError(f"Coeficiente inválido: {text}")
    return value


def parse_coefficients(texts: Sequence[str], degree: int) -> List[float]:
    """Convierte los campos del modal; los vacíos cuentan como 0."""
    padded = list(texts[: degree + 1]) + [""] * max(0, degree + 1 - len(texts))
    return [parse_coefficient(text) for text in padded]


@dataclass
class PolynomialSpec:
    degree: int = 2
    coefficients: List[str] = field(default_factory=lambda: ["1", "-3", "2"])

    def __post_init__(self):
        if not (MIN_DEGREE <= self.degree <= MAX_DEGREE):
            raise ValueError(f"El grado debe estar entre {MIN_DEGREE} y {MAX_DEGREE}")
        self.coefficients = self._fit(self.coefficients, self.degree)

    @staticmethod
    def _fit(coefficients: Sequence[str], degree: int) -> List[str]:
        # Se alinean por potencia: el término independiente queda al final
        size = degree + 1
        values = list(coefficients)[-size:] if coefficients else []
        return [""] * (size - len(values)) + values

    def with_degree(self, degree: int) -> "PolynomialSpec":
        return PolynomialSpec(degree, self._fit(self.coefficients, degree))

    @property
    def labels(self) -> List[str]:
        return coefficient_labels(self.degree)


def solve_polynomial_spec(spec: PolynomialSpec) -> List[str]:
    try:
        numeric = parse_coefficients(spec.coefficients, spec.degree)
    except InvalidInputError as exc:
        logger.info("Coeficientes rechazados: %s", exc)
        return [INVALID_COEFFICIENTS]

    if spec.degree == 2:
        return solve_quadratic(*numeric)
    return solve_polynomial(numeric)
