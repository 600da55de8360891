"""Resolución de sistemas lineales A x = b sobre mpmath.lu_solve."""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from arbitrary_precision_engine import ArbitraryPrecisionEngine
from errors import ErrorKind, InvalidInputError
from logging_config import get_logger


logger = get_logger(__name__)

MIN_SIZE = 2
MAX_SIZE = 4
SOLUTION_DECIMALS = 5

INVALID_MATRIX_VALUE = "Invalid matrix value"
INVALID_VECTOR_VALUE = "Invalid vector value"
CALCULATION_ERROR = "Calculation error"


@dataclass(frozen=True)
class LinearSystemResult:
    solution: List[str] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LinearSystemSpec:
    """Celdas de texto del modal: matriz n×n y vector de n elementos."""

    size: int = MIN_SIZE
    matrix: List[List[str]] = field(default_factory=list)
    vector: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not (MIN_SIZE <= self.size <= MAX_SIZE):
            raise ValueError(f"El tamaño debe estar entre {MIN_SIZE} y {MAX_SIZE}")
        if not self.matrix:
            self.matrix = [[""] * self.size for _ in range(self.size)]
        if not self.vector:
            self.vector = [""] * self.size

    def resize(self, size: int) -> "LinearSystemSpec":
        return LinearSystemSpec(size)


def _parse_cell(text, message: str) -> float:
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        try:
            value = float(str(text).strip())
        except ValueError as exc:
            raise InvalidInputError(message) from exc
    if not math.isfinite(value):
        raise InvalidInputError(message)
    return value


def parse_system(matrix: Sequence[Sequence], vector: Sequence):
    """Valida y convierte todas las celdas antes de resolver.

    Raises:
        InvalidInputError: celda no numérica o dimensiones incompatibles.
    """
    size = len(matrix)
    if size == 0 or any(len(row) != size for row in matrix):
        raise InvalidInputError("Matrix must be square")
    if len(vector) != size:
        raise InvalidInputError("Vector size must match the matrix")

    numeric_matrix = [[_parse_cell(cell, INVALID_MATRIX_VALUE) for cell in row] for row in matrix]
    numeric_vector = [_parse_cell(cell, INVALID_VECTOR_VALUE) for cell in vector]
    return numeric_matrix, numeric_vector


def solve_linear_system(matrix: Sequence[Sequence], vector: Sequence) -> LinearSystemResult:
    """Resuelve A x = b; cada componente con 5 decimales fijos."""
    try:
        numeric_matrix, numeric_vector = parse_system(matrix, vector)
    except InvalidInputError as exc:
        logger.info("Sistema lineal rechazado: %s", exc)
        return LinearSystemResult(error=str(exc), error_kind=exc.kind)

    engine = ArbitraryPrecisionEngine()
    try:
        solution = engine.lu_solve(numeric_matrix, numeric_vector)
    except (ZeroDivisionError, ValueError, ArithmeticError) as exc:
        logger.info("Fallo al resolver el sistema: %s", exc)
        return LinearSystemResult(error=str(exc) or CALCULATION_ERROR, error_kind=ErrorKind.EVALUATION)

    formatted = [engine.format_value(x, SOLUTION_DECIMALS, "fixed") for x in solution]
    logger.debug("Solución: %s", formatted)
    return LinearSystemResult(solution=formatted)


def solve_linear_spec(spec: LinearSystemSpec) -> LinearSystemResult:
    return solve_linear_system(spec.matrix, spec.vector)
