"""Taxonomía de errores de la calculadora.

Las operaciones internas lanzan estas excepciones; los límites de cada
operación (motor de evaluación, solvers, conversor) las atrapan y las
reducen a un texto visible para el usuario.
"""

from enum import Enum


class ErrorKind(Enum):
    PARSE = "parse"
    EVALUATION = "evaluation"
    FORMATTING = "formatting"
    UNSUPPORTED_DEGREE = "unsupported_degree"
    CAPABILITY_GAP = "capability_gap"
    INVALID_INPUT = "invalid_input"


class CalculatorError(ValueError):
    """Error base; cada subclase declara su ErrorKind."""

    kind = ErrorKind.EVALUATION


class InvalidNumeralError(CalculatorError):
    kind = ErrorKind.PARSE


class EvaluationError(CalculatorError):
    kind = ErrorKind.EVALUATION


class FormattingError(CalculatorError):
    kind = ErrorKind.FORMATTING


class InvalidInputError(CalculatorError):
    kind = ErrorKind.INVALID_INPUT
