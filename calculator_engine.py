"""
Motor de cálculo de la calculadora.

Este módulo provee la clase CalculatorEngine, que coordina el
preprocesado de la expresión, la evaluación con mpmath, el formato del
resultado, la conversión al sistema numérico activo y el historial.

Contrato de interfaz:
    - evaluate(expression: str, system: NumberSystem, precision: int)
        -> EvaluationOutcome | None
    - angle_mode: propiedad 'rad' | 'deg'
    - history: HistoryStore
"""

from dataclasses import dataclass
from typing import Optional

from arbitrary_precision_engine import ArbitraryPrecisionEngine
from base_converter import NumberSystem, convert
from config import DEFAULT_PRECISION, HISTORY_CAPACITY, clamp_precision
from errors import ErrorKind, FormattingError
from expression_preprocessor import auto_close_parentheses, preprocess
from history import HistoryStore
from logging_config import get_logger


logger = get_logger(__name__)

ERROR = "Error"
DEC_MARKER = "(DEC) "

# Excepciones que el evaluador puede lanzar ante una expresión inválida
EVALUATION_FAILURES = (ValueError, ArithmeticError, TypeError)


@dataclass(frozen=True)
class EvaluationOutcome:
    display_expression: str
    result: str
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class CalculatorEngine:
    """Evalúa expresiones y registra las que tienen éxito en el historial."""

    def __init__(self, history: Optional[HistoryStore] = None):
        self._numeric = ArbitraryPrecisionEngine()
        self.history = history if history is not None else HistoryStore(HISTORY_CAPACITY)

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._numeric.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._numeric.angle_mode = mode

    @property
    def numeric(self) -> ArbitraryPrecisionEngine:
        return self._numeric

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(
        self,
        expression: str,
        system: NumberSystem = NumberSystem.DEC,
        precision: int = DEFAULT_PRECISION,
    ) -> Optional[EvaluationOutcome]:
        """Evalúa la expresión en el sistema numérico activo.

        Una expresión vacía no hace nada y devuelve None. Cualquier fallo
        se reduce a un resultado "Error" sin tocar el historial.
        """
        if not expression:
            return None

        precision = clamp_precision(precision)

        try:
            final_expression = auto_close_parentheses(expression)
            value = self._numeric.evaluate(preprocess(expression, system), precision)
        except EVALUATION_FAILURES as exc:
            kind = getattr(exc, "kind", ErrorKind.EVALUATION)
            logger.info("Evaluación fallida de %r: %s", expression, exc)
            return EvaluationOutcome(expression, ERROR, kind)

        try:
            formatted = self._numeric.format_value(value, precision, "auto")
        except FormattingError as exc:
            logger.info("No se pudo formatear el resultado de %r: %s", expression, exc)
            return EvaluationOutcome(expression, ERROR, exc.kind)

        if system != NumberSystem.DEC:
            formatted = self._to_active_base(value, formatted, system, precision)

        self.history.record(final_expression, formatted)
        logger.debug("%s = %s", final_expression, formatted)
        return EvaluationOutcome(final_expression, formatted)

    def _to_active_base(self, value, formatted: str, system: NumberSystem, precision: int) -> str:
        if not self._numeric.is_integer(value, precision):
            return f"{DEC_MARKER}{formatted}"

        decimal_text = str(self._numeric.round_to_integer(value, precision))
        return convert(decimal_text, NumberSystem.DEC, system)
