"""Evaluador numérico de precisión arbitraria basado en mpmath.

Reúne las capacidades numéricas que consumen el motor y los solvers:
evaluación de expresiones, formato de resultados (notación "auto" y
"fixed"), números complejos y resolución de sistemas lineales densos.
"""

from __future__ import annotations

import io
import re
import token
import tokenize

from errors import EvaluationError, FormattingError
from formula_evaluator import FormulaEvaluator
from logging_config import get_logger

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


logger = get_logger(__name__)

NOTATIONS = ("auto", "fixed")

# Límites de la notación "auto": fija si LOWER_EXP <= exponente < UPPER_EXP
AUTO_LOWER_EXP = -3
AUTO_UPPER_EXP = 5

# Tamaño máximo, en bits de exponente, del resultado de una potencia
MAX_POWER_BITS = 2 ** 40

_SIGNIFICANT_TOKENS = {token.OP, token.NUMBER, token.NAME, token.STRING}


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    def __init__(self):
        self._angle_mode = "rad"

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def _trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            value = mp.radians(x) if mode == "deg" else x
            return fn(value)

        return wrapped

    def _inv_trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            result = fn(x)
            return mp.degrees(result) if mode == "deg" else result

        return wrapped

    @staticmethod
    def _factorial(x):
        if not mp.isfinite(x):
            raise ValueError("factorial no admite infinito o NaN")

        if mp.floor(x) == x and x >= 0:
            n = int(x)
            if n <= 5000:
                return mp.factorial(n)

            return mp.exp(mp.loggamma(n + 1))

        raise ValueError("factorial requiere entero no negativo")

    @staticmethod
    def _power(base, exponent):
        """base ** exponent, rechazando resultados de tamaño desmedido."""
        magnitude = abs(base)
        if magnitude != 0 and mp.isfinite(magnitude) and mp.isfinite(abs(exponent)):
            bits = abs(exponent) * abs(mp.log(magnitude, 2))
            if bits > MAX_POWER_BITS:
                raise OverflowError("Potencia demasiado grande")
        return base ** exponent

    @staticmethod
    def _log(x, base=None):
        if base is None:
            return mp.log(x)
        return mp.log(x, base)

    def build_namespace(self) -> dict:
        return {
            "sin": self._trig(mp.sin),
            "cos": self._trig(mp.cos),
            "tan": self._trig(mp.tan),
            "cot": self._trig(mp.cot),
            "sec": self._trig(mp.sec),
            "csc": self._trig(mp.csc),
            "asin": self._inv_trig(mp.asin),
            "acos": self._inv_trig(mp.acos),
            "atan": self._inv_trig(mp.atan),
            "ln": mp.log,
            "log": self._log,
            "log10": mp.log10,
            "log2": lambda x: mp.log(x, 2),
            "sqrt": mp.sqrt,
            "cbrt": mp.cbrt,
            "nthRoot": mp.root,
            "factorial": self._factorial,
            "exp": mp.exp,
            "abs": abs,
            "mpf": mp.mpf,
            "_pow": self._power,
            "π": mp.mpf(mp.pi),
            "pi": mp.mpf(mp.pi),
            "PI": mp.mpf(mp.pi),
            "e": mp.mpf(mp.e),
            "i": mp.mpc(0, 1),
        }


class ArbitraryPrecisionEngine:
    """Evalúa y formatea expresiones con la precisión pedida."""

    def __init__(self):
        self._provider = MPMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._provider.angle_mode = mode

    @staticmethod
    def working_digits(precision: int) -> int:
        return max(40, precision * 2 + 10)

    # ── Evaluación ───────────────────────────────────────────────

    def evaluate(self, expression: str, precision: int):
        """Evalúa la expresión y devuelve un mpf, mpc o int.

        Raises:
            EvaluationError: expresión inválida o función desconocida.
            ZeroDivisionError, OverflowError, ArithmeticError: dominio.
        """
        with mp.workdps(self.working_digits(precision)):
            processed = self._evaluator.prepare(expression)
            processed = self._promote_numeric_literals(processed)
            logger.debug("Evaluando %r", processed)
            return FormulaEvaluator.run(processed, self._evaluator.namespace())

    @staticmethod
    def _promote_numeric_literals(expression: str) -> str:
        stream = io.StringIO(expression)
        try:
            raw_tokens = list(tokenize.generate_tokens(stream.readline))
        except (tokenize.TokenError, SyntaxError) as exc:
            raise EvaluationError("Error de sintaxis") from exc

        significant = [tok.string if tok.type in _SIGNIFICANT_TOKENS else None for tok in raw_tokens]
        tokens = []
        previous_token_text = ""

        for index, tok in enumerate(raw_tokens):
            if tok.type == token.NUMBER and not tok.string.lower().endswith("j"):
                is_integer_literal = bool(re.fullmatch(r"\d+", tok.string))
                next_token_text = next((s for s in significant[index + 1:] if s is not None), "")
                # Solo el último exponente de una cadena de potencias queda como int
                if is_integer_literal and previous_token_text == "**" and next_token_text != "**":
                    promoted = tok.string
                else:
                    promoted = f'mpf("{tok.string}")'
                tok = tokenize.TokenInfo(tok.type, promoted, tok.start, tok.end, tok.line)
            tokens.append(tok)
            if tok.type in _SIGNIFICANT_TOKENS:
                previous_token_text = tok.string

        try:
            return tokenize.untokenize(tokens)
        except (tokenize.TokenError, SyntaxError, ValueError) as exc:
            raise EvaluationError("Error de sintaxis") from exc

    def is_integer(self, value, precision: int) -> bool:
        """True si el valor es un real entero tras redondear a `precision`."""
        with mp.workdps(self.working_digits(precision)):
            real = self._as_real(value)
            if real is None or not mp.isfinite(real):
                return False
            nearest = mp.nint(real)
            tolerance = mp.mpf(10) ** (-precision) * max(1, abs(real))
            return abs(real - nearest) <= tolerance

    def round_to_integer(self, value, precision: int) -> int:
        with mp.workdps(self.working_digits(precision)):
            real = self._as_real(value)
            if real is None or not mp.isfinite(real):
                raise ValueError("El valor no es un real finito")
            return int(mp.nint(real))

    @staticmethod
    def _as_real(value):
        if isinstance(value, (bool, tuple, list)):
            return None
        if isinstance(value, (mp.mpc, complex)):
            if value.imag != 0:
                return None
            return mp.mpf(value.real)
        try:
            return mp.mpf(value)
        except (TypeError, ValueError):
            return None

    # ── Capacidades auxiliares ──────────────────────────────────

    @staticmethod
    def complex_number(real, imag):
        return mp.mpc(real, imag)

    def lu_solve(self, matrix, vector, precision: int = 16) -> list:
        """Resuelve A x = b por descomposición LU (mpmath.lu_solve).

        Raises:
            ZeroDivisionError: matriz singular.
            ValueError: dimensiones incompatibles.
        """
        with mp.workdps(self.working_digits(precision)):
            solution = mp.lu_solve(mp.matrix(matrix), mp.matrix(vector))
            return [solution[k] for k in range(solution.rows)]

    # ── Formato del resultado ────────────────────────────────────

    @classmethod
    def format_value(cls, value, precision: int, notation: str = "auto") -> str:
        """Convierte un valor numérico en texto.

        En notación "auto" `precision` son dígitos significativos; en
        "fixed" son decimales.

        Raises:
            FormattingError: notación desconocida o valor no numérico.
        """
        if notation not in NOTATIONS:
            raise FormattingError(f"Notación desconocida: {notation}")
        if isinstance(value, (bool, tuple, list, dict)) or precision < 0:
            raise FormattingError("Valor no formateable")

        with mp.workdps(cls.working_digits(precision)):
            if isinstance(value, (mp.mpc, complex)):
                return cls._format_complex(mp.mpc(value), precision, notation)

            try:
                real = mp.mpf(value)
            except (TypeError, ValueError) as exc:
                raise FormattingError(f"Valor no formateable: {value!r}") from exc
            return cls._format_real(real, precision, notation)

    @classmethod
    def _format_real(cls, value, precision: int, notation: str) -> str:
        if not mp.isfinite(value):
            if mp.isnan(value):
                return "NaN"
            return "∞" if value > 0 else "-∞"

        if notation == "fixed":
            return cls._format_fixed(value, precision)

        if precision < 1:
            raise FormattingError("La notación auto requiere al menos 1 dígito")
        if value == 0:
            return "0"

        text = mp.nstr(
            value,
            n=precision,
            min_fixed=AUTO_LOWER_EXP - 1,
            max_fixed=AUTO_UPPER_EXP,
        )
        return cls._strip_unit_fraction(text)

    @staticmethod
    def _strip_unit_fraction(text: str) -> str:
        # mpmath deja "5.0" y "1.0e+5" donde se espera "5" y "1e+5"
        text = text.replace(".0e", "e")
        if text.endswith(".0"):
            text = text[:-2]
        return text

    @staticmethod
    def _format_fixed(value, places: int) -> str:
        scaled = int(mp.nint(value * mp.mpf(10) ** places))
        sign = "-" if scaled < 0 else ""
        digits = str(abs(scaled)).rjust(places + 1, "0")
        if places == 0:
            return f"{sign}{digits}"
        return f"{sign}{digits[:-places]}.{digits[-places:]}"

    @classmethod
    def _format_complex(cls, value, precision: int, notation: str) -> str:
        re_part = value.real
        im_part = value.imag
        str_re = cls._format_real(re_part, precision, notation)
        str_im = cls._format_real(im_part, precision, notation)

        # Una parte despreciable frente a la otra se trata como cero
        epsilon = mp.mpf(10) ** (-precision)
        if im_part != 0 and abs(re_part / im_part) < epsilon:
            re_part = 0
        if re_part != 0 and abs(im_part / re_part) < epsilon:
            im_part = 0

        if im_part == 0:
            return str_re
        if re_part == 0:
            if im_part == 1:
                return "i"
            if im_part == -1:
                return "-i"
            return f"{str_im}i"
        if im_part < 0:
            if im_part == -1:
                return f"{str_re} - i"
            return f"{str_re} - {str_im[1:]}i"
        if im_part == 1:
            return f"{str_re} + i"
        return f"{str_re} + {str_im}i"
