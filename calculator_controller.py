"""Estado de la aplicación y transiciones por tecla.

El controlador es el único dueño del estado visible (expresión,
resultado, modo, sistema numérico, ajustes e historial). Cada acción
reemplaza el estado completo; nunca se modifica a medias.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

from base_converter import NumberSystem
from calculator_engine import ERROR, CalculatorEngine
from config import (
    DEFAULT_MODE,
    DEFAULT_NUMBER_SYSTEM,
    DEFAULT_PRECISION,
    Settings,
    clamp_precision,
)
from history import HistoryEntry
from keypad import CalculatorMode, KeyDescriptor, keys_for
from logging_config import get_logger


logger = get_logger(__name__)

LOG_CHOICES = ("log10(", "ln(", "log2(", "log(")
PANELS = ("history", "settings", "log")
CONTROL_KEYS = {"AC", "Backspace", "=", "±", "Rad", "Deg", "2nd", "logModal", "settings", "history"}


@dataclass(frozen=True)
class CalculatorState:
    expression: str = ""
    result: str = ""
    mode: CalculatorMode = CalculatorMode(DEFAULT_MODE)
    number_system: NumberSystem = NumberSystem[DEFAULT_NUMBER_SYSTEM]
    precision: int = DEFAULT_PRECISION
    is_radians: bool = True
    is_second: bool = False
    open_panel: Optional[str] = None


class CalculatorController:
    """Traduce tokens de teclado en nuevos estados."""

    def __init__(self, engine: Optional[CalculatorEngine] = None, settings: Optional[Settings] = None):
        self.engine = engine if engine is not None else CalculatorEngine()
        settings = settings or Settings()
        settings.validate()
        self.state = CalculatorState(
            precision=settings.precision,
            is_radians=settings.is_radians,
        )
        self.engine.angle_mode = settings.angle_mode

    # ── Consultas ────────────────────────────────────────────────

    @property
    def history(self) -> List[HistoryEntry]:
        return self.engine.history.entries

    @property
    def keys(self) -> List[KeyDescriptor]:
        s = self.state
        return keys_for(s.mode, s.number_system, s.is_radians, s.is_second)

    def _update(self, **changes) -> CalculatorState:
        self.state = replace(self.state, **changes)
        return self.state

    # ── Teclas ───────────────────────────────────────────────────

    def press(self, key: str) -> CalculatorState:
        s = self.state
        clears = key == "C" and s.mode != CalculatorMode.BASE
        if s.result == ERROR and key not in CONTROL_KEYS and not clears:
            # Tras un error la tecla pulsada inicia una expresión nueva
            return self._update(expression=key, result="")

        if key == "AC":
            return self._update(expression="", result="")
        if clears:
            return self._edit("")
        if key == "Backspace":
            return self._edit(s.expression[:-1])
        if key == "=":
            return self.evaluate()
        if key in ("Rad", "Deg"):
            return self.toggle_angle_mode()
        if key == "2nd":
            return self._update(is_second=not s.is_second)
        if key == "±":
            return self._edit(self._toggle_sign(s.expression))
        if key == "logModal":
            return self.toggle_panel("log")
        if key in ("settings", "history"):
            return self.toggle_panel(key)
        return self._update(expression=s.expression + key)

    def _edit(self, expression: str) -> CalculatorState:
        # Editar la expresión descarta un "Error" pendiente
        result = "" if self.state.result == ERROR else self.state.result
        return self._update(expression=expression, result=result)

    @staticmethod
    def _toggle_sign(expression: str) -> str:
        if expression.startswith("-"):
            return expression[1:]
        return "-" + expression

    def evaluate(self) -> CalculatorState:
        s = self.state
        outcome = self.engine.evaluate(s.expression, s.number_system, s.precision)
        if outcome is None:
            return s
        if not outcome.ok:
            return self._update(result=outcome.result)
        return self._update(expression=outcome.display_expression, result=outcome.result)

    # ── Ajustes y paneles ────────────────────────────────────────

    def toggle_angle_mode(self) -> CalculatorState:
        is_radians = not self.state.is_radians
        self.engine.angle_mode = "rad" if is_radians else "deg"
        return self._update(is_radians=is_radians)

    def set_precision(self, precision: int) -> CalculatorState:
        return self._update(precision=clamp_precision(precision))

    def set_mode(self, mode: CalculatorMode) -> CalculatorState:
        return self._update(mode=CalculatorMode(mode))

    def set_number_system(self, system: NumberSystem) -> CalculatorState:
        """Cambia la base activa; la expresión actual no se reinterpreta."""
        logger.debug("Sistema numérico: %s", system.name)
        return self._update(number_system=system)

    def toggle_panel(self, panel: str) -> CalculatorState:
        if panel not in PANELS:
            raise ValueError(f"Panel desconocido: {panel}")
        current = self.state.open_panel
        return self._update(open_panel=None if current == panel else panel)

    def close_panel(self) -> CalculatorState:
        return self._update(open_panel=None)

    def insert_logarithm(self, text: str) -> CalculatorState:
        if text not in LOG_CHOICES:
            raise ValueError(f"Logaritmo desconocido: {text}")
        return self._update(expression=self.state.expression + text, open_panel=None)

    # ── Historial ────────────────────────────────────────────────

    def select_history(self, entry: HistoryEntry) -> CalculatorState:
        return self._update(expression=entry.expression, result=entry.result, open_panel=None)

    def clear_history(self) -> CalculatorState:
        self.engine.history.clear()
        return self.state
