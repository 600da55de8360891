"""Definiciones de teclado por modo.

Cada modo produce una lista fija de KeyDescriptor. `key` es el token que
recibe el controlador; `label` es solo texto para la interfaz.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from base_converter import NumberSystem, valid_digits


class CalculatorMode(Enum):
    BASIC = "basic"
    SCIENTIFIC = "scientific"
    BASE = "base"


PRIMARY = "primary"
SECONDARY = "secondary"
OPERATOR = "operator"
SPECIAL = "special"


@dataclass(frozen=True)
class KeyDescriptor:
    key: str
    label: str
    variant: str = PRIMARY
    span: bool = False
    disabled: bool = False


def _k(key, label=None, variant=PRIMARY, span=False, disabled=False) -> KeyDescriptor:
    return KeyDescriptor(key, label if label is not None else key, variant, span, disabled)


def scientific_keys(is_radians: bool, is_second: bool) -> List[KeyDescriptor]:
    """Teclado científico; `is_second` activa la segunda función."""
    s = is_second
    return [
        # Fila 1
        _k("2nd", "2ⁿᵈ", SPECIAL if s else SECONDARY),
        _k("asin(" if s else "sin(", "sin⁻¹" if s else "sin", SECONDARY),
        _k("acos(" if s else "cos(", "cos⁻¹" if s else "cos", SECONDARY),
        _k("atan(" if s else "tan(", "tan⁻¹" if s else "tan", SECONDARY),
        _k("Backspace", "⌫", OPERATOR),
        # Fila 2
        _k("^(1/3)" if s else "^3", "∛" if s else "x³", SECONDARY),
        _k("cot(" if s else "PI", "cot" if s else "π", SECONDARY),
        _k("sec(" if s else "%", "sec" if s else "%", SECONDARY),
        _k("(", "(", SECONDARY),
        _k(")", ")", SECONDARY),
        # Fila 3
        _k("7"), _k("8"), _k("9"),
        _k("10^", "10ˣ", SECONDARY) if s else _k("logModal", "log...", SECONDARY),
        _k("/", "÷", OPERATOR),
        # Fila 4
        _k("4"), _k("5"), _k("6"),
        _k("e^", "eˣ", SECONDARY) if s else _k("ln(", "ln", SECONDARY),
        _k("*", "×", OPERATOR),
        # Fila 5
        _k("1"), _k("2"), _k("3"),
        _k("nthRoot(", "ⁿ√", SECONDARY) if s else _k("^", "xʸ", SECONDARY),
        _k("-", "−", OPERATOR),
        # Fila 6
        _k("0"), _k("."),
        _k("csc(" if s else "!", "csc" if s else "n!", SECONDARY),
        _k("^2", "x²", SECONDARY) if s else _k("sqrt(", "√", SECONDARY),
        _k("+", "+", OPERATOR),
        # Fila 7
        _k("AC", "AC", OPERATOR),
        _k("Deg" if is_radians else "Rad", "Rad" if is_radians else "Deg", SECONDARY),
        _k("history", "Hist", SECONDARY),
        _k("=", "=", OPERATOR, span=True),
    ]


BASIC_KEYS: List[KeyDescriptor] = [
    _k("AC", "AC", OPERATOR), _k("C", "C", OPERATOR),
    _k("%", "%", OPERATOR), _k("/", "÷", OPERATOR),
    _k("7"), _k("8"), _k("9"), _k("*", "×", OPERATOR),
    _k("4"), _k("5"), _k("6"), _k("-", "−", OPERATOR),
    _k("1"), _k("2"), _k("3"), _k("+", "+", OPERATOR),
    _k("0", span=True), _k("."), _k("=", "=", OPERATOR),
]


def number_system_keys(system: NumberSystem) -> List[KeyDescriptor]:
    """Teclado de bases; los dígitos ajenos a la base quedan deshabilitados."""
    allowed = valid_digits(system)

    def digit(d, span=False):
        return _k(d, span=span, disabled=d not in allowed)

    return [
        _k("(", "(", SECONDARY), _k(")", ")", SECONDARY),
        _k("Backspace", "⌫", OPERATOR), _k("AC", "AC", OPERATOR),
        digit("A"), digit("B"), digit("C"), _k("/", "÷", OPERATOR),
        digit("D"), digit("E"), digit("F"), _k("*", "×", OPERATOR),
        digit("7"), digit("8"), digit("9"), _k("-", "−", OPERATOR),
        digit("4"), digit("5"), digit("6"), _k("+", "+", OPERATOR),
        digit("1"), digit("2"), digit("3"), _k("±", "±", SECONDARY),
        digit("0", span=True), _k("=", "=", OPERATOR, span=True),
    ]


def keys_for(mode: CalculatorMode, system: NumberSystem = NumberSystem.DEC,
             is_radians: bool = True, is_second: bool = False) -> List[KeyDescriptor]:
    if mode == CalculatorMode.BASE:
        return number_system_keys(system)
    if mode == CalculatorMode.SCIENTIFIC:
        return scientific_keys(is_radians, is_second)
    return BASIC_KEYS
