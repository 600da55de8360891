"""Conversión de numerales enteros entre bases 2, 8, 10 y 16."""

import re
from enum import Enum

from errors import InvalidNumeralError
from logging_config import get_logger


logger = get_logger(__name__)

INVALID = "Invalid"


class NumberSystem(Enum):
    BIN = 2
    OCT = 8
    DEC = 10
    HEX = 16

    @property
    def base(self) -> int:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "NumberSystem":
        try:
            return cls[name.upper()]
        except KeyError as exc:
            raise ValueError(f"Sistema numérico desconocido: {name}") from exc


_DIGITS = "0123456789ABCDEF"
_FORMAT_SPEC = {
    NumberSystem.BIN: "b",
    NumberSystem.OCT: "o",
    NumberSystem.DEC: "d",
    NumberSystem.HEX: "X",
}


def valid_digits(system: NumberSystem) -> str:
    """Dígitos admitidos por la base (en mayúsculas)."""
    return _DIGITS[: system.base]


def parse_integer(text: str, system: NumberSystem) -> int:
    """Interpreta `text` como entero en la base de `system`.

    Admite un '-' inicial y '_' entre dígitos. No admite prefijos
    (0x, 0b), espacios ni parte fraccionaria.

    Raises:
        InvalidNumeralError: texto vacío o dígitos inválidos para la base.
    """
    digits = valid_digits(system)
    pattern = rf"-?[{digits}](?:_?[{digits}])*"
    if not text or not re.fullmatch(pattern, text.upper()):
        raise InvalidNumeralError(
            f"'{text}' no es un numeral válido en base {system.base}"
        )
    return int(text, system.base)


def format_integer(value: int, system: NumberSystem) -> str:
    return format(value, _FORMAT_SPEC[system])


def convert(value: str, from_system: NumberSystem, to_system: NumberSystem) -> str:
    """Convierte `value` de `from_system` a `to_system`.

    Devuelve "Invalid" si el texto no es un entero válido en la base
    de origen; nunca lanza.
    """
    if from_system == to_system:
        return value

    try:
        number = parse_integer(value, from_system)
    except InvalidNumeralError as exc:
        logger.debug("Conversión rechazada: %s", exc)
        return INVALID

    return format_integer(number, to_system)
