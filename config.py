"""Constantes globales y ajustes de la calculadora."""

import logging
from dataclasses import dataclass


DEFAULT_PRECISION = 16
MIN_PRECISION = 2
MAX_PRECISION = 64

# Dígitos extra con los que trabaja mpmath por encima de la precisión visible
GUARD_DIGITS = 10

HISTORY_CAPACITY = 50

DEFAULT_ANGLE_MODE = "rad"
DEFAULT_MODE = "scientific"
DEFAULT_NUMBER_SYSTEM = "DEC"

LOG_LEVEL = logging.INFO
LOG_FILE = None


def clamp_precision(precision: int) -> int:
    return min(MAX_PRECISION, max(MIN_PRECISION, int(precision)))


@dataclass
class Settings:
    precision: int = DEFAULT_PRECISION
    angle_mode: str = DEFAULT_ANGLE_MODE

    def validate(self) -> None:
        if self.angle_mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        if not (MIN_PRECISION <= int(self.precision) <= MAX_PRECISION):
            raise ValueError(
                f"La precisión debe estar entre {MIN_PRECISION} y {MAX_PRECISION}"
            )

    @property
    def is_radians(self) -> bool:
        return self.angle_mode == "rad"
