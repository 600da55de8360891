"""Configuración del logger global de la calculadora."""

import logging
import sys
from typing import Optional


LOGGER_NAME = "calculadora"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configura el logger raíz del espacio de nombres 'calculadora'.

    Args:
        level: nivel de logging (logging.DEBUG, logging.INFO, ...).
        log_file: ruta opcional donde guardar también los mensajes.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Evitar handlers duplicados si se llama más de una vez
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging inicializado.")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Devuelve un logger hijo de 'calculadora' para el módulo dado."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
