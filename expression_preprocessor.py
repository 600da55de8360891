"""
Preprocesado de la expresión antes de entregarla al evaluador.

Pasos, en orden:
    1. Cierre automático de paréntesis pendientes.
    2. Si el sistema activo no es DEC, reescritura de los numerales del
       sistema activo a decimal.

Gramática de la reescritura (sistema != DEC):

    expresión := (PALABRA | OTRO)*
    PALABRA   := [0-9A-Za-z_]+            (racha maximal)
    OTRO      := cualquier otro carácter

    Cada PALABRA se clasifica así:
        0[bBoOxX][0-9A-Fa-f_]+   literal con prefijo      -> sin cambios
        [0-9A-F_]+[bho]          literal con sufijo       -> sin cambios
        [0-9A-F_]+               numeral del sistema      -> decimal
        resto                    identificador (sin, log10, PI, ...)
                                                          -> sin cambios

Los dígitos dentro de un identificador (log10, log2) nunca se reescriben.
"""

import re

from base_converter import NumberSystem, parse_integer
from logging_config import get_logger


logger = get_logger(__name__)

_PREFIXED_LITERAL = re.compile(r"0[bBoOxX][0-9A-Fa-f_]+")
_SUFFIXED_LITERAL = re.compile(r"[0-9A-F_]+[bho]")
_NUMERAL = re.compile(r"[0-9A-F_]+")

WORD = "word"
OTHER = "other"


def _is_word_char(char: str) -> bool:
    return char == "_" or ("0" <= char <= "9") or ("a" <= char.lower() <= "z")


def auto_close_parentheses(expr: str) -> str:
    missing = expr.count("(") - expr.count(")")
    if missing > 0:
        return expr + ")" * missing
    return expr


def tokenize_words(expr: str) -> list[tuple[str, str]]:
    """Divide la expresión en rachas PALABRA y caracteres OTRO."""
    tokens = []
    i = 0
    n = len(expr)

    while i < n:
        if not _is_word_char(expr[i]):
            tokens.append((OTHER, expr[i]))
            i += 1
            continue

        start = i
        while i < n and _is_word_char(expr[i]):
            i += 1
        tokens.append((WORD, expr[start:i]))

    return tokens


def _rewrite_word(word: str, system: NumberSystem) -> str:
    if _PREFIXED_LITERAL.fullmatch(word) or _SUFFIXED_LITERAL.fullmatch(word):
        return word
    if _NUMERAL.fullmatch(word):
        return str(parse_integer(word, system))
    return word


def rewrite_numerals(expr: str, system: NumberSystem) -> str:
    """Reescribe a decimal los numerales escritos en `system`.

    Raises:
        InvalidNumeralError: un numeral contiene dígitos inválidos.
    """
    if system == NumberSystem.DEC:
        return expr

    parts = []
    for kind, text in tokenize_words(expr):
        parts.append(_rewrite_word(text, system) if kind == WORD else text)
    return "".join(parts)


def preprocess(expr: str, system: NumberSystem) -> str:
    """Devuelve el texto exacto que se entrega al evaluador."""
    closed = auto_close_parentheses(expr)
    final = rewrite_numerals(closed, system)
    if final != expr:
        logger.debug("Preprocesado (%s): %r -> %r", system.name, expr, final)
    return final
