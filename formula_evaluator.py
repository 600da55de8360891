"""Parseo y evaluación de expresiones para la calculadora científica."""

import ast
import re

from errors import EvaluationError


# Nombre del namespace al que se delegan las potencias, si existe
POWER_FUNCTION = "_pow"


class _PowerCalls(ast.NodeTransformer):
    """Convierte cada `a ** b` en `_pow(a, b)`."""

    def visit_BinOp(self, node):
        self.generic_visit(node)
        if not isinstance(node.op, ast.Pow):
            return node
        call = ast.Call(
            func=ast.Name(id=POWER_FUNCTION, ctx=ast.Load()),
            args=[node.left, node.right],
            keywords=[],
        )
        return ast.copy_location(call, node)


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico.

    El proveedor aporta el namespace de funciones y constantes; este
    módulo solo valida y reescribe el texto.
    """

    _ALLOWED_CHARS = re.compile(r"^[\d\s+\-*/^().,!%_πa-zA-Z×÷−√]*$")
    _FUNCTION_IDENTIFIERS = {
        "sin",
        "cos",
        "tan",
        "asin",
        "acos",
        "atan",
        "cot",
        "sec",
        "csc",
        "ln",
        "log",
        "log10",
        "log2",
        "sqrt",
        "cbrt",
        "nthRoot",
        "factorial",
        "exp",
        "abs",
    }
    _CONSTANT_IDENTIFIERS = {"pi", "PI", "e", "i", "π"}
    _ALLOWED_IDENTIFIERS = _FUNCTION_IDENTIFIERS | _CONSTANT_IDENTIFIERS

    _PREFIXED_LITERAL = re.compile(r"(?<![\w.])0([bBoOxX])([0-9A-Fa-f_]+)\b")
    _SUFFIXED_LITERAL = re.compile(r"(?<![\w.])([0-9A-F_]+)([bho])\b")
    _LITERAL_BASES = {"b": 2, "o": 8, "x": 16, "h": 16}
    _IDENTIFIER = re.compile(r"(?<![\d.\w])[A-Za-z_π][\w]*|π")

    def __init__(self, provider):
        self._provider = provider

    def prepare(self, expression: str) -> str:
        """Valida el texto de UI y lo reescribe como expresión Python."""
        if not expression or not expression.strip():
            raise EvaluationError("Expresión vacía")

        self._validate_raw_expression(expression)
        return self._preprocess(expression)

    def namespace(self) -> dict:
        return self._provider.build_namespace()

    @staticmethod
    def run(processed: str, namespace: dict):
        try:
            tree = ast.parse(processed.strip(), mode="eval")
        except SyntaxError as exc:
            raise EvaluationError("Error de sintaxis") from exc

        if POWER_FUNCTION in namespace:
            tree = ast.fix_missing_locations(_PowerCalls().visit(tree))

        try:
            return eval(compile(tree, "<expresión>", "eval"), {"__builtins__": {}}, namespace)
        except NameError as exc:
            raise EvaluationError(f"Desconocido: {exc}") from exc

    def _validate_raw_expression(self, expression: str):
        if not self._ALLOWED_CHARS.fullmatch(expression):
            raise EvaluationError("Expresión contiene caracteres inválidos")
        if "__" in expression or any(c in expression for c in "[]{};:"):
            raise EvaluationError("Expresión contiene operadores no permitidos")

    def _preprocess(self, expr: str) -> str:
        expr = expr.strip()

        expr = expr.replace("×", "*")
        expr = expr.replace("÷", "/")
        expr = expr.replace("−", "-")

        expr = self._replace_base_literals(expr)
        expr = self._replace_factorial(expr)
        expr = expr.replace("^", "**")
        expr = expr.replace("√(", "sqrt(")
        expr = self._replace_percentage(expr)
        expr = self._insert_implicit_mult(expr)
        self._validate_identifiers(expr)

        return expr

    # ── Literales con base explícita ─────────────────────────────

    def _replace_base_literals(self, expr: str) -> str:
        """0b101, 0o17, 0x1F, 101b, 17o y 1Fh pasan a decimal."""

        def _prefixed(match):
            return self._literal_to_decimal(match.group(2), match.group(1).lower())

        def _suffixed(match):
            return self._literal_to_decimal(match.group(1), match.group(2))

        expr = self._PREFIXED_LITERAL.sub(_prefixed, expr)
        return self._SUFFIXED_LITERAL.sub(_suffixed, expr)

    def _literal_to_decimal(self, digits: str, marker: str) -> str:
        base = self._LITERAL_BASES[marker]
        try:
            return str(int(digits, base))
        except ValueError as exc:
            raise EvaluationError(f"Literal inválido en base {base}: {digits}") from exc

    # ── Factorial, porcentaje y multiplicación implícita ─────────

    def _replace_factorial(self, expr: str) -> str:
        chars = list(expr)
        i = len(chars) - 1

        while i >= 0:
            if chars[i] != "!":
                i -= 1
                continue

            j = i - 1

            if j >= 0 and chars[j] == ")":
                depth = 1
                j -= 1
                while j >= 0 and depth > 0:
                    if chars[j] == ")":
                        depth += 1
                    elif chars[j] == "(":
                        depth -= 1
                    j -= 1
                j += 1
                operand = "".join(chars[j:i])
                chars[j : i + 1] = list(f"factorial({operand})")
                i = j - 1
                continue

            if j >= 0 and (chars[j].isdigit() or chars[j] == "."):
                start = j
                while start > 0 and (
                    chars[start - 1].isdigit() or chars[start - 1] == "."
                ):
                    start -= 1
                operand = "".join(chars[start:i])
                chars[start : i + 1] = list(f"factorial({operand})")
                i = start - 1
                continue

            if j >= 0 and (chars[j].isalpha() or chars[j] == "π"):
                start = j
                while start > 0 and (chars[start - 1].isalpha() or chars[start - 1] == "π"):
                    start -= 1
                operand = "".join(chars[start:i])
                chars[start : i + 1] = list(f"factorial({operand})")
                i = start - 1
                continue

            i -= 1

        return "".join(chars)

    @staticmethod
    def _replace_percentage(expr: str) -> str:
        expr = re.sub(
            r"((?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?)%",
            r"(\1*0.01)",
            expr,
        )
        while True:
            updated = re.sub(r"(\([^()]+\))%", r"(\1*0.01)", expr)
            if updated == expr:
                return expr
            expr = updated

    def _insert_implicit_mult(self, expr: str) -> str:
        # Un número solo es literal si no forma parte de un identificador (log10)
        number = r"(?<![A-Za-z_\d.])(\d+(?:\.\d*)?|\.\d+)"
        patterns = [
            (r"\)\(", ")*("),
            (number + r"\(", r"\1*("),
            (r"\)([\dπ])", r")*\1"),
            (number + r"(π)", r"\1*\2"),
            (r"(π|(?<![A-Za-z_\d])e)([\d(])", r"\1*\2"),
            (number + r"([a-df-zA-Z])", r"\1*\2"),
            (number + r"(e)(?![+\-\d])", r"\1*\2"),
            (r"\)([A-Za-zπ])", r")*\1"),
        ]
        for pat, repl in patterns:
            expr = re.sub(pat, repl, expr)
        return expr

    def _validate_identifiers(self, expr: str):
        for name in self._IDENTIFIER.findall(expr):
            if name not in self._ALLOWED_IDENTIFIERS:
                raise EvaluationError(f"Identificador no permitido: {name}")

        for function_name in self._FUNCTION_IDENTIFIERS:
            if re.search(rf"(?<!\w){function_name}(?!\w)(?!\s*\()", expr):
                raise EvaluationError(f"Falta '(' después de {function_name}")

        for constant_name in self._CONSTANT_IDENTIFIERS:
            if re.search(rf"(?<!\w){constant_name}(?!\w)\s*\(", expr):
                raise EvaluationError(f"{constant_name} no es una función")
