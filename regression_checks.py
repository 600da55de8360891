from base_converter import NumberSystem
from calculator_engine import CalculatorEngine
from expression_preprocessor import preprocess
import sys


# (expresión, sistema, precisión, resultado esperado)
EVALUATION_CASES = [
	("2^10", NumberSystem.DEC, 16, "1024"),
	("(1+2", NumberSystem.DEC, 16, "3"),
	("1/3", NumberSystem.DEC, 16, "0.3333333333333333"),
	("1/3", NumberSystem.DEC, 4, "0.3333"),
	("123456", NumberSystem.DEC, 16, "1.23456e+5"),
	("0.0001", NumberSystem.DEC, 16, "1e-4"),
	("5!", NumberSystem.DEC, 16, "120"),
	("sqrt(-4)", NumberSystem.DEC, 16, "2i"),
	("FF+1", NumberSystem.HEX, 16, "100"),
	("FF*FF", NumberSystem.HEX, 16, "FE01"),
	("1010+1", NumberSystem.BIN, 16, "1011"),
	("17+1", NumberSystem.OCT, 16, "20"),
	("7/2", NumberSystem.HEX, 16, "(DEC) 3.5"),
	("1/", NumberSystem.DEC, 16, "Error"),
	("12", NumberSystem.BIN, 16, "Error"),
]


def inspect_expression(expr: str, system: NumberSystem, precision: int = 16) -> None:
	"""Imprime cada paso del cálculo de una expresión."""
	engine = CalculatorEngine()
	print("Pipeline inspection")
	print(f"expr:           {expr}")
	print(f"system:         {system.name}")
	print(f"precision:      {precision}")
	try:
		print(f"preprocessed:   {preprocess(expr, system)}")
	except ValueError as exc:
		print(f"preprocessed:   ({exc})")
	outcome = engine.evaluate(expr, system, precision)
	if outcome is None:
		print("outcome:        (empty expression)")
		return
	print(f"display expr:   {outcome.display_expression}")
	print(f"result:         {outcome.result}")
	print(f"error kind:     {outcome.error_kind}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	engine = CalculatorEngine()
	for expr, system, precision, expected in EVALUATION_CASES:
		outcome = engine.evaluate(expr, system, precision)
		actual = outcome.result if outcome is not None else ""
		label = f"{expr} [{system.name}, {precision}]"
		expected_actual.append((label, expected, actual))
		checks.append((f"{label} evaluates to {expected}", actual == expected))

	before = len(engine.history)
	engine.evaluate("1/", NumberSystem.DEC, 16)
	checks.append(("failed evaluation leaves history untouched", len(engine.history) == before))

	for k in range(60):
		engine.evaluate(str(k), NumberSystem.DEC, 16)
	checks.append(("history is capped at 50 entries", len(engine.history) == 50))
	checks.append(("latest evaluation comes first", engine.history.latest.expression == "59"))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "FF+1" --system HEX --precision 16
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		def _read_arg(flag: str, default: str) -> str:
			if flag not in sys.argv:
				return default
			try:
				return sys.argv[sys.argv.index(flag) + 1]
			except IndexError:
				raise SystemExit(f"Missing value for {flag}")

		try:
			system = NumberSystem.from_name(_read_arg("--system", "DEC"))
			precision = int(_read_arg("--precision", "16"))
		except ValueError as exc:
			raise SystemExit(str(exc))

		inspect_expression(expr, system, precision)
	else:
		run_regressions()
