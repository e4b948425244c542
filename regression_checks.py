from calculator_engine import CalculatorEngine
from formula_normalizer import FormulaNormalizer
import math
import sys


def _value(expr: str, mode: str = "rad"):
	return CalculatorEngine(angle_mode=mode).evaluate(expr)


def _close(result, expected: float) -> bool:
	return result.ok and math.isclose(result.value, expected, rel_tol=1e-12, abs_tol=1e-12)


def inspect_expression(expr: str, *, mode: str = "rad") -> None:
	"""Imprime la forma canónica y el resultado de una expresión."""
	canonical = FormulaNormalizer().normalize(expr.strip())
	result = _value(expr, mode)

	print("Expression inspection")
	print(f"expr:       {expr}")
	print(f"mode:       {mode}")
	print(f"canonical:  {canonical}")
	if result.is_empty:
		print("result:     (empty)")
	elif result.ok:
		print(f"result:     {result.display_text()}")
	else:
		print(f"error:      {result.error.kind}: {result.error}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for expr, expected in (
		("2^10", "1024"),
		("5!", "120"),
		("0!", "1"),
		("(2+3)!", "120"),
		("2^3^2", "512"),
		("-2^2", "-4"),
		("0.1+0.2", "0.30000000000000004"),
		("10^21", "1e+21"),
		("max(1, 7, 3) - min(4, 2)", "5"),
	):
		expected_actual.append((expr, expected, _value(expr).display_text()))

	checks.append(("empty input gives empty result", _value("").is_empty))
	checks.append(("blank input gives empty result", _value("   ").is_empty))
	checks.append(("sin(90) in degrees is 1", _close(_value("sin(90)", "deg"), 1.0)))
	checks.append(("sin(pi/2) in radians is 1", _close(_value("sin(pi/2)"), 1.0)))
	checks.append(("asin(1) in degrees is 90", _close(_value("asin(1)", "deg"), 90.0)))
	checks.append(("asin(1) in radians is pi/2", _close(_value("asin(1)"), math.pi / 2)))
	checks.append((
		"fact(-1) is not computable",
		_value("fact(-1)").error is not None and _value("fact(-1)").error.kind == "not_computable",
	))
	checks.append((
		"1/0 is not computable",
		_value("1/0").error is not None and _value("1/0").error.kind == "not_computable",
	))
	checks.append((
		"alert(1) never succeeds",
		_value("alert(1)").error is not None
		and _value("alert(1)").error.kind in ("disallowed_character", "syntax"),
	))
	checks.append((
		"((2+3))! keeps its '!' and is rejected",
		_value("((2+3))!").error is not None
		and _value("((2+3))!").error.kind == "disallowed_character",
	))

	for label, expected, actual in expected_actual:
		checks.append((f"{label} displays as {expected}", expected == actual))

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
	#   python regression_checks.py --inspect "sin(90)" --mode deg
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		mode = "rad"
		if "--mode" in sys.argv:
			try:
				mode = sys.argv[sys.argv.index("--mode") + 1]
			except IndexError:
				raise SystemExit("Missing value for --mode")

		inspect_expression(expr, mode=mode)
	else:
		run_regressions()
