"""
Normalización de la notación de usuario a la forma canónica.

La forma canónica usa llamadas calificadas (`calc.sin(...)`), constantes
calificadas (`calc.pi`, `calc.e`), `**` para la potencia y `calc.fact(...)`
para el factorial postfijo. Aquí no se calcula nada.
"""

import re

from math_functions import FUNCTIONS, NAMESPACE


class FormulaNormalizer:
    """Reescribe la expresión cruda en pasos ordenados y componibles."""

    # Ningún paso toca un nombre ya calificado con `calc.`, así que
    # normalizar una expresión canónica no la modifica.
    _PI = re.compile(r"π|(?<!\.)pi", re.IGNORECASE)
    _E = re.compile(r"(?<!\.)\be\b", re.IGNORECASE)
    _FUNCTION = re.compile(
        r"(?<!\.)\b(" + "|".join(sorted(FUNCTIONS, key=len, reverse=True)) + r")\b",
        re.IGNORECASE,
    )
    _POWER = re.compile(r"\^")
    # Solo un nivel de paréntesis: `((2+3))!` conserva su `!`.
    _FACTORIAL = re.compile(r"(\d+|\([^()]+\))!")

    def normalize(self, expression: str) -> str:
        expr = self._replace_constants(expression)
        expr = self._replace_functions(expr)
        expr = self._POWER.sub("**", expr)
        return self._replace_factorial(expr)

    def _replace_constants(self, expr: str) -> str:
        expr = self._PI.sub(f"{NAMESPACE}.pi", expr)
        return self._E.sub(f"{NAMESPACE}.e", expr)

    def _replace_functions(self, expr: str) -> str:
        return self._FUNCTION.sub(
            lambda m: f"{NAMESPACE}.{m.group(1).lower()}", expr
        )

    def _replace_factorial(self, expr: str) -> str:
        return self._FACTORIAL.sub(rf"{NAMESPACE}.fact(\1)", expr)
