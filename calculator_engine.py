"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, punto de entrada único
del núcleo: normaliza la expresión del usuario, la evalúa y clasifica
el resultado. Ningún fallo se propaga como excepción.

Contrato de interfaz:
    - evaluate(expression: str, angle_mode=None) -> EvaluationResult
    - set_angle_mode(mode) / angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from calculator_errors import EvaluationError, NotComputableError
from formula_evaluator import FormulaEvaluator
from formula_normalizer import FormulaNormalizer
from math_functions import AngleMode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Resultado etiquetado: vacío, valor finito o error clasificado."""

    value: float | None = None
    error: EvaluationError | None = None

    @classmethod
    def empty(cls) -> "EvaluationResult":
        return cls()

    @classmethod
    def success(cls, value: float) -> "EvaluationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: EvaluationError) -> "EvaluationResult":
        return cls(error=error)

    @property
    def is_empty(self) -> bool:
        return self.value is None and self.error is None

    @property
    def ok(self) -> bool:
        return self.value is not None

    def display_text(self) -> str:
        if self.error is not None:
            return str(self.error)
        if self.value is None:
            return ""
        return format_number(self.value)


def format_number(value: float) -> str:
    """Conversión por defecto a texto, sin decimales forzados.

    Usa los dígitos más cortos que identifican el valor (los de `repr`).
    Entre 1e-7 y 1e21 la notación es decimal (`10000000000000000`,
    `0.000001`); fuera de ese rango, científica (`1e+21`, `1e-7`).
    """
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "0"

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    d = "".join(map(str, digits))
    k = len(d)
    n = exponent + k    # value == 0.d * 10**n

    if k <= n <= 21:
        text = d + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{d[:n]}.{d[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + d
    else:
        mantissa = d if k == 1 else f"{d[0]}.{d[1:]}"
        text = f"{mantissa}e{'+' if n > 1 else '-'}{abs(n - 1)}"
    return ("-" if sign else "") + text


class CalculatorEngine:
    """Evalúa expresiones matemáticas con funciones científicas."""

    def __init__(self, angle_mode=AngleMode.RADIAN):
        self._angle_mode = AngleMode.parse(angle_mode)
        self._normalizer = FormulaNormalizer()
        self._evaluator = FormulaEvaluator()

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> AngleMode:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode):
        self.set_angle_mode(mode)

    def set_angle_mode(self, mode) -> None:
        self._angle_mode = AngleMode.parse(mode)
        logger.info("Modo angular: %s", self._angle_mode.value)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str, angle_mode=None) -> EvaluationResult:
        """Evalúa la expresión y devuelve un resultado clasificado.

        `angle_mode` sustituye al modo de la sesión solo para esta llamada.
        Una entrada vacía devuelve un resultado vacío, no un error.
        """
        if not expression or not expression.strip():
            return EvaluationResult.empty()

        mode = self._angle_mode if angle_mode is None else AngleMode.parse(angle_mode)
        try:
            canonical = self._normalizer.normalize(expression.strip())
            logger.debug("Forma canónica: %r -> %r", expression, canonical)
            value = self._evaluator.evaluate(canonical, mode)
        except EvaluationError as exc:
            logger.debug("Evaluación fallida (%s): %s", exc.kind, exc)
            return EvaluationResult.failure(exc)

        if not math.isfinite(value):
            logger.debug("Valor no finito para %r: %r", expression, value)
            return EvaluationResult.failure(NotComputableError())

        return EvaluationResult.success(value)
