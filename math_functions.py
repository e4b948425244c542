"""
Biblioteca matemática de la calculadora.

Registro estático e inmutable de funciones y constantes. Las funciones
siguen la semántica IEEE-754: un dominio inválido produce NaN y un
desbordamiento produce ±inf, nunca una excepción de Python.

Las funciones trigonométricas reciben el modo angular en cada llamada,
de modo que el registro no guarda estado.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable


NAMESPACE = "calc"

INF = float("inf")
NAN = float("nan")


class AngleMode(enum.Enum):
    RADIAN = "rad"
    DEGREE = "deg"

    @classmethod
    def parse(cls, value) -> "AngleMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("rad", "radian"):
            return cls.RADIAN
        if text in ("deg", "degree"):
            return cls.DEGREE
        raise ValueError("El modo debe ser 'rad' o 'deg'")


@dataclass(frozen=True)
class MathFunction:
    """Entrada del registro: implementación y aridad (None = variádica)."""

    name: str
    impl: Callable[..., float]
    arity: int | None = 1

    def __call__(self, angle_mode: AngleMode, *args: float) -> float:
        return self.impl(angle_mode, *args)


# ── Envoltorios ──────────────────────────────────────────────────

def _ieee(fn):
    """Traduce ValueError/OverflowError de `math` a NaN/inf."""

    def wrapped(*args):
        try:
            return float(fn(*args))
        except ValueError:
            return NAN
        except OverflowError:
            return INF

    return wrapped


def _plain(fn):
    safe = _ieee(fn)

    def wrapped(_mode, *args):
        return safe(*args)

    return wrapped


def _trig(fn):
    safe = _ieee(fn)

    def wrapped(mode, x):
        return safe(math.radians(x) if mode is AngleMode.DEGREE else x)

    return wrapped


def _inv_trig(fn):
    safe = _ieee(fn)

    def wrapped(mode, x):
        r = safe(x)
        return math.degrees(r) if mode is AngleMode.DEGREE else r

    return wrapped


# ── Operadores ───────────────────────────────────────────────────

def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def power(x: float, y: float) -> float:
    # `math.pow(1, nan)` devuelve 1; un exponente NaN siempre da NaN
    if math.isnan(y):
        return NAN
    if x == 0 and y < 0:
        return INF
    try:
        return math.pow(x, y)
    except ValueError:
        return NAN
    except OverflowError:
        if x < 0 and y.is_integer() and y % 2 == 1:
            return -INF
        return INF


# ── Funciones sin equivalente directo en `math` ──────────────────

def factorial(n: float) -> float:
    if math.isnan(n):
        return NAN
    if math.isinf(n):
        return NAN if n < 0 else INF
    n = math.trunc(n)
    if n < 0:
        return NAN
    r = 1.0
    for i in range(2, n + 1):
        r *= i
        if math.isinf(r):
            break
    return r


def round_half_up(x: float) -> float:
    if not math.isfinite(x):
        return x
    # `x + 0.5` puede redondearse hacia arriba en coma flotante
    f = float(math.floor(x))
    return f + 1.0 if x - f >= 0.5 else f


def _floor(x: float) -> float:
    return x if not math.isfinite(x) else float(math.floor(x))


def _ceil(x: float) -> float:
    return x if not math.isfinite(x) else float(math.ceil(x))


def _log10(x: float) -> float:
    return -INF if x == 0 else math.log10(x)


def _ln(x: float) -> float:
    return -INF if x == 0 else math.log(x)


def minimum(*args: float) -> float:
    if not args:
        return INF
    if any(math.isnan(a) for a in args):
        return NAN
    return min(args)


def maximum(*args: float) -> float:
    if not args:
        return -INF
    if any(math.isnan(a) for a in args):
        return NAN
    return max(args)


# ── Registro ─────────────────────────────────────────────────────

FUNCTIONS = MappingProxyType({
    "sin":   MathFunction("sin", _trig(math.sin)),
    "cos":   MathFunction("cos", _trig(math.cos)),
    "tan":   MathFunction("tan", _trig(math.tan)),
    "asin":  MathFunction("asin", _inv_trig(math.asin)),
    "acos":  MathFunction("acos", _inv_trig(math.acos)),
    "atan":  MathFunction("atan", _inv_trig(math.atan)),
    "sqrt":  MathFunction("sqrt", _plain(math.sqrt)),
    "abs":   MathFunction("abs", _plain(abs)),
    "ln":    MathFunction("ln", _plain(_ln)),
    "log":   MathFunction("log", _plain(_log10)),
    "pow":   MathFunction("pow", _plain(power), arity=2),
    "exp":   MathFunction("exp", _plain(math.exp)),
    "floor": MathFunction("floor", _plain(_floor)),
    "ceil":  MathFunction("ceil", _plain(_ceil)),
    "round": MathFunction("round", _plain(round_half_up)),
    "min":   MathFunction("min", _plain(minimum), arity=None),
    "max":   MathFunction("max", _plain(maximum), arity=None),
    "fact":  MathFunction("fact", _plain(factorial)),
})

CONSTANTS = MappingProxyType({
    "pi": math.pi,
    "e": math.e,
})
