import math

import pytest
from mpmath import mp

from math_functions import (
    CONSTANTS,
    FUNCTIONS,
    AngleMode,
    divide,
    factorial,
    power,
    round_half_up,
)

RAD = AngleMode.RADIAN
DEG = AngleMode.DEGREE


def call(name, *args, mode=RAD):
    return FUNCTIONS[name](mode, *args)


def test_angle_mode_parse():
    assert AngleMode.parse("rad") is RAD
    assert AngleMode.parse("Radian") is RAD
    assert AngleMode.parse("DEG") is DEG
    assert AngleMode.parse("degree") is DEG
    assert AngleMode.parse(DEG) is DEG
    with pytest.raises(ValueError):
        AngleMode.parse("grad")


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        FUNCTIONS["evil"] = FUNCTIONS["sin"]
    with pytest.raises(TypeError):
        CONSTANTS["pi"] = 3


@pytest.mark.parametrize("name, x, reference", [
    ("sin", 0.7, mp.sin),
    ("cos", 0.7, mp.cos),
    ("tan", 0.7, mp.tan),
    ("asin", 0.3, mp.asin),
    ("acos", 0.3, mp.acos),
    ("atan", 3.0, mp.atan),
    ("sqrt", 2.0, mp.sqrt),
    ("ln", 10.0, mp.log),
    ("log", 50.0, mp.log10),
    ("exp", 2.5, mp.exp),
])
def test_functions_match_reference(name, x, reference):
    with mp.workdps(40):
        expected = float(reference(mp.mpf(x)))
    assert math.isclose(call(name, x), expected, rel_tol=1e-14)


def test_degree_mode_converts_trig_input():
    with mp.workdps(40):
        expected = float(mp.sin(mp.radians(30)))
    assert math.isclose(call("sin", 30.0, mode=DEG), expected, rel_tol=1e-14)
    assert math.isclose(call("sin", 90.0, mode=DEG), 1.0)
    assert math.isclose(call("cos", 180.0, mode=DEG), -1.0)


def test_degree_mode_converts_inverse_trig_output():
    assert math.isclose(call("asin", 1.0, mode=DEG), 90.0)
    assert math.isclose(call("acos", 0.0, mode=DEG), 90.0)
    assert math.isclose(call("atan", 1.0, mode=DEG), 45.0)
    assert math.isclose(call("asin", 1.0), math.pi / 2)


def test_domain_errors_become_nan():
    assert math.isnan(call("sqrt", -1.0))
    assert math.isnan(call("asin", 2.0))
    assert math.isnan(call("ln", -1.0))
    assert math.isnan(call("sin", math.inf))


def test_overflow_becomes_infinity():
    assert call("exp", 1000.0) == math.inf
    assert call("ln", 0.0) == -math.inf
    assert call("log", 0.0) == -math.inf


def test_factorial():
    assert factorial(0.0) == 1.0
    assert factorial(5.0) == 120.0
    assert factorial(5.9) == 120.0
    assert factorial(-0.5) == 1.0
    assert math.isnan(factorial(-1.0))
    assert math.isnan(factorial(math.nan))
    assert factorial(20.0) == float(mp.factorial(20))


def test_factorial_overflow_stops_at_infinity():
    assert factorial(170.0) < math.inf
    assert factorial(171.0) == math.inf
    assert factorial(1e12) == math.inf


def test_power():
    assert power(2.0, 10.0) == 1024.0
    assert power(4.0, -0.5) == 0.5
    assert math.isnan(power(-8.0, 1 / 3))
    assert power(0.0, -1.0) == math.inf
    assert power(10.0, 400.0) == math.inf
    assert power(-10.0, 401.0) == -math.inf
    assert call("pow", 2.0, 8.0) == 256.0


def test_power_with_nan_exponent_is_nan():
    assert math.isnan(power(1.0, math.nan))
    assert math.isnan(call("pow", 1.0, math.nan))
    assert power(math.nan, 0.0) == 1.0


def test_divide():
    assert divide(1.0, 4.0) == 0.25
    assert divide(1.0, 0.0) == math.inf
    assert divide(-1.0, 0.0) == -math.inf
    assert math.isnan(divide(0.0, 0.0))


def test_rounding_functions():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(-2.5) == -2.0
    assert round_half_up(2.4) == 2.0
    assert round_half_up(0.49999999999999994) == 0.0
    assert round_half_up(-0.5) == 0.0
    assert round_half_up(2.0 ** 52 + 1) == 2.0 ** 52 + 1
    assert round_half_up(-(2.0 ** 52) - 1) == -(2.0 ** 52) - 1
    assert call("floor", -1.5) == -2.0
    assert call("ceil", -1.5) == -1.0
    assert call("abs", -3.0) == 3.0


def test_min_max_are_variadic():
    assert call("min", 3.0, 1.0, 2.0) == 1.0
    assert call("max", 3.0, 1.0, 2.0) == 3.0
    assert call("min") == math.inf
    assert call("max") == -math.inf
    assert math.isnan(call("max", 1.0, math.nan))
