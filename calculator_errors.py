"""Errores clasificados del motor de evaluación."""


class EvaluationError(ValueError):
    """Base de los fallos que el motor devuelve al usuario."""

    kind = "error"


class DisallowedCharacterError(EvaluationError):
    kind = "disallowed_character"

    def __init__(self, message: str = "La expresión contiene caracteres no permitidos"):
        super().__init__(message)


class ExpressionSyntaxError(EvaluationError):
    """La expresión canónica no se pudo analizar."""

    kind = "syntax"


class NotComputableError(EvaluationError):
    """Sintaxis válida, pero el valor es NaN o infinito."""

    kind = "not_computable"

    def __init__(self, message: str = "No se puede calcular"):
        super().__init__(message)
