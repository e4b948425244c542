"""Validación y evaluación de expresiones canónicas."""

import operator
import re

from calculator_errors import DisallowedCharacterError, ExpressionSyntaxError
from formula_parser import BinaryOp, Call, FormulaParser, Node, Number, UnaryOp
from math_functions import FUNCTIONS, AngleMode, divide, power


class FormulaEvaluator:
    """Evalúa el árbol de una expresión canónica sobre el registro fijo."""

    # Dígitos, + - * / ( ) . , espacios, letras ASCII, _ y < > = %.
    # `**` ya queda cubierto por `*`.
    _DISALLOWED_CHARS = re.compile(r"[^0-9+\-*/().,\sA-Za-z_<>=%]")

    _BIN_OPS = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": divide,
        "**": power,
    }

    _UNARY_OPS = {
        "+": operator.pos,
        "-": operator.neg,
    }

    def evaluate(self, expression: str, angle_mode: AngleMode = AngleMode.RADIAN) -> float:
        """Devuelve el valor en coma flotante (puede ser NaN o ±inf).

        Raises:
            DisallowedCharacterError: carácter fuera de la lista permitida.
            ExpressionSyntaxError: la expresión no se pudo analizar.
        """
        self.check_characters(expression)
        tree = FormulaParser().parse(expression)
        return self._evaluate_tree(tree, AngleMode.parse(angle_mode))

    @classmethod
    def check_characters(cls, expression: str) -> None:
        if cls._DISALLOWED_CHARS.search(expression):
            raise DisallowedCharacterError()

    def _evaluate_tree(self, root: Node, mode: AngleMode) -> float:
        """Recorrido en postorden con pila explícita, sin recursión."""
        values: list[float] = []
        pending = [(root, False)]

        while pending:
            node, children_done = pending.pop()

            if isinstance(node, Number):
                values.append(node.value)
                continue

            if not children_done:
                pending.append((node, True))
                pending.extend((child, False) for child in reversed(self._children(node)))
                continue

            if isinstance(node, UnaryOp):
                values.append(self._UNARY_OPS[node.op](values.pop()))
            elif isinstance(node, BinaryOp):
                right = values.pop()
                left = values.pop()
                values.append(self._BIN_OPS[node.op](left, right))
            else:
                count = len(node.args)
                args = values[len(values) - count:]
                del values[len(values) - count:]
                values.append(FUNCTIONS[node.name](mode, *args))

        return values.pop()

    @staticmethod
    def _children(node: Node) -> tuple:
        if isinstance(node, UnaryOp):
            return (node.operand,)
        if isinstance(node, BinaryOp):
            return (node.left, node.right)
        if isinstance(node, Call):
            return node.args
        raise ExpressionSyntaxError(f"Nodo no soportado: {type(node).__name__}")
