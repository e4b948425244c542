"""
Tokenizador y parser de precedencia de operadores para expresiones canónicas.

Produce un árbol inmutable; solo reconoce la gramática definida aquí, de
modo que ningún texto llega a ejecutarse como código de Python.

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("**" unary)?
    primary    := NUMBER | CONSTANT | FUNCTION "(" args ")" | "(" expression ")"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Union

from calculator_errors import ExpressionSyntaxError
from math_functions import CONSTANTS, FUNCTIONS, NAMESPACE


class Token(NamedTuple):
    kind: str   # "number" | "name" | "op" | "end"
    text: str
    pos: int


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<number>\d+(?:\.\d*)?|\.\d+)
  | (?P<name>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)
  | (?P<op>\*\*|[-+*/(),])
    """,
    re.VERBOSE,
)


def tokenize(expression: str) -> list[Token]:
    tokens = []
    pos = 0
    while pos < len(expression):
        m = _TOKEN_RE.match(expression, pos)
        if m is None:
            raise ExpressionSyntaxError(
                f"Error de sintaxis: símbolo inesperado '{expression[pos]}' en la posición {pos}"
            )
        if m.lastgroup != "space":
            tokens.append(Token(m.lastgroup, m.group(), pos))
        pos = m.end()
    tokens.append(Token("end", "", pos))
    return tokens


# ── Nodos del árbol ──────────────────────────────────────────────

@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple


Node = Union[Number, UnaryOp, BinaryOp, Call]


# ── Parser ───────────────────────────────────────────────────────

# Operadores binarios: (precedencia, asociativo a la derecha)
_BINARY = {
    "+": (1, False),
    "-": (1, False),
    "*": (2, False),
    "/": (2, False),
    "**": (4, True),
}
# El signo prefijo liga menos que `**`: -2**2 == -(2**2)
_PREFIX_PRECEDENCE = 3


class FormulaParser:
    """Convierte una expresión canónica en un árbol de nodos.

    Usa una pila de operadores en lugar de recursión, de modo que la
    longitud de la expresión y la profundidad de los paréntesis no
    dependen del límite de recursión del intérprete.

    Entradas de la pila:
        ("prefix", op)
        ("binary", op)
        ("group", función | None, tamaño de la salida al abrir)
    """

    _PREFIX = NAMESPACE + "."

    def parse(self, expression: str) -> Node:
        tokens = tokenize(expression)
        if tokens[0].kind == "end":
            raise ExpressionSyntaxError("Error de sintaxis: expresión vacía")

        output: list[Node] = []
        stack: list[tuple] = []
        expect_operand = True
        i = 0

        while True:
            tok = tokens[i]
            i += 1

            if expect_operand:
                if tok.kind == "number":
                    output.append(Number(float(tok.text)))
                    expect_operand = False
                elif tok.kind == "name":
                    name = self._qualified_name(tok)
                    if name in CONSTANTS:
                        output.append(Number(CONSTANTS[name]))
                        expect_operand = False
                    else:
                        self._expect_open(tokens[i])
                        i += 1
                        stack.append(("group", name, len(output)))
                elif self._is_op(tok, "+", "-"):
                    stack.append(("prefix", tok.text))
                elif self._is_op(tok, "("):
                    stack.append(("group", None, len(output)))
                elif self._is_op(tok, ")") and self._opens_empty_call(stack, output, tokens[i - 2]):
                    self._close_call(stack.pop(), output)
                    expect_operand = False
                else:
                    raise self._unexpected(tok)
                continue

            if tok.kind == "op" and tok.text in _BINARY:
                precedence, right_assoc = _BINARY[tok.text]
                self._reduce(stack, output, precedence, right_assoc)
                stack.append(("binary", tok.text))
                expect_operand = True
            elif self._is_op(tok, ","):
                group = self._reduce_to_group(stack, output, tok)
                if group[1] is None:
                    raise self._unexpected(tok)
                expect_operand = True
            elif self._is_op(tok, ")"):
                group = self._reduce_to_group(stack, output, tok)
                stack.pop()
                if group[1] is not None:
                    self._close_call(group, output)
            elif tok.kind == "end":
                break
            else:
                raise self._unexpected(tok)

        while stack:
            entry = stack.pop()
            if entry[0] == "group":
                raise ExpressionSyntaxError("Error de sintaxis: falta ')'")
            self._apply(entry, output)
        return output[0]

    # ── Pila ─────────────────────────────────────────────────────

    @staticmethod
    def _precedence(entry: tuple) -> int:
        if entry[0] == "prefix":
            return _PREFIX_PRECEDENCE
        return _BINARY[entry[1]][0]

    def _reduce(self, stack: list, output: list, precedence: int, right_assoc: bool):
        while stack and stack[-1][0] != "group":
            top = self._precedence(stack[-1])
            if top < precedence or (top == precedence and right_assoc):
                return
            self._apply(stack.pop(), output)

    def _reduce_to_group(self, stack: list, output: list, tok: Token) -> tuple:
        while stack and stack[-1][0] != "group":
            self._apply(stack.pop(), output)
        if not stack:
            raise self._unexpected(tok)
        return stack[-1]

    @staticmethod
    def _apply(entry: tuple, output: list):
        kind, op = entry
        if kind == "prefix":
            output.append(UnaryOp(op, output.pop()))
        else:
            right = output.pop()
            output.append(BinaryOp(op, output.pop(), right))

    @staticmethod
    def _opens_empty_call(stack: list, output: list, previous: Token) -> bool:
        return (
            bool(stack)
            and stack[-1][0] == "group"
            and stack[-1][1] is not None
            and stack[-1][2] == len(output)
            and previous.text == "("
        )

    @staticmethod
    def _close_call(group: tuple, output: list):
        _, name, start = group
        args = tuple(output[start:])
        del output[start:]
        arity = FUNCTIONS[name].arity
        if arity is not None and len(args) != arity:
            raise ExpressionSyntaxError(
                f"Error de sintaxis: {name} espera {arity} argumento(s), recibió {len(args)}"
            )
        output.append(Call(name, args))

    # ── Tokens ───────────────────────────────────────────────────

    @staticmethod
    def _is_op(tok: Token, *ops: str) -> bool:
        return tok.kind == "op" and tok.text in ops

    def _qualified_name(self, tok: Token) -> str:
        name = tok.text[len(self._PREFIX):] if tok.text.startswith(self._PREFIX) else None
        if name in CONSTANTS or name in FUNCTIONS:
            return name
        raise ExpressionSyntaxError(f"Error de sintaxis: identificador desconocido '{tok.text}'")

    @staticmethod
    def _expect_open(tok: Token):
        if tok.kind == "op" and tok.text == "(":
            return
        if tok.kind == "end":
            raise ExpressionSyntaxError("Error de sintaxis: falta '('")
        raise ExpressionSyntaxError(
            f"Error de sintaxis: se esperaba '(' en la posición {tok.pos}"
        )

    @staticmethod
    def _unexpected(tok: Token) -> ExpressionSyntaxError:
        if tok.kind == "end":
            return ExpressionSyntaxError("Error de sintaxis: fin de expresión inesperado")
        return ExpressionSyntaxError(
            f"Error de sintaxis: '{tok.text}' inesperado en la posición {tok.pos}"
        )
