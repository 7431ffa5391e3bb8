from dataclasses import dataclass, field
from enum import Enum
from typing import Union

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class Operand(Enum):
    """Operators and keywords that may head an expression.

    Member values are the source spelling.
    """

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    ABS = "abs"
    NOT = "not"
    AND = "and"
    OR = "or"
    IF = "if"
    EQUAL = "="
    LESS_THAN = "<"
    GREATER_THAN = ">"


# Argument tags. Frozen so equality is tag-aware: Int(1) != Float(1.0).

@dataclass(frozen=True)
class Int:
    value: int


@dataclass(frozen=True)
class Float:
    value: float


@dataclass(frozen=True)
class Char:
    value: str


@dataclass(frozen=True)
class NestedExpression:
    expression: "Expression"


ExpressionArg = Union[Int, Float, Char, NestedExpression]


@dataclass
class Expression:
    operand: Operand
    arguments: list[ExpressionArg] = field(default_factory=list)
