from .parser import parse, ReadError
from .printer import to_source, dumps, pformat
from .types import Operand, Expression, Int, Float, Char, NestedExpression

__all__ = [
    "parse", "ReadError", "to_source", "dumps", "pformat",
    "Operand", "Expression", "Int", "Float", "Char", "NestedExpression",
]
