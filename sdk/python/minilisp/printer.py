"""Render expression trees back to source, or as an indented dump.

Both walks keep their own work stack, so output depth is bounded by memory
like the reader, not by the interpreter's recursion limit.
"""

import math
from decimal import Decimal
from typing import Iterable, Union

from .types import Char, Expression, ExpressionArg, Float, Int, NestedExpression


def to_source(expr: Expression) -> str:
    """Serialize one expression so that parse() reads it back unchanged."""
    out: list[str] = []
    # Pending items: raw text, or an expression still to be opened.
    work: list[Union[str, Expression]] = [expr]
    while work:
        item = work.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        out.append("(" + item.operand.value)
        work.append(")")
        for a in reversed(item.arguments):
            work.append(a.expression if isinstance(a, NestedExpression) else _arg_source(a))
            work.append(" ")
    return "".join(out)


def dumps(exprs: Iterable[Expression]) -> str:
    return "\n".join(to_source(e) for e in exprs)


def pformat(expr: Expression, indent: int = 2) -> str:
    """Indented tree, one node per line.

    Example for ``(if (< 1 2) 'a' 'b')``::

        If
          LessThan
            Int(1)
            Int(2)
          Char('a')
          Char('b')
    """
    lines: list[str] = []
    work: list[tuple[int, Union[Expression, ExpressionArg]]] = [(0, expr)]
    while work:
        level, node = work.pop()
        pad = " " * (level * indent)
        if isinstance(node, Expression):
            lines.append(pad + _operand_label(node))
            for a in reversed(node.arguments):
                child = a.expression if isinstance(a, NestedExpression) else a
                work.append((level + 1, child))
        elif isinstance(node, Int):
            lines.append(f"{pad}Int({node.value})")
        elif isinstance(node, Float):
            lines.append(f"{pad}Float({_float_source(node.value)})")
        else:
            lines.append(f"{pad}Char({node.value!r})")
    return "\n".join(lines)


def _operand_label(expr: Expression) -> str:
    # LESS_THAN -> LessThan
    return "".join(w.capitalize() for w in expr.operand.name.split("_"))


def _arg_source(a: ExpressionArg) -> str:
    if isinstance(a, Int):
        if a.value < 0:
            raise ValueError(f"negative integer {a.value} has no literal form")
        return str(a.value)
    if isinstance(a, Float):
        return _float_source(a.value)
    if isinstance(a, Char):
        if len(a.value) != 1 or a.value == "'":
            raise ValueError(f"character {a.value!r} has no literal form")
        return f"'{a.value}'"
    raise TypeError(f"not an expression argument: {a!r}")


def _float_source(x: float) -> str:
    if not math.isfinite(x) or math.copysign(1.0, x) < 0:
        raise ValueError(f"float {x!r} has no literal form")
    # Positional notation of the shortest repr; the reader has no exponents.
    text = format(Decimal(repr(x)), "f")
    if "." not in text:
        text += ".0"
    return text
