from pathlib import Path

import pytest
from minilisp.parser import parse
from minilisp.printer import dumps
from minilisp.types import Char, Float, Int, NestedExpression, Operand

EXAMPLES_DIR = Path(__file__).resolve().parent.parent.parent.parent / "examples"


def load(name):
    path = EXAMPLES_DIR / "programs" / name
    if not path.exists():
        pytest.skip("example files not found")
    return path.read_text()


def test_arithmetic_program():
    exprs = parse(load("arithmetic.lisp"))
    assert [e.operand for e in exprs] == [Operand.ADD, Operand.MULTIPLY, Operand.ABS]
    mul = exprs[1]
    assert all(isinstance(a, NestedExpression) for a in mul.arguments)


def test_branching_program():
    exprs = parse(load("branching.lisp"))
    assert len(exprs) == 2
    assert exprs[0].arguments[1:] == [Char("a"), Char("b")]
    cond, then, other = exprs[1].arguments
    assert cond.expression.operand is Operand.AND
    assert then.expression.arguments == [Float(0.25), Float(0.75)]
    assert other == Int(0)


def test_programs_round_trip():
    for name in ("arithmetic.lisp", "branching.lisp"):
        exprs = parse(load(name))
        assert parse(dumps(exprs)) == exprs
