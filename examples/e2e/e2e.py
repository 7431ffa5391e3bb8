"""
minilisp End-to-End Example (Python)

Demonstrates the full round trip:
1. Read a program with several top-level forms
2. Dump each tree
3. Re-serialize to source and read it back
4. Locate a syntax error by line and column

Run: pip install -e . && python examples/e2e/e2e.py
"""

from minilisp import parse, to_source, pformat, ReadError
from minilisp.parser import line_col

print("=== minilisp E2E Demo ===\n")

# 1. Read
program = """(+ 1 2)
(if (< 1 2)
    'a'
    (* 2.5 4))
"""
exprs = parse(program)
print(f"1. Read {len(exprs)} top-level expressions\n")

# 2. Dump
print("2. Trees")
for e in exprs:
    print(pformat(e))
print()

# 3. Round trip
print("3. Source form")
for e in exprs:
    src = to_source(e)
    assert parse(src) == [e]
    print(f"   {src}")
print()

# 4. Errors
bad = """(+ 1 2)
(foo 1 2)"""
try:
    parse(bad)
except ReadError as err:
    line, col = line_col(bad, err.position)
    print(f"4. Rejected at offset {err.position} (line {line}, column {col}): {err.message}")

print("\n=== All checks passed ===")
