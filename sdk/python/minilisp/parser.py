"""Single-pass reader for minilisp source.

Scanning and parsing happen in the same left-to-right walk: each character is
fed to the transition function for the current state, which either grows the
token being scanned or attaches a finished token to the expression under
construction. Open ancestors live on an explicit stack instead of the call
stack.
"""

import logging
import string
from enum import Enum, auto
from typing import Callable, NoReturn, Optional

from .types import INT_MAX, INT_MIN, Char, Expression, ExpressionArg, Float, Int, NestedExpression, Operand

logger = logging.getLogger(__name__)

# None means nesting is unbounded
DEFAULT_MAX_DEPTH: Optional[int] = None

WHITESPACE = frozenset(" \t\n\x0b\x0c\r")
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
OPERAND_START = LETTERS | frozenset("+-*/=<>")
OPERAND_CONTINUE = LETTERS | DIGITS | frozenset("_-")


class ReadError(SyntaxError):
    """Input rejected at ``position`` (zero-based code point offset).

    ``offset`` carries the same location 1-based, as SyntaxError defines it.
    """

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.message = message
        self.position = position
        self.offset = position + 1

    def __str__(self) -> str:
        return f"{self.message} at position {self.position}"


class State(Enum):
    EXPECTING_EXPRESSION_START = auto()
    EXPECTING_OPERAND = auto()
    SCANNING_OPERAND = auto()
    EXPECTING_ARG = auto()
    SCANNING_NUMBER = auto()
    SCANNING_FLOAT = auto()
    SCANNING_CHAR = auto()


class ReaderState:
    __slots__ = ("mode", "token", "pending", "stack", "current", "depth", "max_depth", "expressions")

    def __init__(self, max_depth: Optional[int] = DEFAULT_MAX_DEPTH):
        self.mode = State.EXPECTING_EXPRESSION_START
        self.token: list[str] = []
        self.pending: Optional[str] = None
        self.stack: list[Expression] = []
        self.current: Optional[Expression] = None
        self.depth = 0
        self.max_depth = max_depth
        self.expressions: list[Expression] = []


def parse(src: str, *, max_depth: Optional[int] = DEFAULT_MAX_DEPTH) -> list[Expression]:
    """Read every top-level expression in ``src``, in source order.

    Raises ReadError at the first character that cannot be accepted, or at
    ``len(src)`` when the input ends inside an unclosed form.
    """
    st = ReaderState(max_depth)
    try:
        for idx, ch in enumerate(src):
            feed(st, ch, idx)
        result = finish(st, len(src))
    except ReadError as e:
        logger.debug("rejected input: %s", e)
        raise
    logger.debug("read %d top-level expression(s)", len(result))
    return result


def feed(st: ReaderState, ch: str, idx: int) -> None:
    """Apply one character to the reader state."""
    _TRANSITIONS[st.mode](st, ch, idx)


def finish(st: ReaderState, length: int) -> list[Expression]:
    if st.mode is not State.EXPECTING_EXPRESSION_START:
        raise ReadError("unexpected end of input", length)
    return st.expressions


def line_col(src: str, position: int) -> tuple[int, int]:
    """1-based (line, column) of a code point offset."""
    line = src.count("\n", 0, position) + 1
    col = position - (src.rfind("\n", 0, position) + 1) + 1
    return line, col


# --- Transitions ---

def _expecting_expression_start(st: ReaderState, ch: str, idx: int) -> None:
    if ch == "(":
        _open(st, idx)
    elif ch not in WHITESPACE:
        _reject(ch, idx)


def _expecting_operand(st: ReaderState, ch: str, idx: int) -> None:
    if ch in OPERAND_START:
        st.token.append(ch)
        st.mode = State.SCANNING_OPERAND
    elif ch not in WHITESPACE:
        _reject(ch, idx)


def _scanning_operand(st: ReaderState, ch: str, idx: int) -> None:
    if ch in OPERAND_CONTINUE:
        st.token.append(ch)
        return
    if ch not in WHITESPACE and ch != ")":
        _reject(ch, idx)
    token = _take_token(st)
    try:
        operand = Operand(token)
    except ValueError:
        raise ReadError(f"unknown operand {token!r}", idx) from None
    st.current = Expression(operand)
    st.mode = State.EXPECTING_ARG
    if ch == ")":
        _close(st, idx)


def _expecting_arg(st: ReaderState, ch: str, idx: int) -> None:
    if ch in WHITESPACE:
        return
    if ch == "(":
        if st.current is None:
            raise ReadError("nested form before operand", idx)
        _open(st, idx)
    elif ch in DIGITS:
        st.token.append(ch)
        st.mode = State.SCANNING_NUMBER
    elif ch == "'":
        st.pending = None
        st.mode = State.SCANNING_CHAR
    elif ch == ")":
        _close(st, idx)
    else:
        _reject(ch, idx)


def _scanning_number(st: ReaderState, ch: str, idx: int) -> None:
    if ch in DIGITS:
        st.token.append(ch)
        return
    if ch == ".":
        st.token.append(ch)
        st.mode = State.SCANNING_FLOAT
        return
    if ch not in WHITESPACE and ch != ")":
        _reject(ch, idx)
    token = _take_token(st)
    # int() refuses digit runs past sys.get_int_max_str_digits(); bound the
    # length first.
    if len(token.lstrip("0")) > len(str(INT_MAX)):
        raise ReadError(f"integer literal of {len(token)} digits out of range", idx)
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        raise ReadError(f"integer literal {token} out of range", idx)
    _push_arg(st, Int(value), ch, idx)


def _scanning_float(st: ReaderState, ch: str, idx: int) -> None:
    if ch in DIGITS:
        st.token.append(ch)
        return
    if ch not in WHITESPACE and ch != ")":
        _reject(ch, idx)
    token = _take_token(st)
    if token.endswith("."):
        raise ReadError(f"malformed float literal {token!r}", idx)
    try:
        value = float(token)
    except ValueError:
        raise ReadError(f"malformed float literal {token!r}", idx) from None
    _push_arg(st, Float(value), ch, idx)


def _scanning_char(st: ReaderState, ch: str, idx: int) -> None:
    if ch == "'":
        if st.pending is None:
            raise ReadError("empty character literal", idx)
        st.current.arguments.append(Char(st.pending))
        st.pending = None
        st.mode = State.EXPECTING_ARG
    elif st.pending is None:
        st.pending = ch
    else:
        raise ReadError("character literal holds more than one character", idx)


_TRANSITIONS: dict[State, Callable[[ReaderState, str, int], None]] = {
    State.EXPECTING_EXPRESSION_START: _expecting_expression_start,
    State.EXPECTING_OPERAND: _expecting_operand,
    State.SCANNING_OPERAND: _scanning_operand,
    State.EXPECTING_ARG: _expecting_arg,
    State.SCANNING_NUMBER: _scanning_number,
    State.SCANNING_FLOAT: _scanning_float,
    State.SCANNING_CHAR: _scanning_char,
}


# --- Helpers ---

def _take_token(st: ReaderState) -> str:
    token = "".join(st.token)
    st.token.clear()
    return token


def _push_arg(st: ReaderState, arg: ExpressionArg, ch: str, idx: int) -> None:
    st.current.arguments.append(arg)
    st.mode = State.EXPECTING_ARG
    if ch == ")":
        _close(st, idx)


def _open(st: ReaderState, idx: int) -> None:
    if st.max_depth is not None and st.depth >= st.max_depth:
        raise ReadError(f"nesting too deep (limit {st.max_depth})", idx)
    st.depth += 1
    # The builder moves onto the stack; it is completed when its ")" arrives.
    if st.current is not None:
        st.stack.append(st.current)
    st.current = None
    st.mode = State.EXPECTING_OPERAND


def _close(st: ReaderState, idx: int) -> None:
    st.depth -= 1
    if st.depth < 0:
        raise ReadError("unexpected )", idx)
    completed = st.current
    if st.stack:
        parent = st.stack.pop()
        parent.arguments.append(NestedExpression(completed))
        st.current = parent
        st.mode = State.EXPECTING_ARG
    else:
        st.expressions.append(completed)
        st.current = None
        st.mode = State.EXPECTING_EXPRESSION_START


def _reject(ch: str, idx: int) -> NoReturn:
    if ch == ")":
        raise ReadError("unexpected )", idx)
    raise ReadError(f"unexpected character {ch!r}", idx)
