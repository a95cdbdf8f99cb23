"""Calc: evaluates a parsed line against a Host."""

from typing import Any

import numpy as np

from . import ast
from .host import Host
from .parser import parse_line
from .scanner import Token, scan


class CalcError(Exception):
    pass


TOO_DEEP = "expression too deeply nested"


def clamp(value, lo, hi):
    return min(max(value, lo), hi)


# name -> (arity, implementation)
BUILTINS = {
    "sin": (1, np.sin),
    "cos": (1, np.cos),
    "tan": (1, np.tan),
    "asin": (1, np.arcsin),
    "acos": (1, np.arccos),
    "atan": (1, np.arctan),
    "abs": (1, np.abs),
    "clamp": (3, clamp),
}


def _number(value: Any, op: str) -> float:
    if isinstance(value, str):
        raise CalcError(f"unsupported operand for {op}: '{value}'")
    return value


def _arithmetic(op: str, left: Any, right: Any) -> Any:
    if op == "+" and isinstance(left, str) and isinstance(right, str):
        return left + right

    left = _number(left, op)
    right = _number(right, op)
    # IEEE semantics: x/0 is +-inf, 0/0 is nan, neither raises.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        match op:
            case "+":
                return float(np.add(left, right))
            case "-":
                return float(np.subtract(left, right))
            case "*":
                return float(np.multiply(left, right))
            case "/":
                return float(np.divide(left, right))
            case _:
                raise CalcError(f"unknown op: {op}")


def call_builtin(name: str, args: list[Any]) -> float:
    """Apply a built-in function to already evaluated arguments."""
    if name not in BUILTINS:
        raise CalcError(f"unknown function '{name}'")

    arity, func = BUILTINS[name]
    if len(args) != arity:
        raise CalcError(f"{name}() takes {arity} argument(s) ({len(args)} given)")

    args = [_number(a, f"{name}()") for a in args]
    with np.errstate(invalid="ignore"):
        return float(func(*args))


def evaluate(expr: ast.Expr | None, host: Host) -> Any:
    """Evaluate an expression, reading and binding variables through `host`."""
    match expr:
        case None:
            return 0.0

        case ast.Literal(value=v):
            return v

        case ast.VarRef(name=name):
            return host.get_var(name)

        case ast.Assign(name=name, value=value):
            result = evaluate(value, host)
            host.set_var(name, result)
            return result

        case ast.UnaryOp(op=op, operand=operand):
            v = _number(evaluate(operand, host), op)
            match op:
                case "-":
                    return -v
                case _:
                    raise CalcError(f"unknown unary op: {op}")

        case ast.BinaryOp(op=op, left=left, right=right):
            left_val = evaluate(left, host)
            right_val = evaluate(right, host)
            return _arithmetic(op, left_val, right_val)

        case ast.Call(name=name, args=args):
            # Arguments are evaluated left to right before dispatch.
            arg_vals = [evaluate(a, host) for a in args]
            return call_builtin(name, arg_vals)

        case _:
            raise CalcError(f"unknown expr type: {type(expr)}")


class Calc:
    """Evaluator for one line: its tokens, its parsed tree, and the Host."""

    def __init__(
        self,
        tokens: list[Token],
        tree: ast.Expr | None,
        host: Host,
        scan_error: str | None = None,
        parse_error: str | None = None,
    ):
        self.tokens = tokens
        self.tree = tree
        self.host = host
        self.scan_error = scan_error
        self.parse_error = parse_error
        self.error: str | None = None

    @classmethod
    def from_source(cls, line: str, host: Host) -> "Calc":
        """Scan and parse `line`, keeping lexical and parse errors on the Calc."""
        scanned = scan(line)
        try:
            tree = parse_line(scanned.tokens)
        except RecursionError:
            return cls(scanned.tokens, None, host, scanned.error, TOO_DEEP)
        return cls(scanned.tokens, tree, host, scanned.error)

    def exec(self) -> Any:
        """Evaluate the tree. Evaluation errors give 0 and are kept on `error`."""
        self.error = None
        try:
            return evaluate(self.tree, self.host)
        except CalcError as e:
            self.error = str(e)
            return 0.0
        except RecursionError:
            self.error = TOO_DEEP
            return 0.0
