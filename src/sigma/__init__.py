"""Sigma: an outline calculator language.

Pipeline: indented document -> per line scan, parse, evaluate -> outline tree
whose parent rows sum their children.

Example:
    from sigma import VariableStore, build_tree

    outline = build_tree(open("budget.txt").read(), VariableStore())
    print(outline.total)
"""

__version__ = "0.1.0"

from .ast import Assign, BinaryOp, Call, Expr, Literal, UnaryOp, VarRef
from .calc import BUILTINS, Calc, CalcError, evaluate
from .config import ConfigError, Settings, load_settings
from .host import Host, VariableStore
from .outline import Line, Outline, build_tree
from .parser import ParseResult, Parser, parse, parse_line, parse_source
from .render import Row, format_csv, format_table, render_rows
from .scanner import ScanResult, Scanner, Token, TokenKind, scan


def calculate(source: str, host: Host | None = None) -> float | str:
    """Evaluate a single line of text (fresh store unless `host` is given)."""
    host = host if host is not None else VariableStore()
    return Calc.from_source(source, host).exec()


__all__ = [
    # Scan
    "scan",
    "Scanner",
    "ScanResult",
    "Token",
    "TokenKind",
    # Parse
    "parse",
    "parse_line",
    "parse_source",
    "Parser",
    "ParseResult",
    # AST
    "Expr",
    "Literal",
    "VarRef",
    "UnaryOp",
    "BinaryOp",
    "Assign",
    "Call",
    # Evaluate
    "evaluate",
    "calculate",
    "Calc",
    "CalcError",
    "BUILTINS",
    # Host
    "Host",
    "VariableStore",
    # Outline
    "build_tree",
    "Line",
    "Outline",
    # Render
    "render_rows",
    "format_table",
    "format_csv",
    "Row",
    # Settings
    "Settings",
    "load_settings",
    "ConfigError",
]
