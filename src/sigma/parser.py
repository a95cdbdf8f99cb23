"""Backtracking recursive descent parser for outline calculator lines.

Grammar (highest to lowest binding):
    primary     = call | NUMBER | STRING | IDENTIFIER | "(" expression ")"
    unary       = "-" unary | primary
    factor      = unary (("*" | "/") unary)*
    term        = factor (("+" | "-") factor)*
    call        = IDENTIFIER "(" [arguments] ")"
    arguments   = expression ("," expression)*
    statement   = IDENTIFIER ("=" | ":") term | term
    expression  = statement

Every production takes the index of the token to start from and returns a
ParseResult (node plus the index just past it) or None. Nothing else is
mutated, so a failed alternative leaves no trace and the caller simply tries
the next one from the same index.
"""

from typing import NamedTuple

from . import ast
from .scanner import Token, TokenKind, scan

ASSIGNMENT_OPS = (TokenKind.EQUAL, TokenKind.COLON)
TERM_OPS = (TokenKind.PLUS, TokenKind.MINUS)
FACTOR_OPS = (TokenKind.STAR, TokenKind.SLASH)


class ParseResult(NamedTuple):
    node: ast.Expr
    next: int


class Parser:
    """Parser over the token list of a single line."""

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.END:
            tokens = [*tokens, Token(TokenKind.END, "")]
        self.tokens = tokens

    def peek(self, index: int) -> Token:
        if index >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[index]

    def at(self, index: int, *kinds: TokenKind) -> bool:
        return self.peek(index).kind in kinds

    def parse(self, start: int = 0) -> ast.Expr | None:
        """Parse one expression starting at `start`, ignoring what follows it."""
        result = self.expression(start)
        return result.node if result else None

    def parse_line(self) -> ast.Expr | None:
        """Parse the expression that ends a line of free text.

        Takes the expression of the earliest start index whose parse runs
        right up to END, so "Rent for May 1200" yields 1200 and
        "total = rent + food" yields the whole assignment. When that is only a
        trailing word ("x = 10 apples") or nothing reaches END, the expression
        at the start of the line wins instead.
        """
        for start in range(len(self.tokens) - 1):
            result = self.expression(start)
            if result and self.at(result.next, TokenKind.END):
                if start == 0 or not isinstance(result.node, ast.VarRef):
                    return result.node
                break
        return self.parse(0)

    def expression(self, start: int) -> ParseResult | None:
        return self.statement(start)

    def statement(self, start: int) -> ParseResult | None:
        if self.at(start, TokenKind.IDENTIFIER) and self.at(start + 1, *ASSIGNMENT_OPS):
            value = self.term(start + 2)
            if value:
                name = self.peek(start).lexeme
                return ParseResult(ast.Assign(name=name, value=value.node), value.next)
        return self.term(start)

    def term(self, start: int) -> ParseResult | None:
        return self._binary(start, self.factor, TERM_OPS)

    def factor(self, start: int) -> ParseResult | None:
        return self._binary(start, self.unary, FACTOR_OPS)

    def _binary(self, start, operand, ops) -> ParseResult | None:
        """Left-associative chain of `operand (op operand)*`."""
        result = operand(start)
        if result is None:
            return None

        node, pos = result
        while self.at(pos, *ops):
            right = operand(pos + 1)
            if right is None:
                break
            node = ast.BinaryOp(op=self.peek(pos).lexeme, left=node, right=right.node)
            pos = right.next
        return ParseResult(node, pos)

    def unary(self, start: int) -> ParseResult | None:
        if self.at(start, TokenKind.MINUS):
            operand = self.unary(start + 1)
            if operand:
                return ParseResult(ast.UnaryOp(op="-", operand=operand.node), operand.next)
            return None
        return self.primary(start)

    def primary(self, start: int) -> ParseResult | None:
        # A call must be tried before the bare identifier it starts with.
        if call := self.call(start):
            return call

        tok = self.peek(start)
        match tok.kind:
            case TokenKind.NUMBER | TokenKind.STRING:
                return ParseResult(ast.Literal(value=tok.literal), start + 1)
            case TokenKind.IDENTIFIER:
                return ParseResult(ast.VarRef(name=tok.lexeme), start + 1)
            case TokenKind.LEFT_PAREN:
                inner = self.expression(start + 1)
                if inner and self.at(inner.next, TokenKind.RIGHT_PAREN):
                    return ParseResult(inner.node, inner.next + 1)
        return None

    def call(self, start: int) -> ParseResult | None:
        if not (self.at(start, TokenKind.IDENTIFIER) and self.at(start + 1, TokenKind.LEFT_PAREN)):
            return None

        name = self.peek(start).lexeme
        pos = start + 2
        args: list[ast.Expr] = []

        if not self.at(pos, TokenKind.RIGHT_PAREN):
            arguments = self.arguments(pos)
            if arguments is None:
                return None
            args, pos = arguments

        if not self.at(pos, TokenKind.RIGHT_PAREN):
            return None
        return ParseResult(ast.Call(name=name, args=args), pos + 1)

    def arguments(self, start: int) -> tuple[list[ast.Expr], int] | None:
        first = self.expression(start)
        if first is None:
            return None

        args = [first.node]
        pos = first.next
        while self.at(pos, TokenKind.COMMA):
            arg = self.expression(pos + 1)
            if arg is None:
                return None
            args.append(arg.node)
            pos = arg.next
        return args, pos


def parse(tokens: list[Token], start: int = 0) -> ast.Expr | None:
    """Parse the expression beginning at token `start`."""
    return Parser(tokens).parse(start)


def parse_line(tokens: list[Token]) -> ast.Expr | None:
    """Parse the trailing expression of a tokenized line."""
    return Parser(tokens).parse_line()


def parse_source(line: str) -> ast.Expr | None:
    """Scan and parse a single line of text."""
    return parse_line(scan(line).tokens)
