"""Scanner for outline calculator lines.

Works on exactly one line of text at a time: there are no multi-line tokens.
Lexical errors never stop the scan; the last one seen is reported alongside
the tokens.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    # Punctuators
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    STAR = "*"
    SLASH = "/"
    SEMICOLON = ";"
    EQUAL = "="
    COLON = ":"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"

    # Special
    END = "END"


PUNCTUATORS = {kind.value: kind for kind in TokenKind if len(kind.value) == 1}

WHITESPACE = " \t\r"
CURRENCY_MARK = "$"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: float | str | None = None


@dataclass
class ScanResult:
    """Tokens for one line plus the last lexical error, if any."""

    tokens: list[Token]
    error: str | None = None


class Scanner:
    """Hand-rolled single-line tokenizer."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: list[Token] = []
        self.error: str | None = None

    def scan(self) -> ScanResult:
        while self.pos < len(self.source):
            ch = self.source[self.pos]

            if ch in WHITESPACE or ch == CURRENCY_MARK:
                self.pos += 1
            elif ch in PUNCTUATORS:
                self.pos += 1
                self.tokens.append(Token(PUNCTUATORS[ch], ch))
            elif _is_digit(ch):
                self._read_number()
            elif ch.isalpha() or ch == "_":
                self._read_identifier()
            elif ch == "'":
                if not self._read_string():
                    self.error = "unterminated string"
                    break
            else:
                self.pos += 1
                self.error = f"unexpected character '{ch}'"

        self.tokens.append(Token(TokenKind.END, ""))
        return ScanResult(tokens=self.tokens, error=self.error)

    def _peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return ""

    def _read_number(self):
        start = self.pos
        while _is_digit(self._peek()):
            self.pos += 1

        # Fraction only when the dot is followed by a digit, so "3." scans as
        # NUMBER DOT.
        if self._peek() == "." and _is_digit(self._peek(1)):
            self.pos += 1
            while _is_digit(self._peek()):
                self.pos += 1

        lexeme = self.source[start : self.pos]
        self.tokens.append(Token(TokenKind.NUMBER, lexeme, float(lexeme)))

    def _read_identifier(self):
        start = self.pos
        while self.pos < len(self.source) and (
            self.source[self.pos].isalnum() or self.source[self.pos] == "_"
        ):
            self.pos += 1

        lexeme = self.source[start : self.pos]
        self.tokens.append(Token(TokenKind.IDENTIFIER, lexeme))

    def _read_string(self) -> bool:
        end = self.source.find("'", self.pos + 1)
        if end == -1:
            self.pos = len(self.source)
            return False

        lexeme = self.source[self.pos : end + 1]
        self.tokens.append(Token(TokenKind.STRING, lexeme, lexeme[1:-1]))
        self.pos = end + 1
        return True


def _is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


def scan(line: str) -> ScanResult:
    """Tokenize one line of source text."""
    return Scanner(line).scan()
