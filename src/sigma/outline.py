"""Outline tree: turns an indented document into a tree of summed lines.

Each line's `result` is its own value plus the values of everything nested
beneath it. Lines live in a flat arena (`Outline.lines`) and refer to each
other by index, so the root is always `lines[0]`.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .calc import Calc
from .host import Host

logger = logging.getLogger(__name__)

ROOT_SOURCE = "Total"
ROOT_INDENT = -1


@dataclass
class Line:
    """One outline row."""

    source: str
    indent: int
    row_number: int
    value: float = 0.0  # own expression value
    result: float = 0.0  # value + all descendant values
    has_currency_mark: bool = False
    trailing_word: str = ""
    error: str | None = None
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass
class Outline:
    """Arena of Lines; index 0 is the synthetic root."""

    lines: list[Line] = field(default_factory=list)

    def __post_init__(self):
        if not self.lines:
            self.lines.append(Line(source=ROOT_SOURCE, indent=ROOT_INDENT, row_number=0))

    @property
    def root(self) -> Line:
        return self.lines[0]

    @property
    def total(self) -> float:
        return self.root.result

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    def parent_of(self, line: Line) -> Line | None:
        if line.parent is None:
            return None
        return self.lines[line.parent]

    def children_of(self, line: Line) -> list[Line]:
        return [self.lines[i] for i in line.children]

    def ancestors(self, index: int) -> Iterator[int]:
        """Yield indices from the parent of `index` up to the root."""
        parent = self.lines[index].parent
        while parent is not None:
            yield parent
            parent = self.lines[parent].parent

    def walk(self, index: int = 0) -> Iterator[Line]:
        """Pre-order traversal (parent before children)."""
        line = self.lines[index]
        yield line
        for child in line.children:
            yield from self.walk(child)

    def find_parent(self, current: int, indent: int) -> int:
        """Pick the parent for a line with `indent` inserted after `current`."""
        if indent > self.lines[current].indent:
            return current
        for index in self.ancestors(current):
            if self.lines[index].indent < indent:
                return index
        return 0

    def insert(self, line: Line, parent: int) -> int:
        """Append `line` under `parent` and roll its value up to the root."""
        index = len(self.lines)
        line.parent = parent
        self.lines.append(line)
        self.lines[parent].children.append(index)

        for ancestor in self.ancestors(index):
            self.lines[ancestor].result += line.value

        # Last child wins.
        self.lines[parent].has_currency_mark = line.has_currency_mark
        return index


def leading_indent(source: str) -> int:
    """Count leading spaces (tabs do not count)."""
    return len(source) - len(source.lstrip(" "))


def trailing_word(source: str) -> tuple[str, bool]:
    """Strip '$' and '_' from the last word; report whether '$' was present.

    The stripped word is for display only. It is never evaluated: the whole
    line goes through the scanner and parser instead.
    """
    words = source.split()
    if not words:
        return "", False

    last = words[-1]
    word = "".join(ch for ch in last if ch not in "$_")
    return word, "$" in last


def _numeric(value) -> float:
    if isinstance(value, str):
        return 0.0
    return float(value)


def evaluate_line(source: str, row_number: int, host: Host) -> Line:
    """Evaluate one source line and bind its value as Line<row_number>."""
    word, has_currency = trailing_word(source)
    calc = Calc.from_source(source, host)
    value = _numeric(calc.exec())
    host.set_var(f"Line{row_number}", value)

    error = calc.error or calc.parse_error or calc.scan_error
    if error:
        logger.debug("row %d: %s", row_number, error)

    return Line(
        source=source,
        indent=leading_indent(source),
        row_number=row_number,
        value=value,
        result=value,
        has_currency_mark=has_currency,
        trailing_word=word,
        error=error,
    )


def split_lines(document: str) -> list[str]:
    """Split a document into lines, dropping blank ones."""
    return [row for row in document.split("\n") if row.strip()]


def build_tree(document: str, host: Host) -> Outline:
    """Build the indentation tree for `document`, evaluating every line.

    Clears the host first, so each call is an independent evaluation pass.
    """
    host.clear()

    outline = Outline()
    current = 0

    for row_number, source in enumerate(split_lines(document), start=1):
        line = evaluate_line(source, row_number, host)
        parent = outline.find_parent(current, line.indent)
        current = outline.insert(line, parent)

    logger.debug("built outline: %d rows, total %s", len(outline) - 1, outline.total)
    return outline
