"""Render an outline as display rows, plain-text tables, or CSV."""

import csv
import io
from dataclasses import dataclass

from .config import Settings
from .host import Host
from .outline import Line, Outline


@dataclass
class Row:
    index: int
    text: str
    result: str
    error: str | None = None


def format_result(line: Line, host: Host) -> str:
    text = host.format(line.result)
    if line.has_currency_mark:
        return f"${text}"
    return text


def render_rows(outline: Outline, host: Host) -> list[Row]:
    """Rows in display order: parents before their children.

    The synthetic Total row comes last, unless the document has exactly one
    top-level line, which already carries the total.
    """
    rows = [
        Row(line.row_number, line.source, format_result(line, host), line.error)
        for line in outline.walk()
        if not line.is_root
    ]
    if len(outline.root.children) != 1:
        root = outline.root
        rows.append(Row(root.row_number, root.source, format_result(root, host)))
    return rows


def _columns(rows: list[Row], settings: Settings) -> tuple[list[str], list[list[str]]]:
    header = ["line", "result"]
    if settings.show_row_index:
        header.insert(0, "#")
    with_errors = any(row.error for row in rows)
    if with_errors:
        header.append("error")

    table = []
    for row in rows:
        cells = [row.text, row.result]
        if settings.show_row_index:
            cells.insert(0, str(row.index) if row.index else "")
        if with_errors:
            cells.append(row.error or "")
        table.append(cells)
    return header, table


def format_table(rows: list[Row], settings: Settings) -> str:
    """Aligned plain-text table; numbers are right-aligned."""
    header, table = _columns(rows, settings)
    widths = [max(len(cells[i]) for cells in [header, *table]) for i in range(len(header))]
    result_col = header.index("result")

    lines = []
    for cells in [header, *table]:
        padded = [
            cell.rjust(widths[i]) if i == result_col else cell.ljust(widths[i])
            for i, cell in enumerate(cells)
        ]
        lines.append("  ".join(padded).rstrip())
    return "\n".join(lines)


def format_csv(rows: list[Row], settings: Settings) -> str:
    header, table = _columns(rows, settings)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(table)
    return buf.getvalue()
