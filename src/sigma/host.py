"""Host contract: variable storage and number formatting for the evaluator."""

import math
from typing import Any, Protocol


class Host(Protocol):
    """What the evaluator and outline builder need from the embedding app."""

    def set_var(self, name: str, value: Any) -> None: ...

    def get_var(self, name: str) -> Any: ...

    def format(self, value: float) -> str: ...

    def clear(self) -> None: ...


class VariableStore:
    """Default Host: a flat, case-sensitive name -> value mapping.

    One store belongs to one evaluation pass. `build_tree` clears it before
    evaluating a document, so bindings never leak between documents.
    """

    def __init__(self, group_digits: bool = True, fraction_digits: int = 3):
        self.group_digits = group_digits
        self.fraction_digits = fraction_digits
        self.variables: dict[str, Any] = {}

    def set_var(self, name: str, value: Any) -> None:
        self.variables[name] = value

    def get_var(self, name: str) -> Any:
        return self.variables.get(name, 0)

    def clear(self) -> None:
        self.variables.clear()

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def format(self, value: float) -> str:
        """Format a result for display (e.g., 1234.5 -> '1,234.5')."""
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"

        grouping = "," if self.group_digits else ""
        text = f"{value:{grouping}.{self.fraction_digits}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        if text in ("-0", ""):
            text = "0"
        return text
