"""Expression nodes produced by the parser."""

from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, Field


# Expressions - using discriminated union for type safety
class Literal(BaseModel):
    type: TypingLiteral["literal"] = "literal"
    value: float | str


class VarRef(BaseModel):
    """Variable reference (e.g., 'rent' or 'Line3')."""

    type: TypingLiteral["var_ref"] = "var_ref"
    name: str


class UnaryOp(BaseModel):
    type: TypingLiteral["unaryop"] = "unaryop"
    op: str  # -
    operand: "Expr"


class BinaryOp(BaseModel):
    type: TypingLiteral["binop"] = "binop"
    op: str  # +, -, *, /
    left: "Expr"
    right: "Expr"


class Assign(BaseModel):
    """Assignment statement (e.g., 'rent = 1200' or 'rent: 1200')."""

    type: TypingLiteral["assign"] = "assign"
    name: str
    value: "Expr"


class Call(BaseModel):
    """Built-in function call (e.g., clamp(x, 0, 10))."""

    type: TypingLiteral["call"] = "call"
    name: str
    args: list["Expr"] = []


# Expression union type
Expr = Annotated[
    Literal | VarRef | UnaryOp | BinaryOp | Assign | Call,
    Field(discriminator="type"),
]


# Rebuild models for forward references
UnaryOp.model_rebuild()
BinaryOp.model_rebuild()
Assign.model_rebuild()
Call.model_rebuild()
