"""
contracts.py — Jedyne źródło prawdy dla typów danych interpretera FINT.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── AST ─────────────────────────────────────────

class SourceNode(BaseModel):
    """Pozycja pierwszego tokenu węzła: line od 1, column od 0."""
    line: int = 1
    column: int = 0


class NumberNode(SourceNode):
    node_type: Literal["number"] = "number"
    text: str  # dosłowny tekst literału, np. "1.5e3"


class VariableNode(SourceNode):
    node_type: Literal["variable"] = "variable"
    name: str


class ParenNode(SourceNode):
    node_type: Literal["paren"] = "paren"
    expression: "ExpressionNode"


class FunctionCallNode(SourceNode):
    node_type: Literal["call"] = "call"
    name: str
    args: list["ExpressionNode"] = Field(default_factory=list)
    trailing_comma: bool = False  # ostatni token przed ')' to ','


AtomNode = Annotated[
    Union[ParenNode, NumberNode, VariableNode, FunctionCallNode],
    Field(discriminator="node_type"),
]


class SignedAtomNode(SourceNode):
    node_type: Literal["signed"] = "signed"
    sign: Optional[Literal["+", "-"]] = None
    atom: AtomNode


class _ChainNode(SourceNode):
    """Łańcuch operandów: operands[0] op[0] operands[1] op[1] ..."""

    @model_validator(mode="after")
    def _check_chain(self):
        if not self.operands:
            raise ValueError("Łańcuch musi mieć co najmniej jeden operand.")
        if len(self.operators) != len(self.operands) - 1:
            raise ValueError(
                f"Niespójny łańcuch: {len(self.operands)} operandów, "
                f"{len(self.operators)} operatorów."
            )
        return self


class FactorNode(_ChainNode):
    node_type: Literal["factor"] = "factor"
    operands: list[SignedAtomNode]
    operators: list[Literal["^"]] = Field(default_factory=list)


class TermNode(_ChainNode):
    node_type: Literal["term"] = "term"
    operands: list[FactorNode]
    operators: list[Literal["*", "/"]] = Field(default_factory=list)


class ExpressionNode(_ChainNode):
    node_type: Literal["expression"] = "expression"
    operands: list[TermNode]
    operators: list[Literal["+", "-"]] = Field(default_factory=list)


class OperationNode(SourceNode):
    """Instrukcja `name = expression` lub samo `name` (wartość 0)."""
    node_type: Literal["operation"] = "operation"
    target: VariableNode
    expression: Optional[ExpressionNode] = None


class ProgramNode(SourceNode):
    node_type: Literal["program"] = "program"
    operations: list[OperationNode] = Field(default_factory=list)


ExprAST = Union[
    ExpressionNode, TermNode, FactorNode, SignedAtomNode,
    ParenNode, NumberNode, VariableNode, FunctionCallNode,
]
for _model in (ParenNode, FunctionCallNode, SignedAtomNode, FactorNode,
               TermNode, ExpressionNode, OperationNode, ProgramNode):
    _model.model_rebuild()


# ─────────────────────────── Diagnostics ─────────────────────────────────

class DiagnosticCode(str, Enum):
    UNDEFINED_VARIABLE = "UNDEFINED_VARIABLE"
    INVALID_VARIABLE_NAME = "INVALID_VARIABLE_NAME"
    UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"
    INVALID_ARITY = "INVALID_ARITY"
    MISSING_ARGUMENTS = "MISSING_ARGUMENTS"
    TRAILING_COMMA = "TRAILING_COMMA"


class Diagnostic(BaseModel):
    line: int
    column: int
    code: DiagnosticCode
    message: str

    def render(self) -> str:
        return f"line {self.line}:{self.column} {self.message}"


# ─────────────────────────── Environment ─────────────────────────────────

class Environment:
    """
    Słownik zmiennych jednego uruchomienia: nazwa → wartość (float).

    Zmieniany tylko przez przypisania; ponowne przypisanie nadpisuje wpis
    w miejscu. Odczyt nieprzypisanej zmiennej nie tworzy wpisu.
    """

    def __init__(self) -> None:
        self._vars: dict[str, float] = {}

    def assign(self, name: str, value: float) -> None:
        self._vars[name] = float(value)

    def lookup(self, name: str) -> float | None:
        return self._vars.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __getitem__(self, name: str) -> float:
        return self._vars[name]

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self):
        return iter(self._vars)

    def items(self) -> list[tuple[str, float]]:
        """Pary (nazwa, wartość) posortowane po nazwie."""
        return sorted(self._vars.items())

    def as_dict(self) -> dict[str, float]:
        return dict(self.items())

    def __repr__(self) -> str:
        return f"Environment({self.as_dict()!r})"


# ─────────────────────────── Run result ──────────────────────────────────

class RunResult(BaseModel):
    variables: dict[str, float] = Field(default_factory=dict)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
