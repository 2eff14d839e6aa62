"""
Port: FormulaParser
Odpowiedzialność: zamiana tekstu programu na ProgramNode (front end).
"""
from typing import Protocol, runtime_checkable

from contracts import ProgramNode


class FormulaSyntaxError(Exception):
    """Błąd składni; przerywa uruchomienie przed ewaluacją."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def render(self) -> str:
        return f"line {self.line}:{self.column} {self.message}"


@runtime_checkable
class FormulaParser(Protocol):
    def parse(self, text: str) -> ProgramNode:
        """
        Parses program source text ('x = 1; y = x + 2') into a ProgramNode.
        Every node carries the line/column of its first token.
        Raises FormulaSyntaxError on malformed input.
        """
        ...
