"""
Port: Evaluator
Odpowiedzialność: interpretacja AST programu FINT: przypisania, operatory,
funkcje wbudowane, raportowanie błędów semantycznych.
"""
from typing import Protocol, runtime_checkable

from contracts import Environment, ExprAST, ProgramNode


@runtime_checkable
class Evaluator(Protocol):
    def run(self, program: ProgramNode) -> Environment:
        """
        Evaluates every operation of the program in order against a fresh,
        empty Environment and returns it.
        Recoverable errors (undefined variable, bad function call, invalid
        variable name) are reported to the diagnostic sink and replaced by NaN;
        the run always completes.
        """
        ...

    def evaluate(self, node: ExprAST, env: Environment) -> float:
        """
        Evaluates a single expression-level node against env.
        Never raises for arithmetic: IEEE-754 semantics apply
        (1/0 -> inf, asin(2) -> nan).
        """
        ...
