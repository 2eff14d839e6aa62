"""
Adapter: FormulaEvaluator
Implementuje port Evaluator — rekurencyjne przejście AST programu FINT
na liczbach zmiennoprzecinkowych podwójnej precyzji.

run()           — wykonuje instrukcje po kolei na świeżym Environment
evaluate()      — oblicza wartość pojedynczego węzła wyrażenia
call_function() — wywołanie funkcji z katalogu wbudowanych

Arytmetyka idzie przez ufunc-i numpy na float64 w numpy.errstate(all="ignore"),
więc 1/0 daje inf, a asin(2) nan, bez wyjątków i bez ostrzeżeń.

Błędy semantyczne (niezdefiniowana zmienna, zła nazwa zmiennej, nieznana
funkcja, zła liczba argumentów, przecinek na końcu listy argumentów) trafiają
do DiagnosticSink, a wartość zastępowana jest przez NaN. Uruchomienie zawsze
dochodzi do końca.
"""
from __future__ import annotations

import logging
import re

import numpy as np

from adapters.diagnostics.sinks import StreamDiagnosticSink
from adapters.evaluator.functions import lookup_function
from contracts import (
    Diagnostic,
    DiagnosticCode,
    Environment,
    ExpressionNode,
    ExprAST,
    FactorNode,
    FunctionCallNode,
    NumberNode,
    OperationNode,
    ParenNode,
    ProgramNode,
    SignedAtomNode,
    SourceNode,
    TermNode,
    VariableNode,
)
from ports.diagnostic_sink import DiagnosticSink

logger = logging.getLogger("fint.evaluator")

_NAN = np.float64("nan")

# Mapowanie symboli operatorów na ufunc-i numpy
_OP_FUNCS = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    "^": np.power,
}

_NAME_START_RE = re.compile(r"[A-Za-z_]")


class FormulaEvaluator:
    """Interpreter drzewa AST; nie trzyma stanu między uruchomieniami."""

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._sink = sink if sink is not None else StreamDiagnosticSink()

    # -- Evaluator protocol ------------------------------------------------

    def run(self, program: ProgramNode) -> Environment:
        env = Environment()
        with np.errstate(all="ignore"):
            for operation in program.operations:
                self._run_operation(operation, env)
        logger.debug("Run finished: %d operation(s), %d variable(s).",
                     len(program.operations), len(env))
        return env

    def evaluate(self, node: ExprAST, env: Environment) -> float:
        with np.errstate(all="ignore"):
            return float(self._eval(node, env))

    def call_function(
        self,
        name: str,
        args: list[float],
        at: SourceNode | None = None,
    ) -> float:
        """
        Dispatches a built-in function by exact name.
        Unknown names and argument-count mismatches are reported at `at`
        and yield NaN.
        """
        at = at if at is not None else SourceNode()
        fn = lookup_function(name)
        if fn is None:
            self._report(at, DiagnosticCode.UNKNOWN_FUNCTION, f"Unknown function: {name}")
            return _NAN
        if len(args) != fn.arity:
            self._report(
                at, DiagnosticCode.INVALID_ARITY,
                f"Invalid number of arguments for function {name}: "
                f"expected {fn.arity}, got {len(args)}",
            )
            return _NAN
        with np.errstate(all="ignore"):
            return fn(*(np.float64(a) for a in args))

    # -- Prywatne ----------------------------------------------------------

    def _run_operation(self, operation: OperationNode, env: Environment) -> None:
        target = operation.target
        valid_name = _NAME_START_RE.match(target.name) is not None
        if not valid_name:
            self._report(
                target, DiagnosticCode.INVALID_VARIABLE_NAME,
                f"Invalid variable name: {target.name}. "
                "Variable names must start with a letter or underscore.",
            )
        # Wyrażenie liczone także przy złej nazwie, żeby zgłosić jego diagnostyki
        value = (
            self._eval(operation.expression, env)
            if operation.expression is not None
            else np.float64(0.0)
        )
        env.assign(target.name, value if valid_name else _NAN)

    def _eval(self, node: ExprAST, env: Environment) -> np.float64:
        if isinstance(node, (ExpressionNode, TermNode, FactorNode)):
            # Lewostronne zwijanie, także dla '^': a^b^c == (a^b)^c
            value = self._eval(node.operands[0], env)
            for op, operand in zip(node.operators, node.operands[1:]):
                value = _OP_FUNCS[op](value, self._eval(operand, env))
            return value

        if isinstance(node, SignedAtomNode):
            value = self._eval(node.atom, env)
            return np.negative(value) if node.sign == "-" else value

        if isinstance(node, ParenNode):
            return self._eval(node.expression, env)

        if isinstance(node, NumberNode):
            return np.float64(float(node.text))

        if isinstance(node, VariableNode):
            value = env.lookup(node.name)
            if value is None:
                self._report(node, DiagnosticCode.UNDEFINED_VARIABLE,
                             f"Undefined variable: {node.name}")
                return _NAN
            return np.float64(value)

        if isinstance(node, FunctionCallNode):
            return self._eval_call(node, env)

        raise TypeError(f"Nieznany typ węzła AST: {type(node)}")

    def _eval_call(self, node: FunctionCallNode, env: Environment) -> np.float64:
        if not node.args:
            self._report(node, DiagnosticCode.MISSING_ARGUMENTS,
                         f"Missing arguments for function: {node.name}")
            return _NAN
        if node.trailing_comma:
            self._report(node, DiagnosticCode.TRAILING_COMMA,
                         f"Trailing commas are not allowed in function calls: {node.name}")
            return _NAN
        args = [self._eval(arg, env) for arg in node.args]
        return np.float64(self.call_function(node.name, args, at=node))

    def _report(self, at: SourceNode, code: DiagnosticCode, message: str) -> None:
        diagnostic = Diagnostic(line=at.line, column=at.column, code=code, message=message)
        logger.debug("Diagnostic %s: %s", code.value, diagnostic.render())
        self._sink.report(diagnostic)
