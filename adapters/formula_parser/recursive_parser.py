"""
Adapter: RecursiveFormulaParser
Implementuje port FormulaParser — tokenizer regex + parser rekurencyjny.

Gramatyka:
  program    = [operation] (';' [operation])*
  operation  = variable ['=' expression]
  expression = term (('+'|'-') term)*
  term       = factor (('*'|'/') factor)*
  factor     = satom ('^' satom)*
  satom      = ['+'|'-'] atom
  atom       = '(' expression ')' | NUMBER | variable | function
  function   = WORD '(' [expression (',' expression)*] [','] ')'

WORD to dowolny ciąg [A-Za-z0-9_], który nie jest liczbą, np. '2x'.
Poprawność nazw zmiennych sprawdza dopiero ewaluator.

Pozycje: line liczone od 1, column od 0.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from contracts import (
    ExpressionNode,
    FactorNode,
    FunctionCallNode,
    NumberNode,
    OperationNode,
    ParenNode,
    ProgramNode,
    SignedAtomNode,
    TermNode,
    VariableNode,
)
from ports.formula_parser import FormulaSyntaxError

logger = logging.getLogger("fint.parser")

# ──────────────────────────────────────────────────────────────────────────────
# Tokenizer
# ──────────────────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r'(?P<ws>\s+)'
    r'|(?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?(?![A-Za-z0-9_.]))'
    r'|(?P<word>[A-Za-z0-9_]+)'
    r'|(?P<op>[-+*/^(),;=])'
)


@dataclass(frozen=True)
class Token:
    kind: str   # "number" | "word" | "op" | "eof"
    text: str
    line: int
    column: int

    def describe(self) -> str:
        return "end of input" if self.kind == "eof" else repr(self.text)


def tokenize(text: str) -> list[Token]:
    """Dzieli tekst na tokeny. Zawsze kończy się tokenem 'eof'."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    line_start = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise FormulaSyntaxError(
                f"token recognition error at: {text[pos]!r}", line, pos - line_start,
            )
        kind = m.lastgroup
        lexeme = m.group()
        if kind == "ws":
            newlines = lexeme.count("\n")
            if newlines:
                line += newlines
                line_start = pos + lexeme.rindex("\n") + 1
        else:
            tokens.append(Token(kind, lexeme, line, pos - line_start))
        pos = m.end()
    tokens.append(Token("eof", "", line, pos - line_start))
    return tokens


# ──────────────────────────────────────────────────────────────────────────────
# Parser rekurencyjny
# ──────────────────────────────────────────────────────────────────────────────

# Limit zagnieżdżenia nawiasów i wywołań funkcji (rekurencja parsera i ewaluatora)
MAX_NESTING = 64


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _enter(self, tok: Token) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING:
            raise FormulaSyntaxError(
                f"expression nested too deeply (limit {MAX_NESTING})", tok.line, tok.column,
            )

    def _peek(self, offset: int = 0) -> Token:
        idx = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[idx]

    def _at(self, *texts: str) -> bool:
        tok = self._peek()
        return tok.kind == "op" and tok.text in texts

    def _consume(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.kind != "eof":
            self._pos += 1
        return tok

    def _expect(self, text: str) -> Token:
        tok = self._peek()
        if not (tok.kind == "op" and tok.text == text):
            raise FormulaSyntaxError(
                f"missing {text!r} at {tok.describe()}", tok.line, tok.column,
            )
        return self._consume()

    def _unexpected(self, tok: Token) -> FormulaSyntaxError:
        return FormulaSyntaxError(f"extraneous input {tok.describe()}", tok.line, tok.column)

    def parse(self) -> ProgramNode:
        operations: list[OperationNode] = []
        while self._peek().kind != "eof":
            if self._at(";"):
                self._consume()
                continue
            operations.append(self._operation())
            if self._peek().kind != "eof":
                self._expect(";")
        return ProgramNode(operations=operations)

    def _operation(self) -> OperationNode:
        tok = self._peek()
        if tok.kind != "word":
            raise FormulaSyntaxError(
                f"mismatched input {tok.describe()} expecting variable name",
                tok.line, tok.column,
            )
        self._consume()
        target = VariableNode(name=tok.text, line=tok.line, column=tok.column)
        expression = None
        if self._at("="):
            self._consume()
            expression = self._expression()
        return OperationNode(
            target=target, expression=expression, line=tok.line, column=tok.column,
        )

    def _expression(self) -> ExpressionNode:
        first = self._term()
        operands, operators = [first], []
        while self._at("+", "-"):
            operators.append(self._consume().text)
            operands.append(self._term())
        return ExpressionNode(
            operands=operands, operators=operators, line=first.line, column=first.column,
        )

    def _term(self) -> TermNode:
        first = self._factor()
        operands, operators = [first], []
        while self._at("*", "/"):
            operators.append(self._consume().text)
            operands.append(self._factor())
        return TermNode(
            operands=operands, operators=operators, line=first.line, column=first.column,
        )

    def _factor(self) -> FactorNode:
        first = self._signed_atom()
        operands, operators = [first], []
        while self._at("^"):
            operators.append(self._consume().text)
            operands.append(self._signed_atom())
        return FactorNode(
            operands=operands, operators=operators, line=first.line, column=first.column,
        )

    def _signed_atom(self) -> SignedAtomNode:
        start = self._peek()
        sign = None
        if self._at("+", "-"):
            sign = self._consume().text
        atom = self._atom()
        return SignedAtomNode(sign=sign, atom=atom, line=start.line, column=start.column)

    def _atom(self):
        tok = self._peek()
        if tok.kind == "op" and tok.text == "(":
            self._consume()
            self._enter(tok)
            expression = self._expression()
            self._expect(")")
            self._depth -= 1
            return ParenNode(expression=expression, line=tok.line, column=tok.column)
        if tok.kind == "number":
            self._consume()
            return NumberNode(text=tok.text, line=tok.line, column=tok.column)
        if tok.kind == "word":
            if self._peek(1).kind == "op" and self._peek(1).text == "(":
                return self._call()
            self._consume()
            return VariableNode(name=tok.text, line=tok.line, column=tok.column)
        raise self._unexpected(tok)

    def _call(self) -> FunctionCallNode:
        name = self._consume()
        self._expect("(")
        self._enter(name)
        args: list[ExpressionNode] = []
        if not self._at(")", ","):
            args.append(self._expression())
            while self._at(",") and not (self._peek(1).kind == "op" and self._peek(1).text == ")"):
                self._consume()
                args.append(self._expression())
        if self._at(","):
            self._consume()
        # Token tuż przed ')': przecinek oznacza pusty slot na końcu listy
        trailing_comma = self._tokens[self._pos - 1].text == ","
        self._expect(")")
        self._depth -= 1
        return FunctionCallNode(
            name=name.text, args=args, trailing_comma=trailing_comma,
            line=name.line, column=name.column,
        )


# ──────────────────────────────────────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────────────────────────────────────

class RecursiveFormulaParser:
    """
    Parsuje tekst programu FINT do ProgramNode.
    Rzuca FormulaSyntaxError przy błędnej składni; ewaluacja się wtedy nie zaczyna.
    """

    # -- FormulaParser protocol ---------------------------------------------

    def parse(self, text: str) -> ProgramNode:
        program = _Parser(tokenize(text)).parse()
        logger.debug("Parsed %d operation(s).", len(program.operations))
        return program
