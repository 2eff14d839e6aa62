#!/usr/bin/env python3
"""
fint.py — CLI interpretera formuł FINT.

Program to lista operacji rozdzielonych ';', np. "x = 2 + 3*4; y = pow(x, 2)".
Po wykonaniu wypisuje wszystkie zmienne (posortowane po nazwie) w postaci
name=value. Błędy semantyczne trafiają na stderr jako 'line L:C komunikat'
i nie przerywają wykonania; błąd składni przerywa przed ewaluacją.

Konfiguracja: zmienne środowiskowe z prefiksem FINT_ lub plik .env
(np. FINT_OUTPUT_PRECISION=12, FINT_LOG_LEVEL=DEBUG).

Użycie:
    python fint.py "x = 2 + 3*4; y = x / 2"
    python fint.py -f program.fint
    echo "a = ln(2)" | python fint.py
    python fint.py --table "x = 1; y = -x"
    python fint.py --debug "x = 2^3^2"

Kody wyjścia:
    0 — wykonano (także z diagnostykami)
    1 — brak programu
    2 — nie można odczytać pliku (także błędne opcje, np. --precision 0)
    3 — błąd składni
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

EXIT_OK = 0
EXIT_NO_PROGRAM = 1
EXIT_FILE_ERROR = 2
EXIT_SYNTAX_ERROR = 3


# -- helpers ---------------------------------------------------------------

def _console() -> Console:
    # Tworzona przy każdym użyciu: sys.stdout bywa podmieniany (capsys)
    return Console(file=sys.stdout, highlight=False)


def _read_program(args: argparse.Namespace) -> str | None:
    if args.file:
        with open(args.file, encoding="utf-8") as fh:
            return fh.read()
    if args.program:
        return " ".join(args.program)
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def _precision(value: str) -> int:
    try:
        digits = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if not 1 <= digits <= 17:
        raise argparse.ArgumentTypeError(f"precision must be between 1 and 17, got {digits}")
    return digits


def _print_variables_table(rows: dict[str, str]) -> None:
    table = Table(title=f"Variables [{len(rows)}]", box=box.ASCII, pad_edge=False)
    table.add_column("Name", no_wrap=True, style="bold cyan")
    table.add_column("Value", justify="right")
    for name, value in rows.items():
        table.add_row(name, value)
    _console().print(table)


def _node_label(node: BaseModel) -> str:
    node_type = getattr(node, "node_type", type(node).__name__)
    detail = ""
    if hasattr(node, "text"):
        detail = f" {node.text}"
    elif hasattr(node, "name"):
        detail = f" {node.name}"
        if getattr(node, "trailing_comma", False):
            detail += " (trailing comma)"
    elif getattr(node, "operators", None):
        detail = " " + " ".join(node.operators)
    elif getattr(node, "sign", None):
        detail = f" {node.sign}"
    return f"[bold]{node_type}[/bold]{detail} @{node.line}:{node.column}"


def _ast_tree(node: BaseModel, tree: Tree | None = None) -> Tree:
    branch = Tree(_node_label(node)) if tree is None else tree.add(_node_label(node))
    for field_name in type(node).model_fields:
        value: Any = getattr(node, field_name)
        children = value if isinstance(value, list) else [value]
        for child in children:
            if isinstance(child, BaseModel) and hasattr(child, "node_type"):
                _ast_tree(child, branch)
    return branch


def _print_debug(text: str) -> None:
    from adapters.formula_parser.recursive_parser import tokenize
    from ports.formula_parser import FormulaSyntaxError

    console = _console()
    try:
        tokens = tokenize(text)
    except FormulaSyntaxError:
        return
    table = Table(title=f"Tokens [{len(tokens)}]", box=box.ASCII, pad_edge=False)
    table.add_column("Pos", no_wrap=True, style="cyan")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Text")
    for tok in tokens:
        table.add_row(f"{tok.line}:{tok.column}", tok.kind, tok.text)
    console.print(table)


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    from adapters.diagnostics.sinks import StreamDiagnosticSink
    from adapters.evaluator.ast_evaluator import FormulaEvaluator
    from adapters.formula_parser.recursive_parser import RecursiveFormulaParser
    from adapters.output_formatter import format_variables
    from config import Settings
    from ports.formula_parser import FormulaSyntaxError

    parser = argparse.ArgumentParser(
        prog="fint",
        description="FINT — interpreter formuł (przypisania i wyrażenia na liczbach double)",
    )
    parser.add_argument("program", nargs="*",
                        help="Tekst programu (łączony spacjami), np. 'x = 1; y = x + 2'")
    parser.add_argument("--file", "-f", help="Ścieżka do pliku z programem")
    parser.add_argument("--precision", "-p", type=_precision, default=None, metavar="N",
                        help="Liczba cyfr znaczących na wyjściu")
    parser.add_argument("--table", action="store_true",
                        help="Wypisz zmienne jako tabelę")
    parser.add_argument("--debug", action="store_true",
                        help="Wypisz tokeny i drzewo AST")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    precision = args.precision if args.precision is not None else settings.output_precision

    try:
        text = _read_program(args)
    except OSError as e:
        print(f"Error: Unable to open file {args.file}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    if text is None or not text.strip():
        parser.print_usage(sys.stderr)
        print("Błąd: podaj program jako argument, przez --file lub stdin", file=sys.stderr)
        return EXIT_NO_PROGRAM

    if args.debug:
        _print_debug(text)

    try:
        program = RecursiveFormulaParser().parse(text)
    except FormulaSyntaxError as e:
        print(e.render(), file=sys.stderr)
        return EXIT_SYNTAX_ERROR

    if args.debug:
        _console().print(_ast_tree(program))

    env = FormulaEvaluator(sink=StreamDiagnosticSink()).run(program)
    rows = format_variables(env, precision)

    if args.table:
        _print_variables_table(rows)
    else:
        for name, value in rows.items():
            print(f"{name}={value}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
