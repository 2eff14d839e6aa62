"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.formula_parser.recursive_parser import RecursiveFormulaParser
from config import Settings


def get_formula_parser(request: Request) -> RecursiveFormulaParser:
    return request.app.state.formula_parser


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
