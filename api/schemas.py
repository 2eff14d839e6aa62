"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from contracts import Diagnostic


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    source: str = Field(..., min_length=1)
    precision: int | None = Field(default=None, ge=1, le=17)


class EvaluateResponse(BaseModel):
    # Wartości jako tekst: NaN i inf nie są poprawnymi liczbami JSON
    variables: dict[str, str]
    diagnostics: list[Diagnostic]


class SyntaxErrorDetail(BaseModel):
    message: str
    line: int
    column: int


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
