"""
Router: POST /evaluate

Parsuje program, wykonuje go na świeżym Environment i zwraca zmienne
(sformatowane jak w CLI) oraz zebrane diagnostyki.
Błąd składni → 422 z pozycją; ewaluacja się wtedy nie zaczyna.
Endpoint synchroniczny: parsowanie i ewaluacja idą w puli wątków FastAPI.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from adapters.diagnostics.sinks import CollectingDiagnosticSink
from adapters.evaluator.ast_evaluator import FormulaEvaluator
from adapters.formula_parser.recursive_parser import RecursiveFormulaParser
from adapters.output_formatter import format_variables
from api.dependencies import get_formula_parser, get_settings
from api.schemas import EvaluateRequest, EvaluateResponse, SyntaxErrorDetail
from config import Settings
from ports.formula_parser import FormulaSyntaxError

logger = logging.getLogger("fint.api")

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse)
def evaluate(
    body: EvaluateRequest,
    formula_parser: RecursiveFormulaParser = Depends(get_formula_parser),
    settings: Settings = Depends(get_settings),
) -> EvaluateResponse:
    if len(body.source) > settings.max_source_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Program przekracza limit {settings.max_source_chars} znaków",
        )

    try:
        program = formula_parser.parse(body.source)
    except FormulaSyntaxError as exc:
        raise HTTPException(
            status_code=422,
            detail=SyntaxErrorDetail(
                message=exc.message, line=exc.line, column=exc.column,
            ).model_dump(),
        )

    sink = CollectingDiagnosticSink()
    env = FormulaEvaluator(sink=sink).run(program)
    if sink.diagnostics:
        logger.info("Evaluation finished with %d diagnostic(s).", len(sink.diagnostics))

    precision = body.precision if body.precision is not None else settings.output_precision
    return EvaluateResponse(
        variables=format_variables(env, precision),
        diagnostics=sink.diagnostics,
    )
