import math

import numpy as np
import pytest

from adapters.diagnostics.sinks import CollectingDiagnosticSink, StreamDiagnosticSink
from adapters.evaluator.ast_evaluator import FormulaEvaluator
from adapters.evaluator.functions import BUILTIN_FUNCTIONS, lookup_function
from contracts import Diagnostic, DiagnosticCode, Environment
from ports.diagnostic_sink import DiagnosticSink
from ports.evaluator import Evaluator


def test_builtin_catalog_is_closed():
    assert {name: f.arity for name, f in BUILTIN_FUNCTIONS.items()} == {
        "sin": 1, "asin": 1, "cos": 1, "acos": 1, "tan": 1, "atan": 1, "ln": 1,
        "pow": 2, "log": 2,
    }
    assert lookup_function("exp") is None


def test_log_uses_second_argument_as_base():
    with np.errstate(all="ignore"):
        assert lookup_function("log")(np.float64(81), np.float64(3)) == pytest.approx(4)
        assert math.isnan(lookup_function("log")(np.float64(-1), np.float64(10)))


def test_adapters_implement_ports():
    assert isinstance(FormulaEvaluator(), Evaluator)
    assert isinstance(CollectingDiagnosticSink(), DiagnosticSink)
    assert isinstance(StreamDiagnosticSink(), DiagnosticSink)


def test_environment_lookup_does_not_create_entries():
    env = Environment()

    assert env.lookup("x") is None
    assert "x" not in env
    env.assign("x", 1)
    env.assign("x", 2.5)
    assert env.as_dict() == {"x": 2.5}


def test_stream_sink_writes_rendered_lines(tmp_path):
    path = tmp_path / "diag.txt"
    with path.open("w", encoding="utf-8") as fh:
        StreamDiagnosticSink(fh).report(Diagnostic(
            line=3, column=7, code=DiagnosticCode.UNKNOWN_FUNCTION, message="Unknown function: f",
        ))

    assert path.read_text(encoding="utf-8") == "line 3:7 Unknown function: f\n"
