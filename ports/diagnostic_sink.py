"""
Port: DiagnosticSink
Odpowiedzialność: odbiór diagnostyk z ewaluatora (jeden kanał dla wszystkich błędów).
"""
from typing import Protocol, runtime_checkable

from contracts import Diagnostic


@runtime_checkable
class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None:
        """
        Receives a recoverable evaluation error.
        Must not raise and must not affect evaluation flow.
        """
        ...
