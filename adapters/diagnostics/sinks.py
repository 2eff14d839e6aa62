"""
Adapter: DiagnosticSink
StreamDiagnosticSink    — wypisuje 'line L:C komunikat' do strumienia (domyślnie stderr)
CollectingDiagnosticSink — zbiera diagnostyki w liście (API, testy)
"""
from __future__ import annotations

import sys
from typing import TextIO

from contracts import Diagnostic


class StreamDiagnosticSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def report(self, diagnostic: Diagnostic) -> None:
        # sys.stderr rozwiązywany przy każdym wywołaniu (capsys podmienia go w testach)
        stream = self._stream if self._stream is not None else sys.stderr
        print(diagnostic.render(), file=stream)


class CollectingDiagnosticSink:
    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def rendered(self) -> list[str]:
        return [d.render() for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()
