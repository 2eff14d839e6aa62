"""
Katalog funkcji wbudowanych FINT.

Zamknięty zbiór, nazwy rozróżniają wielkość liter:
  sin, asin, cos, acos, tan, atan, ln  — 1 argument
  pow(a, b)                            — a ** b
  log(a, b)                            — logarytm z a przy podstawie b

Operacje na numpy.float64 dają wyniki zgodne z IEEE-754 (asin(2) → nan,
ln(0) → -inf). Wywołujący odpowiada za numpy.errstate(all="ignore").
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np


def _log_base(value: np.float64, base: np.float64) -> np.float64:
    return np.divide(np.log(value), np.log(base))


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    arity: int
    impl: Callable[..., np.float64]

    def __call__(self, *args: np.float64) -> np.float64:
        return np.float64(self.impl(*args))


BUILTIN_FUNCTIONS: dict[str, BuiltinFunction] = {
    f.name: f
    for f in (
        BuiltinFunction("sin", 1, np.sin),
        BuiltinFunction("asin", 1, np.arcsin),
        BuiltinFunction("cos", 1, np.cos),
        BuiltinFunction("acos", 1, np.arccos),
        BuiltinFunction("tan", 1, np.tan),
        BuiltinFunction("atan", 1, np.arctan),
        BuiltinFunction("ln", 1, np.log),
        BuiltinFunction("pow", 2, np.power),
        BuiltinFunction("log", 2, _log_base),
    )
}


def lookup_function(name: str) -> BuiltinFunction | None:
    return BUILTIN_FUNCTIONS.get(name)
