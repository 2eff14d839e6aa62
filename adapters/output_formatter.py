"""
output_formatter.py - render the variable environment as 'name=value' lines.

Names are ordered by name; values use '%g'-style formatting with the given
number of significant digits (8 by default), so 14.0 -> '14',
1/3 -> '0.33333333', NaN -> 'nan', 1/0 -> 'inf'.
"""
from __future__ import annotations

from contracts import Environment

DEFAULT_PRECISION = 8


def format_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"{value:.{precision}g}"


def format_variables(env: Environment, precision: int = DEFAULT_PRECISION) -> dict[str, str]:
    return {name: format_value(value, precision) for name, value in env.items()}


def format_lines(env: Environment, precision: int = DEFAULT_PRECISION) -> list[str]:
    return [f"{name}={text}" for name, text in format_variables(env, precision).items()]
