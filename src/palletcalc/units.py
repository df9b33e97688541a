from __future__ import annotations

from typing import Sequence

IN = float
LB = float

LENGTH_SUFFIXES = ("inches", "inch", "in", '"')
WEIGHT_SUFFIXES = ("pounds", "pound", "lbs", "lb")


def _strip_suffix(text: str, suffixes: Sequence[str]) -> str:
    lowered = text.lower()
    for suffix in suffixes:
        if lowered.endswith(suffix):
            return text[: -len(suffix)].rstrip()
    return text


def parse_float(value: str, suffixes: Sequence[str] = ()) -> float:
    """Parse ``value`` allowing a decimal comma and one of ``suffixes``."""
    text = _strip_suffix(value.strip(), suffixes)
    if not text:
        raise ValueError("empty input")
    return float(text.replace(",", "."))


def parse_length(value: str) -> IN:
    """``'48"'``, ``"31,5 in"`` and ``"40"`` all read as inches."""
    return parse_float(value, LENGTH_SUFFIXES)


def parse_weight(value: str) -> LB:
    return parse_float(value, WEIGHT_SUFFIXES)


def format_float(value: float, ndigits: int = 2) -> str:
    return f"{value:.{ndigits}f}"


def format_length(value: IN, ndigits: int = 2) -> str:
    return f"{format_float(value, ndigits)} in"


def format_weight(value: LB, ndigits: int = 2) -> str:
    return f"{format_float(value, ndigits)} lb"


def format_percent(value: float, ndigits: int = 2) -> str:
    return f"{format_float(value, ndigits)} %"
