from __future__ import annotations

import math
import re

"""Numeric text normalization.

Cell text is converted with one fixed policy, not locale-aware:

1. surrounding whitespace is trimmed
2. every comma becomes a period (commas are decimal separators, never grouping)
3. when several periods remain, only the last one is the decimal point

"1.234,56" -> "1.234.56" -> "1234.56"; "1,234,56" -> "1234.56".

Currency glyphs, percent signs, spaces and other characters are not stripped:
such text fails to normalize and the caller keeps it as plain text.
"""

__all__ = [
    "NumericNormalizationError",
    "clean_numeric_text",
    "normalize_numeric",
]

# Sign, digits with optional fraction (or a bare fraction), optional exponent
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class NumericNormalizationError(ValueError):
    """Raised when cell text cannot be read as a finite number."""


def clean_numeric_text(raw: str) -> str:
    cleaned = raw.strip().replace(",", ".")
    last_dot = cleaned.rfind(".")
    if last_dot != -1:
        before = cleaned[:last_dot].replace(".", "")
        after = cleaned[last_dot + 1:]
        cleaned = f"{before}.{after}"
    return cleaned


def normalize_numeric(raw: str) -> float:
    """Return the canonical float for raw cell text.

    Raises:
        NumericNormalizationError: for empty text, text outside the accepted
            number grammar, or values that overflow to infinity
    """
    if raw is None or not raw.strip():
        raise NumericNormalizationError("empty value")
    cleaned = clean_numeric_text(raw)
    # float() alone would also accept "inf", "nan", "1_000" and non-ASCII digits
    if not _NUMBER_RE.fullmatch(cleaned):
        raise NumericNormalizationError(f"not a number: {raw!r}")
    value = float(cleaned)
    if not math.isfinite(value):
        raise NumericNormalizationError(f"number out of range: {raw!r}")
    return value
