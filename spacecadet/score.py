"""Score text formatting with thousands separators."""

from __future__ import annotations

_NO_SCORE = -999


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend."""
    return a - b * _cdiv(a, b)


def format_score(score: int) -> str:
    """Format ``score`` with comma-separated groups; -999 means no score and gives ''."""
    if score == _NO_SCORE:
        return ""
    billions = _cdiv(score, 1_000_000_000)
    millions = _cdiv(_cmod(score, 1_000_000_000), 1_000_000)
    thousands = _cdiv(_cmod(score, 1_000_000), 1000)
    units = _cmod(score, 1000)
    if billions > 0:
        return f"{billions},{millions:03d},{thousands:03d},{units:03d}"
    if millions > 0:
        return f"{millions},{thousands:03d},{units:03d}"
    if thousands > 0:
        return f"{thousands},{units:03d}"
    return str(score)