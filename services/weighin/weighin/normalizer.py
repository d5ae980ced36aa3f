"""Turn numeric tokens into candidate weights in kilograms."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from .models import NumericToken, Origin, UnitHint, WeightCandidate
from .numeral import insert_decimal, parse_scale_number, to_kilograms

__all__ = [
    "MIN_WEIGHT_KG",
    "MAX_WEIGHT_KG",
    "TYPICAL_MIN_KG",
    "TYPICAL_MAX_KG",
    "is_valid_weight",
    "is_typical_weight",
    "candidates_for",
    "validate",
    "pound_candidates",
]

MIN_WEIGHT_KG = Decimal("20.0")
MAX_WEIGHT_KG = Decimal("400.0")
TYPICAL_MIN_KG = Decimal("40.0")
TYPICAL_MAX_KG = Decimal("200.0")
MIN_POUNDS = Decimal("40")
MAX_POUNDS = Decimal("880")

REINTERPRET_LENGTHS = (3, 4)
LONG_RUN_LENGTH = 5


def is_valid_weight(value: Decimal) -> bool:
    return MIN_WEIGHT_KG <= value <= MAX_WEIGHT_KG


def is_typical_weight(value: Decimal) -> bool:
    return TYPICAL_MIN_KG <= value <= TYPICAL_MAX_KG


def _is_long_run(token: NumericToken) -> bool:
    return (
        not token.has_explicit_decimal
        and not token.trailing_bare_dot
        and len(token.digits) >= LONG_RUN_LENGTH
    )


def _face_value(token: NumericToken) -> List[WeightCandidate]:
    literal = parse_scale_number(token.digits)
    if literal is None:
        return []
    return [WeightCandidate(literal, Origin.LITERAL, token)]


def candidates_for(token: NumericToken) -> List[WeightCandidate]:
    """Literal value first, then the decimal-inserted reading when one applies.

    Explicit decimals are trusted as printed. Plain digit runs keep their face
    value and, for 3-4 digit runs or runs followed by a stray '.', also get a
    reading with the decimal point before the last digit ('974' -> 97.4).
    Runs of five or more digits give no kilogram reading at all.
    """
    if _is_long_run(token):
        return []

    candidates = _face_value(token)
    if token.has_explicit_decimal:
        return candidates

    if token.trailing_bare_dot or len(token.digits) in REINTERPRET_LENGTHS:
        shifted = insert_decimal(token.digits)
        if shifted is not None:
            candidates.append(WeightCandidate(shifted, Origin.REINTERPRETED, token))
    return candidates


def validate(candidates: Iterable[WeightCandidate]) -> List[WeightCandidate]:
    return [candidate for candidate in candidates if is_valid_weight(candidate.value_kg)]


def pound_candidates(tokens: Iterable[NumericToken]) -> List[WeightCandidate]:
    """Read each token as pounds; used only when no kilogram reading survived.

    Tokens explicitly marked 'kg' are skipped. Long digit runs are read at
    face value only ('00085' -> 85 lb).
    """
    converted: List[WeightCandidate] = []
    for token in tokens:
        if token.unit_hint is UnitHint.KG:
            continue
        readings = _face_value(token) if _is_long_run(token) else candidates_for(token)
        for candidate in readings:
            pounds = candidate.value_kg
            if not MIN_POUNDS <= pounds <= MAX_POUNDS:
                continue
            kilograms = to_kilograms(pounds)
            if is_valid_weight(kilograms):
                converted.append(WeightCandidate(kilograms, Origin.POUND_CONVERSION, token))
    return converted
