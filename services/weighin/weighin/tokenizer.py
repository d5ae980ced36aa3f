"""Scan recognised scale text into numeric tokens."""

from __future__ import annotations

import bisect
import re
import unicodedata
from typing import List, Optional, Sequence, Tuple

from .models import ContextLabel, NumericToken, UnitHint

__all__ = ["normalize_text", "scan_tokens"]

# Map a few visually-similar punctuation marks to ASCII for stability
PUNCT_MAP = {
    "\u2010": "-", "\u2011": "-", "\u2013": "-", "\u2014": "-", "\u2212": "-",
    "\u00B7": ".", "\u2027": ".", "\u2219": ".",  # LED decimal points read as middle dots
}

SPACE_CHARS = {
    "\u00A0",  # NBSP
    "\u2007",  # Figure space
    "\u202F",  # Narrow NBSP
    "\u2009",  # Thin space
    "\u2008",  # Punctuation space
    "\u200A",  # Hair space
}

ZERO_WIDTH = {"\u200B", "\u200C", "\u200D", "\uFEFF"}  # ZWSP/ZWNJ/ZWJ/BOM

LABEL_LOOKBACK = 12

NUMBER_PATTERN = re.compile(r"(?P<int>[0-9]+)(?:(?P<sep>[.,])(?P<frac>[0-9]+))?")
UNIT_PATTERN = re.compile(
    r"\s*(?P<unit>kilograms?|kgs?|pounds?|lbs?)(?![a-z])",
    re.IGNORECASE,
)
LABEL_PATTERN = re.compile(r"\b(?P<label>time|date|year)s?\b[\s:=#\-]*$", re.IGNORECASE)
DASH_RUN_PATTERN = re.compile(r"(?<![0-9.,])[0-9]+(?:-[0-9]+)+(?![0-9]|[.,][0-9])")
CLOCK_RUN_PATTERN = re.compile(r"(?<![0-9])[0-9]{1,2}(?::[0-9]{2}){1,2}(?![0-9])")

Span = Tuple[int, int]


def normalize_text(text: str) -> str:
    """Fold OCR output into a stable single-line ASCII-ish form."""
    t = unicodedata.normalize("NFKC", text)
    for z in ZERO_WIDTH:
        t = t.replace(z, "")
    for s in SPACE_CHARS:
        t = t.replace(s, " ")
    t = "".join(PUNCT_MAP.get(ch, ch) for ch in t)
    return " ".join(t.split())


def scan_tokens(raw_text: str) -> List[NumericToken]:
    """Return every number in ``raw_text`` in document order."""
    if not isinstance(raw_text, str) or not raw_text:
        return []
    text = normalize_text(raw_text)
    if not text:
        return []

    date_spans = _date_spans(text)
    clock_spans = [m.span() for m in CLOCK_RUN_PATTERN.finditer(text)]

    tokens: List[NumericToken] = []
    for match in NUMBER_PATTERN.finditer(text):
        start, end = match.span()
        separator = match.group("sep")

        trailing_bare_dot = separator is None and text[end:end + 1] == "."
        unit_start = end + 1 if trailing_bare_dot else end

        tokens.append(
            NumericToken(
                digits=match.group(0),
                position=start,
                decimal_separator=separator,
                trailing_bare_dot=trailing_bare_dot,
                unit_hint=_unit_after(text, unit_start),
                preceding_label=_label_before(text, start),
                date_like=_inside(start, date_spans),
                clock_like=_inside(start, clock_spans),
            )
        )
    return tokens


def _unit_after(text: str, index: int) -> Optional[UnitHint]:
    match = UNIT_PATTERN.match(text, index)
    if not match:
        return None
    unit = match.group("unit").lower()
    if unit.startswith(("kg", "kilo")):
        return UnitHint.KG
    return UnitHint.LB


def _label_before(text: str, start: int) -> Optional[ContextLabel]:
    window = text[max(0, start - LABEL_LOOKBACK):start]
    match = LABEL_PATTERN.search(window)
    if not match:
        return None
    return ContextLabel(match.group("label").lower())


def _date_spans(text: str) -> List[Span]:
    spans: List[Span] = []
    for match in DASH_RUN_PATTERN.finditer(text):
        groups = match.group(0).split("-")
        if len(groups) >= 3 or any(len(group) == 4 for group in groups):
            spans.append(match.span())
    return spans


def _inside(position: int, spans: Sequence[Span]) -> bool:
    # spans come from finditer, so they are sorted and never overlap
    index = bisect.bisect_right(spans, (position, float("inf"))) - 1
    return index >= 0 and spans[index][0] <= position < spans[index][1]
