"""Extract a single body weight from recognised scale text."""

from __future__ import annotations

from typing import Any, List, Optional

from .filters import filter_tokens
from .logging import get_logger
from .models import Extraction, WeightCandidate
from .normalizer import candidates_for, pound_candidates, validate
from .numeral import round_half_up
from .ranker import pick_winner
from .tokenizer import scan_tokens

logger = get_logger(__name__)

__all__ = ["extract_weight", "normalize_weight"]


def extract_weight(raw_text: Any) -> Extraction:
    """Run the full pipeline and keep every intermediate step.

    Tokens are scanned, labelled dates/times dropped, each survivor expanded
    into literal and decimal-inserted readings, and readings outside 20-400 kg
    discarded. When nothing is left, the survivors are re-read as pounds.
    The best reading is rounded half-up to one decimal.
    """
    extraction = Extraction()
    if not isinstance(raw_text, str):
        return extraction

    extraction.tokens = scan_tokens(raw_text)
    extraction.kept = filter_tokens(extraction.tokens)

    candidates: List[WeightCandidate] = []
    for token in extraction.kept:
        candidates.extend(candidates_for(token))
    extraction.candidates = validate(candidates)

    if not extraction.candidates:
        extraction.candidates = pound_candidates(extraction.kept)

    winner = pick_winner(extraction.candidates)
    if winner is None:
        logger.debug("weight_not_found", tokens=len(extraction.tokens), kept=len(extraction.kept))
        return extraction

    extraction.winner = winner
    extraction.weight_kg = float(round_half_up(winner.value_kg))
    logger.debug(
        "weight_extracted",
        weight=extraction.weight_kg,
        origin=winner.origin.value,
        digits=winner.source.digits,
        candidates=len(extraction.candidates),
    )
    return extraction


def normalize_weight(raw_text: Any) -> Optional[float]:
    """Return the weight in kg (one decimal) found in ``raw_text``, or None."""
    return extract_weight(raw_text).weight_kg
