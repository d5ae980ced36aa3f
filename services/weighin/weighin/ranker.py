"""Pick one weight out of several valid candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .models import Origin, UnitHint, WeightCandidate
from .normalizer import is_typical_weight

__all__ = ["RankTier", "RANK_TIERS", "tier_of", "rank_candidates", "pick_winner"]


@dataclass(frozen=True, slots=True)
class RankTier:
    name: str
    matches: Callable[[WeightCandidate], bool]


# Highest priority first. A candidate belongs to the first tier it matches.
RANK_TIERS: Tuple[RankTier, ...] = (
    RankTier(
        "explicit_decimal_typical",
        lambda c: c.is_explicit_decimal and is_typical_weight(c.value_kg),
    ),
    RankTier("explicit_decimal", lambda c: c.is_explicit_decimal),
    RankTier("plain_integer", lambda c: c.is_plain_integer),
    RankTier("reinterpreted", lambda c: c.origin is Origin.REINTERPRETED),
    RankTier(
        "pound_conversion_marked",
        lambda c: c.origin is Origin.POUND_CONVERSION and c.source.unit_hint is UnitHint.LB,
    ),
    RankTier("pound_conversion", lambda c: c.origin is Origin.POUND_CONVERSION),
)


def tier_of(candidate: WeightCandidate) -> int:
    for index, tier in enumerate(RANK_TIERS):
        if tier.matches(candidate):
            return index
    return len(RANK_TIERS)


def _dedupe(candidates: Iterable[WeightCandidate]) -> List[WeightCandidate]:
    seen = set()
    unique: List[WeightCandidate] = []
    for candidate in candidates:
        key = (candidate.source.position, candidate.origin, candidate.value_kg)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def rank_candidates(candidates: Iterable[WeightCandidate]) -> List[WeightCandidate]:
    """Return candidates best-first: by tier, then document order, then input order."""
    unique = _dedupe(candidates)
    order = sorted(
        range(len(unique)),
        key=lambda i: (tier_of(unique[i]), unique[i].source.position, i),
    )
    return [unique[i] for i in order]


def pick_winner(candidates: Iterable[WeightCandidate]) -> Optional[WeightCandidate]:
    ranked = rank_candidates(candidates)
    return ranked[0] if ranked else None
