"""Drop tokens that are structurally not weights."""

from __future__ import annotations

from typing import Iterable, List

from .logging import get_logger
from .models import NumericToken

logger = get_logger(__name__)

__all__ = ["is_excluded", "filter_tokens"]


def is_excluded(token: NumericToken) -> bool:
    """True for labelled times/dates/years and for groups of date or clock sequences."""
    if token.preceding_label is not None:
        return True
    return token.date_like or token.clock_like


def filter_tokens(tokens: Iterable[NumericToken]) -> List[NumericToken]:
    kept: List[NumericToken] = []
    for token in tokens:
        if is_excluded(token):
            logger.debug(
                "token_excluded",
                digits=token.digits,
                position=token.position,
                label=token.preceding_label.value if token.preceding_label else None,
                date_like=token.date_like,
                clock_like=token.clock_like,
            )
            continue
        kept.append(token)
    return kept
