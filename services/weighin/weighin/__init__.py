"""Core package for the WeighIn scale-reading service."""

from .engine import extract_weight, normalize_weight

__all__ = [
    "config",
    "models",
    "numeral",
    "tokenizer",
    "filters",
    "normalizer",
    "ranker",
    "engine",
    "images",
    "vision",
    "service",
    "cli",
    "extract_weight",
    "normalize_weight",
]
