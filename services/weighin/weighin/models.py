"""Domain models for scale readings and weight candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class UnitHint(str, Enum):
    KG = "kg"
    LB = "lb"


class ContextLabel(str, Enum):
    TIME = "time"
    DATE = "date"
    YEAR = "year"


class Origin(str, Enum):
    LITERAL = "literal"
    REINTERPRETED = "reinterpreted"
    POUND_CONVERSION = "pound_conversion"


@dataclass(frozen=True, slots=True)
class NumericToken:
    """A number found in recognised text, with the context around it."""

    digits: str
    position: int
    decimal_separator: Optional[str] = None
    trailing_bare_dot: bool = False
    unit_hint: Optional[UnitHint] = None
    preceding_label: Optional[ContextLabel] = None
    date_like: bool = False
    clock_like: bool = False

    @property
    def has_explicit_decimal(self) -> bool:
        return self.decimal_separator is not None


@dataclass(frozen=True, slots=True)
class WeightCandidate:
    """One numeric interpretation of a token, in kilograms."""

    value_kg: Decimal
    origin: Origin
    source: NumericToken

    @property
    def is_explicit_decimal(self) -> bool:
        return self.origin is Origin.LITERAL and self.source.has_explicit_decimal

    @property
    def is_plain_integer(self) -> bool:
        return self.origin is Origin.LITERAL and not self.source.has_explicit_decimal


@dataclass(slots=True)
class Extraction:
    """Diagnostic trace of a single engine run."""

    tokens: List[NumericToken] = field(default_factory=list)
    kept: List[NumericToken] = field(default_factory=list)
    candidates: List[WeightCandidate] = field(default_factory=list)
    winner: Optional[WeightCandidate] = None
    weight_kg: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.weight_kg is not None


@dataclass(slots=True)
class RecognitionResult:
    """Outcome of a text-recognition call on a scale photo."""

    success: bool
    raw_text: str = ""
    error: Optional[str] = None
    confidence: Optional[float] = None


@dataclass(slots=True)
class WeightReading:
    """Final weigh-in verdict handed to the calling layer."""

    success: bool
    weight_kg: Optional[float] = None
    confidence: Optional[float] = None
    raw_text: Optional[str] = None
    error: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "success": self.success,
            "weight": self.weight_kg,
            "confidence": self.confidence,
            "rawText": self.raw_text,
            "error": self.error,
        }
