"""A/B experiment models - variants, per-variant counters and evaluation outcome."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Variant(str, Enum):
    CONTROL = "control"
    TEST = "test"


class VariantPerformance(BaseModel):
    users: int = 0
    conversions: int = 0
    conversion_rate: float = 0.0

    def record(self, converted: bool) -> None:
        self.users += 1
        if converted:
            self.conversions += 1
        self.conversion_rate = self.conversions / self.users


class ExperimentResults(BaseModel):
    control: VariantPerformance = Field(default_factory=VariantPerformance)
    test: VariantPerformance = Field(default_factory=VariantPerformance)

    def for_variant(self, variant: Variant) -> VariantPerformance:
        return self.control if variant == Variant.CONTROL else self.test


class ExperimentOutcome(BaseModel):
    """
    Result of comparing the two variants.

    An undersized experiment is a normal outcome (winner None,
    reason "insufficient_sample"), not an error.
    """

    winner: Optional[Variant] = None
    confidence: float = 0.0
    significant: bool = False
    message: str
    reason: str
