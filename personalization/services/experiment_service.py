"""
Experiment Evaluator - A/B variant assignment and significance testing.

This provides:
1. Deterministic variant assignment from a 32-bit string hash
2. Per-variant user and conversion counters
3. Two-proportion z-test with a numerically approximated normal CDF
"""

import asyncio
import math
import struct
from typing import Optional

from personalization.config import Settings
from personalization.models.experiment import (
    ExperimentOutcome,
    ExperimentResults,
    Variant,
)
from personalization.repositories.base import EXPERIMENT_RESULTS, SnapshotStore
from personalization.services.base import BaseService

# Abramowitz & Stegun 7.1.26, max absolute error ~1.5e-7
_ERF_P = 0.3275911
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

INSUFFICIENT_SAMPLE = "insufficient sample"


def erf(x: float) -> float:
    sign = 1 if x >= 0 else -1
    x = abs(x)
    a1, a2, a3, a4, a5 = _ERF_A
    t = 1.0 / (1.0 + _ERF_P * x)
    y = 1.0 - (((((a5 * t + a4) * t) + a3) * t + a2) * t + a1) * t * math.exp(-x * x)
    return sign * y


def normal_cdf(x: float) -> float:
    return 0.5 * (1 + erf(x / math.sqrt(2)))


def user_hash(user_id: str) -> int:
    """
    Signed 32-bit polynomial hash: h = h * 31 + code unit, wrapping on overflow.

    Code units are UTF-16, so ids outside the BMP hash as surrogate pairs.
    """
    encoded = user_id.encode("utf-16-le")
    h = 0
    for (code,) in struct.iter_unpack("<H", encoded):
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


class ExperimentEvaluator(BaseService):
    def __init__(self, settings: Settings, store: Optional[SnapshotStore] = None):
        super().__init__(settings)
        self.store = store
        self.results = ExperimentResults()
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        if self.store is None:
            return
        record = await self.store.load(EXPERIMENT_RESULTS)
        self.results = ExperimentResults.model_validate(record) if record else ExperimentResults()

    @staticmethod
    def assign_variant(user_id: str) -> Variant:
        """Pure: the same id always lands in the same variant."""
        return Variant.CONTROL if abs(user_hash(user_id)) % 2 == 0 else Variant.TEST

    async def record_conversion(self, user_id: str, converted: bool) -> Variant:
        """
        Count one user observation for the user's variant.

        Returns:
            The variant that was credited
        """
        self._require_id(user_id, "user_id")
        variant = self.assign_variant(user_id)
        self._log_operation(
            "record_conversion", user_id=user_id, variant=variant.value, converted=converted
        )

        async with self._lock:
            self.results.for_variant(variant).record(bool(converted))
            if self.store is not None:
                await self.store.save(EXPERIMENT_RESULTS, self.results.model_dump(mode="json"))
        return variant

    def get_results(self) -> ExperimentResults:
        return self.results.model_copy(deep=True)

    def winner(self) -> ExperimentOutcome:
        """
        Compare conversion rates with a two-proportion z-test.

        Below the minimum sample in either variant the outcome carries no
        winner and zero confidence.
        """
        control, test = self.results.control, self.results.test
        minimum = self.settings.min_experiment_sample

        if control.users < minimum or test.users < minimum:
            return ExperimentOutcome(
                winner=None,
                confidence=0.0,
                significant=False,
                message=INSUFFICIENT_SAMPLE,
                reason="insufficient_sample",
            )

        diff = test.conversion_rate - control.conversion_rate
        pooled = (control.conversions + test.conversions) / (control.users + test.users)
        se = math.sqrt(pooled * (1 - pooled) * (1 / control.users + 1 / test.users))

        # se is 0 only when both variants convert all or none: no measurable difference
        z_score = abs(diff) / se if se > 0 else 0.0
        confidence = 1 - 2 * (1 - normal_cdf(z_score))
        significant = confidence > self.settings.significance_level

        return ExperimentOutcome(
            winner=Variant.TEST if diff > 0 else Variant.CONTROL,
            confidence=confidence,
            significant=significant,
            message="significant result" if significant else "not significant",
            reason="significant" if significant else "not_significant",
        )
