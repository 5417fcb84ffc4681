"""
Engagement Aggregator - Per-content social statistics and trending order.

Stats are derived by scanning live ledger entries and cached per content
id. The cache must be refreshed after every ledger mutation for that id;
the social service does this under the per-content lock.
"""

import asyncio
import logging
from typing import Dict, List, Tuple

from personalization.models.interaction import InteractionType, SocialStats
from personalization.repositories.base import CONTENT_STATS, SnapshotStore
from personalization.repositories.interaction_repository import InteractionLedger

logger = logging.getLogger(__name__)


class EngagementAggregator:
    def __init__(self, ledger: InteractionLedger, store: SnapshotStore):
        self.ledger = ledger
        self.store = store
        # Insertion ordered; trending ties keep this order
        self._stats: Dict[str, SocialStats] = {}
        self._write_lock = asyncio.Lock()

    async def load(self) -> None:
        records = await self.store.load(CONTENT_STATS) or []
        self._stats = {
            content_id: SocialStats.model_validate(stats) for content_id, stats in records
        }
        logger.info(f"Loaded cached stats for {len(self._stats)} content items")

    async def persist(self) -> None:
        async with self._write_lock:
            await self.store.save(
                CONTENT_STATS,
                [[content_id, stats.model_dump(mode="json")] for content_id, stats in self._stats.items()],
            )

    def recompute(self, content_id: str) -> SocialStats:
        """Count live entries by kind and replace the cached stats."""
        counts = {kind: 0 for kind in InteractionType}
        for interaction in self.ledger.list_for(content_id):
            counts[interaction.type] += 1

        stats = SocialStats.from_counts(
            likes=counts[InteractionType.LIKE],
            bookmarks=counts[InteractionType.BOOKMARK],
            shares=counts[InteractionType.SHARE],
            views=counts[InteractionType.VIEW],
        )
        self._stats[content_id] = stats
        return stats

    def get_stats(self, content_id: str) -> SocialStats:
        """Cached stats, computed on first request."""
        stats = self._stats.get(content_id)
        if stats is None:
            stats = self.recompute(content_id)
        return stats

    def trending(self, limit: int) -> List[Tuple[str, SocialStats]]:
        """
        Known content ids by engagement, highest first.

        Ties keep first-recorded order (stable sort).
        """
        ranked = sorted(self._stats.items(), key=lambda entry: entry[1].engagement, reverse=True)
        return ranked[:limit]
