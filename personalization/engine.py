"""
Personalization Engine - Composition root.

Wires one snapshot store and one content catalog into the ledger,
aggregator, profile store and the three services, and loads every
collection on startup.
"""

import logging
from typing import Optional

from personalization.config import Settings
from personalization.repositories import (
    ContentCatalog,
    InMemoryContentCatalog,
    InteractionLedger,
    JsonFileContentCatalog,
    SnapshotStore,
    UserProfileStore,
    create_store,
)
from personalization.services import (
    EngagementAggregator,
    ExperimentEvaluator,
    RecommendationService,
    SocialService,
)

logger = logging.getLogger(__name__)


class PersonalizationEngine:
    def __init__(self, settings: Settings, store: SnapshotStore, catalog: ContentCatalog):
        self.settings = settings
        self.store = store
        self.catalog = catalog

        self.ledger = InteractionLedger(store)
        self.aggregator = EngagementAggregator(self.ledger, store)
        self.profiles = UserProfileStore(store)

        self.recommendations = RecommendationService(settings, catalog, self.profiles)
        self.social = SocialService(settings, self.ledger, self.aggregator, self.recommendations)
        self.experiments = ExperimentEvaluator(settings, store)

    @classmethod
    async def create(
        cls, settings: Settings, catalog: Optional[ContentCatalog] = None
    ) -> "PersonalizationEngine":
        """Build the configured store and catalog, then load persisted state."""
        store = await create_store(settings)
        if catalog is None:
            if settings.catalog_path:
                catalog = JsonFileContentCatalog(settings.catalog_path)
            else:
                catalog = InMemoryContentCatalog()

        engine = cls(settings, store, catalog)
        await engine.load()
        return engine

    async def load(self) -> None:
        await self.ledger.load()
        await self.aggregator.load()
        await self.profiles.load()
        await self.experiments.load()
        logger.info(f"Engine loaded from {self.settings.store_backend} store")

    async def close(self) -> None:
        await self.store.close()
        logger.info("Engine store closed")
