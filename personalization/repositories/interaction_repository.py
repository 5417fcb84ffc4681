"""
Interaction Ledger - Live set of social interactions.

This provides:
1. Toggle semantics for likes and bookmarks (entries are deleted when toggled off)
2. Insert-if-absent views and repeatable shares
3. Per-content scans used by the engagement aggregator
4. Per-user lists of liked, bookmarked, shared and viewed content

The ledger is a mutable set: aggregation counts whatever entries are
live, so a like that was toggled off is simply gone. Callers are
responsible for holding the per-content lock around mutate + recompute.
"""

import asyncio
import logging
import uuid
from typing import Dict, List, Optional

from personalization.core.clock import utcnow
from personalization.models.content import ContentType
from personalization.models.interaction import (
    TOGGLE_TYPES,
    InteractionType,
    SocialInteraction,
    UserSocialData,
)
from personalization.repositories.base import INTERACTIONS, USER_SOCIAL_DATA, SnapshotStore

logger = logging.getLogger(__name__)

_USER_LISTS = {
    InteractionType.LIKE: "likes",
    InteractionType.BOOKMARK: "bookmarks",
    InteractionType.SHARE: "shares",
    InteractionType.VIEW: "views",
}


class InteractionLedger:
    """Source of truth for engagement counts."""

    def __init__(self, store: SnapshotStore):
        self.store = store
        # Insertion ordered; keyed by interaction id
        self._interactions: Dict[str, SocialInteraction] = {}
        self._user_data: Dict[str, UserSocialData] = {}
        # Serialises snapshot-and-save of both collections
        self._write_lock = asyncio.Lock()

    async def load(self) -> None:
        """Replace in-memory state with the stored snapshot."""
        interactions = await self.store.load(INTERACTIONS) or []
        user_data = await self.store.load(USER_SOCIAL_DATA) or []

        self._interactions = {}
        for record in interactions:
            interaction = SocialInteraction.model_validate(record)
            self._interactions[interaction.id] = interaction

        self._user_data = {}
        for record in user_data:
            data = UserSocialData.model_validate(record)
            self._user_data[data.user_id] = data

        logger.info(
            f"Loaded {len(self._interactions)} interactions for {len(self._user_data)} users"
        )

    async def persist(self) -> None:
        """
        Save both collections.

        Snapshot and write happen under one writer lock shared by all
        content ids, so the last save carries the newest state.
        """
        async with self._write_lock:
            await self.store.save(
                INTERACTIONS,
                [i.model_dump(mode="json") for i in self._interactions.values()],
            )
            await self.store.save(
                USER_SOCIAL_DATA,
                [d.model_dump(mode="json") for d in self._user_data.values()],
            )

    def find(
        self, user_id: str, content_id: str, kind: InteractionType
    ) -> Optional[SocialInteraction]:
        for interaction in self._interactions.values():
            if (
                interaction.user_id == user_id
                and interaction.content_id == content_id
                and interaction.type == kind
            ):
                return interaction
        return None

    def toggle(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        kind: InteractionType,
    ) -> bool:
        """
        Flip a like/bookmark for (user, content).

        Returns:
            The new state: True if an entry now exists, False if it was removed
        """
        if kind not in TOGGLE_TYPES:
            raise ValueError(f"{kind.value} is not a toggle interaction")

        existing = self.find(user_id, content_id, kind)
        user_list = self._user_list(user_id, kind)

        if existing is not None:
            del self._interactions[existing.id]
            if content_id in user_list:
                user_list.remove(content_id)
            return False

        self._insert(user_id, content_id, content_type, kind)
        if content_id not in user_list:
            user_list.append(content_id)
        return True

    def view(self, user_id: str, content_id: str, content_type: ContentType) -> bool:
        """
        Record a view once per (user, content).

        Returns:
            True if a new entry was inserted
        """
        if self.find(user_id, content_id, InteractionType.VIEW) is not None:
            return False

        self._insert(user_id, content_id, content_type, InteractionType.VIEW)
        user_list = self._user_list(user_id, InteractionType.VIEW)
        if content_id not in user_list:
            user_list.append(content_id)
        return True

    def share(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        metadata: Optional[Dict[str, str]] = None,
    ) -> SocialInteraction:
        """Always insert a new share entry."""
        interaction = self._insert(
            user_id, content_id, content_type, InteractionType.SHARE, metadata
        )
        user_list = self._user_list(user_id, InteractionType.SHARE)
        if content_id not in user_list:
            user_list.append(content_id)
        return interaction

    def list_for(self, content_id: str) -> List[SocialInteraction]:
        return [i for i in self._interactions.values() if i.content_id == content_id]

    def get_user_social_data(self, user_id: str) -> UserSocialData:
        if user_id not in self._user_data:
            self._user_data[user_id] = UserSocialData(user_id=user_id)
        return self._user_data[user_id]

    def __len__(self) -> int:
        return len(self._interactions)

    def _user_list(self, user_id: str, kind: InteractionType) -> List[str]:
        return getattr(self.get_user_social_data(user_id), _USER_LISTS[kind])

    def _insert(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        kind: InteractionType,
        metadata: Optional[Dict[str, str]] = None,
    ) -> SocialInteraction:
        interaction = SocialInteraction(
            id=uuid.uuid4().hex,
            user_id=user_id,
            content_id=content_id,
            content_type=content_type,
            type=kind,
            timestamp=utcnow(),
            metadata=metadata,
        )
        self._interactions[interaction.id] = interaction
        return interaction
