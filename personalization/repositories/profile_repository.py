"""
User Profile Store - Per-user preferences and behavioral history.

Profiles are created on first reference through get_or_create(); there
is no "not found" path for profile lookup. Mutations for one user are
serialised with the store's per-user lock.
"""

import asyncio
import logging
from typing import Dict, Optional

from personalization.core.locks import KeyedLock
from personalization.models.profile import UserProfile
from personalization.repositories.base import USER_PROFILES, SnapshotStore

logger = logging.getLogger(__name__)


class UserProfileStore:
    def __init__(self, store: SnapshotStore):
        self.store = store
        self.locks = KeyedLock()
        self._profiles: Dict[str, UserProfile] = {}
        # Per-user locks guard mutation; this one guards the shared snapshot
        self._write_lock = asyncio.Lock()

    async def load(self) -> None:
        records = await self.store.load(USER_PROFILES) or []
        self._profiles = {}
        for record in records:
            profile = UserProfile.model_validate(record)
            self._profiles[profile.id] = profile
        logger.info(f"Loaded {len(self._profiles)} user profiles")

    async def persist(self) -> None:
        async with self._write_lock:
            await self.store.save(
                USER_PROFILES,
                [p.model_dump(mode="json") for p in self._profiles.values()],
            )

    def get_or_create(self, user_id: str) -> UserProfile:
        """Return the live profile, creating it with default weights if needed."""
        profile = self._profiles.get(user_id)
        if profile is None:
            profile = UserProfile(id=user_id)
            self._profiles[user_id] = profile
            logger.debug(f"Created default profile for user {user_id}")
        return profile

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Return the live profile without creating one."""
        return self._profiles.get(user_id)

    def snapshot(self, user_id: str) -> UserProfile:
        """Deep copy of the profile, safe to read outside the user lock."""
        return self.get_or_create(user_id).model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._profiles)
