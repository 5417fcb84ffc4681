"""
Unit tests for the interaction ledger, profile store and content catalogs.
"""

import asyncio
import json

import pytest

from personalization.core.exceptions import StorageError
from personalization.models.content import ContentType
from personalization.models.interaction import InteractionType
from personalization.repositories import (
    InMemoryContentCatalog,
    InteractionLedger,
    JsonFileContentCatalog,
    UserProfileStore,
)
from personalization.repositories.base import INTERACTIONS, USER_PROFILES, USER_SOCIAL_DATA
from tests.factories import SlowFirstSaveStore, make_item

ARTICLE = ContentType.ARTICLE


@pytest.mark.unit
class TestInteractionLedger:
    @pytest.fixture
    def ledger(self, memory_store):
        return InteractionLedger(memory_store)

    def test_toggle_inserts_then_deletes(self, ledger):
        assert ledger.toggle("u1", "c1", ARTICLE, InteractionType.LIKE) is True
        assert len(ledger.list_for("c1")) == 1

        assert ledger.toggle("u1", "c1", ARTICLE, InteractionType.LIKE) is False
        assert ledger.list_for("c1") == []
        assert ledger.get_user_social_data("u1").likes == []

    def test_toggle_kinds_are_independent(self, ledger):
        ledger.toggle("u1", "c1", ARTICLE, InteractionType.LIKE)
        ledger.toggle("u1", "c1", ARTICLE, InteractionType.BOOKMARK)

        kinds = sorted(i.type.value for i in ledger.list_for("c1"))
        assert kinds == ["bookmark", "like"]
        data = ledger.get_user_social_data("u1")
        assert data.likes == ["c1"]
        assert data.bookmarks == ["c1"]

    def test_toggle_rejects_non_toggle_kind(self, ledger):
        with pytest.raises(ValueError):
            ledger.toggle("u1", "c1", ARTICLE, InteractionType.SHARE)

    def test_view_is_recorded_once(self, ledger):
        assert ledger.view("u1", "c1", ARTICLE) is True
        assert ledger.view("u1", "c1", ARTICLE) is False
        assert ledger.view("u2", "c1", ARTICLE) is True

        assert len(ledger.list_for("c1")) == 2
        assert ledger.get_user_social_data("u1").views == ["c1"]

    def test_shares_repeat(self, ledger):
        first = ledger.share("u1", "c1", ARTICLE, {"platform": "twitter"})
        second = ledger.share("u1", "c1", ARTICLE, {"platform": "email"})

        assert first.id != second.id
        assert len(ledger.list_for("c1")) == 2
        # Per-user share list holds distinct content ids
        assert ledger.get_user_social_data("u1").shares == ["c1"]

    @pytest.mark.asyncio
    async def test_persist_and_reload(self, ledger, memory_store):
        ledger.toggle("u1", "c1", ARTICLE, InteractionType.LIKE)
        ledger.view("u1", "c2", ContentType.INTERVIEW)
        await ledger.persist()

        assert INTERACTIONS in memory_store
        assert USER_SOCIAL_DATA in memory_store

        reloaded = InteractionLedger(memory_store)
        await reloaded.load()
        assert len(reloaded) == 2
        assert reloaded.find("u1", "c1", InteractionType.LIKE) is not None
        assert reloaded.get_user_social_data("u1").views == ["c2"]


@pytest.mark.unit
class TestUserProfileStore:
    @pytest.fixture
    def profiles(self, memory_store):
        return UserProfileStore(memory_store)

    def test_get_or_create_applies_defaults(self, profiles):
        profile = profiles.get_or_create("u1")

        weights = {p.type: p.weight for p in profile.preferences.content_type_weights}
        assert weights[ContentType.ARTICLE] == 0.8
        assert weights[ContentType.TESTIMONIAL] == 0.4
        assert profile.preferences.languages == ["fr"]
        assert profiles.get_or_create("u1") is profile

    def test_get_does_not_create(self, profiles):
        assert profiles.get("ghost") is None
        assert len(profiles) == 0

    def test_snapshot_is_detached(self, profiles):
        snapshot = profiles.snapshot("u1")
        snapshot.interests.append("sports")

        assert profiles.get("u1").interests == []

    @pytest.mark.asyncio
    async def test_persist_and_reload(self, profiles, memory_store):
        profiles.get_or_create("u1").interests.append("economy")
        await profiles.persist()

        reloaded = UserProfileStore(memory_store)
        await reloaded.load()
        assert reloaded.get("u1").interests == ["economy"]
        assert USER_PROFILES in memory_store

    @pytest.mark.asyncio
    async def test_concurrent_persists_keep_every_profile(self):
        store = SlowFirstSaveStore()
        profiles = UserProfileStore(store)

        async def touch(user_id):
            async with profiles.locks.hold(user_id):
                profiles.get_or_create(user_id).interests.append("economy")
                await profiles.persist()

        await asyncio.gather(touch("u1"), touch("u2"))

        reloaded = UserProfileStore(store)
        await reloaded.load()
        assert reloaded.get("u1") is not None
        assert reloaded.get("u2") is not None


@pytest.mark.unit
class TestContentCatalogs:
    @pytest.mark.asyncio
    async def test_in_memory_catalog_index(self, sample_content):
        catalog = InMemoryContentCatalog(sample_content)

        index = await catalog.get_index()
        assert set(index) == {item.id for item in sample_content}

        catalog.replace(sample_content[:1])
        assert [item.id for item in await catalog.list_content_items()] == ["a1"]

    @pytest.mark.asyncio
    async def test_json_file_catalog(self, tmp_path):
        path = tmp_path / "catalog.json"
        items = [make_item("x1", category="culture", tags=["art"]), make_item("x2")]
        path.write_text(json.dumps([item.model_dump(mode="json") for item in items]))

        catalog = JsonFileContentCatalog(str(path))
        loaded = await catalog.list_content_items()

        assert [item.id for item in loaded] == ["x1", "x2"]
        assert loaded[0].tags == ["art"]

    @pytest.mark.asyncio
    async def test_json_file_catalog_missing_file(self, tmp_path):
        catalog = JsonFileContentCatalog(str(tmp_path / "missing.json"))

        with pytest.raises(StorageError) as exc_info:
            await catalog.list_content_items()
        assert exc_info.value.collection == "content_catalog"

    @pytest.mark.asyncio
    async def test_json_file_catalog_invalid_item(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"id": "x1", "type": "podcast"}]))

        with pytest.raises(StorageError):
            await JsonFileContentCatalog(str(path)).list_content_items()
