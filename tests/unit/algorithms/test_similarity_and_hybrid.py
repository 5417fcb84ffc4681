"""
Unit tests for content similarity and the hybrid orchestrator.
"""

from datetime import timedelta

import pytest

from personalization.algorithms.base import StrategyContext
from personalization.algorithms.hybrid import HybridRecommendation
from personalization.algorithms.similarity import content_similarity, tag_overlap
from personalization.models.content import ContentType
from personalization.models.profile import UserProfile
from personalization.models.recommendation import StrategyName
from tests.factories import NOW, make_item, profile_with_views


@pytest.mark.unit
@pytest.mark.algorithms
class TestContentSimilarity:
    def test_shared_category_and_half_tag_overlap(self):
        x = make_item("x", ContentType.ARTICLE, "c1", ["a", "b"], author="ann")
        y = make_item("y", ContentType.ARTICLE, "c1", ["b", "c"], author="ben")

        # 0.4 category + 0.3 * 1/2 tags + 0.1 type
        assert content_similarity(x, y) == pytest.approx(0.65)

    def test_symmetry(self, sample_content):
        for a in sample_content:
            for b in sample_content:
                assert content_similarity(a, b) == content_similarity(b, a)

    def test_reflexive_with_tags(self, sample_content):
        for item in sample_content:
            assert content_similarity(item, item) == pytest.approx(1.0)

    def test_empty_category_and_author_never_match(self):
        x = make_item("x", ContentType.PHOTO_REPORT, category=None, author=None)
        y = make_item("y", ContentType.INTERVIEW, category=None, author=None)

        assert content_similarity(x, y) == 0.0

    def test_tag_overlap_without_tags(self):
        x = make_item("x")
        y = make_item("y")

        assert tag_overlap(x, y) == 0.0
        # Only the shared type contributes
        assert content_similarity(x, y) == pytest.approx(0.1)

    def test_bounded(self, sample_content):
        for a in sample_content:
            for b in sample_content:
                assert 0.0 <= content_similarity(a, b) <= 1.0


@pytest.mark.unit
@pytest.mark.algorithms
class TestHybridRecommendation:
    """Test pool allocation, merge and annotation."""

    @pytest.fixture
    def hybrid(self, settings):
        return HybridRecommendation(settings)

    def test_sub_limits_round_down(self, hybrid):
        assert hybrid.sub_limits(10) == {
            StrategyName.BEHAVIOR_BASED: 4,
            StrategyName.CONTENT_BASED: 3,
            StrategyName.TRENDING: 2,
            StrategyName.DIVERSITY: 1,
        }
        assert hybrid.sub_limits(3)[StrategyName.DIVERSITY] == 0

    @pytest.mark.asyncio
    async def test_empty_history_yields_trending_and_diversity_only(self, hybrid, sample_content):
        context = StrategyContext(UserProfile(id="new-user"), sample_content)

        recommendations = await hybrid.generate_recommendations(context, 10, now=NOW)

        assert 0 < len(recommendations) <= 10
        assert {r.score for r in recommendations} <= {0.7, 0.5}
        assert {r.metadata.strategy for r in recommendations} <= {
            StrategyName.TRENDING,
            StrategyName.DIVERSITY,
        }

    @pytest.mark.asyncio
    async def test_global_merge_is_sorted_and_stable(self, hybrid, sample_content):
        profile = profile_with_views("u1", sample_content[0])
        context = StrategyContext(profile, sample_content)

        recommendations = await hybrid.generate_recommendations(context, 10, now=NOW)

        assert [(r.content_id, r.metadata.strategy) for r in recommendations] == [
            ("a2", StrategyName.BEHAVIOR_BASED),
            ("i1", StrategyName.TRENDING),
            ("a1", StrategyName.TRENDING),
            ("a2", StrategyName.CONTENT_BASED),
            ("v1", StrategyName.CONTENT_BASED),
            ("i1", StrategyName.DIVERSITY),
            ("v1", StrategyName.BEHAVIOR_BASED),
        ]
        scores = [r.score for r in recommendations]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_never_exceeds_limit(self, hybrid, sample_content):
        profile = profile_with_views("u1", sample_content[0])
        context = StrategyContext(profile, sample_content)

        for limit in (1, 2, 3, 5, 10):
            recommendations = await hybrid.generate_recommendations(context, limit, now=NOW)
            assert len(recommendations) <= limit

    @pytest.mark.asyncio
    async def test_seen_content_only_from_trending_or_diversity(self, hybrid, sample_content):
        profile = profile_with_views("u1", sample_content[0], sample_content[2])
        viewed = set(profile.viewed_content_ids)

        recommendations = await hybrid.generate_recommendations(
            StrategyContext(profile, sample_content), 10, now=NOW
        )

        for rec in recommendations:
            if rec.content_id in viewed:
                assert rec.metadata.strategy in (StrategyName.TRENDING, StrategyName.DIVERSITY)

    @pytest.mark.asyncio
    async def test_metadata_annotation(self, hybrid, sample_content, settings):
        context = StrategyContext(UserProfile(id="new-user"), sample_content)

        recommendations = await hybrid.generate_recommendations(context, 10, now=NOW)
        by_key = {(r.content_id, r.metadata.strategy): r for r in recommendations}

        fresh = by_key[("a1", StrategyName.TRENDING)]
        assert fresh.metadata.algorithm == "hybrid"
        assert fresh.metadata.generated_at == NOW
        assert fresh.metadata.version == settings.recommendation_version
        assert fresh.metadata.confidence == fresh.score
        # Published three days before NOW
        assert fresh.metadata.freshness == pytest.approx(0.9)

        stale = by_key[("i1", StrategyName.TRENDING)]
        assert stale.metadata.freshness == 0.0

    @pytest.mark.asyncio
    async def test_freshness_is_bounded(self, hybrid):
        items = [make_item("future", published_at=NOW + timedelta(days=1))]
        context = StrategyContext(UserProfile(id="u"), items)

        recommendations = await hybrid.generate_recommendations(context, 10, now=NOW)

        assert all(r.metadata.freshness >= 0 for r in recommendations)
