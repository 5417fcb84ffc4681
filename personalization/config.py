from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine configuration using Pydantic Settings.

    Values come from environment variables (or a local .env file) so the
    same engine can run in-memory for tests and against SQL or Redis in
    production:
    1. Application identity and logging
    2. Store backend selection (memory, sql, redis)
    3. Content catalog location
    4. Recommendation and experiment tunables
    """

    # Application
    app_name: str = "Personalization Engine"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Persistence
    store_backend: str = "memory"  # memory, sql, redis
    database_url: str = "sqlite+aiosqlite:///./personalization.db"
    redis_url: str = "redis://localhost:6379/0"
    store_key_prefix: str = "personalization:"

    # Content catalog (JSON array of content items)
    catalog_path: Optional[str] = None

    # Recommendation engine
    max_recommendations: int = 100
    feed_candidate_limit: int = 20
    freshness_window_days: int = 30
    behavior_share: float = 0.4
    content_share: float = 0.3
    trending_share: float = 0.2
    diversity_share: float = 0.1
    min_score_threshold: float = 0.3
    trending_score: float = 0.7
    diversity_score: float = 0.5
    recommendation_version: str = "1.0"

    # Profile ratings bumped by likes/shares are clamped to this range
    default_view_rating: int = 3
    max_view_rating: int = 5

    # A/B experiment evaluation
    min_experiment_sample: int = 30
    significance_level: float = 0.95

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    @property
    def strategy_shares(self) -> dict:
        """Target share of the final list for each strategy pool."""
        return {
            "behavior_based": self.behavior_share,
            "content_based": self.content_share,
            "trending": self.trending_share,
            "diversity": self.diversity_share,
        }


# Global settings instance
settings = Settings()
