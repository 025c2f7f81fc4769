"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Balancer defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EVEN_TEAMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Balancing
    team_size: int = 5
    prioritize_roles: bool = True

    # Per-role overrides as JSON (env var: EVEN_TEAMS_ROLE_WEIGHTS='{"igl": 1.4}')
    role_weights: dict[str, float] = {}

    # Display
    name_teams_after_member: bool = True

    log_level: str = "INFO"

    @field_validator("team_size")
    @classmethod
    def _positive_team_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("team_size must be positive")
        return v

    @field_validator("role_weights")
    @classmethod
    def _known_roles(cls, v: dict[str, float]) -> dict[str, float]:
        from even_teams.utils.role_normalizer import normalize_role_strict

        return {normalize_role_strict(role).value: weight for role, weight in v.items()}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
