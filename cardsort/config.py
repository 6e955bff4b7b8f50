"""Analysis settings loaded from environment variables or .env."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_files() -> list[Path]:
    """Find the nearest .env, walking upward from CWD."""
    cwd = Path.cwd().resolve()
    for parent in [cwd, *cwd.parents]:
        env_path = parent / ".env"
        if env_path.is_file():
            return [env_path]
    return []


class CardSortSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CARDSORT_",
        env_file=_find_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Clustering (distance thresholds for the flat cuts)
    cluster_thresholds: list[float] = Field(default_factory=lambda: [0.3, 0.5, 0.7])

    # Insights
    strong_cluster_threshold: float = 0.8
    ambiguity_threshold: float = 0.4
    max_ambiguous_insights: int = 2
    consensus_threshold: float = 0.9
    min_consensus_cards: int = 3

    # Category usage
    top_cards_per_category: int = 5


def load_settings(**overrides: object) -> CardSortSettings:
    """Load settings, with keyword overrides taking precedence over env/.env.

    ``None`` overrides are dropped so CLI options left unset fall through.
    """
    cleaned = {k: v for k, v in overrides.items() if v is not None}
    return CardSortSettings(**cleaned)  # type: ignore[arg-type]
