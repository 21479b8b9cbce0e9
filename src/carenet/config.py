"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine tunables loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CARENET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Aggregation: buckets larger than this collapse into one case group
    aggregation_threshold: int = Field(
        default=2,
        ge=0,
        description="Case buckets with more members than this become a single group node"
    )

    # Geographic clustering
    cluster_threshold_degrees: float = Field(
        default=0.5,
        gt=0,
        description="Points closer than this (in lat/lng degrees) share a cluster"
    )
    cluster_warn_size: int = Field(
        default=2000,
        description="Log a warning when clustering more points than this (O(n^2))"
    )

    # Layout canvas
    layout_width: float = 1400.0
    layout_height: float = 800.0
    layout_margin: float = 200.0  # Distance of organization columns from the edges
    layout_case_band: float = 500.0  # Horizontal band used by the case grid
    layout_grid_top: float = 100.0
    layout_grid_height: float = 600.0
    layout_jitter: float = Field(
        default=30.0,
        ge=0,
        description="Max cosmetic jitter (pixels) applied to case nodes"
    )
    layout_seed: int | None = Field(
        default=None,
        description="Seed for layout jitter; None disables jitter"
    )


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(layout_seed=42)


def get_test_settings() -> Settings:
    """Get test environment settings.

    Jitter stays disabled so layout coordinates are reproducible.
    """
    return Settings(
        aggregation_threshold=2,
        cluster_threshold_degrees=0.5,
        layout_seed=None,
    )


# Global settings instance
settings = Settings()
