"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Layout and interaction settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Graph construction
    co_occurrence_threshold: int = Field(
        default=1,
        ge=1,
        description="Minimum number of shared ideas before a tag-tag link is created",
    )

    # Link force
    tag_tag_link_distance: float = 90.0
    idea_tag_link_distance: float = 130.0
    tag_tag_strength_per_weight: float = Field(
        default=0.08,
        description="Tag-tag link strength added per co-occurring idea",
    )
    tag_tag_strength_cap: float = Field(
        default=0.4,
        description="Upper bound on tag-tag link strength",
    )
    idea_tag_link_strength: float = 0.18

    # Repulsion / collision / centering
    charge_strength: float = -420.0
    charge_distance_min: float = 1.0
    tag_collide_radius: float = 18.0
    idea_collide_radius: float = 26.0
    center_strength: float = Field(
        default=0.03,
        description="Pull toward the viewport centre on each axis",
    )

    # Simulation temperature (d3-force conventions)
    alpha_start: float = 1.0
    alpha_min: float = 0.001
    alpha_decay: float = Field(
        default=1 - 0.001 ** (1 / 300),
        description="Per-tick decay so alpha reaches alpha_min in ~300 ticks",
    )
    velocity_decay: float = 0.4
    drag_alpha_target: float = 0.2
    resize_alpha: float = 0.6
    random_seed: int | None = Field(
        default=None,
        description="Seed for coincident-node jitter; None = nondeterministic",
    )

    # Frame scheduling
    frame_rate: float = 60.0

    # Viewport
    min_scale: float = 0.25
    max_scale: float = 3.0
    min_viewport_size: float = 320.0
    wheel_delta_factor: float = 0.002

    # Drawing / hit testing
    tag_node_radius: float = 8.0
    idea_node_radius: float = 16.0
    tooltip_offset: float = 14.0


def get_test_settings() -> Settings:
    """Get test environment settings.

    Fixes the jitter seed so layouts are reproducible.
    """
    return Settings(random_seed=42)


# Global settings instance
settings = Settings()
