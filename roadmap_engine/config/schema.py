# roadmap_engine/config/schema.py
"""
Pydantic configuration models for roadmap-engine.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Practice time per module, as a fraction of its resource time
PRACTICE_RATIO = 0.5

# Overhead added to the raw total to absorb pacing variance
BUFFER_RATIO = 0.10

# Upper bound for a weekly commitment (hours in a week)
MAX_WEEKLY_HOURS = 168.0


class EstimationConfig(BaseModel):
    """Time estimation tuning."""

    model_config = ConfigDict(extra="ignore")

    practice_ratio: float = Field(
        default=PRACTICE_RATIO,
        ge=0.0,
        description="Practice hours per resource hour",
    )
    buffer_ratio: float = Field(
        default=BUFFER_RATIO,
        ge=0.0,
        le=1.0,
        description="Fraction added to the raw total as pacing buffer",
    )
    max_weekly_hours: float = Field(
        default=MAX_WEEKLY_HOURS,
        gt=0.0,
        description="Largest accepted weekly-hours commitment",
    )


class CatalogConfig(BaseModel):
    """Skill catalog source."""

    model_config = ConfigDict(extra="ignore")

    path: str | None = Field(
        default=None, description="Catalog YAML file (None = bundled default catalog)"
    )
    cache_enabled: bool = Field(
        default=True, description="Reuse the validated skill graph between calls"
    )


class OutputConfig(BaseModel):
    """CLI output configuration."""

    model_config = ConfigDict(extra="ignore")

    format: Literal["table", "json", "markdown"] = Field(
        default="table", description="Default roadmap output format"
    )
    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class RoadmapEngineConfig(BaseModel):
    """Root configuration for roadmap-engine."""

    model_config = ConfigDict(extra="ignore")

    estimation: EstimationConfig = Field(default_factory=EstimationConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
