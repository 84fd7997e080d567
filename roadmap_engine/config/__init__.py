# roadmap_engine/config/__init__.py
"""Configuration system for roadmap-engine."""

from .loader import get_config_path, load_config
from .schema import (
    BUFFER_RATIO,
    MAX_WEEKLY_HOURS,
    PRACTICE_RATIO,
    CatalogConfig,
    EstimationConfig,
    OutputConfig,
    RoadmapEngineConfig,
)

__all__ = [
    "RoadmapEngineConfig",
    "EstimationConfig",
    "CatalogConfig",
    "OutputConfig",
    "PRACTICE_RATIO",
    "BUFFER_RATIO",
    "MAX_WEEKLY_HOURS",
    "load_config",
    "get_config_path",
]
