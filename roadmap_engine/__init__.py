# roadmap_engine/__init__.py
"""
roadmap-engine: deterministic learning roadmap generation.

Given a skill catalog, a target role, a weekly time commitment and a skip
list, produces a phase-grouped, prerequisite-ordered roadmap with a time
projection.
"""

from roadmap_engine.catalog import CatalogCache, CatalogSnapshot, InMemoryCatalog, YamlCatalog
from roadmap_engine.errors import (
    CatalogError,
    CycleDetectedError,
    DuplicateSkillError,
    EngineError,
    InvalidInputError,
    PhaseOrderingViolationError,
    UnknownSkillError,
)
from roadmap_engine.models import GenerationInput, Roadmap
from roadmap_engine.planning.pipeline import generate_roadmap, regenerate_roadmap

__version__ = "0.1.0"

__all__ = [
    "generate_roadmap",
    "regenerate_roadmap",
    "GenerationInput",
    "Roadmap",
    "CatalogCache",
    "CatalogSnapshot",
    "InMemoryCatalog",
    "YamlCatalog",
    "EngineError",
    "CatalogError",
    "UnknownSkillError",
    "DuplicateSkillError",
    "CycleDetectedError",
    "PhaseOrderingViolationError",
    "InvalidInputError",
]
