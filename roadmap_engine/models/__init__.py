# roadmap_engine/models/__init__.py
"""Catalog and roadmap data models."""

from roadmap_engine.models.roadmap import (
    PRESERVED_STATUSES,
    GenerationInput,
    ModuleStatus,
    OrderedModule,
    PhaseSummary,
    PreservedModule,
    RegenerationResult,
    Roadmap,
    TimeProjection,
)
from roadmap_engine.models.skill import (
    PHASE_DESCRIPTIONS,
    PHASE_NAMES,
    PHASE_ORDER,
    Phase,
    PrerequisiteEdge,
    Resource,
    Skill,
)

__all__ = [
    "Phase",
    "PHASE_ORDER",
    "PHASE_NAMES",
    "PHASE_DESCRIPTIONS",
    "Skill",
    "PrerequisiteEdge",
    "Resource",
    "ModuleStatus",
    "PRESERVED_STATUSES",
    "OrderedModule",
    "PhaseSummary",
    "TimeProjection",
    "Roadmap",
    "GenerationInput",
    "PreservedModule",
    "RegenerationResult",
]
