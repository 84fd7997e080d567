# roadmap_engine/models/skill.py
"""
Catalog reference data: phases, skills, prerequisite edges and resources.

All models are frozen; the engine never mutates catalog data.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Phase(str, Enum):
    """Learning phases, declared in learning order."""

    FOUNDATION = "foundation"
    CORE_ML = "core_ml"
    DEEP_LEARNING = "deep_learning"

    @property
    def order(self) -> int:
        """Zero-based position of the phase in the learning journey."""
        return PHASE_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return PHASE_NAMES[self]


PHASE_ORDER: tuple[Phase, ...] = (Phase.FOUNDATION, Phase.CORE_ML, Phase.DEEP_LEARNING)

PHASE_NAMES: dict[Phase, str] = {
    Phase.FOUNDATION: "Foundation",
    Phase.CORE_ML: "Core ML",
    Phase.DEEP_LEARNING: "Deep Learning",
}

PHASE_DESCRIPTIONS: dict[Phase, str] = {
    Phase.FOUNDATION: "Build essential programming and math foundations for ML",
    Phase.CORE_ML: "Master classical machine learning algorithms and techniques",
    Phase.DEEP_LEARNING: "Explore neural networks and advanced deep learning topics",
}


class Skill(BaseModel):
    """A learnable skill in the catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Unique skill identifier")
    slug: str = Field(..., description="URL-safe identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="What the skill covers")
    phase: Phase = Field(..., description="Phase this skill belongs to")
    estimated_hours: float = Field(
        ..., gt=0, description="Estimated learning hours when no resource is attached"
    )
    is_optional: bool = Field(default=False)
    sequence_order: int = Field(
        default=0, description="Tie-break order within a phase (lower comes first)"
    )

    @property
    def sort_key(self) -> tuple[int, int, str]:
        """Deterministic tie-break key: (phase order, sequence order, id)."""
        return (self.phase.order, self.sequence_order, self.id)


class PrerequisiteEdge(BaseModel):
    """Directed edge: ``skill_id`` requires ``prerequisite_id``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    skill_id: str
    prerequisite_id: str


ResourceType = Literal["video", "documentation", "tutorial", "mini_project"]


class Resource(BaseModel):
    """A learning resource attached to a skill."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    skill_id: str
    title: str
    url: str = ""
    type: ResourceType = "documentation"
    source: str = "other"
    estimated_minutes: float = Field(..., gt=0)
    description: str | None = None
    quality_score: float | None = Field(default=None, ge=0.0, le=1.0)
    is_recommended: bool = False
    is_free: bool = True

    @property
    def hours(self) -> float:
        return self.estimated_minutes / 60
