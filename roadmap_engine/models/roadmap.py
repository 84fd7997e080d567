# roadmap_engine/models/roadmap.py
"""
Generation inputs and outputs.

A Roadmap is immutable once produced. Recalculation is a fresh generation
call with updated inputs, never an in-place edit.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from roadmap_engine.models.skill import Phase


class ModuleStatus(str, Enum):
    """Module lifecycle. The engine only ever emits PENDING."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


# Statuses carried over when a roadmap is regenerated
PRESERVED_STATUSES = frozenset({ModuleStatus.COMPLETED, ModuleStatus.IN_PROGRESS})


class OrderedModule(BaseModel):
    """A gap skill placed in the learning sequence."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=1, description="1-based position in the sequence")
    skill_id: str
    slug: str
    name: str
    phase: Phase
    sequence_order: int = 0
    prerequisite_ids: tuple[str, ...] = Field(
        default=(), description="Roadmap members this module depends on"
    )
    resource_id: str | None = Field(default=None, description="Primary learning resource")
    resource_hours: float = 0.0
    practice_hours: float = 0.0
    estimated_hours: float = Field(default=0.0, description="resource_hours + practice_hours")
    status: ModuleStatus = ModuleStatus.PENDING


class PhaseSummary(BaseModel):
    """Modules of one phase, in sequence order."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    name: str
    total_modules: int
    total_hours: float
    modules: tuple[OrderedModule, ...] = ()


class TimeProjection(BaseModel):
    """Aggregate time estimate for an ordered module list."""

    model_config = ConfigDict(frozen=True)

    module_hours: dict[str, float] = Field(default_factory=dict)
    raw_hours: float
    buffered_hours: float = Field(..., description="Raw hours plus buffer, full precision")
    total_hours: int = Field(..., description="Buffered hours rounded to the nearest hour")
    weekly_hours: float
    weeks: float
    weeks_rounded: int
    generated_at: datetime
    projected_completion: datetime


class Roadmap(BaseModel):
    """Fully materialized generation output."""

    model_config = ConfigDict(frozen=True)

    target_role: str
    modules: tuple[OrderedModule, ...] = ()
    phases: tuple[PhaseSummary, ...] = ()
    weekly_hours: float
    total_hours: int
    completed_hours: float = 0.0
    raw_hours: float
    buffered_hours: float
    generated_at: datetime
    projected_completion: datetime
    fingerprint: str = Field(default="", description="Hash of the generation inputs")

    @property
    def skill_ids(self) -> list[str]:
        return [m.skill_id for m in self.modules]

    def module_for(self, skill_id: str) -> OrderedModule | None:
        """Return the module for a skill, or None if it is not on the roadmap."""
        for module in self.modules:
            if module.skill_id == skill_id:
                return module
        return None


class GenerationInput(BaseModel):
    """Per-request input supplied by the onboarding/preferences collaborator."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    target_role: str
    weekly_hours: float
    known_skill_ids: frozenset[str] = Field(default_factory=frozenset)
    include_optional: bool = True


class PreservedModule(BaseModel):
    """A module present in both roadmaps whose progress carries over."""

    model_config = ConfigDict(frozen=True)

    skill_id: str
    status: ModuleStatus
    previous_position: int
    new_position: int


class RegenerationResult(BaseModel):
    """New roadmap plus the progress-preservation diff against the old one."""

    model_config = ConfigDict(frozen=True)

    roadmap: Roadmap
    preserved: tuple[PreservedModule, ...] = ()
    added_skill_ids: tuple[str, ...] = ()
    removed_skill_ids: tuple[str, ...] = ()
    preserved_completed_hours: float = 0.0

    @property
    def preserved_count(self) -> int:
        return len(self.preserved)
