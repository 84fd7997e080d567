# roadmap_engine/errors.py
"""
Exception taxonomy for roadmap generation.

Catalog errors describe corrupted reference data and are operator-visible
incidents. Input errors describe a bad request the caller can fix and retry.
Every error aborts the whole generation call; the engine never recovers.
"""

from typing import Any

USER_MESSAGE_INPUT = "Unable to build your roadmap, please try again."
USER_MESSAGE_CATALOG = (
    "Unable to build your roadmap right now. Our team has been notified."
)


class EngineError(Exception):
    """Base class for every error raised by the roadmap engine."""

    code: str = "ENGINE_ERROR"
    severity: str = "high"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    @property
    def user_message(self) -> str:
        """Text the application layer shows to the end user."""
        return USER_MESSAGE_CATALOG

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logs and API error payloads."""
        return {
            "code": self.code,
            "severity": self.severity,
            "message": self.message,
            "details": self.details,
        }


class CatalogError(EngineError):
    """Structural problem in the skill catalog (data-quality incident)."""

    code = "CATALOG_ERROR"
    severity = "high"


class UnknownSkillError(CatalogError):
    """An edge or role mapping references a skill id that does not exist."""

    code = "UNKNOWN_SKILL"

    def __init__(self, skill_id: str, referenced_by: str) -> None:
        super().__init__(
            f"Unknown skill '{skill_id}' referenced by {referenced_by}",
            {"skill_id": skill_id, "referenced_by": referenced_by},
        )
        self.skill_id = skill_id
        self.referenced_by = referenced_by


class DuplicateSkillError(CatalogError):
    """Two catalog skills share the same id."""

    code = "DUPLICATE_SKILL"

    def __init__(self, skill_id: str) -> None:
        super().__init__(
            f"Skill id '{skill_id}' appears more than once in the catalog",
            {"skill_id": skill_id},
        )
        self.skill_id = skill_id


class CycleDetectedError(CatalogError):
    """The prerequisite edges do not form a DAG."""

    code = "CYCLE_DETECTED"

    def __init__(self, cycle: list[str] | tuple[str, ...]) -> None:
        self.cycle = tuple(cycle)
        path = " -> ".join(self.cycle + self.cycle[:1])
        super().__init__(
            f"Prerequisite cycle detected: {path}",
            {"cycle": list(self.cycle)},
        )


class PhaseOrderingViolationError(CatalogError):
    """
    Dependency order crosses a phase boundary backwards.

    Raised when a skill depends on (or is sequenced after) a skill that
    belongs to a later phase.
    """

    code = "PHASE_ORDERING_VIOLATION"

    def __init__(
        self,
        skill_id: str,
        skill_phase: str,
        conflicting_skill_id: str,
        conflicting_phase: str,
        relation: str = "depends on",
    ) -> None:
        super().__init__(
            f"Skill '{skill_id}' ({skill_phase}) {relation} "
            f"'{conflicting_skill_id}' from later phase {conflicting_phase}",
            {
                "skill_id": skill_id,
                "skill_phase": skill_phase,
                "conflicting_skill_id": conflicting_skill_id,
                "conflicting_phase": conflicting_phase,
                "relation": relation,
            },
        )
        self.skill_id = skill_id
        self.conflicting_skill_id = conflicting_skill_id
        self.relation = relation


class InvalidInputError(EngineError):
    """The caller violated the generation contract."""

    code = "INVALID_INPUT"
    severity = "low"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, {"field": field} if field else {})
        self.field = field

    @property
    def user_message(self) -> str:
        return USER_MESSAGE_INPUT
