# roadmap_engine/planning/phases.py
"""
Phase assignment.

Every skill already carries its phase; this stage verifies that phase order
is monotonic along the sequence and groups modules for display. A violation
is a catalog authoring error and is raised, never "fixed".
"""

import logging
from collections.abc import Mapping, Sequence

from roadmap_engine.errors import PhaseOrderingViolationError
from roadmap_engine.models.roadmap import OrderedModule, PhaseSummary
from roadmap_engine.models.skill import PHASE_NAMES, PHASE_ORDER

logger = logging.getLogger(__name__)


def assign_phases(ordered: Sequence[OrderedModule]) -> list[OrderedModule]:
    """
    Verify phase boundaries of a topologically sorted sequence.

    Args:
        ordered: Modules in learning order

    Returns:
        The same modules, as a new list

    Raises:
        PhaseOrderingViolationError: A module depends on a later-phase
            module, or phase order decreases between neighbours
    """
    by_id = {module.skill_id: module for module in ordered}

    for module in ordered:
        for prerequisite_id in module.prerequisite_ids:
            prerequisite = by_id.get(prerequisite_id)
            if prerequisite is None:
                continue
            if prerequisite.phase.order > module.phase.order:
                logger.error(
                    f"Phase violation: '{module.skill_id}' ({module.phase.value}) "
                    f"requires '{prerequisite_id}' ({prerequisite.phase.value})"
                )
                raise PhaseOrderingViolationError(
                    module.skill_id,
                    module.phase.value,
                    prerequisite_id,
                    prerequisite.phase.value,
                )

    for previous, current in zip(ordered, ordered[1:]):
        if previous.phase.order > current.phase.order:
            raise PhaseOrderingViolationError(
                current.skill_id,
                current.phase.value,
                previous.skill_id,
                previous.phase.value,
                relation="is sequenced after",
            )

    return list(ordered)


def group_by_phase(
    ordered: Sequence[OrderedModule],
    module_hours: Mapping[str, float] | None = None,
) -> list[PhaseSummary]:
    """
    Group modules by phase, in phase order. Empty phases are omitted.

    Args:
        ordered: Phase-validated modules
        module_hours: Skill id -> module hours (defaults to each module's
            estimated_hours)
    """
    summaries = []
    for phase in PHASE_ORDER:
        members = tuple(m for m in ordered if m.phase == phase)
        if not members:
            continue
        if module_hours is None:
            hours = sum(m.estimated_hours for m in members)
        else:
            hours = sum(module_hours.get(m.skill_id, 0.0) for m in members)
        summaries.append(
            PhaseSummary(
                phase=phase,
                name=PHASE_NAMES[phase],
                total_modules=len(members),
                total_hours=hours,
                modules=members,
            )
        )
    return summaries
