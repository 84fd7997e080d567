# roadmap_engine/planning/assembler.py
"""Roadmap assembly: pure struct construction from the earlier stages."""

from collections.abc import Sequence

from roadmap_engine.models.roadmap import OrderedModule, PhaseSummary, Roadmap, TimeProjection


def assemble(
    ordered: Sequence[OrderedModule],
    phases: Sequence[PhaseSummary],
    projection: TimeProjection,
    weekly_hours: float,
    target_role: str,
    fingerprint: str = "",
) -> Roadmap:
    """
    Combine sequenced modules, phase groups and the time projection.

    Per-module hours from the projection are written onto each module, and
    phase groups are rebuilt from those finished modules.

    Args:
        ordered: Phase-validated modules in learning order
        phases: Phase groups over the same modules
        projection: Time estimate for the same modules
        weekly_hours: User's weekly commitment
        target_role: Role the roadmap was generated for
        fingerprint: Hash of the generation inputs

    Returns:
        Immutable Roadmap
    """
    finished: dict[str, OrderedModule] = {}
    for module in ordered:
        hours = projection.module_hours.get(module.skill_id, module.resource_hours)
        finished[module.skill_id] = module.model_copy(
            update={
                "practice_hours": hours - module.resource_hours,
                "estimated_hours": hours,
            }
        )

    phase_groups = tuple(
        summary.model_copy(
            update={"modules": tuple(finished[m.skill_id] for m in summary.modules)}
        )
        for summary in phases
    )

    return Roadmap(
        target_role=target_role,
        modules=tuple(finished[m.skill_id] for m in ordered),
        phases=phase_groups,
        weekly_hours=weekly_hours,
        total_hours=projection.total_hours,
        completed_hours=0.0,
        raw_hours=projection.raw_hours,
        buffered_hours=projection.buffered_hours,
        generated_at=projection.generated_at,
        projected_completion=projection.projected_completion,
        fingerprint=fingerprint,
    )
