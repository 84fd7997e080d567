# roadmap_engine/planning/pipeline.py
"""
Roadmap generation pipeline.

Runs the stages strictly in order:

    Loaded -> GapAnalyzed -> Sequenced -> PhaseAssigned -> Estimated -> Assembled

Each stage is a pure function of its inputs. Any stage error aborts the
whole call and propagates to the caller; there are no retries and no
partial roadmaps.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum

from roadmap_engine.catalog.cache import CatalogCache
from roadmap_engine.catalog.provider import (
    CatalogProvider,
    CatalogSnapshot,
    catalog_payload,
    content_digest,
)
from roadmap_engine.config.schema import RoadmapEngineConfig
from roadmap_engine.errors import CatalogError, EngineError
from roadmap_engine.models.roadmap import (
    PRESERVED_STATUSES,
    GenerationInput,
    ModuleStatus,
    PreservedModule,
    RegenerationResult,
    Roadmap,
)
from roadmap_engine.planning.assembler import assemble
from roadmap_engine.planning.estimator import estimate
from roadmap_engine.planning.gap import analyze_gap
from roadmap_engine.planning.graph import SkillGraph, load_graph
from roadmap_engine.planning.phases import assign_phases, group_by_phase
from roadmap_engine.planning.resources import select_primary_resources
from roadmap_engine.planning.sequencer import sequence
from roadmap_engine.validation.inputs import validate_generation_input

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class GenerationStage(Enum):
    """Engine-level states of one generation call."""

    LOADED = "loaded"
    GAP_ANALYZED = "gap_analyzed"
    SEQUENCED = "sequenced"
    PHASE_ASSIGNED = "phase_assigned"
    ESTIMATED = "estimated"
    ASSEMBLED = "assembled"


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def compute_fingerprint(snapshot: CatalogSnapshot, request: GenerationInput) -> str:
    """
    Hash the generation inputs into a stable hex digest.

    Covers the catalog contents and the request, so two roadmaps with the
    same fingerprint were produced from identical inputs.
    """
    payload = catalog_payload(
        snapshot.skills, snapshot.edges, snapshot.roles.values(), snapshot.resources
    )
    payload["request"] = {
        "target_role": request.target_role,
        "weekly_hours": request.weekly_hours,
        "known_skill_ids": sorted(request.known_skill_ids),
        "include_optional": request.include_optional,
    }
    return content_digest(payload)


def _resolve_catalog(
    catalog: CatalogProvider | CatalogSnapshot, cache: CatalogCache | None
) -> tuple[CatalogSnapshot, SkillGraph]:
    if isinstance(catalog, CatalogSnapshot):
        return catalog, load_graph(catalog.skills, catalog.edges)
    if cache is not None:
        return cache.get(catalog)
    snapshot = CatalogSnapshot.from_provider(catalog)
    return snapshot, load_graph(snapshot.skills, snapshot.edges)


def _enter(stage: GenerationStage, request: GenerationInput) -> str:
    logger.info(f"Role '{request.target_role.strip()}': {stage.value}")
    return stage.value


def _log_failure(error: EngineError, stage: str, request: GenerationInput) -> None:
    if isinstance(error, CatalogError):
        logger.error(
            f"Catalog error during {stage} for role '{request.target_role}': {error.message}",
            extra={"error": error.to_dict()},
        )
    else:
        logger.warning(
            f"Rejected generation request during {stage}: {error.message}",
            extra={"error": error.to_dict()},
        )


def generate_roadmap(
    catalog: CatalogProvider | CatalogSnapshot,
    request: GenerationInput,
    clock: Clock | None = None,
    config: RoadmapEngineConfig | None = None,
    cache: CatalogCache | None = None,
) -> Roadmap:
    """
    Generate a roadmap for one user.

    Synchronous and side-effect free. Identical inputs (catalog, request
    and clock reading) produce byte-identical output.

    Args:
        catalog: Catalog provider, or an already materialized snapshot
        request: Target role, weekly hours and skip list
        clock: Returns the generation timestamp (defaults to UTC now)
        config: Engine configuration (defaults when None)
        cache: Optional explicit catalog cache (ignored when
            config.catalog.cache_enabled is False)

    Returns:
        Immutable Roadmap

    Raises:
        UnknownSkillError, DuplicateSkillError, CycleDetectedError,
        PhaseOrderingViolationError: Catalog data-quality errors
        InvalidInputError: Bad request (weekly hours, role, skip list)
    """
    config = config or RoadmapEngineConfig()
    clock = clock or utc_now
    stage = "loading"

    try:
        snapshot, graph = _resolve_catalog(
            catalog, cache if config.catalog.cache_enabled else None
        )
        stage = _enter(GenerationStage.LOADED, request)
        request = validate_generation_input(request, snapshot, config.estimation)
        logger.debug(
            f"Generating roadmap for role '{request.target_role}' "
            f"({len(graph)} skills, {len(request.known_skill_ids)} known)"
        )

        gap = analyze_gap(
            graph,
            request.target_role,
            request.known_skill_ids,
            {role_id: role.skill_ids for role_id, role in snapshot.roles.items()},
            include_optional=request.include_optional,
        )
        stage = _enter(GenerationStage.GAP_ANALYZED, request)

        resources = select_primary_resources(snapshot.resources, graph)
        ordered = sequence(graph, gap, resources)
        stage = _enter(GenerationStage.SEQUENCED, request)

        ordered = assign_phases(ordered)
        stage = _enter(GenerationStage.PHASE_ASSIGNED, request)

        projection = estimate(ordered, request.weekly_hours, clock(), config.estimation)
        phases = group_by_phase(ordered, projection.module_hours)
        stage = _enter(GenerationStage.ESTIMATED, request)

        roadmap = assemble(
            ordered,
            phases,
            projection,
            request.weekly_hours,
            request.target_role,
            fingerprint=compute_fingerprint(snapshot, request),
        )
        stage = _enter(GenerationStage.ASSEMBLED, request)
    except EngineError as e:
        _log_failure(e, stage, request)
        raise

    logger.info(
        f"Generated roadmap for role '{roadmap.target_role}': {len(roadmap.modules)} modules, "
        f"{roadmap.total_hours}h, completion {roadmap.projected_completion.date().isoformat()}"
    )
    return roadmap


def regenerate_roadmap(
    previous: Roadmap,
    catalog: CatalogProvider | CatalogSnapshot,
    request: GenerationInput,
    clock: Clock | None = None,
    config: RoadmapEngineConfig | None = None,
    cache: CatalogCache | None = None,
    statuses: Mapping[str, ModuleStatus] | None = None,
) -> RegenerationResult:
    """
    Generate a fresh roadmap and diff it against the previous one.

    The new roadmap is exactly what generate_roadmap returns; progress is
    only reported, never written into it. Callers apply the diff.

    Args:
        previous: The roadmap being replaced
        catalog: Catalog provider or snapshot
        request: Updated generation input
        clock: Returns the generation timestamp
        config: Engine configuration
        cache: Optional explicit catalog cache
        statuses: Skill id -> current status from the progress tracker;
            overrides the statuses recorded on ``previous``

    Returns:
        RegenerationResult with preserved, added and removed modules
    """
    roadmap = generate_roadmap(catalog, request, clock=clock, config=config, cache=cache)
    statuses = statuses or {}

    new_ids = set(roadmap.skill_ids)
    old_ids = set(previous.skill_ids)

    preserved = []
    completed_hours = 0.0
    for old_module in previous.modules:
        status = statuses.get(old_module.skill_id, old_module.status)
        new_module = roadmap.module_for(old_module.skill_id)
        if new_module is None or status not in PRESERVED_STATUSES:
            continue
        preserved.append(
            PreservedModule(
                skill_id=old_module.skill_id,
                status=status,
                previous_position=old_module.position,
                new_position=new_module.position,
            )
        )
        if status == ModuleStatus.COMPLETED:
            completed_hours += new_module.estimated_hours

    result = RegenerationResult(
        roadmap=roadmap,
        preserved=tuple(preserved),
        added_skill_ids=tuple(s for s in roadmap.skill_ids if s not in old_ids),
        removed_skill_ids=tuple(s for s in previous.skill_ids if s not in new_ids),
        preserved_completed_hours=completed_hours,
    )
    logger.info(
        f"Regenerated roadmap for role '{roadmap.target_role}': "
        f"{result.preserved_count} preserved, {len(result.added_skill_ids)} added, "
        f"{len(result.removed_skill_ids)} removed"
    )
    return result
