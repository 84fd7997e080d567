# roadmap_engine/planning/sequencer.py
"""
Topological sequencing of the gap.

Kahn's algorithm over the subgraph induced by the gap members. Among ready
skills the lowest (phase order, sequence order, id) wins, which keeps phases
contiguous and makes the output reproducible.
"""

import heapq
import logging
from collections.abc import Mapping

from roadmap_engine.errors import CycleDetectedError, UnknownSkillError
from roadmap_engine.models.roadmap import OrderedModule
from roadmap_engine.models.skill import Resource
from roadmap_engine.planning.gap import GapSet
from roadmap_engine.planning.graph import SkillGraph, find_cycle

logger = logging.getLogger(__name__)


def sequence(
    graph: SkillGraph,
    gap: GapSet,
    resources: Mapping[str, Resource] | None = None,
) -> list[OrderedModule]:
    """
    Order gap members so every module follows its prerequisites.

    Args:
        graph: Validated skill graph
        gap: Prerequisite-complete gap set
        resources: Skill id -> primary resource (skills without one fall
            back to their estimated hours)

    Returns:
        OrderedModules with 1-based positions, status pending

    Raises:
        UnknownSkillError: A gap member is not in the graph
        CycleDetectedError: The induced subgraph contains a cycle
    """
    resources = resources or {}
    members = gap.skill_ids
    for skill_id in sorted(members):
        if skill_id not in graph:
            raise UnknownSkillError(skill_id, "gap set")

    indegree = {
        skill_id: sum(1 for p in graph.prerequisites_of(skill_id) if p in members)
        for skill_id in members
    }
    ready = [graph.skill(s).sort_key for s, degree in indegree.items() if degree == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, _, skill_id = heapq.heappop(ready)
        order.append(skill_id)
        for dependent in graph.dependents_of(skill_id):
            if dependent not in members:
                continue
            indegree[dependent] -= 1
            if indegree[dependent] == 0:
                heapq.heappush(ready, graph.skill(dependent).sort_key)

    if len(order) != len(members):
        remaining = sorted(s for s, degree in indegree.items() if degree > 0)
        induced = {
            s: tuple(d for d in graph.dependents_of(s) if d in indegree and indegree[d] > 0)
            for s in remaining
        }
        cycle = find_cycle(remaining, induced) or remaining
        logger.error(f"Cycle detected in gap for role '{gap.target_role}': {cycle}")
        raise CycleDetectedError(cycle)

    modules = []
    for position, skill_id in enumerate(order, start=1):
        skill = graph.skill(skill_id)
        resource = resources.get(skill_id)
        modules.append(
            OrderedModule(
                position=position,
                skill_id=skill.id,
                slug=skill.slug,
                name=skill.name,
                phase=skill.phase,
                sequence_order=skill.sequence_order,
                prerequisite_ids=tuple(
                    p for p in graph.prerequisites_of(skill_id) if p in members
                ),
                resource_id=resource.id if resource else None,
                resource_hours=resource.hours if resource else skill.estimated_hours,
            )
        )

    logger.debug(f"Sequenced {len(modules)} modules for role '{gap.target_role}'")
    return modules
