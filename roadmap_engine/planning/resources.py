# roadmap_engine/planning/resources.py
"""Primary resource selection per skill."""

from collections.abc import Iterable

from roadmap_engine.errors import UnknownSkillError
from roadmap_engine.models.skill import Resource
from roadmap_engine.planning.graph import SkillGraph


def _rank(resource: Resource) -> tuple[bool, float, float, str]:
    # Recommended first, then best quality, then shortest, then id
    quality = resource.quality_score if resource.quality_score is not None else -1.0
    return (not resource.is_recommended, -quality, resource.estimated_minutes, resource.id)


def select_primary_resources(
    resources: Iterable[Resource], graph: SkillGraph
) -> dict[str, Resource]:
    """
    Pick one primary learning resource for every skill that has any.

    Args:
        resources: Catalog resources
        graph: Validated skill graph

    Returns:
        Skill id -> chosen Resource

    Raises:
        UnknownSkillError: A resource is attached to a skill not in the graph
    """
    chosen: dict[str, Resource] = {}
    for resource in resources:
        if resource.skill_id not in graph:
            raise UnknownSkillError(resource.skill_id, f"resource '{resource.id}'")
        current = chosen.get(resource.skill_id)
        if current is None or _rank(resource) < _rank(current):
            chosen[resource.skill_id] = resource
    return chosen
