# roadmap_engine/planning/graph.py
"""
Skill graph loading.

Turns a flat list of skills and (skill, prerequisite) edges into an
in-memory DAG with successor and predecessor views. The whole catalog is
checked for cycles at load time; a corrupt catalog never reaches the
sequencer.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from roadmap_engine.errors import CycleDetectedError, DuplicateSkillError, UnknownSkillError
from roadmap_engine.models.skill import PrerequisiteEdge, Skill

logger = logging.getLogger(__name__)

_IN_PATH = 1
_DONE = 2


@dataclass(frozen=True)
class SkillGraph:
    """
    Validated prerequisite DAG over the catalog skills.

    Attributes:
        skills: Skill id -> Skill
        successors: Skill id -> ids of skills that require it (sorted)
        predecessors: Skill id -> ids of its direct prerequisites (sorted)
        edge_count: Number of distinct edges
    """

    skills: dict[str, Skill]
    successors: dict[str, tuple[str, ...]]
    predecessors: dict[str, tuple[str, ...]]
    edge_count: int = 0

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self.skills

    def __len__(self) -> int:
        return len(self.skills)

    def skill(self, skill_id: str) -> Skill:
        return self.skills[skill_id]

    def prerequisites_of(self, skill_id: str) -> tuple[str, ...]:
        return self.predecessors.get(skill_id, ())

    def dependents_of(self, skill_id: str) -> tuple[str, ...]:
        return self.successors.get(skill_id, ())


def find_cycle(
    nodes: Iterable[str], successors: dict[str, tuple[str, ...]]
) -> list[str] | None:
    """
    Depth-first search for a cycle, tracking an in-current-path marker.

    Iterative so that deep catalogs do not hit the recursion limit. Roots
    and neighbours are visited in sorted order, so the reported cycle is
    reproducible.

    Args:
        nodes: Node ids to start from
        successors: Adjacency in traversal direction

    Returns:
        Cycle members in traversal order, or None if the graph is acyclic
    """
    state: dict[str, int] = {}

    for root in sorted(nodes):
        if root in state:
            continue

        path = [root]
        state[root] = _IN_PATH
        stack = [iter(successors.get(root, ()))]

        while stack:
            for neighbour in stack[-1]:
                mark = state.get(neighbour)
                if mark == _IN_PATH:
                    return path[path.index(neighbour):]
                if mark is None:
                    state[neighbour] = _IN_PATH
                    path.append(neighbour)
                    stack.append(iter(successors.get(neighbour, ())))
                    break
            else:
                state[path.pop()] = _DONE
                stack.pop()

    return None


def load_graph(skills: Iterable[Skill], edges: Iterable[PrerequisiteEdge]) -> SkillGraph:
    """
    Build and validate the skill DAG.

    Args:
        skills: Catalog skills (ids must be unique)
        edges: Prerequisite edges; duplicates are merged

    Returns:
        Validated SkillGraph

    Raises:
        DuplicateSkillError: Two skills share an id
        UnknownSkillError: An edge references a skill that does not exist
        CycleDetectedError: The edges contain a cycle
    """
    by_id: dict[str, Skill] = {}
    for skill in skills:
        if skill.id in by_id:
            raise DuplicateSkillError(skill.id)
        by_id[skill.id] = skill

    distinct: set[tuple[str, str]] = set()
    for edge in edges:
        referenced_by = f"edge {edge.skill_id} -> {edge.prerequisite_id}"
        if edge.skill_id not in by_id:
            raise UnknownSkillError(edge.skill_id, referenced_by)
        if edge.prerequisite_id not in by_id:
            raise UnknownSkillError(edge.prerequisite_id, referenced_by)
        distinct.add((edge.skill_id, edge.prerequisite_id))

    successors: dict[str, list[str]] = {skill_id: [] for skill_id in by_id}
    predecessors: dict[str, list[str]] = {skill_id: [] for skill_id in by_id}
    for skill_id, prerequisite_id in distinct:
        successors[prerequisite_id].append(skill_id)
        predecessors[skill_id].append(prerequisite_id)

    frozen_successors = {k: tuple(sorted(v)) for k, v in successors.items()}
    frozen_predecessors = {k: tuple(sorted(v)) for k, v in predecessors.items()}

    cycle = find_cycle(by_id, frozen_successors)
    if cycle:
        logger.error(f"Cycle detected in catalog: {cycle}")
        raise CycleDetectedError(cycle)

    logger.debug(f"Loaded skill graph: {len(by_id)} skills, {len(distinct)} edges")
    return SkillGraph(
        skills=by_id,
        successors=frozen_successors,
        predecessors=frozen_predecessors,
        edge_count=len(distinct),
    )
