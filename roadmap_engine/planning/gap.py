# roadmap_engine/planning/gap.py
"""
Gap analysis.

Subtracts what the user already knows from what the target role requires,
then closes the result over prerequisites so the sequencer never meets a
missing dependency.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from roadmap_engine.errors import InvalidInputError, UnknownSkillError
from roadmap_engine.planning.graph import SkillGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GapSet:
    """
    Skills the user still has to learn for a target role.

    Attributes:
        target_role: Role the gap was computed for
        skill_ids: Every gap member (unordered)
        required_ids: Gap members the role requires directly
        added_prerequisite_ids: Gap members pulled in only as prerequisites
        known_ids: The user's skip list
    """

    target_role: str
    skill_ids: frozenset[str]
    required_ids: frozenset[str]
    added_prerequisite_ids: frozenset[str]
    known_ids: frozenset[str]

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self.skill_ids

    def __len__(self) -> int:
        return len(self.skill_ids)


def resolve_known(graph: SkillGraph, known_skill_ids: Iterable[str]) -> frozenset[str]:
    """
    Check the skip list against the catalog.

    Only the listed skills count as known. Their prerequisites are not
    assumed; a gap member that needs one still pulls it in.

    Raises:
        InvalidInputError: A known skill id is not in the catalog
    """
    known = set(known_skill_ids)
    unknown = sorted(k for k in known if k not in graph)
    if unknown:
        raise InvalidInputError(
            f"Unknown skill id(s) in skip list: {', '.join(unknown)}",
            field="known_skill_ids",
        )
    return frozenset(known)


def analyze_gap(
    graph: SkillGraph,
    target_role: str,
    known_skill_ids: Iterable[str],
    role_requirements: Mapping[str, Iterable[str]],
    include_optional: bool = True,
) -> GapSet:
    """
    Compute the prerequisite-complete gap for a target role.

    Args:
        graph: Validated skill graph
        target_role: Role id the user is aiming for
        known_skill_ids: Explicit skip list from onboarding
        role_requirements: Role id -> required skill ids
        include_optional: If False, optional skills are only kept when a
            non-optional gap member needs them

    Returns:
        GapSet whose members' prerequisites are all gap members or known

    Raises:
        InvalidInputError: Unknown role or unknown skill in the skip list
        UnknownSkillError: The role mapping references a missing skill
    """
    if target_role not in role_requirements:
        raise InvalidInputError(f"Unknown target role '{target_role}'", field="target_role")

    required = set(role_requirements[target_role])
    for skill_id in sorted(required):
        if skill_id not in graph:
            raise UnknownSkillError(skill_id, f"role '{target_role}'")

    if not include_optional:
        required = {s for s in required if not graph.skill(s).is_optional}

    known = resolve_known(graph, known_skill_ids)
    targets = required - known

    # Walk prerequisites from the targets, stopping at known skills
    gap = set(targets)
    stack = list(targets)
    while stack:
        current = stack.pop()
        for prerequisite_id in graph.prerequisites_of(current):
            if prerequisite_id in known or prerequisite_id in gap:
                continue
            gap.add(prerequisite_id)
            stack.append(prerequisite_id)

    added = gap - targets
    logger.debug(
        f"Gap for role '{target_role}': {len(gap)} skills "
        f"({len(targets)} required, {len(added)} prerequisites, {len(known)} known)"
    )
    return GapSet(
        target_role=target_role,
        skill_ids=frozenset(gap),
        required_ids=frozenset(targets),
        added_prerequisite_ids=frozenset(added),
        known_ids=known,
    )
