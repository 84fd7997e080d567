# roadmap_engine/validation/inputs.py
"""
Generation input validation.

Rejects caller contract violations up front with InvalidInputError, so a
bad request never reaches the planning stages.
"""

import logging

from roadmap_engine.catalog.provider import CatalogSnapshot
from roadmap_engine.config.schema import EstimationConfig
from roadmap_engine.errors import InvalidInputError
from roadmap_engine.models.roadmap import GenerationInput
from roadmap_engine.planning.estimator import validate_weekly_hours

logger = logging.getLogger(__name__)


def validate_target_role(target_role: str, snapshot: CatalogSnapshot) -> str:
    """
    Check the target role exists in the catalog.

    Args:
        target_role: Role id from onboarding
        snapshot: Materialized catalog

    Returns:
        Stripped role id

    Raises:
        InvalidInputError: Empty or unknown role
    """
    cleaned = target_role.strip()
    if not cleaned:
        raise InvalidInputError("Target role cannot be empty", field="target_role")

    if cleaned not in snapshot.roles:
        available = ", ".join(snapshot.role_ids) or "none"
        raise InvalidInputError(
            f"Unknown target role '{cleaned}'. Available roles: {available}",
            field="target_role",
        )
    return cleaned


def validate_known_skills(known_skill_ids: frozenset[str], snapshot: CatalogSnapshot) -> None:
    """
    Check every skip-list id names a catalog skill.

    Raises:
        InvalidInputError: One or more ids are not in the catalog
    """
    catalog_ids = {skill.id for skill in snapshot.skills}
    unknown = sorted(set(known_skill_ids) - catalog_ids)
    if unknown:
        raise InvalidInputError(
            f"Unknown skill id(s) in skip list: {', '.join(unknown)}",
            field="known_skill_ids",
        )


def validate_generation_input(
    request: GenerationInput,
    snapshot: CatalogSnapshot,
    config: EstimationConfig | None = None,
) -> GenerationInput:
    """
    Validate a generation request against the catalog.

    Args:
        request: Per-request input
        snapshot: Materialized catalog
        config: Estimation limits (defaults when None)

    Returns:
        The request, with the role id stripped

    Raises:
        InvalidInputError: Non-positive weekly hours, unknown role or
            unknown skill id in the skip list
    """
    config = config or EstimationConfig()
    validate_weekly_hours(request.weekly_hours, config.max_weekly_hours)
    role = validate_target_role(request.target_role, snapshot)
    validate_known_skills(request.known_skill_ids, snapshot)

    if role != request.target_role:
        request = request.model_copy(update={"target_role": role})
    return request
