# roadmap_engine/planning/estimator.py
"""
Time estimation and completion projection.

Module time is resource time plus practice time. The raw total gets a pacing
buffer, and the completion date is the generation date plus whole weeks.
Arithmetic keeps full precision; only the displayed total is rounded.
"""

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from roadmap_engine.config.schema import EstimationConfig
from roadmap_engine.errors import InvalidInputError
from roadmap_engine.models.roadmap import OrderedModule, TimeProjection

logger = logging.getLogger(__name__)

# Float noise tolerance before rounding (10 * 1.1 == 11.000000000000002)
_PRECISION_DIGITS = 9


def validate_weekly_hours(weekly_hours: float, max_weekly_hours: float) -> float:
    """
    Check the weekly commitment is a positive, finite number of hours.

    Raises:
        InvalidInputError: Zero, negative, non-finite, non-numeric or too large
    """
    if isinstance(weekly_hours, bool) or not isinstance(weekly_hours, (int, float)):
        raise InvalidInputError(
            f"weekly_hours must be a number, got {type(weekly_hours).__name__}",
            field="weekly_hours",
        )
    if not math.isfinite(weekly_hours) or weekly_hours <= 0:
        raise InvalidInputError(
            f"weekly_hours must be greater than 0, got {weekly_hours}",
            field="weekly_hours",
        )
    if weekly_hours > max_weekly_hours:
        raise InvalidInputError(
            f"weekly_hours must be at most {max_weekly_hours:g}, got {weekly_hours}",
            field="weekly_hours",
        )
    return float(weekly_hours)


def module_time(resource_hours: float, practice_ratio: float) -> tuple[float, float]:
    """Return (practice_hours, total_hours) for one module."""
    practice = resource_hours * practice_ratio
    return practice, resource_hours + practice


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves away from zero."""
    return math.floor(round(value, _PRECISION_DIGITS) + 0.5)


def estimate(
    ordered: Sequence[OrderedModule],
    weekly_hours: float,
    generated_at: datetime,
    config: EstimationConfig | None = None,
) -> TimeProjection:
    """
    Project total hours and completion date for an ordered module list.

    Args:
        ordered: Sequenced modules (resource_hours already resolved)
        weekly_hours: User's weekly commitment, must be > 0
        generated_at: Generation timestamp from the caller's clock
        config: Estimation ratios (defaults when None)

    Returns:
        TimeProjection

    Raises:
        InvalidInputError: weekly_hours is not a positive number
    """
    config = config or EstimationConfig()
    weekly = validate_weekly_hours(weekly_hours, config.max_weekly_hours)

    module_hours: dict[str, float] = {}
    for module in ordered:
        _, hours = module_time(module.resource_hours, config.practice_ratio)
        module_hours[module.skill_id] = hours

    raw = sum(module_hours.values())
    buffered = raw * (1 + config.buffer_ratio)
    weeks = buffered / weekly
    weeks_rounded = math.ceil(round(weeks, _PRECISION_DIGITS))
    projected = generated_at + timedelta(days=weeks_rounded * 7)

    logger.debug(
        f"Estimated {len(module_hours)} modules: raw={raw:.2f}h buffered={buffered:.2f}h "
        f"weeks={weeks:.2f} at {weekly:g}h/week"
    )
    return TimeProjection(
        module_hours=module_hours,
        raw_hours=raw,
        buffered_hours=buffered,
        total_hours=round_half_up(buffered),
        weekly_hours=weekly,
        weeks=weeks,
        weeks_rounded=weeks_rounded,
        generated_at=generated_at,
        projected_completion=projected,
    )
