# roadmap_engine/validation/__init__.py
"""Input validation utilities."""

from .inputs import validate_generation_input, validate_known_skills, validate_target_role

__all__ = [
    "validate_generation_input",
    "validate_target_role",
    "validate_known_skills",
]
