# roadmap_engine/catalog/provider.py
"""
Skill catalog provider interface and implementations.

The catalog is read-only reference data owned by the content-curation
collaborator. The engine only ever sees a fully materialized CatalogSnapshot.
"""

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from roadmap_engine.errors import CatalogError
from roadmap_engine.models.skill import PrerequisiteEdge, Resource, Skill

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "default_catalog.yaml"


class RoleDefinition(BaseModel):
    """A target role and the skills it requires."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    description: str = ""
    skill_ids: tuple[str, ...] = Field(default=(), alias="skills")

    @property
    def display_name(self) -> str:
        return self.name or self.id


def catalog_payload(
    skills: Iterable[Skill],
    edges: Iterable[PrerequisiteEdge],
    roles: Iterable[RoleDefinition],
    resources: Iterable[Resource],
) -> dict[str, Any]:
    """
    Canonical JSON-ready form of a catalog's contents.

    Independent of input order and of duplicate edges, so two catalogs with
    the same data produce the same payload.
    """
    return {
        "skills": sorted((s.model_dump(mode="json") for s in skills), key=lambda s: s["id"]),
        "edges": sorted({(e.skill_id, e.prerequisite_id) for e in edges}),
        "roles": {
            role.id: {
                "name": role.name,
                "description": role.description,
                "skills": sorted(role.skill_ids),
            }
            for role in roles
        },
        "resources": sorted((r.model_dump(mode="json") for r in resources), key=lambda r: r["id"]),
    }


def content_digest(payload: dict[str, Any]) -> str:
    """sha256 hex digest of a JSON payload in canonical encoding."""
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class CatalogProvider(ABC):
    """
    Abstract base class for skill catalog sources.

    Implementations return plain data; validation happens when the
    skill graph is loaded.
    """

    @property
    @abstractmethod
    def cache_key(self) -> str:
        """Identity of the catalog contents, used by CatalogCache."""

    @abstractmethod
    def get_skills(self) -> list[Skill]:
        """Return every skill in the catalog."""

    @abstractmethod
    def get_prerequisite_edges(self) -> list[PrerequisiteEdge]:
        """Return every (skill, prerequisite) edge."""

    @abstractmethod
    def get_roles(self) -> list[RoleDefinition]:
        """Return every target role."""

    @abstractmethod
    def get_resources(self) -> list[Resource]:
        """Return every learning resource."""

    def get_required_skills_for_role(self, role: str) -> frozenset[str] | None:
        """
        Return the skill ids a target role requires.

        Returns:
            Set of skill ids, or None if the role is unknown
        """
        for definition in self.get_roles():
            if definition.id == role:
                return frozenset(definition.skill_ids)
        return None


class InMemoryCatalog(CatalogProvider):
    """
    Catalog built from Python objects (tests and embedding callers).

    Contents are fixed at construction. The cache key is a hash of them,
    so equal catalogs share a CatalogCache entry.
    """

    def __init__(
        self,
        skills: list[Skill],
        edges: list[PrerequisiteEdge] | None = None,
        roles: dict[str, list[str]] | list[RoleDefinition] | None = None,
        resources: list[Resource] | None = None,
    ) -> None:
        self._skills = list(skills)
        self._edges = list(edges or [])
        if isinstance(roles, dict):
            self._roles = [
                RoleDefinition(id=role_id, skills=tuple(skill_ids))
                for role_id, skill_ids in roles.items()
            ]
        else:
            self._roles = list(roles or [])
        self._resources = list(resources or [])
        self._cache_key = "memory:" + content_digest(
            catalog_payload(self._skills, self._edges, self._roles, self._resources)
        )

    @property
    def cache_key(self) -> str:
        return self._cache_key

    def get_skills(self) -> list[Skill]:
        return list(self._skills)

    def get_prerequisite_edges(self) -> list[PrerequisiteEdge]:
        return list(self._edges)

    def get_roles(self) -> list[RoleDefinition]:
        return list(self._roles)

    def get_resources(self) -> list[Resource]:
        return list(self._resources)


class YamlCatalog(CatalogProvider):
    """
    Catalog read from a YAML file.

    Expected top-level keys: skills, prerequisites, roles, resources.
    The file is parsed lazily and re-parsed whenever its modification
    time or size changes.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else DEFAULT_CATALOG_PATH
        self._loaded: InMemoryCatalog | None = None
        self._loaded_stamp: tuple[int, int] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _stamp(self) -> tuple[int, int] | None:
        try:
            stat = self._path.stat()
        except FileNotFoundError:
            return None
        return stat.st_mtime_ns, stat.st_size

    @property
    def cache_key(self) -> str:
        mtime, size = self._stamp() or (0, 0)
        return f"yaml:{self._path.resolve()}:{mtime}:{size}"

    def _load(self) -> InMemoryCatalog:
        stamp = self._stamp()
        if stamp is None:
            raise FileNotFoundError(f"Catalog not found: {self._path}")
        if self._loaded is not None and stamp == self._loaded_stamp:
            return self._loaded
        if self._loaded is not None:
            logger.info(f"Catalog {self._path} changed on disk, reloading")

        with self._path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise CatalogError(
                f"Catalog {self._path} must be a mapping, got {type(data).__name__}",
                {"path": str(self._path)},
            )

        try:
            skills = [Skill(**item) for item in data.get("skills") or []]
            edges = [
                PrerequisiteEdge(skill_id=item["skill"], prerequisite_id=item["prerequisite"])
                for item in data.get("prerequisites") or []
            ]
            roles = [
                RoleDefinition(id=role_id, **(body or {}))
                for role_id, body in (data.get("roles") or {}).items()
            ]
            resources = [Resource(**item) for item in data.get("resources") or []]
        except (ValidationError, KeyError, TypeError) as e:
            raise CatalogError(
                f"Malformed catalog {self._path}: {e}", {"path": str(self._path)}
            ) from e

        logger.info(
            f"Loaded catalog {self._path}: {len(skills)} skills, {len(edges)} edges, "
            f"{len(roles)} roles, {len(resources)} resources"
        )
        self._loaded = InMemoryCatalog(skills, edges, roles, resources)
        self._loaded_stamp = stamp
        return self._loaded

    def get_skills(self) -> list[Skill]:
        return self._load().get_skills()

    def get_prerequisite_edges(self) -> list[PrerequisiteEdge]:
        return self._load().get_prerequisite_edges()

    def get_roles(self) -> list[RoleDefinition]:
        return self._load().get_roles()

    def get_resources(self) -> list[Resource]:
        return self._load().get_resources()


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Immutable, fully materialized view of one catalog provider.

    Attributes:
        skills: Every catalog skill
        edges: Every prerequisite edge (may contain duplicates)
        roles: Role id -> RoleDefinition
        resources: Every learning resource
    """

    skills: tuple[Skill, ...]
    edges: tuple[PrerequisiteEdge, ...]
    roles: dict[str, RoleDefinition] = field(default_factory=dict)
    resources: tuple[Resource, ...] = ()

    @classmethod
    def from_provider(cls, provider: CatalogProvider) -> "CatalogSnapshot":
        """Materialize every collection the engine needs from a provider."""
        return cls(
            skills=tuple(provider.get_skills()),
            edges=tuple(provider.get_prerequisite_edges()),
            roles={role.id: role for role in provider.get_roles()},
            resources=tuple(provider.get_resources()),
        )

    def required_skills_for_role(self, role: str) -> frozenset[str] | None:
        definition = self.roles.get(role)
        if definition is None:
            return None
        return frozenset(definition.skill_ids)

    @property
    def role_ids(self) -> list[str]:
        return sorted(self.roles)
