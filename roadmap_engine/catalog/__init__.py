# roadmap_engine/catalog/__init__.py
"""Skill catalog collaborator: providers, snapshots and the explicit cache."""

from roadmap_engine.catalog.cache import CatalogCache
from roadmap_engine.catalog.provider import (
    DEFAULT_CATALOG_PATH,
    CatalogProvider,
    CatalogSnapshot,
    InMemoryCatalog,
    RoleDefinition,
    YamlCatalog,
)

__all__ = [
    "CatalogProvider",
    "CatalogSnapshot",
    "CatalogCache",
    "InMemoryCatalog",
    "YamlCatalog",
    "RoleDefinition",
    "DEFAULT_CATALOG_PATH",
]
