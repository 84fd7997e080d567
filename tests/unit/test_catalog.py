# tests/unit/test_catalog.py
"""Tests for catalog providers, snapshots and the catalog cache."""

import gc
import os

import pytest
import yaml

from roadmap_engine.catalog.cache import CatalogCache
from roadmap_engine.catalog.provider import (
    DEFAULT_CATALOG_PATH,
    CatalogSnapshot,
    InMemoryCatalog,
    RoleDefinition,
    YamlCatalog,
)
from roadmap_engine.errors import CatalogError, CycleDetectedError
from roadmap_engine.models.skill import Phase, PrerequisiteEdge, Skill


def _skill(skill_id, phase="foundation"):
    return {
        "id": skill_id,
        "slug": skill_id,
        "name": skill_id.upper(),
        "phase": phase,
        "estimated_hours": 4,
    }


def _write_catalog(path, skills, prerequisites=(), roles=None, resources=()):
    data = {
        "skills": list(skills),
        "prerequisites": [{"skill": s, "prerequisite": p} for s, p in prerequisites],
        "roles": roles or {},
        "resources": list(resources),
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _memory_catalog(skill_id, role="r"):
    """One-skill in-memory catalog whose role requires that skill."""
    skill = Skill(id=skill_id, slug=skill_id, name=skill_id, phase=Phase.FOUNDATION, estimated_hours=1)
    return InMemoryCatalog(skills=[skill], roles={role: [skill_id]})


class TestYamlCatalog:
    """Tests for YamlCatalog."""

    def test_default_catalog_contents(self):
        catalog = YamlCatalog()
        assert catalog.path == DEFAULT_CATALOG_PATH
        assert len(catalog.get_skills()) == 17
        assert len(catalog.get_prerequisite_edges()) == 20
        assert {r.id for r in catalog.get_roles()} == {
            "ml_engineer",
            "data_scientist",
            "mlops_engineer",
            "ai_engineer",
        }
        assert len(catalog.get_resources()) == 8

    def test_default_catalog_role_names(self):
        roles = {r.id: r for r in YamlCatalog().get_roles()}
        assert roles["ml_engineer"].display_name == "ML Engineer"
        assert len(roles["ml_engineer"].skill_ids) == 17

    def test_reads_custom_file(self, tmp_path):
        path = _write_catalog(
            tmp_path / "catalog.yaml",
            [_skill("a"), _skill("b", "core_ml")],
            prerequisites=[("b", "a")],
            roles={"r": {"name": "R", "skills": ["b"]}},
        )
        catalog = YamlCatalog(path)
        skills = catalog.get_skills()
        assert [s.id for s in skills] == ["a", "b"]
        assert skills[1].phase == Phase.CORE_ML
        assert catalog.get_prerequisite_edges() == [
            PrerequisiteEdge(skill_id="b", prerequisite_id="a")
        ]
        assert catalog.get_required_skills_for_role("r") == {"b"}
        assert catalog.get_required_skills_for_role("missing") is None

    def test_missing_file(self, tmp_path):
        catalog = YamlCatalog(tmp_path / "nope.yaml")
        with pytest.raises(FileNotFoundError):
            catalog.get_skills()

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            YamlCatalog(path).get_skills()

    def test_invalid_skill(self, tmp_path):
        broken = _skill("a")
        broken["phase"] = "graduate_school"
        path = _write_catalog(tmp_path / "bad.yaml", [broken])
        with pytest.raises(CatalogError) as exc_info:
            YamlCatalog(path).get_skills()
        assert "bad.yaml" in exc_info.value.message

    def test_prerequisite_missing_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            yaml.safe_dump({"skills": [_skill("a")], "prerequisites": [{"skill": "a"}]}),
            encoding="utf-8",
        )
        with pytest.raises(CatalogError):
            YamlCatalog(path).get_prerequisite_edges()

    def test_empty_file_is_empty_catalog(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        catalog = YamlCatalog(path)
        assert catalog.get_skills() == []
        assert catalog.get_roles() == []

    def test_cache_key_tracks_modification_time(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.yaml", [_skill("a")])
        catalog = YamlCatalog(path)
        os.utime(path, ns=(1_000_000_000, 1_000_000_000))
        first = catalog.cache_key
        os.utime(path, ns=(2_000_000_000, 2_000_000_000))
        assert catalog.cache_key != first

    def test_edited_file_is_reloaded(self, tmp_path):
        path = _write_catalog(
            tmp_path / "catalog.yaml", [_skill("a")], roles={"r": {"skills": ["a"]}}
        )
        os.utime(path, ns=(1_000_000_000, 1_000_000_000))
        catalog = YamlCatalog(path)
        assert [s.id for s in catalog.get_skills()] == ["a"]

        _write_catalog(path, [_skill("b")], roles={"r": {"skills": ["b"]}})
        os.utime(path, ns=(2_000_000_000, 2_000_000_000))
        assert [s.id for s in catalog.get_skills()] == ["b"]
        assert catalog.get_required_skills_for_role("r") == {"b"}

    def test_unchanged_file_is_parsed_once(self, tmp_path, monkeypatch):
        path = _write_catalog(tmp_path / "catalog.yaml", [_skill("a")])
        catalog = YamlCatalog(path)
        catalog.get_skills()

        calls = []
        original = yaml.safe_load
        monkeypatch.setattr(yaml, "safe_load", lambda f: calls.append(f) or original(f))
        catalog.get_skills()
        catalog.get_roles()
        assert calls == []

    def test_deleted_file_raises(self, tmp_path):
        path = _write_catalog(tmp_path / "catalog.yaml", [_skill("a")])
        catalog = YamlCatalog(path)
        catalog.get_skills()
        path.unlink()
        with pytest.raises(FileNotFoundError):
            catalog.get_skills()


class TestInMemoryCatalog:
    def test_roles_from_dict(self):
        catalog = InMemoryCatalog(
            skills=[Skill(id="a", slug="a", name="A", phase=Phase.FOUNDATION, estimated_hours=1)],
            roles={"r": ["a"]},
        )
        (role,) = catalog.get_roles()
        assert role == RoleDefinition(id="r", skills=("a",))
        assert role.display_name == "r"

    def test_returns_copies(self):
        catalog = InMemoryCatalog(skills=[])
        catalog.get_skills().append("junk")
        assert catalog.get_skills() == []

    def test_required_skills_for_role(self):
        catalog = InMemoryCatalog(
            skills=[],
            roles=[RoleDefinition(id="r", name="R", skills=("a", "b", "a"))],
        )
        assert catalog.get_required_skills_for_role("r") == frozenset({"a", "b"})
        assert catalog.get_required_skills_for_role("other") is None

    def test_equal_contents_share_cache_key(self):
        assert _memory_catalog("a").cache_key == _memory_catalog("a").cache_key

    def test_cache_key_ignores_input_order(self):
        skills = [
            Skill(id=s, slug=s, name=s, phase=Phase.FOUNDATION, estimated_hours=1) for s in "ab"
        ]
        first = InMemoryCatalog(skills=skills, roles={"r": ["a", "b"]})
        second = InMemoryCatalog(skills=skills[::-1], roles={"r": ["b", "a"]})
        assert first.cache_key == second.cache_key

    def test_different_contents_get_different_keys(self):
        assert _memory_catalog("a").cache_key != _memory_catalog("b").cache_key
        assert _memory_catalog("a").cache_key != _memory_catalog("a", role="q").cache_key


class TestCatalogSnapshot:
    def test_from_provider(self):
        snapshot = CatalogSnapshot.from_provider(YamlCatalog())
        assert len(snapshot.skills) == 17
        assert snapshot.role_ids == ["ai_engineer", "data_scientist", "ml_engineer", "mlops_engineer"]
        assert "transformers" in snapshot.required_skills_for_role("ai_engineer")
        assert snapshot.required_skills_for_role("chef") is None


class TestCatalogCache:
    """Tests for CatalogCache."""

    def test_hit_after_miss(self):
        cache = CatalogCache()
        catalog = YamlCatalog()
        first = cache.get(catalog)
        second = cache.get(catalog)
        assert first[0] is second[0]
        assert first[1] is second[1]
        assert (cache.hits, cache.misses) == (1, 1)
        assert len(cache) == 1

    def test_least_recently_used_is_evicted(self):
        cache = CatalogCache(max_entries=1)
        a = _memory_catalog("a")
        b = _memory_catalog("b")
        cache.get(a)
        cache.get(b)
        cache.get(a)
        assert cache.misses == 3
        assert len(cache) == 1

    def test_invalidate(self):
        cache = CatalogCache()
        a = _memory_catalog("a")
        b = _memory_catalog("b")
        cache.get(a)
        cache.get(b)
        cache.invalidate(a)
        assert len(cache) == 1
        cache.invalidate()
        assert len(cache) == 0

    def test_invalid_catalog_is_not_cached(self):
        cache = CatalogCache()
        skills = [
            Skill(id=s, slug=s, name=s, phase=Phase.FOUNDATION, estimated_hours=1) for s in "XY"
        ]
        catalog = InMemoryCatalog(
            skills=skills,
            edges=[
                PrerequisiteEdge(skill_id="X", prerequisite_id="Y"),
                PrerequisiteEdge(skill_id="Y", prerequisite_id="X"),
            ],
        )
        with pytest.raises(CycleDetectedError):
            cache.get(catalog)
        assert len(cache) == 0

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            CatalogCache(max_entries=0)

    def test_short_lived_catalogs_never_collide(self):
        # Each catalog is dropped before the next is built, so object ids get reused
        cache = CatalogCache(max_entries=4)
        for i in range(50):
            catalog = _memory_catalog(f"S{i}")
            snapshot, graph = cache.get(catalog)
            assert [s.id for s in snapshot.skills] == [f"S{i}"]
            assert f"S{i}" in graph
            del catalog, snapshot, graph
            gc.collect()
        assert cache.misses == 50
        assert cache.hits == 0
