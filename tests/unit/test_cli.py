# tests/unit/test_cli.py
"""
CLI unit tests.

Tests each command via typer's CliRunner against the bundled catalog, with
config loading and logging setup patched out to avoid filesystem and
handler side effects.
"""

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from roadmap_engine.cli import app
from roadmap_engine.config.schema import RoadmapEngineConfig
from roadmap_engine.errors import InvalidInputError

runner = CliRunner()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def cli_env(tmp_path):
    with patch("roadmap_engine.cli.load_config", return_value=RoadmapEngineConfig()), patch(
        "roadmap_engine.cli.configure_logging"
    ) as mock_logging, patch(
        "roadmap_engine.cli.get_config_path", return_value=tmp_path / "config.yaml"
    ):
        yield mock_logging


@pytest.fixture
def cyclic_catalog(tmp_path):
    path = tmp_path / "cyclic.yaml"
    skill = {"phase": "foundation", "estimated_hours": 1}
    path.write_text(
        yaml.safe_dump(
            {
                "skills": [
                    {"id": "X", "slug": "x", "name": "X", **skill},
                    {"id": "Y", "slug": "y", "name": "Y", **skill},
                ],
                "prerequisites": [
                    {"skill": "X", "prerequisite": "Y"},
                    {"skill": "Y", "prerequisite": "X"},
                ],
                "roles": {"r": {"skills": ["X"]}},
            }
        )
    )
    return path


def _generate_json(*extra):
    result = runner.invoke(
        app, ["generate", "ml_engineer", "-f", "json", "--today", "2025-01-15", *extra]
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHelp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "Deterministic learning roadmap generation" in result.output

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("generate", "regenerate", "validate", "roles", "config"):
            assert command in result.output


class TestGenerate:
    def test_json_output(self):
        payload = _generate_json()
        assert payload["target_role"] == "ml_engineer"
        assert len(payload["modules"]) == 17
        assert payload["modules"][0]["skill_id"] == "python-for-ml"
        assert payload["generated_at"].startswith("2025-01-15")

    def test_known_skills_and_weekly_hours(self):
        payload = _generate_json("-k", "python-for-ml", "-k", "linear-algebra", "-w", "20")
        ids = [m["skill_id"] for m in payload["modules"]]
        assert "python-for-ml" not in ids
        assert "linear-algebra" not in ids
        assert payload["weekly_hours"] == 20

    def test_exclude_optional(self):
        payload = _generate_json("--exclude-optional")
        ids = [m["skill_id"] for m in payload["modules"]]
        assert "mlops-basics" not in ids
        # Still needed by neural-network-fundamentals
        assert "calculus-for-ml" in ids

    def test_same_day_is_reproducible(self):
        assert _generate_json() == _generate_json()

    def test_markdown_output(self):
        result = runner.invoke(app, ["generate", "data_scientist", "-f", "markdown"])
        assert result.exit_code == 0
        assert "# Roadmap: Data Scientist" in result.output
        assert "## Phase 1: Foundation" in result.output

    def test_table_output(self):
        result = runner.invoke(app, ["generate", "ai_engineer"])
        assert result.exit_code == 0
        assert "Roadmap: AI Engineer" in result.output
        assert "Phase 1: Foundation" in result.output

    def test_unknown_role_is_input_error(self):
        result = runner.invoke(app, ["generate", "astronaut"])
        assert result.exit_code == 2
        assert "Unknown target role" in result.output

    def test_zero_weekly_hours_is_input_error(self):
        result = runner.invoke(app, ["generate", "ml_engineer", "-w", "0"])
        assert result.exit_code == 2
        assert "weekly_hours" in result.output

    def test_unknown_known_skill(self):
        result = runner.invoke(app, ["generate", "ml_engineer", "-k", "knitting"])
        assert result.exit_code == 2
        assert "knitting" in result.output

    def test_bad_today(self):
        result = runner.invoke(app, ["generate", "ml_engineer", "--today", "tomorrow"])
        assert result.exit_code == 2

    def test_bad_format(self):
        result = runner.invoke(app, ["generate", "ml_engineer", "-f", "pdf"])
        assert result.exit_code == 2
        assert "invalid format" in result.output

    def test_cyclic_catalog_is_catalog_error(self, cyclic_catalog):
        result = runner.invoke(app, ["generate", "r", "--catalog", str(cyclic_catalog)])
        assert result.exit_code == 1
        assert "CYCLE_DETECTED" in result.output

    def test_missing_catalog_file(self, tmp_path):
        result = runner.invoke(app, ["generate", "r", "--catalog", str(tmp_path / "none.yaml")])
        assert result.exit_code == 1
        assert "Catalog not found" in result.output

    def test_verbose_flag_enables_debug_logging(self, cli_env):
        runner.invoke(app, ["generate", "ai_engineer", "-f", "json", "-v"])
        cli_env.assert_called_once_with("verbose")

    def test_format_defaults_to_config(self):
        config = RoadmapEngineConfig(output={"format": "json"})
        with patch("roadmap_engine.cli.load_config", return_value=config):
            result = runner.invoke(app, ["generate", "ai_engineer"])
        assert result.exit_code == 0
        assert json.loads(result.output)["target_role"] == "ai_engineer"


class TestRegenerate:
    @pytest.fixture
    def previous_file(self, tmp_path):
        result = runner.invoke(
            app, ["generate", "data_scientist", "-f", "json", "--today", "2025-01-01"]
        )
        path = tmp_path / "previous.json"
        path.write_text(result.output)
        return path

    def test_reports_preserved_modules(self, previous_file):
        result = runner.invoke(
            app,
            [
                "regenerate",
                str(previous_file),
                "ml_engineer",
                "-s",
                "supervised-learning=completed",
                "-s",
                "linear-algebra=in_progress",
                "-f",
                "markdown",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Preserved: 2" in result.output
        assert "supervised-learning [completed]" in result.output
        assert "Removed:   -" in result.output
        assert "# Roadmap: ML Engineer" in result.output

    def test_json_output(self, previous_file):
        result = runner.invoke(
            app,
            [
                "regenerate",
                str(previous_file),
                "data_scientist",
                "-k",
                "python-for-ml",
                "-s",
                "python-for-ml=completed",
                "-f",
                "json",
            ],
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["removed_skill_ids"] == ["python-for-ml"]
        assert payload["preserved_count"] == 0
        assert payload["roadmap"]["target_role"] == "data_scientist"

    def test_bad_status(self, previous_file):
        result = runner.invoke(
            app, ["regenerate", str(previous_file), "ml_engineer", "-s", "cnn=finished"]
        )
        assert result.exit_code == 2
        assert "finished" in result.output

    def test_status_without_separator(self, previous_file):
        result = runner.invoke(app, ["regenerate", str(previous_file), "ml_engineer", "-s", "cnn"])
        assert result.exit_code == 2

    def test_unreadable_previous_roadmap(self, tmp_path):
        path = tmp_path / "garbage.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["regenerate", str(path), "ml_engineer"])
        assert result.exit_code == 2
        assert "could not read previous roadmap" in result.output


class TestValidate:
    def test_default_catalog_is_valid(self):
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 0
        assert "Catalog OK" in result.output
        assert "17 skills, 20 edges, 4 roles" in result.output

    def test_cyclic_catalog(self, cyclic_catalog):
        result = runner.invoke(app, ["validate", "--catalog", str(cyclic_catalog)])
        assert result.exit_code == 1
        assert "cycle" in result.output

    def test_phase_violation_in_any_role(self, tmp_path):
        path = tmp_path / "phases.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "skills": [
                        {"id": "S", "slug": "s", "name": "S", "phase": "foundation", "estimated_hours": 1},
                        {"id": "P", "slug": "p", "name": "P", "phase": "core_ml", "estimated_hours": 1},
                    ],
                    "prerequisites": [{"skill": "S", "prerequisite": "P"}],
                    "roles": {"fine": {"skills": ["P"]}, "broken": {"skills": ["S"]}},
                }
            )
        )
        result = runner.invoke(app, ["validate", "--catalog", str(path)])
        assert result.exit_code == 1
        assert "PHASE_ORDERING_VIOLATION" in result.output


class TestRoles:
    def test_lists_roles(self):
        result = runner.invoke(app, ["roles"])
        assert result.exit_code == 0
        assert "ml_engineer" in result.output
        assert "MLOps Engineer" in result.output
        lines = [line for line in result.output.splitlines() if line.startswith("mlops_engineer")]
        assert lines and " 5 " in lines[0]


class TestConfig:
    def test_shows_path_and_settings(self, tmp_path):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert f"Config file: {tmp_path / 'config.yaml'}" in result.output
        assert "practice_ratio: 0.5" in result.output

    def test_invalid_config_file_exits_with_input_error(self):
        error = InvalidInputError("Config /tmp/config.yaml must be a mapping", field="config")
        with patch("roadmap_engine.cli.load_config", side_effect=error):
            result = runner.invoke(app, ["roles"])
        assert result.exit_code == 2
        assert "must be a mapping" in result.output
