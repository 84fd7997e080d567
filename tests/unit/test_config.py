# tests/unit/test_config.py
"""Tests for configuration schema and loading."""

import pytest
import yaml
from pydantic import ValidationError

from roadmap_engine.config import loader
from roadmap_engine.config.loader import get_config_path, load_config
from roadmap_engine.config.schema import (
    BUFFER_RATIO,
    MAX_WEEKLY_HOURS,
    PRACTICE_RATIO,
    EstimationConfig,
    RoadmapEngineConfig,
)
from roadmap_engine.errors import InvalidInputError


class TestSchema:
    def test_defaults(self):
        config = RoadmapEngineConfig()
        assert config.estimation.practice_ratio == PRACTICE_RATIO == 0.5
        assert config.estimation.buffer_ratio == BUFFER_RATIO == 0.10
        assert config.estimation.max_weekly_hours == MAX_WEEKLY_HOURS
        assert config.catalog.path is None
        assert config.catalog.cache_enabled is True
        assert config.output.format == "table"
        assert config.output.verbosity == "normal"

    def test_unknown_keys_ignored(self):
        config = RoadmapEngineConfig(estimation={"practice_ratio": 1.0, "legacy": True}, extra_section={})
        assert config.estimation.practice_ratio == 1.0

    def test_negative_ratio_rejected(self):
        with pytest.raises(ValidationError):
            EstimationConfig(practice_ratio=-0.1)

    def test_invalid_format_rejected(self):
        with pytest.raises(ValidationError):
            RoadmapEngineConfig(output={"format": "pdf"})


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_defaults_when_missing(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        config = load_config(path)
        assert config == RoadmapEngineConfig()
        assert path.exists()
        written = yaml.safe_load(path.read_text())
        assert written["estimation"]["practice_ratio"] == 0.5
        assert written["output"]["format"] == "table"

    def test_reads_existing_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump({"estimation": {"buffer_ratio": 0.2}, "output": {"format": "json"}})
        )
        config = load_config(path)
        assert config.estimation.buffer_ratio == 0.2
        assert config.estimation.practice_ratio == 0.5
        assert config.output.format == "json"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == RoadmapEngineConfig()

    def test_default_path_uses_platform_config_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(loader, "user_config_path", lambda app, ensure_exists: tmp_path)
        assert get_config_path() == tmp_path / "config.yaml"
        assert load_config() == RoadmapEngineConfig()
        assert (tmp_path / "config.yaml").exists()

    def test_non_mapping_file_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- estimation\n- output\n")
        with pytest.raises(InvalidInputError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "config"
        assert str(path) in exc_info.value.message

    def test_malformed_yaml_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("estimation: {practice_ratio: [\n")
        with pytest.raises(InvalidInputError):
            load_config(path)

    def test_out_of_range_value_names_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"estimation": {"practice_ratio": -1}}))
        with pytest.raises(InvalidInputError) as exc_info:
            load_config(path)
        assert "practice_ratio" in exc_info.value.message
        assert str(path) in exc_info.value.message

    def test_existing_file_left_untouched(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("output:\n  format: markdown\n")
        load_config(path)
        assert path.read_text() == "output:\n  format: markdown\n"
