"""Tests for pattern resolution."""

from __future__ import annotations

import json
import logging

import pytest

from gitcleaner.config import (
    CONFIG_FILE_NAME,
    DEFAULT_PATTERNS,
    ConfigError,
    load_config,
    resolve_patterns,
)


def _write_config(directory, payload) -> None:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    (directory / CONFIG_FILE_NAME).write_text(text, encoding="utf-8")


class TestResolvePatterns:
    def test_defaults_when_no_config(self, project):
        result = resolve_patterns()
        assert list(result.patterns) == [
            "node_modules", "dist", "build", ".DS_Store", "__pycache__", "*.log",
            "coverage", ".nyc_output", "*.tmp", "*.temp", ".cache", "tmp",
        ]
        assert result.source is None
        assert not result.is_custom

    def test_custom_patterns_used_verbatim(self, project):
        _write_config(project, {"patterns": ["target", "*.bak", "target"]})
        result = resolve_patterns()
        assert result.patterns == ("target", "*.bak", "target")
        assert result.source == project / CONFIG_FILE_NAME
        assert result.is_custom

    def test_custom_patterns_not_merged_with_defaults(self, project):
        _write_config(project, {"patterns": ["out"]})
        assert "node_modules" not in resolve_patterns().patterns

    def test_empty_pattern_list_is_respected(self, project):
        _write_config(project, {"patterns": []})
        result = resolve_patterns()
        assert result.patterns == ()
        assert result.is_custom

    def test_explicit_cwd(self, tmp_path):
        _write_config(tmp_path, {"patterns": ["vendor"]})
        assert resolve_patterns(tmp_path).patterns == ("vendor",)

    def test_extra_fields_ignored(self, project):
        _write_config(project, {"patterns": ["out"], "verbose": True})
        assert resolve_patterns().patterns == ("out",)

    @pytest.mark.parametrize(
        "payload",
        [
            "{not json",
            "",
            json.dumps(["node_modules"]),
            json.dumps({"ignore": ["dist"]}),
            json.dumps({"patterns": "dist"}),
            json.dumps({"patterns": None}),
            json.dumps({"patterns": ["dist", 3]}),
        ],
    )
    def test_bad_config_falls_back_to_defaults(self, project, caplog, payload):
        _write_config(project, payload)
        with caplog.at_level(logging.WARNING, logger="gitcleaner.config"):
            result = resolve_patterns()
        assert result.patterns == DEFAULT_PATTERNS
        assert result.source is None
        assert "using default patterns" in caplog.text

    def test_logs_info_on_success(self, project, caplog):
        _write_config(project, {"patterns": ["out"]})
        with caplog.at_level(logging.INFO, logger="gitcleaner.config"):
            resolve_patterns()
        assert "Loaded 1 custom patterns" in caplog.text


class TestLoadConfig:
    def test_returns_patterns(self, tmp_path):
        _write_config(tmp_path, {"patterns": ["a", "b"]})
        assert load_config(tmp_path / CONFIG_FILE_NAME) == ["a", "b"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / CONFIG_FILE_NAME)

    def test_not_an_object(self, tmp_path):
        _write_config(tmp_path, "42")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(tmp_path / CONFIG_FILE_NAME)
