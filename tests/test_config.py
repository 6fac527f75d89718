"""Tests for settings loading."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from emerge_career.config import Settings, YamlSettingsSource


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url is None
        assert settings.port == 5000
        assert settings.course_provider == "llm"
        assert settings.trends_provider == "news"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "gemini-1.5-pro")
        monkeypatch.setenv("TRENDS_PROVIDER", "llm")
        settings = Settings(_env_file=None)
        assert settings.llm_model == "gemini-1.5-pro"
        assert settings.trends_provider == "llm"

    def test_invalid_provider(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, course_provider="udemy")

    def test_allowed_origin_list(self):
        settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")
        assert settings.allowed_origin_list == ["http://a.test", "http://b.test"]


class TestYamlSettingsSource:
    def test_flattens_sections(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "settings.yaml").write_text(
            "server:\n  port: 8080\n"
            "database:\n  url: sqlite:///x.db\n"
            "providers:\n  course: classcentral\n  timeout_seconds: 3\n"
        )
        with patch("emerge_career.config._find_project_root", return_value=tmp_path):
            values = YamlSettingsSource(Settings)()
        assert values == {
            "port": 8080,
            "database_url": "sqlite:///x.db",
            "course_provider": "classcentral",
            "http_timeout_seconds": 3,
        }

    def test_missing_file(self, tmp_path):
        with patch("emerge_career.config._find_project_root", return_value=tmp_path):
            assert YamlSettingsSource(Settings)() == {}
