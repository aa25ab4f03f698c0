"""
Tests for trrt/settings.py
"""

from pathlib import Path

import pytest

from trrt.exceptions import ConfigurationError
from trrt.settings import ResolverSettings, load_config_file, load_settings


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    # keep a developer's .env and TRRT_* variables out of the tests
    monkeypatch.chdir(tmp_path)
    for name in ("SCOPEDIR", "OUTPUT", "GLOB", "VSNTAG", "INTERPRETER", "CONVERTER", "LOG_LEVEL"):
        monkeypatch.delenv(f"TRRT_{name}", raising=False)


class TestResolverSettings:
    def test_defaults(self):
        settings = ResolverSettings()
        assert settings.scopedir is None
        assert settings.output is None
        assert settings.glob == "*"
        assert settings.vsntag == "latest"
        assert settings.interpreter == "default"
        assert settings.converter == "default"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("TRRT_SCOPEDIR", "scope")
        monkeypatch.setenv("TRRT_VSNTAG", "2.0")
        settings = ResolverSettings()
        assert settings.scopedir == Path("scope")
        assert settings.vsntag == "2.0"

    def test_dotenv(self, tmp_path):
        (tmp_path / ".env").write_text("TRRT_CONVERTER=http\n", encoding="utf-8")
        assert ResolverSettings().converter == "http"

    def test_require_paths(self):
        with pytest.raises(ConfigurationError) as exc:
            ResolverSettings(output="out").require_paths()
        assert "--scopedir <path>" in str(exc.value)
        assert "--output" not in str(exc.value)

    def test_require_paths_ok(self):
        ResolverSettings(output="out", scopedir="scope").require_paths()


class TestLoadConfigFile:
    def test_yaml(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("scopedir: scope\nvsntag: 1.10\n", encoding="utf-8")
        assert load_config_file(path) == {"scopedir": "scope", "vsntag": "1.10"}

    def test_json(self, tmp_path):
        path = tmp_path / "trrt.json"
        path.write_text('{"converter": "essif"}', encoding="utf-8")
        assert load_config_file(path) == {"converter": "essif"}

    def test_empty(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config_file(tmp_path / "nope.yaml")

    def test_invalid(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("scopedir: [", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("- scopedir\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config_file(path)


class TestLoadSettings:
    def test_overrides_beat_config_file(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("scopedir: scope\nconverter: essif\n", encoding="utf-8")
        settings = load_settings(path, converter="http", scopedir=None)
        assert settings.converter == "http"
        assert settings.scopedir == Path("scope")

    def test_config_file_beats_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TRRT_INTERPRETER", "alt")
        path = tmp_path / "trrt.yaml"
        path.write_text("interpreter: default\n", encoding="utf-8")
        assert load_settings(path).interpreter == "default"

    def test_no_config_file(self):
        assert load_settings(None, glob="docs/*.md").glob == "docs/*.md"

    def test_trailing_zero_vsntag(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("vsntag: 1.10\n", encoding="utf-8")
        assert load_settings(path).vsntag == "1.10"

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "trrt.yaml"
        path.write_text("vsntag: [1, 2]\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_settings(path)
