"""
Tests for Settings Resolution.

This test suite covers:
1. Defaults when neither file nor environment provide values
2. TOML file parsing and validation
3. Environment overrides
4. Template generation with tomlkit
"""

import tomllib

import pytest

from pluginctl.config import Settings, load_settings
from pluginctl.config.schema import SCHEMA, ConfigField
from pluginctl.config.toml_handler import generate_toml_from_schema, write_config_template
from pluginctl.errors import ConfigurationError, FileWriteError


class TestLoadSettings:
    """Test resolution order."""

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        settings = load_settings(environ={})

        assert settings == Settings()
        assert settings.git_remote == "origin"
        assert settings.timeout == 30.0

    def test_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        settings = load_settings(
            environ={
                "MM_SERVICESETTINGS_SITEURL": "http://localhost:8065",
                "MM_ADMIN_TOKEN": "tok",
                "PLUGINCTL_TIMEOUT": "12.5",
            }
        )

        assert settings.site_url == "http://localhost:8065"
        assert settings.admin_token == "tok"
        assert settings.timeout == 12.5

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "pluginctl.toml").write_text(
            '[server]\nsite_url = "http://file.example.com"\ntimeout = 10\n'
            '[release]\ngit_remote = "upstream"\n'
        )
        monkeypatch.chdir(tmp_path)

        settings = load_settings(environ={})

        assert settings.site_url == "http://file.example.com"
        assert settings.timeout == 10.0
        assert settings.git_remote == "upstream"

    def test_environment_overrides_file(self, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text('[server]\nsite_url = "http://file.example.com"\n')

        settings = load_settings(config, environ={"MM_SERVICESETTINGS_SITEURL": "http://env.example.com"})

        assert settings.site_url == "http://env.example.com"

    def test_empty_environment_value_ignored(self, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text('[server]\nsite_url = "http://file.example.com"\n')

        settings = load_settings(config, environ={"MM_SERVICESETTINGS_SITEURL": ""})

        assert settings.site_url == "http://file.example.com"

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_settings(tmp_path / "nope.toml", environ={})

    def test_invalid_toml(self, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("[server\n")

        with pytest.raises(ConfigurationError, match="Failed to parse config file"):
            load_settings(config, environ={})

    def test_unknown_setting(self, tmp_path):
        config = tmp_path / "c.toml"
        config.write_text('[server]\nsite = "x"\n')

        with pytest.raises(ConfigurationError, match="Unknown setting: server.site"):
            load_settings(config, environ={})

    def test_wrong_type(self, tmp_path):
        config = tmp_path / "c.toml"
        config.write_text("[server]\nsite_url = 5\n")

        with pytest.raises(ConfigurationError, match="Invalid value for server.site_url"):
            load_settings(config, environ={})

    def test_bad_env_number(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError, match="Invalid value for PLUGINCTL_TIMEOUT"):
            load_settings(environ={"PLUGINCTL_TIMEOUT": "soon"})


class TestConfigField:
    """Test field coercion."""

    def test_default_type_mismatch(self):
        with pytest.raises(ConfigurationError, match="does not match type"):
            ConfigField(float, "fast")

    def test_bool_is_not_a_number(self):
        with pytest.raises(ConfigurationError):
            ConfigField(float, 1.0).coerce(True)


class TestTemplate:
    """Test template generation."""

    def test_template_parses_and_omits_secrets(self):
        text = generate_toml_from_schema(SCHEMA)
        data = tomllib.loads(text)

        assert data["server"]["timeout"] == 30.0
        assert data["release"]["git_remote"] == "origin"
        assert "admin_token" not in data["server"]
        assert "# Environment: MM_ADMIN_TOKEN" in text
        assert '# site_url = ""' in text

    def test_write_template_refuses_overwrite(self, tmp_path):
        target = tmp_path / "pluginctl.toml"
        write_config_template(target, SCHEMA)

        with pytest.raises(FileWriteError, match="already exists"):
            write_config_template(target, SCHEMA)

        write_config_template(target, SCHEMA, overwrite=True)
        assert load_settings(target, environ={}) == Settings()
