"""Tests for configuration file support."""

import sys
import warnings
from decimal import Decimal

import pytest

from panel_pnp.config import (
    Config,
    ConfigError,
    TransformConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from panel_pnp.exceptions import ConfigurationError

USER_CONFIG_ATTR = "panel_pnp.config.USER_CONFIG_PATH"


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_transform_config_defaults(self):
        """TransformConfig has correct defaults."""
        config = TransformConfig()
        assert config.precision == 28
        assert config.roll_rotation_base == 360
        assert config.decimal_places is None
        assert config.roll_rotation_base_decimal == Decimal(360)

    def test_config_defaults(self):
        """Config has correct nested defaults."""
        config = Config()
        assert isinstance(config.transform, TransformConfig)


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        """Find config in current directory."""
        config_file = tmp_path / ".panel-pnp.toml"
        config_file.write_text("[transform]\nprecision = 30\n")

        result = _find_project_config(tmp_path)
        assert result == config_file

    def test_find_project_config_alternate_name(self, tmp_path):
        """Find config with alternate name (no leading dot)."""
        config_file = tmp_path / "panel-pnp.toml"
        config_file.write_text("[transform]\n")

        result = _find_project_config(tmp_path)
        assert result == config_file

    def test_find_project_config_prefers_hidden(self, tmp_path):
        """Prefer .panel-pnp.toml over panel-pnp.toml."""
        hidden = tmp_path / ".panel-pnp.toml"
        hidden.write_text("[transform]\n")
        (tmp_path / "panel-pnp.toml").write_text("[transform]\n")

        result = _find_project_config(tmp_path)
        assert result == hidden

    def test_find_project_config_walks_up(self, tmp_path):
        """Walk up directory tree to find config."""
        config_file = tmp_path / ".panel-pnp.toml"
        config_file.write_text("[transform]\n")
        subdir = tmp_path / "boards" / "rev2"
        subdir.mkdir(parents=True)

        result = _find_project_config(subdir)
        assert result == config_file

    def test_find_project_config_stops_at_git(self, tmp_path):
        """Stop searching at .git directory."""
        (tmp_path / ".panel-pnp.toml").write_text("[transform]\n")
        project = tmp_path / "project"
        project.mkdir()
        (project / ".git").mkdir()
        subdir = project / "src"
        subdir.mkdir()

        result = _find_project_config(subdir)
        assert result is None

    def test_find_project_config_finds_in_git_root(self, tmp_path):
        """Find config at the .git root."""
        (tmp_path / ".git").mkdir()
        config_file = tmp_path / ".panel-pnp.toml"
        config_file.write_text("[transform]\n")
        subdir = tmp_path / "src"
        subdir.mkdir()

        assert _find_project_config(subdir) == config_file

    def test_find_project_config_not_found(self, tmp_path):
        """Return None when no config exists."""
        (tmp_path / ".git").mkdir()
        assert _find_project_config(tmp_path) is None


class TestLoadToml:
    """Test TOML file loading."""

    def test_load_valid_toml(self, tmp_path):
        """Load valid TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[transform]\nprecision = 34\nroll_rotation_base = 180\n")

        data = _load_toml_file(config_file)
        assert data == {"transform": {"precision": 34, "roll_rotation_base": 180}}

    def test_load_invalid_toml(self, tmp_path):
        """Raise ConfigError for invalid TOML."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[transform\nprecision = \n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        """Raise ConfigError for missing file."""
        with pytest.raises(ConfigError, match="Cannot read config file"):
            _load_toml_file(tmp_path / "missing.toml")

    def test_config_error_is_configuration_error(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("not toml at all [")

        with pytest.raises(ConfigurationError) as exc_info:
            _load_toml_file(config_file)
        assert exc_info.value.context["file"] == str(config_file)


class TestConfigLoad:
    """Test Config.load() method."""

    def test_load_defaults_only(self, tmp_path, monkeypatch):
        """Load returns defaults when no config files exist."""
        (tmp_path / ".git").mkdir()
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        config = Config.load(tmp_path)
        assert config.transform == TransformConfig()

    def test_load_project_config(self, tmp_path, monkeypatch):
        """Load project config."""
        (tmp_path / ".git").mkdir()
        (tmp_path / ".panel-pnp.toml").write_text(
            """
[transform]
precision = 40
roll_rotation_base = 180
decimal_places = 4
"""
        )
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        config = Config.load(tmp_path)
        assert config.transform.precision == 40
        assert config.transform.roll_rotation_base == 180
        assert config.transform.roll_rotation_base_decimal == Decimal(180)
        assert config.transform.decimal_places == 4

    def test_load_user_config(self, tmp_path, monkeypatch):
        """Load user config."""
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[transform]\ndecimal_places = 6\n")
        monkeypatch.setattr(USER_CONFIG_ATTR, user_config)

        config = Config.load(tmp_path)
        assert config.transform.decimal_places == 6

    def test_project_overrides_user(self, tmp_path, monkeypatch):
        """Project config overrides user config."""
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[transform]\nprecision = 30\ndecimal_places = 6\n")
        (tmp_path / ".panel-pnp.toml").write_text("[transform]\nprecision = 50\n")
        monkeypatch.setattr(USER_CONFIG_ATTR, user_config)

        config = Config.load(tmp_path)
        # Project overrides user
        assert config.transform.precision == 50
        # User value preserved when not in project
        assert config.transform.decimal_places == 6

    def test_get_source_tracking(self, tmp_path, monkeypatch):
        """Track source of each config value."""
        (tmp_path / ".git").mkdir()
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[transform]\ndecimal_places = 6\n")
        (tmp_path / ".panel-pnp.toml").write_text("[transform]\nprecision = 50\n")
        monkeypatch.setattr(USER_CONFIG_ATTR, user_config)

        config = Config.load(tmp_path)

        assert "user-config.toml" in config.get_source("transform.decimal_places")
        assert ".panel-pnp.toml" in config.get_source("transform.precision")
        assert config.get_source("transform.roll_rotation_base") == "default"


class TestConfigValidation:
    """Invalid values are rejected."""

    @pytest.mark.parametrize(
        "body,match",
        [
            ("precision = 0", "precision must be >= 1"),
            ("roll_rotation_base = 90", "roll_rotation_base must be one of"),
            ("decimal_places = -1", "decimal_places must be >= 0"),
            ('precision = "high"', "precision must be an integer"),
            ("roll_rotation_base = 360.0", "roll_rotation_base must be an integer"),
            ("decimal_places = true", "decimal_places must be an integer"),
        ],
    )
    def test_invalid_values(self, tmp_path, monkeypatch, body, match):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".panel-pnp.toml").write_text(f"[transform]\n{body}\n")
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        with pytest.raises(ConfigError, match=match):
            Config.load(tmp_path)


class TestConfigWarnings:
    """Test warnings for unknown config keys."""

    def test_warn_unknown_section(self, tmp_path, monkeypatch):
        """Warn on unknown top-level section."""
        (tmp_path / ".git").mkdir()
        (tmp_path / ".panel-pnp.toml").write_text('[unknown_section]\nkey = "value"\n')
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(tmp_path)

            assert len(w) == 1
            assert "unknown_section" in str(w[0].message)

    def test_warn_unknown_key_in_section(self, tmp_path, monkeypatch):
        """Warn on unknown key within known section."""
        (tmp_path / ".git").mkdir()
        (tmp_path / ".panel-pnp.toml").write_text("[transform]\nrounding = 3\n")
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(tmp_path)

            assert len(w) == 1
            assert "transform.rounding" in str(w[0].message)


class TestGenerateTemplate:
    """Test template generation."""

    def test_generate_template_valid_toml(self):
        """Generated template is valid TOML."""
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        data = tomllib.loads(generate_template())
        assert data == {"transform": {}}

    def test_generate_template_documents_options(self):
        """Template documents every option."""
        template = generate_template()
        assert "precision" in template
        assert "roll_rotation_base" in template
        assert "decimal_places" in template


class TestGetConfigPaths:
    """Test get_config_paths function."""

    def test_returns_none_for_missing_files(self, tmp_path, monkeypatch):
        """Returns None for files that don't exist."""
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(USER_CONFIG_ATTR, tmp_path / "no-exist.toml")

        paths = get_config_paths()
        assert paths == {"user": None, "project": None}

    def test_returns_paths_for_existing_files(self, tmp_path, monkeypatch):
        """Returns paths for existing config files."""
        (tmp_path / ".git").mkdir()
        project_config = tmp_path / ".panel-pnp.toml"
        project_config.write_text("[transform]\n")
        user_config = tmp_path / "user-config.toml"
        user_config.write_text("[transform]\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(USER_CONFIG_ATTR, user_config)

        paths = get_config_paths()
        assert paths["user"] == user_config
        assert paths["project"] == project_config.resolve()
