"""
Tests for the config loader and the Settings model.
"""

import pytest
import yaml

from devsetup.core.config.loader import (
    ConfigError,
    default_config_path,
    load_settings,
    save_settings,
)
from devsetup.core.models.settings import Settings


class TestDefaultPath:
    def test_uses_xdg_config_home(self, config_dir):
        assert default_config_path() == config_dir / "config.yml"

    def test_falls_back_to_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".config" / "devsetup" / "config.yml"


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yml")
        assert settings == Settings()
        assert settings.skip_installed is False
        assert settings.auto_yes is False

    def test_missing_default_file_gives_defaults(self, config_dir):
        assert load_settings() == Settings()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(
            "auto_yes: true\n"
            "installers:\n"
            "  alacritty:\n"
            "    font_size: 14\n"
        )
        settings = load_settings(path)
        assert settings.auto_yes is True
        assert settings.installers.alacritty.font_size == 14.0
        assert settings.installers.alacritty.theme == "one_dark"
        assert settings.installers.tmux.install_tpm is True

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("verbose: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path)

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("verbos: true\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    @pytest.mark.parametrize("opacity", [-0.1, 1.5])
    def test_opacity_out_of_range(self, tmp_path, opacity):
        path = tmp_path / "config.yml"
        path.write_text(f"installers:\n  alacritty:\n    opacity: {opacity}\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_directory_is_not_a_config(self, tmp_path):
        with pytest.raises(ConfigError, match="not a file"):
            load_settings(tmp_path)


class TestSaveSettings:
    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "config.yml"
        save_settings(Settings(), path)
        assert path.is_file()

    def test_written_file_loads_back(self, tmp_path):
        path = tmp_path / "config.yml"
        settings = Settings(verbose=True)
        settings.installers.zed.theme = "gruvbox"
        save_settings(settings, path)
        assert load_settings(path) == settings

    def test_keeps_field_order(self, tmp_path):
        path = tmp_path / "config.yml"
        save_settings(Settings(), path)
        data = yaml.safe_load(path.read_text())
        assert list(data) == ["verbose", "auto_yes", "skip_installed", "installers"]
