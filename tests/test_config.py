"""Tests for YAML settings loading."""

import pytest
import yaml

from sigma import ConfigError, Settings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings == Settings(group_digits=True, show_row_index=False)

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text(yaml.dump({"group_digits": False, "show_row_index": True}))
        settings = load_settings(path)
        assert settings.group_digits is False
        assert settings.show_row_index is True

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("show_row_index: true\n")
        settings = load_settings(str(path))
        assert settings.group_digits is True
        assert settings.show_row_index is True

    def test_empty_file(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("colour: blue\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("- group_digits\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            load_settings(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("group_digits: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_settings(path)

    def test_bad_value(self, tmp_path):
        path = tmp_path / "sigma.yaml"
        path.write_text("group_digits: sometimes\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            load_settings(tmp_path / "nope.yaml")
