"""Tests for YAML configuration loading."""

import os

import pytest

from divetables.config import default_config_path, load_effective_config
from divetables.errors import ConfigError, InvalidGasMix
from divetables.nitrox import AIR, GasMix


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


class TestLoadEffectiveConfig:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_effective_config(config_path=str(tmp_path / "missing.yaml"))
        assert config["gas"] == AIR
        assert config["po2_limit"] == pytest.approx(1.4)
        assert config["log_level"] == "INFO"
        assert config["gas_source"] == "default"

    def test_empty_file_uses_defaults(self, tmp_path):
        config = load_effective_config(config_path=_write(tmp_path, ""))
        assert config["gas"] == AIR
        assert config["gas_source"] == "default"

    def test_values_from_file(self, tmp_path):
        path = _write(tmp_path, "o2_percent: 32\npo2_limit: 1.6\nlogging:\n  level: debug\n")
        config = load_effective_config(config_path=path)
        assert config["gas"] == GasMix(32.0)
        assert config["po2_limit"] == pytest.approx(1.6)
        assert config["log_level"] == "DEBUG"
        assert config["gas_source"] == "config"
        assert config["config_path"] == path

    def test_cli_overrides_file(self, tmp_path):
        path = _write(tmp_path, "o2_percent: 32\npo2_limit: 1.6\n")
        config = load_effective_config(o2_override=36, po2_override=1.4, config_path=path)
        assert config["gas"].o2_percent == 36.0
        assert config["po2_limit"] == pytest.approx(1.4)
        assert config["gas_source"] == "cli"

    def test_invalid_gas_in_file(self, tmp_path):
        with pytest.raises(InvalidGasMix):
            load_effective_config(config_path=_write(tmp_path, "o2_percent: 15\n"))

    def test_invalid_po2_limit(self, tmp_path):
        """A zero pO2 ceiling is a configuration error."""
        with pytest.raises(ConfigError, match="po2_limit must be positive"):
            load_effective_config(po2_override=0, config_path=str(tmp_path / "missing.yaml"))

    def test_non_numeric_value_in_file(self, tmp_path):
        """A po2_limit that is not a number raises ConfigError, not a bare ValueError."""
        with pytest.raises(ConfigError, match="po2_limit must be a number"):
            load_effective_config(config_path=_write(tmp_path, "po2_limit: high\n"))

    def test_non_mapping_file(self, tmp_path):
        """A config file holding a list instead of settings is rejected."""
        with pytest.raises(ConfigError, match="mapping"):
            load_effective_config(config_path=_write(tmp_path, "- 21\n- 1.4\n"))

    def test_repository_config(self):
        """The shipped config.yaml is air at pO2 1.4."""
        path = default_config_path()
        assert os.path.basename(path) == "config.yaml"
        config = load_effective_config()
        assert config["config_path"] == path
        assert config["gas"] == AIR
        assert config["po2_limit"] == pytest.approx(1.4)
