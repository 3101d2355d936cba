"""
Configuration loading for dive planning defaults.

Settings come from config.yaml at the repository root, with explicit
overrides (from the command line) taking precedence.
"""

import os

import yaml

from .errors import ConfigError
from .nitrox import AIR, DEFAULT_PO2_LIMIT, GasMix

DEFAULT_LOG_LEVEL = "INFO"


def _as_float(name: str, value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "config.yaml")


def load_effective_config(
    o2_override: float = None,
    po2_override: float = None,
    config_path: str = None,
) -> dict:
    """Load configuration from config.yaml with optional CLI overrides.

    Returns a dict with resolved settings:
        gas:         GasMix instance
        po2_limit:   float, pO2 ceiling used for maximum operating depth
        log_level:   str
        config_path: str (resolved path)
        gas_source:  'cli' | 'config' | 'default'
    """
    if config_path is None:
        config_path = default_config_path()

    # Defaults
    gas = AIR
    gas_source = "default"
    po2_limit = DEFAULT_PO2_LIMIT
    log_level = DEFAULT_LOG_LEVEL

    if os.path.exists(config_path):
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ConfigError(f"{config_path} must hold a mapping of settings")

        if "o2_percent" in config:
            gas = GasMix(_as_float("o2_percent", config["o2_percent"]))
            gas_source = "config"
        po2_limit = _as_float("po2_limit", config.get("po2_limit", po2_limit))

        logging_cfg = config.get("logging") or {}
        log_level = str(logging_cfg.get("level", log_level)).upper()

    if o2_override is not None:
        gas = GasMix(_as_float("o2_percent", o2_override))
        gas_source = "cli"
    if po2_override is not None:
        po2_limit = _as_float("po2_limit", po2_override)

    if po2_limit <= 0:
        raise ConfigError(f"po2_limit must be positive, got {po2_limit}")

    return {
        "gas": gas,
        "po2_limit": po2_limit,
        "log_level": log_level,
        "config_path": config_path,
        "gas_source": gas_source,
    }
