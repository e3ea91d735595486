# src/oneline_core/config.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from .cache.service import DEFAULT_MAX_ENTRIES
from .propagation.classification import MixedSignalPolicy

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during engine configuration parsing."""
    pass


@dataclass(frozen=True)
class EngineConfig:
    """
    Settings of an energization engine and the session that owns it.

    `strict_import` makes an import fail when the loaded diagram has conductors that
    reference missing devices or terminals; by default such conductors are accepted
    and excluded from energization.
    """
    mixed_signal_policy: MixedSignalPolicy = MixedSignalPolicy.PREFER_DC
    cache_enabled: bool = True
    cache_max_entries: int = DEFAULT_MAX_ENTRIES
    strict_import: bool = False
    log_level: str = "INFO"


_CONFIG_SCHEMA = {
    "mixed_signal_policy": {"type": "string", "allowed": [p.value for p in MixedSignalPolicy]},
    "cache_enabled": {"type": "boolean"},
    "cache_max_entries": {"type": "integer", "min": 1},
    "strict_import": {"type": "boolean"},
    "log_level": {"type": "string", "allowed": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
}


def parse_engine_config(raw_config: Optional[Dict[str, Any]]) -> EngineConfig:
    """
    Parses a raw configuration mapping into an EngineConfig. Missing keys keep their
    defaults; unknown keys and wrongly typed values are rejected.
    """
    if not raw_config:
        return EngineConfig()
    if not isinstance(raw_config, dict):
        raise ConfigParsingError(f"Engine configuration must be a mapping, got {type(raw_config).__name__}.")

    raw_config = dict(raw_config)
    if isinstance(raw_config.get("log_level"), str):
        raw_config["log_level"] = raw_config["log_level"].upper()

    validator = cerberus.Validator(_CONFIG_SCHEMA)
    validator.allow_unknown = False
    if not validator.validate(raw_config):
        raise ConfigParsingError(f"Failed to parse engine configuration: {validator.errors}")

    document = validator.document
    settings = dict(document)
    if "mixed_signal_policy" in settings:
        settings["mixed_signal_policy"] = MixedSignalPolicy(settings["mixed_signal_policy"])
    config = EngineConfig(**settings)
    logger.debug(f"Parsed engine configuration: {config}")
    return config


def load_engine_config(path: Union[str, Path]) -> EngineConfig:
    """Loads an EngineConfig from a YAML file."""
    source = Path(path).resolve()
    if not source.is_file():
        raise ConfigParsingError(f"Engine configuration file not found at path: {source}")
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Invalid YAML syntax in '{source}': {e}") from e
    return parse_engine_config(content)
