"""
Module for loading and validating socialgraph configuration from TOML file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("edge-list", "csv", "json-nodes-links", "json-vertices-edges")

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "SOCIALGRAPH_SAMPLE_SIZE": ("sampler", "default_sample_size"),
    "SOCIALGRAPH_CLUSTERING_CAP": ("stats", "clustering_sample_cap"),
}


class ConfigValidationError(Exception):
    """Exception for configuration validation errors."""

    pass


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    """
    Applies integer overrides from environment variables.

    Priority:
    1. Environment variable (if set)
    2. Value from config.toml
    """
    for env_name, (section, field_name) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or not raw.strip():
            continue
        try:
            value = int(raw)
        except ValueError:
            raise ConfigValidationError(f"{env_name} must be an integer, got {raw!r}")
        config.setdefault(section, {})[field_name] = value
        logger.info(f"Config override from {env_name}: {section}.{field_name} = {value}")


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads and validates configuration from TOML file.

    Args:
        config_path: Path to configuration file.
                    If None, uses socialgraph/config.toml

    Returns:
        Dictionary with validated configuration

    Raises:
        ConfigValidationError: On validation errors
        FileNotFoundError: If configuration file not found
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent / "config.toml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Failed to parse TOML file: {e}")

    _apply_env_overrides(config)
    _validate_config(config)

    return config


def _validate_config(config: Dict[str, Any]) -> None:
    """Validates the full configuration structure."""
    required_sections = ["parser", "stats", "sampler", "node_detail", "ingest"]

    for section in required_sections:
        if section not in config:
            raise ConfigValidationError(f"Missing required section: [{section}]")

    _validate_parser_section(config["parser"])
    _validate_stats_section(config["stats"])
    _validate_sampler_section(config["sampler"])
    _validate_node_detail_section(config["node_detail"])
    _validate_ingest_section(config["ingest"])


def _validate_parser_section(section: Dict[str, Any]) -> None:
    """Validates [parser] section."""
    _validate_required_fields(
        section, {"default_format": str, "comment_prefix": str}, "parser"
    )

    if section["default_format"] not in SUPPORTED_FORMATS:
        raise ConfigValidationError(
            f"parser.default_format must be one of: {', '.join(SUPPORTED_FORMATS)}"
        )

    if not section["comment_prefix"]:
        raise ConfigValidationError("parser.comment_prefix cannot be empty")


def _validate_stats_section(section: Dict[str, Any]) -> None:
    """Validates [stats] section."""
    _validate_required_fields(section, {"clustering_sample_cap": int}, "stats")

    if section["clustering_sample_cap"] <= 0:
        raise ConfigValidationError("stats.clustering_sample_cap must be positive")


def _validate_sampler_section(section: Dict[str, Any]) -> None:
    """Validates [sampler] section."""
    _validate_required_fields(
        section, {"default_sample_size": int, "max_sample_size": int}, "sampler"
    )

    # 0 means "no sampling"
    if section["default_sample_size"] < 0:
        raise ConfigValidationError("sampler.default_sample_size must be non-negative")

    if section["max_sample_size"] <= 0:
        raise ConfigValidationError("sampler.max_sample_size must be positive")

    if section["default_sample_size"] > section["max_sample_size"]:
        raise ConfigValidationError(
            f"sampler.default_sample_size ({section['default_sample_size']}) "
            f"cannot exceed sampler.max_sample_size ({section['max_sample_size']})"
        )


def _validate_node_detail_section(section: Dict[str, Any]) -> None:
    """Validates [node_detail] section."""
    _validate_required_fields(section, {"neighbor_cap": int}, "node_detail")

    if section["neighbor_cap"] <= 0:
        raise ConfigValidationError("node_detail.neighbor_cap must be positive")


def _validate_ingest_section(section: Dict[str, Any]) -> None:
    """Validates [ingest] section."""
    _validate_required_fields(
        section, {"log_level": str, "output_dir": str, "top_nodes": int}, "ingest"
    )

    if section["log_level"] not in ["debug", "info", "warning", "error"]:
        raise ConfigValidationError("ingest.log_level must be one of: debug, info, warning, error")

    if section["top_nodes"] < 0:
        raise ConfigValidationError("ingest.top_nodes must be non-negative")


def _validate_required_fields(
    section: Dict[str, Any], required_fields: Dict[str, type], section_name: str
) -> None:
    """Checks presence and types of required fields in a section."""
    for field_name, expected_type in required_fields.items():
        if field_name not in section:
            raise ConfigValidationError(f"Missing required field: {section_name}.{field_name}")

        actual_value = section[field_name]
        # bool is a subclass of int, reject it explicitly
        if expected_type is int and isinstance(actual_value, bool):
            raise ConfigValidationError(
                f"Field {section_name}.{field_name} must be int, got bool"
            )
        if not isinstance(actual_value, expected_type):
            raise ConfigValidationError(
                f"Field {section_name}.{field_name} must be {expected_type.__name__}, "
                f"got {type(actual_value).__name__}"
            )
