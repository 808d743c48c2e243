"""Configuration file support for gwas-viewer."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from .gwas.columns import CANONICAL_COLUMNS
from .gwas.loader import LoadConfig

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DELIMITER_ALIASES = {
    "\\t": "\t",
    "tab": "\t",
    "comma": ",",
    "space": " ",
}

VALID_FIELDS = {
    "filepath",
    "col_map",
    "delimiter",
    "trait_name",
    "study_metadata",
    "significance_threshold",
    "top_k",
    "log_level",
}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def normalize_delimiter(delimiter: str) -> str:
    """Resolve delimiter aliases such as '\\t' or 'comma'.

    'space' is one literal space; runs of spaces are not collapsed.
    """
    return DELIMITER_ALIASES.get(delimiter.lower(), delimiter)


def _validate_string_table(name: str, value: Any) -> None:
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{name} must be a table, got {type(value).__name__}")
    for key, item in value.items():
        if not isinstance(item, str):
            raise ConfigValidationError(
                f"{name}.{key} must be a string, got {type(item).__name__}"
            )


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "filepath" in config_dict and not isinstance(config_dict["filepath"], (str, Path)):
        raise ConfigValidationError(
            f"filepath must be a string, got {type(config_dict['filepath']).__name__}"
        )

    if "delimiter" in config_dict:
        delimiter = config_dict["delimiter"]
        if not isinstance(delimiter, str):
            raise ConfigValidationError(
                f"delimiter must be a string, got {type(delimiter).__name__}"
            )
        if len(normalize_delimiter(delimiter)) != 1:
            raise ConfigValidationError(
                f"delimiter must be a single character, got {delimiter!r}"
            )

    if "trait_name" in config_dict and not isinstance(config_dict["trait_name"], str):
        raise ConfigValidationError(
            f"trait_name must be a string, got {type(config_dict['trait_name']).__name__}"
        )

    if "col_map" in config_dict:
        col_map = config_dict["col_map"]
        _validate_string_table("col_map", col_map)
        unknown = sorted(set(col_map.values()) - set(CANONICAL_COLUMNS))
        if unknown:
            logger.warning(f"col_map targets non-canonical columns: {', '.join(unknown)}")

    if "study_metadata" in config_dict:
        _validate_string_table("study_metadata", config_dict["study_metadata"])

    if "significance_threshold" in config_dict:
        threshold = config_dict["significance_threshold"]
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigValidationError(
                f"significance_threshold must be a number, got {type(threshold).__name__}"
            )
        if threshold < 0:
            raise ConfigValidationError(
                f"significance_threshold must be non-negative, got {threshold}"
            )

    if "top_k" in config_dict:
        top_k = config_dict["top_k"]
        if isinstance(top_k, bool) or not isinstance(top_k, int):
            raise ConfigValidationError(f"top_k must be an integer, got {type(top_k).__name__}")
        if top_k <= 0:
            raise ConfigValidationError(f"top_k must be positive, got {top_k}")

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def build_config(config_dict: dict[str, Any], base_dir: Path | None = None) -> LoadConfig:
    """Build a LoadConfig from an already-parsed configuration table.

    Args:
        config_dict: Values from the [gwas_viewer] table plus any overrides.
        base_dir: Directory that relative file paths are resolved against.

    Raises:
        ConfigValidationError: If any value is invalid or filepath is missing.
    """
    validate_config(config_dict)

    unknown = sorted(set(config_dict) - VALID_FIELDS)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    filtered_config = {k: v for k, v in config_dict.items() if k in VALID_FIELDS}

    if not filtered_config.get("filepath"):
        raise ConfigValidationError("filepath is required")

    filepath = Path(filtered_config["filepath"]).expanduser()
    if base_dir is not None and not filepath.is_absolute():
        filepath = base_dir / filepath
    filtered_config["filepath"] = filepath

    if "delimiter" in filtered_config:
        filtered_config["delimiter"] = normalize_delimiter(filtered_config["delimiter"])
    if "significance_threshold" in filtered_config:
        filtered_config["significance_threshold"] = float(filtered_config["significance_threshold"])
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return LoadConfig(**filtered_config)


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> LoadConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        LoadConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = dict(toml_data.get("gwas_viewer", {}))

    if overrides:
        config_dict.update(overrides)

    return build_config(config_dict, base_dir=config_path.parent)
