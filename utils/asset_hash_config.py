"""
Configuration utilities for loading asset-hash config files into DigestOptions.

A config file is an ini file with a [hashing] section:

    [hashing]
    hash = xxhash128
    encoding = base52
    max_length = 8
    chunk_size = 1048576

Environment variables (ASSET_HASH_HASH, ASSET_HASH_ENCODING, ASSET_HASH_MAX_LENGTH,
ASSET_HASH_CHUNK_SIZE) override file values. max_length of 0 or "none" disables
truncation.
"""
import configparser
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from models.digest_options import DEFAULT_ENCODING, DEFAULT_HASH, DEFAULT_MAX_LENGTH, DigestOptions
from services.hashing_service import DEFAULT_CHUNK_SIZE
from utils.config.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)

_UNSET_VALUES = ('none', 'null', 'off', '0')


def load_configuration(path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the configuration file, normalize it and apply environment overrides.

    Args:
        path (Optional[str]): Path to the configuration file. A missing or None path
            yields an empty configuration (defaults plus environment overrides).

    Returns:
        Dict: Normalized configuration.
    """
    parser = configparser.ConfigParser()
    if path:
        if os.path.isfile(path):
            parser.read(path, encoding='utf-8')
            logger.debug(f"Loading configuration from: {path}")
        else:
            logger.warning(f"Configuration file not found: {path}, using defaults")
    return ConfigNormalizer().normalize_and_override(parser)


def write_temp_config(config_dict: dict, tmp_path: str) -> Path:
    """
    Write a temporary config.ini file from a dictionary of config sections.

    Args:
        config_dict (dict): Dictionary of config sections and values.
        tmp_path (str): Path to temporary directory.

    Returns:
        Path: Path to the written config file.
    """
    config = configparser.ConfigParser()
    for section, values in config_dict.items():
        config[section] = values

    config_path = Path(tmp_path) / "test_asset_hash_config.ini"
    with open(config_path, "w") as f:
        config.write(f)

    return config_path


def get_config_section(config: Dict[str, Dict[str, Any]], section_name: str) -> Dict[str, Any]:
    """
    Get a configuration section with case-insensitive lookup.

    Raises:
        ValueError: If the section is not found.
    """
    if config is None:
        raise ValueError("Configuration object cannot be None")

    canonical_name = ConfigNormalizer().canonical_section(section_name.strip())
    if canonical_name in config:
        return config[canonical_name].copy()
    raise ValueError(
        f"Configuration section '{section_name}' not found. "
        f"Available sections: {sorted(config.keys())}"
    )


def get_config_value(
    config: Dict[str, Dict[str, Any]],
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str
) -> Any:
    """
    Get a configuration value with case-insensitive lookup and type conversion.

    Args:
        config: Normalized configuration dict
        section: Configuration section name
        key: Configuration key name
        fallback: Default value if not found
        value_type: Type to convert the value to (str, int, float, bool)

    Returns:
        Configuration value converted to specified type or fallback

    Raises:
        ValueError: If the value cannot be converted and there is no fallback
    """
    if config is None:
        return fallback

    try:
        value = get_config_section(config, section).get(key.strip().lower())
    except ValueError:
        return fallback

    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback

    try:
        if value_type == bool and isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on', 'enabled')
        return value_type(value)
    except (ValueError, TypeError) as e:
        if fallback is not None:
            logger.warning(
                f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}. "
                f"Using fallback: {fallback}"
            )
            return fallback
        raise ValueError(
            f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}"
        )


def _parse_max_length(value: Any) -> Optional[int]:
    if value is None:
        return DEFAULT_MAX_LENGTH
    if isinstance(value, str) and value.strip().lower() in _UNSET_VALUES:
        return None
    max_length = int(value)
    return max_length or None


def build_digest_options(
    config: Optional[Dict[str, Dict[str, Any]]] = None,
    hash: Optional[str] = None,
    encoding: Optional[str] = None,
    max_length: Optional[Any] = None,
) -> DigestOptions:
    """
    Build validated DigestOptions from configuration, with explicit overrides on top.

    Args:
        config: Normalized configuration (from load_configuration), or None.
        hash: Overrides [hashing] hash.
        encoding: Overrides [hashing] encoding.
        max_length: Overrides [hashing] max_length; 0 or "none" disables truncation.

    Returns:
        DigestOptions: Validated options.

    Raises:
        pydantic.ValidationError: If a value is invalid.
        ValueError: If max_length is not an integer.
    """
    config = config or {}
    raw_max_length = max_length if max_length is not None else get_config_value(config, 'hashing', 'max_length')
    options = DigestOptions(
        hash=hash or get_config_value(config, 'hashing', 'hash', fallback=DEFAULT_HASH),
        encoding=encoding or get_config_value(config, 'hashing', 'encoding', fallback=DEFAULT_ENCODING),
        max_length=_parse_max_length(raw_max_length),
    )
    logger.debug(f"Digest options: {options}")
    return options


def get_chunk_size(config: Optional[Dict[str, Dict[str, Any]]] = None) -> int:
    """Read [hashing] chunk_size, defaulting to 1 MiB."""
    chunk_size = get_config_value(config or {}, 'hashing', 'chunk_size', fallback=DEFAULT_CHUNK_SIZE, value_type=int)
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return chunk_size
