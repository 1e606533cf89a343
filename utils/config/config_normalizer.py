"""
Configuration normalization utilities for handling case-insensitive configuration
and environment variable overrides.
"""

import os
import logging
from typing import Dict, Any, Union
from configparser import ConfigParser

logger = logging.getLogger(__name__)


class ConfigNormalizer:
    """
    Normalizes configuration section names and handles case sensitivity issues.

    Provides case-insensitive configuration reading, section name normalization,
    duplicate section merging, and environment variable override functionality.
    """

    # Environment variable mapping: env_var -> (section, key)
    ENV_VAR_MAPPING = {
        'ASSET_HASH_HASH': ('hashing', 'hash'),
        'ASSET_HASH_ENCODING': ('hashing', 'encoding'),
        'ASSET_HASH_MAX_LENGTH': ('hashing', 'max_length'),
        'ASSET_HASH_CHUNK_SIZE': ('hashing', 'chunk_size'),
    }

    # Section name aliases for case-insensitive handling
    SECTION_ALIASES = {
        'hashing': ['Hashing', 'HASHING', 'hash', 'Hash'],
    }

    def normalize_config(self, config: Union[ConfigParser, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Normalize configuration section names and merge duplicate sections.

        Args:
            config: Raw configuration from ConfigParser or dict

        Returns:
            dict: Normalized configuration with lowercase section and key names
        """
        if isinstance(config, ConfigParser):
            raw_config = {section: dict(config[section]) for section in config.sections()}
        else:
            raw_config = config.copy()

        normalized = {}
        section_mapping = self._build_section_mapping()

        for section_name, section_data in raw_config.items():
            canonical_name = section_mapping.get(section_name.lower(), section_name.lower())
            normalized_section_data = {key.lower(): value for key, value in section_data.items()}

            if canonical_name in normalized:
                logger.debug(f"Merging duplicate section: {section_name} -> {canonical_name}")
                if section_name.islower():
                    # Lowercase section takes precedence
                    normalized[canonical_name].update(normalized_section_data)
                else:
                    for key, value in normalized_section_data.items():
                        normalized[canonical_name].setdefault(key, value)
            else:
                normalized[canonical_name] = normalized_section_data

        logger.debug(f"Configuration normalization complete. Sections: {list(normalized.keys())}")
        return normalized

    def apply_env_overrides(self, config: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Apply environment variable overrides to configuration.

        Args:
            config: Normalized configuration dict

        Returns:
            dict: Configuration with environment variable overrides applied
        """
        config_with_overrides = {section: data.copy() for section, data in config.items()}

        overrides_applied = 0
        for env_var, (section, key) in self.ENV_VAR_MAPPING.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                config_with_overrides.setdefault(section, {})
                old_value = config_with_overrides[section].get(key, '<not set>')
                config_with_overrides[section][key] = env_value
                overrides_applied += 1
                logger.info(f"Environment override applied: {env_var} -> [{section}] {key}")
                logger.debug(f"Value changed: {old_value} -> {env_value}")

        if overrides_applied == 0:
            logger.debug("No environment variable overrides found")

        return config_with_overrides

    def normalize_and_override(self, config: Union[ConfigParser, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
        """
        Complete normalization pipeline: normalize sections and apply environment overrides.
        """
        return self.apply_env_overrides(self.normalize_config(config))

    def canonical_section(self, section: str) -> str:
        return self._build_section_mapping().get(section.lower(), section.lower())

    def _build_section_mapping(self) -> Dict[str, str]:
        """
        Build a mapping from all possible section names to their canonical lowercase form.

        Returns:
            dict: Mapping of section_name.lower() -> canonical_name
        """
        mapping = {}
        for canonical, aliases in self.SECTION_ALIASES.items():
            mapping[canonical.lower()] = canonical
            for alias in aliases:
                mapping[alias.lower()] = canonical
        return mapping

    def get_supported_env_vars(self) -> Dict[str, tuple]:
        """
        Get all supported environment variables and their mappings.

        Returns:
            dict: Environment variable mapping
        """
        return self.ENV_VAR_MAPPING.copy()
