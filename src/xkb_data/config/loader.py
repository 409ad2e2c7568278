"""Configuration loader for YAML config files."""

import os
from ruamel.yaml import YAML
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Union
import logging

from .schema import XkbDataConfig, validate_config

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles loading and merging configuration from multiple sources."""

    def load_from_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ruamel.yaml.YAMLError: If YAML is invalid
            ValueError: If the document is not a mapping
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            yaml = YAML(typ='safe')

            with open(config_path, 'r') as f:
                config = yaml.load(f) or {}

        except Exception as e:
            logger.error(f"Invalid YAML in {config_path}: {e}")
            raise

        if not isinstance(config, dict):
            raise ValueError(
                f"Configuration file {config_path} must contain a mapping, got {type(config).__name__}"
            )

        logger.info(f"Loaded configuration from {config_path}")
        return config

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries.

        Args:
            *configs: Configuration dictionaries to merge (in order of precedence)

        Returns:
            Merged configuration dictionary
        """
        result = {}

        for config in configs:
            if config:
                result.update(config)

        return result


def load_config(
    user_config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **override_values
) -> XkbDataConfig:
    """Load configuration from multiple sources with precedence.

    Precedence order (highest to lowest):
    1. Explicit override values passed as kwargs (None values are ignored)
    2. User-provided config file
    3. Environment variables
    4. Built-in defaults

    Rules file paths are not resolved here: a configured base_rules_xml or
    extra_rules_xml only replaces the system default, and
    resolve_rule_set_path applies the X11_*_RULES_XML overrides on top.

    Args:
        user_config_path: Optional path to user configuration file
        environ: Environment mapping (defaults to os.environ)
        **override_values: Explicit configuration overrides

    Returns:
        Validated configuration

    Raises:
        FileNotFoundError: If user_config_path is given but missing
        ValueError: If the merged configuration is invalid
    """
    loader = ConfigLoader()

    default_config = XkbDataConfig().model_dump()
    env_config = _load_env_config(environ)

    user_config = {}
    if user_config_path:
        user_config = loader.load_from_file(user_config_path)

    explicit_config = {key: value for key, value in override_values.items() if value is not None}

    final_config = loader.merge_configs(
        default_config,
        env_config,
        user_config,
        explicit_config
    )

    logger.debug(f"Resolved configuration: {final_config}")
    return validate_config(final_config)


def _load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load configuration from environment variables.

    Returns:
        Configuration dictionary from environment variables
    """
    if environ is None:
        environ = os.environ

    config = {}

    if environ.get("XKB_DATA_OUTPUT_FORMAT"):
        config["output_format"] = environ["XKB_DATA_OUTPUT_FORMAT"]

    return config
