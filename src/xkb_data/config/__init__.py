"""Configuration system for locating XKB rules files."""

from .loader import ConfigLoader, load_config
from .paths import (
    RULE_SETS,
    X11_BASE_RULES,
    X11_BASE_RULES_ENV,
    X11_EXTRA_RULES_ENV,
    X11_EXTRAS_RULES,
    get_rule_set_info,
    list_rule_sets,
    resolve_rule_set_path,
    resolve_rules_path,
)
from .schema import XkbDataConfig, get_config_template, validate_config

__all__ = [
    "ConfigLoader",
    "load_config",
    "RULE_SETS",
    "X11_BASE_RULES",
    "X11_BASE_RULES_ENV",
    "X11_EXTRA_RULES_ENV",
    "X11_EXTRAS_RULES",
    "get_rule_set_info",
    "list_rule_sets",
    "resolve_rule_set_path",
    "resolve_rules_path",
    "XkbDataConfig",
    "get_config_template",
    "validate_config",
]
