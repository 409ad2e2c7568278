"""Default rules file locations and environment overrides."""

import os
from typing import Any, Dict, List, Mapping, Optional
import logging

logger = logging.getLogger(__name__)

X11_BASE_RULES = "/usr/share/X11/xkb/rules/base.xml"
X11_EXTRAS_RULES = "/usr/share/X11/xkb/rules/base.extras.xml"

X11_BASE_RULES_ENV = "X11_BASE_RULES_XML"
X11_EXTRA_RULES_ENV = "X11_EXTRA_RULES_XML"

# Registry of known rule sets
RULE_SETS = {
    'base': {
        'name': 'Base rules',
        'default_path': X11_BASE_RULES,
        'env_var': X11_BASE_RULES_ENV,
        'config_key': 'base_rules_xml',
    },
    'extras': {
        'name': 'Extra rules',
        'default_path': X11_EXTRAS_RULES,
        'env_var': X11_EXTRA_RULES_ENV,
        'config_key': 'extra_rules_xml',
    },
}


def list_rule_sets() -> List[str]:
    """Get list of known rule sets, base first.

    Returns:
        List of rule set names
    """
    return list(RULE_SETS.keys())


def get_rule_set_info(name: str) -> Dict[str, Any]:
    """Get information about a specific rule set.

    Args:
        name: Rule set name ('base' or 'extras')

    Returns:
        Rule set information dictionary

    Raises:
        ValueError: If the rule set is unknown
    """
    if name not in RULE_SETS:
        raise ValueError(f"Rule set '{name}' not supported. Available: {list_rule_sets()}")

    return RULE_SETS[name]


def resolve_rules_path(
    default_path: str,
    env_var: str,
    environ: Optional[Mapping[str, str]] = None
) -> str:
    """Resolve the effective path of a rules file.

    A set environment variable wins over the default, even when empty.

    Args:
        default_path: Path used when the variable is not set
        env_var: Name of the override environment variable
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Effective path
    """
    if environ is None:
        environ = os.environ

    if env_var in environ:
        path = environ[env_var]
        logger.debug(f"Using {env_var}={path}")
        return path

    return default_path


def resolve_rule_set_path(
    name: str,
    environ: Optional[Mapping[str, str]] = None,
    default_path: Optional[str] = None
) -> str:
    """Resolve the effective path of a registered rule set.

    ``default_path`` replaces the system default; the environment
    variable still wins over it.
    """
    info = get_rule_set_info(name)
    return resolve_rules_path(default_path or info['default_path'], info['env_var'], environ)
