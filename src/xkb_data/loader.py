"""Load keyboard layouts from XKB rules files and merge catalogs."""

from pathlib import Path
from typing import Iterable, Optional, Union
import logging

import lxml.etree as ET

from .config.paths import resolve_rule_set_path
from .exceptions import MalformedRulesError, RulesAccessError
from .models import KeyboardLayouts, LayoutList
from .parser import parse_keyboard_layouts

logger = logging.getLogger(__name__)


def get_keyboard_layouts(path: Union[str, Path]) -> KeyboardLayouts:
    """Fetch a list of keyboard layouts from a path.

    Args:
        path: Path to an XKB rules registry (e.g. base.xml)

    Returns:
        KeyboardLayouts catalog in document order

    Raises:
        RulesAccessError: If the file cannot be opened or read
        MalformedRulesError: If the content is not a valid rules registry
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Failed to read rules file {path}: {e}")
        raise RulesAccessError(path, e) from e

    try:
        layouts = parse_keyboard_layouts(data)
    except (ET.XMLSyntaxError, ValueError) as e:
        logger.error(f"Failed to parse rules file {path}: {e}")
        raise MalformedRulesError(path, str(e)) from e

    logger.debug(f"Loaded {len(layouts.layout_list.layout)} layouts from {path}")
    return layouts


def load_rule_set(name: str, default_path: Optional[str] = None) -> KeyboardLayouts:
    """Load a registered rule set ('base' or 'extras') from its resolved path.

    Args:
        name: Rule set name
        default_path: Replaces the system default path; the rule set's
                      environment variable still takes precedence
    """
    return get_keyboard_layouts(resolve_rule_set_path(name, default_path=default_path))


def keyboard_layouts() -> KeyboardLayouts:
    """Fetch a list of keyboard layouts from /usr/share/X11/xkb/rules/base.xml
    or the file defined in the X11_BASE_RULES_XML environment variable.
    """
    return load_rule_set('base')


def extra_keyboard_layouts() -> KeyboardLayouts:
    """Fetch a list of keyboard layouts from /usr/share/X11/xkb/rules/base.extras.xml
    or the file defined in the X11_EXTRA_RULES_XML environment variable.
    """
    return load_rule_set('extras')


def all_keyboard_layouts() -> KeyboardLayouts:
    """Fetch the base keyboard layouts extended with the extra layouts.

    A base rules failure is raised before the extras are loaded.
    """
    base_rules = keyboard_layouts()
    extras_rules = extra_keyboard_layouts()
    return merge_rules(base_rules, extras_rules)


def merge_rules(*catalogs: KeyboardLayouts) -> KeyboardLayouts:
    """Merge catalogs by concatenating their layout lists in argument order.

    Layouts with the same name are kept as separate entries.
    """
    return KeyboardLayouts(
        layout_list=concat_layout_lists(catalog.layout_list for catalog in catalogs)
    )


def concat_layout_lists(layout_lists: Iterable[LayoutList]) -> LayoutList:
    """Flatten layout lists, in input order, into a new LayoutList."""
    new_layouts = []
    for layout_list in layout_lists:
        new_layouts.extend(layout_list.layout)
    return LayoutList(layout=new_layouts)
