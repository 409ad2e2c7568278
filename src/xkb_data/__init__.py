"""Keyboard layouts and variants from XKB rules files."""

__version__ = "0.1.0"

from .exceptions import (
    ErrorKind,
    MalformedRulesError,
    RulesAccessError,
    RulesError,
    RulesSchemaError,
)
from .loader import (
    all_keyboard_layouts,
    concat_layout_lists,
    extra_keyboard_layouts,
    get_keyboard_layouts,
    keyboard_layouts,
    load_rule_set,
    merge_rules,
)
from .models import (
    ConfigItem,
    KeyboardLayout,
    KeyboardLayouts,
    KeyboardVariant,
    LayoutList,
    VariantList,
)

__all__ = [
    "ErrorKind",
    "MalformedRulesError",
    "RulesAccessError",
    "RulesError",
    "RulesSchemaError",
    "all_keyboard_layouts",
    "concat_layout_lists",
    "extra_keyboard_layouts",
    "get_keyboard_layouts",
    "keyboard_layouts",
    "load_rule_set",
    "merge_rules",
    "ConfigItem",
    "KeyboardLayout",
    "KeyboardLayouts",
    "KeyboardVariant",
    "LayoutList",
    "VariantList",
]
