"""Typed representation of the XKB rules registry schema."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ConfigItem:
    """Name and description block shared by layouts and variants."""
    name: str
    description: str
    short_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'short_description': self.short_description,
            'description': self.description,
        }


@dataclass(frozen=True)
class KeyboardVariant:
    """A variant of a keyboard layout, e.g. 'dvorak' for 'us'."""
    config_item: ConfigItem

    def name(self) -> str:
        """The name of this variant of a keyboard layout."""
        return self.config_item.name

    def description(self) -> str:
        """A description of this variant of a keyboard layout."""
        return self.config_item.description

    def short_description(self) -> Optional[str]:
        return self.config_item.short_description

    def to_dict(self) -> Dict[str, Any]:
        return self.config_item.to_dict()


@dataclass(frozen=True)
class VariantList:
    """Contents of a <variantList> element.

    ``variant`` is None when the element holds no <variant> children.
    """
    variant: Optional[Tuple[KeyboardVariant, ...]] = None


@dataclass(frozen=True)
class KeyboardLayout:
    """A keyboard layout with a name, a description and optional variants."""
    config_item: ConfigItem
    variant_list: Optional[VariantList] = None

    def name(self) -> str:
        """Fetch the name of the keyboard layout."""
        return self.config_item.name

    def description(self) -> str:
        """Fetch a description of the layout."""
        return self.config_item.description

    def short_description(self) -> Optional[str]:
        return self.config_item.short_description

    def variants(self) -> Optional[Tuple[KeyboardVariant, ...]]:
        """Fetch the list of variants of this layout.

        Returns:
            Variants in document order, or None if the layout declares no
            <variantList> or an empty one
        """
        if self.variant_list is None or not self.variant_list.variant:
            return None
        return self.variant_list.variant

    def to_dict(self) -> Dict[str, Any]:
        result = self.config_item.to_dict()
        variants = self.variants()
        result['variants'] = [v.to_dict() for v in variants] if variants is not None else None
        return result


@dataclass
class LayoutList:
    """Ordered list of keyboard layouts, in document order."""
    layout: List[KeyboardLayout] = field(default_factory=list)


@dataclass
class KeyboardLayouts:
    """Catalog of keyboard layouts parsed from an XKB rules file."""
    layout_list: LayoutList

    def layouts(self) -> Tuple[KeyboardLayout, ...]:
        """Fetch the layouts from the layout list (read-only)."""
        return tuple(self.layout_list.layout)

    def layouts_mut(self) -> List[KeyboardLayout]:
        """Fetch the layout list itself for in-place editing."""
        return self.layout_list.layout

    def to_dict(self) -> Dict[str, Any]:
        return {'layouts': [layout.to_dict() for layout in self.layout_list.layout]}
