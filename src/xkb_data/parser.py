"""Map XKB rules XML documents onto the schema model.

The mapping is explicit: each element the registry schema defines is read by
one function below, and the fields of a <configItem> are described by the
CONFIG_ITEM_FIELDS table.

Document shape::

    <xkbConfigRegistry>
      <layoutList>
        <layout>
          <configItem>
            <name>us</name>
            <shortDescription>en</shortDescription>   (optional)
            <description>English (US)</description>
          </configItem>
          <variantList>                              (optional)
            <variant><configItem>...</configItem></variant>
          </variantList>
        </layout>
      </layoutList>
    </xkbConfigRegistry>
"""

from typing import Any, Dict, List, Optional

import lxml.etree as ET

from .exceptions import RulesSchemaError
from .models import (
    ConfigItem,
    KeyboardLayout,
    KeyboardLayouts,
    KeyboardVariant,
    LayoutList,
    VariantList,
)

# (element, attribute, required)
CONFIG_ITEM_FIELDS = (
    ('name', 'name', True),
    ('shortDescription', 'short_description', False),
    ('description', 'description', True),
)

XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'


def _make_parser() -> ET.XMLParser:
    return ET.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def parse_keyboard_layouts(data: bytes) -> KeyboardLayouts:
    """Parse a complete rules document.

    Args:
        data: Raw bytes of the XML document

    Returns:
        KeyboardLayouts catalog in document order

    Raises:
        lxml.etree.XMLSyntaxError: If the document is not well-formed XML
        RulesSchemaError: If the document does not match the registry schema
    """
    root = ET.fromstring(data, _make_parser())
    layout_list = _fetch_subelement(root, 'layoutList')
    if layout_list is None:
        raise RulesSchemaError(f"missing element 'layoutList' in <{root.tag}>")
    return KeyboardLayouts(layout_list=_parse_layout_list(layout_list))


def _parse_layout_list(elem: ET._Element) -> LayoutList:
    return LayoutList(layout=[_parse_layout(child) for child in _iter_subelements(elem, 'layout')])


def _parse_layout(elem: ET._Element) -> KeyboardLayout:
    config_item = _parse_config_item(_require_subelement(elem, 'configItem'))

    variant_list = None
    variant_list_elem = _fetch_subelement(elem, 'variantList')
    if variant_list_elem is not None:
        variant_list = _parse_variant_list(variant_list_elem)

    return KeyboardLayout(config_item=config_item, variant_list=variant_list)


def _parse_variant_list(elem: ET._Element) -> VariantList:
    variants = tuple(_parse_variant(child) for child in _iter_subelements(elem, 'variant'))
    # An empty <variantList/> keeps the list element but no variants
    return VariantList(variant=variants or None)


def _parse_variant(elem: ET._Element) -> KeyboardVariant:
    return KeyboardVariant(config_item=_parse_config_item(_require_subelement(elem, 'configItem')))


def _parse_config_item(elem: ET._Element) -> ConfigItem:
    values: Dict[str, Any] = {}
    for element_name, attribute, required in CONFIG_ITEM_FIELDS:
        text = _fetch_text(elem, element_name)
        if text is None and required:
            raise RulesSchemaError(
                f"missing element '{element_name}' in <{elem.tag}> at line {elem.sourceline}"
            )
        values[attribute] = text
    return ConfigItem(**values)


def _iter_subelements(parent: ET._Element, name: str) -> List[ET._Element]:
    """Direct children of ``parent`` with the given tag."""
    return [child for child in parent if child.tag == name]


def _fetch_subelement(parent: ET._Element, name: str) -> Optional[ET._Element]:
    """Fetch a single direct child element, if defined.

    Translated registries repeat elements with an xml:lang attribute; the
    untranslated one is preferred.
    """
    candidates = _iter_subelements(parent, name)
    if not candidates:
        return None
    for candidate in candidates:
        if candidate.get(XML_LANG) is None:
            return candidate
    return candidates[0]


def _require_subelement(parent: ET._Element, name: str) -> ET._Element:
    sub_element = _fetch_subelement(parent, name)
    if sub_element is None:
        raise RulesSchemaError(
            f"missing element '{name}' in <{parent.tag}> at line {parent.sourceline}"
        )
    return sub_element


def _fetch_text(parent: ET._Element, name: str) -> Optional[str]:
    """Get the stripped text of a child element, or None if it is absent."""
    sub_element = _fetch_subelement(parent, name)
    if sub_element is None:
        return None
    if len(sub_element):
        child = sub_element[0]
        found = f"<{child.tag}>" if isinstance(child.tag, str) else str(child)
        raise RulesSchemaError(
            f"element '{name}' at line {sub_element.sourceline} must contain text, found {found}"
        )
    return (sub_element.text or '').strip()
