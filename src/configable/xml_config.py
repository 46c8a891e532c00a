"""XML configuration backend."""

from typing import Any

from lxml import etree

from .coercion import stringify
from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .models import ConfigFormat
from .models import ConfigPolicy
from .models import ErrorPolicy
from .tree import TreeBackend

ROOT_TAG = "config"
ITEM_TAG = "item"

# Empty sections and lists carry a type marker in a private namespace; the
# marker is never read back as a key.
TYPE_PREFIX = "cfg"
TYPE_NAMESPACE = "urn:configable"
TYPE_ATTR = f"{{{TYPE_NAMESPACE}}}type"
EMPTY_SECTION = "section"
EMPTY_LIST = "list"


def element_to_value(element: etree._Element) -> Any:
    """Convert an element into a tree value.

    Elements without children or attributes become their text (``""`` when
    empty), or an empty section or list when marked as one. Otherwise
    attributes and child elements become dict keys, and children sharing a
    tag are collected into a list.
    """
    children = list(element.iterchildren(etree.Element))
    attributes = {key: value for key, value in element.attrib.items() if key != TYPE_ATTR}
    if not children and not attributes:
        marker = element.get(TYPE_ATTR)
        if marker == EMPTY_SECTION:
            return {}
        if marker == EMPTY_LIST:
            return []
        return element.text or ""

    result: dict[str, Any] = attributes
    for child in children:
        key = etree.QName(child).localname
        value = element_to_value(child)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


def append_value(parent: etree._Element, key: str, value: Any) -> None:
    """Append ``value`` under ``parent`` as one or more ``key`` elements.

    Lists become repeated sibling elements; a list nested inside a list is
    written as ``item`` children. Empty sections and lists become a single
    element with a type marker.

    Raises:
        ValueError: If ``key`` is not a valid XML tag name
    """
    if isinstance(value, list) and value:
        for item in value:
            _append_element(parent, key, item)
    else:
        _append_element(parent, key, value)


def _append_element(parent: etree._Element, key: str, value: Any) -> None:
    child = etree.SubElement(parent, key)
    if isinstance(value, dict):
        if not value:
            child.set(TYPE_ATTR, EMPTY_SECTION)
        for child_key, child_value in value.items():
            append_value(child, child_key, child_value)
    elif isinstance(value, list):
        if not value:
            child.set(TYPE_ATTR, EMPTY_LIST)
        for item in value:
            _append_element(child, ITEM_TAG, item)
    elif value is not None:
        child.text = stringify(value)


class XmlConfig(TreeBackend):
    """Configuration stored as an XML document under a ``<config>`` root.

    XML carries no types, so every leaf reads back as a string after a
    load; the typed getters convert on demand. A list with one element
    reads back as a scalar, so list getters treat a scalar as a one-element
    list. Empty sections and lists are written with a ``cfg:type`` marker
    so they survive a round trip. Failures are logged and swallowed by
    default, and ``delete`` also empties the in-memory tree.
    """

    format = ConfigFormat.XML
    default_policy = ConfigPolicy(errors=ErrorPolicy.SUPPRESS, clear_on_delete=True)

    def _list_items(self, path: str) -> list[Any] | None:
        items = super()._list_items(path)
        if items is not None:
            return items
        value = self.get(path)
        return [value] if value is not None else None

    def _parse(self, text: str) -> dict[str, Any]:
        if not text.strip():
            return {}

        parser = etree.XMLParser(remove_blank_text=True, remove_comments=True, resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as e:
            raise ConfigParseError(f"Invalid XML: {e}") from e

        data = element_to_value(root)
        if data == "":
            return {}
        return self._as_tree(data)

    def _serialize(self) -> str:
        root = etree.Element(ROOT_TAG, nsmap={TYPE_PREFIX: TYPE_NAMESPACE})
        try:
            for key, value in self._data.items():
                append_value(root, key, value)
        except ValueError as e:
            raise ConfigFileError(f"Cannot represent configuration as XML: {e}") from e
        etree.cleanup_namespaces(root)

        return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8").decode("utf-8")
