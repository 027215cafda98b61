"""Helper functions to work with XML namespaces and parsing."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_reader.errors import ParseError

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"


class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = {"w": WORD_NS}
    RELS: Dict[str, str] = {"rel": RELS_NS}


def parse_xml(data: bytes, part_name: Optional[str] = None) -> ET.ElementTree:
    """Parse XML from raw bytes, raising :class:`ParseError` on malformed input."""
    # Hand-assembled packages often indent the XML declaration.
    payload = data.lstrip()
    try:
        return ET.ElementTree(ET.fromstring(payload))
    except ET.ParseError as exc:
        raise ParseError(f"Malformed XML: {exc}", part_name=part_name) from exc


def qualify(attr_name: str) -> str:
    """Expand a ``w:name`` style attribute into Clark notation."""
    prefix, local = attr_name.split(":", 1)
    namespace = Namespaces.WORD[prefix]
    return f"{{{namespace}}}{local}"


def local_name(tag: str) -> str:
    """Return the tag name without its namespace."""
    return tag.split("}", 1)[-1]


def get_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[str]:
    """Read a WordprocessingML attribute from ``element`` or one of its children."""
    if element is None:
        return None
    target = element.find(child_name, Namespaces.WORD) if child_name else element
    if target is None:
        return None
    key = qualify(attr_name) if ":" in attr_name else attr_name
    return target.attrib.get(key)


def get_int_attr(element: Optional[ET.Element], child_name: Optional[str], attr_name: str) -> Optional[int]:
    value = get_attr(element, child_name, attr_name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def get_toggle(element: Optional[ET.Element], child_name: str) -> Optional[str]:
    """Return ``"1"``/``"0"`` for an on/off property, ``None`` when absent."""
    if element is None:
        return None
    child = element.find(child_name, Namespaces.WORD)
    if child is None:
        return None
    value = child.attrib.get(qualify("w:val"))
    return "0" if value in ("0", "false", "off") else "1"
