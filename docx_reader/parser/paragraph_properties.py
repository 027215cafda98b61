"""Readers for ``w:pPr`` blocks shared by styles, numbering levels and paragraphs."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_reader.model.elements import Indentation, NumberingReference, ParagraphProperties
from docx_reader.utils.xml_utils import Namespaces, get_attr, get_int_attr, get_toggle

# Passthrough attributes: attr name -> (child element, attribute)
_DIRECT_ATTRIBUTES = (
    ("textAlign", "w:jc", "w:val"),
    ("spacingBefore", "w:spacing", "w:before"),
    ("spacingAfter", "w:spacing", "w:after"),
    ("lineHeight", "w:spacing", "w:line"),
    ("lineRule", "w:spacing", "w:lineRule"),
)


def parse_indentation(ppr: Optional[ET.Element]) -> Optional[Indentation]:
    """Read ``w:ind`` under ``ppr``; ``None`` when it is absent or carries nothing we model."""
    if ppr is None:
        return None
    ind = ppr.find("w:ind", Namespaces.WORD)
    if ind is None:
        return None
    left = get_attr(ind, None, "w:left")
    if left is None:
        left = get_attr(ind, None, "w:start")
    indent = Indentation(
        left=left,
        hanging=get_attr(ind, None, "w:hanging"),
        first_line=get_attr(ind, None, "w:firstLine"),
    )
    if indent.is_empty():
        return None
    return indent


def parse_outline_level(ppr: Optional[ET.Element]) -> Optional[int]:
    return get_int_attr(ppr, "w:outlineLvl", "w:val")


def parse_numbering_reference(ppr: Optional[ET.Element]) -> Optional[NumberingReference]:
    """Read ``w:numPr``. ``numId="0"`` explicitly removes numbering and yields ``None``."""
    if ppr is None:
        return None
    num_pr = ppr.find("w:numPr", Namespaces.WORD)
    if num_pr is None:
        return None
    num_id = get_attr(num_pr, "w:numId", "w:val")
    if not num_id or num_id == "0":
        return None
    ilvl = get_int_attr(num_pr, "w:ilvl", "w:val")
    return NumberingReference(num_id=num_id, ilvl=ilvl if ilvl is not None and ilvl >= 0 else 0)


def parse_paragraph_properties(paragraph_el: ET.Element) -> ParagraphProperties:
    """Collect the direct properties of a ``w:p`` element."""
    ppr = paragraph_el.find("w:pPr", Namespaces.WORD)
    if ppr is None:
        return ParagraphProperties()
    return ParagraphProperties(
        style_id=get_attr(ppr, "w:pStyle", "w:val") or None,
        indent=parse_indentation(ppr),
        numbering=parse_numbering_reference(ppr),
        outline_level=parse_outline_level(ppr),
        extras=_collect_extras(ppr),
    )


def _collect_extras(ppr: ET.Element) -> Dict[str, object]:
    extras: Dict[str, object] = {}
    for attr, child_name, attr_name in _DIRECT_ATTRIBUTES:
        value = get_attr(ppr, child_name, attr_name)
        if value is not None:
            extras[attr] = value
    for attr, child_name in (("keepNext", "w:keepNext"), ("keepLines", "w:keepLines")):
        toggle = get_toggle(ppr, child_name)
        if toggle is not None:
            extras[attr] = toggle
    fill = get_attr(ppr, "w:shd", "w:fill")
    if fill and fill != "auto":
        extras["backgroundColor"] = f"#{fill}"
    return extras
