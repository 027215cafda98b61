"""Extract style definitions from styles.xml and produce a catalog."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_reader.errors import ParseError
from docx_reader.model.style_model import StyleDefinition, StylesCatalog
from docx_reader.parser.paragraph_properties import parse_indentation, parse_outline_level
from docx_reader.utils.logger import get_logger
from docx_reader.utils.xml_utils import Namespaces, get_attr, parse_xml, qualify

LOGGER = get_logger(__name__)


class StylesParser:
    """Parse Word styles into plain records keyed by style id.

    Inheritance is left unresolved here; the catalog walks
    ``basedOn`` chains per property when asked.
    """

    def __init__(self, styles_xml: Optional[ET.ElementTree]) -> None:
        self._styles_xml = styles_xml

    def parse(self) -> StylesCatalog:
        if self._styles_xml is None:
            return StylesCatalog({})
        return StylesCatalog(self._collect_styles())

    def _collect_styles(self) -> Dict[str, StyleDefinition]:
        styles: Dict[str, StyleDefinition] = {}
        root = self._styles_xml.getroot()
        for style_el in root.findall("w:style", Namespaces.WORD):
            style_id = style_el.attrib.get(qualify("w:styleId"))
            if not style_id:
                continue
            if style_id in styles:
                LOGGER.debug("Duplicate style id %s; keeping the first definition", style_id)
                continue
            ppr = style_el.find("w:pPr", Namespaces.WORD)
            based_on = get_attr(style_el, "w:basedOn", "w:val") or None
            styles[style_id] = StyleDefinition(
                style_id=style_id,
                style_type=style_el.attrib.get(qualify("w:type"), "paragraph"),
                name=get_attr(style_el, "w:name", "w:val"),
                based_on=based_on,
                paragraph_indent=parse_indentation(ppr),
                outline_level=parse_outline_level(ppr),
            )
        return styles


def parse_styles(data: Optional[bytes], part_name: str = "word/styles.xml") -> StylesCatalog:
    """Parse raw styles.xml bytes; a missing or malformed part yields an empty catalog."""
    if data is None:
        return StylesCatalog({})
    try:
        tree = parse_xml(data, part_name=part_name)
    except ParseError as exc:
        LOGGER.warning("Styles part unreadable, continuing without styles: %s", exc)
        return StylesCatalog({})
    return StylesParser(tree).parse()
