"""Parse numbering.xml into numbering model definitions."""
from __future__ import annotations

from typing import Dict, Optional
from xml.etree import ElementTree as ET

from docx_reader.errors import ParseError
from docx_reader.model.numbering_model import (
    DEFAULT_LEVEL_TEXT,
    DEFAULT_NUM_FORMAT,
    DEFAULT_START,
    AbstractNumberingDefinition,
    NumberingCatalog,
    NumberingInstance,
    NumberingLevel,
    NumberingLevelOverride,
)
from docx_reader.parser.paragraph_properties import parse_indentation
from docx_reader.utils.logger import get_logger
from docx_reader.utils.xml_utils import Namespaces, get_attr, get_int_attr, parse_xml

LOGGER = get_logger(__name__)


class NumberingParser:
    """Parser for numbering definitions defined in numbering.xml."""

    def __init__(self, numbering_xml: Optional[ET.ElementTree]) -> None:
        self._numbering_xml = numbering_xml

    def parse(self) -> NumberingCatalog:
        if self._numbering_xml is None:
            return NumberingCatalog()

        root = self._numbering_xml.getroot()
        abstracts = self._parse_abstract_nums(root)
        instances = self._parse_nums(root, abstracts)
        return NumberingCatalog(abstracts=abstracts, instances=instances)

    # ------------------------------------------------------------------
    def _parse_abstract_nums(self, root: ET.Element) -> Dict[str, AbstractNumberingDefinition]:
        abstracts: Dict[str, AbstractNumberingDefinition] = {}
        for abstract_el in root.findall("w:abstractNum", Namespaces.WORD):
            abstract_id = get_attr(abstract_el, None, "w:abstractNumId")
            if not abstract_id:
                continue
            levels: Dict[int, NumberingLevel] = {}
            for lvl_el in abstract_el.findall("w:lvl", Namespaces.WORD):
                level = self._parse_level(lvl_el)
                if level is not None:
                    levels[level.ilvl] = level
            abstracts[abstract_id] = AbstractNumberingDefinition(
                abstract_id=abstract_id,
                levels=levels,
            )
        return abstracts

    def _parse_level(self, lvl_el: ET.Element) -> Optional[NumberingLevel]:
        ilvl = get_int_attr(lvl_el, None, "w:ilvl")
        if ilvl is None:
            return None
        start = get_int_attr(lvl_el, "w:start", "w:val")
        level_text = get_attr(lvl_el, "w:lvlText", "w:val")
        return NumberingLevel(
            ilvl=ilvl,
            num_format=get_attr(lvl_el, "w:numFmt", "w:val") or DEFAULT_NUM_FORMAT,
            level_text=level_text if level_text is not None else DEFAULT_LEVEL_TEXT,
            start=start if start is not None else DEFAULT_START,
            indent=parse_indentation(lvl_el.find("w:pPr", Namespaces.WORD)),
        )

    def _parse_nums(
        self,
        root: ET.Element,
        abstracts: Dict[str, AbstractNumberingDefinition],
    ) -> Dict[str, NumberingInstance]:
        instances: Dict[str, NumberingInstance] = {}
        for num_el in root.findall("w:num", Namespaces.WORD):
            num_id = get_attr(num_el, None, "w:numId")
            if not num_id:
                continue
            abstract_id = get_attr(num_el, "w:abstractNumId", "w:val")
            if abstract_id is None:
                continue
            if abstract_id not in abstracts:
                LOGGER.warning("Numbering instance %s references unknown abstractNum %s", num_id, abstract_id)
            instances[num_id] = NumberingInstance(
                num_id=num_id,
                abstract_id=abstract_id,
                level_overrides=self._parse_overrides(num_el),
            )
        return instances

    def _parse_overrides(self, num_el: ET.Element) -> Dict[int, NumberingLevelOverride]:
        overrides: Dict[int, NumberingLevelOverride] = {}
        for override_el in num_el.findall("w:lvlOverride", Namespaces.WORD):
            ilvl = get_int_attr(override_el, None, "w:ilvl")
            if ilvl is None:
                continue
            start = get_int_attr(override_el, "w:startOverride", "w:val")
            lvl_el = override_el.find("w:lvl", Namespaces.WORD)
            if lvl_el is None:
                overrides[ilvl] = NumberingLevelOverride(ilvl=ilvl, start=start)
                continue
            # Inside an override only the fields actually written take part.
            level_start = get_int_attr(lvl_el, "w:start", "w:val")
            overrides[ilvl] = NumberingLevelOverride(
                ilvl=ilvl,
                num_format=get_attr(lvl_el, "w:numFmt", "w:val"),
                level_text=get_attr(lvl_el, "w:lvlText", "w:val"),
                start=start if start is not None else level_start,
                indent=parse_indentation(lvl_el.find("w:pPr", Namespaces.WORD)),
                defines_level=True,
            )
        return overrides


def parse_numbering(data: Optional[bytes], part_name: str = "word/numbering.xml") -> NumberingCatalog:
    """Parse raw numbering.xml bytes; a missing or malformed part yields an empty catalog."""
    if data is None:
        return NumberingCatalog()
    try:
        tree = parse_xml(data, part_name=part_name)
    except ParseError as exc:
        LOGGER.warning("Numbering part unreadable, continuing without numbering: %s", exc)
        return NumberingCatalog()
    return NumberingParser(tree).parse()
