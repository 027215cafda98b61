"""Parse document.xml into a flat sequence of block nodes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional
from xml.etree import ElementTree as ET

from docx_reader.model.elements import BlockNode, DocumentTree
from docx_reader.model.numbering_model import NumberingCatalog
from docx_reader.model.style_model import StylesCatalog
from docx_reader.parser.docx_loader import DOCUMENT_XML_PATH
from docx_reader.parser.list_counter import ListCounter
from docx_reader.parser.paragraph_properties import parse_paragraph_properties
from docx_reader.parser.paragraph_resolver import ParagraphFormatResolver, ResolvedFormat
from docx_reader.utils.logger import get_logger
from docx_reader.utils.text_normalizer import TextNormalizer
from docx_reader.utils.xml_utils import Namespaces, get_attr, local_name

if TYPE_CHECKING:
    from docx_reader.parser.docx_loader import DocxPackage

LOGGER = get_logger(__name__)

# Inline wrappers whose runs belong to the paragraph. Anything else
# (drawings, text boxes, AlternateContent, deletions) contributes no text.
_RUN_CONTAINERS = frozenset({
    "r", "hyperlink", "ins", "moveTo", "smartTag", "customXml",
    "sdt", "sdtContent", "fldSimple",
})

# Block wrappers whose paragraphs are emitted in place.
_BLOCK_WRAPPERS = {"sdt": "w:sdtContent", "customXml": None}


class DocumentParser:
    """Transforms Word body XML into block nodes in document order."""

    def __init__(
        self,
        package: "DocxPackage",
        styles: StylesCatalog,
        numbering: NumberingCatalog,
        *,
        document_part: str = DOCUMENT_XML_PATH,
        normalizer: Optional[TextNormalizer] = None,
        track_list_counters: bool = True,
    ) -> None:
        self._package = package
        self._document_part = document_part
        self._resolver = ParagraphFormatResolver(styles, numbering)
        self._counter = ListCounter(numbering) if track_list_counters else None
        self._normalizer = normalizer

    def parse(self) -> DocumentTree:
        """Parse the document body into block nodes."""
        document_tree = self._package.require_xml_part(self._document_part)
        body = document_tree.getroot().find("w:body", Namespaces.WORD)
        if body is None:
            LOGGER.warning("%s has no body element", self._document_part)
            return DocumentTree(content=[])
        return DocumentTree(content=list(self._walk_blocks(body)))

    def _walk_blocks(self, container: ET.Element) -> Iterator[BlockNode]:
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "p":
                yield self._parse_paragraph(child)
            elif tag in _BLOCK_WRAPPERS:
                content_name = _BLOCK_WRAPPERS[tag]
                content = child.find(content_name, Namespaces.WORD) if content_name else child
                if content is not None:
                    yield from self._walk_blocks(content)
            elif tag in ("tbl", "sectPr"):
                LOGGER.debug("Skipping body element: %s", tag)
            else:
                LOGGER.debug("Skipping unsupported element: %s", tag)

    def _parse_paragraph(self, paragraph_el: ET.Element) -> BlockNode:
        properties = parse_paragraph_properties(paragraph_el)
        resolved = self._resolver.resolve_properties(properties)
        if self._counter is not None:
            self._apply_counters(resolved)
        text = "".join(self._iter_text(paragraph_el))
        if self._normalizer is not None:
            text = self._normalizer.normalize_text(text)
        return BlockNode(type=resolved.block_type, attrs=resolved.attrs, text=text)

    def _apply_counters(self, resolved: ResolvedFormat) -> None:
        reference = resolved.numbering
        level = resolved.numbering_level
        if reference is None or level is None:
            return
        value = self._counter.advance(reference.num_id, reference.ilvl, level)
        resolved.attrs["listCounterValue"] = value
        resolved.attrs["listMarkerText"] = self._counter.marker_text(reference.num_id, level)

    def _iter_text(self, element: ET.Element) -> Iterator[str]:
        """Yield run text in document order."""
        for child in element:
            tag = local_name(child.tag)
            if tag == "t":
                if child.text:
                    yield child.text
            elif tag == "tab":
                yield "\t"
            elif tag == "br":
                if get_attr(child, None, "w:type") in (None, "textWrapping"):
                    yield "\n"
            elif tag == "cr":
                yield "\n"
            elif tag in _RUN_CONTAINERS:
                yield from self._iter_text(child)

