"""Entry-point for the DOCX read path: package bytes to document tree."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from docx_reader.errors import MissingPartError
from docx_reader.model.elements import DocumentTree
from docx_reader.parser.docx_loader import (
    DOCUMENT_XML_PATH,
    NUMBERING_XML_PATH,
    PACKAGE_REL_PATH,
    STYLES_XML_PATH,
    BinarySource,
    DocxPackage,
)
from docx_reader.parser.document_parser import DocumentParser
from docx_reader.parser.numbering_parser import parse_numbering
from docx_reader.parser.rels_parser import (
    RELTYPE_NUMBERING,
    RELTYPE_OFFICE_DOCUMENT,
    RELTYPE_STYLES,
    Relationships,
    rels_part_for,
)
from docx_reader.parser.styles_parser import parse_styles
from docx_reader.utils.logger import get_logger
from docx_reader.utils.text_normalizer import TextNormalizer

LOGGER = get_logger(__name__)


class DocxReader:
    """Short-lived reader turning one DOCX buffer into a :class:`DocumentTree`.

    Every call to :meth:`load` builds its own package, catalogs and tree, so
    a reader instance can be shared and concurrent calls need no locking.
    """

    def __init__(self, *, normalize_text: bool = False, track_list_counters: bool = True) -> None:
        self.normalize_text = normalize_text
        self.track_list_counters = track_list_counters

    def load(self, data: BinarySource) -> DocumentTree:
        package = DocxPackage.load(data)
        return self.read_package(package)

    def load_path(self, docx_path: Union[str, Path]) -> DocumentTree:
        docx_path = Path(docx_path)
        LOGGER.info("Reading %s", docx_path.name)
        return self.read_package(DocxPackage.from_path(docx_path))

    def read_package(self, package: DocxPackage) -> DocumentTree:
        document_part = self._locate_main_document(package)
        document_rels = Relationships.from_part(package, rels_part_for(document_part))

        styles_part = self._locate_part(package, document_rels, RELTYPE_STYLES, STYLES_XML_PATH)
        numbering_part = self._locate_part(package, document_rels, RELTYPE_NUMBERING, NUMBERING_XML_PATH)

        styles = parse_styles(
            package.get_part_data(styles_part) if styles_part else None,
            styles_part or STYLES_XML_PATH,
        )
        numbering = parse_numbering(
            package.get_part_data(numbering_part) if numbering_part else None,
            numbering_part or NUMBERING_XML_PATH,
        )
        LOGGER.debug(
            "Catalogs ready: %d styles, %d numbering instances",
            len(styles),
            len(numbering.instances),
        )

        parser = DocumentParser(
            package,
            styles,
            numbering,
            document_part=document_part,
            normalizer=TextNormalizer() if self.normalize_text else None,
            track_list_counters=self.track_list_counters,
        )
        return parser.parse()

    # ------------------------------------------------------------------
    def _locate_main_document(self, package: DocxPackage) -> str:
        package_rels = Relationships.from_part(package, PACKAGE_REL_PATH)
        target = package_rels.target_by_type(RELTYPE_OFFICE_DOCUMENT)
        if target and package.has_part(target):
            return target
        if target:
            LOGGER.warning("Main document relationship points to missing part %s", target)
        if package.has_part(DOCUMENT_XML_PATH):
            return DOCUMENT_XML_PATH
        raise MissingPartError("Main document part not found", part_name=target or DOCUMENT_XML_PATH)

    def _locate_part(
        self,
        package: DocxPackage,
        document_rels: Relationships,
        rel_type: str,
        conventional_path: str,
    ) -> Optional[str]:
        """Find a part by relationship type, falling back to its conventional path."""
        target = document_rels.target_by_type(rel_type)
        if target and package.has_part(target):
            return target
        if target:
            LOGGER.warning("Relationship %s points to missing part %s", rel_type.rsplit("/", 1)[-1], target)
        if package.has_part(conventional_path):
            return conventional_path
        return None


def load(data: BinarySource, **options) -> DocumentTree:
    """Read a DOCX package held in memory; see :class:`DocxReader` for options."""
    return DocxReader(**options).load(data)
