"""DOCX package loader responsible for unpacking the ZIP container into named parts."""
from __future__ import annotations

import io
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union
from xml.etree import ElementTree as ET

from docx_reader.errors import MissingPartError, PackageError
from docx_reader.utils.logger import get_logger
from docx_reader.utils.xml_utils import parse_xml

LOGGER = get_logger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
PACKAGE_REL_PATH = "_rels/.rels"
DOCUMENT_XML_PATH = "word/document.xml"
STYLES_XML_PATH = "word/styles.xml"
NUMBERING_XML_PATH = "word/numbering.xml"

BinarySource = Union[bytes, bytearray, memoryview]


@dataclass(slots=True)
class DocxPackage:
    """Read-only mapping of part path to raw bytes.

    ``xml_cache`` fills as parts are parsed; the part bytes never change.
    """

    raw_parts: Mapping[str, bytes]
    xml_cache: Dict[str, ET.ElementTree] = field(default_factory=dict)

    @classmethod
    def load(cls, data: BinarySource) -> "DocxPackage":
        """Decompress a DOCX archive held in memory.

        Only the ZIP layer is validated here; OOXML semantics are left to
        the parsers that consume the parts.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(bytes(data))) as docx_zip:
                parts = {
                    info.filename: docx_zip.read(info)
                    for info in docx_zip.infolist()
                    if not info.is_dir()
                }
        except zipfile.BadZipFile as exc:
            raise PackageError(f"Not a valid ZIP package: {exc}") from exc
        except (zipfile.LargeZipFile, zlib.error, NotImplementedError, EOFError, OSError) as exc:
            raise PackageError(f"Unable to read ZIP package: {exc}") from exc

        LOGGER.debug("Loaded %d parts from package", len(parts))
        if CONTENT_TYPES_PATH not in parts:
            LOGGER.warning("Package has no %s part", CONTENT_TYPES_PATH)
        return cls(raw_parts=MappingProxyType(parts))

    @classmethod
    def from_path(cls, docx_path: Path) -> "DocxPackage":
        """Read a DOCX archive from disk."""
        return cls.load(Path(docx_path).read_bytes())

    # ------------------------------------------------------------------
    # Public helpers
    def has_part(self, name: str) -> bool:
        return name in self.raw_parts

    def get_part_data(self, name: str) -> Optional[bytes]:
        return self.raw_parts.get(name)

    def get_xml_part(self, name: str) -> Optional[ET.ElementTree]:
        """Parse and cache an XML part; ``None`` when the part is absent."""
        if name in self.xml_cache:
            return self.xml_cache[name]
        data = self.raw_parts.get(name)
        if data is None:
            return None
        tree = parse_xml(data, part_name=name)
        self.xml_cache[name] = tree
        return tree

    def require_xml_part(self, name: str) -> ET.ElementTree:
        tree = self.get_xml_part(name)
        if tree is None:
            raise MissingPartError("Required DOCX part missing", part_name=name)
        return tree
