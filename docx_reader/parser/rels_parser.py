"""Utilities for reading Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_reader.errors import ParseError
from docx_reader.utils.logger import get_logger
from docx_reader.utils.xml_utils import Namespaces, parse_xml

if TYPE_CHECKING:
    from docx_reader.parser.docx_loader import DocxPackage

LOGGER = get_logger(__name__)

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
STRICT_REL_NS = "http://purl.oclc.org/ooxml/officeDocument/relationships"

RELTYPE_OFFICE_DOCUMENT = f"{WORD_REL_NS}/officeDocument"
RELTYPE_STYLES = f"{WORD_REL_NS}/styles"
RELTYPE_NUMBERING = f"{WORD_REL_NS}/numbering"

PACKAGE_REL_PART = "_rels/.rels"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    source_part: str
    r_id: str
    target: str
    rel_type: str
    is_external: bool = False
    resolved_target: Optional[str] = None

    def matches(self, rel_type: str) -> bool:
        """Compare types, accepting the Strict OOXML namespace as an alias."""
        if self.rel_type == rel_type:
            return True
        if rel_type.startswith(WORD_REL_NS):
            return self.rel_type == STRICT_REL_NS + rel_type[len(WORD_REL_NS):]
        return False


def rels_part_for(part_name: str) -> str:
    """Return the ``.rels`` part path that describes ``part_name``."""
    folder, _, base = part_name.rpartition("/")
    if folder:
        return f"{folder}/_rels/{base}.rels"
    return f"_rels/{base}.rels"


class Relationships:
    """Relationship mappings read from a single ``.rels`` part."""

    def __init__(self, source_part: str, relationships: Mapping[str, Relationship]) -> None:
        self.source_part = source_part
        self._by_id: Dict[str, Relationship] = dict(relationships)

    @classmethod
    def from_part(cls, package: "DocxPackage", rels_part_path: str) -> "Relationships":
        """Parse ``rels_part_path``; absent or malformed parts give an empty mapping."""
        source, base_dir = cls._source_and_base_from_rel_part(rels_part_path)
        data = package.get_part_data(rels_part_path)
        if data is None:
            LOGGER.debug("No relationship part at %s", rels_part_path)
            return cls(source, {})
        try:
            tree = parse_xml(data, part_name=rels_part_path)
        except ParseError as exc:
            LOGGER.warning("Ignoring unreadable relationship part: %s", exc)
            return cls(source, {})
        return cls(source, cls._parse_relationship_part(source, base_dir, tree))

    def __len__(self) -> int:
        return len(self._by_id)

    def targets(self) -> Dict[str, str]:
        """Relationship id to resolved target part path."""
        return {
            r_id: rel.resolved_target or rel.target
            for r_id, rel in self._by_id.items()
        }

    def target_by_type(self, rel_type: str) -> Optional[str]:
        """Resolved target of the first internal relationship of ``rel_type``."""
        for rel in self._by_id.values():
            if rel.matches(rel_type) and not rel.is_external:
                return rel.resolved_target
        return None

    @classmethod
    def _parse_relationship_part(
        cls, source_part: str, base_dir: PurePosixPath, tree: ET.ElementTree
    ) -> Dict[str, Relationship]:
        result: Dict[str, Relationship] = {}
        for rel_el in tree.getroot().iter(f"{{{Namespaces.RELS['rel']}}}Relationship"):
            r_id = rel_el.attrib.get("Id")
            if not r_id:
                continue
            target = rel_el.attrib.get("Target", "")
            rel_type = rel_el.attrib.get("Type", "")
            is_external = rel_el.attrib.get("TargetMode") == "External"
            result[r_id] = Relationship(
                source_part=source_part,
                r_id=r_id,
                target=target,
                rel_type=rel_type,
                is_external=is_external,
                resolved_target=cls._resolve_target_path(base_dir, target, is_external),
            )
        return result

    @staticmethod
    def _source_and_base_from_rel_part(rel_part: str) -> Tuple[str, PurePosixPath]:
        """Return the source part a ``.rels`` part describes and its base folder."""
        if rel_part == PACKAGE_REL_PART:
            return "", PurePosixPath("")
        if "/_rels/" in rel_part:
            folder, suffix = rel_part.split("/_rels/", 1)
            return f"{folder}/{suffix[:-5]}", PurePosixPath(folder)
        if rel_part.startswith("_rels/"):
            return rel_part[len("_rels/"):-5], PurePosixPath("")
        return rel_part[:-5], PurePosixPath(rel_part).parent

    @staticmethod
    def _resolve_target_path(base_dir: PurePosixPath, target: str, is_external: bool) -> Optional[str]:
        if not target:
            return None
        if is_external:
            return target
        if target.startswith("/"):
            return posixpath.normpath(target.lstrip("/"))
        return posixpath.normpath(base_dir.joinpath(target).as_posix())


def resolve_relationships(package: "DocxPackage", rels_part_path: str) -> Dict[str, str]:
    """Map relationship ids in ``rels_part_path`` to target part paths."""
    return Relationships.from_part(package, rels_part_path).targets()
