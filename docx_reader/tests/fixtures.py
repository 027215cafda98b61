"""In-memory DOCX packages assembled from literal XML for the test suite."""
from __future__ import annotations

import io
import zipfile
from typing import Dict, Iterable, Optional

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

CONTENT_TYPES_XML = XML_DECLARATION + """<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
</Types>
"""


def relationships_xml(entries: Iterable[tuple]) -> str:
    """Render ``(rId, type suffix, target)`` tuples as a ``.rels`` part."""
    rows = "\n".join(
        f'  <Relationship Id="{r_id}" Type="{REL_NS}/{rel_type}" Target="{target}"/>'
        for r_id, rel_type, target in entries
    )
    return (
        XML_DECLARATION
        + '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">\n'
        + rows
        + "\n</Relationships>\n"
    )


def document_xml(body: str) -> str:
    return XML_DECLARATION + f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'


def styles_xml(styles: str) -> str:
    return XML_DECLARATION + f'<w:styles xmlns:w="{W_NS}">{styles}</w:styles>'


def numbering_xml(definitions: str) -> str:
    return XML_DECLARATION + f'<w:numbering xmlns:w="{W_NS}">{definitions}</w:numbering>'


def build_parts(
    body: str,
    styles: Optional[str] = None,
    numbering: Optional[str] = None,
    *,
    styles_target: str = "styles.xml",
    numbering_target: str = "numbering.xml",
) -> Dict[str, bytes]:
    """Return the part mapping of a minimal package wiring in the optional parts."""
    document_rels = []
    parts: Dict[str, str] = {
        "[Content_Types].xml": CONTENT_TYPES_XML,
        "_rels/.rels": relationships_xml([("rId1", "officeDocument", "word/document.xml")]),
        "word/document.xml": document_xml(body),
    }
    if styles is not None:
        document_rels.append(("rId1", "styles", styles_target))
        parts[f"word/{styles_target}"] = styles_xml(styles)
    if numbering is not None:
        document_rels.append(("rId2", "numbering", numbering_target))
        parts[f"word/{numbering_target}"] = numbering_xml(numbering)
    parts["word/_rels/document.xml.rels"] = relationships_xml(document_rels)
    return {name: payload.encode("utf-8") for name, payload in parts.items()}


def zip_parts(parts: Dict[str, bytes], order: Optional[Iterable[str]] = None) -> bytes:
    """Zip ``parts`` in the given member order (default: mapping order)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name in order if order is not None else parts:
            archive.writestr(name, parts[name])
    return buffer.getvalue()


def build_docx(body: str, styles: Optional[str] = None, numbering: Optional[str] = None, **kwargs) -> bytes:
    return zip_parts(build_parts(body, styles, numbering, **kwargs))
