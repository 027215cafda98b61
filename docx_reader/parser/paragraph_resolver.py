"""Resolve a paragraph's final attributes from direct, style and numbering sources.

Two indentation tracks are kept apart:

* generic indentation (``indent``, ``hanging``, ``firstLine``) for paragraphs
  without numbering: direct ``w:ind`` first, then the style chain;
* list indentation (``listIndentLeft``, ``listIndentHanging``) for numbered
  paragraphs: direct ``w:ind``, then the style chain, then the numbering level.

Each field walks its cascade on its own, so a style that only sets
``firstLine`` never implies a left indent. An explicit ``"0"`` is a value
and beats any inherited non-zero one.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from docx_reader.model.elements import Indentation, NumberingReference, ParagraphProperties
from docx_reader.model.numbering_model import NumberingCatalog, NumberingLevel
from docx_reader.model.style_model import StylesCatalog
from docx_reader.utils.logger import get_logger

LOGGER = get_logger(__name__)

BLOCK_PARAGRAPH = "paragraph"
BLOCK_HEADING = "heading"

# outlineLvl 0-8 are headings; 9 marks body text.
MAX_HEADING_OUTLINE_LEVEL = 8

HEADING_NAME_PATTERN = re.compile(r"^heading\s*([1-9])$", re.IGNORECASE)

# model attribute -> Indentation field
GENERIC_INDENT_ATTRS = (
    ("indent", "left"),
    ("hanging", "hanging"),
    ("firstLine", "first_line"),
)
LIST_INDENT_ATTRS = (
    ("listIndentLeft", "left"),
    ("listIndentHanging", "hanging"),
)


@dataclass(slots=True)
class ResolvedFormat:
    """Outcome of resolving one paragraph."""

    block_type: str
    attrs: Dict[str, object] = field(default_factory=dict)
    numbering: Optional[NumberingReference] = None
    numbering_level: Optional[NumberingLevel] = None


class ParagraphFormatResolver:
    """Apply the precedence rules for one paragraph at a time.

    Holds read-only references to the catalogs of a single document and no
    other state, so one instance can serve every paragraph of that document.
    """

    def __init__(self, styles: StylesCatalog, numbering: NumberingCatalog) -> None:
        self._styles = styles
        self._numbering = numbering

    def resolve_properties(self, properties: ParagraphProperties) -> ResolvedFormat:
        """Resolve a parsed ``w:pPr`` including its passthrough attributes."""
        resolved = self.resolve(
            direct_indent=properties.indent,
            style_id=properties.style_id,
            num_reference=properties.numbering,
            outline_level=properties.outline_level,
        )
        attrs: Dict[str, object] = dict(properties.extras)
        if properties.style_id:
            attrs["styleId"] = properties.style_id
        attrs.update(resolved.attrs)
        resolved.attrs = attrs
        return resolved

    def resolve(
        self,
        direct_indent: Optional[Indentation] = None,
        style_id: Optional[str] = None,
        num_reference: Optional[NumberingReference] = None,
        *,
        outline_level: Optional[int] = None,
    ) -> ResolvedFormat:
        attrs: Dict[str, object] = {}
        level: Optional[NumberingLevel] = None

        if num_reference is None:
            self._resolve_generic_indent(attrs, direct_indent, style_id)
        else:
            level = self._numbering.resolve_level(num_reference.num_id, num_reference.ilvl)
            if level is None:
                LOGGER.debug(
                    "No numbering definition for numId=%s ilvl=%s",
                    num_reference.num_id,
                    num_reference.ilvl,
                )
            self._resolve_list_descriptor(attrs, num_reference, level)
            self._resolve_list_indent(attrs, direct_indent, style_id, level)

        heading_level = self.resolve_heading_level(style_id, outline_level)
        if heading_level is not None:
            attrs["level"] = heading_level
            block_type = BLOCK_HEADING
        else:
            block_type = BLOCK_PARAGRAPH

        return ResolvedFormat(
            block_type=block_type,
            attrs=attrs,
            numbering=num_reference,
            numbering_level=level,
        )

    # ------------------------------------------------------------------
    # Track A
    def _resolve_generic_indent(
        self,
        attrs: Dict[str, object],
        direct_indent: Optional[Indentation],
        style_id: Optional[str],
    ) -> None:
        for attr, field_name in GENERIC_INDENT_ATTRS:
            value = self._direct_or_style(direct_indent, style_id, field_name)
            if value is not None:
                attrs[attr] = value

    # ------------------------------------------------------------------
    # Track B
    def _resolve_list_descriptor(
        self,
        attrs: Dict[str, object],
        num_reference: NumberingReference,
        level: Optional[NumberingLevel],
    ) -> None:
        attrs["listNumId"] = num_reference.num_id
        attrs["listIlvl"] = num_reference.ilvl
        if level is None:
            return
        attrs["listNumFmt"] = level.num_format
        if level.level_text is not None:
            attrs["listLvlText"] = level.level_text
        attrs["listIsOrdered"] = level.is_ordered
        attrs["listStart"] = level.start

    def _resolve_list_indent(
        self,
        attrs: Dict[str, object],
        direct_indent: Optional[Indentation],
        style_id: Optional[str],
        level: Optional[NumberingLevel],
    ) -> None:
        for attr, field_name in LIST_INDENT_ATTRS:
            value = self._direct_or_style(direct_indent, style_id, field_name)
            if value is None and level is not None and level.indent is not None:
                value = level.indent.get(field_name)
            if value is not None:
                attrs[attr] = value

    # ------------------------------------------------------------------
    def _direct_or_style(
        self,
        direct_indent: Optional[Indentation],
        style_id: Optional[str],
        field_name: str,
    ) -> Optional[str]:
        if direct_indent is not None:
            value = direct_indent.get(field_name)
            if value is not None:
                return value
        value = self._styles.resolve_effective(style_id, field_name)
        return None if value is None else str(value)

    def resolve_heading_level(
        self, style_id: Optional[str], direct_outline_level: Optional[int] = None
    ) -> Optional[int]:
        """Return the one-based heading level, or ``None`` for body paragraphs."""
        outline = direct_outline_level
        if outline is None:
            resolved = self._styles.resolve_effective(style_id, "outline_level")
            outline = resolved if isinstance(resolved, int) else None
        if outline is not None:
            if 0 <= outline <= MAX_HEADING_OUTLINE_LEVEL:
                return outline + 1
            return None
        return self._heading_level_from_name(style_id)

    def _heading_level_from_name(self, style_id: Optional[str]) -> Optional[int]:
        if not style_id:
            return None
        style = self._styles.get(style_id)
        candidates = [style.name] if style is not None and style.name else []
        candidates.append(style_id)
        for candidate in candidates:
            match = HEADING_NAME_PATTERN.match(candidate.strip())
            if match:
                return int(match.group(1))
        return None
