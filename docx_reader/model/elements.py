"""In-memory representation of parsed paragraph properties and output blocks."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

INDENT_FIELDS = ("left", "hanging", "first_line")

AttributeValue = object


@dataclass(frozen=True, slots=True)
class Indentation:
    """Indentation read from a ``w:ind`` element.

    Every field is tri-state: ``None`` means the attribute was absent,
    while ``"0"`` is an explicit zero that still overrides inherited values.
    Values are kept as the raw twip strings found in the XML.
    """

    left: Optional[str] = None
    hanging: Optional[str] = None
    first_line: Optional[str] = None

    def get(self, name: str) -> Optional[str]:
        if name not in INDENT_FIELDS:
            raise KeyError(f"Unknown indentation field: {name}")
        return getattr(self, name)

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in INDENT_FIELDS)

    def merged_with(self, override: Optional["Indentation"]) -> "Indentation":
        """Return a copy where every field present in ``override`` wins."""
        if override is None:
            return self
        changes = {
            name: getattr(override, name)
            for name in INDENT_FIELDS
            if getattr(override, name) is not None
        }
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class NumberingReference:
    """``w:numPr`` reference carried by a list paragraph."""

    num_id: str
    ilvl: int = 0


@dataclass(slots=True)
class ParagraphProperties:
    """Direct (inline) properties read from a paragraph's ``w:pPr``."""

    style_id: Optional[str] = None
    indent: Optional[Indentation] = None
    numbering: Optional[NumberingReference] = None
    outline_level: Optional[int] = None
    extras: Dict[str, AttributeValue] = field(default_factory=dict)


@dataclass(slots=True)
class BlockNode:
    """Output unit: one paragraph or heading with its resolved attributes."""

    type: str
    attrs: Dict[str, AttributeValue] = field(default_factory=dict)
    text: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.type, "attrs": dict(self.attrs), "text": self.text}


@dataclass(slots=True)
class DocumentTree:
    """Flat, document-ordered sequence of block nodes."""

    content: List[BlockNode] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"content": [block.to_dict() for block in self.content]}

    @property
    def text(self) -> str:
        """Plain text of the whole document, one block per line."""
        return "\n".join(block.text for block in self.content)
