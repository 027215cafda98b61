"""Numbering model captures list definitions extracted from numbering.xml."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from docx_reader.model.elements import Indentation

DEFAULT_NUM_FORMAT = "decimal"
DEFAULT_LEVEL_TEXT = "%1."
DEFAULT_START = 1

UNORDERED_FORMATS = frozenset({"bullet", "none"})


@dataclass(frozen=True, slots=True)
class NumberingLevel:
    """Defines numbering behavior for a specific indentation level."""

    ilvl: int
    num_format: str = DEFAULT_NUM_FORMAT
    level_text: Optional[str] = DEFAULT_LEVEL_TEXT
    start: int = DEFAULT_START
    indent: Optional[Indentation] = None

    @property
    def is_ordered(self) -> bool:
        return self.num_format not in UNORDERED_FORMATS


@dataclass(frozen=True, slots=True)
class NumberingLevelOverride:
    """Partial level carried by ``w:lvlOverride``.

    ``None`` fields are not overridden. ``defines_level`` is set when the
    override embeds its own ``w:lvl``, which lets it stand in for a level the
    abstract definition lacks.
    """

    ilvl: int
    num_format: Optional[str] = None
    level_text: Optional[str] = None
    start: Optional[int] = None
    indent: Optional[Indentation] = None
    defines_level: bool = False

    def apply_to(self, level: NumberingLevel) -> NumberingLevel:
        changes: Dict[str, object] = {}
        if self.num_format is not None:
            changes["num_format"] = self.num_format
        if self.level_text is not None:
            changes["level_text"] = self.level_text
        if self.start is not None:
            changes["start"] = self.start
        if self.indent is not None:
            base = level.indent or Indentation()
            changes["indent"] = base.merged_with(self.indent)
        return replace(level, **changes)

    def as_level(self) -> NumberingLevel:
        """Materialize the override for a level the abstract definition lacks."""
        return self.apply_to(NumberingLevel(ilvl=self.ilvl))


@dataclass(frozen=True, slots=True)
class AbstractNumberingDefinition:
    """Template describing multi-level numbering behavior."""

    abstract_id: str
    levels: Dict[int, NumberingLevel] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NumberingInstance:
    """Concrete numbering instance bound to an abstract definition."""

    num_id: str
    abstract_id: str
    level_overrides: Dict[int, NumberingLevelOverride] = field(default_factory=dict)


@dataclass(slots=True)
class NumberingCatalog:
    """Collection of abstract definitions and concrete numbering instances."""

    abstracts: Dict[str, AbstractNumberingDefinition] = field(default_factory=dict)
    instances: Dict[str, NumberingInstance] = field(default_factory=dict)

    def get_abstract(self, abstract_id: Optional[str]) -> Optional[AbstractNumberingDefinition]:
        if abstract_id is None:
            return None
        return self.abstracts.get(abstract_id)

    def get_instance(self, num_id: Optional[str]) -> Optional[NumberingInstance]:
        if num_id is None:
            return None
        return self.instances.get(num_id)

    def resolve_level(self, num_id: Optional[str], ilvl: int) -> Optional[NumberingLevel]:
        """Return the effective level ``ilvl`` of list ``num_id``.

        The abstract level is merged with the instance override for the same
        level, field by field. ``None`` means no numbering metadata exists for
        the reference; it is not an error.
        """
        instance = self.get_instance(num_id)
        if instance is None:
            return None
        abstract = self.get_abstract(instance.abstract_id)
        base = abstract.levels.get(ilvl) if abstract is not None else None
        override = instance.level_overrides.get(ilvl)
        if base is None:
            if override is None or not override.defines_level:
                return None
            return override.as_level()
        if override is None:
            return base
        return override.apply_to(base)
