"""Style model captures Word style definitions and their inheritance chain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Union

from docx_reader.errors import StyleCycleError
from docx_reader.model.elements import INDENT_FIELDS, Indentation
from docx_reader.utils.logger import get_logger

LOGGER = get_logger(__name__)

Selector = Union[str, Callable[["StyleDefinition"], Optional[object]]]


@dataclass(frozen=True, slots=True)
class StyleDefinition:
    """A single ``w:style`` entry as written, before any inheritance is applied."""

    style_id: str
    style_type: str
    name: Optional[str] = None
    based_on: Optional[str] = None
    paragraph_indent: Optional[Indentation] = None
    outline_level: Optional[int] = None

    def lookup(self, field_name: str) -> Optional[object]:
        """Return the value this style itself defines for ``field_name``."""
        if field_name in INDENT_FIELDS:
            if self.paragraph_indent is None:
                return None
            return self.paragraph_indent.get(field_name)
        if field_name == "outline_level":
            return self.outline_level
        raise KeyError(f"Unknown style property: {field_name}")


class StylesCatalog:
    """Collection of style definitions keyed by identifier.

    Styles are plain records; inherited values are found by walking the
    ``basedOn`` chain on demand rather than by merging definitions up front.
    """

    def __init__(self, styles: Optional[Mapping[str, StyleDefinition]] = None):
        self._styles: Dict[str, StyleDefinition] = dict(styles or {})

    def __len__(self) -> int:
        return len(self._styles)

    def get(self, style_id: Optional[str]) -> Optional[StyleDefinition]:
        """Return the style definition given its identifier."""
        if style_id is None:
            return None
        return self._styles.get(style_id)

    def iter_chain(self, style_id: Optional[str]) -> Iterator[StyleDefinition]:
        """Yield ``style_id`` and then each ancestor along ``basedOn``.

        The walk stops silently at an unknown id and raises
        :class:`StyleCycleError` when an id comes round a second time.
        """
        visited: List[str] = []
        current = style_id
        while current is not None:
            if current in visited:
                raise StyleCycleError(current, visited)
            style = self._styles.get(current)
            if style is None:
                if visited:
                    LOGGER.debug("Style %s is based on unknown style %s", visited[-1], current)
                return
            visited.append(current)
            yield style
            current = style.based_on

    def resolve_effective(self, style_id: Optional[str], selector: Selector) -> Optional[object]:
        """Return the first value of ``selector`` defined along the style chain.

        ``selector`` is either a property name understood by
        :meth:`StyleDefinition.lookup` (``"left"``, ``"hanging"``,
        ``"first_line"``, ``"outline_level"``) or a callable taking a
        definition. ``None`` means no ancestor defines the property; a
        ``basedOn`` cycle also yields ``None`` and is logged as a warning.
        """
        if isinstance(selector, str):
            field_name = selector
            pick: Callable[[StyleDefinition], Optional[object]] = lambda style: style.lookup(field_name)
        else:
            pick = selector
        try:
            for style in self.iter_chain(style_id):
                value = pick(style)
                if value is not None:
                    return value
        except StyleCycleError as exc:
            LOGGER.warning("%s; treating property as unresolved", exc)
        return None
