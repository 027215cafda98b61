"""Running list counters and pre-rendered list markers."""
from __future__ import annotations

import re
from typing import Callable, Dict, Optional

from docx_reader.model.numbering_model import NumberingCatalog, NumberingLevel

HEAVENLY_STEMS = "甲乙丙丁戊己庚辛壬癸"

LEVEL_PLACEHOLDER = re.compile(r"%([1-9])")

_ROMAN_NUMERALS = (
    (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
    (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
    (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
)


def to_roman(value: int) -> str:
    if value <= 0:
        return str(value)
    result = []
    for amount, numeral in _ROMAN_NUMERALS:
        while value >= amount:
            result.append(numeral)
            value -= amount
    return "".join(result)


def to_letters(value: int) -> str:
    """Word's letter sequence: a..z, then aa..zz, aaa..zzz and so on."""
    if value <= 0:
        return str(value)
    letter = chr(ord("a") + (value - 1) % 26)
    return letter * ((value - 1) // 26 + 1)


def to_full_width(value: int) -> str:
    return "".join(chr(0xFF10 + int(digit)) if digit.isdigit() else digit for digit in str(value))


def to_heavenly_stem(value: int) -> str:
    if value <= 0:
        return str(value)
    return HEAVENLY_STEMS[(value - 1) % len(HEAVENLY_STEMS)]


FORMATTERS: Dict[str, Callable[[int], str]] = {
    "decimal": str,
    "decimalZero": lambda value: f"{value:02d}",
    "decimalFullWidth": to_full_width,
    "upperRoman": lambda value: to_roman(value).upper(),
    "lowerRoman": to_roman,
    "upperLetter": lambda value: to_letters(value).upper(),
    "lowerLetter": to_letters,
    "ideographTraditional": to_heavenly_stem,
}


def format_counter(num_format: str, value: int) -> str:
    """Render ``value`` in ``num_format``; unknown formats fall back to decimal."""
    if num_format == "none":
        return ""
    return FORMATTERS.get(num_format, str)(value)


class ListCounter:
    """Track list counters across a single document walk.

    Counters are kept per ``numId`` and ``ilvl``. A list keeps counting when a
    non-list paragraph interrupts it; returning to a shallower level restarts
    the deeper ones.
    """

    def __init__(self, numbering: NumberingCatalog) -> None:
        self._numbering = numbering
        self._counters: Dict[str, Dict[int, int]] = {}

    def advance(self, num_id: str, ilvl: int, level: NumberingLevel) -> int:
        """Count one more item at ``ilvl`` and return its value."""
        levels = self._counters.setdefault(num_id, {})
        for deeper in [key for key in levels if key > ilvl]:
            del levels[deeper]
        if ilvl in levels:
            levels[ilvl] += 1
        else:
            levels[ilvl] = level.start
        return levels[ilvl]

    def marker_text(self, num_id: str, level: NumberingLevel) -> str:
        """Fill ``lvlText`` placeholders using the current counters of ``num_id``."""
        if level.num_format == "bullet":
            return level.level_text or ""
        if level.num_format == "none" or not level.level_text:
            return ""
        counters = self._counters.get(num_id, {})

        def substitute(match: "re.Match[str]") -> str:
            ilvl = int(match.group(1)) - 1
            if ilvl == level.ilvl:
                target: Optional[NumberingLevel] = level
            else:
                target = self._numbering.resolve_level(num_id, ilvl)
            value = counters.get(ilvl)
            if value is None:
                value = target.start if target is not None else 1
            num_format = target.num_format if target is not None else level.num_format
            return format_counter(num_format, value)

        return LEVEL_PLACEHOLDER.sub(substitute, level.level_text)
