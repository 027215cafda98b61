"""
Text normalization for extracted paragraph content.

Only applied when the reader is configured with ``normalize_text=True``;
otherwise paragraph text is returned exactly as the runs spell it.
"""
from __future__ import annotations

import re


class TextNormalizer:
    """Normalizes text collected from WordprocessingML runs."""

    SPECIAL_CHARS = {
        '\u00a0': ' ',      # Non-breaking space
        '\u2007': ' ',      # Figure space
        '\u2009': ' ',      # Thin space
        '\u200b': '',       # Zero-width space
        '\u200c': '',       # Zero-width non-joiner
        '\u200d': '',       # Zero-width joiner
        '\ufeff': '',       # Byte order mark
        '\u00ad': '',       # Soft hyphen
        '\u2011': '-',      # Non-breaking hyphen
        '\u2018': "'",
        '\u2019': "'",
        '\u201c': '"',
        '\u201d': '"',
    }

    WHITESPACE_PATTERN = re.compile(r"\s+")

    # Tabs, newlines and carriage returns survive.
    CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

    def __init__(self, preserve_whitespace: bool = False) -> None:
        self.preserve_whitespace = preserve_whitespace

    def normalize_text(self, text: str) -> str:
        if not text:
            return text
        for original, replacement in self.SPECIAL_CHARS.items():
            text = text.replace(original, replacement)
        text = self.CONTROL_CHARS_PATTERN.sub("", text)
        if not self.preserve_whitespace:
            text = self.WHITESPACE_PATTERN.sub(" ", text).strip()
        return text
