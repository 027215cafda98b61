"""Exception hierarchy raised while reading DOCX packages."""
from __future__ import annotations

from typing import Optional, Sequence


class DocxReaderError(Exception):
    """Base class for every error raised by the reader."""

    def __init__(self, message: str, part_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.part_name = part_name

    def __str__(self) -> str:
        if self.part_name:
            return f"[{self.part_name}] {super().__str__()}"
        return super().__str__()


class PackageError(DocxReaderError):
    """The input is not a readable ZIP container."""


class MissingPartError(PackageError):
    """A part required for structural parsing is absent from the package."""


class ParseError(DocxReaderError):
    """A package part does not contain well-formed XML."""


class StyleCycleError(DocxReaderError):
    """A ``basedOn`` chain revisits a style it has already passed through."""

    def __init__(self, style_id: str, chain: Sequence[str]) -> None:
        self.style_id = style_id
        self.chain = tuple(chain)
        path = " -> ".join((*self.chain, style_id))
        super().__init__(f"Style inheritance cycle detected: {path}")
