"""word_dates feature exceptions.

Every error is raised at its origin and propagates unchanged up to
:mod:`word_dates.logic.metadata_api`. Messages are short enough to be shown
to the user as-is.
"""
from __future__ import annotations

from typing import Optional


class WordDatesError(Exception):
    """Base exception for the word_dates feature."""


# --------------------------------------------------------------------------- #
#  Archive                                                                    #
# --------------------------------------------------------------------------- #
class ArchiveError(WordDatesError):
    """Raised when the container cannot be opened or read."""


class CorruptArchiveError(ArchiveError):
    """Raised on malformed central-directory, local-header or entry data."""


class EntryNotFoundError(ArchiveError):
    """Raised when a requested entry is not part of the container."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{name} not found in archive.")
        self.name = name


class MissingPartError(EntryNotFoundError):
    """Raised when a mandatory part (docProps/core.xml) is absent."""


# --------------------------------------------------------------------------- #
#  XML / Extraction                                                           #
# --------------------------------------------------------------------------- #
class XmlParseError(WordDatesError):
    """Raised when a part does not contain well-formed XML."""

    def __init__(
        self,
        message: str,
        *,
        part: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        where = f" in {part}" if part else ""
        pos = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"XML parsing error{where}{pos}: {message}")
        self.part = part
        self.line = line
        self.column = column


class ExtractError(WordDatesError):
    """Raised when metadata cannot be extracted from a well-formed part."""


class MissingFieldError(ExtractError):
    """Raised when core.xml lacks dcterms:created or dcterms:modified text."""


# --------------------------------------------------------------------------- #
#  Validation / Commit                                                        #
# --------------------------------------------------------------------------- #
class ValidationError(WordDatesError):
    """Raised when a supplied date string is not RFC 3339."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class CommitError(WordDatesError):
    """Raised when the temporary archive cannot be written or renamed."""
