"""
Entry points for the presentation layer (form, file dialog, ...).

    load(path)                                    -> DocumentDates
    save(path, created, modified, last_printed)   -> None

Both raise a WordDatesError subclass on failure; describe_error() turns any
of them into the one-line message shown to the user.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from word_dates.exceptions.errors import (
    ArchiveError,
    CommitError,
    ExtractError,
    ValidationError,
    WordDatesError,
    XmlParseError,
)
from word_dates.logic.metadata_extractor import extract_file
from word_dates.logic.metadata_patcher import patch
from word_dates.models.document_dates import DocumentDates

logger = logging.getLogger(__name__)


def load(path: Union[str, Path]) -> DocumentDates:
    dates = extract_file(path)
    logger.info("Loaded metadata from %s", path)
    return dates


def save(
    path: Union[str, Path],
    created: str,
    modified: str,
    last_printed: str = "",
) -> None:
    patch(path, created, modified, last_printed)


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        return str(exc)
    if isinstance(exc, CommitError):
        return f"Error saving file: {exc}"
    if isinstance(exc, (ArchiveError, XmlParseError, ExtractError)):
        return f"Error: {exc}"
    if isinstance(exc, WordDatesError):
        return str(exc)
    return f"Unexpected error: {exc}"
