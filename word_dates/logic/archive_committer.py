"""
Rebuild an OOXML package with replaced parts and swap it in atomically.

The new archive is written to a temporary file next to the original (same
directory, hence same filesystem), closed so the central directory is on
disk, and then moved over the original with os.replace(). Until that rename
the original file is never opened for writing.
"""
from __future__ import annotations

import copy
import logging
import os
import shutil
import tempfile
import time
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional, Union

from core.config.config_service import config_service
from word_dates.exceptions.errors import CommitError, WordDatesError
from word_dates.logic.archive_reader import Container, open_container

logger = logging.getLogger(__name__)


@contextmanager
def temporary_sibling(
    target: Path,
    *,
    suffix: Optional[str] = None,
    keep_on_failure: bool = False,
) -> Iterator[Path]:
    """
    Yield a fresh empty file in target's directory.
    If the block raises, the file is removed (or kept for diagnosis).
    """
    if suffix is None:
        suffix = config_service.writer.temp_suffix
    try:
        fd, name = tempfile.mkstemp(prefix=f".{target.stem}.", suffix=suffix, dir=target.parent)
    except OSError as exc:
        raise CommitError(f"Cannot create temporary file next to {target}: {exc}") from exc
    os.close(fd)
    tmp = Path(name)

    try:
        yield tmp
    except BaseException:
        if keep_on_failure:
            logger.warning("Temporary file kept after failure: %s", tmp)
        else:
            try:
                tmp.unlink()
            except FileNotFoundError:
                pass
        raise


def _new_entry(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=time.localtime(time.time())[:6])
    info.compress_type = zipfile.ZIP_DEFLATED
    return info


def _write_archive(
    source: Container,
    tmp: Path,
    replacement_parts: Mapping[str, bytes],
) -> None:
    try:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED) as zout:
            for info in source.entries():
                if info.filename in replacement_parts:
                    continue
                data = source.read_entry(info.filename)
                zout.writestr(copy.copy(info), data)

            for name, data in replacement_parts.items():
                # Reuse the old entry header (method, attributes) where there is one
                original = source.info(name)
                info = copy.copy(original) if original is not None else _new_entry(name)
                zout.writestr(info, data)
    except WordDatesError:
        raise
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
        raise CommitError(f"Failed to write temporary archive: {exc}") from exc


def commit(
    source_path: Union[str, Path],
    replacement_parts: Mapping[str, bytes],
    *,
    keep_temp_on_failure: Optional[bool] = None,
) -> None:
    """
    Copy every entry of *source_path* except the keys of *replacement_parts*,
    add the replacements, and atomically replace *source_path* with the result.

    On failure the original file is untouched and the error is raised:
    ArchiveError if the source cannot be read, CommitError otherwise.
    """
    # Follow symlinks so the rename replaces the document, not the link
    path = Path(source_path).resolve()
    if keep_temp_on_failure is None:
        keep_temp_on_failure = config_service.writer.keep_temp_on_failure

    with open_container(path) as source:
        with temporary_sibling(path, keep_on_failure=keep_temp_on_failure) as tmp:
            _write_archive(source, tmp, replacement_parts)
            source.close()
            try:
                shutil.copymode(path, tmp)
                os.replace(tmp, path)
            except OSError as exc:
                raise CommitError(f"Failed to replace original file: {exc}") from exc

    logger.info(
        "Committed %s (%d part(s) replaced: %s)",
        path, len(replacement_parts), ", ".join(sorted(replacement_parts)),
    )
