from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path
from typing import Dict, List, Optional, Union

from word_dates.exceptions.errors import (
    ArchiveError,
    CorruptArchiveError,
    EntryNotFoundError,
    MissingPartError,
)

logger = logging.getLogger(__name__)


class Container:
    """
    Read-only view of an OOXML package (a ZIP archive).

    Entries are decompressed one at a time on request. When an archive holds
    the same name twice, only the first entry is visible.
    Use as a context manager or call close() explicitly.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        try:
            self._zf = zipfile.ZipFile(self.path, "r")
        except zipfile.BadZipFile as exc:
            raise CorruptArchiveError(f"{self.path.name} is not a valid ZIP/OOXML file: {exc}") from exc
        except OSError as exc:
            raise ArchiveError(f"Cannot open {self.path}: {exc.strerror or exc}") from exc

        self._entries: Dict[str, zipfile.ZipInfo] = {}
        for info in self._zf.infolist():
            if info.filename in self._entries:
                logger.warning("Duplicate entry %s in %s ignored", info.filename, self.path)
                continue
            self._entries[info.filename] = info

    # ------------------------------------------------------------------ #
    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._zf.close()

    # ------------------------------------------------------------------ #
    def entry_names(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[zipfile.ZipInfo]:
        return list(self._entries.values())

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def info(self, name: str) -> Optional[zipfile.ZipInfo]:
        return self._entries.get(name)

    def read_entry(self, name: str) -> bytes:
        """Decompress and return a single entry. Raises EntryNotFoundError if absent."""
        info = self._entries.get(name)
        if info is None:
            raise EntryNotFoundError(name)
        try:
            return self._zf.read(info)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as exc:
            raise CorruptArchiveError(f"Entry {name} is corrupt: {exc}") from exc
        except NotImplementedError as exc:
            # unsupported compression method
            raise CorruptArchiveError(f"Entry {name} cannot be decompressed: {exc}") from exc
        except RuntimeError as exc:
            # zipfile raises RuntimeError for encrypted entries
            raise ArchiveError(f"Entry {name} cannot be read: {exc}") from exc
        except OSError as exc:
            raise ArchiveError(f"Cannot read {name} from {self.path}: {exc}") from exc

    def read_required(self, name: str) -> bytes:
        """Read a mandatory part; absence is a hard failure (MissingPartError)."""
        if name not in self._entries:
            raise MissingPartError(name)
        return self.read_entry(name)

    def read_optional(self, name: str) -> Optional[bytes]:
        """Read an optional part; returns None if the package does not contain it."""
        if name not in self._entries:
            logger.debug("Optional part %s not present in %s", name, self.path)
            return None
        return self.read_entry(name)


def open_container(path: Union[str, Path]) -> Container:
    """Open *path* read-only. Raises ArchiveError / CorruptArchiveError."""
    return Container(path)
