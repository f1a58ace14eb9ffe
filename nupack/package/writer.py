# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Sequential in-memory zip writer.

The writer is a thin wrapper over `zipfile` with one rule on top: every entry
is deflated, with a fixed timestamp and fixed attributes, so that the same
entries in the same order always produce the same archive bytes (given the
same zlib build).

Usage:
    with ArchiveWriter() as writer:
        writer.start_entry("foo.nuspec")
        writer.write(manifest)
        writer.end_entry()
        buf = writer.finish()

Leaving the `with` block without calling finish() (including by an
exception) discards the buffer, so a half-written archive never escapes.
"""

import io
import logging
import os
import zipfile
from types import TracebackType
from typing import Optional, Union

from nupack.logging.logger import get_logger
from nupack.package.parts import InvalidPartNameError, normalize_part_name

_logger: logging.Logger = get_logger(__name__)

COMPRESSION: int = zipfile.ZIP_DEFLATED

# Earliest timestamp a zip entry can hold. Using it for every entry keeps
# the output independent of when it was built.
FIXED_DATE_TIME: tuple[int, int, int, int, int, int] = (1980, 1, 1, 0, 0, 0)

# MS-DOS creator with no extra attributes, regardless of the host OS.
_CREATE_SYSTEM = 0

# Errors zipfile raises for I/O and structural problems mid-write.
_ZIP_FAULTS = (OSError, ValueError, RuntimeError, zipfile.LargeZipFile)


class ArchiveWriterError(Exception):
    """Raised when an entry can't be started, written, or the archive can't be finalized."""


class ArchiveWriter:
    """Builds a deflated zip archive in memory, one entry at a time."""

    def __init__(self) -> None:
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, mode="w", compression=COMPRESSION)
        self._entry: Optional[io.BufferedIOBase] = None
        self._entry_name: Optional[str] = None
        self._names: list[str] = []
        self._state = "open"

    def __enter__(self) -> "ArchiveWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._state != "finished":
            self.discard()

    @property
    def names(self) -> list[str]:
        """Entry names started so far, in order."""
        return list(self._names)

    def _ensure_open(self) -> None:
        if self._state != "open":
            raise ArchiveWriterError(f"Archive writer is {self._state}, no further writes allowed")

    def end_entry(self) -> None:
        """
        Finalize the current entry, if one is open.

        Raises:
            ArchiveWriterError: If the entry's trailing data can't be written.
        """
        self._ensure_open()
        if self._entry is None:
            return
        entry, name = self._entry, self._entry_name
        self._entry = None
        self._entry_name = None
        try:
            entry.close()
        except _ZIP_FAULTS as err:
            self._state = "broken"
            raise ArchiveWriterError(f"Failed to finalize entry '{name}': {err}") from err

    def start_entry(
        self,
        path: Union[str, os.PathLike],
        compression: int = COMPRESSION,
        size_hint: int = 0,
    ) -> str:
        """
        Finalize the current entry (if any) and begin a new one.

        `size_hint` is the expected uncompressed size. Entries that may pass
        the 2 GiB zip limit need it up front so zip64 headers get reserved.

        Returns:
            The normalized, forward-slash part name the entry was written under.

        Raises:
            ArchiveWriterError: If the writer is finished/broken, the compression
                isn't the archive's fixed method, the path isn't a valid part
                name, the name is already taken, or the previous entry failed
                to finalize.
        """
        self._ensure_open()

        if compression != COMPRESSION:
            raise ArchiveWriterError(
                f"Unsupported compression method {compression}; every entry is deflated"
            )

        try:
            name = normalize_part_name(path)
        except InvalidPartNameError as err:
            raise ArchiveWriterError(f"Invalid entry path '{os.fspath(path)}': {err}") from err

        if name in self._names:
            raise ArchiveWriterError(f"Duplicate entry '{name}'")

        self.end_entry()

        info = zipfile.ZipInfo(name, date_time=FIXED_DATE_TIME)
        info.compress_type = compression
        info.create_system = _CREATE_SYSTEM
        info.external_attr = 0
        info.file_size = max(size_hint, 0)

        try:
            self._entry = self._zip.open(info, mode="w")
        except _ZIP_FAULTS as err:
            self._state = "broken"
            raise ArchiveWriterError(f"Failed to start entry '{name}': {err}") from err

        self._entry_name = name
        self._names.append(name)
        return name

    def write(self, data: bytes) -> None:
        """Append bytes to the current entry."""
        self._ensure_open()
        if self._entry is None:
            raise ArchiveWriterError("No entry started; call start_entry() first")
        try:
            self._entry.write(data)
        except _ZIP_FAULTS as err:
            self._state = "broken"
            raise ArchiveWriterError(f"Failed to write entry '{self._entry_name}': {err}") from err

    def finish(self) -> bytes:
        """
        Finalize the last entry and the central directory.

        Returns:
            The complete archive bytes.
        """
        self._ensure_open()
        self.end_entry()
        try:
            self._zip.close()
        except _ZIP_FAULTS as err:
            self._state = "broken"
            raise ArchiveWriterError(f"Failed to finalize archive: {err}") from err

        self._state = "finished"
        return self._buffer.getvalue()

    def discard(self) -> None:
        """Throw away everything written so far. Safe to call more than once."""
        if self._state == "discarded":
            return
        self._state = "discarded"

        # The caller is already unwinding from a failure; a secondary error
        # while tearing down only gets logged.
        entry, self._entry = self._entry, None
        try:
            if entry is not None:
                entry.close()
            self._zip.close()
        except _ZIP_FAULTS as err:
            _logger.warning("Error while discarding archive", extra={"error": str(err)})
        finally:
            self._buffer.close()
