# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""File backend.

Handles wrap a buffered native file handle. Opening fails fast: a missing or
unopenable path raises :class:`~easyio.errors.ResourceOpenError` and never
produces a handle.

Example usage::

    from easyio import file

    file.write("notes.txt", "first\\nsecond\\n")
    for line in file.reader("notes.txt"):
        print(line)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, ClassVar, override

from ._fatal import fatal
from ._handles import BufferedReadableHandle, HandleState, WritableHandle
from .errors import ResourceOpenError, WriteFailedError
from .logging import StructuredLogger, get_logger

__all__ = [
    "FileReader",
    "FileWriter",
    "read",
    "reader",
    "write",
    "writer",
]

type StrPath = str | os.PathLike[str]


def reader(path: StrPath) -> FileReader:
    """Open the existing file at ``path`` for reading.

    Raises:
        ResourceOpenError: If there is no file at ``path`` or it cannot be
            opened.
    """
    return FileReader.open(path)


def writer(path: StrPath) -> FileWriter:
    """Create or truncate the file at ``path`` for writing.

    Raises:
        ResourceOpenError: If the file cannot be created.
    """
    return FileWriter.open(path)


def read(path: StrPath) -> str:
    """Read and return the whole file at ``path``."""
    with reader(path) as handle:
        return handle.read_all()


def write(path: StrPath, text: str) -> None:
    """Replace the contents of the file at ``path`` with ``text``."""
    with writer(path) as handle:
        handle.write(text)


@dataclass(slots=True)
class FileReader(BufferedReadableHandle):
    """Readable backed by a buffered native file handle."""

    _logger: ClassVar[StructuredLogger] = get_logger(
        __name__, context={"component": "file_reader"}
    )

    _path: str
    _handle: BinaryIO
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @classmethod
    def open(cls, path: StrPath) -> FileReader:
        """Open ``path`` for buffered binary reading."""
        resolved = os.fspath(path)
        try:
            handle = Path(resolved).open("rb")
        except OSError as exc:
            raise fatal(
                cls._logger,
                ResourceOpenError("couldn't open file"),
                event="file_open_failed",
                context={"path": resolved, "mode": "read"},
            ) from exc
        cls._logger.debug(
            "Opened file for reading.",
            event="file_opened",
            context={"path": resolved, "mode": "read"},
        )
        return cls(_path=resolved, _handle=handle)

    @property
    def path(self) -> str:
        """Path being read."""
        return self._path

    @override
    def _release(self) -> None:
        self._handle.close()
        self._logger.debug(
            "Closed file.", event="file_closed", context={"path": self._path}
        )


@dataclass(slots=True)
class FileWriter(WritableHandle):
    """Writable backed by a buffered native file handle.

    Output is buffered; :meth:`close` (or leaving a ``with`` block) flushes it.
    """

    _logger: ClassVar[StructuredLogger] = get_logger(
        __name__, context={"component": "file_writer"}
    )

    _path: str
    _handle: BinaryIO
    _bytes_written: int = field(default=0, init=False)
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @classmethod
    def open(cls, path: StrPath) -> FileWriter:
        """Create or truncate ``path`` for buffered binary writing."""
        resolved = os.fspath(path)
        try:
            handle = Path(resolved).open("wb")
        except OSError as exc:
            raise fatal(
                cls._logger,
                ResourceOpenError("couldn't create file"),
                event="file_open_failed",
                context={"path": resolved, "mode": "write"},
            ) from exc
        cls._logger.debug(
            "Opened file for writing.",
            event="file_opened",
            context={"path": resolved, "mode": "write"},
        )
        return cls(_path=resolved, _handle=handle)

    @property
    def path(self) -> str:
        """Path being written."""
        return self._path

    @property
    def bytes_written(self) -> int:
        """Total bytes written so far."""
        return self._bytes_written

    @override
    def _write_text(self, text: str) -> None:
        _ = self._write_raw(text.encode("utf-8"))

    @override
    def _write_raw(self, data: bytes) -> int:
        try:
            written = self._handle.write(data)
        except OSError as exc:
            raise fatal(
                self._logger,
                WriteFailedError("failed to write to file"),
                event="file_write_failed",
                context={"path": self._path},
            ) from exc
        self._bytes_written += written
        return written

    @override
    def _flush(self) -> None:
        try:
            self._handle.flush()
        except OSError as exc:
            raise fatal(
                self._logger,
                WriteFailedError("failed to flush file"),
                event="file_flush_failed",
                context={"path": self._path},
            ) from exc

    @override
    def _release(self) -> None:
        try:
            self._handle.close()
        except OSError as exc:
            raise fatal(
                self._logger,
                WriteFailedError("failed to flush file"),
                event="file_flush_failed",
                context={"path": self._path},
            ) from exc
        self._logger.debug(
            "Closed file.",
            event="file_closed",
            context={"path": self._path, "bytes_written": self._bytes_written},
        )
