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

"""In-memory string backend.

Resource-free readers and writers, handy as stand-ins for files or the
standard streams when testing code written against Readable/Writable::

    out = string.writer()
    report(string.reader("1\\n2\\n3"), out)
    assert out.getvalue() == "total: 6"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, override

from ._fatal import decode_utf8, fatal
from ._handles import HandleState, ReadableHandle, WritableHandle
from .errors import MalformedWriteError
from .logging import StructuredLogger, get_logger

__all__ = [
    "StringReader",
    "StringWriter",
    "reader",
    "writer",
]


def reader(text: str) -> StringReader:
    """Create a reader over ``text``."""
    return StringReader.from_text(text)


def writer() -> StringWriter:
    """Create an empty string writer."""
    return StringWriter.create()


@dataclass(slots=True)
class StringReader(ReadableHandle):
    """Readable view over a piece of text.

    The reader holds only a position into the text. Reading past the end
    yields empty results rather than failing, and ``read_all`` returns the
    unread remainder without moving the position.
    """

    _logger: ClassVar[StructuredLogger] = get_logger(
        __name__, context={"component": "string_reader"}
    )

    _data: bytes
    _position: int = 0
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @classmethod
    def from_text(cls, text: str) -> StringReader:
        """Create a reader positioned at the start of ``text``."""
        return cls(_data=text.encode("utf-8"))

    @property
    def position(self) -> int:
        """Byte offset of the next unread character."""
        return self._position

    @override
    def _read_all(self) -> str:
        return decode_utf8(
            self._data[self._position :], logger=self._logger, operation="read"
        )

    @override
    def _read_line(self) -> str:
        end = self._data.find(b"\n", self._position)
        if end == -1:
            line = self._data[self._position :]
            self._position = len(self._data)
        else:
            line = self._data[self._position : end]
            self._position = end + 1
        return decode_utf8(line, logger=self._logger, operation="read line")

    @override
    def _read_raw(self, size: int) -> bytes:
        end = len(self._data)
        if size >= 0:
            end = min(end, self._position + size)
        chunk = self._data[self._position : end]
        self._position = end
        return chunk

    @override
    def _release(self) -> None:
        pass


@dataclass(slots=True)
class StringWriter(WritableHandle):
    """Writable that accumulates text in memory.

    The accumulated text stays available through :meth:`getvalue` and
    ``str()`` even after the writer is closed.
    """

    _logger: ClassVar[StructuredLogger] = get_logger(
        __name__, context={"component": "string_writer"}
    )

    _parts: list[str] = field(default_factory=list)
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @classmethod
    def create(cls, initial: str = "") -> StringWriter:
        """Create a writer, optionally seeded with ``initial`` text."""
        return cls(_parts=[initial] if initial else [])

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self._parts)

    @override
    def __str__(self) -> str:
        return self.getvalue()

    @override
    def _write_text(self, text: str) -> None:
        self._parts.append(text)

    @override
    def _write_raw(self, data: bytes) -> int:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            raise fatal(
                self._logger,
                MalformedWriteError("tried to write non-utf8 bytes to a string"),
                event="malformed_write",
                context={"byte_count": len(data)},
            ) from None
        self._parts.append(text)
        return len(data)

    @override
    def _flush(self) -> None:
        pass

    @override
    def _release(self) -> None:
        pass
