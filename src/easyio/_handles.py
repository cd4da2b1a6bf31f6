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

"""Shared lifecycle for readable and writable handles.

Backends implement a handful of underscore hooks; the public contract
methods, state checks and context-manager support live here so every
backend enforces them the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import Enum
from typing import BinaryIO, ClassVar, Self

from ._fatal import decode_utf8, fatal
from ._lines import LineIterator
from ._parse import parse_line
from .errors import (
    HandleClosedError,
    HandleConsumedError,
    ReadFailedError,
    SourceExhaustedError,
)
from .logging import StructuredLogger

__all__ = [
    "BufferedReadableHandle",
    "HandleState",
    "ReadableHandle",
    "WritableHandle",
]


class HandleState(Enum):
    """Lifecycle of a handle.

    Attributes:
        OPEN: Usable.
        EXHAUSTED: A readable whose ``read_line`` hit the end of the source.
            ``read_all`` and iteration still work and return nothing.
        CONSUMED: A readable handed to a ``LineIterator``.
        CLOSED: The underlying resource has been released.
    """

    OPEN = "open"
    EXHAUSTED = "exhausted"
    CONSUMED = "consumed"
    CLOSED = "closed"


class _Handle(ABC):
    __slots__ = ()

    _logger: ClassVar[StructuredLogger]
    _state: HandleState

    @property
    def state(self) -> HandleState:
        """Current lifecycle state."""
        return self._state

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        return self._state is HandleState.CLOSED

    def _check_usable(self, operation: str) -> None:
        if self._state is HandleState.CLOSED:
            raise fatal(
                self._logger,
                HandleClosedError(f"{operation}: I/O operation on closed handle"),
                event="closed_handle_used",
                context={"operation": operation},
            )
        if self._state is HandleState.CONSUMED:
            raise fatal(
                self._logger,
                HandleConsumedError(
                    f"{operation}: handle was moved into a line iterator"
                ),
                event="consumed_handle_used",
                context={"operation": operation},
            )

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""
        if self._state is HandleState.CLOSED:
            return
        self._state = HandleState.CLOSED
        self._release()

    @abstractmethod
    def _release(self) -> None: ...


class ReadableHandle(_Handle):
    """Base for every Readable backend."""

    __slots__ = ()

    def read_all(self) -> str:
        """Consume every remaining byte and return it as text."""
        self._check_usable("read_all")
        return self._read_all()

    def read_line(self) -> str:
        """Consume the next line and return it without its terminator."""
        self._check_usable("read_line")
        return self._read_line()

    def read_line_as[T](self, kind: type[T]) -> T:
        """Read one line and parse it into ``kind``."""
        return parse_line(self.read_line(), kind)

    def read_bytes(self, size: int = -1) -> bytes:
        """Read up to ``size`` raw bytes; ``-1`` reads to the end."""
        self._check_usable("read_bytes")
        return self._read_raw(size)

    def lines(self) -> LineIterator:
        """Move this handle into a single-use line iterator."""
        self._check_usable("lines")
        self._state = HandleState.CONSUMED
        return LineIterator(self._read_raw, release=self.close)

    def __iter__(self) -> Iterator[str]:
        """Same as :meth:`lines`."""
        return self.lines()

    @abstractmethod
    def _read_all(self) -> str: ...

    @abstractmethod
    def _read_line(self) -> str: ...

    @abstractmethod
    def _read_raw(self, size: int) -> bytes: ...


class BufferedReadableHandle(ReadableHandle):
    """Readable over a buffered binary handle (files and stdin)."""

    __slots__ = ()

    _handle: BinaryIO

    def _read_all(self) -> str:
        try:
            data = self._handle.read()
        except (OSError, ValueError) as exc:
            raise fatal(
                self._logger,
                ReadFailedError("failed to read"),
                event="read_all_failed",
            ) from exc
        return decode_utf8(data, logger=self._logger, operation="read")

    def _read_line(self) -> str:
        try:
            data = self._handle.readline()
        except (OSError, ValueError) as exc:
            raise fatal(
                self._logger,
                ReadFailedError("failed to read line"),
                event="read_line_failed",
            ) from exc
        if not data:
            self._state = HandleState.EXHAUSTED
            raise fatal(
                self._logger,
                SourceExhaustedError("failed to read line"),
                event="read_line_exhausted",
            )
        # Drops the last character even when the final line has no "\n".
        return decode_utf8(data, logger=self._logger, operation="read line")[:-1]

    def _read_raw(self, size: int) -> bytes:
        # read1 returns what is available instead of blocking for ``size``.
        read1 = getattr(self._handle, "read1", self._handle.read)
        try:
            return self._handle.read() if size < 0 else read1(size)
        except (OSError, ValueError) as exc:
            raise fatal(
                self._logger,
                ReadFailedError("failed to read"),
                event="read_failed",
            ) from exc


class WritableHandle(_Handle):
    """Base for every Writable backend."""

    __slots__ = ()

    def write(self, text: str) -> None:
        """Append ``text`` exactly as given."""
        self._check_usable("write")
        self._write_text(text)

    def write_any(self, value: object) -> None:
        """Append ``str(value)``."""
        self.write(str(value))

    def write_bytes(self, data: bytes) -> int:
        """Append raw bytes."""
        self._check_usable("write_bytes")
        return self._write_raw(data)

    def flush(self) -> None:
        """Push buffered output to the sink."""
        self._check_usable("flush")
        self._flush()

    @abstractmethod
    def _write_text(self, text: str) -> None: ...

    @abstractmethod
    def _write_raw(self, data: bytes) -> int: ...

    @abstractmethod
    def _flush(self) -> None: ...
