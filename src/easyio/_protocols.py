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

"""Capability contracts shared by every easyio backend.

Defines the Readable and Writable protocols. File, standard-stream and
string handles all satisfy them with identical pre- and postconditions.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from ._lines import LineIterator

__all__ = [
    "Readable",
    "Writable",
]


@runtime_checkable
class Readable(Protocol):
    """Line-oriented text source.

    Example::

        def total(reader: Readable) -> int:
            count = reader.read_line_as(int)
            return sum(int(line) for line in reader)
    """

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        ...

    def read_all(self) -> str:
        """Consume every remaining byte and return it as text.

        Raises:
            FatalIOError: If the source fails or is not valid UTF-8.
        """
        ...

    def read_line(self) -> str:
        """Consume the next line and return it without its terminator.

        Returns:
            The line with exactly one trailing character stripped.

        Raises:
            SourceExhaustedError: If a file or stream source is already
                exhausted. The string backend returns ``""`` instead.
        """
        ...

    def read_line_as[T](self, kind: type[T]) -> T:
        """Read one line and parse it with ``kind``'s own parsing rule.

        Raises:
            ParseLineError: If the line cannot be parsed.
        """
        ...

    def read_bytes(self, size: int = -1) -> bytes:
        """Read up to ``size`` raw bytes. Empty bytes at end of source."""
        ...

    def lines(self) -> LineIterator:
        """Hand this handle to a single-use line iterator.

        The handle is consumed: any later direct read raises
        ``HandleConsumedError``.
        """
        ...

    def __iter__(self) -> Iterator[str]:
        """Same as :meth:`lines`."""
        ...

    def __enter__(self) -> Self:
        """Enter context manager."""
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, closing the handle."""
        ...

    def close(self) -> None:
        """Release the underlying resource."""
        ...


@runtime_checkable
class Writable(Protocol):
    """Append-only text sink.

    Example::

        with file.writer("out.txt") as out:
            out.write("total: ")
            out.write_any(42)
    """

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        ...

    def write(self, text: str) -> None:
        """Append ``text`` exactly as given, without adding a newline.

        Raises:
            WriteFailedError: If the sink is broken.
            HandleConsumedError: If the handle is closed.
        """
        ...

    def write_any(self, value: object) -> None:
        """Append ``str(value)``."""
        ...

    def write_bytes(self, data: bytes) -> int:
        """Append raw bytes, returning the number written.

        Raises:
            MalformedWriteError: If the sink only holds text and ``data`` is
                not valid UTF-8.
        """
        ...

    def flush(self) -> None:
        """Push buffered output to the sink."""
        ...

    def __enter__(self) -> Self:
        """Enter context manager."""
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, closing the handle."""
        ...

    def close(self) -> None:
        """Flush and release the underlying resource."""
        ...
