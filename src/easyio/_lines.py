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

"""Line iteration over any readable handle.

The iterator only needs the handle's raw byte-read primitive, which it wraps
in an ``io.BufferedReader`` so lines can be split without knowing anything
about the backend.
"""

from __future__ import annotations

import io
from collections.abc import Buffer, Callable, Iterator
from typing import Self, override

from ._fatal import decode_utf8, fatal
from .errors import ReadFailedError
from .logging import get_logger

__all__ = ["LineIterator"]

_logger = get_logger(__name__, context={"component": "line_iterator"})


class LineIterator(Iterator[str]):
    """Single-use, forward-only iterator over the lines of a source.

    Built by ``Readable.lines()``, which hands over the source's raw read
    primitive and its release callback. Each step yields one line with a
    single trailing ``\\n`` removed. Once the source reports zero bytes the
    iterator is exhausted for good and the source is released.

    Example::

        for line in file.reader("data.txt"):
            handle(line)
    """

    __slots__ = ("_buffer", "_exhausted", "_line_number", "_release")

    def __init__(
        self,
        read: Callable[[int], bytes],
        *,
        release: Callable[[], None],
    ) -> None:
        super().__init__()
        self._buffer = io.BufferedReader(_RawReadAdapter(read))
        self._release = release
        self._line_number = 0
        self._exhausted = False

    @property
    def line_number(self) -> int:
        """Number of lines yielded so far."""
        return self._line_number

    @property
    def exhausted(self) -> bool:
        """True once the iterator will not produce further lines."""
        return self._exhausted

    @override
    def __next__(self) -> str:
        if self._exhausted:
            raise StopIteration
        try:
            chunk = self._buffer.readline()
        except (OSError, ValueError) as exc:
            raise fatal(
                _logger,
                ReadFailedError("failed to read line"),
                event="line_read_failed",
                context={"line_number": self._line_number},
            ) from exc
        if not chunk:
            _logger.debug(
                "Line source exhausted.",
                event="lines_exhausted",
                context={"line_count": self._line_number},
            )
            self.close()
            raise StopIteration
        if chunk.endswith(b"\n"):
            chunk = chunk[:-1]
        self._line_number += 1
        return decode_utf8(chunk, logger=_logger, operation="read line")

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, releasing the source."""
        self.close()

    def close(self) -> None:
        """Stop iterating and release the source."""
        if self._exhausted:
            return
        self._exhausted = True
        try:
            self._buffer.close()
        finally:
            self._release()


class _RawReadAdapter(io.RawIOBase):
    """Adapter exposing a read callable as a RawIOBase for io.BufferedReader."""

    def __init__(self, read: Callable[[int], bytes]) -> None:
        super().__init__()
        self._read = read

    @override
    def readable(self) -> bool:
        return True

    @override
    def readinto(self, buffer: Buffer, /) -> int:
        mv = memoryview(buffer).cast("B")
        data = self._read(len(mv))
        n = len(data)
        mv[:n] = data
        return n
