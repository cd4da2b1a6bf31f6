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

"""Standard-stream backend for terminal I/O.

Handles are resolved from :mod:`sys` when they are requested, so anything
that swaps ``sys.stdin``/``sys.stdout``/``sys.stderr`` (pytest's ``capsys``,
for one) is honoured. Closing a handle flushes it but never closes the
process stream itself.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar, TextIO, override

from ._fatal import fatal
from ._handles import BufferedReadableHandle, HandleState, WritableHandle
from .errors import MalformedWriteError, ResourceOpenError, WriteFailedError
from .logging import StructuredLogger, get_logger

__all__ = [
    "Stderr",
    "Stdin",
    "Stdout",
    "eprint",
    "print",
    "read_line",
    "stderr",
    "stdin",
    "stdout",
]

_stdio_logger = get_logger(__name__, context={"component": "stdio"})


def read_line() -> str:
    """Read a single line from stdin."""
    return stdin().read_line()


def print(text: str) -> None:  # noqa: A001
    """Write ``text`` to stdout. No newline is added."""
    stdout().write(text)


def eprint(text: str) -> None:
    """Write ``text`` to stderr. No newline is added."""
    stderr().write(text)


def stdin() -> Stdin:
    """Get a handle to stdin."""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        raise fatal(
            _stdio_logger,
            ResourceOpenError("couldn't open stdin"),
            event="stdio_unavailable",
            context={"stream": "stdin"},
        )
    return Stdin(_handle=buffer)


def stdout() -> Stdout:
    """Get a handle to stdout."""
    return Stdout(_stream=_text_stream("stdout", sys.stdout))


def stderr() -> Stderr:
    """Get a handle to stderr."""
    return Stderr(_stream=_text_stream("stderr", sys.stderr))


def _text_stream(name: str, stream: TextIO | None) -> TextIO:
    if stream is None:
        raise fatal(
            _stdio_logger,
            ResourceOpenError(f"couldn't open {name}"),
            event="stdio_unavailable",
            context={"stream": name},
        )
    return stream


@dataclass(slots=True)
class Stdin(BufferedReadableHandle):
    """A handle to stdin."""

    _logger: ClassVar[StructuredLogger] = _stdio_logger.bind(stream="stdin")

    _handle: BinaryIO
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @override
    def _release(self) -> None:
        pass


@dataclass(slots=True)
class _StandardWriter(WritableHandle):
    """Text sink over one of the process output streams.

    Output goes to the stream's binary ``buffer`` as UTF-8 whatever the
    stream's own encoding is. Streams without a buffer (``io.StringIO``) get
    text instead. Every write is flushed straight through.
    """

    _stream_name: ClassVar[str] = "stdout"

    _stream: TextIO
    _state: HandleState = field(default=HandleState.OPEN, init=False)

    @override
    def _write_text(self, text: str) -> None:
        if self._buffer() is not None:
            _ = self._write_raw(text.encode("utf-8"))
            return
        try:
            _ = self._stream.write(text)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise self._write_failed() from exc

    @override
    def _write_raw(self, data: bytes) -> int:
        buffer = self._buffer()
        if buffer is None:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError:
                raise fatal(
                    self._logger,
                    MalformedWriteError(
                        f"tried to write non-utf8 bytes to {self._stream_name}"
                    ),
                    event="malformed_write",
                    context={"byte_count": len(data)},
                ) from None
            self._write_text(text)
            return len(data)
        try:
            # Pending text-layer output must reach the buffer first.
            self._stream.flush()
            _ = buffer.write(data)
            buffer.flush()
        except (OSError, ValueError) as exc:
            raise self._write_failed() from exc
        return len(data)

    @override
    def _flush(self) -> None:
        try:
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise fatal(
                self._logger,
                WriteFailedError(f"failed to flush {self._stream_name}"),
                event="stdio_flush_failed",
            ) from exc

    @override
    def _release(self) -> None:
        self._flush()

    def _buffer(self) -> BinaryIO | None:
        return getattr(self._stream, "buffer", None)

    def _write_failed(self) -> WriteFailedError:
        return fatal(
            self._logger,
            WriteFailedError(f"failed to write to {self._stream_name}"),
            event="stdio_write_failed",
        )


@dataclass(slots=True)
class Stdout(_StandardWriter):
    """A handle to stdout."""

    _logger: ClassVar[StructuredLogger] = _stdio_logger.bind(stream="stdout")
    _stream_name: ClassVar[str] = "stdout"


@dataclass(slots=True)
class Stderr(_StandardWriter):
    """A handle to stderr."""

    _logger: ClassVar[StructuredLogger] = _stdio_logger.bind(stream="stderr")
    _stream_name: ClassVar[str] = "stderr"
