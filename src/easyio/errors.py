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

"""Base exception hierarchy for :mod:`easyio`."""

from __future__ import annotations


class EasyIOError(Exception):
    """Base class for all easyio exceptions.

    Lets callers catch every library-specific exception with a single handler
    while standard Python exceptions propagate normally.
    """


class FatalIOError(EasyIOError, RuntimeError):
    """Unrecoverable I/O failure.

    easyio does not hand errors back as values. Every failure surfaces as a
    ``FatalIOError`` naming the operation that failed, and an uncaught one
    terminates the process like any other exception.

    Example:
        The normal outcome of a missing file is a traceback::

            reader = file.reader("missing.txt")  # raises ResourceOpenError

    Note:
        The message carries no diagnostic payload beyond the operation name.
        Handlers that catch it should not try to continue with the handle.
    """


class ResourceOpenError(FatalIOError):
    """Raised when a file cannot be opened or created."""


class SourceExhaustedError(FatalIOError):
    """Raised when ``read_line`` is called on a finite source past its end.

    Sources of unknown length must be consumed through iteration, which
    signals the end cleanly instead.
    """


class MalformedWriteError(FatalIOError):
    """Raised when bytes that are not valid UTF-8 are written to a text sink."""


class ParseLineError(FatalIOError):
    """Raised when ``read_line_as`` cannot parse a line into the target type.

    No detail about the underlying parse failure is preserved.
    """


class HandleConsumedError(FatalIOError):
    """Raised when a handle is used after it was given to a line iterator.

    Use after ``close()`` raises the :class:`HandleClosedError` subclass, so a
    single ``except HandleConsumedError`` still covers both.
    """


class HandleClosedError(HandleConsumedError):
    """Raised when a handle is used after it was closed."""


class ReadFailedError(FatalIOError):
    """Raised when the underlying source fails or yields undecodable text."""


class WriteFailedError(FatalIOError):
    """Raised when the underlying sink rejects a write."""


class InvalidBoundError(EasyIOError, ValueError):
    """Raised when a random bound is empty or outside the numeric kind."""


__all__ = [
    "EasyIOError",
    "FatalIOError",
    "HandleClosedError",
    "HandleConsumedError",
    "InvalidBoundError",
    "MalformedWriteError",
    "ParseLineError",
    "ReadFailedError",
    "ResourceOpenError",
    "SourceExhaustedError",
    "WriteFailedError",
]
