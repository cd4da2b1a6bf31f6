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

"""easyio: one small interface for reading and writing text.

Files, the standard streams and in-memory strings all implement the same
:class:`Readable` and :class:`Writable` protocols, so code written against
them works with any backend. Failures are not returned as values: every
error raises a :class:`FatalIOError` naming the operation that failed.

Example usage::

    from easyio import file, stdio, string

    name = stdio.read_line()
    file.write("greeting.txt", f"hello {name}\\n")

    for line in file.reader("greeting.txt"):
        stdio.print(line + "\\n")

    reader = string.reader("1\\n2\\n3")
    total = sum(int(line) for line in reader)

Modules:

- ``easyio.file``: ``reader``, ``writer``, ``read``, ``write``
- ``easyio.stdio``: ``stdin``, ``stdout``, ``stderr``, ``read_line``,
  ``print``, ``eprint``
- ``easyio.string``: ``reader``, ``writer``; useful as test doubles
- ``easyio.random``: ``uniform``, ``uniform_below``, ``boolean``
"""

from __future__ import annotations

from . import file, random, stdio, string
from ._lines import LineIterator
from ._protocols import Readable, Writable
from .errors import (
    EasyIOError,
    FatalIOError,
    HandleClosedError,
    HandleConsumedError,
    InvalidBoundError,
    MalformedWriteError,
    ParseLineError,
    ReadFailedError,
    ResourceOpenError,
    SourceExhaustedError,
    WriteFailedError,
)
from .logging import configure_logging
from .stdio import Stderr, Stdin, Stdout, stderr, stdin, stdout

__all__ = [
    "EasyIOError",
    "FatalIOError",
    "HandleClosedError",
    "HandleConsumedError",
    "InvalidBoundError",
    "LineIterator",
    "MalformedWriteError",
    "ParseLineError",
    "ReadFailedError",
    "Readable",
    "ResourceOpenError",
    "SourceExhaustedError",
    "Stderr",
    "Stdin",
    "Stdout",
    "Writable",
    "WriteFailedError",
    "configure_logging",
    "file",
    "random",
    "stderr",
    "stdin",
    "stdio",
    "stdout",
    "string",
]
