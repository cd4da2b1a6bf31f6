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

"""Parsing a single line into a caller-requested type."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Final, cast

from ._fatal import fatal
from .errors import ParseLineError
from .logging import get_logger

__all__ = ["parse_line"]

_logger = get_logger(__name__, context={"component": "parse"})


def _bool_from_str(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"Cannot interpret '{value}' as boolean")


# bool(str) tests emptiness rather than parsing, so it gets a real parser.
_PARSERS: Final[Mapping[type[object], Callable[[str], object]]] = {
    bool: _bool_from_str,
}


def parse_line[T](line: str, kind: type[T]) -> T:
    """Parse ``line`` with ``kind``'s own constructor.

    Raises:
        ParseLineError: If the constructor rejects the text. The original
            exception is not chained.
    """

    parser = _PARSERS.get(kind, kind)
    try:
        value = parser(line)
    except (ValueError, TypeError, ArithmeticError):
        raise fatal(
            _logger,
            ParseLineError("could not parse line"),
            event="parse_line_failed",
            context={"kind": getattr(kind, "__qualname__", repr(kind))},
        ) from None
    return cast(T, value)
