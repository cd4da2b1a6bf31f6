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

"""Helpers for reporting fatal failures."""

from __future__ import annotations

from collections.abc import Mapping

from .errors import EasyIOError, ReadFailedError
from .logging import StructuredLogger

__all__ = ["decode_utf8", "fatal"]


def fatal[E: EasyIOError](
    logger: StructuredLogger,
    error: E,
    *,
    event: str,
    context: Mapping[str, object] | None = None,
) -> E:
    """Log ``error`` as a structured event and return it for raising."""

    logger.error(str(error), event=event, context=dict(context or {}))
    return error


def decode_utf8(data: bytes, *, logger: StructuredLogger, operation: str) -> str:
    """Decode ``data`` as UTF-8, failing fatally on invalid input."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise fatal(
            logger,
            ReadFailedError(f"failed to {operation}"),
            event="decode_failed",
            context={"operation": operation, "byte_count": len(data)},
        ) from None
