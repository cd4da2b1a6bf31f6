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

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from typing import Protocol

import pytest

import easyio.random as easyio_random


class StdinFeeder(Protocol):
    def __call__(self, data: bytes) -> None:
        """Replace ``sys.stdin`` with a stream over ``data``."""


@pytest.fixture
def feed_stdin(monkeypatch: pytest.MonkeyPatch) -> StdinFeeder:
    """Return a helper that swaps ``sys.stdin`` for an in-memory stream."""

    def feed(data: bytes) -> None:
        stream = io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")
        monkeypatch.setattr(sys, "stdin", stream)

    return feed


@pytest.fixture(autouse=True)
def reset_default_rng(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure each test builds the default generator from a clean slate."""

    monkeypatch.delenv("EASYIO_RANDOM_SEED", raising=False)
    easyio_random._default = None
    yield
    easyio_random._default = None
