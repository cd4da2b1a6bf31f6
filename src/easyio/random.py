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

"""Uniformly distributed random values of fixed-width numeric kinds.

A thin layer over :class:`random.Random`. Integer kinds describe the range of
a machine integer (``U8`` is ``0..255``, ``I16`` is ``-32768..32767``), float
kinds describe the precision the result is rounded to.

Example::

    from easyio import random

    die = random.uniform_below(random.U8, 6) + 1
    coin = random.boolean()

Set ``EASYIO_RANDOM_SEED`` to make the default generator reproducible. Pass
``rng=`` to use your own generator instead.
"""

from __future__ import annotations

import math
import os
import random
import struct
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, overload

from .errors import InvalidBoundError

__all__ = [
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "FloatKind",
    "IntKind",
    "NumericKind",
    "boolean",
    "default_rng",
    "uniform",
    "uniform_below",
]

_SEED_ENV = "EASYIO_RANDOM_SEED"
_POINTER_BITS: Final[int] = struct.calcsize("P") * 8
_F32_MAX: Final[float] = 3.4028234663852886e38


@dataclass(frozen=True, slots=True)
class IntKind:
    """A fixed-width integer kind."""

    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


@dataclass(frozen=True, slots=True)
class FloatKind:
    """A binary floating point kind (32 or 64 bits)."""

    name: str
    bits: int

    @property
    def max(self) -> float:
        """Largest finite value of this kind."""
        if self.bits == 32:  # noqa: PLR2004
            return _F32_MAX
        return sys.float_info.max

    def round(self, value: float) -> float:
        """Round ``value`` to this kind's precision."""
        if self.bits == 32:  # noqa: PLR2004
            return struct.unpack("f", struct.pack("f", value))[0]
        return value


type NumericKind = IntKind | FloatKind

U8: Final = IntKind("u8", 8, signed=False)
U16: Final = IntKind("u16", 16, signed=False)
U32: Final = IntKind("u32", 32, signed=False)
U64: Final = IntKind("u64", 64, signed=False)
U128: Final = IntKind("u128", 128, signed=False)
USIZE: Final = IntKind("usize", _POINTER_BITS, signed=False)
I8: Final = IntKind("i8", 8, signed=True)
I16: Final = IntKind("i16", 16, signed=True)
I32: Final = IntKind("i32", 32, signed=True)
I64: Final = IntKind("i64", 64, signed=True)
I128: Final = IntKind("i128", 128, signed=True)
ISIZE: Final = IntKind("isize", _POINTER_BITS, signed=True)
F32: Final = FloatKind("f32", 32)
F64: Final = FloatKind("f64", 64)

_default: random.Random | None = None


def default_rng() -> random.Random:
    """Return the module generator, creating it on first use."""

    global _default
    if _default is None:
        _default = random.Random(_seed_from_env(os.environ))  # nosec B311
    return _default


@overload
def uniform(kind: IntKind, *, rng: random.Random | None = None) -> int: ...


@overload
def uniform(kind: FloatKind, *, rng: random.Random | None = None) -> float: ...


def uniform(kind: NumericKind, *, rng: random.Random | None = None) -> int | float:
    """Sample ``kind`` uniformly.

    Integer kinds cover their whole range; float kinds return a value in
    ``[0, 1)``.
    """

    if isinstance(kind, FloatKind):
        return uniform_below(kind, 1.0, rng=rng)
    generator = rng if rng is not None else default_rng()
    return generator.randint(kind.min, kind.max)


@overload
def uniform_below(
    kind: IntKind, bound: int, *, rng: random.Random | None = None
) -> int: ...


@overload
def uniform_below(
    kind: FloatKind, bound: float, *, rng: random.Random | None = None
) -> float: ...


def uniform_below(
    kind: NumericKind, bound: float, *, rng: random.Random | None = None
) -> int | float:
    """Sample ``kind`` uniformly from ``[0, bound)``.

    Raises:
        InvalidBoundError: If ``bound`` is not positive or does not fit
            ``kind``.
    """

    if isinstance(bound, bool):
        raise InvalidBoundError(f"{kind.name}: bound must be a number, got {bound!r}")
    generator = rng if rng is not None else default_rng()
    if isinstance(kind, FloatKind):
        if not (math.isfinite(bound) and 0 < bound <= kind.max):
            raise InvalidBoundError(
                f"{kind.name}: bound must be in (0, {kind.max}], got {bound}"
            )
        while True:
            # Rounding the scaled value can land on ``bound`` itself.
            value = kind.round(generator.random() * bound)
            if value < bound:
                return value
    if not isinstance(bound, int) or not 0 < bound <= kind.max:
        raise InvalidBoundError(
            f"{kind.name}: bound must be in 1..={kind.max}, got {bound!r}"
        )
    return generator.randrange(bound)


def boolean(*, rng: random.Random | None = None) -> bool:
    """Return ``True`` or ``False`` with equal probability."""

    generator = rng if rng is not None else default_rng()
    return generator.getrandbits(1) == 1


def _seed_from_env(env: Mapping[str, str]) -> int | None:
    value = env.get(_SEED_ENV)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{_SEED_ENV} must be an integer, got {value!r}") from None
