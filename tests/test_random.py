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

"""Tests for the random source."""

from __future__ import annotations

import math
import random as stdlib_random
import struct
import sys

import pytest

from easyio import random
from easyio.errors import EasyIOError, InvalidBoundError

_INT_KINDS = [
    random.U8,
    random.U16,
    random.U32,
    random.U64,
    random.U128,
    random.USIZE,
    random.I8,
    random.I16,
    random.I32,
    random.I64,
    random.I128,
    random.ISIZE,
]
_FLOAT_KINDS = [random.F32, random.F64]


class TestKinds:
    """Tests for the numeric kind descriptions."""

    def test_unsigned_ranges(self) -> None:
        """Unsigned kinds start at zero."""
        assert (random.U8.min, random.U8.max) == (0, 255)
        assert random.U64.max == 2**64 - 1
        assert random.U128.max == 2**128 - 1

    def test_signed_ranges(self) -> None:
        """Signed kinds use two's complement bounds."""
        assert (random.I8.min, random.I8.max) == (-128, 127)
        assert (random.I16.min, random.I16.max) == (-32768, 32767)
        assert random.I128.min == -(2**127)

    def test_pointer_sized_kinds(self) -> None:
        """usize and isize follow the platform pointer width."""
        bits = struct.calcsize("P") * 8
        assert random.USIZE.bits == bits
        assert random.ISIZE.bits == bits

    def test_float_maxima(self) -> None:
        """Float kinds report their largest finite value."""
        (largest,) = struct.unpack("f", struct.pack("f", random.F32.max))
        assert largest == random.F32.max
        with pytest.raises(OverflowError):
            struct.pack("f", random.F32.max * 2)
        assert random.F64.max == sys.float_info.max

    def test_f32_rounding(self) -> None:
        """f32 rounds to single precision; f64 keeps the value."""
        assert random.F32.round(0.1) != 0.1
        assert random.F32.round(0.5) == 0.5
        assert random.F64.round(0.1) == 0.1


class TestUniform:
    """Tests for uniform and uniform_below."""

    @pytest.mark.parametrize("kind", _INT_KINDS, ids=lambda kind: kind.name)
    def test_uniform_int_stays_in_range(self, kind: random.IntKind) -> None:
        """Samples fall inside the kind's full range."""
        rng = stdlib_random.Random(7)
        for _ in range(200):
            assert kind.min <= random.uniform(kind, rng=rng) <= kind.max

    @pytest.mark.parametrize("kind", _FLOAT_KINDS, ids=lambda kind: kind.name)
    def test_uniform_float_is_unit_interval(self, kind: random.FloatKind) -> None:
        """Float samples lie in [0, 1)."""
        rng = stdlib_random.Random(7)
        for _ in range(200):
            assert 0.0 <= random.uniform(kind, rng=rng) < 1.0

    @pytest.mark.parametrize("kind", _INT_KINDS, ids=lambda kind: kind.name)
    @pytest.mark.parametrize("bound", [1, 2, 6, 100])
    def test_uniform_below_int(self, kind: random.IntKind, bound: int) -> None:
        """Samples are at least zero and strictly below the bound."""
        rng = stdlib_random.Random(bound)
        for _ in range(100):
            assert 0 <= random.uniform_below(kind, bound, rng=rng) < bound

    def test_uniform_below_max_bound(self) -> None:
        """The kind's maximum is an accepted bound."""
        rng = stdlib_random.Random(0)
        assert 0 <= random.uniform_below(random.U8, 255, rng=rng) < 255

    def test_bound_of_one_always_returns_zero(self) -> None:
        """A bound of one leaves only zero."""
        assert {random.uniform_below(random.I32, 1) for _ in range(20)} == {0}

    @pytest.mark.parametrize("kind", _FLOAT_KINDS, ids=lambda kind: kind.name)
    @pytest.mark.parametrize("bound", [1e-30, 0.5, 3.0, 1e30])
    def test_uniform_below_float(self, kind: random.FloatKind, bound: float) -> None:
        """Float samples are non-negative and strictly below the bound."""
        rng = stdlib_random.Random(3)
        for _ in range(100):
            value = random.uniform_below(kind, bound, rng=rng)
            assert 0.0 <= value < bound

    def test_f32_samples_are_single_precision(self) -> None:
        """f32 samples survive a round trip through single precision."""
        rng = stdlib_random.Random(11)
        value = random.uniform(random.F32, rng=rng)
        assert random.F32.round(value) == value

    @pytest.mark.parametrize("bound", [0, -1, -100])
    def test_non_positive_int_bound_is_rejected(self, bound: int) -> None:
        """Bounds must be positive."""
        with pytest.raises(InvalidBoundError):
            random.uniform_below(random.I32, bound)

    def test_bound_beyond_kind_is_rejected(self) -> None:
        """A bound larger than the kind's maximum cannot be sampled."""
        with pytest.raises(InvalidBoundError, match="u8"):
            random.uniform_below(random.U8, 256)

    def test_non_integer_bound_for_int_kind_is_rejected(self) -> None:
        """Integer kinds need integer bounds."""
        with pytest.raises(InvalidBoundError):
            random.uniform_below(random.U32, 2.5)  # type: ignore[call-overload]

    @pytest.mark.parametrize(
        ("kind", "bound"),
        [
            (random.F64, 0.0),
            (random.F64, -1.0),
            (random.F64, math.inf),
            (random.F64, math.nan),
            (random.F32, 1e39),
            (random.F32, 1e300),
        ],
    )
    def test_invalid_float_bound_is_rejected(
        self, kind: random.FloatKind, bound: float
    ) -> None:
        """Float bounds must be positive and representable in the kind."""
        with pytest.raises(InvalidBoundError):
            random.uniform_below(kind, bound, rng=stdlib_random.Random(0))

    def test_largest_f32_bound_is_accepted(self) -> None:
        """The largest finite f32 is itself a valid bound."""
        rng = stdlib_random.Random(0)
        value = random.uniform_below(random.F32, random.F32.max, rng=rng)
        assert 0.0 <= value < random.F32.max

    @pytest.mark.parametrize("kind", [random.U8, random.F64], ids=lambda k: k.name)
    def test_bool_bound_is_rejected(self, kind: random.NumericKind) -> None:
        """True is not a bound even though it is an int."""
        with pytest.raises(InvalidBoundError):
            random.uniform_below(kind, True)  # type: ignore[call-overload]

    def test_invalid_bound_is_a_value_error(self) -> None:
        """InvalidBoundError is a programming error, not an I/O failure."""
        with pytest.raises(ValueError) as info:
            random.uniform_below(random.U8, 0)
        assert isinstance(info.value, EasyIOError)


class TestBoolean:
    """Tests for boolean."""

    def test_produces_both_values(self) -> None:
        """Both outcomes show up over many draws."""
        rng = stdlib_random.Random(5)
        assert {random.boolean(rng=rng) for _ in range(100)} == {True, False}

    def test_returns_bool(self) -> None:
        """The result is a real bool."""
        assert isinstance(random.boolean(), bool)


class TestDefaultGenerator:
    """Tests for the shared default generator."""

    def test_generator_is_shared(self) -> None:
        """default_rng returns the same instance on every call."""
        assert random.default_rng() is random.default_rng()

    def test_seed_from_environment_is_reproducible(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """EASYIO_RANDOM_SEED makes the default sequence repeatable."""
        monkeypatch.setenv("EASYIO_RANDOM_SEED", "1234")
        first = [random.uniform(random.U32) for _ in range(5)]
        monkeypatch.setattr(random, "_default", None)
        second = [random.uniform(random.U32) for _ in range(5)]
        assert first == second

    def test_blank_seed_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty seed falls back to an unseeded generator."""
        monkeypatch.setenv("EASYIO_RANDOM_SEED", "  ")
        assert isinstance(random.default_rng(), stdlib_random.Random)

    def test_bad_seed_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A non-integer seed is a configuration error."""
        monkeypatch.setenv("EASYIO_RANDOM_SEED", "abc")
        with pytest.raises(ValueError, match="EASYIO_RANDOM_SEED"):
            random.default_rng()
