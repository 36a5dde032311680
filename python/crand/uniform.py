"""Uniform range samplers over Engine32 (32-bit variants) and Engine64 (64-bit variants).

Integer specs hold ``offset=low`` and the inclusive outcome count
``range=high-low+1``; float specs hold ``offset=low`` and ``range=high-low``
for the half-open interval ``[low, high)``.

``sample`` on the integer specs is the fast modulo reduction and carries
modulo bias whenever ``range`` does not divide the engine's output domain.
``unbiased_sample`` uses a widening multiply and only redraws when the low
half of the product falls below ``2**width % range``.

Bounds are checked once in ``init``; ``sample`` never validates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Protocol

import numpy as np

from .constants import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, MASK32, MASK64


class Source32(Protocol):
    def next_u32(self) -> int: ...

    def next_f32(self) -> float: ...


class Source64(Protocol):
    def next_u64(self) -> int: ...

    def next_f64(self) -> float: ...


def _check_int_bounds(name: str, low: int, high: int, minimum: int, maximum: int) -> None:
    if low > high:
        raise ValueError(f"{name} requires low <= high, received low={low}, high={high}.")
    if low < minimum or high > maximum:
        raise ValueError(
            f"{name} bounds must lie within [{minimum}, {maximum}], received [{low}, {high}]."
        )


def _check_float_bounds(name: str, low: float, high: float) -> None:
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError(f"{name} bounds must be finite, received [{low}, {high}).")
    if high < low:
        raise ValueError(f"{name} requires low <= high, received low={low}, high={high}.")


@dataclass(frozen=True)
class UniformInt32:
    offset: int
    range: int

    dtype: ClassVar[type] = np.int32

    @classmethod
    def init(cls, low: int, high: int) -> UniformInt32:
        low, high = int(low), int(high)
        _check_int_bounds("UniformInt32", low, high, INT32_MIN, INT32_MAX)
        return cls(offset=low, range=high - low + 1)

    def sample(self, engine: Source32) -> int:
        return self.offset + engine.next_u32() % self.range

    def unbiased_sample(self, engine: Source32) -> int:
        span = self.range
        product = engine.next_u32() * span
        low_bits = product & MASK32
        if low_bits < span:
            threshold = (MASK32 + 1) % span
            while low_bits < threshold:
                product = engine.next_u32() * span
                low_bits = product & MASK32
        return self.offset + (product >> 32)


@dataclass(frozen=True)
class UniformInt64:
    offset: int
    range: int

    dtype: ClassVar[type] = np.int64

    @classmethod
    def init(cls, low: int, high: int) -> UniformInt64:
        low, high = int(low), int(high)
        _check_int_bounds("UniformInt64", low, high, INT64_MIN, INT64_MAX)
        return cls(offset=low, range=high - low + 1)

    def sample(self, engine: Source64) -> int:
        return self.offset + engine.next_u64() % self.range

    def unbiased_sample(self, engine: Source64) -> int:
        span = self.range
        product = engine.next_u64() * span
        low_bits = product & MASK64
        if low_bits < span:
            threshold = (MASK64 + 1) % span
            while low_bits < threshold:
                product = engine.next_u64() * span
                low_bits = product & MASK64
        return self.offset + (product >> 64)


@dataclass(frozen=True)
class UniformFloat32:
    """Single-precision ``[low, high)``; bounds are rounded to float32 on init."""

    offset: float
    range: float

    dtype: ClassVar[type] = np.float32

    @classmethod
    def init(cls, low: float, high: float) -> UniformFloat32:
        low32 = float(np.float32(low))
        high32 = float(np.float32(high))
        _check_float_bounds("UniformFloat32", low32, high32)
        return cls(offset=low32, range=high32 - low32)

    def sample(self, engine: Source32) -> float:
        value = np.float32(self.offset + self.range * engine.next_f32())
        if self.range:
            high = np.float32(self.offset + self.range)
            if value >= high:
                value = np.nextafter(high, np.float32(self.offset))
        return float(value)


@dataclass(frozen=True)
class UniformFloat64:
    offset: float
    range: float

    dtype: ClassVar[type] = np.float64

    @classmethod
    def init(cls, low: float, high: float) -> UniformFloat64:
        low, high = float(low), float(high)
        _check_float_bounds("UniformFloat64", low, high)
        if not math.isfinite(high - low):
            raise ValueError(f"UniformFloat64 range overflows: [{low}, {high}).")
        return cls(offset=low, range=high - low)

    def sample(self, engine: Source64) -> float:
        value = self.offset + self.range * engine.next_f64()
        if self.range:
            high = self.offset + self.range
            if value >= high:
                value = float(np.nextafter(high, self.offset))
        return value
