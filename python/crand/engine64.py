"""Weyl-sequence 64-bit engine.

Three mixed generator words plus a Weyl counter. The counter is advanced by a
fixed odd increment on every draw and folded into the output, which bounds
the period of every stream below by 2^64 (expected period about 2^127).
Distinct odd increments give disjoint Weyl sequences, so parallel consumers
each take their own ``seq`` instead of skipping ahead in a shared stream.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .constants import (
    DEFAULT_SEQ64,
    MASK64,
    UNIT_F64,
    WEYL_LSHIFT,
    WEYL_ROTATE,
    WEYL_RSHIFT,
    WEYL_SEED_ADD0,
    WEYL_SEED_ADD2,
    WEYL_SEED_MUL1,
    WEYL_WARMUP_ROUNDS,
)


@dataclass
class Engine64:
    s0: int
    s1: int
    s2: int
    weyl: int
    inc: int

    raw_dtype: ClassVar[type] = np.uint64
    unit_dtype: ClassVar[type] = np.float64

    @classmethod
    def init(cls, seed: int) -> Engine64:
        return cls.with_seq(seed, DEFAULT_SEQ64)

    @classmethod
    def with_seq(cls, seed: int, seq: int) -> Engine64:
        seed = int(seed) & MASK64
        engine = cls(
            s0=(seed + WEYL_SEED_ADD0) & MASK64,
            s1=(seed * WEYL_SEED_MUL1) & MASK64,
            s2=(seed + WEYL_SEED_ADD2) & MASK64,
            weyl=seed,
            inc=((int(seq) << 1) | 1) & MASK64,
        )
        # Zero or low-entropy seeds leave correlated words; mix them out.
        for _ in range(WEYL_WARMUP_ROUNDS):
            engine.next_u64()
        return engine

    @classmethod
    def from_words(cls, words: Sequence[int]) -> Engine64:
        if len(words) != 5:
            raise ValueError(f"Engine64 snapshot needs 5 words, received {len(words)}.")
        values = [int(word) for word in words]
        for word in values:
            if word < 0 or word > MASK64:
                raise ValueError(f"Engine64 word out of 64-bit range: {word:#x}")
        if values[4] & 1 == 0:
            raise ValueError("Engine64 Weyl increment must be odd.")
        return cls(*values)

    def words(self) -> tuple[int, int, int, int, int]:
        return (self.s0, self.s1, self.s2, self.weyl, self.inc)

    def copy(self) -> Engine64:
        return dataclasses.replace(self)

    def next_u64(self) -> int:
        s1 = self.s1
        s2 = self.s2
        self.weyl = (self.weyl + self.inc) & MASK64
        result = ((self.s0 ^ self.weyl) + s1) & MASK64

        self.s0 = s1 ^ (s1 >> WEYL_RSHIFT)
        self.s1 = (s2 + (s2 << WEYL_LSHIFT)) & MASK64
        rotated = ((s2 << WEYL_ROTATE) | (s2 >> (64 - WEYL_ROTATE))) & MASK64
        self.s2 = (rotated + result) & MASK64
        return result

    def next_f64(self) -> float:
        return (self.next_u64() >> 11) * UNIT_F64

    next_raw = next_u64
    next_unit = next_f64
