"""PCG32 engine: 64-bit LCG state, 32-bit XSH-RR output, 2^63 selectable streams."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .constants import DEFAULT_SEQ32, MASK32, MASK64, PCG32_MULT, UNIT_F32


@dataclass
class Engine32:
    """PCG32 generator.

    ``state`` is the running LCG word and ``inc`` the odd stream increment.
    Every stream has period 2^64. Build instances with :meth:`init` or
    :meth:`with_seq`; the raw constructor takes already-derived words.
    """

    state: int
    inc: int

    raw_dtype: ClassVar[type] = np.uint32
    unit_dtype: ClassVar[type] = np.float32

    @classmethod
    def init(cls, seed: int) -> Engine32:
        return cls.with_seq(seed, DEFAULT_SEQ32)

    @classmethod
    def with_seq(cls, seed: int, seq: int) -> Engine32:
        engine = cls(state=0, inc=((int(seq) << 1) | 1) & MASK64)
        engine.next_u32()
        engine.state = (engine.state + (int(seed) & MASK64)) & MASK64
        engine.next_u32()
        return engine

    @classmethod
    def from_words(cls, words: Sequence[int]) -> Engine32:
        if len(words) != 2:
            raise ValueError(f"Engine32 snapshot needs 2 words, received {len(words)}.")
        state, inc = (int(word) for word in words)
        for word in (state, inc):
            if word < 0 or word > MASK64:
                raise ValueError(f"Engine32 word out of 64-bit range: {word:#x}")
        if inc & 1 == 0:
            raise ValueError("Engine32 increment must be odd.")
        return cls(state=state, inc=inc)

    def words(self) -> tuple[int, int]:
        return (self.state, self.inc)

    def copy(self) -> Engine32:
        return dataclasses.replace(self)

    def next_u32(self) -> int:
        oldstate = self.state
        self.state = (oldstate * PCG32_MULT + self.inc) & MASK64
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & MASK32
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32

    def next_f32(self) -> float:
        return (self.next_u32() >> 8) * UNIT_F32

    next_raw = next_u32
    next_unit = next_f32
