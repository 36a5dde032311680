"""Independent engines for parallel consumers.

There is no jump/skip-ahead operation. Parallel tasks each receive an engine
built from the shared seed and their own sequence id, which selects a
distinct odd increment and therefore a non-overlapping stream.
"""

from __future__ import annotations

from typing import Any

from .engine64 import Engine64


def spawn_engines(
    seed: int,
    count: int,
    *,
    engine: Any = Engine64,
    first_seq: int = 0,
) -> list[Any]:
    if count < 0:
        raise ValueError(f"count must be non-negative, received {count}")
    return [engine.with_seq(seed, first_seq + index) for index in range(int(count))]
