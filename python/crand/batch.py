"""Array helpers that fill numpy buffers by repeated scalar draws.

Every element advances the engine exactly as the matching scalar call would,
so a batch of ``n`` equals ``n`` scalar draws from the same starting state.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np


def _as_shape(size: int | tuple[int, ...]) -> tuple[int, ...]:
    shape = (size,) if isinstance(size, int) else tuple(int(dim) for dim in size)
    if any(dim < 0 for dim in shape):
        raise ValueError(f"size must be non-negative, received {size!r}")
    return shape


def _fill(draw_fn: Callable[[], Any], size: int | tuple[int, ...], dtype: Any) -> np.ndarray:
    arr = np.empty(_as_shape(size), dtype=dtype)
    flat = arr.reshape(-1)
    for i in range(flat.size):
        flat[i] = draw_fn()
    return arr


def raw_array(engine: Any, size: int | tuple[int, ...]) -> np.ndarray:
    return _fill(engine.next_raw, size, engine.raw_dtype)


def unit_array(engine: Any, size: int | tuple[int, ...]) -> np.ndarray:
    return _fill(engine.next_unit, size, engine.unit_dtype)


def sample_array(
    spec: Any,
    engine: Any,
    size: int | tuple[int, ...],
    *,
    unbiased: bool = False,
) -> np.ndarray:
    if unbiased:
        if not hasattr(spec, "unbiased_sample"):
            raise ValueError(f"{type(spec).__name__} has no unbiased_sample variant.")
        return _fill(lambda: spec.unbiased_sample(engine), size, spec.dtype)
    return _fill(lambda: spec.sample(engine), size, spec.dtype)
