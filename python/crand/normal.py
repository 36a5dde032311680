"""Normal deviates from Engine64 via the Marsaglia polar method."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .uniform import Source64


@dataclass
class Normal64:
    """Normal(mean, stddev) sampler.

    Each accepted polar pair yields two independent deviates. The second one is
    parked in ``spare_value`` and returned by the next call, so a spec is
    stateful across calls and must not be shared between concurrent consumers.
    """

    mean: float
    stddev: float
    spare_value: float = 0.0
    spare_valid: bool = False

    dtype: ClassVar[type] = np.float64

    @classmethod
    def init(cls, mean: float, stddev: float) -> Normal64:
        mean, stddev = float(mean), float(stddev)
        if not math.isfinite(mean):
            raise ValueError(f"Normal64 mean must be finite, received {mean}.")
        if not (math.isfinite(stddev) and stddev > 0.0):
            raise ValueError(f"Normal64 stddev must be positive and finite, received {stddev}.")
        return cls(mean=mean, stddev=stddev)

    def sample(self, engine: Source64) -> float:
        if self.spare_valid:
            self.spare_valid = False
            return self.mean + self.stddev * self.spare_value

        # Accepts with probability pi/4; no iteration cap.
        while True:
            u = 1.0 - 2.0 * engine.next_f64()
            v = 1.0 - 2.0 * engine.next_f64()
            s = u * u + v * v
            if 0.0 < s < 1.0:
                break

        factor = float(np.sqrt(-2.0 * np.log(s) / s))
        self.spare_value = v * factor
        self.spare_valid = True
        return self.mean + self.stddev * (u * factor)
