from .batch import raw_array, sample_array, unit_array
from .engine32 import Engine32
from .engine64 import Engine64
from .normal import Normal64
from .streams import spawn_engines
from .uniform import UniformFloat32, UniformFloat64, UniformInt32, UniformInt64

__all__ = [
    "Engine32",
    "Engine64",
    "UniformInt32",
    "UniformInt64",
    "UniformFloat32",
    "UniformFloat64",
    "Normal64",
    "raw_array",
    "unit_array",
    "sample_array",
    "spawn_engines",
]
