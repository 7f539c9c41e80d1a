from .rng import RNGBackend, RNG, get_rng
from .noise import CoherentNoise
from .logging_utils import configure_logging, ColorFormatter


__all__ = [
    "rng",
    "noise",
    "logging_utils",
]
