"""
rng.py
------

Lock-protected random generator used by drawing surfaces.

- Supports both `random.Random` and `numpy.random.Generator` backends.
- Scalar calls return plain Python numbers regardless of backend.
- One instance per surface keeps texture randomness reproducible with
  `seed()` without touching the module-level `random` state.
"""

from __future__ import annotations

__all__ = ["RNGBackend", "RNG", "get_rng",]

import os
import time
import random
import threading
from numbers import Real, Integral
from typing import Any, Optional, TypeAlias, Union

import numpy as np

# ---------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------
RNGBackend: TypeAlias = Union[random.Random, np.random.Generator]


def _entropy_seed() -> int:
    return os.getpid() ^ (time.time_ns() & 0xFFFFFFFF) ^ random.getrandbits(32)


# ---------------------------------------------------------------------
# RNG class
# ---------------------------------------------------------------------
class RNG:
    """Encapsulated, thread-safe hybrid random generator.

    Attributes:
        _rng:  Backend RNG (random.Random or numpy.random.Generator).
        _lock: threading.Lock for safe concurrent access.

    Notes:
        - Uses the stdlib backend by default.
        - `use_numpy=True` switches to `numpy.random.default_rng`, which
          also enables array sampling through `size=`.
    """

    def __init__(self, seed: Optional[int] = None, use_numpy: bool = False):
        self._lock = threading.Lock()
        self._use_numpy = use_numpy
        seed_val = _entropy_seed() if seed is None else seed
        if use_numpy:
            self._rng: RNGBackend = np.random.default_rng(seed_val)
        else:
            self._rng: RNGBackend = random.Random(seed_val)

    # -----------------------------------------------------------------
    # Core seeding
    # -----------------------------------------------------------------
    def seed(self, seed: Optional[int] = None) -> None:
        """Reinitialize the RNG in place (preserves object identity)."""
        with self._lock:
            seed_val = _entropy_seed() if seed is None else seed
            if self._use_numpy:
                self._rng = np.random.default_rng(seed_val)
            else:
                self._rng.seed(seed_val)

    # -----------------------------------------------------------------
    # Basic random methods
    # -----------------------------------------------------------------
    @staticmethod
    def _scalar(out: Any) -> Any:
        # 0-D numpy results are unwrapped, arrays pass through.
        if isinstance(out, Integral):
            return int(out)
        if isinstance(out, Real):
            return float(out)
        return out

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        with self._lock:
            return float(self._rng.random())

    def uniform(self, low: float = 0.0, high: float = 1.0, **kw) -> Union[float, np.ndarray]:
        """Uniform value in [low, high), or an array when `size=` is given."""
        with self._lock:
            if self._use_numpy:
                return self._scalar(self._rng.uniform(low, high, **kw))
            return self._rng.uniform(low, high)

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both ends inclusive."""
        with self._lock:
            if self._use_numpy:
                return int(self._rng.integers(a, b + 1))
            return self._rng.randint(a, b)

    def normal(self, mean: float = 0.0, sd: float = 1.0) -> float:
        with self._lock:
            if self._use_numpy:
                return float(self._rng.normal(mean, sd))
            return self._rng.normalvariate(mean, sd)

    def choice(self, seq) -> Any:
        if len(seq) == 0:
            raise ValueError("Cannot choose from an empty sequence.")
        with self._lock:
            if self._use_numpy:
                return seq[int(self._rng.integers(0, len(seq)))]
            return self._rng.choice(seq)

    # -----------------------------------------------------------------
    # Utility & Introspection
    # -----------------------------------------------------------------
    def getstate(self):
        with self._lock:
            if self._use_numpy:
                return self._rng.bit_generator.state
            return self._rng.getstate()

    def setstate(self, state) -> None:
        with self._lock:
            if self._use_numpy:
                self._rng.bit_generator.state = state
            else:
                self._rng.setstate(state)

    def __repr__(self) -> str:
        backend = "numpy" if self._use_numpy else "stdlib"
        return f"<RNG backend={backend} id={id(self)}>"


# =============================================================================
# GLOBAL & THREAD-LOCAL ACCESSORS
# =============================================================================
_global_rng = RNG()
_thread_local = threading.local()


def get_rng(thread_safe: bool = False, use_numpy: bool = False) -> RNG:
    """Return an RNG instance (shared or per-thread)."""
    if thread_safe:
        if not hasattr(_thread_local, "rng"):
            _thread_local.rng = RNG(use_numpy=use_numpy)
        return _thread_local.rng
    return _global_rng
