"""
noise.py
--------

Smooth, seeded coherent noise for procedural textures.

The field is a mean of sinusoidal modes at randomized phases and
frequencies, layered over a few octaves. It approximates Perlin-style
noise well enough for texture jitter (dot sizes, soft gradients) and
stays cheap to evaluate for both scalars and numpy arrays.
"""

from __future__ import annotations

__all__ = ["CoherentNoise"]

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import numpy as np

numeric = Union[int, float]


@dataclass(frozen=True)
class CoherentNoise:
    """Seeded smooth noise field with values in [0, 1].

    Args:
        seed:
            RNG seed for a reproducible field. None draws fresh entropy.

        n_modes:
            Number of sinusoidal modes per octave.

        min_freq, max_freq:
            Frequency bounds of the first octave (cycles per unit).

        octaves:
            Number of layered octaves. Each octave doubles the frequency.

        falloff:
            Amplitude multiplier applied per octave.
    """

    seed: Optional[int] = None
    n_modes: int = 6
    min_freq: float = 0.3
    max_freq: float = 1.2
    octaves: int = 4
    falloff: float = 0.5
    _params: Tuple[np.ndarray, np.ndarray] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.n_modes < 1 or self.octaves < 1:
            raise ValueError(f"n_modes and octaves must be >= 1, got {self.n_modes}, {self.octaves}.")
        if not 0 < self.falloff <= 1:
            raise ValueError(f"falloff must be in (0, 1], got {self.falloff}.")
        rng = np.random.default_rng(self.seed)
        freqs = rng.uniform(self.min_freq, self.max_freq, size=(self.n_modes, 2))
        signs = rng.choice((-1.0, 1.0), size=(self.n_modes, 2))
        phases = rng.uniform(0.0, 2 * math.pi, size=(self.octaves, self.n_modes))
        object.__setattr__(self, "_params", (freqs * signs, phases))

    def values(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Evaluate the field on broadcastable coordinate arrays."""
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        freqs, phases = self._params

        total = np.zeros(np.broadcast(x, y).shape, dtype=float)
        norm = 0.0
        amp = 1.0
        for octave in range(self.octaves):
            scale = 2.0 ** octave
            arg = 2 * math.pi * scale * (x[..., None] * freqs[:, 0] + y[..., None] * freqs[:, 1])
            total = total + amp * np.sin(arg + phases[octave]).mean(axis=-1)
            norm += amp
            amp *= self.falloff

        # mean of sines sits in [-1, 1]; squash into [0, 1]
        return np.clip(0.5 + 0.5 * total / norm, 0.0, 1.0)

    def __call__(self, x: numeric, y: numeric = 0.0) -> float:
        return float(self.values(np.asarray(x), np.asarray(y)))
