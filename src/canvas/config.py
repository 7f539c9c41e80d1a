"""
config.py - Configuration dataclass for drawing surfaces.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CanvasConfig:
    """Immutable settings used to build a Canvas."""
    width: int = 400
    height: int = 400
    dpi: int = 100
    background: Any = "white"
    antialiased: bool = True
    seed: Optional[int] = None
    logger_level: int = logging.INFO

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}.")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got {self.dpi}.")
