"""Geometry primitives for page calculations.

All values are expressed in reference units (CSS pixels at 96 dpi).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @property
    def vertical(self) -> float:
        return self.top + self.bottom

    @property
    def horizontal(self) -> float:
        return self.left + self.right
