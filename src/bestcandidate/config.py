"""
Configuration and type definitions for best-candidate circle packing.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np

# Fixed schedule of the reference algorithm
MAX_TOTAL_CIRCLES = 2500
MAX_TRIALS_PER_CANDIDATE = 5000
RADIUS_DECAY_FACTOR = 0.98
SAMPLE_GROWTH_FACTOR = 1.01


class ConfigurationError(ValueError):
    """Raised when a packer is constructed with invalid parameters."""


class Circle(NamedTuple):
    """An immutable placed (or candidate) circle."""
    x: float
    y: float
    radius: float

    def distance_to(self, other: "Circle") -> float:
        """Gap between the two rims; negative when the circles overlap."""
        return math.hypot(self.x - other.x, self.y - other.y) - (self.radius + other.radius)

    def __str__(self) -> str:
        return f"({self.x:6.1f}, {self.y:6.1f}) : {self.radius:7.2f}"


class PackingEventKind(Enum):
    """Kinds of diagnostic events emitted by the packer."""
    PLACED = "placed"
    LEVEL_ADVANCE = "level_advance"


class PackingEvent(NamedTuple):
    """Observational record handed to an ``on_event`` callback."""
    kind: PackingEventKind
    circle_index: int
    radius: float
    sample_size: float


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")


def _require_positive_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class PackingConfig:
    """
    Configuration parameters for the best-candidate packing algorithm.

    Radius schedule:
        min_radius: The run stops when a level runs out of room and the next
            radius would fall below this. A level advanced because it is full
            is not checked, so its circles may be smaller than min_radius.
        max_radius: Radius of the first level
        radius_decay: Multiplier applied to the radius on each level advance

    Candidate selection:
        initial_sample_size: Valid candidates drawn per circle on the first level
        sample_growth: Multiplier applied to the sample size on each level advance
        max_trials_per_candidate: Rejected samples tolerated before a level is exhausted
        sample_batch_size: Candidates drawn and scored per vectorized batch

    Limits:
        max_circles_per_radius: Circles placed at one radius before advancing
        max_total_circles: Hard cap on circles drawn over the run

    Output:
        verbose: Print progress to stdout
    """
    # Radius schedule
    min_radius: float = 1.0
    max_radius: float = 30.0
    radius_decay: float = RADIUS_DECAY_FACTOR

    # Candidate selection
    initial_sample_size: int = 30
    sample_growth: float = SAMPLE_GROWTH_FACTOR
    max_trials_per_candidate: int = MAX_TRIALS_PER_CANDIDATE
    sample_batch_size: int = 256

    # Limits
    max_circles_per_radius: int = 20
    max_total_circles: int = MAX_TOTAL_CIRCLES

    # Output
    verbose: bool = False

    def __post_init__(self) -> None:
        _require_positive("min_radius", self.min_radius)
        _require_positive("max_radius", self.max_radius)
        if self.min_radius > self.max_radius:
            raise ConfigurationError(
                f"min_radius ({self.min_radius}) must not exceed max_radius ({self.max_radius})"
            )
        if not 0 < self.radius_decay < 1:
            raise ConfigurationError(f"radius_decay must lie in (0, 1), got {self.radius_decay!r}")
        if not math.isfinite(self.sample_growth) or self.sample_growth < 1:
            raise ConfigurationError(f"sample_growth must be >= 1, got {self.sample_growth!r}")
        _require_positive_int("initial_sample_size", self.initial_sample_size)
        _require_positive_int("max_trials_per_candidate", self.max_trials_per_candidate)
        _require_positive_int("sample_batch_size", self.sample_batch_size)
        _require_positive_int("max_circles_per_radius", self.max_circles_per_radius)
        _require_positive_int("max_total_circles", self.max_total_circles)


@dataclass
class PackingProgress:
    """Tracks the current state of the packing algorithm."""
    current_radius: float
    sample_size: float
    circles_at_radius: int = 0
    circles_drawn: int = 0
    circles_placed: int = 0
    level: int = 0

    def advance_level(self, config: PackingConfig) -> None:
        """Shrink the radius and grow the sample size for the next level."""
        self.sample_size *= config.sample_growth
        self.current_radius *= config.radius_decay
        self.circles_at_radius = 0
        self.level += 1

    def __str__(self) -> str:
        return (
            f"[level {self.level}] Placed: {self.circles_placed} | Drawn: {self.circles_drawn} | "
            f"k = {self.sample_size:.2f}, r = {self.current_radius:.2f}"
        )
