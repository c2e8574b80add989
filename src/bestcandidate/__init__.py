"""
bestcandidate - Best-candidate circle packing in a rectangle.

Usage:
    from bestcandidate import CirclePacker, PackingConfig

    # Reference configuration (320 x 540, radii 1..30, k = 30, 20 circles per radius)
    packer = CirclePacker(320, 540)
    circles = packer.pack()

    # Pull one circle at a time
    packer = CirclePacker(320, 540, PackingConfig(max_radius=20), seed=7)
    while (circle := packer.next_circle()) is not None:
        draw(circle)

Each call samples ``k`` non-overlapping candidates at the current radius and
keeps the one farthest from its nearest neighbour. The radius shrinks and
``k`` grows after a fixed number of circles, or when the radius stops fitting.
"""

from .config import (
    Circle,
    ConfigurationError,
    PackingConfig,
    PackingEvent,
    PackingEventKind,
    PackingProgress,
)
from .geometry import SamplingRegion, find_overlaps, nearest_clearance, nearest_clearances
from .packer import CirclePacker

__all__ = [
    "CirclePacker",
    "PackingConfig",
    "PackingProgress",
    "PackingEvent",
    "PackingEventKind",
    "ConfigurationError",
    "SamplingRegion",
    "nearest_clearance",
    "nearest_clearances",
    "find_overlaps",
    "Circle",
]

__version__ = "0.1.0"
