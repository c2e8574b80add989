"""
Geometry utilities for best-candidate packing.

Contains:
- SamplingRegion: the rectangle candidate centers are drawn from
- nearest_clearances: vectorized distance from a batch of candidates to their nearest neighbours
- nearest_clearance: the same for a single candidate, in pure Python
- find_overlaps: pairwise overlap check over a finished packing
"""

import sys
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .config import Circle

# Reported clearance for a candidate that overlaps an existing circle
OVERLAP = -1.0

# Clearance of a candidate when nothing has been placed yet
UNBOUNDED_CLEARANCE = sys.float_info.max


@dataclass(frozen=True)
class SamplingRegion:
    """Half-open rectangle [0, width) x [0, height) for candidate centers."""
    width: float
    height: float

    def sample_centers(self, rng: np.random.Generator, count: int) -> np.ndarray:
        """Draw ``count`` centers as a (count, 2) array."""
        return rng.uniform((0.0, 0.0), (self.width, self.height), size=(count, 2))


def nearest_clearances(
    points: np.ndarray, radius: float, centers: np.ndarray, radii: np.ndarray
) -> np.ndarray:
    """
    Vectorized distance from candidate circles to their nearest existing circle.

    Args:
        points: (m, 2) array of candidate centers, all of radius ``radius``.
        centers: (n, 2) array of placed centers.
        radii: (n,) array of placed radii.

    Returns:
        (m,) array holding the smallest rim-to-rim gap of each candidate,
        ``OVERLAP`` where a candidate intersects any placed circle, or
        ``UNBOUNDED_CLEARANCE`` everywhere when nothing is placed.
    """
    if len(centers) == 0:
        return np.full(len(points), UNBOUNDED_CLEARANCE)

    gaps = np.hypot(
        points[:, 0, np.newaxis] - centers[np.newaxis, :, 0],
        points[:, 1, np.newaxis] - centers[np.newaxis, :, 1],
    ) - (radii[np.newaxis, :] + radius)
    min_gaps = np.min(gaps, axis=1)
    return np.where(min_gaps < 0.0, OVERLAP, min_gaps)


def nearest_clearance(candidate: Circle, circles: Sequence[Circle]) -> float:
    """
    Distance from one candidate to the nearest circle in ``circles``.

    Scans in order and stops at the first overlap. Used for one-off
    queries; the packer itself goes through ``nearest_clearances``.
    """
    smallest = UNBOUNDED_CLEARANCE
    for circle in circles:
        gap = candidate.distance_to(circle)
        if gap < 0.0:
            return OVERLAP
        smallest = min(smallest, gap)
    return smallest


def as_arrays(circles: Sequence[Circle]) -> Tuple[np.ndarray, np.ndarray]:
    """Split circles into a (n, 2) centers array and a (n,) radii array."""
    if len(circles) == 0:
        return np.empty((0, 2)), np.empty(0)
    data = np.asarray(circles, dtype=float)
    return data[:, :2], data[:, 2]


def find_overlaps(circles: Sequence[Circle], tolerance: float = 1e-9) -> List[Tuple[int, int]]:
    """Index pairs (i, j), i < j, of circles that overlap by more than ``tolerance``."""
    centers, radii = as_arrays(circles)
    pairs = []
    # One row at a time keeps memory linear for full-size packings
    for i in range(len(centers) - 1):
        dists = np.linalg.norm(centers[i + 1:] - centers[i], axis=1)
        min_allowed = radii[i + 1:] + radii[i]
        for offset in np.nonzero(dists < min_allowed - tolerance)[0]:
            pairs.append((i, i + 1 + int(offset)))
    return pairs
