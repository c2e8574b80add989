import math
from typing import Callable, Iterator, List, Optional, Tuple, Union

import numpy as np

from .config import (
    Circle,
    ConfigurationError,
    PackingConfig,
    PackingEvent,
    PackingEventKind,
    PackingProgress,
)
from .geometry import SamplingRegion, as_arrays, nearest_clearance, nearest_clearances

SeedLike = Union[None, int, np.random.Generator]
EventCallback = Callable[[PackingEvent], None]


class CirclePacker:
    """Packs non-overlapping circles into a rectangle by best-candidate sampling."""

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[PackingConfig] = None,
        seed: SeedLike = None,
        on_event: Optional[EventCallback] = None,
    ):
        for name, value in (("width", width), ("height", height)):
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")

        self.config = config or PackingConfig()
        self.region = SamplingRegion(float(width), float(height))
        self.rng = np.random.default_rng(seed)
        self.on_event = on_event
        self.progress = PackingProgress(
            current_radius=float(self.config.max_radius),
            sample_size=float(self.config.initial_sample_size),
        )
        self.exhausted = False
        self._circles: List[Circle] = []

        self._centers_arr, self._radii_arr = as_arrays(self._circles)

        if self.config.verbose:
            print(f"k = {self.progress.sample_size:f}, r = {self.progress.current_radius:f}")

    @classmethod
    def from_dimensions(
        cls,
        width: float,
        height: float,
        min_radius: float,
        max_radius: float,
        initial_sample_size: int,
        max_circles_per_radius: int,
        **kwargs,
    ) -> "CirclePacker":
        """Build a packer from the six reference parameters.

        Remaining keyword arguments go to ``PackingConfig`` unless they are
        ``seed`` or ``on_event``, which go to the packer itself.
        """
        seed = kwargs.pop("seed", None)
        on_event = kwargs.pop("on_event", None)
        config = PackingConfig(
            min_radius=min_radius,
            max_radius=max_radius,
            initial_sample_size=initial_sample_size,
            max_circles_per_radius=max_circles_per_radius,
            **kwargs,
        )
        return cls(width, height, config, seed=seed, on_event=on_event)

    @property
    def circles(self) -> Tuple[Circle, ...]:
        """Circles placed so far, in placement order."""
        return tuple(self._circles)

    def _emit(self, kind: PackingEventKind) -> None:
        if self.on_event is not None:
            self.on_event(PackingEvent(
                kind=kind,
                circle_index=len(self._circles) - 1,
                radius=self.progress.current_radius,
                sample_size=self.progress.sample_size,
            ))

    def _advance_level(self) -> None:
        self.progress.advance_level(self.config)
        if self.config.verbose:
            print(f"Next radius: k = {self.progress.sample_size:f}, r = {self.progress.current_radius:f}")
        self._emit(PackingEventKind.LEVEL_ADVANCE)

    def clearance(self, candidate: Circle) -> float:
        """Gap between ``candidate`` and its nearest placed circle (-1.0 on overlap)."""
        return nearest_clearance(candidate, self._circles)

    def _find_best_candidate(self) -> Optional[Circle]:
        """
        Draw valid candidates at the current radius until the sample size is met
        and keep the one farthest from its nearest neighbour.

        Returns None when ``max_trials_per_candidate`` samples in a row overlap,
        meaning the current radius no longer fits anywhere.
        """
        radius = self.progress.current_radius
        sample_size = self.progress.sample_size
        max_trials = self.config.max_trials_per_candidate
        batch_size = self.config.sample_batch_size

        best_circle: Optional[Circle] = None
        best_distance = 0.0
        valid_count = 0
        trials = 0

        # The placed set is fixed for the whole call, so candidates are drawn and
        # scored in batches and then consumed one by one in draw order.
        while True:
            points = self.region.sample_centers(self.rng, batch_size)
            clearances = nearest_clearances(points, radius, self._centers_arr, self._radii_arr)

            for (x, y), distance in zip(points.tolist(), clearances.tolist()):
                trials += 1
                if trials > max_trials:
                    return None
                if distance < 0:
                    continue

                trials = 0
                valid_count += 1
                if distance > best_distance:
                    best_distance = distance
                    best_circle = Circle(x, y, radius)
                if valid_count >= sample_size:
                    return best_circle

    def _place_circle(self, circle: Circle) -> None:
        self._circles.append(circle)
        self._centers_arr = np.vstack([self._centers_arr, (circle.x, circle.y)])
        self._radii_arr = np.append(self._radii_arr, circle.radius)
        self.progress.circles_at_radius += 1
        self.progress.circles_placed += 1

        if self.config.verbose:
            print(f"({self.progress.circles_drawn:4d}) Added circle:  {circle}.")
        self._emit(PackingEventKind.PLACED)

    def _finish(self, reason: str) -> None:
        self.exhausted = True
        if self.config.verbose:
            print(f"Done! {reason}. {self.progress}")

    def next_circle(self) -> Optional[Circle]:
        """
        Produce the next circle of the packing.

        Returns:
            The newly placed circle, or None once the run is exhausted (the
            total cap was reached or no radius >= ``min_radius`` still fits).
        """
        if self.exhausted:
            return None

        if self.progress.circles_at_radius > self.config.max_circles_per_radius:
            self._advance_level()

        while True:
            self.progress.circles_drawn += 1
            if self.progress.circles_drawn > self.config.max_total_circles:
                self._finish(f"{self.config.max_total_circles} circles drawn")
                return None

            circle = self._find_best_candidate()
            if circle is None:
                self._advance_level()
                if self.progress.current_radius < self.config.min_radius:
                    self._finish("No room left at any radius")
                    return None
                continue

            self._place_circle(circle)
            return circle

    def generate(self) -> Iterator[Circle]:
        """
        Generate circles until the packer is exhausted.

        Yields:
            Each placed circle, in placement order.
        """
        while True:
            circle = self.next_circle()
            if circle is None:
                return
            yield circle

    def __iter__(self) -> Iterator[Circle]:
        return self.generate()

    def pack(self) -> List[Circle]:
        """Pack circles and return them as a list."""
        return list(self.generate())
