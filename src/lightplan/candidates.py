"""Ring sampling of candidate light positions around placed lights."""

from collections.abc import Iterator
import numpy as np
from .lights import Point


def ring_angles(resolution: int = 36) -> np.ndarray:
    """
    Angles in degrees from -90 to 90 at a step of 360 / resolution.

    Each angle is later mirrored to the left and right of the center, so
    the returned half-circle covers the full ring.
    """
    if resolution < 1:
        raise ValueError("resolution must be a positive integer")
    increment = 360.0 / resolution
    n = int(90 / increment)
    return np.arange(-n, n + 1) * increment


def ring_points(center: Point, radius: float, resolution: int = 36) -> Iterator[Point]:
    """
    Yield points on the circle of ``radius`` about ``center``.

    For every angle both mirror points are produced: x is offset left and
    right by r*cos|angle|, and y takes the lower root of the circle for
    negative angles and the upper root otherwise.
    """
    if radius <= 0:
        raise ValueError("radius must be positive")
    angles = ring_angles(resolution)
    dx = radius * np.cos(np.radians(np.abs(angles)))
    # clip so round-off at |angle| = 0 cannot produce a negative radicand
    dy = np.sqrt(np.clip(radius**2 - dx**2, 0.0, None))
    dy = np.where(angles < 0, -dy, dy)
    for offset_x, offset_y in zip(dx, dy):
        yield Point(center.x - offset_x, center.y + offset_y)
        yield Point(center.x + offset_x, center.y + offset_y)


class CandidateGenerator:
    """Produces ring candidates around a given light of a configuration."""

    def __init__(self, resolution: int = 36):
        if resolution < 1:
            raise ValueError("resolution must be a positive integer")
        self.resolution = int(resolution)

    def __call__(self, center: Point, radius: float) -> Iterator[Point]:
        return ring_points(center, radius, self.resolution)

    def around(self, configuration, index: int, radius: float) -> Iterator[Point]:
        """Candidates around the light at ``index`` of the configuration."""
        center = configuration.lights[index]
        if not center.is_placed:
            return iter(())
        return ring_points(center, radius, self.resolution)
