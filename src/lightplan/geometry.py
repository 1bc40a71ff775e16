"""Coverage geometry used to score light placements."""

from abc import ABC, abstractmethod
from shapely.geometry import Point as ShapelyPoint, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from .lights import Point
from .walls import WallSet


def placed_lights(lights) -> tuple[Point, ...]:
    """Real placements only, in order; accepts a configuration or any iterable."""
    lights = getattr(lights, "lights", lights)
    return tuple(light for light in lights if light.is_placed)


class GeometryOracle(ABC):
    """
    Answers the three geometric questions the configuration search asks.

    Implementations must ignore unplaced entries wherever a collection of
    lights is passed in.
    """

    @abstractmethod
    def is_reachable(self, candidate: Point, configuration) -> bool:
        """Whether a light at ``candidate`` is unobstructed given the configuration."""

    @abstractmethod
    def marginal_area(self, candidate: Point, existing_lights) -> float:
        """Area ``candidate`` would add to the coverage of ``existing_lights``."""

    @abstractmethod
    def area_covered(self, configuration) -> float:
        """Total area covered by all placed lights of ``configuration``."""


class DiskCoverageOracle(GeometryOracle):
    """
    Each light covers a disk of ``light_radius``, optionally clipped to a board.

    Args:
        light_radius: coverage radius of a single light
        walls: WallSet (or iterable of segments) blocking line of sight
        bounds: board outline; an (x_min, y_min, x_max, y_max) tuple or any
            shapely polygon. Candidates outside it are unreachable and
            coverage outside it does not count.
        quad_segs: segments per quarter circle used to approximate disks
    """

    def __init__(self, light_radius=20.0, walls=None, bounds=None, quad_segs=16, cache_size=4096):
        if light_radius <= 0:
            raise ValueError("light_radius must be positive")
        if quad_segs < 1:
            raise ValueError("quad_segs must be a positive integer")
        self.light_radius = float(light_radius)
        if walls is None:
            walls = WallSet()
        elif not isinstance(walls, WallSet):
            walls = WallSet.from_segments(walls)
        self.walls = walls
        if bounds is not None and not isinstance(bounds, BaseGeometry):
            bounds = box(*bounds)
        self.bounds = bounds
        self.quad_segs = int(quad_segs)
        self.cache_size = cache_size
        self._cache = {}

    def __repr__(self):
        return (
            f"DiskCoverageOracle(light_radius={self.light_radius}, "
            f"walls={len(self.walls)}, bounds={self.bounds})"
        )

    def disk(self, light: Point):
        shape = ShapelyPoint(light.x, light.y).buffer(
            self.light_radius, quad_segs=self.quad_segs
        )
        if self.bounds is not None:
            shape = shape.intersection(self.bounds)
        return shape

    def coverage(self, lights):
        """Union of the coverage disks of the placed lights, cached by light tuple."""
        key = placed_lights(lights)
        shape = self._cache.get(key)
        if shape is not None:
            return shape
        if len(self._cache) >= self.cache_size:
            self._cache.clear()
        shape = unary_union([self.disk(light) for light in key])
        self._cache[key] = shape
        return shape

    def in_bounds(self, p: Point) -> bool:
        if self.bounds is None:
            return True
        return self.bounds.covers(ShapelyPoint(p.x, p.y))

    def is_reachable(self, candidate: Point, configuration) -> bool:
        if not candidate.is_placed or not self.in_bounds(candidate):
            return False
        lights = placed_lights(configuration)
        if not lights:
            return True
        return self.walls.visible_from_any(candidate, lights)

    def marginal_area(self, candidate: Point, existing_lights) -> float:
        if not candidate.is_placed:
            return 0.0
        current = self.coverage(existing_lights)
        return current.union(self.disk(candidate)).area - current.area

    def area_covered(self, configuration) -> float:
        return self.coverage(configuration).area
