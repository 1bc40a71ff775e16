"""Wall segments that block line of sight between lights."""

from dataclasses import dataclass, field
import numpy as np
from .lights import Point, to_point


def _cross(o, p, q):
    """z of (p - o) x (q - o), broadcast over leading axes."""
    return (p[..., 0] - o[..., 0]) * (q[..., 1] - o[..., 1]) - (
        p[..., 1] - o[..., 1]
    ) * (q[..., 0] - o[..., 0])


@dataclass(frozen=True, slots=True)
class Wall:
    start: Point
    end: Point

    def __post_init__(self):
        object.__setattr__(self, "start", to_point(self.start))
        object.__setattr__(self, "end", to_point(self.end))


@dataclass(frozen=True)
class WallSet:
    """
    An immutable collection of walls.

    Segment endpoints are also stored as an (N, 2, 2) array so that
    ``blocks`` can test one sight line against every wall at once.
    """

    walls: tuple[Wall, ...] = ()
    _segments: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        walls = tuple(w if isinstance(w, Wall) else Wall(*w) for w in self.walls)
        object.__setattr__(self, "walls", walls)
        segs = np.array(
            [[w.start.as_tuple(), w.end.as_tuple()] for w in walls], dtype=float
        ).reshape(-1, 2, 2)
        object.__setattr__(self, "_segments", segs)

    @classmethod
    def from_segments(cls, segments) -> "WallSet":
        """Build from an iterable of ((x1, y1), (x2, y2)) pairs."""
        return cls(tuple(Wall(a, b) for a, b in segments))

    def __len__(self):
        return len(self.walls)

    def __iter__(self):
        return iter(self.walls)

    def blocks(self, a: Point, b: Point, eps: float = 1e-10) -> bool:
        """
        True if the sight line a-b properly crosses any wall.
        Touching a wall at an endpoint does not block.
        """
        if not self.walls:
            return False
        b1 = self._segments[:, 0, :]
        b2 = self._segments[:, 1, :]
        pa = np.array(a.as_tuple())
        pb = np.array(b.as_tuple())
        d1 = _cross(b1, b2, pa)
        d2 = _cross(b1, b2, pb)
        d3 = _cross(pa, pb, b1)
        d4 = _cross(pa, pb, b2)
        return bool(np.any((d1 * d2 < -eps) & (d3 * d4 < -eps)))

    def visible_from_any(self, candidate: Point, lights) -> bool:
        """True if at least one of ``lights`` has a clear sight line to candidate."""
        return any(not self.blocks(light, candidate) for light in lights)
