"""Light positions: real placements and the unplaced sentinel."""

from dataclasses import dataclass
from math import hypot


@dataclass(frozen=True, slots=True)
class Point:
    """An immutable 2D light position."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @property
    def is_placed(self) -> bool:
        return True

    def distance_to(self, other: "Point") -> float:
        return hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Unplaced:
    """
    Marks a light slot that could not be filled.

    Only one instance exists (``UNPLACED``). It carries no coordinates, so
    geometry code cannot accidentally treat it as a position.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_placed(self) -> bool:
        return False

    def __repr__(self):
        return "UNPLACED"

    def __reduce__(self):
        return (Unplaced, ())


UNPLACED = Unplaced()

Light = Point | Unplaced

# (-1, -1) was historically written for empty slots
LEGACY_UNPLACED = (-1.0, -1.0)


def to_point(value) -> Point:
    """Coerce a Point or an (x, y) pair to a Point."""
    if isinstance(value, Point):
        return value
    try:
        x, y = value
    except (TypeError, ValueError) as e:
        raise TypeError(f"Cannot interpret {value!r} as a point") from e
    return Point(x, y)


def to_light(value) -> Light:
    """Coerce a value to a Light; None and a (-1, -1) pair become UNPLACED."""
    if value is None or value is UNPLACED:
        return UNPLACED
    if isinstance(value, Point):
        return value
    point = to_point(value)
    if point.as_tuple() == LEGACY_UNPLACED:
        return UNPLACED
    return point


def light_to_json(light: Light):
    return None if light is UNPLACED else [light.x, light.y]
