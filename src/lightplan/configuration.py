from .geometry import GeometryOracle, placed_lights
from .lights import UNPLACED, Light, Point, light_to_json, to_light, to_point


class LightConfiguration:
    """
    An ordered arrangement of lights; insertion order is placement order.

    Geometry questions are delegated to the oracle. Unplaced slots are kept
    in ``lights`` but never take part in area or reachability calculations.

    Args:
        oracle: GeometryOracle used for area and reachability
        lights: initial lights
        capacity: target light count; adding beyond it raises ValueError
    """

    def __init__(self, oracle: GeometryOracle, lights=(), capacity: int | None = None):
        if not isinstance(oracle, GeometryOracle):
            raise TypeError(f"Must be GeometryOracle, not {type(oracle).__name__}")
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be a positive integer")
        self.oracle = oracle
        self.capacity = capacity
        self._lights: list[Light] = []
        self._area = None
        for light in lights:
            self._append(to_light(light))

    def __repr__(self):
        return (
            f"LightConfiguration(placed={self.num_placed}, "
            f"unplaced={self.num_unplaced}, area={self.area_covered:.2f})"
        )

    def __len__(self):
        return len(self._lights)

    def __iter__(self):
        return iter(self._lights)

    def __getitem__(self, idx):
        return self._lights[idx]

    def copy(self) -> "LightConfiguration":
        return LightConfiguration(self.oracle, self._lights, capacity=self.capacity)

    @property
    def lights(self) -> tuple[Light, ...]:
        return tuple(self._lights)

    @property
    def placed(self) -> tuple[Point, ...]:
        return placed_lights(self._lights)

    @property
    def num_placed(self) -> int:
        return sum(1 for light in self._lights if light.is_placed)

    @property
    def num_unplaced(self) -> int:
        return len(self._lights) - self.num_placed

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self._lights) >= self.capacity

    @property
    def area_covered(self) -> float:
        if self._area is None:
            self._area = self.oracle.area_covered(self)
        return self._area

    def _append(self, light: Light):
        if self.is_full:
            raise ValueError(f"Configuration already holds {self.capacity} lights")
        self._lights.append(light)
        if light.is_placed:
            self._area = None

    def add_light(self, p) -> "LightConfiguration":
        """Append a real light and return self for chaining."""
        self._append(to_point(p))
        return self

    def fill_unplaced(self, n: int | None = None) -> "LightConfiguration":
        """Pad with UNPLACED slots; by default up to capacity."""
        if n is None:
            if self.capacity is None:
                raise ValueError("n is required when the configuration has no capacity")
            n = self.capacity - len(self._lights)
        for _ in range(n):
            self._append(UNPLACED)
        return self

    def is_reachable(self, p: Point) -> bool:
        return self.oracle.is_reachable(to_point(p), self)

    def marginal_area(self, p: Point) -> float:
        return self.oracle.marginal_area(to_point(p), self.placed)

    def to_dict(self) -> dict:
        return {
            "lights": [light_to_json(light) for light in self._lights],
            "capacity": self.capacity,
            "area_covered": self.area_covered,
        }

    @classmethod
    def from_dict(cls, data: dict, oracle: GeometryOracle) -> "LightConfiguration":
        return cls(oracle, data.get("lights", []), capacity=data.get("capacity"))
