from dataclasses import dataclass, asdict, fields, replace
from enum import StrEnum


class SelectionMode(StrEnum):
    MAX = "max"
    WEIGHTED = "weighted"

    @classmethod
    def from_any(cls, arg):
        if isinstance(arg, cls):
            return arg
        try:
            return cls(str(arg).strip().lower())
        except ValueError as e:
            raise ValueError(
                f"Unknown selection mode {arg!r}. Valid modes are {[m.value for m in cls]}"
            ) from e


@dataclass(frozen=True, slots=True)
class SearchSettings:
    """Tunable constants of the configuration search."""

    base_radius: float = 20.0
    min_radius: float = 1.0
    radius_step: float = 1.0
    area_threshold: float = 0.0
    min_marginal_area: float = 1.0
    area_cap: float = 5000.0
    edge_point_resolution: int = 36
    max_iterations: int = 100
    configs_per_seed: int = 1
    max_results: int = 10
    selection: SelectionMode = SelectionMode.MAX
    seed: int | None = None
    n_workers: int = 1

    def __post_init__(self):
        object.__setattr__(self, "selection", SelectionMode.from_any(self.selection))
        if self.base_radius <= 0:
            raise ValueError("base_radius must be positive")
        if self.radius_step <= 0:
            raise ValueError("radius_step must be positive")
        if self.min_radius <= 0:
            raise ValueError("min_radius must be positive")
        if self.min_radius > self.base_radius:
            raise ValueError("min_radius cannot be larger than base_radius")
        if self.area_threshold < 0:
            raise ValueError("area_threshold must be non-negative")
        if self.edge_point_resolution < 4:
            raise ValueError("edge_point_resolution must be at least 4")
        for name in ("max_iterations", "configs_per_seed", "max_results", "n_workers"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer")

    def with_(self, **changes) -> "SearchSettings":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["selection"] = str(self.selection)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SearchSettings":
        keys = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in keys})
