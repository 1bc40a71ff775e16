"""Greedy growth of a single light configuration from one seed."""

from dataclasses import dataclass, field
from enum import Enum, StrEnum
import numpy as np
from .candidates import CandidateGenerator
from .configuration import LightConfiguration
from .geometry import GeometryOracle
from .lights import Light, Point, to_light
from .settings import SearchSettings, SelectionMode


class BuildStatus(StrEnum):
    COMPLETE = "complete"
    EXHAUSTED = "exhausted"  # radius back-off ran out, remaining slots unplaced
    CAPPED = "capped"  # area cap reached, remaining slots unplaced
    UNPLACEABLE = "unplaceable"


class BuildState(Enum):
    GROWING = "growing"
    BACKING_OFF = "backing_off"
    TERMINAL = "terminal"


@dataclass
class CandidateScore:
    point: Point | None = None
    marginal_area: float = -1.0


@dataclass(frozen=True)
class BuildResult:
    """Outcome of growing one seed."""

    status: BuildStatus
    configuration: LightConfiguration | None
    seed: Light

    @property
    def ok(self) -> bool:
        return self.configuration is not None

    @property
    def is_partial(self) -> bool:
        return self.status in (BuildStatus.EXHAUSTED, BuildStatus.CAPPED)


@dataclass
class SearchContext:
    """Mutable state of one build. Created per seed and discarded afterwards."""

    configuration: LightConfiguration
    radius: float
    lights_added: int = 1
    pool: list[CandidateScore] = field(default_factory=list)
    total_area: float = 0.0
    refresh_due: bool = False
    state: BuildState = BuildState.GROWING
    status: BuildStatus | None = None
    _pooled: set = field(default_factory=set, repr=False)

    def contains(self, point: Point) -> bool:
        return point in self._pooled

    def push(self, candidate: CandidateScore):
        self.pool.append(candidate)
        self._pooled.add(candidate.point)
        self.total_area += candidate.marginal_area

    def discard(self, candidate: CandidateScore):
        self.pool.remove(candidate)
        self._pooled.discard(candidate.point)
        self.total_area -= candidate.marginal_area

    def retain(self, survivors: list[CandidateScore]):
        self.pool = survivors
        self._pooled = {c.point for c in survivors}
        self.total_area = sum(c.marginal_area for c in survivors)

    def finish(self, status: BuildStatus):
        self.state = BuildState.TERMINAL
        self.status = status


class ConfigurationBuilder:
    """
    Grows one configuration of ``num_lights`` lights from a seed.

    Each round samples a ring of candidates around the newest light, keeps
    the reachable ones that add area, and places the candidate adding the
    most. When nothing useful is found the sampling radius shrinks and every
    earlier light is re-sampled at the smaller radius. Once the radius drops
    below ``min_radius`` (or the area cap is exceeded) the remaining slots
    are filled with UNPLACED.

    Args:
        oracle: GeometryOracle scoring candidates
        num_lights: target light count
        settings: SearchSettings; defaults are used when None
        generator: CandidateGenerator; built from the settings when None
        rng: numpy Generator used only by weighted selection
    """

    def __init__(
        self,
        oracle: GeometryOracle,
        num_lights: int,
        settings: SearchSettings = None,
        generator: CandidateGenerator = None,
        rng: np.random.Generator = None,
    ):
        if not isinstance(oracle, GeometryOracle):
            raise TypeError(f"Must be GeometryOracle, not {type(oracle).__name__}")
        if num_lights < 1:
            raise ValueError("num_lights must be a positive integer")
        self.oracle = oracle
        self.num_lights = int(num_lights)
        self.settings = settings or SearchSettings()
        self.generator = generator or CandidateGenerator(self.settings.edge_point_resolution)
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)

    def build(self, seed) -> BuildResult:
        seed = to_light(seed)
        if not seed.is_placed or (
            self.oracle.marginal_area(seed, ()) <= self.settings.area_threshold
        ):
            return BuildResult(BuildStatus.UNPLACEABLE, None, seed)

        config = LightConfiguration(self.oracle, [seed], capacity=self.num_lights)
        ctx = SearchContext(configuration=config, radius=self.settings.base_radius)
        while ctx.state is not BuildState.TERMINAL:
            if ctx.state is BuildState.GROWING:
                self._grow(ctx)
            else:
                self._back_off(ctx)
        return BuildResult(ctx.status, config, seed)

    # ---- state transitions ----

    def _grow(self, ctx: SearchContext):
        if ctx.lights_added >= self.num_lights:
            ctx.finish(BuildStatus.COMPLETE)
            return
        if ctx.refresh_due:
            self._refresh(ctx)
        self._expand(ctx, ctx.lights_added - 1)
        best = self._select(ctx)
        if best.marginal_area < self.settings.min_marginal_area:
            ctx.state = BuildState.BACKING_OFF
            return
        self._accept(ctx, best)

    def _back_off(self, ctx: SearchContext):
        ctx.radius -= self.settings.radius_step
        if ctx.radius < self.settings.min_radius:
            ctx.configuration.fill_unplaced()
            ctx.finish(BuildStatus.EXHAUSTED)
            return
        # re-sample earlier lights; the newest one is sampled on the next grow
        for idx in range(ctx.lights_added - 1):
            self._expand(ctx, idx)
        ctx.refresh_due = False
        ctx.state = BuildState.GROWING

    def _accept(self, ctx: SearchContext, best: CandidateScore):
        config = ctx.configuration
        config.add_light(best.point)
        ctx.discard(best)
        ctx.lights_added += 1
        ctx.radius = self.settings.base_radius
        ctx.refresh_due = True
        if config.area_covered > self.settings.area_cap:
            if config.is_full:
                ctx.finish(BuildStatus.COMPLETE)
            else:
                config.fill_unplaced()
                ctx.finish(BuildStatus.CAPPED)

    # ---- candidate pool ----

    def _refresh(self, ctx: SearchContext):
        """Re-score pooled candidates against the current lights."""
        placed = ctx.configuration.placed
        survivors = []
        for candidate in ctx.pool:
            area = self.oracle.marginal_area(candidate.point, placed)
            if area > self.settings.area_threshold:
                candidate.marginal_area = area
                survivors.append(candidate)
        ctx.retain(survivors)

    def _expand(self, ctx: SearchContext, index: int):
        config = ctx.configuration
        placed = config.placed
        for point in self.generator.around(config, index, ctx.radius):
            if ctx.contains(point) or not self.oracle.is_reachable(point, config):
                continue
            area = self.oracle.marginal_area(point, placed)
            if area > self.settings.area_threshold:
                ctx.push(CandidateScore(point, area))

    def _select(self, ctx: SearchContext) -> CandidateScore:
        if self.settings.selection is SelectionMode.WEIGHTED:
            return self._select_weighted(ctx)
        best = CandidateScore()
        for candidate in ctx.pool:
            if candidate.marginal_area > best.marginal_area:
                best = candidate
        return best

    def _select_weighted(self, ctx: SearchContext) -> CandidateScore:
        """Draw a usable candidate with probability proportional to its marginal area."""
        eligible = [
            c for c in ctx.pool if c.marginal_area >= self.settings.min_marginal_area
        ]
        if not eligible:
            return CandidateScore()
        weights = np.array([c.marginal_area for c in eligible])
        idx = self.rng.choice(len(eligible), p=weights / weights.sum())
        return eligible[idx]
