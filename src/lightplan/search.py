"""Search over seed points for the best light configurations."""

from concurrent.futures import ThreadPoolExecutor
import threading
import warnings
import numpy as np
from .builder import BuildResult, ConfigurationBuilder
from .candidates import CandidateGenerator
from .configuration import LightConfiguration
from .geometry import GeometryOracle
from .lights import to_point
from .ranking import RankedConfigurationSet
from .settings import SearchSettings


class EmptySeedSetWarning(UserWarning):
    """No seed points were supplied to a search."""


class CancelToken:
    """Cooperative cancellation flag, checked once per seed."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class OptimumSearch:
    """
    Grows one configuration per seed and ranks the results by area covered.

    Example usage:
        oracle = DiskCoverageOracle(light_radius=20, bounds=(0, 0, 100, 100))
        search = OptimumSearch(seeds=[(50, 50), (20, 80)], num_lights=5, oracle=oracle)
        best = search.calc_optimum_config()
        top = search.calc_optimum_configs()

    Args:
        seeds: seed points, each a Point or (x, y) pair
        num_lights: lights per configuration
        oracle: GeometryOracle used for all scoring
        settings: SearchSettings; keyword overrides are applied on top
        cancel: optional CancelToken
    """

    def __init__(
        self,
        seeds,
        num_lights: int,
        oracle: GeometryOracle,
        settings: SearchSettings = None,
        cancel: CancelToken = None,
        **kwargs,
    ):
        if not isinstance(oracle, GeometryOracle):
            raise TypeError(f"Must be GeometryOracle, not {type(oracle).__name__}")
        if num_lights < 1:
            raise ValueError("num_lights must be a positive integer")
        settings = settings or SearchSettings()
        self.settings = settings.with_(**kwargs) if kwargs else settings
        self.oracle = oracle
        self.num_lights = int(num_lights)
        self.cancel = cancel or CancelToken()
        self.generator = CandidateGenerator(self.settings.edge_point_resolution)
        self.seeds = [to_point(s) for s in seeds]
        self.ranked = RankedConfigurationSet()
        self.results: list[BuildResult] = []

    def set_seeds(self, seeds):
        """Replace the seed points and drop any cached ranking."""
        self.seeds = [to_point(s) for s in seeds]
        self.ranked = RankedConfigurationSet()
        self.results = []

    def _builder(self, seed_idx: int, repeat: int) -> ConfigurationBuilder:
        if self.settings.seed is None:
            rng = np.random.default_rng()
        else:
            rng = np.random.default_rng([self.settings.seed, seed_idx, repeat])
        return ConfigurationBuilder(
            self.oracle,
            self.num_lights,
            settings=self.settings,
            generator=self.generator,
            rng=rng,
        )

    def _run_seed(self, seed_idx: int) -> list[BuildResult]:
        if self.cancel.cancelled:
            return []
        seed = self.seeds[seed_idx]
        return [
            self._builder(seed_idx, repeat).build(seed)
            for repeat in range(self.settings.configs_per_seed)
        ]

    def calc_optimum_config(self) -> LightConfiguration | None:
        """Run a fresh search and return the best configuration found."""
        if not self.seeds:
            warnings.warn("No seed lights!", EmptySeedSetWarning, stacklevel=2)
            return None

        self.ranked = RankedConfigurationSet()
        self.results = []
        indices = range(min(len(self.seeds), self.settings.max_iterations))
        if self.settings.n_workers > 1:
            with ThreadPoolExecutor(max_workers=self.settings.n_workers) as executor:
                batches = list(executor.map(self._run_seed, indices))
        else:
            batches = []
            for idx in indices:
                if self.cancel.cancelled:
                    break
                batches.append(self._run_seed(idx))

        # merging in seed order keeps tie order identical to a sequential run
        for batch in batches:
            for result in batch:
                self.results.append(result)
                if result.ok:
                    self.ranked.insert(result.configuration)
        return self.ranked.best

    def calc_optimum_configs(self, n: int = None) -> list[LightConfiguration]:
        """Return up to ``n`` best configurations, searching only if none are cached."""
        n = self.settings.max_results if n is None else n
        if len(self.ranked) == 0:
            if self.calc_optimum_config() is None:
                return []
        return self.ranked.top(n)


def calc_optimum_config(seeds, num_lights, oracle, **kwargs) -> LightConfiguration | None:
    """Convenience wrapper returning the best configuration for ``seeds``."""
    return OptimumSearch(seeds, num_lights, oracle, **kwargs).calc_optimum_config()


def calc_optimum_configs(seeds, num_lights, oracle, n=None, **kwargs) -> list[LightConfiguration]:
    return OptimumSearch(seeds, num_lights, oracle, **kwargs).calc_optimum_configs(n)
