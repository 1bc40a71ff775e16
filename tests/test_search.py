"""Tests for the seed search driver"""

import pytest
from lightplan import (
    CancelToken,
    EmptySeedSetWarning,
    OptimumSearch,
    Point,
    SearchSettings,
    calc_optimum_config,
    calc_optimum_configs,
)


class TestOptimumSearch:
    def test_best_of_two_seeds(self, table_oracle):
        search = OptimumSearch([(0, 0), (10, 10)], 1, table_oracle)
        best = search.calc_optimum_config()
        assert best.area_covered == pytest.approx(1200)
        configs = search.calc_optimum_configs()
        assert configs[0] is best
        assert [c.area_covered for c in configs] == [1200, 800]

    def test_partial_configurations_are_ranked(self, table_oracle):
        configs = calc_optimum_configs([(0, 0), (10, 10)], 3, table_oracle)
        assert [c.area_covered for c in configs] == [1200, 800]
        assert all(len(c) == 3 for c in configs)

    def test_unplaceable_seeds_are_skipped(self, table_oracle):
        search = OptimumSearch([(7, 7), (0, 0)], 1, table_oracle)
        best = search.calc_optimum_config()
        assert best.placed == (Point(0, 0),)
        assert len(search.results) == 2
        assert len(search.ranked) == 1

    def test_all_seeds_unplaceable(self, table_oracle):
        assert calc_optimum_config([(7, 7)], 2, table_oracle) is None

    def test_empty_seed_set_warns(self, open_oracle):
        search = OptimumSearch([], 3, open_oracle)
        with pytest.warns(EmptySeedSetWarning, match="No seed lights"):
            assert search.calc_optimum_config() is None
        with pytest.warns(EmptySeedSetWarning):
            assert search.calc_optimum_configs() == []

    def test_configs_are_cached(self, board_oracle):
        search = OptimumSearch([(20, 20), (80, 20), (50, 90)], 3, board_oracle)
        first = search.calc_optimum_configs()
        ranked = search.ranked
        second = search.calc_optimum_configs()
        assert search.ranked is ranked
        assert [id(c) for c in first] == [id(c) for c in second]

    def test_calc_optimum_config_reruns(self, board_oracle):
        search = OptimumSearch([(20, 20)], 2, board_oracle)
        search.calc_optimum_config()
        ranked = search.ranked
        search.calc_optimum_config()
        assert search.ranked is not ranked
        assert len(search.ranked) == 1

    def test_set_seeds_clears_cache(self, table_oracle):
        search = OptimumSearch([(0, 0)], 1, table_oracle)
        assert search.calc_optimum_configs()[0].area_covered == pytest.approx(800)
        search.set_seeds([(10, 10)])
        assert len(search.ranked) == 0
        assert search.calc_optimum_configs()[0].area_covered == pytest.approx(1200)

    def test_ranked_results_sorted_and_sized(self, board_oracle):
        seeds = [(x, y) for x in (15, 45, 85) for y in (15, 85)]
        configs = calc_optimum_configs(seeds, 4, board_oracle)
        areas = [c.area_covered for c in configs]
        assert areas == sorted(areas, reverse=True)
        assert all(len(c) == 4 for c in configs)

    def test_max_iterations_bounds_seeds(self, table_oracle):
        search = OptimumSearch([(0, 0)] * 5, 1, table_oracle, max_iterations=2)
        search.calc_optimum_config()
        assert len(search.results) == 2

    def test_configs_per_seed(self, table_oracle):
        search = OptimumSearch([(0, 0), (10, 10)], 1, table_oracle, configs_per_seed=3)
        assert len(search.calc_optimum_configs(n=20)) == 6

    def test_top_n_limit(self, table_oracle):
        search = OptimumSearch([(0, 0)] * 15, 1, table_oracle)
        assert len(search.calc_optimum_configs()) == 10
        assert len(search.calc_optimum_configs(n=4)) == 4

    def test_parallel_matches_sequential(self, board_oracle):
        seeds = [(15, 15), (85, 15), (30, 60), (70, 60), (50, 90)]
        serial = OptimumSearch(seeds, 3, board_oracle).calc_optimum_configs()
        parallel = OptimumSearch(seeds, 3, board_oracle, n_workers=3).calc_optimum_configs()
        assert [c.lights for c in parallel] == [c.lights for c in serial]

    def test_cancelled_search_returns_nothing(self, table_oracle):
        token = CancelToken()
        token.cancel()
        search = OptimumSearch([(0, 0), (10, 10)], 1, table_oracle, cancel=token)
        assert search.calc_optimum_config() is None
        assert search.results == []

    def test_weighted_search_is_reproducible(self, open_oracle):
        kwargs = dict(selection="weighted", seed=11, configs_per_seed=2)
        a = OptimumSearch([(0, 0)], 3, open_oracle, **kwargs).calc_optimum_configs()
        b = OptimumSearch([(0, 0)], 3, open_oracle, **kwargs).calc_optimum_configs()
        assert [c.lights for c in a] == [c.lights for c in b]

    def test_settings_overrides(self, table_oracle):
        settings = SearchSettings(max_results=3)
        search = OptimumSearch([(0, 0)], 1, table_oracle, settings=settings, base_radius=10)
        assert search.settings.max_results == 3
        assert search.settings.base_radius == 10

    def test_rejects_bad_arguments(self, table_oracle):
        with pytest.raises(ValueError):
            OptimumSearch([(0, 0)], 0, table_oracle)
        with pytest.raises(TypeError):
            OptimumSearch([(0, 0)], 1, object())
