"""Shared pytest fixtures for lightplan test suite."""

import pytest
from lightplan import (
    DiskCoverageOracle,
    GeometryOracle,
    LightConfiguration,
    SearchSettings,
    WallSet,
)
from lightplan.geometry import placed_lights


# ============== Fake Oracles ==============


class TableOracle(GeometryOracle):
    """Every point has a fixed area; unknown points add nothing."""

    def __init__(self, areas: dict):
        self.areas = {tuple(map(float, k)): float(v) for k, v in areas.items()}

    def is_reachable(self, candidate, configuration):
        return True

    def marginal_area(self, candidate, existing_lights):
        if candidate in placed_lights(existing_lights):
            return 0.0
        return self.areas.get(candidate.as_tuple(), 0.0)

    def area_covered(self, configuration):
        return sum(self.areas.get(p.as_tuple(), 0.0) for p in placed_lights(configuration))


class BlockedOracle(DiskCoverageOracle):
    """Disk coverage where no candidate is ever reachable."""

    def is_reachable(self, candidate, configuration):
        return False


# ============== Oracle Fixtures ==============


@pytest.fixture
def open_oracle():
    """Disk coverage on an unbounded plane with no walls."""
    return DiskCoverageOracle(light_radius=20)


@pytest.fixture
def blocked_oracle():
    return BlockedOracle(light_radius=20)


@pytest.fixture
def board_walls():
    """A vertical wall splitting a 100x100 board, open at the top."""
    return WallSet.from_segments([((50, 0), (50, 70))])


@pytest.fixture
def board_oracle(board_walls):
    """Disk coverage clipped to a 100x100 board with one wall."""
    return DiskCoverageOracle(light_radius=20, walls=board_walls, bounds=(0, 0, 100, 100))


@pytest.fixture
def table_oracle():
    return TableOracle({(0, 0): 800, (10, 10): 1200, (5, 5): 800, (7, 7): 0})


# ============== Settings Fixtures ==============


@pytest.fixture
def uncapped():
    """Default settings without the covered-area cap."""
    return SearchSettings(area_cap=float("inf"))


# ============== Configuration Fixtures ==============


@pytest.fixture
def make_config(table_oracle):
    """Factory for configurations scored by the table oracle."""

    def _make(*lights, capacity=None):
        return LightConfiguration(table_oracle, lights, capacity=capacity)

    return _make
