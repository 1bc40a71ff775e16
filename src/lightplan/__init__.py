from .lights import Point, Unplaced, UNPLACED, Light
from .walls import Wall, WallSet
from .geometry import GeometryOracle, DiskCoverageOracle
from .candidates import CandidateGenerator, ring_points
from .configuration import LightConfiguration
from .builder import (
    ConfigurationBuilder,
    BuildResult,
    BuildStatus,
    CandidateScore,
)
from .ranking import RankedConfigurationSet
from .settings import SearchSettings, SelectionMode
from .search import (
    OptimumSearch,
    CancelToken,
    EmptySeedSetWarning,
    calc_optimum_config,
    calc_optimum_configs,
)
from .io import save_configurations, load_configurations, generate_report
from ._version import __version__

__all__ = [
    "Point",
    "Unplaced",
    "UNPLACED",
    "Light",
    "Wall",
    "WallSet",
    "GeometryOracle",
    "DiskCoverageOracle",
    "CandidateGenerator",
    "ring_points",
    "LightConfiguration",
    "ConfigurationBuilder",
    "BuildResult",
    "BuildStatus",
    "CandidateScore",
    "RankedConfigurationSet",
    "SearchSettings",
    "SelectionMode",
    "OptimumSearch",
    "CancelToken",
    "EmptySeedSetWarning",
    "calc_optimum_config",
    "calc_optimum_configs",
    "save_configurations",
    "load_configurations",
    "generate_report",
]

__version__ = __version__
