"""
mork: stage ordering for multi-stage Runge--Kutta methods
"""

from importlib.metadata import PackageNotFoundError, version

from mork.graph import *            # noqa
from mork.methods import *          # noqa
from mork.time_logger import TimeLogger, default_timelogger  # noqa

__all__ = [
    "ButcherTableau",
    "ComputationUnit",
    "Explicit",
    "FixedPointConfig",
    "Implicit",
    "InvalidDependencyGraph",
    "RungeKuttaStep",
    "Solver",
    "StepResult",
    "StepReturnCodes",
    "TABLEAU_REGISTRY",
    "TimeLogger",
    "create_computation_order",
    "default_timelogger",
    "get_step",
    "resolve_tableau",
]

try:
    __version__ = version("mork")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "unknown"
