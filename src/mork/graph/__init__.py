"""Stage dependency analysis for Runge--Kutta-family methods."""

from mork.graph.components import (
    StagePartition,
    find_strongly_connected_components,
)
from mork.graph.computation_order import (
    ComputationUnit,
    Explicit,
    Implicit,
    build_computation_order,
    create_computation_order,
)
from mork.graph.condensation import Condensation, condense
from mork.graph.dependency_graph import (
    DependencyGraph,
    InvalidDependencyGraph,
    validate_dependency_graph,
)
from mork.graph.topological_sort import topological_sort

__all__ = [
    "ComputationUnit",
    "Condensation",
    "DependencyGraph",
    "Explicit",
    "Implicit",
    "InvalidDependencyGraph",
    "StagePartition",
    "build_computation_order",
    "condense",
    "create_computation_order",
    "find_strongly_connected_components",
    "topological_sort",
    "validate_dependency_graph",
]
