"""Stage computation order for Runge--Kutta-family methods.

The order is built in four passes over the stage dependency graph:
strongly connected components, condensation, topological sort, and a
classification of each component as :class:`Explicit` or :class:`Implicit`.
The result depends only on the method's tableau, so it is computed once per
method and shared by every step taken with it.
"""

from typing import Iterable, Optional, Sequence, Tuple, Union

import attrs

from mork.graph.components import find_strongly_connected_components
from mork.graph.condensation import Condensation, condense
from mork.graph.dependency_graph import validate_dependency_graph
from mork.graph.topological_sort import topological_sort
from mork.time_logger import default_timelogger


def _sorted_stages(stages: Iterable[int]) -> Tuple[int, ...]:
    return tuple(sorted(int(stage) for stage in stages))


@attrs.define(frozen=True)
class Explicit:
    """A stage whose value follows directly from already-resolved stages."""

    stage: int = attrs.field(converter=int)

    @property
    def stages(self) -> Tuple[int, ...]:
        return (self.stage,)

    @property
    def is_implicit(self) -> bool:
        return False


@attrs.define(frozen=True)
class Implicit:
    """A group of stages that must be solved simultaneously.

    Attributes
    ----------
    members
        Stages solved together, ascending. A single member means that stage
        reads its own unknown value.
    complement
        Every stage index outside ``members``, ascending. Consumers use the
        ones already resolved as known constants.
    """

    members: Tuple[int, ...] = attrs.field(converter=_sorted_stages)
    complement: Tuple[int, ...] = attrs.field(converter=_sorted_stages)

    @members.validator
    def _check_members(self, attribute, value):
        if not value:
            raise ValueError("An implicit group needs at least one member.")

    @complement.validator
    def _check_complement(self, attribute, value):
        shared = sorted(set(value).intersection(self.members))
        if shared:
            raise ValueError(
                f"Implicit members and complement must be disjoint; both "
                f"hold stages {shared}."
            )

    @property
    def stages(self) -> Tuple[int, ...]:
        return self.members

    @property
    def is_implicit(self) -> bool:
        return True


ComputationUnit = Union[Explicit, Implicit]


def build_computation_order(
    condensation: Condensation, order: Sequence[int]
) -> Tuple[ComputationUnit, ...]:
    """Classify the components of ``condensation`` in the given order."""
    stage_count = sum(len(component) for component in condensation.components)
    units = []
    for node in order:
        members = condensation.components[node]
        if len(members) > 1 or condensation.self_loops[node]:
            member_set = set(members)
            complement = [
                stage for stage in range(stage_count)
                if stage not in member_set
            ]
            units.append(Implicit(members, complement))
        else:
            units.append(Explicit(members[0]))
    return tuple(units)


def create_computation_order(
    graph: Sequence[Sequence[bool]],
    stage_count: Optional[int] = None,
) -> Tuple[ComputationUnit, ...]:
    """Return the order in which the stages described by ``graph`` are
    computed.

    Parameters
    ----------
    graph
        Square boolean matrix; ``graph[i][j]`` is ``True`` when stage ``i``
        reads stage ``j``.
    stage_count
        Number of stages the method declares, checked against ``graph``.

    Returns
    -------
    tuple of ComputationUnit
        One unit per strongly connected component. Every stage appears in
        exactly one unit, and a unit never precedes a unit it reads from.

    Raises
    ------
    InvalidDependencyGraph
        If ``graph`` is malformed.
    RuntimeError
        If the internal component analysis is inconsistent.
    """
    rows = validate_dependency_graph(graph, stage_count=stage_count)
    default_timelogger.start_event("computation_order", stages=len(rows))
    partition = find_strongly_connected_components(rows)
    condensation = condense(rows, partition)
    default_timelogger.progress(
        "computation_order",
        f"{len(condensation)} components",
        components=len(condensation),
    )
    units = build_computation_order(condensation, topological_sort(condensation))
    default_timelogger.stop_event("computation_order", stages=len(rows))
    return units
