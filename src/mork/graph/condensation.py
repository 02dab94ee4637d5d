"""Condensation of a dependency graph onto its strongly connected
components."""

from typing import Tuple

import attrs

from mork.graph.components import StagePartition
from mork.graph.dependency_graph import DependencyGraph


@attrs.define(frozen=True)
class Condensation:
    """Acyclic graph with one node per strongly connected component.

    Attributes
    ----------
    components
        Member stages of each node, ordered by smallest member.
    dependencies
        ``dependencies[a]`` lists, ascending, the nodes ``b != a`` such that
        some stage in ``a`` reads some stage in ``b``.
    self_loops
        ``self_loops[a]`` is ``True`` when a member of ``a`` reads its own
        value. Self-loops are never edges of the condensation.
    """

    components: Tuple[Tuple[int, ...], ...]
    dependencies: Tuple[Tuple[int, ...], ...]
    self_loops: Tuple[bool, ...]

    def __len__(self) -> int:
        return len(self.components)


def condense(
    graph: DependencyGraph, partition: StagePartition
) -> Condensation:
    """Collapse each component of ``partition`` into a single node."""
    component_of = partition.component_of
    dependencies = [set() for _ in partition.components]
    for stage, row in enumerate(graph):
        source = component_of[stage]
        for referenced, reads in enumerate(row):
            if not reads:
                continue
            target = component_of[referenced]
            if target != source:
                dependencies[source].add(target)

    return Condensation(
        components=partition.components,
        dependencies=tuple(tuple(sorted(deps)) for deps in dependencies),
        self_loops=tuple(
            any(partition.self_loops[member] for member in component)
            for component in partition.components
        ),
    )
