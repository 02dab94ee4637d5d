"""Linearization of the condensation graph."""

import heapq
from typing import Tuple

from mork.graph.condensation import Condensation


def topological_sort(condensation: Condensation) -> Tuple[int, ...]:
    """Order the condensation nodes so dependencies come first.

    Kahn's algorithm. Among nodes that are ready at the same time, the one
    with the smallest member stage is emitted first.

    Parameters
    ----------
    condensation
        Graph produced by :func:`mork.graph.condensation.condense`.

    Returns
    -------
    tuple of int
        Node indices into ``condensation.components``.

    Raises
    ------
    RuntimeError
        If the condensation contains a cycle. A correct component partition
        never produces one, so this signals a defect in the partition.
    """
    components = condensation.components
    node_count = len(components)
    remaining = [len(deps) for deps in condensation.dependencies]
    dependents = [[] for _ in range(node_count)]
    for node, deps in enumerate(condensation.dependencies):
        for dependency in deps:
            dependents[dependency].append(node)

    ready = [
        (components[node][0], node)
        for node in range(node_count)
        if remaining[node] == 0
    ]
    heapq.heapify(ready)

    order = []
    while ready:
        _, node = heapq.heappop(ready)
        order.append(node)
        for dependent in dependents[node]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, (components[dependent][0], dependent))

    if len(order) != node_count:
        stuck = sorted(
            components[node] for node in range(node_count)
            if remaining[node] > 0
        )
        raise RuntimeError(
            "Cycle detected in the condensation graph between components "
            f"{stuck}; the component partition is inconsistent with the "
            "dependency graph."
        )
    return tuple(order)
