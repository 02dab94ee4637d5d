"""Strongly connected components of a stage dependency graph."""

from typing import Tuple

import attrs

from mork.graph.dependency_graph import DependencyGraph


@attrs.define(frozen=True)
class StagePartition:
    """Partition of the stage indices into strongly connected components.

    Attributes
    ----------
    components
        Components ordered by their smallest member; each component is a
        sorted tuple of stage indices.
    component_of
        ``component_of[i]`` is the position in ``components`` of the
        component holding stage ``i``.
    self_loops
        ``self_loops[i]`` is ``True`` when stage ``i`` reads its own value.
    """

    components: Tuple[Tuple[int, ...], ...]
    component_of: Tuple[int, ...]
    self_loops: Tuple[bool, ...]

    @property
    def stage_count(self) -> int:
        return len(self.component_of)


def find_strongly_connected_components(
    graph: DependencyGraph,
) -> StagePartition:
    """Partition the stages of ``graph`` into strongly connected components.

    Iterative Tarjan search. Roots and successors are visited in ascending
    stage order so repeated runs give identical partitions.

    Parameters
    ----------
    graph
        Square boolean matrix, already validated.

    Returns
    -------
    StagePartition
        Components, the stage-to-component map, and self-loop flags.
    """
    stage_count = len(graph)
    successors = [
        tuple(j for j in range(stage_count) if graph[i][j] and j != i)
        for i in range(stage_count)
    ]
    self_loops = tuple(bool(graph[i][i]) for i in range(stage_count))

    index = [-1] * stage_count
    lowlink = [0] * stage_count
    on_stack = [False] * stage_count
    stack = []
    found = []
    counter = 0

    for root in range(stage_count):
        if index[root] != -1:
            continue
        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        # (stage, position of the next successor to visit)
        work = [(root, 0)]

        while work:
            node, position = work[-1]
            node_successors = successors[node]
            if position < len(node_successors):
                work[-1] = (node, position + 1)
                successor = node_successors[position]
                if index[successor] == -1:
                    index[successor] = lowlink[successor] = counter
                    counter += 1
                    stack.append(successor)
                    on_stack[successor] = True
                    work.append((successor, 0))
                elif on_stack[successor]:
                    lowlink[node] = min(lowlink[node], index[successor])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])
            if lowlink[node] == index[node]:
                members = []
                while True:
                    member = stack.pop()
                    on_stack[member] = False
                    members.append(member)
                    if member == node:
                        break
                found.append(tuple(sorted(members)))

    components = tuple(sorted(found, key=lambda component: component[0]))
    component_of = [0] * stage_count
    for position, component in enumerate(components):
        for member in component:
            component_of[member] = position

    return StagePartition(
        components=components,
        component_of=tuple(component_of),
        self_loops=self_loops,
    )
