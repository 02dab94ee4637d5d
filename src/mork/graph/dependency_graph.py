"""Validation of stage dependency graphs.

A dependency graph is an ``s x s`` boolean matrix in which entry ``(i, j)``
is ``True`` when the formula of stage ``i`` reads the value of stage ``j``.
The analysis in :mod:`mork.graph` assumes a well-formed square matrix, so
malformed input is rejected here, before any analysis runs.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

DependencyGraph = Tuple[Tuple[bool, ...], ...]


class InvalidDependencyGraph(ValueError):
    """Raised when a dependency graph is not a square boolean matrix of the
    expected size."""


def _normalise_row(row, row_index: int) -> Tuple[bool, ...]:
    try:
        entries = tuple(row)
    except TypeError as exc:
        raise InvalidDependencyGraph(
            f"Dependency graph must be two-dimensional; row {row_index} is "
            f"{type(row).__name__}, not a sequence."
        ) from exc
    for col_index, entry in enumerate(entries):
        if not isinstance(entry, (bool, np.bool_)):
            raise InvalidDependencyGraph(
                f"Dependency graph entries must be booleans; entry "
                f"({row_index}, {col_index}) is {entry!r}."
            )
    return tuple(bool(entry) for entry in entries)


def validate_dependency_graph(
    graph: Sequence[Sequence[bool]],
    stage_count: Optional[int] = None,
) -> DependencyGraph:
    """Check ``graph`` and return it as a tuple of boolean tuples.

    Parameters
    ----------
    graph
        Nested sequences or a two-dimensional boolean numpy array.
    stage_count
        Expected number of stages. When given, the matrix must be
        ``stage_count x stage_count``.

    Returns
    -------
    tuple of tuple of bool
        Immutable copy of ``graph``.

    Raises
    ------
    InvalidDependencyGraph
        If ``graph`` is not two-dimensional, not square, holds non-boolean
        entries, or disagrees with ``stage_count``.
    """
    if isinstance(graph, np.ndarray):
        if graph.ndim != 2:
            raise InvalidDependencyGraph(
                f"Dependency graph must be two-dimensional, got an array "
                f"with {graph.ndim} dimension(s)."
            )
        if graph.dtype != np.bool_:
            raise InvalidDependencyGraph(
                f"Dependency graph must have boolean dtype, got "
                f"{graph.dtype}."
            )
        if graph.shape[0] != graph.shape[1]:
            raise InvalidDependencyGraph(
                f"Dependency graph must be square, got shape {graph.shape}."
            )
        rows = tuple(tuple(bool(entry) for entry in row)
                     for row in graph.tolist())
    else:
        try:
            raw_rows = tuple(graph)
        except TypeError as exc:
            raise InvalidDependencyGraph(
                f"Dependency graph must be a sequence of rows, got "
                f"{type(graph).__name__}."
            ) from exc
        rows = tuple(
            _normalise_row(row, row_index)
            for row_index, row in enumerate(raw_rows)
        )
        size = len(rows)
        for row_index, row in enumerate(rows):
            if len(row) != size:
                raise InvalidDependencyGraph(
                    f"Dependency graph must be square: it has {size} rows "
                    f"but row {row_index} has {len(row)} entries."
                )

    if stage_count is not None and len(rows) != stage_count:
        raise InvalidDependencyGraph(
            f"Dependency graph describes {len(rows)} stages but the method "
            f"declares {stage_count}."
        )
    return rows
