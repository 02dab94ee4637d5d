"""Butcher tableau container shared by every Runge--Kutta family."""

from typing import Optional, Sequence, Tuple

import attrs
import numpy as np

from mork._utils import (
    as_float_vector,
    getype_validator,
    int_converter,
    optional_float_vector,
)
from mork.graph import (
    ComputationUnit,
    DependencyGraph,
    InvalidDependencyGraph,
    create_computation_order,
)


def _coefficient_rows(rows) -> Tuple[Tuple[float, ...], ...]:
    """Return the ``a`` matrix as float rows, rejecting scalar rows."""
    converted = []
    for row_index, row in enumerate(rows):
        if np.ndim(row) != 1:
            raise InvalidDependencyGraph(
                f"Tableau matrix a must be two-dimensional; row {row_index} "
                f"is {row!r}, not a sequence of coefficients."
            )
        converted.append(as_float_vector(row))
    return tuple(converted)


@attrs.define(frozen=True)
class ButcherTableau:
    """Coefficients of a Runge--Kutta method and the order of its stages.

    Parameters
    ----------
    a
        Stage coupling matrix; row ``i`` holds the weights stage ``i``
        applies to every stage slope. Must be square.
    b
        Weights combining the stage slopes into the step update.
    c
        Stage time nodes as fractions of the step.
    order
        Classical order of accuracy.
    b_hat
        Optional embedded weights for an error estimate.

    Notes
    -----
    The stage dependency graph (``a[i][j] != 0``) is analysed once, when
    the tableau is created, and the resulting :attr:`computation_order` is
    shared by every step taken with the tableau. A malformed ``a`` raises
    :class:`~mork.graph.InvalidDependencyGraph` here rather than mid-step.
    """

    a: Tuple[Tuple[float, ...], ...] = attrs.field(converter=_coefficient_rows)
    b: Tuple[float, ...] = attrs.field(converter=as_float_vector)
    c: Tuple[float, ...] = attrs.field(converter=as_float_vector)
    order: int = attrs.field(
        converter=int_converter, validator=getype_validator(int, 1)
    )
    b_hat: Optional[Tuple[float, ...]] = attrs.field(
        default=None, converter=optional_float_vector
    )
    _computation_order: Tuple[ComputationUnit, ...] = attrs.field(
        init=False, default=None, eq=False, repr=False
    )

    def __attrs_post_init__(self) -> None:
        stage_count = len(self.b)
        if len(self.c) != stage_count:
            raise ValueError(
                f"Tableau has {stage_count} weights but {len(self.c)} nodes."
            )
        if self.b_hat is not None and len(self.b_hat) != stage_count:
            raise ValueError(
                f"Tableau has {stage_count} weights but {len(self.b_hat)} "
                "embedded weights."
            )
        for row_index, row in enumerate(self.a):
            if len(row) != len(self.a):
                raise InvalidDependencyGraph(
                    f"Tableau matrix a must be square: it has {len(self.a)} "
                    f"rows but row {row_index} has {len(row)} entries."
                )
        object.__setattr__(
            self,
            "_computation_order",
            create_computation_order(
                self.dependency_graph, stage_count=stage_count
            ),
        )

    @property
    def stage_count(self) -> int:
        """Return the number of stages."""
        return len(self.b)

    @property
    def dependency_graph(self) -> DependencyGraph:
        """Return ``graph[i][j] = a[i][j] != 0``."""
        return tuple(tuple(value != 0.0 for value in row) for row in self.a)

    @property
    def computation_order(self) -> Tuple[ComputationUnit, ...]:
        """Return the cached order in which stages are resolved."""
        return self._computation_order

    @property
    def is_explicit(self) -> bool:
        """Return ``True`` when no stage requires an equation solve."""
        return not any(unit.is_implicit for unit in self.computation_order)

    @property
    def is_diagonally_implicit(self) -> bool:
        """Return ``True`` when every implicit group is a single stage."""
        return all(len(unit.stages) == 1 for unit in self.computation_order)

    @property
    def has_error_estimate(self) -> bool:
        return self.b_hat is not None

    @staticmethod
    def typed_vector(
        values: Sequence[float], precision: type
    ) -> Tuple[float, ...]:
        """Return ``values`` cast to ``precision``."""
        return tuple(precision(value) for value in values)

    @classmethod
    def typed_rows(
        cls, rows: Sequence[Sequence[float]], precision: type
    ) -> Tuple[Tuple[float, ...], ...]:
        """Return ``rows`` cast to ``precision``."""
        return tuple(cls.typed_vector(row, precision) for row in rows)

    def error_weights(self, precision: type) -> Optional[np.ndarray]:
        """Return ``b - b_hat`` in ``precision``, or None without
        ``b_hat``."""
        if self.b_hat is None:
            return None
        weights = tuple(
            weight - embedded for weight, embedded in zip(self.b, self.b_hat)
        )
        return np.asarray(self.typed_vector(weights, precision),
                          dtype=precision)
