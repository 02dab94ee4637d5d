"""Reduction of multi-order initial value problems to first order.

A multi-order state holds one sequence per component. Component ``i``
carries ``[d^(n-1) y_i, ..., d y_i, y_i]``, highest derivative first, and
the right-hand side ``f(t, y)`` returns the next derivative ``d^n y_i`` of
every component. Stacking the components end to end gives a first-order
system that any :class:`~mork.methods.base_step.Solver` can advance.
"""

from typing import Callable, List, Sequence, Tuple

import attrs
import numpy as np

from mork.methods.base_step import Array, RHSFunction

MultiOrderState = List[Array]
MultiOrderRHS = Callable[[float, MultiOrderState], Sequence[float]]


def is_multi_order(y0) -> bool:
    """Return ``True`` when ``y0`` holds sequences rather than scalars."""
    if isinstance(y0, np.ndarray):
        return y0.ndim == 2
    try:
        entries = list(y0)
    except TypeError:
        return False
    return any(np.ndim(entry) > 0 for entry in entries)


@attrs.define(frozen=True)
class MultiOrderLayout:
    """Placement of each component's derivatives in a flat state vector.

    Attributes
    ----------
    orders
        Differential order of every component, equal to the number of
        values it carries.
    """

    orders: Tuple[int, ...] = attrs.field(converter=tuple)

    @orders.validator
    def _check_orders(self, attribute, value):
        for component, order in enumerate(value):
            if order < 1:
                raise ValueError(
                    f"Component {component} of a multi-order state carries "
                    "no values; it needs at least its own value."
                )

    @classmethod
    def from_state(cls, y0) -> "MultiOrderLayout":
        """Read the layout of the multi-order state ``y0``."""
        orders = []
        for component, values in enumerate(y0):
            if np.ndim(values) != 1:
                raise ValueError(
                    f"Component {component} of a multi-order state must be "
                    f"a sequence of derivative values, got {values!r}."
                )
            orders.append(len(values))
        return cls(orders)

    @property
    def offsets(self) -> Tuple[int, ...]:
        """Start of each component in the flat vector, plus its length."""
        offsets = [0]
        for order in self.orders:
            offsets.append(offsets[-1] + order)
        return tuple(offsets)

    def flatten(self, y: Sequence[Sequence[float]], precision: type) -> Array:
        if not self.orders:
            return np.zeros(0, dtype=precision)
        return np.concatenate(
            [np.asarray(values, dtype=precision) for values in y]
        )

    def nest(self, flat: Array) -> MultiOrderState:
        offsets = self.offsets
        return [
            flat[offsets[index]:offsets[index + 1]].copy()
            for index in range(len(self.orders))
        ]

    def first_order_rhs(self, f: MultiOrderRHS) -> RHSFunction:
        """Wrap ``f`` as the right-hand side of the stacked system.

        The derivative of every entry is the entry before it within its
        component; the leading entry of each component takes the value
        returned by ``f``.
        """
        heads = np.asarray(self.offsets[:-1], dtype=np.intp)
        component_count = len(self.orders)

        def rhs(t, flat):
            highest = np.asarray(f(t, self.nest(flat)), dtype=flat.dtype)
            if highest.shape != (component_count,):
                raise ValueError(
                    f"Right-hand side returned shape {highest.shape}; "
                    f"expected one value for each of the {component_count} "
                    "components."
                )
            derivative = np.empty_like(flat)
            derivative[1:] = flat[:-1]
            derivative[heads] = highest
            return derivative

        return rhs
