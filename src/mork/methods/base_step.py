"""Base classes and shared configuration for stepping routines."""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Callable, Dict

import attrs
import numpy as np
from numba import njit
from numpy.typing import NDArray

from mork._utils import (
    PrecisionDtype,
    float_converter,
    getype_validator,
    gttype_validator,
    int_converter,
    precision_converter,
    precision_validator,
)

Array = NDArray[np.floating]
RHSFunction = Callable[[float, Array], Array]


class StepReturnCodes(IntEnum):
    SUCCESS = 0
    MAX_FIXED_POINT_ITERATIONS_EXCEEDED = 2


@attrs.define
class FixedPointConfig:
    """Configuration of the fixed-point solve used for implicit groups.

    Parameters
    ----------
    precision
        Numerical precision of stage buffers. Supported values are
        ``float16``, ``float32``, and ``float64``.
    error_fraction
        Convergence threshold as a fraction of the step size; a sweep
        converges when no slope changes by more than
        ``error_fraction * |h|``.
    max_iterations
        Sweeps attempted per implicit group before giving up.
    min_iterations
        Sweeps always performed per implicit group, converged or not.
    """

    precision: PrecisionDtype = attrs.field(
        default=np.float64,
        converter=precision_converter,
        validator=precision_validator,
    )
    error_fraction: float = attrs.field(
        default=1e-3,
        converter=float_converter,
        validator=gttype_validator(float, 0.0),
    )
    max_iterations: int = attrs.field(
        default=100,
        converter=int_converter,
        validator=getype_validator(int, 1),
    )
    min_iterations: int = attrs.field(
        default=1,
        converter=int_converter,
        validator=getype_validator(int, 0),
    )

    def __attrs_post_init__(self) -> None:
        if self.min_iterations > self.max_iterations:
            raise ValueError(
                f"min_iterations ({self.min_iterations}) must not exceed "
                f"max_iterations ({self.max_iterations})."
            )

    @property
    def settings_dict(self) -> Dict[str, object]:
        """Return a mutable view of the configuration state."""

        return {
            "precision": self.precision,
            "error_fraction": self.error_fraction,
            "max_iterations": self.max_iterations,
            "min_iterations": self.min_iterations,
        }


@attrs.define
class StepResult:
    """Container describing the outcome of a single integration step."""

    state: Array
    error: Array
    status: int = 0
    niters: int = 0


@njit(cache=True)
def _max_abs_difference(left: Array, right: Array) -> float:
    """Return the largest absolute entry of ``left - right``."""

    largest = 0.0
    for index in range(left.shape[0]):
        difference = abs(left[index] - right[index])
        if difference > largest:
            largest = difference
    return largest


def max_abs_difference(left: Array, right: Array) -> float:
    """Return the max-norm of ``left - right`` as a Python float."""

    return float(
        _max_abs_difference(
            np.ascontiguousarray(left, dtype=np.float64),
            np.ascontiguousarray(right, dtype=np.float64),
        )
    )


class Solver(ABC):
    """A numerical scheme able to advance an initial value problem."""

    @abstractmethod
    def approximate(
        self,
        t0: float,
        h: float,
        f: RHSFunction,
        y0: Array,
    ) -> Array:
        """Advance ``y0`` at time ``t0`` by one step of size ``h``.

        Parameters
        ----------
        t0
            Time at the start of the step.
        h
            Step size.
        f
            Right-hand side ``f(t, y)`` of ``y' = f(t, y)``.
        y0
            State at ``t0``: a flat vector for a first-order problem, or
            one sequence per component, highest derivative first, for a
            multi-order problem whose ``f`` returns each component's
            highest derivative.

        Returns
        -------
        numpy.ndarray or list of numpy.ndarray
            Approximation of the state at ``t0 + h``, in the layout of
            ``y0``.
        """
        raise NotImplementedError
