"""Generic Runge--Kutta step driven by a tableau's computation order."""

from typing import Any, Dict, Optional, Set, Union
import warnings

import attrs
import numpy as np

from mork._utils import in_attr
from mork.graph import Explicit, Implicit
from mork.methods.base_step import (
    Array,
    FixedPointConfig,
    RHSFunction,
    Solver,
    StepResult,
    StepReturnCodes,
    max_abs_difference,
)
from mork.methods.butcher_tableau import ButcherTableau
from mork.methods.erk_tableaus import DEFAULT_ERK_TABLEAU
from mork.methods.multi_order import MultiOrderLayout, is_multi_order
from mork.methods.tableau_registry import resolve_tableau


class RungeKuttaStep(Solver):
    """Runge--Kutta step for any tableau, explicit or implicit.

    Stage slopes ``k_i = f(t0 + c_i h, y0 + h sum_j a_ij k_j)`` are resolved
    in the tableau's computation order. Explicit stages are evaluated
    directly. Each implicit group is solved by fixed-point iteration over
    its members, holding the already-resolved stages constant.

    :meth:`step` keeps no state between calls, so one instance may be
    shared across equations and threads as long as nobody calls
    :meth:`update` on it meanwhile; ``update`` replaces the tableau and
    configuration in place.

    Parameters
    ----------
    tableau
        Tableau instance, or a name registered in
        :data:`mork.methods.TABLEAU_REGISTRY`.
    **kwargs
        Fields of :class:`FixedPointConfig`.
    """

    def __init__(
        self,
        tableau: Union[ButcherTableau, str, None] = None,
        **kwargs: Any,
    ) -> None:
        self._tableau = _resolve(tableau)
        self._config = FixedPointConfig(**kwargs)

    @property
    def tableau(self) -> ButcherTableau:
        return self._tableau

    @property
    def compile_settings(self) -> FixedPointConfig:
        return self._config

    @property
    def settings_dict(self) -> Dict[str, object]:
        """Return the configuration dictionary for the step."""
        return self._config.settings_dict

    @property
    def precision(self) -> type:
        return self._config.precision

    @property
    def order(self) -> int:
        """Return the classical order of accuracy of the tableau."""
        return self._tableau.order

    @property
    def stage_count(self) -> int:
        return self._tableau.stage_count

    @property
    def is_implicit(self) -> bool:
        return not self._tableau.is_explicit

    @property
    def is_adaptive(self) -> bool:
        return self._tableau.has_error_estimate

    def update(
        self,
        updates_dict: Optional[Dict[str, object]] = None,
        silent: bool = False,
        **kwargs: object,
    ) -> Set[str]:
        """Apply configuration updates.

        Parameters
        ----------
        updates_dict
            Mapping of configuration keys to their new values. ``tableau``
            replaces the tableau; other keys name
            :class:`FixedPointConfig` fields.
        silent
            When ``True``, ignore unknown keys instead of raising.
        **kwargs
            Additional configuration updates supplied inline.

        Returns
        -------
        set
            Set of configuration keys that were recognized and updated.

        Raises
        ------
        KeyError
            Raised when an unknown key is provided while ``silent`` is False.

        Notes
        -----
        A rejected update leaves both the tableau and the configuration
        unchanged.
        """
        if updates_dict is None:
            updates_dict = {}
        updates_dict = updates_dict.copy()
        if kwargs:
            updates_dict.update(kwargs)
        if updates_dict == {}:
            return set()

        recognised = set()
        tableau = self._tableau
        if "tableau" in updates_dict:
            tableau = _resolve(updates_dict.pop("tableau"))
            recognised.add("tableau")

        config_updates = {
            key: value for key, value in updates_dict.items()
            if in_attr(key, self._config)
        }
        unrecognised = set(updates_dict) - set(config_updates)
        if not silent and unrecognised:
            raise KeyError(
                f"Unrecognized parameters in update: {unrecognised}. "
                "These parameters were not updated.",
            )
        config = self._config
        if config_updates:
            config = attrs.evolve(config, **config_updates)
        self._tableau = tableau
        self._config = config
        return recognised | set(config_updates)

    def step(
        self,
        t0: float,
        h: float,
        f: RHSFunction,
        y0: Array,
    ) -> StepResult:
        """Advance ``y0`` by one step and report solver diagnostics."""
        precision = self._config.precision
        tableau = self._tableau
        state = np.atleast_1d(np.asarray(y0, dtype=precision))
        if state.ndim != 1:
            raise ValueError(
                f"State must be one-dimensional, got shape {state.shape}."
            )
        t0 = precision(t0)
        h = precision(h)

        a_matrix = np.asarray(tableau.typed_rows(tableau.a, precision),
                              dtype=precision).reshape(
            tableau.stage_count, tableau.stage_count
        )
        c_nodes = np.asarray(tableau.typed_vector(tableau.c, precision),
                             dtype=precision)
        b_weights = np.asarray(tableau.typed_vector(tableau.b, precision),
                               dtype=precision)

        slopes = np.zeros((tableau.stage_count, state.shape[0]),
                          dtype=precision)
        resolved = np.zeros(tableau.stage_count, dtype=np.bool_)
        status = StepReturnCodes.SUCCESS
        niters = 0

        def evaluate(stage: int, known) -> Array:
            stage_state = state.copy()
            for dependency in known:
                coefficient = a_matrix[stage, dependency]
                if coefficient != 0.0:
                    stage_state = stage_state + (
                        h * coefficient * slopes[dependency]
                    )
            stage_time = t0 + c_nodes[stage] * h
            return np.asarray(f(stage_time, stage_state), dtype=precision)

        start_slope = None
        for unit in tableau.computation_order:
            if isinstance(unit, Explicit):
                known = np.flatnonzero(resolved)
                slopes[unit.stage] = evaluate(unit.stage, known)
                resolved[unit.stage] = True
                continue

            if start_slope is None:
                start_slope = np.asarray(f(t0, state), dtype=precision)
            iterations, converged = self._solve_group(
                unit, evaluate, slopes, resolved, start_slope, h
            )
            niters += iterations
            if not converged:
                status = StepReturnCodes.MAX_FIXED_POINT_ITERATIONS_EXCEEDED
            resolved[list(unit.members)] = True

        new_state = state + h * (b_weights @ slopes)
        weights = tableau.error_weights(precision)
        if weights is None:
            error = np.zeros_like(state)
        else:
            error = h * (weights @ slopes)
        return StepResult(
            state=new_state, error=error, status=int(status), niters=niters
        )

    def _solve_group(
        self,
        unit: Implicit,
        evaluate,
        slopes: Array,
        resolved: Array,
        start_slope: Array,
        h: float,
    ):
        """Fixed-point iteration over the members of ``unit``.

        Returns the number of sweeps and whether the group converged.
        """
        config = self._config
        members = unit.members
        known = [stage for stage in unit.complement if resolved[stage]]
        coupled = known + list(members)
        tolerance = config.error_fraction * abs(float(h))

        for member in members:
            slopes[member] = start_slope

        for iteration in range(1, config.max_iterations + 1):
            updated = [evaluate(member, coupled) for member in members]
            change = max(
                max_abs_difference(new, slopes[member])
                for member, new in zip(members, updated)
            )
            for member, new in zip(members, updated):
                slopes[member] = new
            if iteration >= config.min_iterations and change <= tolerance:
                return iteration, True
        return config.max_iterations, False

    def approximate(
        self,
        t0: float,
        h: float,
        f: RHSFunction,
        y0: Array,
    ):
        """Advance a first-order or multi-order state by one step.

        A multi-order ``y0`` holds one sequence per component, highest
        derivative first, and ``f`` returns the highest derivative of each
        component. It is stepped as the equivalent first-order system and
        returned in the same nested layout.
        """
        layout = None
        if is_multi_order(y0):
            layout = MultiOrderLayout.from_state(y0)
            f = layout.first_order_rhs(f)
            y0 = layout.flatten(y0, self._config.precision)
        result = self.step(t0, h, f, y0)
        if result.status != StepReturnCodes.SUCCESS:
            warnings.warn(
                f"Fixed-point iteration did not converge within "
                f"{self._config.max_iterations} sweeps at t={t0}, h={h}; "
                "returning the last iterate.",
                RuntimeWarning,
                stacklevel=2,
            )
        if layout is None:
            return result.state
        return layout.nest(result.state)


def _resolve(tableau: Union[ButcherTableau, str, None]) -> ButcherTableau:
    if tableau is None:
        return DEFAULT_ERK_TABLEAU
    return resolve_tableau(tableau)
