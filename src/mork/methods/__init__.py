"""Runge--Kutta tableaus and the generic step that consumes their stage
order."""

from typing import Any, Mapping, Optional, Union

from .base_step import (
    FixedPointConfig,
    Solver,
    StepResult,
    StepReturnCodes,
)
from .butcher_tableau import ButcherTableau
from .dirk_tableaus import DIRKTableau, DIRK_TABLEAU_REGISTRY
from .erk_tableaus import ERKTableau, ERK_TABLEAU_REGISTRY
from .firk_tableaus import FIRKTableau, FIRK_TABLEAU_REGISTRY
from .multi_order import MultiOrderLayout
from .runge_kutta import RungeKuttaStep
from .tableau_registry import TABLEAU_REGISTRY, resolve_tableau

__all__ = [
    "ButcherTableau",
    "DIRKTableau",
    "DIRK_TABLEAU_REGISTRY",
    "ERKTableau",
    "ERK_TABLEAU_REGISTRY",
    "FIRKTableau",
    "FIRK_TABLEAU_REGISTRY",
    "FixedPointConfig",
    "MultiOrderLayout",
    "RungeKuttaStep",
    "Solver",
    "StepResult",
    "StepReturnCodes",
    "TABLEAU_REGISTRY",
    "get_step",
    "resolve_tableau",
]


def get_step(
    tableau: Union[ButcherTableau, str, None] = None,
    settings: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> RungeKuttaStep:
    """Thin factory which merges settings and instantiates a step.

    Parameters
    ----------
    tableau
        Tableau or registered tableau name. May instead be supplied as
        ``settings['tableau']``.
    settings
        Dictionary of :class:`FixedPointConfig` settings, optionally with a
        ``tableau`` entry.
    **kwargs
        Settings overriding any values in ``settings``.

    Returns
    -------
    RungeKuttaStep
        The requested step instance.

    Raises
    ------
    ValueError
        Raised when the tableau name is unknown.
    TypeError
        Raised when a setting is not a :class:`FixedPointConfig` field.
    """
    step_settings = {}
    if settings is not None:
        step_settings.update(settings)
    step_settings.update(kwargs)
    if tableau is None:
        tableau = step_settings.pop("tableau", None)
    else:
        step_settings.pop("tableau", None)
    return RungeKuttaStep(tableau=tableau, **step_settings)
