"""Lookup of named tableaus across the explicit and implicit families."""

from typing import Dict, Union

from mork.methods.butcher_tableau import ButcherTableau
from mork.methods.dirk_tableaus import DIRK_TABLEAU_REGISTRY
from mork.methods.erk_tableaus import ERK_TABLEAU_REGISTRY
from mork.methods.firk_tableaus import FIRK_TABLEAU_REGISTRY

TABLEAU_REGISTRY: Dict[str, ButcherTableau] = {
    **ERK_TABLEAU_REGISTRY,
    **DIRK_TABLEAU_REGISTRY,
    **FIRK_TABLEAU_REGISTRY,
}
"""Every named tableau, keyed by lower-case identifier."""


def resolve_tableau(tableau: Union[ButcherTableau, str]) -> ButcherTableau:
    """Return ``tableau`` itself, or the registered tableau it names.

    Raises
    ------
    ValueError
        If ``tableau`` names no registered tableau.
    TypeError
        If ``tableau`` is neither a string nor a :class:`ButcherTableau`.
    """
    if isinstance(tableau, ButcherTableau):
        return tableau
    if not isinstance(tableau, str):
        raise TypeError(
            f"Expected a ButcherTableau or tableau name, got "
            f"{type(tableau).__name__}."
        )
    key = tableau.lower().replace("_", "-")
    try:
        return TABLEAU_REGISTRY[key]
    except KeyError as exc:
        known = ", ".join(sorted(TABLEAU_REGISTRY))
        raise ValueError(
            f"Unknown tableau '{tableau}'. Known tableaus: {known}."
        ) from exc
