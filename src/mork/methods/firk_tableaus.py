"""Fully implicit Runge--Kutta tableau definitions."""

from typing import Dict

import attrs

from mork.methods.butcher_tableau import ButcherTableau


@attrs.define(frozen=True)
class FIRKTableau(ButcherTableau):
    """Coefficient tableau describing a fully implicit RK scheme."""


SQRT3 = 3 ** 0.5

GAUSS_LEGENDRE_2_TABLEAU = FIRKTableau(
    a=(
        (0.25, 0.25 - SQRT3 / 6.0),
        (0.25 + SQRT3 / 6.0, 0.25),
    ),
    b=(0.5, 0.5),
    c=(0.5 - SQRT3 / 6.0, 0.5 + SQRT3 / 6.0),
    order=4,
)

#: Two-stage Radau IIA method, order three and L-stable.
RADAU_IIA_3_TABLEAU = FIRKTableau(
    a=(
        (5.0 / 12.0, -1.0 / 12.0),
        (3.0 / 4.0, 1.0 / 4.0),
    ),
    b=(3.0 / 4.0, 1.0 / 4.0),
    c=(1.0 / 3.0, 1.0),
    order=3,
)

#: Three-stage Lobatto IIIA. The first stage is explicit; the last two
#: form one coupled group.
LOBATTO_IIIA_3_TABLEAU = FIRKTableau(
    a=(
        (0.0, 0.0, 0.0),
        (5.0 / 24.0, 1.0 / 3.0, -1.0 / 24.0),
        (1.0 / 6.0, 2.0 / 3.0, 1.0 / 6.0),
    ),
    b=(1.0 / 6.0, 2.0 / 3.0, 1.0 / 6.0),
    c=(0.0, 0.5, 1.0),
    order=4,
)

#: Three-stage Lobatto IIIC, all stages coupled.
#: Hairer, E., Lubich, C., & Wanner, G. (2006). *Geometric Numerical
#: Integration* (2nd ed.). Springer.
LOBATTO_IIIC_3_TABLEAU = FIRKTableau(
    a=(
        (1.0 / 6.0, -1.0 / 3.0, 1.0 / 6.0),
        (1.0 / 6.0, 5.0 / 12.0, -1.0 / 12.0),
        (1.0 / 6.0, 2.0 / 3.0, 1.0 / 6.0),
    ),
    b=(1.0 / 6.0, 2.0 / 3.0, 1.0 / 6.0),
    c=(0.0, 0.5, 1.0),
    order=4,
)


FIRK_TABLEAU_REGISTRY: Dict[str, FIRKTableau] = {
    "gauss-legendre-2": GAUSS_LEGENDRE_2_TABLEAU,
    "radau-iia-3": RADAU_IIA_3_TABLEAU,
    "lobatto-iiia-3": LOBATTO_IIIA_3_TABLEAU,
    "lobatto-iiic-3": LOBATTO_IIIC_3_TABLEAU,
}
