"""Explicit Runge--Kutta tableau definitions.

Each tableau lists the literature source describing the coefficients so
integrators can reference the original derivations when validating
implementations.
"""

from typing import Dict

import attrs

from mork.methods.butcher_tableau import ButcherTableau


@attrs.define(frozen=True)
class ERKTableau(ButcherTableau):
    """Coefficient tableau describing an explicit Runge--Kutta scheme."""

    def __attrs_post_init__(self) -> None:
        super().__attrs_post_init__()
        if not self.is_explicit:
            implicit = [
                unit.stages for unit in self.computation_order
                if unit.is_implicit
            ]
            raise ValueError(
                f"ERKTableau stages {implicit} depend on themselves or on "
                "later stages; use ButcherTableau for implicit methods."
            )


#: Forward Euler, the one-stage first-order method.
EULER_TABLEAU = ERKTableau(
    a=((0.0,),),
    b=(1.0,),
    c=(0.0,),
    order=1,
)

#: Heun's improved Euler method offering second-order accuracy.
#: Heun, K. "Neue Methoden zur approximativen Integration der
#: Differentialgleichungen einer unabhängigen Veränderlichen." *Z.
#: Math. Phys.* 45 (1900).
HEUN_21_TABLEAU = ERKTableau(
    a=((0.0, 0.0), (1.0, 0.0)),
    b=(0.5, 0.5),
    c=(0.0, 1.0),
    order=2,
)

#: Ralston's third-order, three-stage explicit Runge--Kutta method.
#: Ralston, A. "Runge-Kutta methods with minimum error bounds." *Math. Comp.*
#: 16.80 (1962).
RALSTON_33_TABLEAU = ERKTableau(
    a=((0.0, 0.0, 0.0), (0.5, 0.0, 0.0), (0.0, 0.75, 0.0)),
    b=(2.0 / 9.0, 1.0 / 3.0, 4.0 / 9.0),
    c=(0.0, 1.0 / 2.0, 3.0 / 4.0),
    order=3,
)

#: Bogacki--Shampine 3(2) tableau with an embedded error estimate.
#: Bogacki, P. and Shampine, L. F. "A 3(2) pair of Runge-Kutta formulas."
#: *Appl. Math. Lett.* 2.4 (1989).
BOGACKI_SHAMPINE_32_TABLEAU = ERKTableau(
    a=(
        (0.0, 0.0, 0.0, 0.0),
        (0.5, 0.0, 0.0, 0.0),
        (0.0, 0.75, 0.0, 0.0),
        (2.0 / 9.0, 1.0 / 3.0, 4.0 / 9.0, 0.0),
    ),
    b=(2.0 / 9.0, 1.0 / 3.0, 4.0 / 9.0, 0.0),
    b_hat=(7.0 / 24.0, 1.0 / 4.0, 1.0 / 3.0, 1.0 / 8.0),
    c=(0.0, 1.0 / 2.0, 3.0 / 4.0, 1.0),
    order=3,
)

#: Classical four-stage Runge--Kutta method introduced by Kutta (1901).
#: Kutta, W. "Beitrag zur näherungsweisen Integration totaler
#: Differentialgleichungen." *Zeitschrift für Mathematik und Physik* 46 (1901).
CLASSICAL_RK4_TABLEAU = ERKTableau(
    a=(
        (0.0, 0.0, 0.0, 0.0),
        (1.0 / 2.0, 0.0, 0.0, 0.0),
        (0.0, 1.0 / 2.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
    ),
    b=(
        1.0 / 6.0,
        1.0 / 3.0,
        1.0 / 3.0,
        1.0 / 6.0,
    ),
    c=(0.0, 1.0 / 2.0, 1.0 / 2.0, 1.0),
    order=4,
)

DEFAULT_ERK_TABLEAU = CLASSICAL_RK4_TABLEAU
"""Default tableau used when constructing explicit steps."""

ERK_TABLEAU_REGISTRY: Dict[str, ERKTableau] = {
    "euler": EULER_TABLEAU,
    "heun-21": HEUN_21_TABLEAU,
    "ralston-33": RALSTON_33_TABLEAU,
    "bogacki-shampine-32": BOGACKI_SHAMPINE_32_TABLEAU,
    "classical-rk4": CLASSICAL_RK4_TABLEAU,
    "rk4": CLASSICAL_RK4_TABLEAU,
}
"""Mapping from human readable identifiers to ERK tableaus."""
