"""Tableaus for diagonally implicit Runge--Kutta (DIRK) methods."""

from typing import Dict

import attrs

from mork.methods.butcher_tableau import ButcherTableau


@attrs.define(frozen=True)
class DIRKTableau(ButcherTableau):
    """Coefficient tableau describing a diagonally implicit RK scheme.

    Every stage is resolved on its own: either directly, or by solving a
    single-stage equation when its diagonal coefficient is non-zero. A
    tableau whose stages are coupled into larger groups is rejected.

    References
    ----------
    Hairer, E., & Wanner, G. (1996). *Solving Ordinary Differential
    Equations II: Stiff and Differential-Algebraic Problems* (2nd ed.).
    Springer.
    """

    def __attrs_post_init__(self) -> None:
        super().__attrs_post_init__()
        if not self.is_diagonally_implicit:
            coupled = [
                unit.stages for unit in self.computation_order
                if len(unit.stages) > 1
            ]
            raise ValueError(
                f"DIRKTableau stages {coupled} are coupled and must be "
                "solved together; use FIRKTableau instead."
            )


BACKWARD_EULER_TABLEAU = DIRKTableau(
    a=((1.0,),),
    b=(1.0,),
    c=(1.0,),
    order=1,
)
"""Single-stage backward (implicit) Euler method, first order and
L-stable."""

IMPLICIT_MIDPOINT_TABLEAU = DIRKTableau(
    a=((0.5,),),
    b=(1.0,),
    c=(0.5,),
    order=2,
)
"""DIRK tableau for the implicit midpoint rule (second order).

The method is singly diagonally implicit with a single stage whose
coefficient equals :math:`1/2`. It is symplectic and A-stable.

References
----------
Sanz-Serna, J. M. (1988). Runge--Kutta schemes for Hamiltonian systems.
*BIT Numerical Mathematics*, 28(4), 877-883.
"""

TRAPEZOIDAL_DIRK_TABLEAU = DIRKTableau(
    a=(
        (0.0, 0.0),
        (0.5, 0.5),
    ),
    b=(0.5, 0.5),
    c=(0.0, 1.0),
    order=2,
)
"""DIRK tableau for the Crank--Nicolson (trapezoidal) rule.

The first stage is explicit while the second stage is implicit, placing
this scheme in the ESDIRK family.

References
----------
Crank, J., & Nicolson, P. (1947). A practical method for numerical
solution of partial differential equations of the heat-conduction type.
*Mathematical Proceedings of the Cambridge Philosophical Society*,
43(1), 50-67.
"""

SQRT2 = 2 ** 0.5
SDIRK_2_2_TABLEAU = DIRKTableau(
    a=(
        ((2.0 - SQRT2) / 2.0, 0.0),
        (1.0 - (2.0 - SQRT2) / 2.0, (2.0 - SQRT2) / 2.0),
    ),
    b=(1.0 - (2.0 - SQRT2) / 2.0, (2.0 - SQRT2) / 2.0),
    b_hat=(0.5, 0.5),
    c=((2.0 - SQRT2) / 2.0, 1.0),
    order=2,
)
"""Two-stage, second-order SDIRK tableau by Alexander.

The tableau is L-stable and singly diagonally implicit with diagonal
coefficient :math:`1 - \\tfrac{1}{\\sqrt{2}}`. The embedded weights provide
an error estimate suitable for adaptive step controllers.

References
----------
Alexander, R. (1977). Diagonally implicit Runge--Kutta methods for
stiff ODEs. *SIAM Journal on Numerical Analysis*, 14(6), 1006-1021.
"""

DIRK_TABLEAU_REGISTRY: Dict[str, DIRKTableau] = {
    "backward-euler": BACKWARD_EULER_TABLEAU,
    "implicit-midpoint": IMPLICIT_MIDPOINT_TABLEAU,
    "trapezoidal-dirk": TRAPEZOIDAL_DIRK_TABLEAU,
    "sdirk-2-2": SDIRK_2_2_TABLEAU,
}
"""Registry of named DIRK tableaus."""

DEFAULT_DIRK_TABLEAU_NAME = "sdirk-2-2"
DEFAULT_DIRK_TABLEAU = DIRK_TABLEAU_REGISTRY[DEFAULT_DIRK_TABLEAU_NAME]
