"""Unit tests for ButcherTableau validation and cached stage order."""

import numpy as np
import pytest

from mork.graph import Explicit, Implicit, InvalidDependencyGraph
from mork.methods import (
    ButcherTableau,
    DIRKTableau,
    ERKTableau,
    FIRKTableau,
)
from mork.methods.dirk_tableaus import TRAPEZOIDAL_DIRK_TABLEAU
from mork.methods.erk_tableaus import (
    BOGACKI_SHAMPINE_32_TABLEAU,
    CLASSICAL_RK4_TABLEAU,
)
from mork.methods.firk_tableaus import (
    GAUSS_LEGENDRE_2_TABLEAU,
    LOBATTO_IIIA_3_TABLEAU,
)


def test_dependency_graph_follows_nonzero_coefficients():
    tableau = ButcherTableau(
        a=((0.0, 0.0), (0.5, 0.5)),
        b=(0.5, 0.5),
        c=(0.0, 1.0),
        order=2,
    )
    assert tableau.dependency_graph == ((False, False), (True, True))
    assert tableau.stage_count == 2


def test_explicit_tableau_order():
    assert CLASSICAL_RK4_TABLEAU.computation_order == tuple(
        Explicit(stage) for stage in range(4)
    )
    assert CLASSICAL_RK4_TABLEAU.is_explicit
    assert CLASSICAL_RK4_TABLEAU.is_diagonally_implicit


def test_esdirk_tableau_order():
    """Trapezoidal DIRK: explicit first stage, self-referencing second."""

    assert TRAPEZOIDAL_DIRK_TABLEAU.computation_order == (
        Explicit(0),
        Implicit((1,), (0,)),
    )
    assert not TRAPEZOIDAL_DIRK_TABLEAU.is_explicit
    assert TRAPEZOIDAL_DIRK_TABLEAU.is_diagonally_implicit


def test_fully_implicit_tableau_order():
    assert GAUSS_LEGENDRE_2_TABLEAU.computation_order == (
        Implicit((0, 1), ()),
    )
    assert not GAUSS_LEGENDRE_2_TABLEAU.is_diagonally_implicit


def test_partially_coupled_tableau_order():
    """Lobatto IIIA: stage 0 explicit, stages 1 and 2 solved together."""

    assert LOBATTO_IIIA_3_TABLEAU.computation_order == (
        Explicit(0),
        Implicit((1, 2), (0,)),
    )


def test_order_computed_once_and_shared():
    """The order is stored on the tableau, not recomputed per access."""

    first = GAUSS_LEGENDRE_2_TABLEAU.computation_order
    assert GAUSS_LEGENDRE_2_TABLEAU.computation_order is first


def test_non_square_matrix_rejected():
    with pytest.raises(InvalidDependencyGraph):
        ButcherTableau(
            a=((0.0, 0.0), (0.5,)),
            b=(0.5, 0.5),
            c=(0.0, 1.0),
            order=2,
        )


def test_one_dimensional_matrix_rejected():
    """Scalar rows in ``a`` are reported as a malformed graph."""

    with pytest.raises(InvalidDependencyGraph, match="row 0"):
        ButcherTableau(a=(1.0, 2.0), b=(1.0, 0.0), c=(0.0, 1.0), order=1)


def test_matrix_size_must_match_weights():
    """A square matrix of the wrong size disagrees with the stage count."""

    with pytest.raises(InvalidDependencyGraph, match="declares 3"):
        ButcherTableau(
            a=((0.0, 0.0), (0.5, 0.0)),
            b=(0.2, 0.3, 0.5),
            c=(0.0, 0.5, 1.0),
            order=1,
        )


@pytest.mark.parametrize(
    "overrides",
    [{"c": (0.0,)}, {"b_hat": (1.0,)}],
    ids=["nodes", "embedded-weights"],
)
def test_vector_lengths_checked(overrides):
    settings = dict(a=((0.0, 0.0), (1.0, 0.0)), b=(0.5, 0.5),
                    c=(0.0, 1.0), order=2)
    settings.update(overrides)
    with pytest.raises(ValueError):
        ButcherTableau(**settings)


def test_order_must_be_positive_integer():
    with pytest.raises(ValueError):
        ButcherTableau(a=((0.0,),), b=(1.0,), c=(0.0,), order=0)
    with pytest.raises(TypeError):
        ButcherTableau(a=((0.0,),), b=(1.0,), c=(0.0,), order=1.5)


def test_numpy_integer_order_accepted():
    tableau = ButcherTableau(
        a=((0.0,),), b=(1.0,), c=(0.0,), order=np.int64(1)
    )
    assert tableau.order == 1
    assert type(tableau.order) is int


def test_numpy_coefficients_converted_to_tuples():
    tableau = ButcherTableau(
        a=np.array([[0.0, 0.0], [1.0, 0.0]]),
        b=np.array([0.5, 0.5]),
        c=np.array([0.0, 1.0]),
        order=2,
    )
    assert tableau.a == ((0.0, 0.0), (1.0, 0.0))
    assert tableau == ButcherTableau(
        a=((0.0, 0.0), (1.0, 0.0)), b=(0.5, 0.5), c=(0.0, 1.0), order=2
    )


def test_erk_tableau_rejects_implicit_coefficients():
    with pytest.raises(ValueError, match="ERKTableau"):
        ERKTableau(a=((0.5,),), b=(1.0,), c=(0.5,), order=2)


def test_erk_tableau_accepts_out_of_order_explicit_stages():
    """Explicit only needs an acyclic graph, not a lower triangle."""

    tableau = ERKTableau(
        a=((0.0, 1.0, 0.0), (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
        b=(1.0 / 3.0, 1.0 / 3.0, 1.0 / 3.0),
        c=(1.0, 0.0, 1.0),
        order=1,
    )
    assert tableau.computation_order == (
        Explicit(1), Explicit(0), Explicit(2),
    )


def test_dirk_tableau_rejects_coupled_stages():
    with pytest.raises(ValueError, match="FIRKTableau"):
        DIRKTableau(
            a=((0.25, 0.25), (0.25, 0.25)),
            b=(0.5, 0.5),
            c=(0.5, 0.5),
            order=1,
        )


def test_firk_tableau_accepts_any_structure():
    tableau = FIRKTableau(a=((0.0,),), b=(1.0,), c=(0.0,), order=1)
    assert tableau.is_explicit


def test_error_weights():
    weights = BOGACKI_SHAMPINE_32_TABLEAU.error_weights(np.float64)
    expected = np.array(BOGACKI_SHAMPINE_32_TABLEAU.b) - np.array(
        BOGACKI_SHAMPINE_32_TABLEAU.b_hat
    )
    np.testing.assert_allclose(weights, expected)
    assert BOGACKI_SHAMPINE_32_TABLEAU.has_error_estimate
    assert CLASSICAL_RK4_TABLEAU.error_weights(np.float64) is None
    assert not CLASSICAL_RK4_TABLEAU.has_error_estimate


def test_typed_rows_cast_precision():
    rows = CLASSICAL_RK4_TABLEAU.typed_rows(CLASSICAL_RK4_TABLEAU.a,
                                            np.float32)
    assert all(isinstance(value, np.float32) for row in rows for value in row)
