import numpy as np
import pytest

from mork.time_logger import default_timelogger

np.set_printoptions(linewidth=120, precision=12)


# --------------------------------------------------------------------------- #
#                           Dependency graphs                                 #
# --------------------------------------------------------------------------- #
def graph_from_edges(stage_count, edges):
    """Return a boolean matrix with ``graph[i][j]`` set for each ``(i, j)``."""

    graph = [[False] * stage_count for _ in range(stage_count)]
    for stage, referenced in edges:
        graph[stage][referenced] = True
    return graph


def random_graph(seed, stage_count, density):
    """Return a reproducible random boolean matrix."""

    rng = np.random.default_rng(seed)
    return rng.random((stage_count, stage_count)) < density


@pytest.fixture()
def edges_to_graph():
    """Expose :func:`graph_from_edges` to tests."""

    return graph_from_edges


@pytest.fixture(params=range(12), ids=lambda seed: f"seed{seed}")
def random_dependency_graph(request):
    """Random graphs of varied size and density, including self-loops."""

    seed = request.param
    stage_count = (0, 1, 2, 3, 5, 8, 13)[seed % 7]
    density = (0.1, 0.25, 0.5)[seed % 3]
    return random_graph(seed, stage_count, density)


@pytest.fixture()
def mixed_graph(edges_to_graph):
    """Stage 0 free, stages 1 and 2 mutually dependent, stage 3 reads both."""

    return edges_to_graph(4, [(1, 2), (2, 1), (3, 1), (3, 2)])


# --------------------------------------------------------------------------- #
#                              Step settings                                  #
# --------------------------------------------------------------------------- #
@pytest.fixture()
def step_settings_override(request):
    """Optional overrides for step constructor settings."""

    return getattr(request, "param", None)


@pytest.fixture()
def step_settings(step_settings_override):
    """Return baseline step settings merged with overrides."""

    settings = {
        "precision": np.float64,
        "error_fraction": 1e-10,
        "max_iterations": 200,
    }
    if step_settings_override:
        settings.update(step_settings_override)
    return settings


@pytest.fixture()
def precision(step_settings):
    return step_settings["precision"]


@pytest.fixture()
def linear_decay():
    """Right-hand side and solution of ``y' = -y``, ``y(0) = 1``."""

    def rhs(t, y):
        return -y

    def solution(t):
        return np.array([np.exp(-t)])

    return rhs, solution


@pytest.fixture()
def timelogger_verbosity(request):
    """Temporarily set the default time logger's verbosity."""

    verbosity = getattr(request, "param", "default")
    previous = default_timelogger.verbosity
    default_timelogger.clear()
    default_timelogger.set_verbosity(verbosity)
    yield default_timelogger
    default_timelogger.clear()
    default_timelogger.set_verbosity(previous)
