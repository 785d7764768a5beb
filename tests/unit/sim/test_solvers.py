import math
import numpy as np
import pytest

import hybrid_operation as hyb


def harmonic(t, y):
    return np.array([y[1], -y[0]])


@pytest.mark.parametrize("solver", [hyb.SciPySolver("RK45"), hyb.SciPySolver("DOP853"), hyb.RungeKutta4Solver(2000)])
def test_solver_contract(solver):
    t, y = solver(harmonic, (0.0, 2 * math.pi), [1.0, 0.0], {"rtol": 1e-9, "atol": 1e-12} if isinstance(solver, hyb.SciPySolver) else {})
    assert t.ndim == 1
    assert y.shape == (len(t), 2)
    assert t[0] == 0.0
    assert math.isclose(t[-1], 2 * math.pi)
    assert np.all(np.diff(t) > 0)
    assert np.allclose(y[-1], [1.0, 0.0], atol=1e-6)


def test_rk4_steps_from_settings():
    t, _ = hyb.RungeKutta4Solver()(harmonic, (0.0, 1.0), [1.0, 0.0], {"n_steps": 10})
    assert len(t) == 11
    t, _ = hyb.RungeKutta4Solver()(harmonic, (0.0, 1.0), [1.0, 0.0], {"max_step": 0.3})
    assert len(t) == 5
    with pytest.raises(hyb.InvalidOptions):
        hyb.RungeKutta4Solver()(harmonic, (0.0, 1.0), [1.0, 0.0], {"n_steps": 0})


def test_scipy_solver_failure_raises_integration_failure():
    # Blows up in finite time at t = 1
    def blow_up(t, y):
        return y ** 2
    with pytest.raises(hyb.IntegrationFailure):
        hyb.SciPySolver("RK45")(blow_up, (0.0, 2.0), [1.0], {})


def test_errors_inside_rhs_propagate():
    class Boom(Exception):
        pass

    def rhs(t, y):
        raise Boom()
    with pytest.raises(Boom):
        hyb.SciPySolver()(rhs, (0.0, 1.0), [0.0, 0.0], {})


def test_resolve_solver():
    assert isinstance(hyb.resolve_solver("RK45"), hyb.SciPySolver)
    assert hyb.resolve_solver("Radau").method == "Radau"
    assert isinstance(hyb.resolve_solver("rk4"), hyb.RungeKutta4Solver)

    def custom(rhs, span, y0, settings):
        return np.array([0.0]), np.array([y0])
    assert hyb.resolve_solver(custom) is custom
    with pytest.raises(hyb.InvalidOptions):
        hyb.resolve_solver("ode45")
    with pytest.raises(hyb.InvalidOptions):
        hyb.SciPySolver("Euler")


@pytest.mark.parametrize("name, method", [("rk45", "RK45"), ("radau", "Radau"), ("Lsoda", "LSODA"), ("dop853", "DOP853")])
def test_solver_names_ignore_case(name, method):
    assert hyb.resolve_solver(name).method == method
    assert isinstance(hyb.resolve_solver("Rk4"), hyb.RungeKutta4Solver)


def test_method_cannot_be_set_through_settings():
    with pytest.raises(hyb.InvalidOptions):
        hyb.SciPySolver("RK45")(harmonic, (0.0, 1.0), [1.0, 0.0], {"method": "Radau"})
