# hybrid_operation/sim/solvers.py
from typing import Any, Callable, Dict
import logging
import numpy as np
from scipy.integrate import solve_ivp

from hybrid_operation.helpers import IntegrationFailure, InvalidOptions

logger = logging.getLogger(__name__)

SCIPY_METHODS = ("RK45", "RK23", "DOP853", "Radau", "BDF", "LSODA")


class Solver:
    """
    Base class for numerical integrators.
    A solver is called as solver(rhs, time_span, initial_state, settings) and returns (times, states), with states of
    shape (len(times), len(initial_state)). Subclasses implement integrate()
    """
    name: str

    def __call__(self, rhs: Callable, time_span, initial_state, settings: Dict[str, Any] | None = None):
        t_start, t_end = float(time_span[0]), float(time_span[1])
        y0 = np.asarray(initial_state, dtype=float)
        logger.debug("%s integrating over [%s, %s] from %s", self.name, t_start, t_end, y0)
        return self.integrate(rhs, t_start, t_end, y0, dict(settings or {}))

    def integrate(self, rhs, t_start, t_end, y0, settings):
        raise NotImplementedError


class SciPySolver(Solver):
    def __init__(self, method: str = "RK45"):
        """
        Wrapper of scipy.integrate.solve_ivp

        Parameters
        ----------
        method : str, optional
            Integration method of solve_ivp. Defaults to "RK45"
        """
        if method not in SCIPY_METHODS:
            raise InvalidOptions(f"Unknown solve_ivp method {method!r}. Valid methods are {list(SCIPY_METHODS)}")
        self.method = method
        self.name = f"solve_ivp[{method}]"

    def integrate(self, rhs, t_start, t_end, y0, settings):
        if "method" in settings:
            raise InvalidOptions(f"The integration method is set by continuous_solver, not by the integrator settings (got {settings['method']!r})")
        sol = solve_ivp(rhs, (t_start, t_end), y0, method=self.method, **settings)
        if not sol.success:
            raise IntegrationFailure(f"{self.name} failed at t = {sol.t[-1] if sol.t.size else t_start}: {sol.message}")
        return sol.t, sol.y.T


class RungeKutta4Solver(Solver):
    def __init__(self, n_steps: int = 1000):
        """
        Classic fixed-step fourth order Runge-Kutta integrator

        Parameters
        ----------
        n_steps : int, optional
            Number of steps over the time span. Can be overridden by the settings "n_steps" or "max_step". Defaults to 1000
        """
        self.n_steps = n_steps
        self.name = "RK4"

    def integrate(self, rhs, t_start, t_end, y0, settings):
        n_steps = int(settings.get("n_steps", self.n_steps))
        if "max_step" in settings:
            n_steps = max(n_steps if "n_steps" in settings else 1, int(np.ceil((t_end - t_start) / settings["max_step"])))
        if n_steps < 1:
            raise InvalidOptions(f"RK4 needs at least one step, got {n_steps}")
        times = np.linspace(t_start, t_end, n_steps + 1)
        states = np.empty((n_steps + 1, y0.size), dtype=float)
        states[0] = y0
        for i in range(n_steps):
            t, h, y = times[i], times[i + 1] - times[i], states[i]
            k1 = rhs(t, y)
            k2 = rhs(t + h / 2, y + h / 2 * k1)
            k3 = rhs(t + h / 2, y + h / 2 * k2)
            k4 = rhs(t + h, y + h * k3)
            states[i + 1] = y + h / 6 * (k1 + 2 * k2 + 2 * k3 + k4)
        return times, states


def resolve_solver(solver: Callable | str) -> Callable:
    # Callables are used as they are, names refer to a solve_ivp method or to "RK4" regardless of case
    if callable(solver):
        return solver
    if isinstance(solver, str):
        methods = {method.upper(): method for method in SCIPY_METHODS}
        if solver.upper() in methods:
            return SciPySolver(methods[solver.upper()])
        if solver.upper() == "RK4":
            return RungeKutta4Solver()
    raise InvalidOptions(f"Unknown continuous solver {solver!r}. Use a callable, 'RK4' or one of {list(SCIPY_METHODS)}")
