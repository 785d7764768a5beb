# hybrid_operation/sim/simulator.py
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List
import logging
import numpy as np

from hybrid_operation.core.signal import Signal
from hybrid_operation.core.strategy import Strategy, parse_hybrid_pair_input
from hybrid_operation.components.pair import hybrid_pair
from hybrid_operation.controllers.base import STATE_DIMENSION
from hybrid_operation.controllers.factory import control_factory
from hybrid_operation.sim.config import HybridOptions
from hybrid_operation.sim.results import SimulationResult
from hybrid_operation.sim.solvers import resolve_solver
from hybrid_operation.visualization.plotting import plot_operation
from hybrid_operation.helpers import IntegrationFailure, InvalidSignal, check_cut

logger = logging.getLogger(__name__)


def make_rhs(demand_fcn: Callable, reference_fcn: Callable, control: Callable) -> Callable:
    """
    Composes the control law with the demand and the reference into the right-hand side rhs(t, y) of the ODE.
    All the time dependence comes from the two functions, the control law only sees their values
    """
    def rhs(t, y):
        derivative = np.asarray(control(demand_fcn(t), reference_fcn(t), y), dtype=float)
        if derivative.shape != np.shape(y):
            raise IntegrationFailure(f"The control law returned a derivative of shape {derivative.shape} for a state of shape {np.shape(y)} at t = {t}")
        if not np.all(np.isfinite(derivative)):
            raise IntegrationFailure(f"The control law returned a non-finite derivative {derivative} at t = {t}")
        return derivative
    return rhs


def check_trajectory(time, states, period: float, rtol: float = 1e-9):
    # A trajectory is only accepted if it covers the whole period
    time = np.array(time, dtype=float)
    states = np.array(states, dtype=float)
    if time.ndim != 1 or time.size < 1:
        raise IntegrationFailure(f"The solver returned a time vector of shape {time.shape}")
    if states.shape != (time.size, STATE_DIMENSION):
        raise IntegrationFailure(f"The solver returned states of shape {states.shape}, expected {(time.size, STATE_DIMENSION)}")
    if not np.isclose(time[0], 0.0, rtol=0.0, atol=rtol * period):
        raise IntegrationFailure(f"The trajectory starts at t = {time[0]} instead of 0")
    if not np.isclose(time[-1], period, rtol=rtol, atol=0.0):
        raise IntegrationFailure(f"The trajectory ends at t = {time[-1]} instead of the period {period}")
    if not np.all(np.isfinite(states)):
        raise IntegrationFailure("The solver returned non-finite states")
    time[0], time[-1] = 0.0, period
    # Checked after pinning, samples just outside the period would otherwise collide with the endpoints
    if np.any(np.diff(time) <= 0):
        raise IntegrationFailure("The solver returned a time vector that is not strictly increasing within [0, period]")
    return time, states


@dataclass
class OperationSimulator:
    """
    Simulation of a hybrid storage pair for a signal at a specific cut.

    The dimensioning of the storages happens elsewhere: this class verifies the operational control for that
    dimensioning, integrating the energy content of base and peak over one period of the signal.
    Both strategies need omniscient knowledge of the signal, so they cannot be applied to real problems without
    modification.
    """
    signal: Signal
    cut: float
    strategy: Strategy | str = Strategy.INTER
    options: HybridOptions | None = None
    pair_builder: Callable = hybrid_pair
    control_builder: Callable = control_factory
    visualizer: Callable = plot_operation

    def run(self) -> SimulationResult:
        strategy, options = parse_hybrid_pair_input(self.strategy, self.options)
        cut = check_cut(self.cut)
        if not isinstance(self.signal, Signal):
            raise InvalidSignal(f"Expected a Signal, got {type(self.signal).__name__}. Use gen_signal() to create one")
        solver = resolve_solver(options.continuous_solver)
        period = self.signal.period

        base, peak, reference = self.pair_builder(self.signal, cut, strategy, options)
        control = self.control_builder(cut, strategy, base, peak, options)

        rhs = make_rhs(self.signal.fcn, reference.fcn, control)
        initial_state = np.zeros(STATE_DIMENSION)
        logger.debug("Integrating %s signal over [0, %s] at cut %s with strategy %s", self.signal.type, period, cut, strategy)
        time, states = solver(rhs, (0.0, period), initial_state, options.integrator_settings)
        time, states = check_trajectory(time, states, period)

        demand = np.array([self.signal.fcn(t) for t in time], dtype=float)
        powers = -np.array([rhs(t, y) for t, y in zip(time, states)], dtype=float)
        result = SimulationResult(base=base, peak=peak, type=self.signal.type, cut=cut, strategy=strategy,
                                  reference=reference, time=time, states=states, powers=powers, demand=demand)
        logger.info("Simulated cut %s with strategy %s: %d samples", cut, strategy, len(time))

        if options.plot_sim:
            self._visualize(result, options)
        return result

    def _visualize(self, result: SimulationResult, options: HybridOptions) -> None:
        try:
            self.visualizer(result, self.signal, options)
        except Exception:
            logger.exception("Plotting the operation at cut %s failed, the simulation result is unaffected", result.cut)


def sim_operation(signal: Signal, cut: float, strategy: Strategy | str = Strategy.INTER, options: HybridOptions | None = None, **collaborators: Any) -> SimulationResult:
    """
    Applies the control strategy to a signal for a specific cut

    Parameters
    ----------
    signal : Signal
        Demand signal, see gen_signal()
    cut : float
        Power cut in [0, 1]
    strategy : Strategy or str, optional
        "inter" (default) allows an inter-storage power flow, "nointer" prohibits it
    options : HybridOptions, optional
        Options created by hybridset(). Relevant fields are continuous_solver, integrator_settings, tanh_sim and plot_sim
    **collaborators
        Optional replacements for pair_builder, control_builder and visualizer

    Examples
    --------
    >>> signal = gen_signal(lambda t: math.sin(t) + 2 * math.sin(3 * t), 2 * math.pi)
    >>> result = sim_operation(signal, 0.4)
    >>> result = sim_operation(signal, 0.5, "nointer", hybridset(plot_sim=42, tanh_sim=100.0))
    """
    return OperationSimulator(signal, cut, strategy, options, **collaborators).run()


def sim_operation_sweep(signal: Signal, cuts: Iterable[float], strategy: Strategy | str = Strategy.INTER, options: HybridOptions | None = None, **collaborators: Any) -> List[SimulationResult]:
    # Every cut is an independent run
    return [sim_operation(signal, cut, strategy, options, **collaborators) for cut in cuts]
