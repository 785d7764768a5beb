# Re-export a stable public API
from .core.signal import Signal, gen_signal
from .core.strategy import Strategy, parse_hybrid_pair_input
from .components.storage import StorageDescriptor
from .components.pair import hybrid_pair
from .controllers.base import ControlLaw, NoInterControlLaw
from .controllers.inter import InterControlLaw
from .controllers.factory import control_factory
from .sim.config import HybridOptions, hybridset, load_options
from .sim.solvers import Solver, SciPySolver, RungeKutta4Solver, resolve_solver
from .sim.results import SimulationResult, FeasibilityReport
from .sim.simulator import OperationSimulator, sim_operation, sim_operation_sweep
from .visualization.plotting import plot_operation
from .helpers import HybridError, InvalidInput, InvalidCut, UnknownStrategy, InvalidSignal, InvalidOptions, IntegrationFailure

__all__ = [
    "Signal", "gen_signal",
    "Strategy", "parse_hybrid_pair_input",
    "StorageDescriptor", "hybrid_pair",
    "ControlLaw", "NoInterControlLaw", "InterControlLaw", "control_factory",
    "HybridOptions", "hybridset", "load_options",
    "Solver", "SciPySolver", "RungeKutta4Solver", "resolve_solver",
    "SimulationResult", "FeasibilityReport",
    "OperationSimulator", "sim_operation", "sim_operation_sweep",
    "plot_operation",
    "HybridError", "InvalidInput", "InvalidCut", "UnknownStrategy", "InvalidSignal", "InvalidOptions", "IntegrationFailure",
]
