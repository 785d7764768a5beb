# hybrid_operation/sim/config.py
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict
import math
import yaml

from hybrid_operation.helpers import InvalidOptions


def _is_real(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _default_integrator_settings() -> Dict[str, Any]:
    return {"rtol": 1e-6, "atol": 1e-9}


@dataclass(frozen=True)
class HybridOptions:
    continuous_solver: Callable | str = "RK45"      # solver callable or name, see sim/solvers.py
    discrete_solver: Callable | str | None = None   # forwarded for discrete workflows, not used by the simulator
    integrator_settings: Dict[str, Any] = field(default_factory=_default_integrator_settings)
    plot_sim: bool | int = False                     # an int also selects the figure number
    tanh_sim: float | None = None                    # smoothing factor of the control law saturations
    sample_points: int = 4001                        # grid used to derive the pair descriptors
    inter_recovery_rate: float | None = None         # [1/time], defaults to 2*pi/period

    def __post_init__(self):
        if isinstance(self.sample_points, bool) or not isinstance(self.sample_points, int) or self.sample_points < 2:
            raise InvalidOptions(f"sample_points must be an integer >= 2, got {self.sample_points!r}")
        if self.tanh_sim is not None and not (_is_real(self.tanh_sim) and self.tanh_sim > 0):
            raise InvalidOptions(f"tanh_sim must be a positive finite number or None, got {self.tanh_sim!r}")
        if self.inter_recovery_rate is not None and not (_is_real(self.inter_recovery_rate) and self.inter_recovery_rate >= 0):
            raise InvalidOptions(f"inter_recovery_rate must be a non-negative finite number or None, got {self.inter_recovery_rate!r}")
        if not isinstance(self.integrator_settings, dict):
            raise InvalidOptions(f"integrator_settings must be a dict, got {type(self.integrator_settings).__name__}")


def hybridset(options: HybridOptions | None = None, **updates: Any) -> HybridOptions:
    """
    Creates a modified copy of a set of options (or of the default options).
    Usage:
        opt = hybridset(plot_sim=42, tanh_sim=1e2)
    """
    base = options if options is not None else HybridOptions()
    known = {f.name for f in fields(HybridOptions)}
    unknown = sorted(set(updates) - known)
    if unknown:
        raise InvalidOptions(f"Unknown options {unknown}. Valid options are {sorted(known)}")
    return replace(base, **updates)


def load_options(path) -> HybridOptions:
    # Reads a YAML mapping of option names to values
    with open(path, "r") as stream:
        content = yaml.safe_load(stream)
    if content is None:
        return HybridOptions()
    if not isinstance(content, dict):
        raise InvalidOptions(f"The options file {path} must contain a mapping, got {type(content).__name__}")
    return hybridset(**content)
