from dataclasses import dataclass
import numpy as np

from hybrid_operation.components.storage import StorageDescriptor
from hybrid_operation.helpers import saturate

STATE_DIMENSION = 2   # [energy base, energy peak]


@dataclass(frozen=True)
class ControlLaw:
    """
    Closed-loop control law of a hybrid storage pair.

    A control law maps the instantaneous demand, the reference of the base unit and the state [E_base, E_peak]
    (energy content of each unit relative to its initial level) to the state derivative. The power delivered by a
    unit is positive when it discharges, hence dE/dt = -p.
    Control laws hold read-only parameters only and can be evaluated in any order.
    """
    base: StorageDescriptor
    peak: StorageDescriptor
    smoothing: float | None = None

    def __call__(self, demand: float, reference: float, state) -> np.ndarray:
        p_base, p_peak = self.powers(demand, reference, state)
        return np.array([-p_base, -p_peak], dtype=float)

    def powers(self, demand: float, reference: float, state):
        raise NotImplementedError


class NoInterControlLaw(ControlLaw):
    """
    Each unit tracks its own share of the demand. There is no power flow between base and peak,
    so what a saturated unit cannot deliver is not compensated by the other one
    """
    def powers(self, demand, reference, state):
        p_base = saturate(reference, self.base.power, self.smoothing)
        p_peak = saturate(demand - reference, self.peak.power, self.smoothing)
        return p_base, p_peak
