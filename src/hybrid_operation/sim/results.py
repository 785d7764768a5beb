from dataclasses import dataclass
import numpy as np
import pandas as pd

from hybrid_operation.components.storage import StorageDescriptor
from hybrid_operation.core.signal import Signal
from hybrid_operation.core.strategy import Strategy
from hybrid_operation.controllers.base import STATE_DIMENSION


def _read_only(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class FeasibilityReport:
    max_power_base: float
    max_power_peak: float
    energy_span_base: float
    energy_span_peak: float
    power_ok_base: bool
    power_ok_peak: bool
    energy_ok_base: bool
    energy_ok_peak: bool

    @property
    def feasible(self) -> bool:
        return self.power_ok_base and self.power_ok_peak and self.energy_ok_base and self.energy_ok_peak


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of one operation simulation of a hybrid storage pair.

    states holds the energy content [E_base, E_peak] of both units relative to their initial level at each time,
    powers the power [p_base, p_peak] delivered by each unit (positive when discharging) and demand the value of the
    demand signal at the same times.
    """
    base: StorageDescriptor
    peak: StorageDescriptor
    type: str
    cut: float
    strategy: Strategy
    reference: Signal
    time: np.ndarray
    states: np.ndarray
    powers: np.ndarray
    demand: np.ndarray

    def __post_init__(self):
        for name in ("time", "states", "powers", "demand"):
            object.__setattr__(self, name, _read_only(getattr(self, name)))
        n = len(self.time)
        if self.time.ndim != 1 or n < 1:
            raise ValueError(f"The time vector must be one-dimensional and non-empty, got shape {self.time.shape}")
        for name in ("states", "powers"):
            if getattr(self, name).shape != (n, STATE_DIMENSION):
                raise ValueError(f"{name} must have shape {(n, STATE_DIMENSION)}, got {getattr(self, name).shape}")
        if self.demand.shape != (n,):
            raise ValueError(f"demand must have shape {(n,)}, got {self.demand.shape}")
        if np.any(np.diff(self.time) <= 0):
            raise ValueError("The time vector must be strictly increasing")

    @property
    def period(self) -> float:
        return float(self.time[-1])

    def energy_span(self):
        # Energy span (max - min of the energy content) of base and peak over the simulated period
        spans = self.states.max(axis=0) - self.states.min(axis=0)
        return float(spans[0]), float(spans[1])

    def check_feasibility(self, rtol: float = 1e-3) -> FeasibilityReport:
        """
        Compares the simulated power and energy trajectories with the capabilities of base and peak
        """
        max_power_base, max_power_peak = (float(x) for x in np.abs(self.powers).max(axis=0))
        span_base, span_peak = self.energy_span()
        return FeasibilityReport(max_power_base, max_power_peak, span_base, span_peak,
                                 self.base.within_power_limit(max_power_base, rtol),
                                 self.peak.within_power_limit(max_power_peak, rtol),
                                 self.base.within_energy_limit(span_base, rtol),
                                 self.peak.within_energy_limit(span_peak, rtol))

    def to_dataframe(self) -> pd.DataFrame:
        reference = [self.reference.fcn(t) for t in self.time]
        return pd.DataFrame({'base_energy': self.states[:, 0],
                             'peak_energy': self.states[:, 1],
                             'base_power': self.powers[:, 0],
                             'peak_power': self.powers[:, 1],
                             'demand': self.demand,
                             'reference': reference},
                            index=pd.Index(self.time, name='time'))
