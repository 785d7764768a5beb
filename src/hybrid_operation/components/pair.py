# hybrid_operation/components/pair.py
from dataclasses import dataclass
from typing import Callable
import logging, math
import numpy as np
from scipy.integrate import cumulative_trapezoid

from hybrid_operation.core.signal import Signal
from hybrid_operation.core.strategy import Strategy, resolve_strategy
from hybrid_operation.components.storage import StorageDescriptor
from hybrid_operation.sim.config import HybridOptions
from hybrid_operation.helpers import check_cut

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClippedShare:
    """Share of a demand function that fits within a symmetric power limit"""
    fcn: Callable[[float], float]
    limit: float

    def __call__(self, t: float) -> float:
        return float(np.clip(self.fcn(t), -self.limit, self.limit))


def energy_span(values: np.ndarray, time: np.ndarray) -> float:
    # Difference between the highest and the lowest energy content reached when delivering the power values
    if len(time) < 2:
        return 0.0
    energy = cumulative_trapezoid(-values, time, initial=0.0)
    return float(energy.max() - energy.min())


def hybrid_pair(signal: Signal, cut: float, strategy: Strategy | str = Strategy.INTER, options: HybridOptions | None = None):
    """
    Derives the base and peak storage descriptors and the reference of the base unit for a signal at a specific cut

    Parameters
    ----------
    signal : Signal
        Demand signal over one period
    cut : float
        Power cut in [0, 1]. The base unit covers the demand up to cut times the peak demand, the peak unit the rest
    strategy : Strategy or str, optional
        Control strategy, only validated here. Defaults to Strategy.INTER
    options : HybridOptions, optional
        The fields sample_points and inter_recovery_rate are used

    Returns
    -------
    tuple
        (base, peak, reference) where base and peak are StorageDescriptor and reference is a Signal
    """
    resolve_strategy(strategy)
    check_cut(cut)
    options = options if options is not None else HybridOptions()
    time = signal.time_grid(options.sample_points)
    demand = np.array([signal.fcn(t) for t in time], dtype=float)
    peak_demand = signal.peak_value(options.sample_points)
    base_power = cut * peak_demand
    peak_power = (1.0 - cut) * peak_demand
    base_share = np.clip(demand, -base_power, base_power)
    peak_share = demand - base_share
    recovery_rate = options.inter_recovery_rate if options.inter_recovery_rate is not None else 2 * math.pi / signal.period
    base = StorageDescriptor("base", base_power, energy_span(base_share, time))
    peak = StorageDescriptor("peak", peak_power, energy_span(peak_share, time), recovery_rate)
    reference = Signal(ClippedShare(signal.fcn, base_power), signal.period, "reference")
    logger.debug("Pair at cut %s: base %s, peak %s", cut, base, peak)
    return base, peak, reference
