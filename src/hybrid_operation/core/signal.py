# hybrid_operation/core/signal.py
from dataclasses import dataclass
from typing import Callable, Sequence
import math
import numpy as np

from hybrid_operation.helpers import InvalidSignal


@dataclass(frozen=True)
class StepFunction:
    """Piecewise-constant function of time built from equally spaced samples"""
    values: tuple
    period: float

    def __call__(self, t: float) -> float:
        n = len(self.values)
        k = int(math.floor(t / self.period * n))
        return self.values[min(max(k, 0), n - 1)]


@dataclass(frozen=True)
class Signal:
    fcn: Callable[[float], float]
    period: float
    type: str = "fcn"

    def __post_init__(self):
        if not callable(self.fcn):
            raise InvalidSignal(f'The value function of a {self.type} signal must be callable, got {type(self.fcn).__name__}')
        try:
            period = float(self.period)
        except (TypeError, ValueError):
            raise InvalidSignal(f'The signal period must be a real number, got {self.period!r}') from None
        if not math.isfinite(period) or period <= 0.0:
            raise InvalidSignal(f'The signal period must be finite and strictly positive, got {self.period}')
        object.__setattr__(self, 'period', period)

    def evaluate(self, t: float) -> float:
        return self.fcn(t)

    def time_grid(self, n: int) -> np.ndarray:
        return np.linspace(0.0, self.period, n)

    def sample(self, n: int) -> np.ndarray:
        """
        Values of the signal on a uniform grid of n points, both ends of the period included
        """
        return np.array([self.fcn(t) for t in self.time_grid(n)], dtype=float)

    def peak_value(self, n: int = 4001) -> float:
        # Sampled signals are exact, function signals are approximated on the grid
        if isinstance(self.fcn, StepFunction):
            return float(np.max(np.abs(self.fcn.values)))
        return float(np.max(np.abs(self.sample(n))))


def gen_signal(source: Callable[[float], float] | Sequence[float], period: float) -> Signal:
    """
    Creates a demand signal over one period

    Parameters
    ----------
    source : callable or sequence of float
        Either the value-at-time function of the signal, or equally spaced samples that are held constant
        over their share of the period
    period : float
        Duration of one period of the signal

    Returns
    -------
    Signal
        A signal of type "fcn" for functions and of type "step" for samples
    """
    if callable(source):
        return Signal(source, period, "fcn")
    samples = np.asarray(source, dtype=float)
    if samples.ndim != 1 or samples.size == 0:
        raise InvalidSignal(f'Signal samples must be a non-empty one-dimensional sequence, got shape {samples.shape}')
    if not np.all(np.isfinite(samples)):
        raise InvalidSignal('Signal samples must all be finite')
    return Signal(StepFunction(tuple(float(x) for x in samples), period), period, "step")
