import math, numbers
import numpy as np


def smooth_abs(x, smoothing: float):
    """
    Differentiable approximation of |x|, x * tanh(smoothing * x)
    """
    return x * np.tanh(smoothing * x)


def saturate(x, limit: float, smoothing: float | None = None):
    # Symmetric saturation to [-limit, limit]. With smoothing the corners are rounded off with tanh
    if smoothing is None:
        return float(np.clip(x, -limit, limit))
    return float(0.5 * (smooth_abs(x + limit, smoothing) - smooth_abs(x - limit, smoothing)))


def saturate_between(x, lower: float, upper: float, smoothing: float | None = None):
    # Saturation to [lower, upper]. An empty interval blocks the signal completely
    if lower > upper:
        return 0.0
    center = 0.5 * (lower + upper)
    return center + saturate(x - center, 0.5 * (upper - lower), smoothing)


def check_cut(cut):
    # The cut is returned unchanged so that it is preserved verbatim in the results
    if isinstance(cut, bool) or not isinstance(cut, numbers.Real):
        raise InvalidCut(f'The cut must be a real number in [0, 1], got {cut!r}')
    if math.isnan(cut) or cut < 0.0 or cut > 1.0:
        raise InvalidCut(f'The cut must lie in [0, 1], got {cut}')
    return cut


class HybridError(Exception):
    pass

class InvalidInput(HybridError, ValueError):
    pass

class InvalidCut(InvalidInput):
    pass

class UnknownStrategy(InvalidInput):
    pass

class InvalidSignal(InvalidInput):
    pass

class InvalidOptions(InvalidInput):
    pass

class IntegrationFailure(HybridError, RuntimeError):
    pass
