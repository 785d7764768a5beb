# tests/conftest.py
import math
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pytest

import hybrid_operation as hyb


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def two_tone_signal():
    return hyb.gen_signal(lambda t: math.sin(t) + 2 * math.sin(3 * t), 2 * math.pi)


@pytest.fixture
def zero_signal():
    return hyb.gen_signal(lambda t: 0.0, 5.0)


@pytest.fixture
def unit_pair():
    base = hyb.StorageDescriptor("base", 1.0, 2.0)
    peak = hyb.StorageDescriptor("peak", 0.5, 1.0, recovery_rate=1.0)
    return base, peak


class Recorder:
    """Wraps a collaborator and records every call made to it"""
    def __init__(self, fcn=None):
        self.fcn = fcn
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        if self.fcn is not None:
            return self.fcn(*args)


@pytest.fixture
def recorders():
    return {
        'pair_builder': Recorder(hyb.hybrid_pair),
        'control_builder': Recorder(hyb.control_factory),
        'visualizer': Recorder(),
    }


@pytest.fixture
def rng():
    return np.random.default_rng(42)
