import math
import numpy as np
import pytest

import hybrid_operation as hyb


def test_result_arrays_are_read_only(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.4)
    with pytest.raises(ValueError):
        result.states[0, 0] = 1.0
    with pytest.raises(ValueError):
        result.time[-1] = 0.0


def test_result_is_self_contained(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.4, "nointer")
    assert result.type == "fcn"
    assert result.cut == 0.4
    assert math.isclose(result.period, 2 * math.pi)
    assert np.allclose(result.demand, [two_tone_signal.fcn(t) for t in result.time])
    # The reference travels with the result, so it can be re-evaluated without the builder
    assert result.reference.fcn(1.0) == pytest.approx(min(max(two_tone_signal.fcn(1.0), -result.base.power), result.base.power))


def test_powers_are_consistent_with_energies(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.4, "inter", hyb.hybridset(continuous_solver="RK4", integrator_settings={"n_steps": 4000}))
    # dE/dt = -p
    energy_rate = np.gradient(result.states, result.time, axis=0)
    assert np.allclose(energy_rate[5:-5], -result.powers[5:-5], atol=1e-2)


def test_to_dataframe(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.6, "nointer")
    df = result.to_dataframe()
    assert list(df.columns) == ['base_energy', 'peak_energy', 'base_power', 'peak_power', 'demand', 'reference']
    assert df.index.name == 'time'
    assert len(df) == len(result.time)
    assert df['base_power'].abs().max() <= result.base.power + 1e-12


def test_nointer_is_feasible_by_construction(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.4, "nointer", hyb.hybridset(integrator_settings={"rtol": 1e-9, "atol": 1e-12}))
    report = result.check_feasibility(rtol=1e-2)
    assert report.power_ok_base and report.power_ok_peak
    assert math.isclose(report.energy_span_base, result.base.energy, rel_tol=1e-2)
    assert math.isclose(report.energy_span_peak, result.peak.energy, rel_tol=1e-2)
    assert report.feasible


def test_inter_tracks_demand_exactly(two_tone_signal):
    result = hyb.sim_operation(two_tone_signal, 0.4, "inter")
    assert np.allclose(result.powers.sum(axis=1), result.demand, atol=1e-12)


def test_feasibility_detects_overload(unit_pair):
    base, peak = unit_pair
    reference = hyb.gen_signal(lambda t: 0.0, 1.0)
    time = np.array([0.0, 0.5, 1.0])
    result = hyb.SimulationResult(base, peak, "fcn", 0.5, hyb.Strategy.NOINTER, reference, time,
                                  states=np.array([[0.0, 0.0], [-0.5, -1.0], [-1.0, -2.0]]),
                                  powers=np.array([[1.0, 2.0], [1.0, 2.0], [1.0, 2.0]]),
                                  demand=np.array([3.0, 3.0, 3.0]))
    report = result.check_feasibility()
    assert report.power_ok_base and not report.power_ok_peak
    assert report.energy_ok_base and not report.energy_ok_peak
    assert not report.feasible


def test_result_shape_invariants(unit_pair):
    base, peak = unit_pair
    reference = hyb.gen_signal(lambda t: 0.0, 1.0)
    with pytest.raises(ValueError):
        hyb.SimulationResult(base, peak, "fcn", 0.5, hyb.Strategy.INTER, reference,
                             time=np.array([0.0, 1.0]), states=np.zeros((3, 2)), powers=np.zeros((2, 2)), demand=np.zeros(2))
    with pytest.raises(ValueError):
        hyb.SimulationResult(base, peak, "fcn", 0.5, hyb.Strategy.INTER, reference,
                             time=np.array([0.0, 1.0]), states=np.zeros((2, 3)), powers=np.zeros((2, 3)), demand=np.zeros(2))
    with pytest.raises(ValueError):
        hyb.SimulationResult(base, peak, "fcn", 0.5, hyb.Strategy.INTER, reference,
                             time=np.array([1.0, 0.0]), states=np.zeros((2, 2)), powers=np.zeros((2, 2)), demand=np.zeros(2))
