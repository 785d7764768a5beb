import pytest

import hybrid_operation as hyb
from hybrid_operation.core.strategy import resolve_strategy


@pytest.mark.parametrize("token, expected", [
    ("inter", hyb.Strategy.INTER),
    ("nointer", hyb.Strategy.NOINTER),
    (" NoInter ", hyb.Strategy.NOINTER),
    (hyb.Strategy.INTER, hyb.Strategy.INTER),
])
def test_resolve_strategy(token, expected):
    assert resolve_strategy(token) is expected


@pytest.mark.parametrize("token", ["both", "", None, 1, "inter-storage"])
def test_unknown_strategy(token):
    with pytest.raises(hyb.UnknownStrategy):
        resolve_strategy(token)


def test_strategy_is_a_string():
    assert hyb.Strategy.NOINTER == "nointer"
    assert str(hyb.Strategy.INTER) == "inter"


def test_parse_hybrid_pair_input_defaults():
    strategy, options = hyb.parse_hybrid_pair_input()
    assert strategy is hyb.Strategy.INTER
    assert options == hyb.HybridOptions()


def test_parse_hybrid_pair_input_rejects_plain_dicts():
    with pytest.raises(hyb.InvalidOptions):
        hyb.parse_hybrid_pair_input("inter", {"plot_sim": True})
