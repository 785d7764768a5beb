# hybrid_operation/core/strategy.py
from enum import Enum
import logging

from hybrid_operation.helpers import UnknownStrategy, InvalidOptions
from hybrid_operation.sim.config import HybridOptions

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """
    Control strategy of a hybrid storage pair. INTER allows an inter-storage power flow, NOINTER prohibits it
    """
    INTER = "inter"
    NOINTER = "nointer"

    def __str__(self):
        return self.value


def resolve_strategy(strategy: "Strategy | str") -> Strategy:
    if isinstance(strategy, Strategy):
        return strategy
    if isinstance(strategy, str):
        token = strategy.strip().lower()
        for member in Strategy:
            if member.value == token:
                return member
    raise UnknownStrategy(f"Unknown strategy {strategy!r}. Valid strategies are {[s.value for s in Strategy]}")


def parse_hybrid_pair_input(strategy: "Strategy | str" = Strategy.INTER, options: HybridOptions | None = None):
    """
    Validates and normalizes the strategy and the options of a hybrid pair run

    Returns
    -------
    tuple
        (Strategy, HybridOptions)
    """
    strategy = resolve_strategy(strategy)
    if options is None:
        options = HybridOptions()
    elif not isinstance(options, HybridOptions):
        raise InvalidOptions(f"Options must be a HybridOptions instance, got {type(options).__name__}. Use hybridset() to create one")
    logger.debug("Resolved strategy %s with options %s", strategy, options)
    return strategy, options
