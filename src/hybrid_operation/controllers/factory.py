import logging

from hybrid_operation.components.storage import StorageDescriptor
from hybrid_operation.controllers.base import ControlLaw, NoInterControlLaw
from hybrid_operation.controllers.inter import InterControlLaw
from hybrid_operation.core.strategy import Strategy, resolve_strategy
from hybrid_operation.sim.config import HybridOptions
from hybrid_operation.helpers import check_cut

logger = logging.getLogger(__name__)


def control_factory(cut: float, strategy: Strategy | str, base: StorageDescriptor, peak: StorageDescriptor, options: HybridOptions | None = None) -> ControlLaw:
    """
    Builds the control law of a hybrid pair for the given strategy.
    The cut is already reflected in the power capabilities of base and peak
    """
    check_cut(cut)
    smoothing = options.tanh_sim if options is not None else None
    match resolve_strategy(strategy):
        case Strategy.INTER:
            control = InterControlLaw(base, peak, smoothing)
        case Strategy.NOINTER:
            control = NoInterControlLaw(base, peak, smoothing)
    logger.debug("Built %s for cut %s", type(control).__name__, cut)
    return control
