from hybrid_operation.controllers.base import ControlLaw
from hybrid_operation.helpers import saturate_between


class InterControlLaw(ControlLaw):
    """
    Control law with inter-storage power flow: on top of its reference, the base unit exchanges power with the
    peak unit to bring the peak energy content back to its initial level
    """
    def inter_power(self, demand, reference, energy_peak):
        # The exchange is limited so that neither unit exceeds its power capability
        lower = max(-self.base.power - reference, demand - reference - self.peak.power)
        upper = min(self.base.power - reference, demand - reference + self.peak.power)
        return saturate_between(-self.peak.recovery_rate * energy_peak, lower, upper, self.smoothing)

    def powers(self, demand, reference, state):
        p_base = reference + self.inter_power(demand, reference, state[1])
        # The peak unit delivers whatever the base does not, so the pair always matches the demand
        p_peak = demand - p_base
        return p_base, p_peak
