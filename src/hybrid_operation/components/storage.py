from dataclasses import dataclass


@dataclass(frozen=True)
class StorageDescriptor:
    """
    Capability record of one storage unit of a hybrid pair

    Parameters
    ----------
    name : str
        Name of the unit, "base" or "peak"
    power : float
        Maximum power [signal unit] the unit can charge or discharge
    energy : float
        Energy span [signal unit * time unit] required by the share of the demand assigned to the unit over one period,
        without inter-storage power flow
    recovery_rate : float, optional
        Rate [1/time unit] at which the unit is brought back towards its initial energy content by an inter-storage
        power flow. Defaults to 0.0 (no recovery)
    """
    name: str
    power: float
    energy: float
    recovery_rate: float = 0.0

    def within_power_limit(self, power: float, rtol: float = 1e-3, atol: float = 1e-9) -> bool:
        return abs(power) <= self.power * (1.0 + rtol) + atol

    def within_energy_limit(self, energy_span: float, rtol: float = 1e-3, atol: float = 1e-9) -> bool:
        return energy_span <= self.energy * (1.0 + rtol) + atol
