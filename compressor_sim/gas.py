"""
Gas properties and reservoir state for the compressor model.

Ideal gas model on a molar basis: every reservoir holds n moles of a
single diatomic gas, so P·V = n·R·T with the universal gas constant.
"""

from dataclasses import dataclass, field, replace
import numpy as np

from .isentropic import AdiabaticProcess


K = 7.0 / 5.0       # adiabatic index, diatomic ideal gas
R = 8.3145          # universal gas constant [J/(mol·K)]
CV = 5.0 / 2.0 * R  # molar heat capacity at constant volume [J/(mol·K)]


@dataclass(frozen=True)
class GasProperties:
    """
    Thermodynamic constants of an ideal gas, molar basis.

    For a diatomic ideal gas:
        gamma = 7/5 = 1.4
        cv    = R / (gamma - 1) = 5/2 · R

    Frozen: the constants don't change over a run.
    """
    name: str
    gamma: float   # cp/cv, dimensionless
    R: float = R   # universal gas constant [J/(mol·K)]

    @property
    def cv(self) -> float:
        """Molar heat capacity at constant volume [J/(mol·K)]"""
        return self.R / (self.gamma - 1.0)

    @property
    def cp(self) -> float:
        """Molar heat capacity at constant pressure [J/(mol·K)]"""
        return self.gamma * self.R / (self.gamma - 1.0)


DIATOMIC = GasProperties(name="Diatomic", gamma=K)


@dataclass
class GasState:
    """
    A single closed gas reservoir.

    Mutable on purpose: reservoirs are created once per experiment and
    advanced in place every cycle by the mixing and injection operations.
    Volume must stay positive; moles never go below zero.
    """
    volume: float         # container volume [m³]
    moles: float          # amount of gas [mol]
    temperature: float    # absolute temperature [K], 0 allowed when empty
    gas: GasProperties = field(default=DIATOMIC, repr=False)
    process: AdiabaticProcess = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.volume > 0:
            raise ValueError(f"Volume must be positive, got {self.volume}")
        if self.moles < 0:
            raise ValueError(f"Moles cannot be negative, got {self.moles}")
        self.process = AdiabaticProcess(self.gas)

    @property
    def pressure(self) -> float:
        """Ideal gas: P = n·R·T / V, 0 for an empty reservoir"""
        if self.moles == 0:
            return 0.0
        return self.moles * self.gas.R * self.temperature / self.volume

    @property
    def is_empty(self) -> bool:
        return self.moles <= 0

    def adiabatic_volume_change(self, new_volume: float) -> "GasState":
        """
        Reversible adiabatic change to `new_volume` at fixed moles.

        P·V^k stays constant, the temperature follows from the ideal gas
        law. An infinite target is an unbounded sink and leaves the state
        as it is.
        """
        if new_volume == np.inf:
            return self

        process = self.process
        new_pressure = process.pressure_after(self.pressure, self.volume, new_volume)
        self.volume = new_volume
        self.temperature = process.temperature_from_state(
            new_pressure, new_volume, self.moles
        )
        return self

    def copy(self) -> "GasState":
        """Independent snapshot of this reservoir."""
        return replace(self)
