"""
Powered compressor cylinder.

The compressor is an ordinary gas reservoir that starts empty, plus one
operation: a powered stroke that pushes its charge into a downstream
reservoir with a bounded energy budget.

  intake ──(passive mix)──> cylinder ──(powered stroke)──> outlet

The drawing step (intake → cylinder) is a plain passive_mix run by the
caller right before powered_inject_to.
"""

from dataclasses import dataclass
import warnings

from .gas import GasProperties, GasState, DIATOMIC
from .mixing import passive_mix


class MoleClampWarning(RuntimeWarning):
    """Refund arithmetic left a mole count outside [0, available] and it was clamped."""


@dataclass
class InjectionResult:
    """What a single powered stroke moved."""
    injected_moles: float   # net moles delivered downstream [mol]
    refunded_moles: float   # moles the budget could not push, left in the cylinder [mol]
    work: float             # adiabatic work done on the downstream gas [J]
    energy_limited: bool    # True if the budget stopped the stroke short
    ideal_volume: float     # volume an exact first-law stroke with the same budget reaches [m³]


def _clamp_moles(value: float, upper: float, label: str) -> float:
    if value < 0:
        warnings.warn(f"{label} went negative ({value:.3e} mol), clamped to 0",
                      MoleClampWarning, stacklevel=3)
        return 0.0
    if value > upper:
        warnings.warn(f"{label} exceeded available gas ({value:.3e} > {upper:.3e} mol), "
                      f"clamped", MoleClampWarning, stacklevel=3)
        return upper
    return value


class Compressor:
    """
    Piston compressor built around a GasState.

    Usage:
        intake = GasState(10.0, 5.0, 300.0)
        outlet = GasState(5.0, 1.0, 300.0)
        cylinder = Compressor(1.0)

        passive_mix(intake, cylinder.state)          # draw
        cylinder.powered_inject_to(outlet, 5000.0)   # push
    """

    def __init__(self, volume: float, gas: GasProperties = DIATOMIC):
        self.state = GasState(volume=volume, moles=0.0, temperature=0.0, gas=gas)
        self.process = self.state.process

    @property
    def volume(self) -> float:
        return self.state.volume

    @property
    def moles(self) -> float:
        return self.state.moles

    @property
    def temperature(self) -> float:
        return self.state.temperature

    @property
    def pressure(self) -> float:
        return self.state.pressure

    def __repr__(self):
        return (f"Compressor(volume={self.volume!r}, moles={self.moles!r}, "
                f"temperature={self.temperature!r})")

    def powered_inject_to(self, downstream: GasState,
                          max_energy: float) -> InjectionResult:
        """
        One full pump stroke into `downstream`.

        1. Open the outlet valve: passive mix with the downstream.
        2. Treat the cylinder charge as delivered: the downstream takes
           over the cylinder's volume and moles.
        3. Compress the merged gas adiabatically back toward the
           downstream's own volume, as far as `max_energy` allows.
        4. Whatever could not be pushed in is refunded to the cylinder.

        An empty cylinder has nothing to push and leaves the downstream
        untouched.
        """
        cylinder = self.state
        if cylinder.is_empty:
            return InjectionResult(0.0, 0.0, 0.0, False, downstream.volume)

        moles_before = downstream.moles
        passive_mix(cylinder, downstream)

        old_volume = downstream.volume
        downstream.volume += cylinder.volume
        downstream.moles += cylinder.moles

        max_powered_volume = self.process.max_compression_volume(
            max_energy, cylinder.pressure, cylinder.temperature, downstream.volume
        )
        new_volume = max(old_volume, max_powered_volume)
        ideal_volume = self.process.volume_for_work(
            downstream.pressure, downstream.volume, max_energy
        )

        work = self.process.work(downstream.pressure, downstream.volume, new_volume)
        downstream.adiabatic_volume_change(new_volume)

        # refund whatever the stroke didn't clear, 0 on a full stroke
        refund = downstream.moles * (new_volume - old_volume) / new_volume
        refund = _clamp_moles(refund, downstream.moles, "Refunded moles")

        cylinder.moles = refund
        cylinder.temperature = downstream.temperature
        downstream.volume = old_volume
        downstream.moles = _clamp_moles(downstream.moles - refund, downstream.moles,
                                        "Downstream moles")

        return InjectionResult(
            injected_moles=downstream.moles - moles_before,
            refunded_moles=refund,
            work=work,
            energy_limited=new_volume > old_volume,
            ideal_volume=ideal_volume,
        )
