"""
Mixing of two gas reservoirs through an opened valve.

Both mixes use the same trick: a virtual piston compresses or expands
each reservoir adiabatically until its pressure reaches the common
final pressure. That moves energy between the two pockets via their
temperatures. The real volumes are then restored, the temperatures
are averaged by moles, and the moles are split by volume share.

Equal temperature plus moles proportional to volume gives equal
pressures, so after either mix P(a) ≈ P(b).
"""

import numpy as np
from .gas import GasState


def _equalizing_volume(state: GasState, final_pressure: float) -> float:
    """Volume at which `state` would sit at `final_pressure`: V·P / P_f"""
    if final_pressure <= 0:
        return np.inf
    return state.volume * state.pressure / final_pressure


def _settle(a: GasState, b: GasState, volume_a: float, volume_b: float):
    """Restore real volumes, equalize temperature, split moles by volume."""
    a.volume = volume_a
    b.volume = volume_b

    n = a.moles + b.moles
    V = a.volume + b.volume
    T = (a.moles * a.temperature + b.moles * b.temperature) / n

    a.temperature = b.temperature = T
    a.moles = a.volume / V * n
    b.moles = b.volume / V * n


def passive_mix(a: GasState, b: GasState) -> GasState:
    """
    Equalize two reservoirs with no external work.

    P_f = (Pa·Va + Pb·Vb) / (Va + Vb)

    Total moles and both container volumes are conserved. Mixing two
    empty reservoirs does nothing.
    """
    if a.moles + b.moles <= 0:
        return a

    volume_a = a.volume
    volume_b = b.volume
    final_pressure = (a.pressure * a.volume + b.pressure * b.volume) / (a.volume + b.volume)

    # virtual piston: each pocket to the common pressure
    a.adiabatic_volume_change(_equalizing_volume(a, final_pressure))
    b.adiabatic_volume_change(_equalizing_volume(b, final_pressure))

    _settle(a, b, volume_a, volume_b)
    return a


def one_way_mix(a: GasState, b: GasState) -> GasState:
    """
    Passive mix through a check valve that only opens from `a` to `b`.

    Against a reverse gradient (P_b > P_a) the valve stays shut and
    neither reservoir changes. Otherwise the target pressure is capped
    at P_a:

        P_f = min((Pa·Va + Pb·Vb) / (Va + Vb), Pa)

    and b's virtual volume is floored at a's real volume:

        V_b' = max(Vb·Pb / P_f, Va)
    """
    if b.pressure > a.pressure:
        return a
    if a.moles + b.moles <= 0:
        return a

    volume_a = a.volume
    volume_b = b.volume
    average = (a.pressure * a.volume + b.pressure * b.volume) / (a.volume + b.volume)
    final_pressure = min(average, a.pressure)

    a.adiabatic_volume_change(_equalizing_volume(a, final_pressure))
    b.adiabatic_volume_change(max(_equalizing_volume(b, final_pressure), volume_a))

    _settle(a, b, volume_a, volume_b)
    return a
