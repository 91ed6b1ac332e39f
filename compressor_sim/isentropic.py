"""
Reversible adiabatic (isentropic) relations for a closed gas pocket.

All relations derive from combining:
  - Ideal gas equation of state (P·V = n·R·T)
  - Isentropic process (P·V^k = const)
  - First law with no heat exchange (W_on = ΔU = n·Cv·ΔT)

Every function is degenerate-safe: an empty pocket (P = 0 or n = 0)
yields 0 instead of dividing by zero.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import brentq

if TYPE_CHECKING:
    from .gas import GasProperties


class AdiabaticProcess:
    """
    Adiabatic process calculator for a given gas.

    Pure functions of scalars; applying the result to a reservoir is
    left to GasState.adiabatic_volume_change.
    """

    def __init__(self, gas: GasProperties):
        self.gas = gas
        self.k = gas.gamma

    def _km1(self) -> float:
        """k - 1, shows up in every work/energy expression"""
        return self.k - 1.0

    # ── State after a volume change ──────────────────────────────

    def pressure_after(self, p: float, v: float, v_new: float) -> float:
        """P_new = P · V^k / V_new^k"""
        if p == 0:
            return 0.0
        return p * v**self.k / v_new**self.k

    def temperature_from_state(self, p: float, v: float, n: float) -> float:
        """T = P·V / (n·R), 0 for an empty pocket"""
        if n == 0:
            return 0.0
        return p * v / (n * self.gas.R)

    # ── Work & energy ────────────────────────────────────────────

    def work(self, p: float, v: float, v_new: float) -> float:
        """
        Work done ON the gas going from V to V_new [J].

        W = (P_new·V_new - P·V) / (k - 1)

        Positive for compression, negative for expansion.
        """
        p_new = self.pressure_after(p, v, v_new)
        return (p_new * v_new - p * v) / self._km1()

    def volume_for_work(self, p: float, v: float, work: float) -> float:
        """
        Final volume reached when `work` joules compress the pocket.

        Inverts work() numerically with Brent's method. The bracket
        starts at [V/2, V] and the lower end is halved until the
        compression work there exceeds the target. A non-finite or
        non-positive budget has no finite answer and V comes back.
        """
        if work <= 0 or p <= 0 or not np.isfinite(work):
            return v

        def residual(v_new):
            return self.work(p, v, v_new) - work

        lo = 0.5 * v
        while residual(lo) < 0:
            lo *= 0.5
        return brentq(residual, lo, v)

    def max_compression_volume(self, energy: float, p_c: float,
                               t_c: float, v: float) -> float:
        """
        Smallest volume the merged downstream can be pushed to with an
        energy budget of `energy` joules.

        V_max = ((E · T_c · R) / (P_c · Cv · V^k)) ^ (1 / (1 - k))

        T_c and P_c are the compressor's own temperature and pressure;
        they set the thermal state that drives the stroke. With no
        budget or no driving gas nothing compresses and V comes back.
        A small budget yields a volume above V; the caller decides how
        to treat that.
        """
        if energy <= 0 or p_c <= 0 or t_c <= 0:
            return v

        ratio = (energy * t_c * self.gas.R) / (p_c * self.gas.cv * v**self.k)
        return ratio ** (1.0 / (1.0 - self.k))
