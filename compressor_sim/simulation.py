"""
Cycle-stepped compressor experiment.

Wires three reservoirs into the pumping chain and steps them:

  Intake ──> Compressor cylinder ──> Outlet

Each cycle is strictly ordered: draw (passive mix intake/cylinder),
powered stroke into the outlet, record. This is the object you'd use
for a parameter sweep over cylinder size or energy budget.
"""

from dataclasses import dataclass, field
import numpy as np
from .gas import GasProperties, GasState, DIATOMIC
from .compressor import Compressor
from .mixing import passive_mix


MAX_JOULES_PER_CYCLE = 5000.0
CYCLES_TO_RUN = 250


@dataclass
class ExperimentConfig:
    """
    Initial conditions and run parameters.

    Mirrors the experiment setup:
    intake reservoir → compressor cylinder → outlet reservoir
    """
    # intake reservoir
    in_vol: float = 10.0      # [m³]
    in_mols: float = 5.0      # [mol]
    in_temp: float = 300.0    # [K]

    # compressor cylinder (always starts empty)
    cyl_vol: float = 1.0      # [m³]

    # outlet reservoir
    out_vol: float = 5.0      # [m³]
    out_mols: float = 1.0     # [mol]
    out_temp: float = 300.0   # [K]

    # run
    max_energy: float = MAX_JOULES_PER_CYCLE  # energy budget per stroke [J]
    cycles: int = CYCLES_TO_RUN

    gas: GasProperties = field(default=DIATOMIC, repr=False)

    def __post_init__(self):
        if self.cycles < 0:
            raise ValueError(f"Cycle count cannot be negative, got {self.cycles}")
        if self.max_energy < 0:
            raise ValueError(f"Energy budget cannot be negative, got {self.max_energy}")


@dataclass
class ExperimentResult:
    """
    Time series recorded over a run, one entry per cycle.

    Index 0 holds the initial conditions, index i the state after
    cycle i, so every array has cycles + 1 entries.
    """
    cycle: np.ndarray
    intake_moles: np.ndarray
    intake_pressure: np.ndarray
    intake_temperature: np.ndarray
    outlet_moles: np.ndarray
    outlet_pressure: np.ndarray
    outlet_temperature: np.ndarray
    compressor_moles: np.ndarray
    work: np.ndarray            # adiabatic work of each stroke [J], 0 at index 0
    energy_limited: np.ndarray  # bool, stroke stopped short by the budget

    @property
    def moles_transferred(self) -> float:
        """Net gas delivered to the outlet over the run [mol]"""
        return float(self.outlet_moles[-1] - self.outlet_moles[0])

    @property
    def total_work(self) -> float:
        return float(np.sum(self.work))

    @property
    def total_moles(self) -> np.ndarray:
        """Gas across all three reservoirs per cycle; constant for a sound run."""
        return self.intake_moles + self.outlet_moles + self.compressor_moles


class CompressorExperiment:
    """
    Runs the intake → cylinder → outlet pumping chain.

    Usage:
        experiment = CompressorExperiment(ExperimentConfig(cycles=100))
        result = experiment.run()
        result.outlet_pressure[-1]
    """

    def __init__(self, config: ExperimentConfig | None = None):
        self.config = config or ExperimentConfig()
        self.reset()

    def reset(self):
        """Rebuild the three reservoirs from the initial conditions."""
        cfg = self.config
        self.intake = GasState(cfg.in_vol, cfg.in_mols, cfg.in_temp, gas=cfg.gas)
        self.outlet = GasState(cfg.out_vol, cfg.out_mols, cfg.out_temp, gas=cfg.gas)
        self.compressor = Compressor(cfg.cyl_vol, gas=cfg.gas)

    def step(self):
        """One pump cycle: draw from the intake, then push into the outlet."""
        passive_mix(self.intake, self.compressor.state)
        return self.compressor.powered_inject_to(self.outlet, self.config.max_energy)

    def run(self) -> ExperimentResult:
        """
        Step the configured number of cycles from fresh reservoirs.

        Returns arrays of the quantities an observer would chart:
        moles, pressure and temperature on both sides of the compressor.
        """
        self.reset()
        n = self.config.cycles + 1

        cycle = np.arange(n)
        in_n, in_p, in_t = np.zeros(n), np.zeros(n), np.zeros(n)
        out_n, out_p, out_t = np.zeros(n), np.zeros(n), np.zeros(n)
        cyl_n = np.zeros(n)
        work = np.zeros(n)
        limited = np.zeros(n, dtype=bool)

        def record(i):
            in_n[i], in_p[i], in_t[i] = self.intake.moles, self.intake.pressure, self.intake.temperature
            out_n[i], out_p[i], out_t[i] = self.outlet.moles, self.outlet.pressure, self.outlet.temperature
            cyl_n[i] = self.compressor.moles

        record(0)
        for i in range(1, n):
            stroke = self.step()
            work[i] = stroke.work
            limited[i] = stroke.energy_limited
            record(i)

        return ExperimentResult(
            cycle=cycle,
            intake_moles=in_n,
            intake_pressure=in_p,
            intake_temperature=in_t,
            outlet_moles=out_n,
            outlet_pressure=out_p,
            outlet_temperature=out_t,
            compressor_moles=cyl_n,
            work=work,
            energy_limited=limited,
        )
