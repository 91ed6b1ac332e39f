"""
compressor_sim — Ideal gas reservoirs pumped through a compressor.

Modules:
    gas         - Gas constants and reservoir state (ideal gas, molar basis)
    isentropic  - Reversible adiabatic process relations
    mixing      - Passive and one-way mixing of two reservoirs
    compressor  - Powered compressor stroke with an energy budget
    simulation  - Cycle-stepped intake → compressor → outlet experiment
    plots       - Visualization
"""

from .gas import GasProperties, GasState, DIATOMIC, K, R, CV
from .isentropic import AdiabaticProcess
from .mixing import passive_mix, one_way_mix
from .compressor import Compressor, InjectionResult, MoleClampWarning
from .simulation import CompressorExperiment, ExperimentConfig, ExperimentResult
