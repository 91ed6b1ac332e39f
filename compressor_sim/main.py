#!/usr/bin/env python3
"""
Compressor Simulation — Main entry point.

Runs the intake → compressor → outlet pumping experiment:
  1. Build the three reservoirs from the initial conditions
  2. Step the configured number of pump cycles
  3. Summarize the moles/pressure/temperature time series
  4. Validate the core against analytical limits
  5. Chart the run

Usage:
    compressor-sim                       # full run + plots
    compressor-sim --no-plots            # numbers only
    compressor-sim --validate            # run validation suite
    compressor-sim --in-mols 8 --cycles 500 --max-energy 2000
"""

import argparse
import os
import sys
import numpy as np
from scipy.integrate import quad

from compressor_sim import (
    DIATOMIC, R, GasState, AdiabaticProcess, Compressor,
    passive_mix, one_way_mix,
    CompressorExperiment, ExperimentConfig, ExperimentResult,
)

SEPARATOR = "═" * 65


def print_header(title: str):
    print(f"\n{SEPARATOR}")
    print(f"  {title}")
    print(SEPARATOR)


def run_experiment(config: ExperimentConfig) -> ExperimentResult:
    """Step the pumping chain and print a sampled cycle table."""
    print_header("COMPRESSOR EXPERIMENT — Intake → Cylinder → Outlet")

    print(f"\n  Intake : V={config.in_vol:g}, n={config.in_mols:g} mol, T={config.in_temp:g} K")
    print(f"  Cylinder: V={config.cyl_vol:g} (starts empty)")
    print(f"  Outlet : V={config.out_vol:g}, n={config.out_mols:g} mol, T={config.out_temp:g} K")
    print(f"  Budget : {config.max_energy:g} J/cycle over {config.cycles} cycles")

    result = CompressorExperiment(config).run()

    print(f"\n  {'Cycle':>6} {'n_in':>10} {'P_in':>11} {'T_in':>9} "
          f"{'n_out':>10} {'P_out':>11} {'T_out':>9}")
    print(f"  {'─'*70}")

    stride = max(config.cycles // 10, 1)
    rows = list(range(0, config.cycles + 1, stride))
    if rows[-1] != config.cycles:
        rows.append(config.cycles)

    for i in rows:
        print(f"  {i:>6} {result.intake_moles[i]:>10.4f} {result.intake_pressure[i]:>11.2f} "
              f"{result.intake_temperature[i]:>9.2f} {result.outlet_moles[i]:>10.4f} "
              f"{result.outlet_pressure[i]:>11.2f} {result.outlet_temperature[i]:>9.2f}")

    print(f"\n  {'─'*40}")
    print(f"  Moles transferred = {result.moles_transferred:>10.4f} mol")
    print(f"  Total work        = {result.total_work:>10.1f} J")
    print(f"  Limited strokes   = {int(np.sum(result.energy_limited)):>10d}")

    drift = np.max(np.abs(result.total_moles - result.total_moles[0]))
    if drift > 1e-9 * max(result.total_moles[0], 1.0):
        print(f"\n  ⚠ WARNING: total moles drifted by {drift:.3e} mol over the run!")
    else:
        print(f"\n  ✓ Moles conserved.")

    return result


def run_validation():
    """
    Validate the core against analytical results.

    Ideal gas law, isentropic invariants and the first law give exact
    answers; the mixing and compressor checks cover the limiting cases.
    """
    print_header("VALIDATION — Analytical Checks")

    process = AdiabaticProcess(DIATOMIC)
    k = DIATOMIC.gamma
    passed = 0
    total = 0

    def check(name, computed, expected, tol=1e-9):
        nonlocal passed, total
        total += 1
        err = abs(computed - expected) / abs(expected) if expected != 0 else abs(computed)
        ok = err < tol
        if ok:
            passed += 1
        status = "✓" if ok else "✗"
        print(f"  {status}  {name:.<45} {computed:>14.6f}  (expected {expected:.6f}, err={err:.2e})")
        return ok

    print("\n  Gas state (diatomic, k=1.4):")
    print(f"  {'─'*70}")

    check("Cv = 5/2·R", DIATOMIC.cv, 2.5 * R)
    check("P for V=1, n=1, T=1000/R", GasState(1.0, 1.0, 1000.0 / R).pressure, 1000.0)
    check("P of an empty reservoir", GasState(1.0, 0.0, 0.0).pressure, 0.0)

    state = GasState(2.0, 3.0, 320.0)
    pv_k = state.pressure * state.volume**k
    tv_k = state.temperature * state.volume**(k - 1.0)
    state.adiabatic_volume_change(0.5)
    check("P·V^k after compression 2 → 0.5", state.pressure * state.volume**k, pv_k)
    check("T·V^(k-1) after compression 2 → 0.5", state.temperature * state.volume**(k - 1.0), tv_k)

    print("\n  Work & energy:")
    print(f"  {'─'*70}")

    p1, v1, v2 = 2.0e4, 4.0, 1.5
    closed = process.work(p1, v1, v2)
    integrated, _ = quad(lambda v: p1 * (v1 / v)**k, v2, v1)
    check("W closed form vs ∫P dV", closed, integrated, tol=1e-7)

    n = p1 * v1 / (R * 300.0)
    gas = GasState(v1, n, 300.0)
    t_before = gas.temperature
    gas.adiabatic_volume_change(v2)
    check("W = n·Cv·ΔT (first law)", closed, n * DIATOMIC.cv * (gas.temperature - t_before))
    check("V from W (Brent inverse)", process.volume_for_work(p1, v1, closed), v2, tol=1e-7)

    print("\n  Mixing:")
    print(f"  {'─'*70}")

    a = GasState(3.0, 2.0, 350.0)
    b = GasState(1.0, 0.5, 280.0)
    n_total = a.moles + b.moles
    passive_mix(a, b)
    check("Σn after passive mix", a.moles + b.moles, n_total)
    check("P_a = P_b after passive mix", a.pressure, b.pressure)
    check("T_a = T_b after passive mix", a.temperature, b.temperature)

    hi = GasState(2.0, 2.0, 300.0)
    lo = GasState(2.0, 0.5, 300.0)
    n_total = hi.moles + lo.moles
    one_way_mix(hi, lo)
    check("Σn after one-way mix", hi.moles + lo.moles, n_total)

    print("\n  Compressor:")
    print(f"  {'─'*70}")

    outlet = GasState(5.0, 1.0, 300.0)
    snapshot = outlet.copy()
    Compressor(1.0).powered_inject_to(outlet, 5000.0)
    check("Outlet n after empty stroke", outlet.moles, snapshot.moles)
    check("Outlet T after empty stroke", outlet.temperature, snapshot.temperature)

    intake = GasState(10.0, 5.0, 300.0)
    outlet = GasState(5.0, 1.0, 300.0)
    cylinder = Compressor(1.0)
    passive_mix(intake, cylinder.state)
    drawn = cylinder.moles
    stroke = cylinder.powered_inject_to(outlet, 5000.0)
    check("Full stroke delivers the drawn charge", stroke.injected_moles, drawn)
    check("Cylinder empty after a full stroke", cylinder.moles, 0.0)

    print(f"\n  Result: {passed}/{total} checks passed.")
    if passed == total:
        print("  All validations passed ✓")
    else:
        print(f"  ⚠ {total - passed} check(s) failed!")

    return passed == total


def generate_plots(result: ExperimentResult, output_dir: str = "output"):
    """Chart the experiment to files."""
    import matplotlib
    matplotlib.use("Agg")
    from compressor_sim.plots import plot_experiment, plot_series

    os.makedirs(output_dir, exist_ok=True)
    print_header(f"GENERATING PLOTS → {output_dir}/")

    fig = plot_experiment(result)
    fig.savefig(f"{output_dir}/experiment.png", dpi=150, bbox_inches="tight")
    print(f"  ✓ experiment.png")

    for quantity in ("moles", "pressure", "temperature"):
        fig = plot_series(result, quantity)
        fig.savefig(f"{output_dir}/{quantity}.png", dpi=150, bbox_inches="tight")
        print(f"  ✓ {quantity}.png")

    print(f"\n  All plots saved to {output_dir}/")


def build_parser() -> argparse.ArgumentParser:
    defaults = ExperimentConfig()
    parser = argparse.ArgumentParser(
        description="Intake → compressor → outlet gas pumping simulation"
    )

    group = parser.add_argument_group("initial conditions")
    group.add_argument("--in-vol", type=float, default=defaults.in_vol,
                       help="Intake volume")
    group.add_argument("--in-mols", type=float, default=defaults.in_mols,
                       help="Intake moles")
    group.add_argument("--in-temp", type=float, default=defaults.in_temp,
                       help="Intake temperature [K]")
    group.add_argument("--cyl-vol", type=float, default=defaults.cyl_vol,
                       help="Compressor cylinder volume")
    group.add_argument("--out-vol", type=float, default=defaults.out_vol,
                       help="Outlet volume")
    group.add_argument("--out-mols", type=float, default=defaults.out_mols,
                       help="Outlet moles")
    group.add_argument("--out-temp", type=float, default=defaults.out_temp,
                       help="Outlet temperature [K]")

    group = parser.add_argument_group("run")
    group.add_argument("--cycles", type=int, default=defaults.cycles,
                       help="Number of pump cycles")
    group.add_argument("--max-energy", type=float, default=defaults.max_energy,
                       help="Energy budget per stroke [J]")
    group.add_argument("--validate", action="store_true",
                       help="Run validation suite only")
    group.add_argument("--no-plots", action="store_true",
                       help="Skip plot generation")
    group.add_argument("--output", default="output",
                       help="Directory for plot images")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.validate:
        success = run_validation()
        sys.exit(0 if success else 1)

    try:
        config = ExperimentConfig(
            in_vol=args.in_vol, in_mols=args.in_mols, in_temp=args.in_temp,
            cyl_vol=args.cyl_vol,
            out_vol=args.out_vol, out_mols=args.out_mols, out_temp=args.out_temp,
            max_energy=args.max_energy, cycles=args.cycles,
        )
        result = run_experiment(config)
    except ValueError as e:
        print(f"\n  ✗ {e}")
        sys.exit(2)

    run_validation()

    if not args.no_plots:
        generate_plots(result, args.output)

    print(f"\n{SEPARATOR}")
    print("  Done.")
    print(SEPARATOR)


if __name__ == "__main__":
    main()
