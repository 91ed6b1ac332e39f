import matplotlib.pyplot as plt
import pytest

from compressor_sim import CompressorExperiment, ExperimentConfig
from compressor_sim.main import build_parser, generate_plots, main, run_validation
from compressor_sim.plots import plot_experiment, plot_series


@pytest.fixture(scope="module")
def result():
    return CompressorExperiment(ExperimentConfig(cycles=15)).run()


def test_validation_suite_passes(capsys):
    assert run_validation()
    assert "All validations passed" in capsys.readouterr().out


def test_validate_flag_exits_cleanly():
    with pytest.raises(SystemExit) as exc:
        main(["--validate"])
    assert exc.value.code == 0


def test_parser_defaults_follow_config():
    args = build_parser().parse_args([])
    defaults = ExperimentConfig()
    assert args.in_vol == defaults.in_vol
    assert args.cyl_vol == defaults.cyl_vol
    assert args.cycles == defaults.cycles
    assert args.max_energy == defaults.max_energy


def test_cli_run_without_plots(capsys):
    main(["--no-plots", "--cycles", "12", "--in-mols", "8", "--max-energy", "2000"])
    out = capsys.readouterr().out

    assert "COMPRESSOR EXPERIMENT" in out
    assert "Moles conserved" in out
    assert "Done." in out


def test_cli_rejects_invalid_configuration(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--no-plots", "--cycles", "-3"])
    assert exc.value.code == 2
    assert "negative" in capsys.readouterr().out


@pytest.mark.parametrize("quantity", ["moles", "pressure", "temperature"])
def test_plot_series_draws_in_and_out(result, quantity):
    fig = plot_series(result, quantity)
    ax = fig.axes[0]

    assert [line.get_label() for line in ax.get_lines()][-2:] == [
        f"{ax.get_title().split(' over')[0]} In",
        f"{ax.get_title().split(' over')[0]} Out",
    ]
    assert ax.get_title().endswith("over Time")
    plt.close(fig)


def test_plot_series_rejects_unknown_quantity(result):
    with pytest.raises(ValueError):
        plot_series(result, "entropy")


def test_plot_experiment_has_one_axis_per_quantity(result):
    fig = plot_experiment(result)
    assert len(fig.axes) == 3
    plt.close(fig)


def test_generate_plots_writes_files(result, tmp_path):
    generate_plots(result, str(tmp_path))
    for name in ("experiment", "moles", "pressure", "temperature"):
        assert (tmp_path / f"{name}.png").exists()
    plt.close("all")
