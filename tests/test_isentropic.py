import pytest
from scipy.integrate import quad

from compressor_sim import CV, DIATOMIC, K, R, AdiabaticProcess


@pytest.fixture
def process():
    return AdiabaticProcess(DIATOMIC)


def test_pressure_after_follows_pv_k(process):
    assert process.pressure_after(1.0e5, 2.0, 1.0) == pytest.approx(1.0e5 * 2.0**K)
    assert process.pressure_after(1.0e5, 2.0, 2.0) == pytest.approx(1.0e5)


def test_degenerate_inputs_give_zero(process):
    assert process.pressure_after(0.0, 1.0, 0.0) == 0.0
    assert process.temperature_from_state(0.0, 0.0, 0.0) == 0.0
    assert process.temperature_from_state(500.0, 2.0, 0.0) == 0.0


def test_work_sign_and_magnitude(process):
    p, v = 2.0e4, 4.0
    compress = process.work(p, v, 1.5)
    expand = process.work(p, v, 8.0)

    integrated, _ = quad(lambda x: p * (v / x) ** K, 1.5, v)

    assert compress > 0
    assert expand < 0
    assert compress == pytest.approx(integrated, rel=1e-8)
    assert process.work(p, v, v) == pytest.approx(0.0, abs=1e-9)


def test_volume_for_work_inverts_work(process):
    p, v = 2.0e4, 4.0
    for target in (1.0, 150.0, 5.0e4, 1.0e7):
        v_new = process.volume_for_work(p, v, target)
        assert v_new < v
        assert process.work(p, v, v_new) == pytest.approx(target, rel=1e-6)


def test_volume_for_work_without_energy_returns_start(process):
    assert process.volume_for_work(2.0e4, 4.0, 0.0) == 4.0
    assert process.volume_for_work(0.0, 4.0, 100.0) == 4.0


def test_max_compression_volume_matches_closed_form(process):
    energy, p_c, t_c, v = 5000.0, 600.0, 290.0, 6.0
    expected = ((energy * t_c * R) / (p_c * CV * v**K)) ** (1.0 / (1.0 - K))

    assert expected < v
    assert process.max_compression_volume(energy, p_c, t_c, v) == pytest.approx(expected)


def test_max_compression_volume_small_budget_exceeds_start(process):
    energy, p_c, t_c, v = 1.0e-3, 600.0, 290.0, 6.0
    expected = ((energy * t_c * R) / (p_c * CV * v**K)) ** (1.0 / (1.0 - K))

    assert expected > v
    assert process.max_compression_volume(energy, p_c, t_c, v) == pytest.approx(expected)


def test_max_compression_volume_unbounded_budget_goes_to_zero(process):
    assert process.max_compression_volume(float("inf"), 600.0, 290.0, 6.0) == 0.0


@pytest.mark.parametrize("energy, p_c, t_c", [(0.0, 600.0, 290.0), (5000.0, 0.0, 0.0), (5000.0, 600.0, 0.0)])
def test_max_compression_volume_degenerate_cases(process, energy, p_c, t_c):
    assert process.max_compression_volume(energy, p_c, t_c, 6.0) == 6.0


@pytest.mark.parametrize("work", [float("inf"), float("nan")])
def test_volume_for_work_non_finite_budget_returns_start(process, work):
    assert process.volume_for_work(2.0e4, 4.0, work) == 4.0
