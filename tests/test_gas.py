import math

import pytest

from compressor_sim import CV, DIATOMIC, K, R, GasProperties, GasState


def test_diatomic_constants():
    assert K == pytest.approx(1.4)
    assert R == 8.3145
    assert CV == pytest.approx(2.5 * R)
    assert DIATOMIC.cv == pytest.approx(CV)
    assert DIATOMIC.cp - DIATOMIC.cv == pytest.approx(R)


def test_monatomic_properties_follow_gamma():
    helium = GasProperties(name="He", gamma=5.0 / 3.0)
    assert helium.cv == pytest.approx(1.5 * R)


def test_pressure_matches_ideal_gas_law():
    state = GasState(volume=1.0, moles=1.0, temperature=1234.5 / R)
    assert state.pressure == pytest.approx(1234.5)

    state = GasState(volume=10.0, moles=5.0, temperature=300.0)
    assert state.pressure == pytest.approx(5.0 * R * 300.0 / 10.0)


def test_empty_reservoir_has_zero_pressure():
    state = GasState(1.0, 0.0, 0.0)
    assert state.pressure == 0.0
    assert not math.isnan(state.pressure)
    assert state.is_empty


@pytest.mark.parametrize("volume, moles", [(0.0, 1.0), (-2.0, 1.0), (1.0, -0.5)])
def test_invalid_construction_rejected(volume, moles):
    with pytest.raises(ValueError):
        GasState(volume, moles, 300.0)


@pytest.mark.parametrize("new_volume", [0.25, 1.0, 2.0, 7.5, 40.0])
def test_adiabatic_volume_change_keeps_pv_k(new_volume):
    state = GasState(volume=2.0, moles=3.0, temperature=320.0)
    invariant = state.pressure * state.volume**K

    state.adiabatic_volume_change(new_volume)

    assert state.volume == new_volume
    assert state.moles == 3.0
    assert state.pressure * new_volume**K == pytest.approx(invariant, rel=1e-12)


def test_adiabatic_compression_heats_and_expansion_cools():
    hot = GasState(2.0, 1.0, 300.0).adiabatic_volume_change(1.0)
    cold = GasState(2.0, 1.0, 300.0).adiabatic_volume_change(4.0)

    assert hot.temperature == pytest.approx(300.0 * 2.0**0.4)
    assert cold.temperature == pytest.approx(300.0 * 0.5**0.4)


def test_adiabatic_volume_change_to_infinity_is_noop():
    state = GasState(volume=3.0, moles=2.0, temperature=310.0)
    returned = state.adiabatic_volume_change(math.inf)

    assert returned is state
    assert (state.volume, state.moles, state.temperature) == (3.0, 2.0, 310.0)


def test_adiabatic_volume_change_of_empty_reservoir_stays_finite():
    state = GasState(volume=1.0, moles=0.0, temperature=0.0)
    state.adiabatic_volume_change(0.0)

    assert state.temperature == 0.0
    assert state.pressure == 0.0


def test_copy_is_independent():
    state = GasState(5.0, 1.0, 300.0)
    snapshot = state.copy()
    state.adiabatic_volume_change(2.5)

    assert snapshot == GasState(5.0, 1.0, 300.0)
    assert snapshot != state


def test_state_reuses_its_adiabatic_process():
    state = GasState(2.0, 1.0, 300.0)
    process = state.process

    state.adiabatic_volume_change(1.0).adiabatic_volume_change(3.0)

    assert state.process is process
    assert process.gas is state.gas
    assert state.copy().process is not process
