"""
Tests for R0 sweeps and stacked scenario runs.
"""
import numpy as np
import pytest

from sirsim import ScenarioParameters, r0_sweep, run_scenarios


@pytest.fixture
def short_scenario():
    return ScenarioParameters(infectious_period=10.0, time_horizon=200.0, dt=1.0)


def test_r0_sweep__expect_one_sorted_row_per_R0(short_scenario):
    df = r0_sweep([3.0, 0.8, 1.5, 2.0], short_scenario)
    assert list(df["R0"]) == [0.8, 1.5, 2.0, 3.0]
    assert {"beta", "gamma", "peak_time", "peak_infected", "final_size"} <= set(df.columns)
    np.testing.assert_allclose(df["gamma"], 0.1)
    np.testing.assert_allclose(df["beta"], df["R0"] * 0.1)


def test_r0_sweep__expect_larger_R0_gives_larger_epidemic(short_scenario):
    df = r0_sweep([1.5, 2.0, 3.0, 5.0], short_scenario)
    assert np.all(np.diff(df["final_size"]) > 0)
    assert np.all(np.diff(df["peak_infected"]) > 0)


def test_r0_sweep__below_threshold__expect_peak_at_start(short_scenario):
    df = r0_sweep([0.5], short_scenario)
    assert df["peak_time"].item() == 0.0


def test_r0_sweep__with_no_values__expect_empty_frame(short_scenario):
    assert r0_sweep([], short_scenario).empty


def test_run_scenarios__expect_stacked_trajectories_tagged_by_R0(short_scenario):
    runs = run_scenarios([1.5, 2.5], short_scenario)
    assert list(runs.columns) == ["R0", "time", "S", "I", "R"]
    assert len(runs) == 2 * len(short_scenario.time_grid())
    assert sorted(runs["R0"].unique()) == [1.5, 2.5]
    # base scenario is not modified by the sweep
    assert short_scenario.R0 == 2.0
