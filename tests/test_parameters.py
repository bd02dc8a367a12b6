"""
Tests for parameter objects, derived rates and scenario configuration.
"""
import numpy as np
import pytest

from sirsim import (
    beta_from_R0,
    SIRParams,
    SIRState,
    SolverConfig,
    ScenarioParameters,
    InvalidParameterError,
)


def test_beta_from_R0__expect_product_with_gamma():
    assert beta_from_R0(2.0, 1 / 14) == pytest.approx(1 / 7)
    assert beta_from_R0(0.0, 0.5) == 0.0


@pytest.mark.parametrize("R0, gamma", [(-1.0, 0.1), (2.0, 0.0), (2.0, -0.1), (float("inf"), 0.1)])
def test_beta_from_R0__with_invalid_inputs__expect_error(R0, gamma):
    with pytest.raises(InvalidParameterError):
        beta_from_R0(R0, gamma)


def test_sir_params__from_infectious_period__expect_derived_rates():
    p = SIRParams.from_infectious_period(R0=3.0, infectious_period=5.0)
    assert p.gamma == pytest.approx(0.2)
    assert p.beta == pytest.approx(0.6)
    assert p.R0 == pytest.approx(3.0)


def test_sir_params__expect_immutable():
    p = SIRParams(beta=0.2, gamma=0.1)
    with pytest.raises(AttributeError):
        p.beta = 0.5


def test_sir_state__expect_total_and_array_in_declared_order():
    s = SIRState(S=0.7, I=0.2, R=0.1)
    assert s.total == pytest.approx(1.0)
    np.testing.assert_array_equal(s.as_array(), [0.7, 0.2, 0.1])


def test_solver_config__defaults__expect_documented_values():
    cfg = SolverConfig()
    assert (cfg.rtol, cfg.atol, cfg.mxstep) == (1e-6, 1e-8, 5000)
    assert cfg.validate() is cfg


def test_scenario_parameters__defaults__expect_derived_rates_and_grid():
    sc = ScenarioParameters()
    assert sc.gamma == pytest.approx(1 / 14)
    assert sc.beta == pytest.approx(2 / 14)
    grid = sc.time_grid()
    assert grid[0] == 0.0 and grid[-1] == 365.0
    assert len(grid) == 366
    state = sc.initial_state()
    assert (state.S, state.I, state.R) == pytest.approx((0.99, 0.01, 0.0))
    assert sc.params() == SIRParams(beta=sc.beta, gamma=sc.gamma)


def test_scenario_parameters__with_fractional_step__expect_horizon_included():
    grid = ScenarioParameters(time_horizon=10.0, dt=0.1).time_grid()
    assert len(grid) == 101
    assert grid[-1] == pytest.approx(10.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"infectious_period": 0.0},
        {"R0": -2.0},
        {"population_size": 0},
        {"initial_infected": -0.1},
        {"initial_infected": 0.6, "initial_recovered": 0.6},
        {"dt": 0.0},
        {"dt": float("nan")},
        {"time_horizon": float("nan")},
        {"population_size": float("nan")},
        {"initial_infected": float("nan")},
        {"initial_recovered": float("nan")},
    ],
)
def test_scenario_parameters__with_invalid_values__expect_error(kwargs):
    with pytest.raises(InvalidParameterError):
        ScenarioParameters(**kwargs)
