"""
===========================================================
experiments.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Scenario sweeps for the deterministic SIR model: run the
    same scenario over a set of R0 values and collect tidy
    DataFrames of trajectories or summary statistics.

Example Usage:
    from sirsim.experiments import r0_sweep, run_scenarios
    scenario = ScenarioParameters(infectious_period=14)
    df = r0_sweep([0.8, 1.5, 2.0, 3.0], scenario)
    runs = run_scenarios([1.5, 2.0, 3.0], scenario)

Notes:
    - Every run is independent; runs are executed one after
      the other here. Parallelise at the call site if needed.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import logging
import dataclasses
import pandas as pd
from typing import Iterable, Optional

from .parameters import ScenarioParameters, SolverConfig
from .results import summarize
from .sir import simulate

logger = logging.getLogger(__name__)


def _with_R0(scenario: ScenarioParameters, R0: float) -> ScenarioParameters:
    # derived fields (beta, gamma) are recomputed in __post_init__
    return dataclasses.replace(scenario, R0=float(R0))


def _summarize_one(scenario: ScenarioParameters, solver: Optional[SolverConfig]):
    """Run one simulation and return a dict of summary statistics"""
    traj = simulate(scenario.initial_state(), scenario.time_grid(), scenario.params(), solver=solver)
    return {
        "R0": scenario.R0,
        "beta": scenario.beta,
        "gamma": scenario.gamma,
        **summarize(traj),
    }


def r0_sweep(r0_values: Iterable[float],
             scenario: Optional[ScenarioParameters] = None,
             solver: Optional[SolverConfig] = None) -> pd.DataFrame:
    """
    Evaluate the SIR model for each R0 (gamma fixed by the scenario's
    infectious period). Returns a tidy DataFrame with one row per R0
    """
    base = scenario if scenario is not None else ScenarioParameters()
    records = []
    for R0 in r0_values:
        records.append(_summarize_one(_with_R0(base, R0), solver))
    logger.debug("R0 sweep finished: %d scenarios", len(records))
    df = pd.DataFrame.from_records(records)
    if df.empty:
        return df
    return df.sort_values("R0").reset_index(drop=True)


def run_scenarios(r0_values: Iterable[float],
                  scenario: Optional[ScenarioParameters] = None,
                  solver: Optional[SolverConfig] = None) -> pd.DataFrame:
    """Stacked trajectories (time, S, I, R) with an extra R0 column"""
    base = scenario if scenario is not None else ScenarioParameters()
    frames = []
    for R0 in r0_values:
        sc = _with_R0(base, R0)
        traj = simulate(sc.initial_state(), sc.time_grid(), sc.params(), solver=solver)
        traj.insert(0, "R0", sc.R0)
        frames.append(traj)
    if not frames:
        return pd.DataFrame(columns=["R0", "time", "S", "I", "R"])
    return pd.concat(frames, ignore_index=True)
