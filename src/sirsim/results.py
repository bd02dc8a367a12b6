"""
===========================================================
results.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Packaging and post-processing of SIR trajectories.

    A trajectory is a pandas DataFrame with the columns
    `time, S, I, R`, one row per reported time point, the
    initial condition first. Every helper here returns a new
    frame and leaves its input untouched.

Example Usage:
    from sirsim.results import to_long, scale_to_population, summarize
    counts = scale_to_population(traj, 10_000)
    long = to_long(counts)          # time, compartment, value
    stats = summarize(traj)

-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Dict, Sequence

from .errors import InvalidParameterError
from .parameters import COMPARTMENTS

COLUMNS = ["time", *COMPARTMENTS]


def to_frame(times: Sequence[float], states: np.ndarray) -> pd.DataFrame:
    """Build the trajectory table from a time vector and a (len(times), 3) state matrix"""
    states = np.asarray(states, dtype=float).reshape(-1, len(COMPARTMENTS))
    df = pd.DataFrame(states, columns=list(COMPARTMENTS))
    df.insert(0, "time", np.asarray(times, dtype=float))
    return df


def to_long(trajectory: pd.DataFrame) -> pd.DataFrame:
    """Reshape to long format (time, compartment, value) for plotting"""
    long = trajectory.melt(id_vars="time",
                           value_vars=list(COMPARTMENTS),
                           var_name="compartment",
                           value_name="value")
    return long.reset_index(drop=True)


def scale_to_population(trajectory: pd.DataFrame, population: float) -> pd.DataFrame:
    """Multiply the compartment columns by population (fractions -> counts)"""
    if not np.isfinite(population) or population <= 0:
        raise InvalidParameterError(f"population must be positive, got {population}")
    scaled = trajectory.copy()
    scaled[list(COMPARTMENTS)] = scaled[list(COMPARTMENTS)] * float(population)
    return scaled


def totals(trajectory: pd.DataFrame) -> pd.Series:
    return trajectory[list(COMPARTMENTS)].sum(axis=1)


def conservation_error(trajectory: pd.DataFrame) -> float:
    """Max relative deviation of S+I+R from its initial value"""
    N = totals(trajectory).to_numpy()
    N0 = N[0]
    scale = abs(N0) if N0 != 0 else 1.0
    return float(np.max(np.abs(N - N0)) / scale)


def min_compartment_value(trajectory: pd.DataFrame) -> float:
    return float(trajectory[list(COMPARTMENTS)].to_numpy().min())


def summarize(trajectory: pd.DataFrame) -> Dict[str, float]:
    """
    Key epidemic metrics from a trajectory.

    Returns
    -------
    metrics : dict
        - peak_time: time at which I is largest
        - peak_infected: maximum of I
        - peak_prevalence: peak_infected / N
        - final_size: R at the last time point / N
        - attack_rate: share of the initially susceptible that got infected
        - epidemic_duration: time from the start until I drops below 1% of
          its peak (after the peak); the whole horizon if it never does
    """
    t = trajectory["time"].to_numpy()
    S = trajectory["S"].to_numpy()
    I = trajectory["I"].to_numpy()
    R = trajectory["R"].to_numpy()
    N0 = S[0] + I[0] + R[0]

    peak_idx = int(np.argmax(I))
    peak_infected = float(I[peak_idx])

    # find when infection drops below 1% of peak
    threshold = 0.01 * peak_infected
    end_idx = np.where(I[peak_idx:] < threshold)[0]
    if len(end_idx) > 0:
        epidemic_duration = t[peak_idx + end_idx[0]] - t[0]
    else:
        epidemic_duration = t[-1] - t[0]

    return {
        "peak_time": float(t[peak_idx]),
        "peak_infected": peak_infected,
        "peak_prevalence": float(peak_infected / N0) if N0 else np.nan,
        "final_size": float(R[-1] / N0) if N0 else np.nan,
        "attack_rate": float((S[0] - S[-1]) / S[0]) if S[0] else 0.0,
        "epidemic_duration": float(epidemic_duration),
    }
