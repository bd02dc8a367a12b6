"""
===========================================================
sir.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================
SIR (Susceptible-Infected-Recovered) Model

A basic compartmental epidemiological model that divides
a population into three compartments:
- S: Susceptible individuals
- I: Infected (and infectious) individuals
- R: Recovered (and immune) individuals

    dS/dt = -beta * S * I
    dI/dt =  beta * S * I - gamma * I
    dR/dt =  gamma * I

States are fractions of a normalised population, so the
force of infection is beta * I (no division by N).

This model assumes:
- Homogenous mixing (everyone has equal contact probability)
- No births, deaths, or migrations (closed population)
- Permanent immunity after recovery

Integration uses scipy's odeint (ODEPACK LSODA), which switches
between Adams (non-stiff) and BDF (stiff) methods on its own.

Example Usage:
    from sirsim import simulate, SIRParams, SIRState
    traj = simulate(SIRState(S=0.99, I=0.01, R=0.0),
                    np.arange(0, 366),
                    SIRParams.from_R0(2.0, gamma=1/14))
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import logging
import warnings
import numpy as np
import pandas as pd
from scipy.integrate import odeint, ODEintWarning
from typing import Dict, Optional, Sequence

from .errors import IntegrationError, InvalidParameterError
from .parameters import (SIRParams, SolverConfig, ParamsLike, StateLike,
                         as_params, as_state)
from .results import to_frame, min_compartment_value, summarize

logger = logging.getLogger(__name__)

# compartments below -NEGATIVE_TOLERANCE * N are reported, not clipped
NEGATIVE_TOLERANCE = 1e-6

_ODEINT_SUCCESS = "Integration successful."


def sir_rhs(y: np.ndarray, t: float, p: SIRParams) -> np.ndarray:
    """
    Right-hand side of the SIR equations.

    Parameters:
    -----------
    y: array-like
        current state [S, I, R]
    t: float
        current time (not used in autonomous system, but required by odeint)
    p: SIRParams
        transmission and recovery rates

    Returns:
    --------
    dydt: np.ndarray
        Derivatives [dS/dt, dI/dt, dR/dt]
    """
    S, I, R = y
    infection = p.beta * S * I
    recovery = p.gamma * I
    return np.array([-infection, infection - recovery, recovery])


def validate_time_grid(time_grid: Sequence[float]) -> np.ndarray:
    """Return the grid as a float array, or raise InvalidParameterError"""
    try:
        t = np.asarray(time_grid, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"time grid is not numeric: {e}") from e
    if t.ndim != 1:
        raise InvalidParameterError(f"time grid must be one-dimensional, got shape {t.shape}")
    if t.size == 0:
        raise InvalidParameterError("time grid is empty")
    if not np.all(np.isfinite(t)):
        raise InvalidParameterError("time grid contains non-finite values")
    if t[0] < 0:
        raise InvalidParameterError(f"time grid must start at t >= 0, got {t[0]}")
    if np.any(np.diff(t) <= 0):
        raise InvalidParameterError("time grid must be strictly increasing")
    return t


def _last_completed_index(t: np.ndarray, tcur: np.ndarray) -> int:
    """
    Index of the last grid point odeint finished before it failed.

    LSODA steps past each output time and interpolates back, so for every
    completed interval k the reached time tcur[k] is >= t[k+1]. The first
    interval that falls short is the one that failed.
    """
    for k, reached in enumerate(tcur):
        if reached < t[k + 1]:
            return k
    return len(t) - 1


def simulate(initial_state: StateLike,
             time_grid: Sequence[float],
             params: ParamsLike,
             solver: Optional[SolverConfig] = None) -> pd.DataFrame:
    """
    Integrate the SIR system over time_grid.

    Parameters
    ----------
    initial_state : SIRState, dict or sequence
        Initial values of (S, I, R), all non-negative
    time_grid : array-like
        Strictly increasing reporting times, first value >= 0
    params : SIRParams or dict
        beta >= 0, gamma > 0
    solver : SolverConfig, optional
        Tolerances and step budget; defaults to SolverConfig()

    Returns
    -------
    trajectory : pd.DataFrame
        Columns time, S, I, R; one row per grid point, initial state first

    Raises
    ------
    InvalidParameterError
        Bad rates, state, grid or solver settings (nothing is integrated)
    IntegrationError
        The solver could not complete the grid within its tolerances / step
        budget. `last_time` and `partial` hold what was computed.
    """
    p = as_params(params)
    y0 = as_state(initial_state)
    t = validate_time_grid(time_grid)
    cfg = (solver if solver is not None else SolverConfig()).validate()

    if t.size == 1:
        return to_frame(t, y0.as_array()[np.newaxis, :])

    logger.debug("integrating SIR beta=%.6g gamma=%.6g (R0=%.4g) over %d points [%g, %g]",
                 p.beta, p.gamma, p.R0, t.size, t[0], t[-1])

    with warnings.catch_warnings():
        # failures are raised as IntegrationError below
        warnings.simplefilter("ignore", ODEintWarning)
        states, info = odeint(sir_rhs, y0.as_array(), t, args=(p,),
                              rtol=cfg.rtol, atol=cfg.atol, mxstep=int(cfg.mxstep),
                              h0=cfg.h0, hmax=cfg.hmax, hmin=cfg.hmin,
                              full_output=True)

    message = info.get("message", "")
    if message != _ODEINT_SUCCESS:
        k = _last_completed_index(t, info["tcur"])
        partial = to_frame(t[:k + 1], states[:k + 1])
        raise IntegrationError(
            f"SIR integration failed after t={t[k]:g} "
            f"(next output t={t[min(k + 1, t.size - 1)]:g}): {message}",
            last_time=float(t[k]),
            partial=partial,
            solver_message=message)

    bad_rows = np.flatnonzero(~np.isfinite(states).all(axis=1))
    if bad_rows.size:
        k = int(bad_rows[0]) - 1
        raise IntegrationError(
            f"SIR integration produced non-finite values at t={t[k + 1]:g}",
            last_time=float(t[k]) if k >= 0 else None,
            partial=to_frame(t[:k + 1], states[:k + 1]) if k >= 0 else None,
            solver_message=message)

    logger.debug("odeint finished: %d steps, %d RHS evaluations, %d method switches",
                 int(info["nst"][-1]), int(info["nfe"][-1]), int(np.count_nonzero(np.diff(info["mused"]))))

    trajectory = to_frame(t, states)

    lowest = min_compartment_value(trajectory)
    if lowest < -NEGATIVE_TOLERANCE * y0.total:
        warnings.warn(
            f"compartment value {lowest:.3g} is below zero beyond numerical noise; "
            f"consider tightening the solver tolerances",
            RuntimeWarning)

    return trajectory


class SIRModel:
    """
    SIR compartmental model for infectious disease dynamics

    Parameters:
    -----------
    beta: float
        Transmission rate (contacts per time x probability of transmission per contact)
    gamma: float
        Recovery rate (1/gamma = mean infectious period)
    """
    def __init__(self, beta: float, gamma: float):
        self.params = as_params({"beta": beta, "gamma": gamma})
        self.beta = self.params.beta
        self.gamma = self.params.gamma

    @classmethod
    def from_R0(cls, R0: float, gamma: float) -> "SIRModel":
        p = SIRParams.from_R0(R0, gamma)
        return cls(p.beta, p.gamma)

    @property
    def R0(self) -> float:
        """
        Basic reproduction number: average number of secondary infections
        caused by a single infected individual in a fully susceptible population
        """
        return self.params.R0

    def deriv(self, y: np.ndarray, t: float) -> np.ndarray:
        return sir_rhs(y, t, self.params)

    def simulate(self,
                 initial_state: StateLike,
                 t: Sequence[float],
                 solver: Optional[SolverConfig] = None) -> pd.DataFrame:
        """Run simulation of the SIR model, see sirsim.sir.simulate"""
        return simulate(initial_state, t, self.params, solver=solver)

    @staticmethod
    def summary(trajectory: pd.DataFrame) -> Dict[str, float]:
        return summarize(trajectory)

    def __repr__(self) -> str:
        return f"SIRModel(beta={self.beta:g}, gamma={self.gamma:g})"
