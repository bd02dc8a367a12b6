"""
===============================================================================
parameters.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===============================================================================
Parameters, state and solver settings for the SIR simulation core

All rates are per unit time (per day in the examples). States are usually
fractions of a normalised population (S + I + R = 1); use
results.scale_to_population() to get absolute counts afterwards.

    SIRParams           - transmission / recovery rates (beta, gamma)
    SIRState            - compartment values (S, I, R)
    SolverConfig        - tolerances and step budget for odeint (LSODA)
    ScenarioParameters  - user-facing scenario (R0, infectious period, ...)
                          with derived rates filled in __post_init__
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass, field
from typing import Mapping, Sequence, Union

from .errors import InvalidParameterError

COMPARTMENTS = ("S", "I", "R")


def beta_from_R0(R0: float, gamma: float) -> float:
    """Transmission rate giving basic reproduction number R0: beta = R0 * gamma"""
    if not math.isfinite(R0) or R0 < 0:
        raise InvalidParameterError(f"R0 must be a finite non-negative number, got {R0}")
    if not math.isfinite(gamma) or gamma <= 0:
        raise InvalidParameterError(f"recovery rate gamma must be positive, got {gamma}")
    return R0 * gamma


@dataclass(frozen=True)
class SIRParams:
    beta: float     # transmission rate
    gamma: float    # recovery rate (1/gamma = mean infectious period)

    @property
    def R0(self) -> float:
        """Basic reproduction number beta / gamma"""
        return self.beta / self.gamma if self.gamma > 0 else np.inf

    @classmethod
    def from_R0(cls, R0: float, gamma: float) -> "SIRParams":
        return cls(beta=beta_from_R0(R0, gamma), gamma=float(gamma))

    @classmethod
    def from_infectious_period(cls, R0: float, infectious_period: float) -> "SIRParams":
        if not math.isfinite(infectious_period) or infectious_period <= 0:
            raise InvalidParameterError(
                f"infectious_period must be positive, got {infectious_period}")
        return cls.from_R0(R0, 1.0 / infectious_period)

    def validate(self) -> "SIRParams":
        if not math.isfinite(self.beta) or self.beta < 0:
            raise InvalidParameterError(
                f"transmission rate beta must be finite and non-negative, got {self.beta}")
        if not math.isfinite(self.gamma) or self.gamma <= 0:
            raise InvalidParameterError(
                f"recovery rate gamma must be finite and positive, got {self.gamma}")
        return self


@dataclass(frozen=True)
class SIRState:
    S: float
    I: float
    R: float = 0.0

    @property
    def total(self) -> float:
        return self.S + self.I + self.R

    def as_array(self) -> np.ndarray:
        return np.array([self.S, self.I, self.R], dtype=float)

    def validate(self) -> "SIRState":
        for name, value in zip(COMPARTMENTS, (self.S, self.I, self.R)):
            if not math.isfinite(value):
                raise InvalidParameterError(f"initial {name} must be finite, got {value}")
            if value < 0:
                raise InvalidParameterError(f"initial {name} must be non-negative, got {value}")
        return self


@dataclass(frozen=True)
class SolverConfig:
    """
    Settings passed through to scipy.integrate.odeint (ODEPACK LSODA).

    Parameters:
    -----------
    rtol, atol: float
        Relative / absolute local error tolerances
    mxstep: int
        Maximum number of internal steps allowed per output interval
    h0, hmax, hmin: float
        First / maximum / minimum step size (0.0 lets the solver choose)
    """
    rtol: float = 1e-6
    atol: float = 1e-8
    mxstep: int = 5000
    h0: float = 0.0
    hmax: float = 0.0
    hmin: float = 0.0

    def validate(self) -> "SolverConfig":
        try:
            tols = [float(self.rtol), float(self.atol)]
            steps = [float(self.h0), float(self.hmax), float(self.hmin)]
            mxstep = int(self.mxstep)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"solver settings must be numeric: {self!r}") from e
        if not all(math.isfinite(v) and v > 0 for v in tols):
            raise InvalidParameterError("solver tolerances rtol and atol must be finite and positive")
        if mxstep < 1:
            raise InvalidParameterError(f"mxstep must be at least 1, got {self.mxstep}")
        if not all(math.isfinite(v) and v >= 0 for v in steps):
            raise InvalidParameterError("step sizes h0, hmax and hmin must be finite and non-negative")
        return self


ParamsLike = Union[SIRParams, Mapping[str, float]]
StateLike = Union[SIRState, Mapping[str, float], Sequence[float]]


def as_params(params: ParamsLike) -> SIRParams:
    """Coerce a SIRParams or {'beta':..., 'gamma':...} mapping, then validate"""
    if isinstance(params, SIRParams):
        return params.validate()
    try:
        p = SIRParams(beta=float(params["beta"]), gamma=float(params["gamma"]))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidParameterError(f"params need numeric 'beta' and 'gamma': {params!r}") from e
    return p.validate()


def as_state(state: StateLike) -> SIRState:
    """Coerce a SIRState, {'S','I','R'} mapping or length-3 sequence, then validate"""
    if isinstance(state, SIRState):
        return state.validate()
    try:
        if isinstance(state, Mapping):
            values = [float(state["S"]), float(state["I"]), float(state.get("R", 0.0))]
        else:
            values = [float(v) for v in state]
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidParameterError(f"cannot read an (S, I, R) state from {state!r}") from e
    if len(values) != 3:
        raise InvalidParameterError(
            f"initial state needs exactly 3 values (S, I, R), got {len(values)}")
    return SIRState(*values).validate()


@dataclass
class ScenarioParameters:
    """
    One SIR scenario described the way it is usually reported.

    All epidemiological rates are per day. Initial values are fractions
    of the population; population_size is only used for rescaling.
    """

    # ==================== Epidemiology ===========================================
    R0: float = 2.0                     # basic reproduction number
    infectious_period: float = 14.0     # days

    # derived transmission parameters (filled in __post_init__)
    gamma: float = field(default=None, init=False)  # 1/infectious_period
    beta: float = field(default=None, init=False)   # R0 * gamma

    # ==================== Population ============================================
    population_size: float = 1_000_000
    initial_infected: float = 0.01      # fraction infectious at t=0
    initial_recovered: float = 0.0      # fraction immune at t=0

    # ==================== Simulation ============================================
    time_horizon: float = 365.0         # days
    dt: float = 1.0                     # reporting interval (days)

    def __post_init__(self):
        """Calculate derived parameters after initialization"""
        if not math.isfinite(self.infectious_period) or self.infectious_period <= 0:
            raise InvalidParameterError(
                f"infectious_period must be positive, got {self.infectious_period}")
        self.gamma = 1.0 / self.infectious_period
        self.beta = beta_from_R0(self.R0, self.gamma)

        if not math.isfinite(self.population_size) or self.population_size <= 0:
            raise InvalidParameterError("population_size must be finite and positive")
        if not all(math.isfinite(v) and v >= 0
                   for v in (self.initial_infected, self.initial_recovered)):
            raise InvalidParameterError("initial fractions must be finite and non-negative")
        if self.initial_infected + self.initial_recovered > 1:
            raise InvalidParameterError("initial infected + recovered fractions exceed 1")
        if not (math.isfinite(self.time_horizon) and self.time_horizon >= 0):
            raise InvalidParameterError("time_horizon must be finite and >= 0")
        if not (math.isfinite(self.dt) and self.dt > 0):
            raise InvalidParameterError("dt must be finite and positive")

    def params(self) -> SIRParams:
        return SIRParams(beta=self.beta, gamma=self.gamma)

    def initial_state(self) -> SIRState:
        S0 = 1.0 - self.initial_infected - self.initial_recovered
        return SIRState(S=S0, I=float(self.initial_infected), R=float(self.initial_recovered))

    def time_grid(self) -> np.ndarray:
        """Reporting times 0, dt, 2*dt, ... up to and including time_horizon"""
        n = int(math.floor(self.time_horizon / self.dt + 1e-9))
        return np.arange(n + 1, dtype=float) * self.dt
