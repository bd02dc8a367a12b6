"""
===========================================================
analysis.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Reproduction-number quantities for the SIR model.

    - herd_immunity_threshold(R0): 1 - 1/R0
    - effective_reproduction_number(traj, params): R_eff(t) = R0 * S(t)/N
    - final_size(R0, s0, i0): analytic final recovered fraction

Notes:
    - All quantities assume a normalised population (N = 1)
      unless a trajectory supplies its own total.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import math
import numpy as np
import pandas as pd
from scipy.optimize import brentq

from .errors import InvalidParameterError
from .parameters import ParamsLike, as_params, beta_from_R0
from .results import totals

__all__ = ["beta_from_R0", "herd_immunity_threshold",
           "effective_reproduction_number", "final_size"]


def herd_immunity_threshold(R0: float) -> float:
    """Immune fraction above which I can no longer grow (0 when R0 <= 1)"""
    if not math.isfinite(R0) or R0 < 0:
        raise InvalidParameterError(f"R0 must be a finite non-negative number, got {R0}")
    return max(0.0, 1.0 - 1.0 / R0) if R0 > 0 else 0.0


def effective_reproduction_number(trajectory: pd.DataFrame, params: ParamsLike) -> pd.DataFrame:
    """Copy of trajectory with an R_eff column, R_eff(t) = R0 * S(t) / N(t)"""
    p = as_params(params)
    out = trajectory.copy()
    N = totals(trajectory).to_numpy()
    with np.errstate(divide="ignore", invalid="ignore"):
        out["R_eff"] = np.where(N > 0, p.R0 * trajectory["S"].to_numpy() / N, 0.0)
    return out


def final_size(R0: float, s0: float = 1.0, i0: float = 0.0) -> float:
    """
    Final recovered fraction of a closed SIR epidemic.

    With N = 1 and r0 = 1 - s0 - i0 the limiting susceptible fraction solves

        s_inf = s0 * exp(-R0 * (1 - s_inf - r0))

    and everyone not left susceptible has recovered: R(inf) = 1 - s_inf.

    Parameters
    ----------
    R0 : float
        Basic reproduction number beta / gamma
    s0, i0 : float
        Initial susceptible and infectious fractions

    Returns
    -------
    float
        R(inf), comparable to summarize(...)["final_size"]
    """
    if not math.isfinite(R0) or R0 < 0:
        raise InvalidParameterError(f"R0 must be a finite non-negative number, got {R0}")
    if s0 < 0 or i0 < 0:
        raise InvalidParameterError("initial fractions must be non-negative")
    if s0 + i0 > 1 + 1e-12:
        raise InvalidParameterError(f"s0 + i0 must not exceed 1, got {s0 + i0}")
    r0_init = max(0.0, 1.0 - s0 - i0)

    if s0 == 0 or R0 == 0:
        return 1.0 - s0

    c = s0 * math.exp(-R0 * (1.0 - r0_init))

    def g(s):
        return s - c * math.exp(R0 * s)

    if i0 > 0:
        s_inf = brentq(g, 0.0, s0, xtol=1e-14)
    elif R0 * s0 > 1:
        # vanishing seed: take the non-trivial root, left of the maximum of g
        s_peak = math.log(1.0 / (c * R0)) / R0
        s_inf = brentq(g, 0.0, s_peak, xtol=1e-14)
    else:
        s_inf = s0
    return 1.0 - s_inf
