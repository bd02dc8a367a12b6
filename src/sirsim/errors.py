"""
===========================================================
errors.py
Author: Veronica Scerra
Last Updated: 2026-10-19
===========================================================

Description:
    Exceptions raised by the SIR simulation core.

    - InvalidParameterError: bad rates, initial state, time grid
      or solver settings. Raised before any integration happens.
    - IntegrationError: the ODE solver could not finish the
      requested time grid. Carries the last grid time that was
      computed and the partial trajectory up to it.

Notes:
    - Both subclass the built-ins (ValueError / RuntimeError)
      so existing `except ValueError` handlers keep working.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
from typing import Optional

import pandas as pd


class SIRSimulationError(Exception):
    """Base class for all sirsim errors"""


class InvalidParameterError(SIRSimulationError, ValueError):
    """Rates, initial state, time grid or solver config are not usable"""


class IntegrationError(SIRSimulationError, RuntimeError):
    """
    The solver failed before reaching the end of the time grid.

    Attributes:
    -----------
    last_time: float or None
        Last grid time that was successfully computed; the first grid
        time (the initial condition) if the first interval failed. None
        only when not even the initial row is usable
    partial: pd.DataFrame or None
        Trajectory rows up to and including last_time
    solver_message: str
        Message reported by the solver
    """
    def __init__(self,
                 message: str,
                 last_time: Optional[float] = None,
                 partial: Optional[pd.DataFrame] = None,
                 solver_message: str = ""):
        super().__init__(message)
        self.last_time = last_time
        self.partial = partial
        self.solver_message = solver_message
