"""Deterministic SIR epidemic simulation core"""
from .errors import SIRSimulationError, InvalidParameterError, IntegrationError
from .parameters import SIRParams, SIRState, SolverConfig, ScenarioParameters, beta_from_R0
from .sir import SIRModel, simulate, sir_rhs
from .results import to_long, scale_to_population, summarize, conservation_error
from .analysis import herd_immunity_threshold, effective_reproduction_number, final_size
from .experiments import r0_sweep, run_scenarios

__version__ = "0.1.0"
