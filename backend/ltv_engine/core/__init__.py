from .retention import (
    InsufficientDataError,
    fit_retention_curve,
    calc_retention,
    generate_retention_curve,
)
from .payback import calc_effective_cpi, calc_cumulative_ltv, estimate_payback
from .operations import OperationsSimulator, simulate
from .summary import sample_rows, summarize
from .calculator import run_calculation

__all__ = [
    "InsufficientDataError",
    "fit_retention_curve",
    "calc_retention",
    "generate_retention_curve",
    "calc_effective_cpi",
    "calc_cumulative_ltv",
    "estimate_payback",
    "OperationsSimulator",
    "simulate",
    "sample_rows",
    "summarize",
    "run_calculation",
]
