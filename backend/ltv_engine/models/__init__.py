from .metrics import EconomicMetrics, EngineConfig, RETENTION_DAYS
from .results import (
    RetentionCurve,
    DailySimulationRow,
    Drawdown,
    SimulationSummary,
    CalculationResult,
    ValidationResult,
)
from .presets import DEFAULT_METRICS, load_presets, get_preset

__all__ = [
    "EconomicMetrics",
    "EngineConfig",
    "RETENTION_DAYS",
    "RetentionCurve",
    "DailySimulationRow",
    "Drawdown",
    "SimulationSummary",
    "CalculationResult",
    "ValidationResult",
    "DEFAULT_METRICS",
    "load_presets",
    "get_preset",
]
