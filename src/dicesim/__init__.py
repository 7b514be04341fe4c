"""
dicesim — распределение суммы произвольного набора кубиков

Публичный интерфейс:
- parse(text) -> DiceSpecification
- theoretical_summary(spec) -> TheoreticalSummary
- simulate(spec, trials) -> SimulationSummary
- DiceService: граница validate-then-compute для UI
"""

from dicesim.core.domain import (
    DiceSpecification,
    DieGroup,
    SimulationSummary,
    TheoreticalSummary,
)
from dicesim.core.errors import (
    DiceError,
    DiceValidationError,
    EmptySpecificationError,
    NonPositiveTrialCountError,
    ProbabilityMassViolation,
)
from dicesim.core.math import (
    DistributionComparison,
    compare_distributions,
    theoretical_summary,
)
from dicesim.notation import parse, parse_trial_count
from dicesim.sampler import simulate
from dicesim.service import DiceRollReport, DiceService, DiceServiceConfig

__all__ = [
    # Domain
    "DieGroup",
    "DiceSpecification",
    "TheoreticalSummary",
    "SimulationSummary",
    "DistributionComparison",
    "DiceRollReport",
    # Errors
    "DiceError",
    "DiceValidationError",
    "EmptySpecificationError",
    "NonPositiveTrialCountError",
    "ProbabilityMassViolation",
    # Operations
    "parse",
    "parse_trial_count",
    "theoretical_summary",
    "simulate",
    "compare_distributions",
    # Service
    "DiceService",
    "DiceServiceConfig",
]
