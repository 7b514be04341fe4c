"""
Domain models and value objects.

Contains DieGroup, DiceSpecification and the immutable result summaries.
"""

from dicesim.core.domain.dice import (
    DIE_SEPARATOR,
    MAX_DIE_FIELD,
    DiceSpecification,
    DieGroup,
)
from dicesim.core.domain.summaries import SimulationSummary, TheoreticalSummary

__all__ = [
    "DIE_SEPARATOR",
    "MAX_DIE_FIELD",
    "DieGroup",
    "DiceSpecification",
    "TheoreticalSummary",
    "SimulationSummary",
]
