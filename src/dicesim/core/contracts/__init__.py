"""
Contract Validation Module

Валидация plain-data контрактов dicesim (JSON Schema).
"""

from .validators import (
    ContractValidator,
    DiceRollReportValidator,
    DiceSpecificationValidator,
    SchemaLoader,
    SimulationSummaryValidator,
    TheoreticalSummaryValidator,
    validate_dice_roll_report,
    validate_dice_specification,
    validate_simulation_summary,
    validate_theoretical_summary,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DiceSpecificationValidator",
    "TheoreticalSummaryValidator",
    "SimulationSummaryValidator",
    "DiceRollReportValidator",
    # Functions
    "validate_dice_specification",
    "validate_theoretical_summary",
    "validate_simulation_summary",
    "validate_dice_roll_report",
]
