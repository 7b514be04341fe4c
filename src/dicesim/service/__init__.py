"""Service — граница validate-then-compute для внешнего потребителя (UI)."""

from .dice_service import DiceRollReport, DiceService, DiceServiceConfig

__all__ = ["DiceRollReport", "DiceService", "DiceServiceConfig"]
