"""Notation — разбор текстовой нотации кубиков и числа бросков."""

from .parser import MAX_TRIAL_COUNT, parse, parse_trial_count

__all__ = ["MAX_TRIAL_COUNT", "parse", "parse_trial_count"]
