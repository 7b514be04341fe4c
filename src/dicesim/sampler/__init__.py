"""Sampler — Monte Carlo симуляция бросков."""

from .monte_carlo import require_positive_trials, roll_once, simulate

__all__ = ["require_positive_trials", "roll_once", "simulate"]
