"""
Core math modules для dicesim

Математические примитивы и точное распределение суммы кубиков.
"""

# Numerical Safeguards
from dicesim.core.math.numerical_safeguards import (
    EPS_CALC,
    EPS_PROB_MASS,
    is_valid_float,
    safe_divide,
    sanitize_float,
    within_tolerance,
)

# Distribution
from dicesim.core.math.distribution import (
    DistributionComparison,
    check_probability_mass,
    compare_distributions,
    convolve_die,
    expected_value,
    pmf_mean,
    require_dice,
    single_die_pmf,
    sum_pmf,
    theoretical_summary,
    total_probability_mass,
    variance,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_CALC",
    "EPS_PROB_MASS",
    # Numerical Safeguards — Functions
    "is_valid_float",
    "safe_divide",
    "sanitize_float",
    "within_tolerance",
    # Distribution — Types
    "DistributionComparison",
    # Distribution — Functions
    "check_probability_mass",
    "compare_distributions",
    "convolve_die",
    "expected_value",
    "pmf_mean",
    "require_dice",
    "single_die_pmf",
    "sum_pmf",
    "theoretical_summary",
    "total_probability_mass",
    "variance",
]
