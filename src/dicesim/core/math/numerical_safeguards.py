"""
Numerical Safeguards — Safe Math Primitives

Примитивы численной устойчивости для вероятностных расчётов:
- Epsilon-параметры (масса вероятности, общие вычисления, сравнения)
- Проверка NaN/Inf
- Безопасное деление (знаменатель 0 → fallback)
- Проверка абсолютного допуска

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. NaN/Inf никогда не пропагируют
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Допуск для суммарной массы PMF: |Σ p - 1.0| <= EPS_PROB_MASS
EPS_PROB_MASS: Final[float] = 1e-9

# Epsilon для общих вычислений (защита знаменателя)
EPS_CALC: Final[float] = 1e-12


# =============================================================================
# NaN/Inf
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение конечное (не NaN, не Inf)."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Замена NaN/Inf на fallback.

    Examples:
        >>> sanitize_float(0.25)
        0.25
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    Безопасное деление с защитой от нулевого знаменателя и NaN/Inf.

    Если abs(denominator) < eps, возвращается fallback. Используется там,
    где знаменатель может законно обнулиться (например, stddev = 0 для
    спецификации из одних d1).

    Args:
        numerator: Числитель
        denominator: Знаменатель
        eps: Минимальный абсолютный порог знаменателя
        fallback: Значение при делении на ноль (default: 0.0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(7.0, 2.0)
        3.5
        >>> safe_divide(1.0, 0.0)
        0.0
        >>> safe_divide(1.0, 1e-20, fallback=-1.0)
        -1.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    num_clean = sanitize_float(numerator, fallback=0.0)
    denom_clean = sanitize_float(denominator, fallback=0.0)

    if abs(denom_clean) < eps:
        return fallback

    return sanitize_float(num_clean / denom_clean, fallback=fallback)


# =============================================================================
# ДОПУСКИ
# =============================================================================


def within_tolerance(value: float, target: float, tol: float) -> bool:
    """
    Проверка |value - target| <= tol (только абсолютный допуск).

    NaN/Inf никогда не считаются попавшими в допуск.
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    if not is_valid_float(value):
        return False
    return abs(value - target) <= tol
