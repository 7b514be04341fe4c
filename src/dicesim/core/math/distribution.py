"""
Distribution — Точное распределение суммы кубиков

Модуль вычисляет закон распределения суммы независимых равномерных кубиков:
- Мат. ожидание и дисперсия в замкнутой форме
- PMF через последовательную свёртку (по одному кубику за шаг)
- Проверка инварианта полной массы вероятности
- Сравнение эмпирического распределения с точным

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. |Σ pmf - 1.0| <= EPS_PROB_MASS, иначе ProbabilityMassViolation
   (масса НЕ нормализуется молча)
2. Свёртка выполняется по одному кубику, не по группе: размер состояния
   растёт линейно по диапазону сумм, а не экспоненциально по count
3. Пустая спецификация → EmptySpecificationError (не {0: 1.0})
4. Все операции детерминированы и воспроизводимы

ФОРМУЛЫ:
    mean     = Σ count * (faces + 1) / 2
    var_die  = (faces² - 1) / 12
    variance = Σ count * var_die
    stddev   = sqrt(variance)

    pmf_0 = {0: 1.0}
    pmf_k[s + f] += pmf_{k-1}[s] * (1 / faces),  f ∈ {1..faces}

СЛОЖНОСТЬ:
    Размер PMF: Σ c_i * (f_i - 1) + 1
    Стоимость: (число кубиков) × (текущий размер PMF) × (faces кубика)
"""

import math
from collections import defaultdict
from typing import Mapping, NamedTuple

from dicesim.core.domain.dice import DiceSpecification
from dicesim.core.domain.summaries import (
    SimulationSummary,
    TheoreticalSummary,
    freeze_mapping,
)
from dicesim.core.errors import EmptySpecificationError, ProbabilityMassViolation
from dicesim.core.math.numerical_safeguards import (
    EPS_PROB_MASS,
    safe_divide,
    within_tolerance,
)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def require_dice(spec: DiceSpecification) -> None:
    """
    Проверка, что спецификация содержит хотя бы одну группу.

    Raises:
        EmptySpecificationError: если групп нет
    """
    if spec.is_empty:
        raise EmptySpecificationError("Dice specification is empty: no dice to compute")


# =============================================================================
# ЗАМКНУТЫЕ ФОРМУЛЫ
# =============================================================================


def expected_value(spec: DiceSpecification) -> float:
    """
    Мат. ожидание суммы: Σ count * (faces + 1) / 2

    Examples:
        >>> expected_value(DiceSpecification.of((1, 6)))
        3.5
        >>> expected_value(DiceSpecification.of((2, 6), (1, 4)))
        9.5
    """
    require_dice(spec)
    return sum(g.mean for g in spec.groups)


def variance(spec: DiceSpecification) -> float:
    """
    Дисперсия суммы: Σ count * (faces² - 1) / 12

    Кубики независимы, поэтому дисперсии складываются. Каждое слагаемое
    неотрицательно при faces >= 1.

    Examples:
        >>> variance(DiceSpecification.of((1, 2)))
        0.25
        >>> variance(DiceSpecification.of((3, 1)))
        0.0
    """
    require_dice(spec)
    return sum(g.variance for g in spec.groups)


# =============================================================================
# СВЁРТКА
# =============================================================================


def single_die_pmf(faces: int) -> dict[int, float]:
    """
    Равномерное распределение одного кубика на {1..faces}.

    Examples:
        >>> single_die_pmf(2)
        {1: 0.5, 2: 0.5}
    """
    if faces <= 0:
        raise ValueError(f"faces must be positive, got {faces}")
    prob = 1.0 / faces
    return {face: prob for face in range(1, faces + 1)}


def convolve_die(pmf: Mapping[int, float], faces: int) -> dict[int, float]:
    """
    Свёртка текущего распределения с одним кубиком.

    Для каждой пары (частичная сумма, p) и каждой грани f накапливает
    p * (1 / faces) в корзину частичная_сумма + f.

    Args:
        pmf: Текущее распределение суммы (не изменяется)
        faces: Количество граней добавляемого кубика

    Returns:
        Новое распределение суммы

    Examples:
        >>> convolve_die({0: 1.0}, 2)
        {1: 0.5, 2: 0.5}
        >>> convolve_die({1: 0.5, 2: 0.5}, 2)
        {2: 0.25, 3: 0.5, 4: 0.25}
    """
    die = single_die_pmf(faces)
    result: defaultdict[int, float] = defaultdict(float)

    for partial_sum, prob in pmf.items():
        for face, face_prob in die.items():
            result[partial_sum + face] += prob * face_prob

    return dict(result)


def sum_pmf(spec: DiceSpecification) -> dict[int, float]:
    """
    PMF суммы всех кубиков спецификации.

    Стартует с вырожденного {0: 1.0} и добавляет кубики по одному.
    Порядок групп не влияет на результат (свёртка коммутативна и
    ассоциативна), но кубик всегда добавляется по одному.

    Raises:
        EmptySpecificationError: если спецификация пуста
    """
    require_dice(spec)

    pmf: dict[int, float] = {0: 1.0}
    for group in spec.groups:
        for _ in range(group.count):
            pmf = convolve_die(pmf, group.faces)

    return pmf


def pmf_mean(pmf: Mapping[int, float]) -> float:
    """Мат. ожидание по PMF: Σ s * p (второй способ, сверяется с замкнутой формой)."""
    return sum(s * p for s, p in pmf.items())


# =============================================================================
# ИНВАРИАНТ МАССЫ
# =============================================================================


def total_probability_mass(pmf: Mapping[int, float]) -> float:
    """Σ p по всем суммам."""
    return sum(pmf.values())


def check_probability_mass(
    pmf: Mapping[int, float],
    eps: float = EPS_PROB_MASS,
) -> float:
    """
    Проверка инварианта |Σ pmf - 1.0| <= eps.

    Args:
        pmf: Распределение для проверки
        eps: Допуск (default: EPS_PROB_MASS)

    Returns:
        Фактическая суммарная масса

    Raises:
        ProbabilityMassViolation: если масса вне допуска или NaN/Inf
    """
    total = total_probability_mass(pmf)

    if not within_tolerance(total, 1.0, eps):
        raise ProbabilityMassViolation(
            f"Probability mass {total!r} deviates from 1.0 by more than eps={eps:.1e}"
        )

    return total


# =============================================================================
# THEORETICAL SUMMARY
# =============================================================================


def theoretical_summary(
    spec: DiceSpecification,
    mass_tolerance: float = EPS_PROB_MASS,
) -> TheoreticalSummary:
    """
    Полное точное описание суммы кубиков.

    Args:
        spec: Непустая спецификация
        mass_tolerance: Допуск инварианта массы

    Returns:
        TheoreticalSummary(mean, variance, stddev, pmf)

    Raises:
        EmptySpecificationError: если спецификация пуста
        ProbabilityMassViolation: если Σ pmf вне допуска

    Размер pmf равен max_sum - min_sum + 1: память растёт линейно по
    Σ count * faces, время свёртки быстрее. Токен "1d2147483647" формально
    допустим, но потребует словаря из ~2³¹ элементов. Ограничивать
    практический размер должен вызывающий код.

    Examples:
        >>> summary = theoretical_summary(DiceSpecification.of((1, 6)))
        >>> summary.mean
        3.5
        >>> round(summary.stddev, 4)
        1.7078
    """
    require_dice(spec)

    mean = expected_value(spec)
    var = variance(spec)
    pmf = sum_pmf(spec)
    check_probability_mass(pmf, eps=mass_tolerance)

    return TheoreticalSummary(
        mean=mean,
        variance=var,
        stddev=math.sqrt(var),
        pmf=freeze_mapping(pmf),
    )


# =============================================================================
# СРАВНЕНИЕ С ЭМПИРИКОЙ
# =============================================================================


class DistributionComparison(NamedTuple):
    """Отклонение результата симуляции от точного распределения."""

    mean_delta: float  # empirical_mean - mean
    standard_error: float  # stddev / sqrt(N)
    z_score: float  # mean_delta / standard_error (0 при stddev = 0)
    total_variation_distance: float  # ½ Σ |p̂ - p|


def compare_distributions(
    theoretical: TheoreticalSummary,
    simulation: SimulationSummary,
) -> DistributionComparison:
    """
    Сравнение эмпирического распределения с точным.

    При N >= 10 000 |z_score| обычно не превышает нескольких единиц; при
    росте N total_variation_distance стремится к 0.

    Examples:
        >>> theo = theoretical_summary(DiceSpecification.of((1, 2)))
        >>> sim = SimulationSummary({1: 50, 2: 50}, 1.5, 100)
        >>> compare_distributions(theo, sim).total_variation_distance
        0.0
    """
    trials = simulation.trial_count
    if trials <= 0:
        raise ValueError(f"trial_count must be positive, got {trials}")

    mean_delta = simulation.empirical_mean - theoretical.mean
    standard_error = theoretical.stddev / math.sqrt(trials)
    z_score = safe_divide(mean_delta, standard_error, fallback=0.0)

    observed = simulation.relative_frequencies()
    keys = set(theoretical.pmf) | set(observed)
    tvd = 0.5 * sum(
        abs(observed.get(s, 0.0) - theoretical.pmf.get(s, 0.0)) for s in keys
    )

    return DistributionComparison(
        mean_delta=mean_delta,
        standard_error=standard_error,
        z_score=z_score,
        total_variation_distance=tvd,
    )
