"""
Monte Carlo Sampler — эмпирическое распределение суммы кубиков

Для каждого из N независимых бросков: по одному равномерному значению
{1..faces} на каждый кубик каждой группы, сумма значений даёт итог броска.
Итоги сводятся в таблицу частот; эмпирическое среднее = Σ итогов / N.

ИНВАРИАНТЫ:
1. Σ frequency_table == N точно
2. Каждый прогон использует собственный random.Random (не глобальный
   генератор): последовательные прогоны статистически независимы
3. Нет общего изменяемого состояния между вызовами: функция может
   выполняться в фоновом потоке
4. Детерминизм между прогонами не гарантируется (кроме переданного
   вызывающим кодом rng с фиксированным seed)
"""

import logging
import random
from collections import Counter

from dicesim.core.domain.dice import DiceSpecification
from dicesim.core.domain.summaries import SimulationSummary, freeze_mapping
from dicesim.core.errors import NonPositiveTrialCountError
from dicesim.core.math.distribution import require_dice

logger = logging.getLogger(__name__)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def require_positive_trials(trials: int) -> None:
    """
    Проверка числа бросков.

    Raises:
        NonPositiveTrialCountError: если trials не int (bool не считается)
            или trials <= 0
    """
    if isinstance(trials, bool) or not isinstance(trials, int):
        raise NonPositiveTrialCountError(
            f"Trial count must be an integer, got {type(trials).__name__}"
        )

    if trials <= 0:
        raise NonPositiveTrialCountError(f"Trial count must be positive, got {trials}")


# =============================================================================
# SIMULATE
# =============================================================================


def roll_once(spec: DiceSpecification, rng: random.Random) -> int:
    """Один бросок всех кубиков спецификации, возвращает сумму."""
    total = 0
    for group in spec.groups:
        for _ in range(group.count):
            total += rng.randint(1, group.faces)
    return total


def simulate(
    spec: DiceSpecification,
    trials: int,
    rng: random.Random | None = None,
) -> SimulationSummary:
    """
    Симуляция trials независимых бросков.

    Args:
        spec: Непустая спецификация
        trials: Число бросков (> 0)
        rng: Источник случайности; по умолчанию новый random.Random(),
             засеянный из энтропии ОС. Параллельные вызовы должны
             передавать разные экземпляры.

    Returns:
        SimulationSummary(frequency_table, empirical_mean, trial_count)

    Raises:
        EmptySpecificationError: если спецификация пуста
        NonPositiveTrialCountError: если trials <= 0
    """
    require_positive_trials(trials)
    require_dice(spec)

    if rng is None:
        rng = random.Random()

    logger.debug("Simulating %d throws of %s", trials, spec.to_notation())

    frequency: Counter[int] = Counter()
    running_sum = 0

    for _ in range(trials):
        total = roll_once(spec, rng)
        frequency[total] += 1
        running_sum += total

    empirical_mean = running_sum / trials

    logger.debug(
        "Simulation finished: %d distinct sums, empirical mean %.4f",
        len(frequency),
        empirical_mean,
    )

    return SimulationSummary(
        frequency_table=freeze_mapping(frequency),
        empirical_mean=empirical_mean,
        trial_count=trials,
    )
