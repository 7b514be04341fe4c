"""
Summaries — Результаты вычислений движка

- TheoreticalSummary: точное распределение суммы (детерминированно)
- SimulationSummary: эмпирическое распределение по N броскам

Результаты неизменяемы: frozen dataclass + read-only Mapping. Движок не
хранит «последний результат»; кэширование для повторного отображения остаётся
заботой вызывающего кода.

to_dict() возвращает только JSON-типы; целочисленные суммы становятся
строковыми ключами.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


def freeze_mapping(data: Mapping) -> Mapping:
    """Read-only копия с ключами по возрастанию."""
    return MappingProxyType(dict(sorted(data.items())))


# =============================================================================
# THEORETICAL SUMMARY
# =============================================================================


@dataclass(frozen=True)
class TheoreticalSummary:
    """Точные характеристики суммы кубиков."""

    mean: float  # Σ count * (faces + 1) / 2
    variance: float  # Σ count * (faces² - 1) / 12
    stddev: float  # sqrt(variance)
    pmf: Mapping[int, float]  # сумма -> вероятность

    @property
    def total_probability(self) -> float:
        """Σ pmf (≈ 1.0 в пределах EPS_PROB_MASS)"""
        return sum(self.pmf.values())

    @property
    def min_sum(self) -> int:
        return min(self.pmf)

    @property
    def max_sum(self) -> int:
        return max(self.pmf)

    def ordered_probabilities(self) -> list[tuple[int, float]]:
        """Пары (сумма, вероятность) по возрастанию суммы."""
        return sorted(self.pmf.items())

    def to_dict(self) -> dict:
        return {
            "mean": self.mean,
            "variance": self.variance,
            "stddev": self.stddev,
            "pmf": {str(s): p for s, p in self.ordered_probabilities()},
        }


# =============================================================================
# SIMULATION SUMMARY
# =============================================================================


@dataclass(frozen=True)
class SimulationSummary:
    """Результат одного прогона Monte Carlo."""

    frequency_table: Mapping[int, int]  # сумма -> число выпадений, Σ == trial_count
    empirical_mean: float  # running_sum / trial_count
    trial_count: int

    def relative_frequencies(self) -> dict[int, float]:
        """Доля выпадений каждой суммы: count / trial_count."""
        return {s: c / self.trial_count for s, c in self.ordered_frequencies()}

    def ordered_frequencies(self) -> list[tuple[int, int]]:
        return sorted(self.frequency_table.items())

    def to_dict(self) -> dict:
        return {
            "trial_count": self.trial_count,
            "empirical_mean": self.empirical_mean,
            "frequency_table": {str(s): c for s, c in self.ordered_frequencies()},
        }
