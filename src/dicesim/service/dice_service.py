"""
Dice Service — граница validate-then-compute для внешнего потребителя

Порядок обработки запроса:
1. Разбор и проверка числа бросков (NonPositiveTrialCountError)
2. Разбор нотации и проверка непустоты (EmptySpecificationError)
3. Симуляция Monte Carlo (единственная долгая операция)
4. Точное распределение
5. Сравнение эмпирики с точным распределением

run_async выполняет симуляцию в рабочем потоке (asyncio.to_thread), так что
event loop вызывающего кода остаётся отзывчивым. Отмены, таймаутов и
частичных результатов нет: прогон либо завершается полностью, либо не
начинается.

Сервис не хранит результатов между вызовами.
"""

import asyncio
import logging
import random
from dataclasses import dataclass

from dicesim.core.domain.dice import DiceSpecification
from dicesim.core.domain.summaries import SimulationSummary, TheoreticalSummary
from dicesim.core.errors import (
    DiceValidationError,
    EmptySpecificationError,
    NonPositiveTrialCountError,
)
from dicesim.core.math.distribution import (
    DistributionComparison,
    compare_distributions,
    theoretical_summary,
)
from dicesim.core.math.numerical_safeguards import EPS_PROB_MASS
from dicesim.notation.parser import MAX_TRIAL_COUNT, parse, parse_trial_count
from dicesim.sampler.monte_carlo import require_positive_trials, simulate

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class DiceServiceConfig:
    """Конфигурация сервиса."""

    max_trials: int = MAX_TRIAL_COUNT
    mass_tolerance: float = EPS_PROB_MASS


# =============================================================================
# REPORT
# =============================================================================


@dataclass(frozen=True)
class DiceRollReport:
    """Объединённый результат: спецификация + точный + эмпирический."""

    specification: DiceSpecification
    theoretical: TheoreticalSummary
    simulation: SimulationSummary
    comparison: DistributionComparison

    def to_dict(self) -> dict:
        specification = self.specification.to_dict()
        specification["notation"] = self.specification.to_notation()
        return {
            "specification": specification,
            "theoretical": self.theoretical.to_dict(),
            "simulation": self.simulation.to_dict(),
            "comparison": self.comparison._asdict(),
        }


# =============================================================================
# SERVICE
# =============================================================================


class DiceService:
    """Точка входа для UI: разбор, проверка, вычисления."""

    def __init__(self, config: DiceServiceConfig | None = None):
        """
        Args:
            config: конфигурация сервиса (опционально, используется default)
        """
        self.config = config or DiceServiceConfig()

    # -------------------------------------------------------------------------
    # Разбор и проверка
    # -------------------------------------------------------------------------

    def parse(self, dice_text: str) -> DiceSpecification:
        return parse(dice_text)

    def parse_trial_count(self, trials_text: str | None) -> int:
        return parse_trial_count(trials_text, max_trials=self.config.max_trials)

    def validate_inputs(
        self,
        dice_text: str,
        trials_text: str | None,
    ) -> tuple[DiceSpecification, int]:
        """
        Проверка пользовательского ввода до начала вычислений.

        Args:
            dice_text: Нотация кубиков, например "1d6 2d8 1d4"
            trials_text: Число бросков текстом

        Returns:
            (spec, trials): непустая спецификация и положительное число бросков

        Raises:
            NonPositiveTrialCountError: число бросков некорректно
            EmptySpecificationError: в тексте нет ни одного корректного кубика
        """
        try:
            trials = self.parse_trial_count(trials_text)
            spec = self.parse(dice_text)
            if spec.is_empty:
                raise EmptySpecificationError(
                    f"No valid dice found in {dice_text[:64]!r}; expected e.g. '1d6 2d8 1d4'"
                )
        except DiceValidationError as e:
            logger.warning("Rejected dice request: %s", e)
            raise

        return spec, trials

    # -------------------------------------------------------------------------
    # Вычисления
    # -------------------------------------------------------------------------

    def theoretical(self, spec: DiceSpecification) -> TheoreticalSummary:
        return theoretical_summary(spec, mass_tolerance=self.config.mass_tolerance)

    def simulate(
        self,
        spec: DiceSpecification,
        trials: int,
        rng: random.Random | None = None,
    ) -> SimulationSummary:
        require_positive_trials(trials)
        if trials > self.config.max_trials:
            raise NonPositiveTrialCountError(
                f"Trial count {trials} exceeds maximum {self.config.max_trials}"
            )
        return simulate(spec, trials, rng=rng)

    def _report(
        self,
        spec: DiceSpecification,
        simulation: SimulationSummary,
        theoretical: TheoreticalSummary,
    ) -> DiceRollReport:
        comparison = compare_distributions(theoretical, simulation)

        logger.info(
            "Rolled %s x%d: empirical mean %.4f, exact mean %.4f (z=%.2f)",
            spec.to_notation(),
            simulation.trial_count,
            simulation.empirical_mean,
            theoretical.mean,
            comparison.z_score,
        )

        return DiceRollReport(
            specification=spec,
            theoretical=theoretical,
            simulation=simulation,
            comparison=comparison,
        )

    def run(
        self,
        dice_text: str,
        trials_text: str | None,
        rng: random.Random | None = None,
    ) -> DiceRollReport:
        """
        Полный синхронный запрос: проверка, симуляция, точный расчёт.

        Raises:
            DiceValidationError: вход не прошёл проверку (вычисления не начаты)
        """
        spec, trials = self.validate_inputs(dice_text, trials_text)
        simulation = self.simulate(spec, trials, rng=rng)
        theoretical = self.theoretical(spec)
        return self._report(spec, simulation, theoretical)

    async def run_async(
        self,
        dice_text: str,
        trials_text: str | None,
        rng: random.Random | None = None,
    ) -> DiceRollReport:
        """
        То же, что run, но симуляция выполняется вне event loop.

        Проверка ввода выполняется синхронно до запуска потока: при ошибке
        симуляция не начинается.
        """
        spec, trials = self.validate_inputs(dice_text, trials_text)
        simulation = await asyncio.to_thread(self.simulate, spec, trials, rng)
        theoretical = self.theoretical(spec)
        return self._report(spec, simulation, theoretical)
