"""
Тесты для Distribution — точное распределение суммы кубиков

Проверяемые инварианты:
1. Σ pmf ≈ 1.0 в пределах 1e-9
2. Мат. ожидание двумя способами (замкнутая форма и Σ s·p) совпадает
3. Дисперсия двумя способами совпадает
4. Ключи PMF: все достижимые суммы min_sum..max_sum
5. Порядок групп не влияет на результат
6. Пустая спецификация → EmptySpecificationError
7. Нарушение массы → ProbabilityMassViolation (без нормализации)
"""

import math

import pytest

from dicesim.core.domain import DiceSpecification
from dicesim.core.domain.summaries import SimulationSummary
from dicesim.core.errors import EmptySpecificationError, ProbabilityMassViolation
from dicesim.core.math.distribution import (
    check_probability_mass,
    compare_distributions,
    convolve_die,
    expected_value,
    pmf_mean,
    single_die_pmf,
    sum_pmf,
    theoretical_summary,
    total_probability_mass,
    variance,
)
from dicesim.core.math.numerical_safeguards import EPS_PROB_MASS
from dicesim.notation import parse


SPEC_TEXTS = ["1d6", "2d6", "3d6 2d8 1d20", "10d10", "1d1", "d2 d3 d5 d7", "4d12 1d100"]


@pytest.fixture(params=SPEC_TEXTS)
def spec(request) -> DiceSpecification:
    return parse(request.param)


# =============================================================================
# ТЕСТЫ: Замкнутые формулы
# =============================================================================


class TestClosedForms:
    """Тесты expected_value / variance."""

    def test_single_d6(self):
        spec = DiceSpecification.of((1, 6))
        assert expected_value(spec) == 3.5
        assert variance(spec) == pytest.approx(35 / 12)

    def test_mixed_groups(self):
        spec = DiceSpecification.of((2, 8), (1, 4))
        assert expected_value(spec) == 2 * 4.5 + 2.5
        assert variance(spec) == pytest.approx(2 * 63 / 12 + 15 / 12)

    def test_d1_has_zero_variance(self):
        spec = DiceSpecification.of((5, 1))
        assert expected_value(spec) == 5.0
        assert variance(spec) == 0.0

    def test_empty_rejected(self):
        with pytest.raises(EmptySpecificationError):
            expected_value(DiceSpecification())
        with pytest.raises(EmptySpecificationError):
            variance(DiceSpecification())


# =============================================================================
# ТЕСТЫ: Свёртка
# =============================================================================


class TestConvolution:
    """Тесты single_die_pmf / convolve_die / sum_pmf."""

    def test_single_die_uniform(self):
        pmf = single_die_pmf(6)
        assert list(pmf) == [1, 2, 3, 4, 5, 6]
        assert all(p == pytest.approx(1 / 6) for p in pmf.values())

    def test_single_die_invalid_faces(self):
        with pytest.raises(ValueError, match="faces must be positive"):
            single_die_pmf(0)

    def test_convolve_does_not_mutate_input(self):
        base = {0: 1.0}
        convolve_die(base, 6)
        assert base == {0: 1.0}

    def test_two_d2(self):
        pmf = convolve_die(convolve_die({0: 1.0}, 2), 2)
        assert pmf == {2: 0.25, 3: 0.5, 4: 0.25}

    def test_three_d6_known_value(self):
        pmf = sum_pmf(DiceSpecification.of((3, 6)))
        assert pmf[10] == pytest.approx(27 / 216)
        assert pmf[3] == pytest.approx(1 / 216)
        assert pmf[18] == pytest.approx(1 / 216)

    def test_key_range(self, spec):
        pmf = sum_pmf(spec)
        expected_size = sum(g.count * (g.faces - 1) for g in spec.groups) + 1
        assert len(pmf) == expected_size
        assert sorted(pmf) == list(range(spec.min_sum, spec.max_sum + 1))

    def test_group_order_irrelevant(self):
        a = sum_pmf(DiceSpecification.of((1, 4), (2, 6), (1, 10)))
        b = sum_pmf(DiceSpecification.of((1, 10), (2, 6), (1, 4)))
        assert a.keys() == b.keys()
        for s in a:
            assert a[s] == pytest.approx(b[s], rel=1e-12, abs=1e-15)

    def test_empty_rejected(self):
        """Пустая спецификация не вырождается в {0: 1.0}"""
        with pytest.raises(EmptySpecificationError):
            sum_pmf(DiceSpecification())


# =============================================================================
# ТЕСТЫ: Инвариант массы
# =============================================================================


class TestProbabilityMass:
    """Тесты check_probability_mass / total_probability_mass."""

    def test_mass_sums_to_one(self, spec):
        pmf = sum_pmf(spec)
        assert abs(total_probability_mass(pmf) - 1.0) <= EPS_PROB_MASS
        assert check_probability_mass(pmf) == pytest.approx(1.0)

    def test_deficient_mass_raises(self):
        with pytest.raises(ProbabilityMassViolation):
            check_probability_mass({1: 0.5, 2: 0.4})

    def test_excess_mass_raises(self):
        with pytest.raises(ProbabilityMassViolation):
            check_probability_mass({1: 0.5, 2: 0.5 + 1e-6})

    def test_nan_mass_raises(self):
        with pytest.raises(ProbabilityMassViolation):
            check_probability_mass({1: float("nan")})

    def test_custom_eps(self):
        assert check_probability_mass({1: 0.5, 2: 0.5 + 1e-6}, eps=1e-5) == pytest.approx(1.0 + 1e-6)


# =============================================================================
# ТЕСТЫ: Theoretical Summary
# =============================================================================


class TestTheoreticalSummary:
    """Тесты theoretical_summary."""

    def test_one_d6(self):
        summary = theoretical_summary(DiceSpecification.of((1, 6)))
        assert summary.mean == 3.5
        assert summary.variance == pytest.approx(35 / 12)
        assert summary.stddev == pytest.approx(1.7078, abs=1e-4)
        assert sorted(summary.pmf) == [1, 2, 3, 4, 5, 6]
        for p in summary.pmf.values():
            assert p == pytest.approx(1 / 6)

    def test_two_d6(self):
        summary = theoretical_summary(DiceSpecification.of((2, 6)))
        assert summary.pmf[7] == pytest.approx(6 / 36)
        assert summary.pmf[2] == pytest.approx(1 / 36)
        assert summary.pmf[12] == pytest.approx(1 / 36)
        assert max(summary.pmf, key=summary.pmf.get) == 7

    def test_mean_two_ways(self, spec):
        summary = theoretical_summary(spec)
        closed_form = sum(g.count * (g.faces + 1) / 2 for g in spec.groups)
        assert summary.mean == pytest.approx(closed_form)
        assert pmf_mean(summary.pmf) == pytest.approx(summary.mean, rel=1e-9)

    def test_variance_two_ways(self, spec):
        summary = theoretical_summary(spec)
        from_pmf = sum((s - summary.mean) ** 2 * p for s, p in summary.pmf.items())
        assert from_pmf == pytest.approx(summary.variance, rel=1e-7, abs=1e-9)

    def test_stddev_non_negative(self, spec):
        summary = theoretical_summary(spec)
        assert summary.stddev >= 0.0
        assert summary.stddev == pytest.approx(math.sqrt(summary.variance))

    def test_pmf_size_matches_support(self, spec):
        """pmf содержит каждую сумму от min_sum до max_sum ровно один раз"""
        summary = theoretical_summary(spec)
        assert len(summary.pmf) == spec.max_sum - spec.min_sum + 1
        assert (summary.min_sum, summary.max_sum) == (spec.min_sum, spec.max_sum)

    def test_degenerate_d1(self):
        summary = theoretical_summary(DiceSpecification.of((3, 1)))
        assert dict(summary.pmf) == {3: 1.0}
        assert summary.stddev == 0.0

    def test_pmf_read_only(self):
        summary = theoretical_summary(DiceSpecification.of((1, 4)))
        with pytest.raises(TypeError):
            summary.pmf[1] = 1.0

    def test_ordered_probabilities(self):
        summary = theoretical_summary(DiceSpecification.of((1, 6), (1, 4)))
        keys = [s for s, _ in summary.ordered_probabilities()]
        assert keys == sorted(keys)
        assert summary.min_sum == 2
        assert summary.max_sum == 10
        assert summary.total_probability == pytest.approx(1.0)

    def test_deterministic(self):
        spec = parse("3d6 1d8")
        assert theoretical_summary(spec) == theoretical_summary(spec)

    def test_empty_rejected(self):
        with pytest.raises(EmptySpecificationError):
            theoretical_summary(DiceSpecification())

    def test_to_dict_string_keys(self):
        data = theoretical_summary(DiceSpecification.of((1, 2))).to_dict()
        assert data["pmf"] == {"1": 0.5, "2": 0.5}
        assert data["mean"] == 1.5


# =============================================================================
# ТЕСТЫ: Сравнение с эмпирикой
# =============================================================================


class TestCompareDistributions:
    """Тесты compare_distributions."""

    def test_exact_match(self):
        theo = theoretical_summary(DiceSpecification.of((1, 2)))
        sim = SimulationSummary(frequency_table={1: 50, 2: 50}, empirical_mean=1.5, trial_count=100)
        comparison = compare_distributions(theo, sim)
        assert comparison.mean_delta == 0.0
        assert comparison.z_score == 0.0
        assert comparison.total_variation_distance == 0.0
        assert comparison.standard_error == pytest.approx(0.5 / 10)

    def test_skewed_sample(self):
        theo = theoretical_summary(DiceSpecification.of((1, 2)))
        sim = SimulationSummary(frequency_table={1: 100}, empirical_mean=1.0, trial_count=100)
        comparison = compare_distributions(theo, sim)
        assert comparison.mean_delta == -0.5
        assert comparison.z_score == pytest.approx(-10.0)
        assert comparison.total_variation_distance == pytest.approx(0.5)

    def test_zero_stddev_gives_zero_z(self):
        theo = theoretical_summary(DiceSpecification.of((2, 1)))
        sim = SimulationSummary(frequency_table={2: 10}, empirical_mean=2.0, trial_count=10)
        comparison = compare_distributions(theo, sim)
        assert comparison.standard_error == 0.0
        assert comparison.z_score == 0.0

    def test_non_positive_trials_rejected(self):
        theo = theoretical_summary(DiceSpecification.of((1, 2)))
        sim = SimulationSummary(frequency_table={}, empirical_mean=0.0, trial_count=0)
        with pytest.raises(ValueError, match="trial_count must be positive"):
            compare_distributions(theo, sim)
