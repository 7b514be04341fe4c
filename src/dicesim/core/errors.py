"""
Errors — таксономия ошибок движка

Все ошибки относятся к одному вызову: движок не восстанавливается
автоматически и не подставляет значения по умолчанию.

- Некорректные токены нотации НЕ являются ошибкой (отбрасываются парсером)
- DiceValidationError: вход не прошёл проверку (пустая спецификация,
  неположительное число бросков)
- ProbabilityMassViolation: нарушен инвариант Σ pmf ≈ 1.0
"""


class DiceError(Exception):
    """Базовая ошибка dicesim."""


class DiceValidationError(DiceError, ValueError):
    """Вход отклонён на границе validate-then-compute."""


class EmptySpecificationError(DiceValidationError):
    """
    Вычисление запрошено для спецификации без единой группы кубиков.

    Вырожденное распределение {0: 1.0} никогда не возвращается вместо этой
    ошибки.
    """


class NonPositiveTrialCountError(DiceValidationError):
    """Число бросков <= 0, вне диапазона или не разбирается как целое."""


class ProbabilityMassViolation(DiceError):
    """
    Суммарная вероятность PMF отличается от 1.0 больше чем на epsilon.

    Результат не нормализуется молча: ошибка поднимается вызывающему коду.
    """
