"""
Dice — Модели входных данных движка

DieGroup: count независимых кубиков, каждый равномерный на {1..faces}.
DiceSpecification: упорядоченная неизменяемая последовательность DieGroup.

Immutable Pydantic модели. Пустая спецификация: допустимый результат
парсинга, но недопустимый вход для вычислений (проверяется на границе
validate-then-compute, см. dicesim.core.errors).
"""

from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# CONSTANTS
# =============================================================================

# Верхняя граница count и faces (signed 32-bit)
MAX_DIE_FIELD: Final[int] = 2**31 - 1

# Разделитель нотации: "2d6", "d20"
DIE_SEPARATOR: Final[str] = "d"


# =============================================================================
# DIE GROUP
# =============================================================================


class DieGroup(BaseModel):
    """
    Группа одинаковых кубиков.

    Инвариант: count > 0 и faces > 0. Группы с неположительным полем не
    создаются (ValidationError).
    """

    count: int = Field(..., gt=0, le=MAX_DIE_FIELD, description="Количество кубиков")
    faces: int = Field(..., gt=0, le=MAX_DIE_FIELD, description="Количество граней")

    model_config = {"frozen": True, "strict": True}

    @property
    def mean(self) -> float:
        """Мат. ожидание суммы группы: count * (faces + 1) / 2"""
        return self.count * (self.faces + 1) / 2.0

    @property
    def variance(self) -> float:
        """Дисперсия суммы группы: count * (faces² - 1) / 12"""
        return self.count * (self.faces**2 - 1) / 12.0

    def to_notation(self) -> str:
        return f"{self.count}{DIE_SEPARATOR}{self.faces}"


# =============================================================================
# DICE SPECIFICATION
# =============================================================================


class DiceSpecification(BaseModel):
    """
    Упорядоченный набор групп кубиков.

    Порядок групп сохраняется как в исходной строке; группы с одинаковым
    faces не объединяются.
    """

    groups: tuple[DieGroup, ...] = Field(default=(), description="Группы кубиков")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, *pairs: tuple[int, int]) -> "DiceSpecification":
        """
        Построение из пар (count, faces).

        Examples:
            >>> DiceSpecification.of((2, 6), (1, 8)).to_notation()
            '2d6 1d8'
        """
        return cls(groups=tuple(DieGroup(count=c, faces=f) for c, f in pairs))

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def dice_count(self) -> int:
        """Общее число кубиков Σ count"""
        return sum(g.count for g in self.groups)

    @property
    def min_sum(self) -> int:
        """Минимальная достижимая сумма (все кубики выпали на 1)"""
        return self.dice_count

    @property
    def max_sum(self) -> int:
        """Максимальная достижимая сумма Σ count * faces"""
        return sum(g.count * g.faces for g in self.groups)

    def to_notation(self) -> str:
        return " ".join(g.to_notation() for g in self.groups)

    def to_dict(self) -> dict:
        """Plain-data представление (контракт dice_specification)"""
        return {"groups": [{"count": g.count, "faces": g.faces} for g in self.groups]}
