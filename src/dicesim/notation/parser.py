"""
Notation Parser — разбор нотации кубиков

Произвольная строка → DiceSpecification.

- Ищутся непересекающиеся вхождения "[цифры]d<цифры>" ("2d6", "d20", "10d4")
- Отсутствующий count означает 1 ("d20" ≡ "1d20")
- Токен сохраняется, только если count и faces записаны ASCII-цифрами и лежат в 1..MAX_DIE_FIELD
- Некорректные токены отбрасываются без исключения (DEBUG-лог); пустой
  результат является законным исходом, его отклоняет вызывающий код
- Порядок вхождений сохраняется, группы не объединяются

Также разбор числа бросков из текста (отдельно от нотации).
"""

import logging
import re
from typing import Final

from dicesim.core.domain.dice import (
    DIE_SEPARATOR,
    MAX_DIE_FIELD,
    DiceSpecification,
    DieGroup,
)
from dicesim.core.errors import NonPositiveTrialCountError

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

_DICE_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    rf"(?P<count>\d*){re.escape(DIE_SEPARATOR)}(?P<faces>\d+)"
)

_TRIAL_COUNT_RE: Final[re.Pattern[str]] = re.compile(r"^\+?(?P<digits>\d+)$", re.ASCII)

# Верхняя граница числа бросков (signed 32-bit)
MAX_TRIAL_COUNT: Final[int] = 2**31 - 1


# =============================================================================
# HELPERS
# =============================================================================


def _parse_field(digits: str) -> int | None:
    """
    Целое из строки цифр в диапазоне 1..MAX_DIE_FIELD, иначе None.

    Цифры вне ASCII ("٣", "６") и слишком длинные строки (лимит int/str
    в Python) тоже дают None.
    """
    if not digits.isascii():
        return None

    try:
        value = int(digits)
    except ValueError:
        return None

    if value < 1 or value > MAX_DIE_FIELD:
        return None
    return value


# =============================================================================
# PARSE
# =============================================================================


def parse(text: str) -> DiceSpecification:
    """
    Разбор нотации кубиков.

    Чистая функция: одна и та же строка всегда даёт одну и ту же
    последовательность групп.

    Args:
        text: Произвольный текст, например "2d8 1d4" или "roll d20 please"

    Returns:
        DiceSpecification (может быть пустой)

    Examples:
        >>> parse("2d8 1d4").to_notation()
        '2d8 1d4'
        >>> parse("d20").to_notation()
        '1d20'
        >>> parse("abc").is_empty
        True
    """
    groups: list[DieGroup] = []

    for match in _DICE_TOKEN_RE.finditer(text):
        count_digits = match.group("count")
        count = _parse_field(count_digits) if count_digits else 1
        faces = _parse_field(match.group("faces"))

        if count is None or faces is None:
            logger.debug("Dropped dice token %r at offset %d", match.group(0)[:32], match.start())
            continue

        groups.append(DieGroup(count=count, faces=faces))

    return DiceSpecification(groups=tuple(groups))


def parse_trial_count(text: str | None, max_trials: int = MAX_TRIAL_COUNT) -> int:
    """
    Разбор числа бросков из пользовательского текста.

    Значение по умолчанию не подставляется: пустой текст считается ошибкой.

    Args:
        text: Текст, например "10000" или " +500 "
        max_trials: Верхняя граница (включительно)

    Returns:
        Положительное целое <= max_trials

    Raises:
        NonPositiveTrialCountError: если текст не число, число <= 0 или
            больше max_trials

    Examples:
        >>> parse_trial_count("100")
        100
        >>> parse_trial_count(" +7 ")
        7
    """
    if text is None:
        raise NonPositiveTrialCountError("Trial count is missing")

    match = _TRIAL_COUNT_RE.match(text.strip())
    if not match:
        raise NonPositiveTrialCountError(f"Trial count is not a positive integer: {text[:32]!r}")

    digits = match.group("digits")
    try:
        trials = int(digits)
    except ValueError:
        raise NonPositiveTrialCountError(f"Trial count is out of range: {len(digits)} digits") from None

    if trials <= 0:
        raise NonPositiveTrialCountError(f"Trial count must be positive, got {trials}")

    if trials > max_trials:
        raise NonPositiveTrialCountError(f"Trial count {trials} exceeds maximum {max_trials}")

    return trials
