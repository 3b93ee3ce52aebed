"""
Word Ops — Примитивы над 64-битными машинными словами

Python int не имеет фиксированной ширины, поэтому все операции над словами
большого целого явно маскируются до 64 бит. Модуль даёт единственное место,
где живут эти маски и беззнаковая семантика переполнения.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой функции-примитива лежит в [0, 2^64)
2. Переполнение слова никогда не теряется молча: wrapping_add возвращает флаг
3. Сдвиг на полную ширину слова (64) не выполняется как "нативный" сдвиг
"""

from enum import Enum
from typing import Final, Tuple


# =============================================================================
# КОНСТАНТЫ СЛОВА
# =============================================================================

# Размер слова большого целого
WORD_BITS: Final[int] = 64
WORD_BYTES: Final[int] = WORD_BITS // 8
WORD_MASK: Final[int] = (1 << WORD_BITS) - 1

# Половина слова (для умножения без типа шире 64 бит)
HALF_WORD_BITS: Final[int] = 32
HALF_WORD_MASK: Final[int] = (1 << HALF_WORD_BITS) - 1

# Ширина нативных беззнаковых типов, которые расширяются в большое целое
U64_MAX: Final[int] = WORD_MASK
U128_MAX: Final[int] = (1 << 128) - 1

# Hex-символов на слово в текстовом представлении
HEX_DIGITS_PER_WORD: Final[int] = WORD_BYTES * 2


# =============================================================================
# ПОРЯДОК БАЙТОВ
# =============================================================================


class Endianness(str, Enum):
    """Порядок байтов при бинарной (де)сериализации"""

    BIG = "big"
    LITTLE = "little"


# =============================================================================
# АРИФМЕТИКА СЛОВ
# =============================================================================


def wrapping_add(a: int, b: int) -> Tuple[int, bool]:
    """
    Беззнаковое сложение двух слов с переносом по модулю 2^64.

    Args:
        a: Первое слово
        b: Второе слово

    Returns:
        (sum, overflow): сумма по модулю 2^64 и флаг переполнения

    Examples:
        >>> wrapping_add(1, 2)
        (3, False)
        >>> wrapping_add(WORD_MASK, 1)
        (0, True)
    """
    total = a + b
    return total & WORD_MASK, total > WORD_MASK


def wrapping_not(word: int) -> int:
    """Побитовое дополнение слова в пределах 64 бит."""
    return ~word & WORD_MASK


def split_word(word: int) -> Tuple[int, int]:
    """
    Разбиение слова на старшую и младшую 32-битные половины.

    Returns:
        (high, low)
    """
    return word >> HALF_WORD_BITS, word & HALF_WORD_MASK


def shl_word(word: int, shift: int) -> int:
    """Сдвиг слова влево с отбрасыванием битов за пределами 64."""
    return (word << shift) & WORD_MASK


def leading_zeros(word: int) -> int:
    """
    Количество ведущих нулевых битов в 64-битном слове.

    Examples:
        >>> leading_zeros(0)
        64
        >>> leading_zeros(1)
        63
    """
    return WORD_BITS - word.bit_length()


def trailing_zeros(word: int) -> int:
    """
    Количество младших нулевых битов в 64-битном слове.

    Examples:
        >>> trailing_zeros(0)
        64
        >>> trailing_zeros(8)
        3
    """
    if word == 0:
        return WORD_BITS
    return (word & -word).bit_length() - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_unsigned(value: int, max_value: int, name: str = "value") -> int:
    """
    Проверка, что value — int в диапазоне [0, max_value].

    bool отклоняется явно: True/False не являются числовыми операндами.

    Raises:
        TypeError: Если value не int
        ValueError: Если value вне диапазона
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")

    return value


def validate_word(word: int, name: str = "word") -> int:
    """Проверка, что word помещается в 64-битное слово."""
    return validate_unsigned(word, WORD_MASK, name)


def validate_shift(shift: int) -> int:
    """
    Проверка счётчика сдвига.

    Raises:
        TypeError: Если shift не int
        ValueError: Если shift отрицательный
    """
    if isinstance(shift, bool) or not isinstance(shift, int):
        raise TypeError(f"shift count must be an int, got {type(shift).__name__}")

    if shift < 0:
        raise ValueError(f"negative shift count: {shift}")

    return shift
