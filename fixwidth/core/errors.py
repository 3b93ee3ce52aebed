"""
Errors — Типы ошибок целочисленных типов фиксированной ширины

Две разные философии ошибок:
- Узкие целые (BoundedUint): переполнение при конструировании — восстанавливаемая
  ошибка ValueOverflow; переполнение в арифметике — фатальная IntegerOverflowError.
- Большие целые (BigUint): арифметика молча переполняется по модулю 2^BITS;
  некорректная длина/формат при декодировании — ParseLengthError / HexDecodeError.

Все payload-ошибки сравниваются по значению полей.
"""

from typing import Final, Optional


# Значения шире этого порога в сообщениях описываются разрядностью:
# десятичная запись неограниченного int упирается в лимит int -> str
_MAX_DISPLAY_BITS: Final[int] = 1024


def _display_int(value: int) -> str:
    if value.bit_length() > _MAX_DISPLAY_BITS:
        sign = "-" if value < 0 else ""
        return f"<{sign}{value.bit_length()}-bit integer>"
    return str(value)


# =============================================================================
# ВОССТАНАВЛИВАЕМЫЕ ОШИБКИ
# =============================================================================


class ValueOverflow(ValueError):
    """
    Значение не помещается в битовую размерность целого.

    Attributes:
        max: Максимально допустимое значение (2^N - 1)
        value: Значение, вызвавшее переполнение
    """

    def __init__(self, max: int, value: int):
        self.max = max
        self.value = value
        super().__init__(
            f"Unable to construct bit-sized integer from a value `{_display_int(value)}` "
            f"overflowing max value `{max}`"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueOverflow):
            return NotImplemented
        return (self.max, self.value) == (other.max, other.value)

    def __hash__(self) -> int:
        return hash((ValueOverflow, self.max, self.value))

    def __repr__(self) -> str:
        return f"ValueOverflow(max={self.max}, value={self.value})"


class ParseLengthError(ValueError):
    """
    Длина буфера не совпадает с требуемой.

    Attributes:
        actual: Фактическая длина
        expected: Требуемая длина
    """

    def __init__(self, actual: int, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(f"Invalid length: got {actual}, expected {expected}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseLengthError):
            return NotImplemented
        return (self.actual, self.expected) == (other.actual, other.expected)

    def __hash__(self) -> int:
        return hash((ParseLengthError, self.actual, self.expected))

    def __repr__(self) -> str:
        return f"ParseLengthError(actual={self.actual}, expected={self.expected})"


class HexDecodeError(ValueError):
    """Строка не является корректной hex-записью (недопустимый символ или нечётная длина)."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid hex string {text!r}: {reason}")


# =============================================================================
# ФАТАЛЬНЫЕ ОШИБКИ
# =============================================================================


class IntegerOverflowError(OverflowError):
    """
    Переполнение в арифметике узкого целого.

    Это ошибка программирования, а не восстанавливаемое состояние:
    узкие целые моделируют провалидированные поля протоколов, и результат
    за пределами [0, 2^N - 1] не должен молча усекаться.

    Намеренно НЕ наследуется от ValueError, чтобы `except ValueError`
    на пути конструирования её не перехватывал.

    Attributes:
        max: Максимально допустимое значение (2^N - 1)
        value: Результат операции или None, если он не вычислялся
        operation: Имя операции ("add", "shl", ...) или None для with_value
    """

    def __init__(self, max: int, value: Optional[int], operation: Optional[str] = None):
        self.max = max
        self.value = value
        self.operation = operation
        if operation is None:
            message = f"provided value {_display_int(value)} exceeds max value {max}"
        else:
            # value is None: результат отклонён до вычисления (сдвиг на >= BITS)
            result = "result" if value is None else f"result {_display_int(value)}"
            message = (
                f"integer overflow during {operation} operation: "
                f"{result} is out of range 0..={max}"
            )
        super().__init__(message)
