"""
BoundedUint — Узкие беззнаковые целые (2..7 и 24 бита)

Значение хранится в минимальном нативном примитиве (8 бит для N ≤ 7,
32 бита для N = 24) и всегда удовлетворяет 0 ≤ value ≤ 2^N - 1.

Две ветки ошибок:
- try_from / конструктор: ValueOverflow (восстанавливаемая)
- with_value и арифметика: IntegerOverflowError (фатальная, ошибка программирования)

Арифметика никогда не усекает результат молча — в отличие от BigUint.
"""

import operator
import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Final, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixwidth.core.errors import IntegerOverflowError, ValueOverflow
from fixwidth.core.math.word_ops import validate_unsigned


# Десятичная запись примитива: опциональный '+' и только цифры
_DECIMAL_PATTERN: Final = re.compile(r"\+?[0-9]+")


# =============================================================================
# БАЗОВЫЙ КЛАСС
# =============================================================================


@dataclass(frozen=True, order=True)
class BoundedUint:
    """
    Беззнаковое целое шириной BITS, упакованное в примитив шириной INNER_BITS.

    Immutable (frozen=True): каждая операция создаёт новый экземпляр,
    in-place операторы (`+=` и т.д.) перепривязывают имя к новому значению.

    Конкретная ширина задаётся в подклассе атрибутами класса:

        class U3(BoundedUint):
            BITS = 3
            INNER_BITS = 8
    """

    value: int

    BITS: ClassVar[int] = 0
    INNER_BITS: ClassVar[int] = 8

    MIN: ClassVar["BoundedUint"]
    MAX: ClassVar["BoundedUint"]
    ONE: ClassVar["BoundedUint"]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not 0 < cls.BITS <= cls.INNER_BITS:
            raise TypeError(
                f"{cls.__name__}: BITS must be in 1..={cls.INNER_BITS}, got {cls.BITS}"
            )
        cls.MIN = cls(0)
        cls.MAX = cls(cls.max_value())
        cls.ONE = cls(1)

    def __post_init__(self) -> None:
        if self.BITS < 1:
            raise TypeError("BoundedUint is abstract; use a sized subclass such as U3")
        raw = self.value
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(
                f"{type(self).__name__} requires an int, got {type(raw).__name__}"
            )
        if raw < 0:
            raise ValueError(f"{type(self).__name__} is unsigned, got {raw}")
        if raw > self.max_value():
            raise ValueOverflow(max=self.max_value(), value=raw)

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def max_value(cls) -> int:
        """Максимальное представимое значение: 2^BITS - 1"""
        return (1 << cls.BITS) - 1

    @classmethod
    def inner_max(cls) -> int:
        """Максимальное значение нативного примитива: 2^INNER_BITS - 1"""
        return (1 << cls.INNER_BITS) - 1

    @classmethod
    def try_from(cls, raw: int) -> "BoundedUint":
        """
        Конструирование с проверкой диапазона.

        Args:
            raw: Исходное значение

        Returns:
            Экземпляр cls

        Raises:
            ValueOverflow: Если raw >= 2^BITS
        """
        return cls(raw)

    @classmethod
    def with_value(cls, raw: int) -> "BoundedUint":
        """
        Конструирование для мест вызова, где значение уже провалидировано
        (литералы, константы протокола).

        Raises:
            IntegerOverflowError: Если raw >= 2^BITS (фатально)
        """
        try:
            return cls(raw)
        except ValueOverflow as err:
            raise IntegerOverflowError(max=err.max, value=err.value) from err

    @classmethod
    def from_str(cls, text: str) -> "BoundedUint":
        """
        Парсинг десятичной записи с последующей проверкой диапазона.

        Raises:
            ValueError: Если text не является десятичным беззнаковым числом
            ValueOverflow: Если значение >= 2^BITS
        """
        if not isinstance(text, str) or not _DECIMAL_PATTERN.fullmatch(text):
            raise ValueError(f"invalid digit found in string {text!r}")
        return cls.try_from(int(text))

    # -------------------------------------------------------------------------
    # Доступ к значению
    # -------------------------------------------------------------------------

    def as_inner(self) -> int:
        """Значение нативного примитива"""
        return self.value

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        return str(self.value)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _operand(self, other: object) -> Union[int, Any]:
        # Допускаются только значения той же ширины или нативный примитив
        if type(other) is type(self):
            return other.value
        if isinstance(other, BoundedUint):
            return NotImplemented
        if isinstance(other, int) and not isinstance(other, bool):
            return validate_unsigned(other, self.inner_max(), "operand")
        return NotImplemented

    def _apply(
        self,
        other: object,
        op: Callable[[int, int], int],
        name: str,
        reflected: bool = False,
    ) -> "BoundedUint":
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented

        if reflected:
            result = op(rhs, self.value)
        else:
            result = op(self.value, rhs)

        if not 0 <= result <= self.max_value():
            raise IntegerOverflowError(max=self.max_value(), value=result, operation=name)

        return type(self)(result)

    def __add__(self, other):
        return self._apply(other, operator.add, "add")

    def __radd__(self, other):
        return self._apply(other, operator.add, "add", reflected=True)

    def __sub__(self, other):
        return self._apply(other, operator.sub, "sub")

    def __rsub__(self, other):
        return self._apply(other, operator.sub, "sub", reflected=True)

    def __mul__(self, other):
        return self._apply(other, operator.mul, "mul")

    def __rmul__(self, other):
        return self._apply(other, operator.mul, "mul", reflected=True)

    # Целочисленное деление: `/` и `//` эквивалентны
    def __floordiv__(self, other):
        return self._apply(other, operator.floordiv, "div")

    def __rfloordiv__(self, other):
        return self._apply(other, operator.floordiv, "div", reflected=True)

    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other):
        return self._apply(other, operator.mod, "rem")

    def __rmod__(self, other):
        return self._apply(other, operator.mod, "rem", reflected=True)

    def __and__(self, other):
        return self._apply(other, operator.and_, "bitand")

    def __rand__(self, other):
        return self._apply(other, operator.and_, "bitand", reflected=True)

    def __or__(self, other):
        return self._apply(other, operator.or_, "bitor")

    def __ror__(self, other):
        return self._apply(other, operator.or_, "bitor", reflected=True)

    def __xor__(self, other):
        return self._apply(other, operator.xor, "bitxor")

    def __rxor__(self, other):
        return self._apply(other, operator.xor, "bitxor", reflected=True)

    def _checked_lshift(self, base: int, shift: int) -> int:
        # Ненулевое значение, сдвинутое на >= BITS, переполняется всегда;
        # такой результат не вычисляется
        if base and shift >= self.BITS:
            raise IntegerOverflowError(max=self.max_value(), value=None, operation="shl")
        return base << shift

    def __lshift__(self, other):
        return self._apply(other, self._checked_lshift, "shl")

    def __rlshift__(self, other):
        return self._apply(other, self._checked_lshift, "shl", reflected=True)

    def __rshift__(self, other):
        return self._apply(other, operator.rshift, "shr")

    def __rrshift__(self, other):
        return self._apply(other, operator.rshift, "shr", reflected=True)

    # -------------------------------------------------------------------------
    # Pydantic
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Прозрачная сериализация: в JSON и dict — просто число
        from_int = core_schema.no_info_after_validator_function(
            cls.try_from, core_schema.int_schema(ge=0, strict=True)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.value
            ),
        )


# =============================================================================
# КОНКРЕТНЫЕ ШИРИНЫ
# =============================================================================


class U2(BoundedUint):
    """2-битное беззнаковое целое в диапазоне 0..=3"""

    BITS = 2


class U3(BoundedUint):
    """3-битное беззнаковое целое в диапазоне 0..=7"""

    BITS = 3


class U4(BoundedUint):
    """4-битное беззнаковое целое в диапазоне 0..=15"""

    BITS = 4


class U5(BoundedUint):
    """5-битное беззнаковое целое в диапазоне 0..=31"""

    BITS = 5


class U6(BoundedUint):
    """6-битное беззнаковое целое в диапазоне 0..=63"""

    BITS = 6


class U7(BoundedUint):
    """7-битное беззнаковое целое в диапазоне 0..=127"""

    BITS = 7


class U24(BoundedUint):
    """24-битное беззнаковое целое в диапазоне 0..=16_777_215"""

    BITS = 24
    INNER_BITS = 32
