"""
BigUint — Беззнаковые целые фиксированной ширины (256 / 512 / 1024 бита)

Значение хранится как кортеж из WORDS 64-битных слов, слово 0 — младшее
(little-endian порядок слов). Нормализации нет: все WORDS слов всегда
присутствуют, старшие могут быть нулевыми.

Алгоритмы работают только со словами и не опираются на неограниченную
точность Python int:
- Сложение: пословное с переносом через параллельный массив переносов
- Вычитание: a + ~b + 1 (дополнение до двух)
- Умножение: разбиение множителя на 32-битные чанки (mul_u32) со сдвигом
- Деление: побитовое длинное деление со сдвигом делителя

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Число слов фиксировано для класса (WORDS)
2. Арифметика молча переполняется по модулю 2^BITS
3. Единственная фатальная ошибка арифметики — деление на ноль
4. Декодирование некорректной длины/формата никогда не усекает и не дополняет нулями
"""

import re
import struct
from typing import Any, ClassVar, Final, Iterable, Tuple, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixwidth.core.errors import HexDecodeError, ParseLengthError
from fixwidth.core.math.word_ops import (
    HALF_WORD_BITS,
    HALF_WORD_MASK,
    HEX_DIGITS_PER_WORD,
    U128_MAX,
    U64_MAX,
    WORD_BITS,
    WORD_BYTES,
    WORD_MASK,
    Endianness,
    leading_zeros,
    shl_word,
    split_word,
    trailing_zeros,
    validate_shift,
    validate_unsigned,
    validate_word,
    wrapping_add,
    wrapping_not,
)


_HEX_PATTERN: Final = re.compile(r"[0-9a-fA-F]*")

BytesLike = Union[bytes, bytearray, memoryview]


# =============================================================================
# БАЗОВЫЙ КЛАСС
# =============================================================================


class BigUint:
    """
    Беззнаковое целое из WORDS 64-битных слов с арифметикой по модулю 2^BITS.

    Immutable: все операции возвращают новый экземпляр.

    Конкретная ширина задаётся в подклассе:

        class U256(BigUint):
            WORDS = 4
    """

    __slots__ = ("_words",)

    WORDS: ClassVar[int] = 0
    BITS: ClassVar[int] = 0

    ZERO: ClassVar["BigUint"]
    ONE: ClassVar["BigUint"]
    MIN: ClassVar["BigUint"]
    MAX: ClassVar["BigUint"]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.WORDS < 1:
            raise TypeError(f"{cls.__name__}: WORDS must be positive, got {cls.WORDS}")

        cls.BITS = cls.WORDS * WORD_BITS
        cls.ZERO = cls._wrap((0,) * cls.WORDS)
        cls.ONE = cls._wrap((1,) + (0,) * (cls.WORDS - 1))
        cls.MIN = cls.ZERO
        cls.MAX = cls._wrap((WORD_MASK,) * cls.WORDS)

    def __init__(self, value: int = 0):
        """
        Args:
            value: Python int в диапазоне [0, 2^BITS)

        Raises:
            ValueError: Если value вне диапазона
        """
        if self.WORDS < 1:
            raise TypeError("BigUint is abstract; use a sized subclass such as U256")
        validate_unsigned(value, (1 << self.BITS) - 1, "value")
        words = tuple((value >> (WORD_BITS * i)) & WORD_MASK for i in range(self.WORDS))
        object.__setattr__(self, "_words", words)

    @classmethod
    def _wrap(cls, words: Iterable[int]) -> "BigUint":
        # Быстрый путь без валидации: words уже корректны
        obj = object.__new__(cls)
        object.__setattr__(obj, "_words", tuple(words))
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self)._wrap, (self._words,))

    # -------------------------------------------------------------------------
    # Конструирование из слов и нативных целых
    # -------------------------------------------------------------------------

    @classmethod
    def from_inner(cls, words: Iterable[int]) -> "BigUint":
        """
        Конструирование из массива слов (слово 0 — младшее).

        Любой набор 64-битных слов допустим.

        Raises:
            ParseLengthError: Если число слов != WORDS
            ValueError: Если слово вне [0, 2^64)
        """
        words = tuple(words)
        if len(words) != cls.WORDS:
            raise ParseLengthError(actual=len(words), expected=cls.WORDS)
        for index, word in enumerate(words):
            validate_word(word, f"word[{index}]")
        return cls._wrap(words)

    def into_inner(self) -> Tuple[int, ...]:
        """Массив слов (слово 0 — младшее)"""
        return self._words

    def as_inner(self) -> Tuple[int, ...]:
        """Массив слов без копирования (кортеж неизменяем)"""
        return self._words

    @classmethod
    def from_u64(cls, value: int) -> "BigUint":
        """Расширение 64-битного беззнакового: value в слове 0, остальное — нули."""
        validate_unsigned(value, U64_MAX, "u64 value")
        return cls._wrap((value,) + (0,) * (cls.WORDS - 1))

    @classmethod
    def from_u128(cls, value: int) -> "BigUint":
        """Расширение 128-битного беззнакового: слова 0 и 1."""
        validate_unsigned(value, U128_MAX, "u128 value")
        low, high = value & WORD_MASK, value >> WORD_BITS
        if cls.WORDS == 1:
            if high:
                raise ValueError(f"u128 value {value} does not fit into {cls.__name__}")
            return cls._wrap((low,))
        return cls._wrap((low, high) + (0,) * (cls.WORDS - 2))

    @classmethod
    def from_int(cls, value: int) -> "BigUint":
        """Конструирование из Python int в диапазоне [0, 2^BITS)."""
        return cls(value)

    def to_int(self) -> int:
        """Значение как Python int (неограниченной точности)."""
        result = 0
        for index, word in enumerate(self._words):
            result |= word << (WORD_BITS * index)
        return result

    def __int__(self) -> int:
        return self.to_int()

    # -------------------------------------------------------------------------
    # Размеры и доступ к словам
    # -------------------------------------------------------------------------

    def array_len(self) -> int:
        """Длина в словах"""
        return self.WORDS

    def byte_len(self) -> int:
        """Длина в байтах"""
        return self.WORDS * WORD_BYTES

    def low_u32(self) -> int:
        """Младшие 32 бита"""
        return self._words[0] & HALF_WORD_MASK

    def low_u64(self) -> int:
        """Младшие 64 бита"""
        return self._words[0]

    def __getitem__(self, index):
        return self._words[index]

    def __bool__(self) -> bool:
        return any(self._words)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def _cmp(self, other: "BigUint") -> int:
        # Порядок хранения little-endian, поэтому обход от старшего слова к младшему
        for mine, yours in zip(reversed(self._words), reversed(other._words)):
            if mine < yours:
                return -1
            if mine > yours:
                return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash((self.WORDS, self._words))

    def __lt__(self, other: "BigUint") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._cmp(other) < 0

    def __le__(self, other: "BigUint") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._cmp(other) <= 0

    def __gt__(self, other: "BigUint") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._cmp(other) > 0

    def __ge__(self, other: "BigUint") -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._cmp(other) >= 0

    # -------------------------------------------------------------------------
    # Арифметика (по модулю 2^BITS)
    # -------------------------------------------------------------------------

    def _operand(self, other: object) -> Union["BigUint", Any]:
        # Допускаются значения того же класса и нативные целые до 128 бит
        if type(other) is type(self):
            return other
        if isinstance(other, BigUint):
            return NotImplemented
        if isinstance(other, int) and not isinstance(other, bool):
            return self.from_u128(other)
        return NotImplemented

    def _add(self, other: "BigUint") -> "BigUint":
        me, you = self._words, other._words
        last = self.WORDS - 1
        while True:
            ret = [0] * self.WORDS
            carry = [0] * self.WORDS
            has_carry = False
            for i in range(self.WORDS):
                ret[i], _ = wrapping_add(me[i], you[i])
                # Перенос из старшего слова отбрасывается
                if i < last and ret[i] < me[i]:
                    carry[i + 1] = 1
                    has_carry = True
            if not has_carry:
                return self._wrap(ret)
            me, you = ret, carry

    def _sub(self, other: "BigUint") -> "BigUint":
        return self._add(~other)._add(self.ONE)

    def mul_u32(self, other: int) -> "BigUint":
        """
        Умножение на 32-битное беззнаковое.

        Каждое слово разбивается на 32-битные половины, чтобы произведение
        половины на множитель помещалось в 64 бита; переносы копятся
        в следующем слове и добавляются сложением.

        Raises:
            ValueError: Если other вне [0, 2^32)
        """
        validate_unsigned(other, HALF_WORD_MASK, "u32 multiplier")
        last = self.WORDS - 1
        ret = [0] * self.WORDS
        carry = [0] * self.WORDS
        for i, word in enumerate(self._words):
            high, low = split_word(word)
            upper = other * high
            lower = other * low
            if i < last:
                carry[i + 1] += upper >> HALF_WORD_BITS
            ret[i], overflow = wrapping_add(lower, shl_word(upper, HALF_WORD_BITS))
            if overflow and i < last:
                carry[i + 1] += 1
        return self._wrap(ret)._add(self._wrap(carry))

    def _mul(self, other: "BigUint") -> "BigUint":
        result = self.ZERO
        for i in range(2 * self.WORDS):
            chunk = (other >> (HALF_WORD_BITS * i)).low_u32()
            if chunk == 0:
                continue
            result = result._add(self.mul_u32(chunk) << (HALF_WORD_BITS * i))
        return result

    def div_rem(self, other: Union["BigUint", int]) -> Tuple["BigUint", "BigUint"]:
        """
        Побитовое длинное деление.

        Args:
            other: Делитель того же класса или нативное целое до 128 бит

        Returns:
            (quotient, remainder)

        Raises:
            ZeroDivisionError: Если other == 0
            TypeError: Если other другой ширины или не целое
        """
        rhs = self._operand(other)
        if rhs is NotImplemented:
            raise TypeError(
                f"unsupported divisor for {type(self).__name__}: {type(other).__name__}"
            )
        my_bits = self.bits_required()
        your_bits = rhs.bits_required()

        if your_bits == 0:
            raise ZeroDivisionError(f"{type(self).__name__} division by zero")

        # Делитель больше делимого
        if my_bits < your_bits:
            return self.ZERO, self

        quotient = [0] * self.WORDS
        remainder = self
        shift = my_bits - your_bits
        divisor = rhs << shift
        while True:
            if remainder >= divisor:
                quotient[shift // WORD_BITS] |= 1 << (shift % WORD_BITS)
                remainder = remainder._sub(divisor)
            divisor = divisor >> 1
            if shift == 0:
                break
            shift -= 1

        return self._wrap(quotient), remainder

    def __add__(self, other):
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._add(rhs)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._sub(rhs)

    def __rsub__(self, other):
        lhs = self._operand(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs._sub(self)

    def __mul__(self, other):
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._mul(rhs)

    def __rmul__(self, other):
        lhs = self._operand(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs._mul(self)

    def __divmod__(self, other):
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)

    def __rdivmod__(self, other):
        lhs = self._operand(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)

    def __floordiv__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[0]

    def __rfloordiv__(self, other):
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[0]

    # Целочисленное деление: `/` и `//` эквивалентны
    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other):
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __rmod__(self, other):
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[1]

    # -------------------------------------------------------------------------
    # Побитовые операции и сдвиги
    # -------------------------------------------------------------------------

    def _zip_words(self, other: object, op) -> "BigUint":
        rhs = self._operand(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._wrap(op(a, b) for a, b in zip(self._words, rhs._words))

    def __and__(self, other):
        return self._zip_words(other, lambda a, b: a & b)

    def __or__(self, other):
        return self._zip_words(other, lambda a, b: a | b)

    def __xor__(self, other):
        return self._zip_words(other, lambda a, b: a ^ b)

    __rand__ = __and__
    __ror__ = __or__
    __rxor__ = __xor__

    def __invert__(self) -> "BigUint":
        return self._wrap(wrapping_not(word) for word in self._words)

    def __lshift__(self, shift: int) -> "BigUint":
        validate_shift(shift)
        word_shift, bit_shift = divmod(shift, WORD_BITS)
        original = self._words
        ret = [0] * self.WORDS
        for i in range(self.WORDS):
            if i + word_shift < self.WORDS:
                ret[i + word_shift] += shl_word(original[i], bit_shift)
            # Биты, перешедшие через границу слова; bit_shift == 0 не даёт сдвига на 64
            if bit_shift > 0 and i + word_shift + 1 < self.WORDS:
                ret[i + word_shift + 1] += original[i] >> (WORD_BITS - bit_shift)
        return self._wrap(ret)

    def __rshift__(self, shift: int) -> "BigUint":
        validate_shift(shift)
        word_shift, bit_shift = divmod(shift, WORD_BITS)
        original = self._words
        ret = [0] * self.WORDS
        for i in range(word_shift, self.WORDS):
            ret[i - word_shift] += original[i] >> bit_shift
            if bit_shift > 0 and i < self.WORDS - 1:
                ret[i - word_shift] += shl_word(original[i + 1], WORD_BITS - bit_shift)
        return self._wrap(ret)

    # -------------------------------------------------------------------------
    # Битовая интроспекция
    # -------------------------------------------------------------------------

    def bit(self, index: int) -> bool:
        """
        Установлен ли бит index.

        Raises:
            IndexError: Если index вне [0, BITS)
        """
        if not 0 <= index < self.BITS:
            raise IndexError(f"bit index {index} out of range for {self.BITS}-bit integer")
        return (self._words[index // WORD_BITS] >> (index % WORD_BITS)) & 1 == 1

    def bits_required(self) -> int:
        """Минимальное число битов для представления значения (0 для нуля)."""
        for i in range(self.WORDS - 1, -1, -1):
            word = self._words[i]
            if word > 0:
                return WORD_BITS * (i + 1) - leading_zeros(word)
        return 0

    def trailing_zeros(self) -> int:
        """Число младших нулевых битов (BITS для нуля)."""
        for i in range(self.WORDS - 1):
            if self._words[i] > 0:
                return WORD_BITS * i + trailing_zeros(self._words[i])
        return WORD_BITS * (self.WORDS - 1) + trailing_zeros(self._words[-1])

    def mask(self, n: int) -> "BigUint":
        """Побитовое И с 2^n - 1: обнуляет все биты начиная с позиции n."""
        validate_shift(n)
        ret = [0] * self.WORDS
        for i, word in enumerate(self._words):
            if n >= WORD_BITS * (i + 1):
                ret[i] = word
            else:
                ret[i] = word & ((1 << (n - WORD_BITS * i)) - 1)
                break
        return self._wrap(ret)

    def bit_slice(self, start: int, end: int) -> "BigUint":
        """Биты [start, end), сдвинутые к нулевой позиции."""
        if end < start:
            raise ValueError(f"bit slice end {end} is before start {start}")
        return (self >> start).mask(end - start)

    def increment(self) -> "BigUint":
        """
        Значение + 1 через ripple-carry.

        Останавливается на первом слове, которое не обнулилось при переносе;
        MAX.increment() == ZERO.
        """
        words = list(self._words)
        for i in range(self.WORDS):
            words[i] = (words[i] + 1) & WORD_MASK
            if words[i] != 0:
                break
        return self._wrap(words)

    # -------------------------------------------------------------------------
    # Бинарная сериализация
    # -------------------------------------------------------------------------

    @classmethod
    def _checked_buffer(cls, data: BytesLike) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected a bytes-like buffer, got {type(data).__name__}")
        data = bytes(data)
        expected = cls.WORDS * WORD_BYTES
        if len(data) != expected:
            raise ParseLengthError(actual=len(data), expected=expected)
        return data

    @classmethod
    def from_be_slice(cls, data: BytesLike) -> "BigUint":
        """
        Декодирование big-endian буфера произвольной длины с проверкой.

        Raises:
            ParseLengthError: Если длина != WORDS * 8
        """
        words = struct.unpack(f">{cls.WORDS}Q", cls._checked_buffer(data))
        # Старшее слово первым в буфере, поэтому порядок слов разворачивается
        return cls._wrap(reversed(words))

    @classmethod
    def from_le_slice(cls, data: BytesLike) -> "BigUint":
        """
        Декодирование little-endian буфера произвольной длины с проверкой.

        Raises:
            ParseLengthError: Если длина != WORDS * 8
        """
        return cls._wrap(struct.unpack(f"<{cls.WORDS}Q", cls._checked_buffer(data)))

    @classmethod
    def from_be_bytes(cls, data: BytesLike) -> "BigUint":
        """Декодирование big-endian массива ровно из WORDS * 8 байт."""
        return cls.from_be_slice(data)

    @classmethod
    def from_le_bytes(cls, data: BytesLike) -> "BigUint":
        """Декодирование little-endian массива ровно из WORDS * 8 байт."""
        return cls.from_le_slice(data)

    @classmethod
    def from_bytes(cls, data: BytesLike, byteorder: Union[Endianness, str] = Endianness.BIG) -> "BigUint":
        if Endianness(byteorder) is Endianness.BIG:
            return cls.from_be_slice(data)
        return cls.from_le_slice(data)

    def to_be_bytes(self) -> bytes:
        """WORDS * 8 байт, старший байт первым"""
        return struct.pack(f">{self.WORDS}Q", *reversed(self._words))

    def to_le_bytes(self) -> bytes:
        """WORDS * 8 байт, младший байт первым"""
        return struct.pack(f"<{self.WORDS}Q", *self._words)

    def to_bytes(self, byteorder: Union[Endianness, str] = Endianness.BIG) -> bytes:
        if Endianness(byteorder) is Endianness.BIG:
            return self.to_be_bytes()
        return self.to_le_bytes()

    # -------------------------------------------------------------------------
    # Текстовая сериализация
    # -------------------------------------------------------------------------

    @classmethod
    def hex_len(cls) -> int:
        """Длина hex-записи: WORDS * 16 символов"""
        return cls.WORDS * HEX_DIGITS_PER_WORD

    def to_hex(self) -> str:
        """Hex-запись в нижнем регистре, ровно WORDS * 16 символов, старшее слово первым."""
        return self.to_be_bytes().hex()

    @classmethod
    def from_hex(cls, text: str) -> "BigUint":
        """
        Декодирование hex-записи (регистр не важен).

        Raises:
            HexDecodeError: Недопустимый символ или нечётное число символов
            ParseLengthError: Число символов != WORDS * 16
        """
        if not isinstance(text, str):
            raise TypeError(f"expected a hex string, got {type(text).__name__}")
        if not _HEX_PATTERN.fullmatch(text):
            raise HexDecodeError(text, "invalid hex character")
        if len(text) % 2:
            raise HexDecodeError(text, "odd number of hex digits")
        if len(text) != cls.hex_len():
            raise ParseLengthError(actual=len(text), expected=cls.hex_len())
        return cls.from_be_slice(bytes.fromhex(text))

    def __str__(self) -> str:
        return f"0x{self.to_hex()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self.to_hex()})"

    # -------------------------------------------------------------------------
    # Pydantic
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Human-readable форма — hex-строка, бинарная — буфер WORDS * 8 байт
        from_hex = core_schema.no_info_after_validator_function(
            cls.from_hex, core_schema.str_schema(strict=True)
        )
        from_bytes = core_schema.no_info_after_validator_function(
            cls.from_be_slice, core_schema.bytes_schema(strict=True)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_hex,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_hex, from_bytes]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.to_hex(), when_used="json"
            ),
        )


# =============================================================================
# КОНКРЕТНЫЕ ШИРИНЫ
# =============================================================================


class U256(BigUint):
    """256-битное беззнаковое целое (4 слова)"""

    __slots__ = ()
    WORDS = 4


class U512(BigUint):
    """512-битное беззнаковое целое (8 слов)"""

    __slots__ = ()
    WORDS = 8


class U1024(BigUint):
    """1024-битное беззнаковое целое (16 слов)"""

    __slots__ = ()
    WORDS = 16
