"""
Тесты для BoundedUint — узких беззнаковых целых

Проверяет:
1. Конструирование с проверкой диапазона (try_from / with_value)
2. Константы MIN / MAX / ONE / BITS
3. Арифметику с фатальным переполнением
4. Смешанные операнды (значение + нативный примитив)
5. Парсинг строк
6. Сравнение, равенство, хеширование
7. Интеграцию с pydantic
"""

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from fixwidth.core.errors import IntegerOverflowError, ValueOverflow
from fixwidth.core.num.bounded import U2, U3, U4, U5, U6, U7, U24, BoundedUint


ALL_WIDTHS = [
    (U2, 2),
    (U3, 3),
    (U4, 4),
    (U5, 5),
    (U6, 6),
    (U7, 7),
    (U24, 24),
]


# =============================================================================
# КОНСТРУИРОВАНИЕ
# =============================================================================


class TestConstruction:
    """Тесты try_from / with_value"""

    @pytest.mark.parametrize("cls, bits", ALL_WIDTHS)
    def test_max_roundtrip(self, cls, bits) -> None:
        """try_from(MAX) возвращает то же значение"""
        value = cls.try_from(int(cls.MAX))
        assert value == cls.MAX
        assert value.value == (1 << bits) - 1

    @pytest.mark.parametrize("cls, bits", ALL_WIDTHS)
    def test_every_valid_raw_unwraps_back(self, cls, bits) -> None:
        """Для всех raw < 2^N try_from успешен и возвращает raw"""
        limit = min(1 << bits, 512)
        for raw in range(limit):
            assert cls.try_from(raw).value == raw

    @pytest.mark.parametrize("cls, bits", ALL_WIDTHS)
    def test_overflow_payload(self, cls, bits) -> None:
        """raw = 2^N даёт ValueOverflow{max: 2^N - 1, value: raw}"""
        with pytest.raises(ValueOverflow) as exc_info:
            cls.try_from(1 << bits)

        assert exc_info.value.max == (1 << bits) - 1
        assert exc_info.value.value == 1 << bits
        assert exc_info.value == ValueOverflow(max=(1 << bits) - 1, value=1 << bits)

    def test_u3_overflow_scenario(self) -> None:
        """U3 из 8 отклоняется с ValueOverflow{max: 7, value: 8}"""
        with pytest.raises(ValueOverflow, match="overflowing max value `7`"):
            U3.try_from(8)

    def test_u24_overflow(self) -> None:
        """U24 отклоняет 2^24"""
        with pytest.raises(ValueOverflow) as exc_info:
            U24.try_from(1 << 24)
        assert exc_info.value == ValueOverflow(max=16_777_215, value=16_777_216)

    def test_constructor_is_checked(self) -> None:
        """Конструктор ведёт себя как try_from"""
        with pytest.raises(ValueOverflow):
            U2(4)

    def test_negative_rejected(self) -> None:
        """Отрицательные значения не являются ValueOverflow, но отклоняются"""
        with pytest.raises(ValueError, match="unsigned"):
            U5(-1)

    def test_non_int_rejected(self) -> None:
        """Нецелые значения отклоняются"""
        with pytest.raises(TypeError):
            U5(1.0)
        with pytest.raises(TypeError):
            U5(True)

    def test_huge_raw_is_value_overflow(self) -> None:
        """Сообщение об ошибке строится и для значений в тысячи разрядов"""
        with pytest.raises(ValueOverflow, match="20001-bit integer") as exc_info:
            U3(1 << 20_000)
        assert exc_info.value.value == 1 << 20_000

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError, match="abstract"):
            BoundedUint(0)

    def test_with_value_valid(self) -> None:
        """with_value для валидного значения"""
        assert U3.with_value(7) == U3(7)
        assert U7.with_value(127).value == 127

    def test_with_value_is_fatal(self) -> None:
        """with_value вне диапазона — фатальная ошибка, не ValueError"""
        with pytest.raises(IntegerOverflowError) as exc_info:
            U3.with_value(8)

        assert not isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value.__cause__, ValueOverflow)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================


class TestConstants:
    """Тесты MIN / MAX / ONE / BITS"""

    @pytest.mark.parametrize("cls, bits", ALL_WIDTHS)
    def test_constants(self, cls, bits) -> None:
        assert cls.BITS == bits
        assert cls.MIN.value == 0
        assert cls.ONE.value == 1
        assert cls.MAX.value == (1 << bits) - 1

    def test_inner_primitive_width(self) -> None:
        """U2..U7 упакованы в 8 бит, U24 — в 32"""
        for cls in (U2, U3, U4, U5, U6, U7):
            assert cls.INNER_BITS == 8
        assert U24.INNER_BITS == 32

    def test_invalid_subclass_rejected(self) -> None:
        """Ширина больше примитива запрещена"""
        with pytest.raises(TypeError):

            class U9(BoundedUint):
                BITS = 9

    def test_max_values(self) -> None:
        assert int(U2.MAX) == 3
        assert int(U3.MAX) == 7
        assert int(U4.MAX) == 15
        assert int(U5.MAX) == 31
        assert int(U6.MAX) == 63
        assert int(U7.MAX) == 127
        assert int(U24.MAX) == (1 << 24) - 1


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметики с проверкой переполнения"""

    def test_decrement_scenario(self) -> None:
        """U3(7) - 1 == 6"""
        value = U3(0b111)
        value -= 1
        assert value == U3(6)

    @pytest.mark.parametrize("cls, bits", ALL_WIDTHS)
    def test_in_place_cycle(self, cls, bits) -> None:
        """MAX - 1, /2, *2, +1 возвращают MAX"""
        value = cls.MAX
        value -= 1
        assert value.value == (1 << bits) - 2

        value /= 2
        value *= 2
        value += 1
        assert value == cls.MAX
        assert value.value % 2 == 1

    def test_in_place_rebinds(self) -> None:
        """In-place оператор не мутирует разделяемое значение"""
        original = U4(5)
        alias = original
        alias += 1
        assert original == U4(5)
        assert alias == U4(6)

    def test_same_width_operands(self) -> None:
        assert U5(10) + U5(5) == U5(15)
        assert U5(10) - U5(5) == U5(5)
        assert U5(6) * U5(5) == U5(30)
        assert U5(17) // U5(5) == U5(3)
        assert U5(17) / U5(5) == U5(3)
        assert U5(17) % U5(5) == U5(2)
        assert U5(0b10110) & U5(0b01100) == U5(0b00100)
        assert U5(0b10110) | U5(0b01100) == U5(0b11110)
        assert U5(0b10110) ^ U5(0b01100) == U5(0b11010)
        assert U5(0b00011) << U5(3) == U5(0b11000)
        assert U5(0b11000) >> U5(3) == U5(0b00011)

    def test_primitive_operands(self) -> None:
        """Операнд — нативный примитив с любой стороны"""
        assert U6(10) + 5 == U6(15)
        assert 5 + U6(10) == U6(15)
        assert 20 - U6(5) == U6(15)
        assert 3 * U6(7) == U6(21)
        assert U24(1 << 20) << 3 == U24(1 << 23)

    def test_add_overflow_is_fatal(self) -> None:
        """Переполнение сложения — IntegerOverflowError"""
        with pytest.raises(IntegerOverflowError, match="add") as exc_info:
            U3.MAX + 1

        assert exc_info.value.max == 7
        assert exc_info.value.value == 8
        assert exc_info.value.operation == "add"

    def test_sub_underflow_is_fatal(self) -> None:
        """Уход ниже нуля — не заворачивается"""
        with pytest.raises(IntegerOverflowError, match="sub"):
            U3(0) - 1

    def test_mul_overflow_is_fatal(self) -> None:
        with pytest.raises(IntegerOverflowError):
            U7(64) * 2

    def test_shl_overflow_is_fatal(self) -> None:
        with pytest.raises(IntegerOverflowError):
            U2(2) << 1

    @pytest.mark.parametrize("shift", [24, 20_000, 0xFFFF_FFFF])
    def test_wide_shift_is_fatal(self, shift) -> None:
        """Сдвиг на >= BITS отклоняется без вычисления результата"""
        with pytest.raises(IntegerOverflowError, match="shl") as exc_info:
            U24(1) << shift

        assert exc_info.value.value is None
        assert exc_info.value.max == (1 << 24) - 1

    def test_reflected_wide_shift_is_fatal(self) -> None:
        with pytest.raises(IntegerOverflowError):
            1 << U24(20_000)

    def test_zero_shifted_any_distance(self) -> None:
        assert U24(0) << 0xFFFF_FFFF == U24(0)
        assert U24.MAX >> 0xFFFF_FFFF == U24(0)

    def test_huge_result_message_is_bounded(self) -> None:
        """Результат в тысячи разрядов описывается разрядностью"""
        with pytest.raises(IntegerOverflowError, match="20001-bit integer") as exc_info:
            U24.with_value(1 << 20_000)

        assert exc_info.value.value == 1 << 20_000
        assert isinstance(exc_info.value.__cause__, ValueOverflow)

    def test_overflow_not_caught_as_value_error(self) -> None:
        """Фатальное переполнение не перехватывается `except ValueError`"""
        with pytest.raises(IntegerOverflowError):
            try:
                U2.MAX + U2.ONE
            except ValueError:
                pytest.fail("arithmetic overflow must not be a ValueError")

    def test_division_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            U4(5) // 0
        with pytest.raises(ZeroDivisionError):
            U4(5) % U4(0)

    def test_mixed_widths_rejected(self) -> None:
        """Операнды разной ширины не смешиваются"""
        with pytest.raises(TypeError):
            U3(1) + U4(1)

    def test_primitive_out_of_range_rejected(self) -> None:
        """Операнд шире нативного примитива отклоняется"""
        with pytest.raises(ValueError):
            U3(1) + 256

    def test_result_type_preserved(self) -> None:
        assert type(U24(5) + 1) is U24
        assert type(1 + U2(1)) is U2


# =============================================================================
# ПАРСИНГ И ОТОБРАЖЕНИЕ
# =============================================================================


class TestStringParsing:
    """Тесты from_str / str"""

    def test_parse_valid(self) -> None:
        assert U5.from_str("31") == U5(31)
        assert U5.from_str("+7") == U5(7)
        assert U24.from_str("16777215") == U24.MAX

    def test_parse_out_of_range(self) -> None:
        with pytest.raises(ValueOverflow):
            U5.from_str("32")

    @pytest.mark.parametrize("text", ["", "-1", "abc", "1.5", " 3", "0x10", "1_0"])
    def test_parse_malformed(self, text) -> None:
        with pytest.raises(ValueError, match="invalid digit"):
            U5.from_str(text)

    def test_display(self) -> None:
        assert str(U7(100)) == "100"
        assert str(U24.MAX) == "16777215"


# =============================================================================
# СРАВНЕНИЕ И ХЕШИРОВАНИЕ
# =============================================================================


class TestOrdering:
    """Структурные сравнение и хеширование"""

    def test_ordering(self) -> None:
        assert U4(3) < U4(4)
        assert U4(4) <= U4(4)
        assert U4(5) > U4(4)
        assert max(U4(1), U4(9), U4(3)) == U4(9)

    def test_hash_matches_equality(self) -> None:
        assert hash(U6(12)) == hash(U6(12))
        assert len({U6(12), U6(12), U6(13)}) == 2

    def test_different_widths_not_equal(self) -> None:
        assert U3(1) != U4(1)

    def test_int_conversion(self) -> None:
        assert int(U6(42)) == 42
        assert U6(42).as_inner() == 42
        assert [10, 20, 30][U2(1)] == 20

    def test_immutable(self) -> None:
        value = U3(1)
        with pytest.raises(AttributeError):
            value.value = 2


# =============================================================================
# PYDANTIC
# =============================================================================


class ProtocolHeader(BaseModel):
    version: U3
    flags: U5
    length: U24


class TestPydanticIntegration:
    """Поля моделей pydantic"""

    def test_validate_from_ints(self) -> None:
        header = ProtocolHeader(version=7, flags=31, length=1024)
        assert header.version == U3(7)
        assert header.flags == U5(31)
        assert header.length == U24(1024)

    def test_accepts_instances(self) -> None:
        header = ProtocolHeader(version=U3(1), flags=U5(0), length=U24(0))
        assert header.version == U3(1)

    def test_overflow_is_validation_error(self) -> None:
        with pytest.raises(ValidationError, match="overflowing max value"):
            ProtocolHeader(version=8, flags=0, length=0)

    @pytest.mark.parametrize("raw", [True, 3.0, "3"])
    def test_non_int_rejected(self, raw) -> None:
        """Как и конструктор, поле не приводит bool/float/str к целому"""
        with pytest.raises(ValidationError):
            ProtocolHeader(version=raw, flags=0, length=0)
        with pytest.raises(ValidationError):
            TypeAdapter(U3).validate_python(raw)

    def test_dump_is_transparent(self) -> None:
        header = ProtocolHeader(version=2, flags=17, length=70000)
        assert header.model_dump() == {"version": 2, "flags": 17, "length": 70000}
        assert header.model_dump_json() == '{"version":2,"flags":17,"length":70000}'

    def test_json_roundtrip(self) -> None:
        header = ProtocolHeader(version=5, flags=9, length=123456)
        restored = ProtocolHeader.model_validate_json(header.model_dump_json())
        assert restored == header
