"""
Codec — JSON (де)сериализация целых fixwidth

Human-readable представление:
- BigUint    → JSON-строка из WORDS * 16 hex-символов (старший байт первым)
- BoundedUint → JSON-число

Сериализация идёт через pydantic TypeAdapter (те же core schema, что
используются в полях моделей). При десериализации BigUint нарушения
JSON Schema контракта ширины (если он есть) пишутся в debug-лог, а ошибку
формирует сам hex-декодер: HexDecodeError или ParseLengthError.
"""

import json
import logging
from typing import Any, Type, TypeVar, Union

from pydantic import TypeAdapter

from fixwidth.core.contracts import has_contract, validator_for_bits
from fixwidth.core.num.biguint import BigUint
from fixwidth.core.num.bounded import BoundedUint


logger = logging.getLogger(__name__)

FixedUint = Union[BigUint, BoundedUint]
T = TypeVar("T", BigUint, BoundedUint)


def _log_contract_violations(payload: Any, bits: int) -> None:
    for error in validator_for_bits(bits).iter_errors(payload):
        logger.debug("uint%d contract violation for %r: %s", bits, payload, error.message)


def dumps(value: FixedUint) -> str:
    """
    Кодирование значения в JSON-документ.

    Raises:
        TypeError: Если value не является целым fixwidth
    """
    if not isinstance(value, (BigUint, BoundedUint)):
        raise TypeError(f"expected a fixwidth integer, got {type(value).__name__}")
    return TypeAdapter(type(value)).dump_json(value).decode("utf-8")


def loads(text: Union[str, bytes], cls: Type[T]) -> T:
    """
    Декодирование JSON-документа в значение класса cls.

    Raises:
        json.JSONDecodeError: Если text не является JSON
        HexDecodeError: Если hex-строка содержит недопустимый символ или нечётна
        ParseLengthError: Если длина hex-строки не равна WORDS * 16
        ValueOverflow: Если число не помещается в BoundedUint
        TypeError: Если тип JSON-значения не подходит для cls
    """
    payload = json.loads(text)

    if issubclass(cls, BigUint):
        if has_contract(cls.BITS):
            _log_contract_violations(payload, cls.BITS)
        if not isinstance(payload, str):
            raise TypeError(f"{cls.__name__} expects a hex string, got {type(payload).__name__}")
        return cls.from_hex(payload)

    if issubclass(cls, BoundedUint):
        if isinstance(payload, bool) or not isinstance(payload, int):
            logger.debug("Rejected %s payload %r: not an integer", cls.__name__, payload)
            raise TypeError(f"{cls.__name__} expects a JSON integer, got {type(payload).__name__}")
        return cls.try_from(payload)

    raise TypeError(f"expected a fixwidth integer class, got {cls!r}")
