"""
JSON Schema Contract Validators

Модуль для валидации текстового представления больших целых согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (fixwidth/core/contracts/schema/):
- uint256.json  — 64 hex-символа
- uint512.json  — 128 hex-символов
- uint1024.json — 256 hex-символов
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются внутри пакета (package data) рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path = Path(__file__).parent / "schema"):
        self._schema_dir = schema_dir
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'uint256')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        try:
            self.validator.validate(data)
        except ValidationError as e:
            logger.debug("Rejected %s payload %r: %s", self.schema_name, data, e.message)
            raise

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class Uint256HexValidator(ContractValidator):
    """Валидатор hex-записи 256-битного целого."""

    def __init__(self):
        super().__init__("uint256")


class Uint512HexValidator(ContractValidator):
    """Валидатор hex-записи 512-битного целого."""

    def __init__(self):
        super().__init__("uint512")


class Uint1024HexValidator(ContractValidator):
    """Валидатор hex-записи 1024-битного целого."""

    def __init__(self):
        super().__init__("uint1024")


_VALIDATORS_BY_BITS = {
    256: Uint256HexValidator,
    512: Uint512HexValidator,
    1024: Uint1024HexValidator,
}


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def has_contract(bits: int) -> bool:
    """Есть ли JSON Schema контракт для заданной ширины."""
    return bits in _VALIDATORS_BY_BITS


def validator_for_bits(bits: int) -> ContractValidator:
    """
    Валидатор контракта для заданной ширины.

    Raises:
        KeyError: Если для ширины нет контракта
    """
    try:
        return _VALIDATORS_BY_BITS[bits]()
    except KeyError:
        raise KeyError(f"No hex contract for {bits}-bit integers") from None


def validate_uint_hex(data: Any, bits: int) -> None:
    """
    Валидация hex-записи целого заданной ширины.

    Raises:
        ValidationError: Если данные не соответствуют схеме
        KeyError: Если для ширины нет контракта
    """
    validator_for_bits(bits).validate(data)
