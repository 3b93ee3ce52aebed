"""
Contract Validation Module

Модуль для валидации JSON контрактов текстового представления целых fixwidth.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    Uint256HexValidator,
    Uint512HexValidator,
    Uint1024HexValidator,
    has_contract,
    validate_uint_hex,
    validator_for_bits,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "Uint256HexValidator",
    "Uint512HexValidator",
    "Uint1024HexValidator",
    # Functions
    "has_contract",
    "validator_for_bits",
    "validate_uint_hex",
]
