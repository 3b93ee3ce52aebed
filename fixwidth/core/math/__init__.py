"""
Core math modules для fixwidth

Примитивы над 64-битными словами с явной беззнаковой семантикой.
"""

# Word Ops
from fixwidth.core.math.word_ops import (
    # Constants
    HALF_WORD_BITS,
    HALF_WORD_MASK,
    HEX_DIGITS_PER_WORD,
    U128_MAX,
    U64_MAX,
    WORD_BITS,
    WORD_BYTES,
    WORD_MASK,
    # Types
    Endianness,
    # Word arithmetic
    leading_zeros,
    shl_word,
    split_word,
    trailing_zeros,
    wrapping_add,
    wrapping_not,
    # Validation
    validate_shift,
    validate_unsigned,
    validate_word,
)

__all__ = [
    # Word Ops — Constants
    "HALF_WORD_BITS",
    "HALF_WORD_MASK",
    "HEX_DIGITS_PER_WORD",
    "U128_MAX",
    "U64_MAX",
    "WORD_BITS",
    "WORD_BYTES",
    "WORD_MASK",
    # Word Ops — Types
    "Endianness",
    # Word Ops — Word arithmetic
    "leading_zeros",
    "shl_word",
    "split_word",
    "trailing_zeros",
    "wrapping_add",
    "wrapping_not",
    # Word Ops — Validation
    "validate_shift",
    "validate_unsigned",
    "validate_word",
]
