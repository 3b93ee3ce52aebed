"""
fixwidth — fixed-width unsigned integers.

- Bounded narrow integers U2..U7 and U24 with overflow-checked construction
- Fixed-width big integers U256, U512, U1024 with wraparound arithmetic
"""

from fixwidth.core.codec import dumps, loads
from fixwidth.core.errors import (
    HexDecodeError,
    IntegerOverflowError,
    ParseLengthError,
    ValueOverflow,
)
from fixwidth.core.math.word_ops import Endianness
from fixwidth.core.num import (
    U2,
    U3,
    U4,
    U5,
    U6,
    U7,
    U24,
    U256,
    U512,
    U1024,
    BigUint,
    BoundedUint,
)

__version__ = "0.1.0"

__all__ = [
    # Bounded narrow integers
    "BoundedUint",
    "U2",
    "U3",
    "U4",
    "U5",
    "U6",
    "U7",
    "U24",
    # Fixed-width big integers
    "BigUint",
    "U256",
    "U512",
    "U1024",
    # Errors
    "ValueOverflow",
    "ParseLengthError",
    "HexDecodeError",
    "IntegerOverflowError",
    # Serialization
    "Endianness",
    "dumps",
    "loads",
]
