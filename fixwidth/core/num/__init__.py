"""
Numeric value types.

Contains bounded narrow integers (U2..U7, U24) and fixed-width big integers
(U256, U512, U1024).
"""

from fixwidth.core.num.biguint import U256, U512, U1024, BigUint
from fixwidth.core.num.bounded import U2, U3, U4, U5, U6, U7, U24, BoundedUint

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
]
