"""
Core value types, word-level primitives, and serialization contracts.

This module contains the foundational building blocks that are independent
of any caller (code generators, protocol encoders, etc.).
"""
