"""
Test suite for fixwidth

Contains:
- tests/unit/          : Unit tests for individual modules
"""
