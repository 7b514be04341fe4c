"""
Test suite for dicesim

Contains:
- tests/unit/          : Unit tests for individual modules
"""
