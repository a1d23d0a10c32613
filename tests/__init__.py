"""
Test suite for ledger_config

Contains:
- tests/unit/          : Unit tests for individual modules
"""
