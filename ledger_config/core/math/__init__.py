"""
Core math modules для ledger_config

Точная fixed-point арифметика для расчёта комиссий.
"""

# Decimal Math
from ledger_config.core.math.decimal_math import (
    # Constants
    DECIMAL_FRACTIONAL,
    DECIMAL_PLACES,
    ONE,
    UINT128_MAX,
    ZERO,
    # Arithmetic
    checked_sub,
    decimal_sum,
    mul_floor,
    to_atomics,
    # Validation
    validate_amount,
)

__all__ = [
    "DECIMAL_FRACTIONAL",
    "DECIMAL_PLACES",
    "ONE",
    "UINT128_MAX",
    "ZERO",
    "checked_sub",
    "decimal_sum",
    "mul_floor",
    "to_atomics",
    "validate_amount",
]
