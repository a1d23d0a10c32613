"""
Fee Config — конфигурация комиссии и её распределение между получателями.
"""

from .distribution import FeeDistributionEngine, FeeSplit, split_fees
from .fee_config import FeeConfig, FeeConfigUnchecked, FeeDecimal

__all__ = [
    "FeeConfig",
    "FeeConfigUnchecked",
    "FeeDecimal",
    "FeeDistributionEngine",
    "FeeSplit",
    "split_fees",
]
