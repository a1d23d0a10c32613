"""
Contract Validation Module

Модуль для валидации JSON контрактов ledger_config.
"""

from .validators import (
    ContractValidator,
    FeeConfigValidator,
    SchemaLoader,
    UpdateConfigEventValidator,
    validate_fee_config,
    validate_update_config_event,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FeeConfigValidator",
    "UpdateConfigEventValidator",
    # Functions
    "validate_fee_config",
    "validate_update_config_event",
]
