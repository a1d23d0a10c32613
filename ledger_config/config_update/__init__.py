"""
Config Update — access-controlled, validate-before-commit обновление конфигурации.
"""

from .access import (
    ALLOW_ALL,
    OWNER_ONLY,
    AccessCheck,
    AllowAll,
    FunctionAccessCheck,
    OwnerOnly,
)
from .engine import (
    Checkable,
    ConfigUpdateEngine,
    ConfigUpdateResult,
    Uncheckable,
    update_config,
)
from .events import UPDATE_CONFIG_EVENT, Attribute, Event
from .updates import apply_updates, changed_fields, optional_model

__all__ = [
    # Access checks
    "ALLOW_ALL",
    "OWNER_ONLY",
    "AccessCheck",
    "AllowAll",
    "FunctionAccessCheck",
    "OwnerOnly",
    # Engine
    "Checkable",
    "ConfigUpdateEngine",
    "ConfigUpdateResult",
    "Uncheckable",
    "update_config",
    # Events
    "UPDATE_CONFIG_EVENT",
    "Attribute",
    "Event",
    # Updates
    "apply_updates",
    "changed_fields",
    "optional_model",
]
