"""Ownership — владелец контракта и проверка отправителя."""

from .ownable import OWNERSHIP, Ownership, assert_owner, get_ownership, initialize_owner

__all__ = [
    "OWNERSHIP",
    "Ownership",
    "assert_owner",
    "get_ownership",
    "initialize_owner",
]
