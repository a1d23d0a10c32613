"""
Ownable — слот владельца и проверка отправителя

Используется как источник авторизации для update_config (OwnerOnly).
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from ledger_config.core.domain.addresses import Addr, AddressApi
from ledger_config.core.errors import NoOwner, NotOwner
from ledger_config.storage import Item, Storage

logger = logging.getLogger(__name__)


class Ownership(BaseModel):
    """Текущий владелец (None — владение отозвано)."""

    owner: Optional[Addr] = Field(None, description="Адрес владельца")

    model_config = {"frozen": True}


OWNERSHIP: Item[Ownership] = Item("ownership", Ownership)


def initialize_owner(
    storage: Storage, api: AddressApi, owner: Optional[str]
) -> Ownership:
    """
    Запись владельца при инициализации.

    Raises:
        InvalidAddress: Если адрес владельца не проходит валидацию
    """
    ownership = Ownership(owner=api.addr_validate(owner) if owner is not None else None)
    OWNERSHIP.save(storage, ownership)
    logger.info("Ownership initialized: owner=%s", ownership.owner)
    return ownership


def get_ownership(storage: Storage) -> Ownership:
    """Текущее владение; неинициализированный слот трактуется как отсутствие владельца."""
    return OWNERSHIP.may_load(storage) or Ownership()


def assert_owner(storage: Storage, sender: Addr) -> None:
    """
    Проверка, что sender — текущий владелец.

    Raises:
        NoOwner: Если владельца нет
        NotOwner: Если sender не владелец
    """
    ownership = get_ownership(storage)
    if ownership.owner is None:
        raise NoOwner()
    if sender != ownership.owner:
        raise NotOwner(str(sender))
