"""
ConfigUpdateEngine — validate-before-commit обновление конфигурации

Порядок:
1. Access check отправителя → Unauthorized при любой ошибке
2. Загрузка текущей конфигурации → StorageError пробрасывается как есть
3. Конфигурация → черновик (to_unchecked)
4. Применение набора обновлений к черновику
5. Валидация черновика (check) → InvalidConfig, ничего не сохраняется
6. Перезапись слота
7. Audit event update-config с repr набора обновлений

Движок не блокирует слот: хост обязан сериализовать транзакции.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel

from ledger_config.core.domain.addresses import AddressApi
from ledger_config.core.domain.env import MessageInfo
from ledger_config.core.errors import InvalidConfig, Unauthorized
from ledger_config.storage import Item, Storage

from .access import ALLOW_ALL, AccessCheck
from .events import UPDATE_CONFIG_EVENT, Event
from .updates import apply_updates

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


# =============================================================================
# CONVERSION PROTOCOLS
# =============================================================================


class Checkable(Protocol[T]):
    """Черновик, который валидируется в конфигурацию T."""

    def check(self, api: AddressApi) -> T:
        ...


class Uncheckable(Protocol):
    """Конфигурация, которая преобразуется в черновик без потерь."""

    def to_unchecked(self) -> BaseModel:
        ...


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ConfigUpdateResult(Generic[T]):
    """Результат успешного обновления."""

    config: T
    event: Event


# =============================================================================
# ENGINE
# =============================================================================


class ConfigUpdateEngine:
    """
    Протокол обновления одного singleton-слота конфигурации.

    Args:
        api: Валидация адресов при проверке черновика
        event_name: Имя audit-события (по умолчанию update-config)
    """

    def __init__(self, api: AddressApi, event_name: str = UPDATE_CONFIG_EVENT):
        self.api = api
        self.event_name = event_name

    def update(
        self,
        storage: Storage,
        info: MessageInfo,
        item: Item[T],
        updates: BaseModel,
        access_check: AccessCheck = ALLOW_ALL,
    ) -> ConfigUpdateResult[T]:
        """
        Применение updates к конфигурации в item.

        Args:
            storage: Хранилище хоста
            info: Отправитель транзакции
            item: Слот конфигурации
            updates: Набор обновлений (модель из optional_model)
            access_check: Авторизация отправителя

        Returns:
            ConfigUpdateResult с новой конфигурацией и audit-событием

        Raises:
            Unauthorized: access_check отклонил отправителя
            StorageError: Слот пуст или не читается
            InvalidConfig: Итоговая конфигурация невалидна
        """
        try:
            access_check.check(storage, info.sender)
        except Exception as e:
            logger.warning(
                "Config update rejected for %s: %s", info.sender, e
            )
            raise Unauthorized(str(info.sender)) from e

        event = Event(name=self.event_name).add_attribute("updates", repr(updates))

        config: Uncheckable = item.load(storage)
        draft: Checkable[T] = config.to_unchecked()

        try:
            draft = apply_updates(draft, updates)
            new_config = draft.check(self.api)
        except ValueError as e:
            logger.warning("Config update for %r failed validation: %s", item.key, e)
            raise InvalidConfig(str(e)) from e

        item.save(storage, new_config)
        logger.info("Config %r updated by %s: %r", item.key, info.sender, updates)

        return ConfigUpdateResult(config=new_config, event=event)


def update_config(
    storage: Storage,
    api: AddressApi,
    info: MessageInfo,
    item: Item[T],
    updates: BaseModel,
    access_check: AccessCheck = ALLOW_ALL,
) -> ConfigUpdateResult[T]:
    """Функциональная форма ConfigUpdateEngine(api).update(...)."""
    return ConfigUpdateEngine(api).update(storage, info, item, updates, access_check)
