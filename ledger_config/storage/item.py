"""
Item — singleton-слот в key-value хранилище

Storage — capability хоста (байтовый key-value). Item[T] хранит ровно одно
значение pydantic-модели T под фиксированным ключом, сериализуя его в JSON.
Запись — перезапись всего значения целиком, частичных записей нет.
"""

import logging
from typing import Generic, Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from ledger_config.core.errors import NotFound, SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


# =============================================================================
# STORAGE
# =============================================================================


class Storage(Protocol):
    """Байтовое key-value хранилище хоста."""

    def get(self, key: bytes) -> Optional[bytes]:
        ...

    def set(self, key: bytes, value: bytes) -> None:
        ...


class MemoryStorage:
    """In-memory реализация Storage."""

    def __init__(self):
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        if not value:
            raise ValueError("Storage values must not be empty")
        self._data[key] = value


# =============================================================================
# ITEM
# =============================================================================


class Item(Generic[T]):
    """
    Singleton-значение типа T под ключом key.

    Args:
        key: Ключ слота
        model_type: Pydantic-модель значения
    """

    def __init__(self, key: str, model_type: type[T]):
        self.key = key
        self.model_type = model_type

    @property
    def storage_key(self) -> bytes:
        return self.key.encode("utf-8")

    def may_load(self, storage: Storage) -> Optional[T]:
        """
        Загрузка значения, None если слот пуст.

        Raises:
            SerializationError: Если сохранённые байты не разбираются в T
        """
        raw = storage.get(self.storage_key)
        if raw is None:
            return None
        try:
            return self.model_type.model_validate_json(raw)
        except ValidationError as e:
            raise SerializationError(
                f"Failed to parse {self.model_type.__name__} from key {self.key!r}: {e}"
            ) from e

    def load(self, storage: Storage) -> T:
        """
        Загрузка значения.

        Raises:
            NotFound: Если слот пуст
            SerializationError: Если сохранённые байты не разбираются в T
        """
        value = self.may_load(storage)
        if value is None:
            raise NotFound(self.key, self.model_type.__name__)
        return value

    def save(self, storage: Storage, value: T) -> None:
        """Перезапись слота значением value."""
        storage.set(self.storage_key, value.model_dump_json().encode("utf-8"))
        logger.debug("Saved %s under key %r", self.model_type.__name__, self.key)
