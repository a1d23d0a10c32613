"""Storage — singleton-слоты поверх key-value хранилища хоста."""

from .item import Item, MemoryStorage, Storage

__all__ = [
    "Item",
    "MemoryStorage",
    "Storage",
]
