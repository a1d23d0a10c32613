"""
Access checks — авторизация отправителя перед обновлением конфигурации

Вариант "без проверки" — явный объект AllowAll, а не None.
Любое исключение из check() трактуется движком как Unauthorized.
"""

from typing import Callable, Optional, Protocol

from ledger_config.core.domain.addresses import Addr
from ledger_config.ownership import assert_owner
from ledger_config.storage import Storage


class AccessCheck(Protocol):
    """Проверка допуска отправителя; при отказе бросает исключение."""

    def check(self, storage: Storage, sender: Addr) -> None:
        ...


class AllowAll:
    """Допускает любого отправителя."""

    def check(self, storage: Storage, sender: Addr) -> None:
        return None

    def __repr__(self) -> str:
        return "AllowAll()"


class OwnerOnly:
    """Допускает только текущего владельца (ledger_config.ownership)."""

    def check(self, storage: Storage, sender: Addr) -> None:
        assert_owner(storage, sender)

    def __repr__(self) -> str:
        return "OwnerOnly()"


class FunctionAccessCheck:
    """
    Адаптер для функции (storage, sender).

    Функция может бросить исключение либо вернуть bool-предикат.
    Допуск только при None или True, любой другой результат = отказ.
    """

    def __init__(self, func: Callable[[Storage, Addr], Optional[bool]]):
        self.func = func

    def check(self, storage: Storage, sender: Addr) -> None:
        allowed = self.func(storage, sender)
        if allowed is not None and allowed is not True:
            raise PermissionError(f"Access denied for {sender}")

    def __repr__(self) -> str:
        return f"FunctionAccessCheck({getattr(self.func, '__name__', self.func)!r})"


ALLOW_ALL = AllowAll()
OWNER_ONLY = OwnerOnly()
