"""
Errors — иерархия исключений ledger_config

Категории ошибок:
- authorization: вызывающий не допущен к изменению (Unauthorized)
- validation: итоговое значение нарушает инварианты (ConfigValidationError и наследники)
- storage/propagated: ошибки хранилища и transfer-коллабораторов, пробрасываются как есть
- arithmetic: нарушение денежных инвариантов (FeeArithmeticError), никогда не clamp

Ни одна ошибка не ретраится внутри библиотеки.
"""


class LedgerConfigError(Exception):
    """Базовое исключение пакета."""


# =============================================================================
# CONFIG UPDATE
# =============================================================================


class ConfigError(LedgerConfigError):
    """Ошибка протокола обновления конфигурации."""


class Unauthorized(ConfigError):
    """Access check не пропустил отправителя."""

    def __init__(self, sender: str | None = None) -> None:
        self.sender = sender
        super().__init__("Unauthorized")


class InvalidConfig(ConfigError):
    """Конфигурация после применения обновлений не прошла валидацию."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid config: {reason}")


class StorageError(ConfigError):
    """Ошибка singleton-хранилища."""


class NotFound(StorageError):
    """Значение отсутствует в слоте."""

    def __init__(self, key: str, type_name: str) -> None:
        self.key = key
        self.type_name = type_name
        super().__init__(f"{type_name} not found (key: {key!r})")


class SerializationError(StorageError):
    """Сохранённые байты не удалось разобрать в модель."""


# =============================================================================
# VALIDATION
# =============================================================================


class ConfigValidationError(LedgerConfigError, ValueError):
    """Значение нарушает свои инварианты."""


class InvalidFeeRate(ConfigValidationError):
    pass


class InvalidRecipientWeights(ConfigValidationError):
    pass


class InvalidAddress(ConfigValidationError):
    def __init__(self, address: str, reason: str) -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid address {address!r}: {reason}")


class InvalidDecimal(ConfigValidationError):
    pass


# =============================================================================
# OWNERSHIP
# =============================================================================


class OwnershipError(LedgerConfigError):
    """Ошибка проверки владельца."""


class NoOwner(OwnershipError):
    def __init__(self) -> None:
        super().__init__("Contract ownership has been renounced")


class NotOwner(OwnershipError):
    def __init__(self, sender: str) -> None:
        self.sender = sender
        super().__init__("Caller is not the contract's current owner")


# =============================================================================
# FEES
# =============================================================================


class FeeArithmeticError(LedgerConfigError, ArithmeticError):
    """Underflow при вычитании комиссии. Дефект, а не ошибка пользователя."""

    def __init__(self, minuend: int, subtrahend: int, denom: str) -> None:
        self.minuend = minuend
        self.subtrahend = subtrahend
        self.denom = denom
        super().__init__(
            f"Cannot subtract {subtrahend} from {minuend} ({denom}): underflow"
        )


class ConversionError(LedgerConfigError, ValueError):
    """Asset не может быть представлен как native Coin (или наоборот)."""


class TransferError(LedgerConfigError):
    """Transfer-коллаборатор не смог построить сообщения."""
