"""
FeeConfig — конфигурация комиссии (ставка и взвешенные получатели)

Две формы одной схемы:
- FeeConfigUnchecked: адреса — сырые строки (черновик, входящие сообщения)
- FeeConfig: адреса провалидированы (Addr)

FeeConfigUnchecked.check() → FeeConfig, FeeConfig.to_unchecked() → FeeConfigUnchecked
(без потерь). Для валидного FeeConfig: to_unchecked().check(api) == исходный.

Правила check() (в этом порядке):
1. fee_rate <= 1
2. fee_rate != 0 → сумма весов получателей ровно 1
3. каждый вес > 0
4. каждый адрес проходит api.addr_validate
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, Field

from ledger_config.core.contracts import validate_fee_config
from ledger_config.core.domain.addresses import Addr, AddressApi
from ledger_config.core.errors import InvalidFeeRate, InvalidRecipientWeights
from ledger_config.core.math.decimal_math import DECIMAL_PLACES, ONE, decimal_sum

# Неотрицательный Decimal с точностью on-chain Decimal (ставка и веса)
FeeDecimal = Annotated[Decimal, Field(ge=0, decimal_places=DECIMAL_PLACES)]


class FeeConfigUnchecked(BaseModel):
    """
    Непроверенная конфигурация комиссии.

    Invariants проверяются в check(), не в конструкторе.
    """

    fee_rate: FeeDecimal = Field(
        Decimal(0), description="Доля токенов, удерживаемая как комиссия"
    )
    fee_recipients: list[tuple[str, FeeDecimal]] = Field(
        default_factory=list,
        description="Адреса получателей и их доли комиссии (сумма долей = 1)",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_message(cls, data: dict[str, Any]) -> "FeeConfigUnchecked":
        """
        Построение из JSON-сообщения.

        Raises:
            jsonschema.ValidationError: Если сообщение нарушает контракт fee_config
        """
        validate_fee_config(data)
        return cls.model_validate(data)

    def check(self, api: AddressApi) -> "FeeConfig":
        """
        Валидация в FeeConfig.

        Raises:
            InvalidFeeRate: fee_rate > 1
            InvalidRecipientWeights: сумма весов != 1 при ненулевой ставке или нулевой вес
            InvalidAddress: адрес получателя невалиден
        """
        # Ставка не может превышать 100%
        if self.fee_rate > ONE:
            raise InvalidFeeRate("Fee rate can't be higher than 100%")
        # При ненулевой ставке веса получателей должны давать ровно 100%
        if self.fee_rate != 0 and decimal_sum(w for _, w in self.fee_recipients) != ONE:
            raise InvalidRecipientWeights("Sum of fee recipient percentages must be 100%")
        if any(weight == 0 for _, weight in self.fee_recipients):
            raise InvalidRecipientWeights(
                "Fee recipient percentages must be greater than zero"
            )
        return FeeConfig(
            fee_rate=self.fee_rate,
            fee_recipients=[
                (api.addr_validate(addr), weight) for addr, weight in self.fee_recipients
            ],
        )


class FeeConfig(BaseModel):
    """Провалидированная конфигурация комиссии."""

    fee_rate: FeeDecimal = Field(
        Decimal(0), description="Доля токенов, удерживаемая как комиссия"
    )
    fee_recipients: list[tuple[Addr, FeeDecimal]] = Field(
        default_factory=list,
        description="Провалидированные адреса получателей и их доли комиссии",
    )

    model_config = {"frozen": True}

    @property
    def is_zero(self) -> bool:
        return self.fee_rate == 0

    def to_unchecked(self) -> FeeConfigUnchecked:
        return FeeConfigUnchecked(
            fee_rate=self.fee_rate,
            fee_recipients=[(str(addr), weight) for addr, weight in self.fee_recipients],
        )
