"""
Assets — модели балансов fungible-активов

- AssetInfo: идентификатор актива (native denom или адрес cw20-контракта)
- Asset: актив + неотрицательное количество
- AssetList: упорядоченный набор балансов, по одной записи на актив (BalanceSet)
- Coin / Coins: native-монеты; Coins отсортированы по denom, без нулей и дублей

Все модели immutable (frozen=True); операции возвращают новые экземпляры.
Порядок AssetList сохраняется и определяет порядок выходных инструкций.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, Field, model_validator

from ledger_config.core.errors import ConversionError
from ledger_config.core.math.decimal_math import UINT128_MAX, checked_sub


# =============================================================================
# ENUMS
# =============================================================================


class AssetKind(str, Enum):
    """Тип актива"""

    NATIVE = "native"
    CW20 = "cw20"


# =============================================================================
# ASSET INFO / ASSET
# =============================================================================


class AssetInfo(BaseModel):
    """Идентификатор актива."""

    kind: AssetKind = Field(..., description="Тип актива (native/cw20)")
    reference: str = Field(
        ..., min_length=1, description="Denom для native, адрес контракта для cw20"
    )

    model_config = {"frozen": True}

    @classmethod
    def native(cls, denom: str) -> "AssetInfo":
        return cls(kind=AssetKind.NATIVE, reference=denom)

    @classmethod
    def cw20(cls, contract_addr: str) -> "AssetInfo":
        return cls(kind=AssetKind.CW20, reference=contract_addr)

    @property
    def is_native(self) -> bool:
        return self.kind == AssetKind.NATIVE

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.reference}"


class Asset(BaseModel):
    """Баланс одного актива."""

    info: AssetInfo = Field(..., description="Идентификатор актива")
    amount: int = Field(..., ge=0, le=UINT128_MAX, description="Количество (Uint128)")

    model_config = {"frozen": True}

    @classmethod
    def native(cls, denom: str, amount: int) -> "Asset":
        return cls(info=AssetInfo.native(denom), amount=amount)

    @classmethod
    def cw20(cls, contract_addr: str, amount: int) -> "Asset":
        return cls(info=AssetInfo.cw20(contract_addr), amount=amount)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def with_amount(self, amount: int) -> "Asset":
        return Asset(info=self.info, amount=amount)

    def to_coin(self) -> "Coin":
        """
        Asset → Coin.

        Raises:
            ConversionError: Если актив не native
        """
        if not self.info.is_native:
            raise ConversionError(
                f"Failed to convert Asset {self} to Coin. Error: "
                f"cannot convert {self.info.kind.value} asset to native coin"
            )
        return Coin(denom=self.info.reference, amount=self.amount)

    def __str__(self) -> str:
        return f"{self.info}:{self.amount}"


# =============================================================================
# ASSET LIST
# =============================================================================


class AssetList(BaseModel):
    """
    Упорядоченный набор балансов (BalanceSet).

    Инвариант: не более одной записи на AssetInfo.
    """

    assets: list[Asset] = Field(default_factory=list, description="Балансы в порядке ввода")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_unique_infos(self) -> "AssetList":
        seen = set()
        for asset in self.assets:
            if asset.info in seen:
                raise ValueError(f"Duplicate asset in AssetList: {asset.info}")
            seen.add(asset.info)
        return self

    @classmethod
    def of(cls, assets: Iterable[Asset]) -> "AssetList":
        return cls(assets=list(assets))

    def __iter__(self) -> Iterator[Asset]:  # type: ignore[override]
        return iter(self.assets)

    def __len__(self) -> int:
        return len(self.assets)

    def __getitem__(self, index: int) -> Asset:
        return self.assets[index]

    def __str__(self) -> str:
        if not self.assets:
            return "[]"
        return ",".join(str(asset) for asset in self.assets)

    def find(self, info: AssetInfo) -> Optional[Asset]:
        for asset in self.assets:
            if asset.info == info:
                return asset
        return None

    def amount_of(self, info: AssetInfo) -> int:
        asset = self.find(info)
        return asset.amount if asset is not None else 0

    def non_zero(self) -> "AssetList":
        """Копия без нулевых записей."""
        return AssetList(assets=[asset for asset in self.assets if not asset.is_zero])

    def deduct_many(self, other: "AssetList") -> "AssetList":
        """
        Вычитание other по каждому активу, порядок self сохраняется.

        Записи, ставшие нулевыми, остаются в результате.

        Raises:
            FeeArithmeticError: Если вычитаемое больше баланса или актива нет в self
        """
        deductions = {asset.info: asset.amount for asset in other}
        result = []
        for asset in self.assets:
            amount = deductions.pop(asset.info, 0)
            result.append(
                asset.with_amount(checked_sub(asset.amount, amount, str(asset.info)))
            )
        for info, amount in deductions.items():
            # Вычитание актива, которого нет в наборе
            checked_sub(0, amount, str(info))
        return AssetList(assets=result)

    def to_coins(self) -> "Coins":
        """
        AssetList → Coins (только native активы, нули отбрасываются).

        Raises:
            ConversionError: Если в наборе есть не-native актив
        """
        return Coins.from_coins(asset.to_coin() for asset in self.assets)


# =============================================================================
# COINS
# =============================================================================


class Coin(BaseModel):
    """Native-монета."""

    denom: str = Field(..., min_length=1, description="Denom монеты")
    amount: int = Field(..., ge=0, le=UINT128_MAX, description="Количество (Uint128)")

    model_config = {"frozen": True}

    def to_asset(self) -> Asset:
        return Asset.native(self.denom, self.amount)

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class Coins(BaseModel):
    """
    Набор native-монет.

    Инварианты: отсортирован по denom, без дублей, без нулевых количеств.
    """

    coins: list[Coin] = Field(default_factory=list, description="Монеты, отсортированные по denom")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_normalized(self) -> "Coins":
        denoms = [coin.denom for coin in self.coins]
        if denoms != sorted(set(denoms)):
            raise ValueError("Coins must be sorted by denom without duplicates")
        if any(coin.amount == 0 for coin in self.coins):
            raise ValueError("Coins must not contain zero amounts")
        return self

    @classmethod
    def from_coins(cls, coins: Iterable[Coin]) -> "Coins":
        """
        Построение Coins из произвольного списка монет.

        Нулевые монеты пропускаются, результат сортируется по denom.

        Raises:
            ConversionError: Если denom встречается дважды
        """
        by_denom: dict[str, Coin] = {}
        for coin in coins:
            if coin.denom in by_denom:
                raise ConversionError(f"Duplicate denom in coins: {coin.denom}")
            by_denom[coin.denom] = coin
        return cls(
            coins=[
                by_denom[denom]
                for denom in sorted(by_denom)
                if by_denom[denom].amount != 0
            ]
        )

    def __iter__(self) -> Iterator[Coin]:  # type: ignore[override]
        return iter(self.coins)

    def __len__(self) -> int:
        return len(self.coins)

    def amount_of(self, denom: str) -> int:
        for coin in self.coins:
            if coin.denom == denom:
                return coin.amount
        return 0

    def to_asset_list(self) -> AssetList:
        return AssetList(assets=[coin.to_asset() for coin in self.coins])
