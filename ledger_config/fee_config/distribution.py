"""
FeeDistributionEngine — расчёт комиссии и распределение между получателями

Алгоритм split():
1. fee_rate == 0 → нет инструкций, остаток равен входу
2. fee = floor(amount * fee_rate) по каждому активу независимо
3. нулевые fee отбрасываются
4. remainder = вход - fee (underflow → FeeArithmeticError)
5. для каждого получателя в порядке списка:
   - получатель == адрес контракта → пропуск
   - leg = floor(fee * weight), нулевые legs отбрасываются
   - одна TransferInstruction, если остались legs
6. инструкции в порядке получателей, legs в порядке входных активов

Усечение на уровне получателей может оставить часть fee неотправленной:
сумма legs <= fee, остаток (dust) не перераспределяется и не возвращается
в remainder.

Движок не имеет изменяемого состояния и не обращается к хранилищу.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar, Union

from ledger_config.core.domain.assets import Asset, AssetList, Coin, Coins
from ledger_config.core.domain.env import Env
from ledger_config.core.domain.messages import (
    AssetTransfer,
    DefaultAssetTransfer,
    LedgerMsg,
    TransferInstruction,
)
from ledger_config.core.errors import ConversionError, TransferError
from ledger_config.core.math.decimal_math import mul_floor

from .fee_config import FeeConfig

logger = logging.getLogger(__name__)

R = TypeVar("R", AssetList, Asset, Coins, Coin)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class FeeSplit(Generic[R]):
    """Результат распределения комиссии."""

    # Инструкции переводов получателям (порядок получателей)
    instructions: list[TransferInstruction]

    # Балансы после удержания комиссии
    remainder: R

    # Удержанная комиссия по активам (без нулевых)
    fees: AssetList

    # Сообщения леджера, построенные через AssetTransfer
    messages: list[LedgerMsg] = field(default_factory=list)

    @property
    def distributed(self) -> AssetList:
        """Фактически отправленные суммы по активам (<= fees)."""
        totals: dict = {}
        for instruction in self.instructions:
            for asset in instruction.assets:
                totals[asset.info] = totals.get(asset.info, 0) + asset.amount
        return AssetList(
            assets=[
                Asset(info=fee.info, amount=totals[fee.info])
                for fee in self.fees
                if fee.info in totals
            ]
        )


# =============================================================================
# ENGINE
# =============================================================================


class FeeDistributionEngine:
    """
    Распределение комиссии по взвешенным получателям.

    Args:
        transfer: Построение сообщений леджера из инструкций
    """

    def __init__(self, transfer: Optional[AssetTransfer] = None):
        self.transfer = transfer or DefaultAssetTransfer()

    # -------------------------------------------------------------------------
    # Инструкции получателям
    # -------------------------------------------------------------------------

    def transfer_instructions(
        self, fee_config: FeeConfig, fees: AssetList, env: Env
    ) -> list[TransferInstruction]:
        """
        Инструкции переводов уже удержанной комиссии fees получателям.

        Args:
            fee_config: Провалидированная конфигурация комиссии
            fees: Удержанная комиссия по активам
            env: Окружение (адрес контракта для self-payment avoidance)

        Returns:
            По одной инструкции на получателя с ненулевыми legs
        """
        if fee_config.is_zero:
            return []

        instructions = []
        for recipient, weight in fee_config.fee_recipients:
            # Переводить комиссию самому контракту бессмысленно
            if recipient == env.contract_address:
                continue
            legs = AssetList(
                assets=[
                    fee.with_amount(mul_floor(fee.amount, weight)) for fee in fees
                ]
            ).non_zero()
            if len(legs) == 0:
                continue
            instructions.append(TransferInstruction(recipient=recipient, assets=legs))
        return instructions

    def build_messages(self, instructions: list[TransferInstruction]) -> list[LedgerMsg]:
        """
        Сообщения леджера для инструкций.

        Raises:
            TransferError: Если AssetTransfer не смог построить сообщения
        """
        msgs: list[LedgerMsg] = []
        for instruction in instructions:
            try:
                msgs.extend(self.transfer.transfer_msgs(instruction))
            except Exception as e:
                raise TransferError(
                    f"Failed to create transfer messages for AssetList "
                    f"{instruction.assets}. Error: {e}"
                ) from e
        return msgs

    # -------------------------------------------------------------------------
    # Распределение
    # -------------------------------------------------------------------------

    def split(self, fee_config: FeeConfig, assets: AssetList, env: Env) -> FeeSplit[AssetList]:
        """
        Удержание комиссии из набора балансов и распределение получателям.

        Args:
            fee_config: Провалидированная конфигурация комиссии
            assets: Входные балансы
            env: Окружение вызова

        Returns:
            FeeSplit с инструкциями, сообщениями и остатком (AssetList)

        Raises:
            FeeArithmeticError: Underflow при вычитании комиссии
            TransferError: Ошибка построения сообщений
        """
        fees = AssetList(
            assets=[
                asset.with_amount(mul_floor(asset.amount, fee_config.fee_rate))
                for asset in assets
            ]
        ).non_zero()

        remainder = assets.deduct_many(fees)
        instructions = self.transfer_instructions(fee_config, fees, env)
        messages = self.build_messages(instructions)

        logger.debug(
            "Fee split: rate=%s input=[%s] fees=[%s] remainder=[%s] instructions=%d",
            fee_config.fee_rate,
            assets,
            fees,
            remainder,
            len(instructions),
        )

        return FeeSplit(
            instructions=instructions,
            remainder=remainder,
            fees=fees,
            messages=messages,
        )

    def split_asset(self, fee_config: FeeConfig, asset: Asset, env: Env) -> FeeSplit[Asset]:
        """Распределение комиссии для одного актива; остаток — Asset."""
        result = self.split(fee_config, AssetList(assets=[asset]), env)
        return FeeSplit(
            instructions=result.instructions,
            remainder=result.remainder[0],
            fees=result.fees,
            messages=result.messages,
        )

    def split_coins(self, fee_config: FeeConfig, coins: Coins, env: Env) -> FeeSplit[Coins]:
        """
        Распределение комиссии для native-монет; остаток — Coins.

        Raises:
            ConversionError: Если остаток не представим как Coins
        """
        result = self.split(fee_config, coins.to_asset_list(), env)
        try:
            remainder = result.remainder.to_coins()
        except ConversionError:
            raise
        except ValueError as e:
            raise ConversionError(
                f"Failed to convert AssetList {result.remainder} to Coins. Error: {e}"
            ) from e
        return FeeSplit(
            instructions=result.instructions,
            remainder=remainder,
            fees=result.fees,
            messages=result.messages,
        )

    def split_coin(self, fee_config: FeeConfig, coin: Coin, env: Env) -> FeeSplit[Coin]:
        """Распределение комиссии для одной монеты; остаток — Coin (может быть нулевым)."""
        result = self.split_coins(fee_config, Coins.from_coins([coin]), env)
        return FeeSplit(
            instructions=result.instructions,
            remainder=Coin(denom=coin.denom, amount=result.remainder.amount_of(coin.denom)),
            fees=result.fees,
            messages=result.messages,
        )


def split_fees(
    fee_config: FeeConfig,
    balances: Union[AssetList, Coins],
    env: Env,
) -> FeeSplit:
    """Распределение комиссии движком по умолчанию (AssetList или Coins)."""
    engine = FeeDistributionEngine()
    if isinstance(balances, Coins):
        return engine.split_coins(fee_config, balances, env)
    return engine.split(fee_config, balances, env)
