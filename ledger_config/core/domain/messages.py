"""
Messages — инструкции перевода и их низкоуровневое представление

TransferInstruction — выходной артефакт распределения комиссии:
один получатель и его ненулевые суммы в порядке входного BalanceSet.

AssetTransfer — capability, превращающая инструкцию в сообщения леджера.
DefaultAssetTransfer строит по одному сообщению на актив:
- native → BankSend
- cw20 → Cw20Transfer
"""

from typing import Literal, Protocol, Union

from pydantic import BaseModel, Field

from .addresses import Addr
from .assets import AssetKind, AssetList, Coin


# =============================================================================
# TRANSFER INSTRUCTION
# =============================================================================


class TransferInstruction(BaseModel):
    """Перевод нескольких активов одному получателю."""

    recipient: Addr = Field(..., description="Получатель")
    assets: AssetList = Field(..., description="Ненулевые суммы по активам")

    model_config = {"frozen": True}

    @property
    def legs(self) -> list[tuple[str, int]]:
        """(denomination, amount) в порядке входного набора."""
        return [(str(asset.info), asset.amount) for asset in self.assets]


# =============================================================================
# LEDGER MESSAGES
# =============================================================================


class BankSend(BaseModel):
    """Перевод native-монет."""

    type: Literal["bank_send"] = "bank_send"
    to_address: str = Field(..., min_length=1)
    amount: list[Coin] = Field(..., min_length=1)

    model_config = {"frozen": True}


class Cw20Transfer(BaseModel):
    """Вызов transfer у cw20-контракта."""

    type: Literal["cw20_transfer"] = "cw20_transfer"
    contract_addr: str = Field(..., min_length=1)
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)

    model_config = {"frozen": True}


LedgerMsg = Union[BankSend, Cw20Transfer]


# =============================================================================
# ASSET TRANSFER CAPABILITY
# =============================================================================


class AssetTransfer(Protocol):
    """Построение сообщений леджера для инструкции перевода."""

    def transfer_msgs(self, instruction: TransferInstruction) -> list[LedgerMsg]:
        ...


class DefaultAssetTransfer:
    """По одному сообщению на каждый актив инструкции."""

    def transfer_msgs(self, instruction: TransferInstruction) -> list[LedgerMsg]:
        msgs: list[LedgerMsg] = []
        for asset in instruction.assets:
            if asset.info.kind == AssetKind.NATIVE:
                msgs.append(
                    BankSend(
                        to_address=str(instruction.recipient),
                        amount=[Coin(denom=asset.info.reference, amount=asset.amount)],
                    )
                )
            else:
                msgs.append(
                    Cw20Transfer(
                        contract_addr=asset.info.reference,
                        recipient=str(instruction.recipient),
                        amount=asset.amount,
                    )
                )
        return msgs
