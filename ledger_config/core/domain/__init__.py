"""
Domain models and value objects.

Contains fundamental domain entities like Addr, Asset, AssetList, Coins, Env
and transfer instructions.
"""

from ledger_config.core.domain.addresses import Addr, AddressApi, AddressRules, MockApi
from ledger_config.core.domain.assets import (
    Asset,
    AssetInfo,
    AssetKind,
    AssetList,
    Coin,
    Coins,
)
from ledger_config.core.domain.env import Env, MessageInfo
from ledger_config.core.domain.messages import (
    AssetTransfer,
    BankSend,
    Cw20Transfer,
    DefaultAssetTransfer,
    LedgerMsg,
    TransferInstruction,
)

__all__ = [
    # Addresses
    "Addr",
    "AddressApi",
    "AddressRules",
    "MockApi",
    # Assets
    "Asset",
    "AssetInfo",
    "AssetKind",
    "AssetList",
    "Coin",
    "Coins",
    # Env
    "Env",
    "MessageInfo",
    # Messages
    "AssetTransfer",
    "BankSend",
    "Cw20Transfer",
    "DefaultAssetTransfer",
    "LedgerMsg",
    "TransferInstruction",
]
