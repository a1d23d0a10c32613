"""
Env / MessageInfo — контекст выполнения транзакции

Env описывает контракт, выполняющий вызов (его собственный адрес нужен
для self-payment avoidance), MessageInfo — отправителя транзакции.
"""

from pydantic import BaseModel, Field

from .addresses import Addr


class Env(BaseModel):
    """Окружение вызова."""

    contract_address: Addr = Field(..., description="Адрес распределяющего контракта")

    model_config = {"frozen": True}


class MessageInfo(BaseModel):
    """Информация об отправителе транзакции."""

    sender: Addr = Field(..., description="Адрес отправителя")

    model_config = {"frozen": True}
