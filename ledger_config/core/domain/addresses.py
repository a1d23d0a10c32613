"""
Addresses — валидированные адреса и API валидации

Addr — строка, прошедшая валидацию через AddressApi.
Обратное преобразование Addr → str всегда без потерь.

MockApi реализует правила валидации, достаточные для тестов и
локальных хостов: длина, нормализация (lowercase), опциональный префикс.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ledger_config.core.errors import InvalidAddress


# =============================================================================
# ADDR
# =============================================================================


class Addr(str):
    """
    Валидированный адрес.

    Конструктор Addr(...) не проверяет строку (аналог Addr::unchecked);
    валидные адреса создаются только через AddressApi.addr_validate.
    """

    __slots__ = ()

    @classmethod
    def unchecked(cls, raw: str) -> "Addr":
        return cls(raw)

    def __repr__(self) -> str:
        return f"Addr({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


# =============================================================================
# ADDRESS API
# =============================================================================


class AddressApi(Protocol):
    """Capability валидации адресов, предоставляется хостом."""

    def addr_validate(self, raw: str) -> Addr:
        ...


@dataclass(frozen=True)
class AddressRules:
    """
    Правила валидации адресов для MockApi.

    - min_length / max_length: допустимая длина строки
    - prefix: обязательный префикс (например, 'osmo1'), None — без проверки
    - require_normalized: адрес должен совпадать со своей lowercase-формой
    """
    min_length: int = 3
    max_length: int = 90
    prefix: Optional[str] = None
    require_normalized: bool = True


class MockApi:
    """Реализация AddressApi на основе AddressRules."""

    def __init__(self, rules: Optional[AddressRules] = None):
        self.rules = rules or AddressRules()

    def addr_validate(self, raw: str) -> Addr:
        """
        Валидация строки в Addr.

        Raises:
            InvalidAddress: Если строка нарушает хотя бы одно правило
        """
        rules = self.rules
        if not isinstance(raw, str):
            raise InvalidAddress(str(raw), "address must be a string")
        if len(raw) < rules.min_length:
            raise InvalidAddress(
                raw, f"human address too short (must be >= {rules.min_length})"
            )
        if len(raw) > rules.max_length:
            raise InvalidAddress(
                raw, f"human address too long (must be <= {rules.max_length})"
            )
        if rules.require_normalized and raw != raw.lower():
            raise InvalidAddress(raw, "address not normalized")
        if raw != raw.strip():
            raise InvalidAddress(raw, "address contains surrounding whitespace")
        if rules.prefix is not None and not raw.startswith(rules.prefix):
            raise InvalidAddress(raw, f"expected prefix {rules.prefix!r}")
        return Addr(raw)
