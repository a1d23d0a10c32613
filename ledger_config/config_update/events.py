"""
Events — audit-события протокола обновления конфигурации

Имя события update-config — внешний контракт для систем,
читающих события (схема: contracts/schema/update_config_event.json).

Внешняя форма: {"name": "update-config", "attributes": {"updates": "..."}}.
Внутри атрибуты хранятся упорядоченным списком пар key/value.
"""

from typing import Any, Final, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

UPDATE_CONFIG_EVENT: Final[str] = "update-config"


class Attribute(BaseModel):
    """Пара key/value события."""

    key: str = Field(..., min_length=1)
    value: str

    model_config = {"frozen": True}


class Event(BaseModel):
    """Событие с упорядоченным списком атрибутов."""

    name: str = Field(..., min_length=1, description="Имя события")
    attributes: list[Attribute] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("attributes", mode="before")
    @classmethod
    def attributes_from_mapping(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return [{"key": key, "value": value} for key, value in v.items()]
        return v

    @field_serializer("attributes")
    def attributes_as_mapping(self, attributes: list[Attribute]) -> dict[str, str]:
        return {attr.key: attr.value for attr in attributes}

    def add_attribute(self, key: str, value: str) -> "Event":
        return Event(
            name=self.name,
            attributes=[*self.attributes, Attribute(key=key, value=value)],
        )

    def attribute(self, key: str) -> Optional[str]:
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None
