"""
Updates — разреженные наборы обновлений для черновиков конфигурации

optional_model(Draft) строит модель с тем же набором полей, где каждое поле
опционально и по умолчанию None. None означает "оставить без изменений".
apply_updates — чистая функция слияния: новый черновик, исходный не меняется.
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, create_model

D = TypeVar("D", bound=BaseModel)


def optional_model(model_type: type[BaseModel], name: Optional[str] = None) -> type[BaseModel]:
    """
    Модель обновлений для model_type: по одному опциональному слоту на поле.

    Args:
        model_type: Модель черновика конфигурации
        name: Имя класса (по умолчанию '<Model>Updates')
    """
    fields: dict[str, Any] = {
        field_name: (Optional[field.annotation], None)
        for field_name, field in model_type.model_fields.items()
    }
    return create_model(
        name or f"{model_type.__name__}Updates",
        __config__=ConfigDict(frozen=True, extra="forbid"),
        **fields,
    )


def changed_fields(updates: BaseModel) -> dict[str, Any]:
    """Заданные (не None) слоты набора обновлений."""
    return {
        field_name: getattr(updates, field_name)
        for field_name in type(updates).model_fields
        if getattr(updates, field_name) is not None
    }


def apply_updates(draft: D, updates: BaseModel) -> D:
    """
    Применение обновлений к черновику.

    Результат заново проходит валидацию типов модели черновика.

    Raises:
        ValueError: Если набор обновлений содержит поле, которого нет в черновике
        pydantic.ValidationError: Если итоговый черновик не проходит валидацию типов
    """
    changes = changed_fields(updates)
    unknown = set(changes) - set(type(draft).model_fields)
    if unknown:
        raise ValueError(f"Unknown config fields in updates: {sorted(unknown)}")
    if not changes:
        return draft
    return type(draft).model_validate({**draft.model_dump(), **changes})
