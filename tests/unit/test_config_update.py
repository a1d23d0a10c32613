"""
Тесты для ConfigUpdateEngine

Coverage:
- Access control (OwnerOnly, AllowAll, произвольные проверки)
- Validate-before-commit: при ошибке слот не меняется
- Пустой набор обновлений — no-op (байты слота идентичны)
- Audit event update-config
- Обновление FeeConfig через тот же протокол
- optional_model / apply_updates
"""

from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from ledger_config.config_update import (
    ALLOW_ALL,
    OWNER_ONLY,
    UPDATE_CONFIG_EVENT,
    ConfigUpdateEngine,
    FunctionAccessCheck,
    apply_updates,
    changed_fields,
    optional_model,
    update_config,
)
from ledger_config.core.contracts import validate_update_config_event
from ledger_config.core.domain import Addr, AddressApi, MessageInfo, MockApi
from ledger_config.core.errors import (
    InvalidAddress,
    InvalidConfig,
    NoOwner,
    NotFound,
    NotOwner,
    StorageError,
    Unauthorized,
)
from ledger_config.fee_config import FeeConfig, FeeConfigUnchecked
from ledger_config.ownership import assert_owner, initialize_owner
from ledger_config.storage import Item, MemoryStorage


# =============================================================================
# EXAMPLE CONFIG SCHEMA
# =============================================================================


class ExampleConfigUnchecked(BaseModel):
    example_addr: str

    model_config = {"frozen": True}

    def check(self, api: AddressApi) -> "ExampleConfig":
        return ExampleConfig(example_addr=api.addr_validate(self.example_addr))


class ExampleConfig(BaseModel):
    example_addr: Addr

    model_config = {"frozen": True}

    def to_unchecked(self) -> ExampleConfigUnchecked:
        return ExampleConfigUnchecked(example_addr=str(self.example_addr))


ExampleConfigUpdates = optional_model(ExampleConfigUnchecked, "ExampleConfigUpdates")
FeeConfigUpdates = optional_model(FeeConfigUnchecked)

CONFIG: Item[ExampleConfig] = Item("config", ExampleConfig)
FEE_CONFIG: Item[FeeConfig] = Item("fee_config", FeeConfig)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def api() -> MockApi:
    return MockApi()


@pytest.fixture
def storage(api: MockApi) -> MemoryStorage:
    """Хранилище с владельцем 'owner' и исходной конфигурацией"""
    storage = MemoryStorage()
    initialize_owner(storage, api, "owner")
    CONFIG.save(storage, ExampleConfig(example_addr=Addr("example")))
    return storage


@pytest.fixture
def engine(api: MockApi) -> ConfigUpdateEngine:
    return ConfigUpdateEngine(api)


def info(sender: str) -> MessageInfo:
    return MessageInfo(sender=Addr(sender))


def raw_config(storage: MemoryStorage, item: Item = CONFIG) -> bytes:
    return storage.get(item.storage_key)


# =============================================================================
# ACCESS CONTROL
# =============================================================================


class TestAccessControl:
    """Тесты авторизации"""

    def test_non_owner_rejected(self, engine, storage) -> None:
        before = raw_config(storage)
        updates = ExampleConfigUpdates(example_addr="example2")

        with pytest.raises(Unauthorized) as exc_info:
            engine.update(storage, info("sender"), CONFIG, updates, OWNER_ONLY)

        assert isinstance(exc_info.value.__cause__, NotOwner)
        assert exc_info.value.sender == "sender"
        assert str(exc_info.value) == "Unauthorized"
        assert raw_config(storage) == before

    def test_owner_allowed(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("owner"), CONFIG, updates, OWNER_ONLY)

        assert result.config == ExampleConfig(example_addr=Addr("example2"))
        assert CONFIG.load(storage).example_addr == "example2"

    def test_no_check_allows_any_sender(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("anyone"), CONFIG, updates)
        assert result.config.example_addr == "example2"

    def test_explicit_allow_all(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example3")
        engine.update(storage, info("anyone"), CONFIG, updates, ALLOW_ALL)
        assert CONFIG.load(storage).example_addr == "example3"

    def test_custom_check_error_mapped_to_unauthorized(self, engine, storage) -> None:
        class Blocked(Exception):
            pass

        def deny_all(storage, sender):
            raise Blocked(f"{sender} is blocked")

        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(Unauthorized) as exc_info:
            engine.update(
                storage, info("owner"), CONFIG, updates, FunctionAccessCheck(deny_all)
            )
        assert isinstance(exc_info.value.__cause__, Blocked)

    def test_custom_check_receives_sender(self, engine, storage) -> None:
        seen = []

        def record(storage, sender):
            seen.append(sender)

        updates = ExampleConfigUpdates(example_addr="example2")
        engine.update(storage, info("alice"), CONFIG, updates, FunctionAccessCheck(record))
        assert seen == ["alice"]

    def test_predicate_returning_false_rejected(self, engine, storage) -> None:
        before = raw_config(storage)
        only_owner = FunctionAccessCheck(lambda storage, sender: sender == "owner")
        updates = ExampleConfigUpdates(example_addr="hijacked")

        with pytest.raises(Unauthorized) as exc_info:
            engine.update(storage, info("mallory"), CONFIG, updates, only_owner)

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert raw_config(storage) == before
        assert CONFIG.load(storage).example_addr == "example"

    def test_predicate_returning_true_allowed(self, engine, storage) -> None:
        only_owner = FunctionAccessCheck(lambda storage, sender: sender == "owner")
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("owner"), CONFIG, updates, only_owner)
        assert result.config.example_addr == "example2"

    def test_non_bool_predicate_result_rejected(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(Unauthorized):
            engine.update(
                storage,
                info("owner"),
                CONFIG,
                updates,
                FunctionAccessCheck(lambda storage, sender: 0),
            )

    def test_authorization_checked_before_load(self, engine, api) -> None:
        """Отказ в доступе раньше, чем ошибка отсутствующего слота"""
        storage = MemoryStorage()
        initialize_owner(storage, api, "owner")
        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(Unauthorized):
            engine.update(storage, info("sender"), CONFIG, updates, OWNER_ONLY)

    def test_renounced_ownership_rejects_everyone(self, engine, api) -> None:
        storage = MemoryStorage()
        initialize_owner(storage, api, None)
        CONFIG.save(storage, ExampleConfig(example_addr=Addr("example")))
        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(Unauthorized) as exc_info:
            engine.update(storage, info("owner"), CONFIG, updates, OWNER_ONLY)
        assert isinstance(exc_info.value.__cause__, NoOwner)


# =============================================================================
# VALIDATE-BEFORE-COMMIT
# =============================================================================


class TestValidateBeforeCommit:
    """Тесты протокола load → apply → validate → save"""

    def test_invalid_address_not_persisted(self, engine, storage) -> None:
        before = raw_config(storage)
        updates = ExampleConfigUpdates(example_addr="X")

        with pytest.raises(InvalidConfig) as exc_info:
            engine.update(storage, info("owner"), CONFIG, updates, OWNER_ONLY)

        assert str(exc_info.value).startswith("Invalid config: ")
        assert "too short" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, InvalidAddress)
        assert raw_config(storage) == before

    def test_missing_config_is_storage_error(self, engine, api) -> None:
        storage = MemoryStorage()
        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(NotFound) as exc_info:
            engine.update(storage, info("owner"), CONFIG, updates)
        assert isinstance(exc_info.value, StorageError)
        assert exc_info.value.key == "config"

    def test_corrupted_config_is_storage_error(self, engine, storage) -> None:
        storage.set(CONFIG.storage_key, b"{not json")
        updates = ExampleConfigUpdates(example_addr="example2")
        with pytest.raises(StorageError):
            engine.update(storage, info("owner"), CONFIG, updates)

    def test_empty_updates_leave_bytes_identical(self, engine, storage) -> None:
        before = raw_config(storage)
        result = engine.update(storage, info("owner"), CONFIG, ExampleConfigUpdates())
        assert raw_config(storage) == before
        assert result.config == CONFIG.load(storage)

    def test_functional_form(self, api, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = update_config(storage, api, info("owner"), CONFIG, updates, OWNER_ONLY)
        assert result.config.example_addr == "example2"


# =============================================================================
# AUDIT EVENT
# =============================================================================


class TestAuditEvent:
    """Тесты события update-config"""

    def test_event_name_and_attribute(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("owner"), CONFIG, updates)

        assert result.event.name == UPDATE_CONFIG_EVENT == "update-config"
        assert result.event.attribute("updates") == repr(updates)
        assert "example2" in result.event.attribute("updates")

    def test_event_matches_contract(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("owner"), CONFIG, updates)
        validate_update_config_event(result.event.model_dump())

    def test_event_serialized_shape(self, engine, storage) -> None:
        updates = ExampleConfigUpdates(example_addr="example2")
        result = engine.update(storage, info("owner"), CONFIG, updates)

        data = result.event.model_dump()
        assert data == {
            "name": "update-config",
            "attributes": {"updates": repr(updates)},
        }
        assert data["attributes"]["updates"] == "ExampleConfigUpdates(example_addr='example2')"

    def test_empty_updates_still_emit_event(self, engine, storage) -> None:
        result = engine.update(storage, info("owner"), CONFIG, ExampleConfigUpdates())
        assert result.event.attribute("updates") == "ExampleConfigUpdates(example_addr=None)"


# =============================================================================
# FEE CONFIG UPDATES
# =============================================================================


class TestFeeConfigUpdates:
    """Обновление FeeConfig через общий протокол"""

    @pytest.fixture
    def fee_storage(self, api) -> MemoryStorage:
        storage = MemoryStorage()
        initialize_owner(storage, api, "owner")
        FEE_CONFIG.save(
            storage,
            FeeConfig(
                fee_rate=Decimal("0.01"),
                fee_recipients=[(Addr("addr1"), Decimal("1"))],
            ),
        )
        return storage

    def test_update_fee_rate(self, engine, fee_storage) -> None:
        updates = FeeConfigUpdates(fee_rate=Decimal("0.02"))
        result = engine.update(fee_storage, info("owner"), FEE_CONFIG, updates, OWNER_ONLY)
        assert result.config.fee_rate == Decimal("0.02")
        assert result.config.fee_recipients == [(Addr("addr1"), Decimal("1"))]
        assert FEE_CONFIG.load(fee_storage) == result.config

    def test_update_recipients(self, engine, fee_storage) -> None:
        updates = FeeConfigUpdates(
            fee_recipients=[("addr1", Decimal("0.4")), ("addr2", Decimal("0.6"))]
        )
        result = engine.update(fee_storage, info("owner"), FEE_CONFIG, updates, OWNER_ONLY)
        assert [str(addr) for addr, _ in result.config.fee_recipients] == ["addr1", "addr2"]

    def test_rate_above_one_rejected(self, engine, fee_storage) -> None:
        before = raw_config(fee_storage, FEE_CONFIG)
        updates = FeeConfigUpdates(fee_rate=Decimal("1.5"))
        with pytest.raises(InvalidConfig, match="Fee rate can't be higher than 100%"):
            engine.update(fee_storage, info("owner"), FEE_CONFIG, updates, OWNER_ONLY)
        assert raw_config(fee_storage, FEE_CONFIG) == before

    def test_weights_not_summing_to_one_rejected(self, engine, fee_storage) -> None:
        before = raw_config(fee_storage, FEE_CONFIG)
        updates = FeeConfigUpdates(fee_recipients=[("addr1", Decimal("0.5"))])
        with pytest.raises(InvalidConfig, match="Sum of fee recipient percentages must be 100%"):
            engine.update(fee_storage, info("owner"), FEE_CONFIG, updates, OWNER_ONLY)
        assert raw_config(fee_storage, FEE_CONFIG) == before

    def test_type_invalid_update_rejected(self, engine, fee_storage) -> None:
        """Отрицательная ставка отсекается валидацией типов черновика"""
        before = raw_config(fee_storage, FEE_CONFIG)
        updates = FeeConfigUpdates.model_construct(fee_rate=Decimal("-0.5"))
        with pytest.raises(InvalidConfig) as exc_info:
            engine.update(fee_storage, info("owner"), FEE_CONFIG, updates, OWNER_ONLY)
        assert isinstance(exc_info.value.__cause__, ValidationError)
        assert raw_config(fee_storage, FEE_CONFIG) == before

    def test_non_owner_cannot_change_fees(self, engine, fee_storage) -> None:
        updates = FeeConfigUpdates(fee_rate=Decimal("0"))
        with pytest.raises(Unauthorized):
            engine.update(fee_storage, info("sender"), FEE_CONFIG, updates, OWNER_ONLY)
        assert FEE_CONFIG.load(fee_storage).fee_rate == Decimal("0.01")


# =============================================================================
# UPDATE SETS
# =============================================================================


class TestUpdateSets:
    """Тесты optional_model / apply_updates"""

    @pytest.fixture
    def draft(self) -> FeeConfigUnchecked:
        return FeeConfigUnchecked(
            fee_rate=Decimal("0.01"), fee_recipients=[("addr1", Decimal("1"))]
        )

    def test_all_slots_default_to_none(self) -> None:
        updates = FeeConfigUpdates()
        assert updates.fee_rate is None
        assert updates.fee_recipients is None
        assert changed_fields(updates) == {}

    def test_model_name(self) -> None:
        assert FeeConfigUpdates.__name__ == "FeeConfigUncheckedUpdates"

    def test_unknown_slot_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FeeConfigUpdates(fee_percent=Decimal("0.1"))

    def test_empty_updates_return_same_draft(self, draft) -> None:
        assert apply_updates(draft, FeeConfigUpdates()) is draft

    def test_apply_is_pure(self, draft) -> None:
        updated = apply_updates(draft, FeeConfigUpdates(fee_rate=Decimal("0.05")))
        assert updated.fee_rate == Decimal("0.05")
        assert updated.fee_recipients == draft.fee_recipients
        assert draft.fee_rate == Decimal("0.01")

    def test_apply_is_order_independent(self, draft) -> None:
        rate = FeeConfigUpdates(fee_rate=Decimal("0.05"))
        recipients = FeeConfigUpdates(fee_recipients=[("addr2", Decimal("1"))])
        both = FeeConfigUpdates(
            fee_rate=Decimal("0.05"), fee_recipients=[("addr2", Decimal("1"))]
        )
        assert apply_updates(apply_updates(draft, rate), recipients) == apply_updates(
            apply_updates(draft, recipients), rate
        )
        assert apply_updates(draft, both) == apply_updates(
            apply_updates(draft, rate), recipients
        )

    def test_apply_is_idempotent(self, draft) -> None:
        updates = FeeConfigUpdates(fee_rate=Decimal("0.05"))
        once = apply_updates(draft, updates)
        assert apply_updates(once, updates) == once

    def test_foreign_updates_rejected(self, draft) -> None:
        with pytest.raises(ValueError, match="Unknown config fields"):
            apply_updates(draft, ExampleConfigUpdates(example_addr="addr1"))


# =============================================================================
# OWNERSHIP
# =============================================================================


class TestOwnership:
    """Тесты assert_owner"""

    def test_uninitialized_has_no_owner(self) -> None:
        with pytest.raises(NoOwner):
            assert_owner(MemoryStorage(), Addr("owner"))

    def test_owner_passes(self, storage) -> None:
        assert_owner(storage, Addr("owner"))

    def test_other_sender_fails(self, storage) -> None:
        with pytest.raises(NotOwner):
            assert_owner(storage, Addr("sender"))

    def test_invalid_owner_address(self, api) -> None:
        with pytest.raises(InvalidAddress):
            initialize_owner(MemoryStorage(), api, "Owner")
