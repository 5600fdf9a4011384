"""Unit tests for AuditRecorder: exactly one entry per attempt, never failing the operation."""

import pytest
from fastapi.exceptions import RequestValidationError

from app.application.dtos.audit_log import AuditLogEntryCreate, RequestOrigin
from app.application.services.audit_recorder import AuditRecorder
from app.core.exception_handlers import classify_audit_failure
from app.domain.exceptions import AuthorizationException, ConflictException

ORIGIN = RequestOrigin(ip_address="10.0.0.5", mac_address="AA:BB", device_name="pytest")


class ListSink:
    """IAuditSink collecting entries in memory."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntryCreate] = []

    def submit(self, entry: AuditLogEntryCreate) -> None:
        self.entries.append(entry)


class BrokenSink:
    def submit(self, entry: AuditLogEntryCreate) -> None:
        raise RuntimeError("queue gone")


def _recorder(sink) -> AuditRecorder:
    return AuditRecorder(sink, classify_failure=classify_audit_failure)


async def test_success_records_one_entry_with_old_and_new_values() -> None:
    sink = ListSink()

    async def old_state():
        return {"name": "Old"}

    async with _recorder(sink).record(
        actor_id=3,
        action_name="CONTACT_EDIT",
        entity_type="CONTACT",
        origin=ORIGIN,
        entity_id="12",
        capture_old=old_state,
    ) as trail:
        trail.record_result(new_values={"name": "New"})

    assert len(sink.entries) == 1
    entry = sink.entries[0]
    assert entry.success is True
    assert entry.user_id == 3
    assert entry.action_name == "CONTACT_EDIT"
    assert entry.entity_type == "CONTACT"
    assert entry.entity_id == "12"
    assert entry.old_values == {"name": "Old"}
    assert entry.new_values == {"name": "New"}
    assert entry.error_message is None
    assert entry.ip_address == "10.0.0.5"
    assert entry.mac_address == "AA:BB"
    assert entry.device_name == "pytest"


async def test_created_entity_id_overrides_hint() -> None:
    sink = ListSink()
    async with _recorder(sink).record(
        actor_id=1, action_name="HOTEL_CREATE", entity_type="HOTEL", origin=ORIGIN
    ) as trail:
        trail.record_result(entity_id=44, status_code=201)
    assert sink.entries[0].entity_id == "44"
    assert sink.entries[0].success is True


async def test_failure_records_entry_and_reraises_unchanged() -> None:
    sink = ListSink()
    error = AuthorizationException(message="Hotel or department is out of scope")
    with pytest.raises(AuthorizationException) as exc_info:
        async with _recorder(sink).record(
            actor_id=2, action_name="CONTACT_CREATE", entity_type="CONTACT", origin=ORIGIN
        ) as trail:
            trail.record_result(new_values={"ignored": True})
            raise error
    assert exc_info.value is error
    assert len(sink.entries) == 1
    entry = sink.entries[0]
    assert entry.success is False
    assert entry.error_message == "Hotel or department is out of scope"
    assert entry.new_values is None


async def test_conflict_failure_keeps_message() -> None:
    sink = ListSink()
    with pytest.raises(ConflictException):
        async with _recorder(sink).record(
            actor_id=2, action_name="ROLE_CREATE", entity_type="ROLE", origin=ORIGIN
        ):
            raise ConflictException("Role with this name already exists")
    assert sink.entries[0].error_message == "Role with this name already exists"


async def test_unclassified_exception_is_not_recorded() -> None:
    """Payload validation errors are not mutation attempts."""
    sink = ListSink()
    with pytest.raises(RequestValidationError):
        async with _recorder(sink).record(
            actor_id=2, action_name="CARD_CREATE", entity_type="CARD", origin=ORIGIN
        ):
            raise RequestValidationError([])
    assert sink.entries == []


async def test_unexpected_exception_is_recorded_as_server_error() -> None:
    sink = ListSink()
    with pytest.raises(RuntimeError):
        async with _recorder(sink).record(
            actor_id=2, action_name="CARD_EDIT", entity_type="CARD", origin=ORIGIN
        ):
            raise RuntimeError("disk on fire")
    assert sink.entries[0].success is False
    assert sink.entries[0].error_message == "disk on fire"


async def test_error_status_without_exception_is_a_failure() -> None:
    sink = ListSink()
    async with _recorder(sink).record(
        actor_id=1, action_name="HOTEL_EDIT", entity_type="HOTEL", origin=ORIGIN
    ) as trail:
        trail.record_result(status_code=409)
    assert sink.entries[0].success is False
    assert sink.entries[0].error_message == "HTTP 409"


async def test_failed_pre_capture_records_without_old_values() -> None:
    sink = ListSink()

    async def broken():
        raise RuntimeError("snapshot failed")

    async with _recorder(sink).record(
        actor_id=1,
        action_name="HOTEL_EDIT",
        entity_type="HOTEL",
        origin=ORIGIN,
        entity_id=5,
        capture_old=broken,
    ) as trail:
        trail.record_result(new_values={"name": "x"})
    assert sink.entries[0].old_values is None
    assert sink.entries[0].success is True


async def test_sink_failure_does_not_fail_the_operation() -> None:
    async with _recorder(BrokenSink()).record(
        actor_id=1, action_name="HOTEL_DELETE", entity_type="HOTEL", origin=ORIGIN
    ) as trail:
        trail.record_result(status_code=204)
