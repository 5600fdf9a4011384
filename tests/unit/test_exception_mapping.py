"""Unit tests for domain exception bodies and their HTTP/audit mapping."""

import pytest
from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError

from app.core.exception_handlers import classify_audit_failure, status_for
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DuplicateAssignmentException,
    InfrastructureException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (AuthenticationException(), 401),
        (AuthorizationException(("CONTACT_EDIT",)), 403),
        (ResourceNotFoundException("contact", 7), 404),
        (ConflictException("Role with this name already exists"), 409),
        (DuplicateAssignmentException("Role already assigned", "user_role"), 409),
        (ValidationException("Contact name is required", field="name"), 400),
        (InfrastructureException(), 503),
        (SqlNotConfiguredException(), 503),
    ],
)
def test_status_for_domain_exceptions(exc, status: int) -> None:
    assert status_for(exc) == status


def test_to_dict_carries_code_message_and_details() -> None:
    body = ResourceNotFoundException("hotel", 3).to_dict()
    assert body == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "hotel not found: 3",
        "details": {"resource_type": "hotel", "resource_id": "3"},
    }


def test_authorization_exception_lists_acceptable_keys() -> None:
    exc = AuthorizationException(["HOTEL_VIEW", "CONTACT_VIEW"], details={"path": "/hotels"})
    assert exc.details == {"path": "/hotels", "required_any": ["HOTEL_VIEW", "CONTACT_VIEW"]}


def test_classify_domain_failure() -> None:
    failure = classify_audit_failure(
        AuthorizationException(message="Contact is out of scope")
    )
    assert failure is not None
    assert failure.status_code == 403
    assert failure.message == "Contact is out of scope"


def test_classify_http_exception() -> None:
    failure = classify_audit_failure(HTTPException(status_code=404, detail="gone"))
    assert failure is not None
    assert (failure.status_code, failure.message) == (404, "gone")


def test_classify_unexpected_exception_as_server_error() -> None:
    failure = classify_audit_failure(KeyError())
    assert failure is not None
    assert failure.status_code == 500
    assert failure.message == "KeyError"


def test_payload_validation_is_not_an_audited_failure() -> None:
    assert classify_audit_failure(RequestValidationError([])) is None
