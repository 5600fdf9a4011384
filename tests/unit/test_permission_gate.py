"""Unit tests for PermissionGate and is_allowed (admin bypass, alternatives, fail closed)."""

import pytest

from app.application.dtos.principal import Principal
from app.application.services.permission_gate import PermissionGate, is_allowed
from app.domain.exceptions import AuthorizationException


def _principal(roles=(), permissions=()) -> Principal:
    return Principal(
        user_id=1,
        username="alice",
        roles=frozenset(roles),
        permissions=frozenset(permissions),
    )


def test_any_of_alternatives_is_enough() -> None:
    assert is_allowed(
        ["HOTEL_VIEW", "CONTACT_VIEW"], ["CONTACT_VIEW"], is_admin=False
    )


def test_missing_every_alternative_is_denied() -> None:
    assert not is_allowed(["HOTEL_VIEW"], ["CONTACT_VIEW"], is_admin=False)


def test_keys_compare_case_insensitively() -> None:
    assert is_allowed(["contact_view"], ["CONTACT_VIEW"], is_admin=False)


def test_empty_acceptable_list_admits_admins_only() -> None:
    assert not is_allowed([], ["CONTACT_VIEW"], is_admin=False)
    assert is_allowed([], [], is_admin=True)


@pytest.mark.parametrize("role", ["ADMIN", "admin_master", " Admin "])
def test_admin_roles_bypass(role: str) -> None:
    """ADMIN / ADMIN_MASTER (any case) pass every check without holding keys."""
    principal = _principal(roles=[role])
    assert principal.is_admin
    assert PermissionGate().allows(principal, "AUDIT_VIEW")


def test_require_raises_authorization_with_required_keys() -> None:
    gate = PermissionGate()
    principal = _principal(roles=["CLERK"], permissions=["CONTACT_VIEW"])
    with pytest.raises(AuthorizationException) as exc_info:
        gate.require(principal, "CONTACT_DELETE", "CONTACT_EDIT")
    assert exc_info.value.error_code == "PERMISSION_DENIED"
    assert exc_info.value.details["required_any"] == ["CONTACT_DELETE", "CONTACT_EDIT"]


def test_require_returns_principal_when_allowed() -> None:
    principal = _principal(permissions=["CONTACT_VIEW"])
    assert PermissionGate().require(principal, "CONTACT_VIEW") is principal
