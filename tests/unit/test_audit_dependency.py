"""Unit tests for the audited() dependency factory and the scoped snapshot loader."""

from types import SimpleNamespace
from typing import Annotated
from unittest.mock import AsyncMock, MagicMock

from fastapi import Depends, FastAPI

from app.api.v1.dependencies import audited, scoped_snapshot_with
from app.application.services.audit_recorder import AuditTrail
from app.application.services.scope_filter_compiler import CONTACT_FIELDS
from app.domain.enums import PermissionKey
from app.domain.value_objects.scope import make_restricted
from app.shared.enums import AuditAction, AuditEntityType


def test_audited_dependency_adds_no_query_parameters() -> None:
    """The permission gate resolves as a dependency, not as a request parameter."""
    app = FastAPI()

    @app.put("/contacts/{contact_id}")
    async def edit(
        contact_id: int,
        trail: Annotated[
            AuditTrail,
            Depends(
                audited(
                    AuditAction.CONTACT_EDIT,
                    AuditEntityType.CONTACT,
                    PermissionKey.CONTACT_EDIT,
                    entity_param="contact_id",
                )
            ),
        ],
    ):
        return {}

    operation = app.openapi()["paths"]["/contacts/{contact_id}"]["put"]
    assert [p["name"] for p in operation.get("parameters", [])] == ["contact_id"]


async def test_scoped_snapshot_hides_out_of_scope_rows() -> None:
    repo = MagicMock()
    repo.get_scoped = AsyncMock(return_value=None)
    load = scoped_snapshot_with(lambda db: repo, CONTACT_FIELDS)

    assert await load(object(), 7, make_restricted(hotel_ids=[1])) is None
    repo.audit_values.assert_not_called()
    contact_id, predicate = repo.get_scoped.await_args.args
    assert contact_id == 7
    assert not predicate.matches({"hotel_id": 2, "department_id": 1})


async def test_scoped_snapshot_returns_visible_row_values() -> None:
    row = SimpleNamespace(id=7, name="Jane", hotel_id=1, department_id=1)
    repo = MagicMock()
    repo.get_scoped = AsyncMock(return_value=row)
    repo.audit_values = MagicMock(return_value={"id": 7, "name": "Jane"})
    load = scoped_snapshot_with(lambda db: repo, CONTACT_FIELDS)

    assert await load(object(), 7, make_restricted(hotel_ids=[1])) == {"id": 7, "name": "Jane"}
    repo.audit_values.assert_called_once_with(row)
