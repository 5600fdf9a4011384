"""Department operations: scoped reads and lifecycle."""

from __future__ import annotations

from typing import Any

from app.application.services.scope_filter_compiler import (
    DEPARTMENT_FIELDS,
    compile_scope_filter,
)
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.scope import Scope

_MSG_DUPLICATE_DEPARTMENT = "Department with this name already exists"


class DepartmentService:
    """Departments visible under the caller's scope (filtered on department ids only)."""

    def __init__(self, department_repo: Any) -> None:
        self.department_repo = department_repo

    async def list_departments(self, scope: Scope) -> list[Any]:
        return await self.department_repo.list_scoped(
            compile_scope_filter(scope, DEPARTMENT_FIELDS)
        )

    async def get_department(self, scope: Scope, department_id: int) -> Any:
        department = await self.department_repo.get_scoped(
            department_id, compile_scope_filter(scope, DEPARTMENT_FIELDS)
        )
        if department is None:
            raise ResourceNotFoundException("department", department_id)
        return department

    async def create_department(
        self, name: str, description: str | None = None
    ) -> Any:
        name = name.strip()
        if not name:
            raise ValidationException("Department name is required", field="name")
        if await self.department_repo.get_by_name(name):
            raise ConflictException(_MSG_DUPLICATE_DEPARTMENT, details={"name": name})
        return await self.department_repo.create_department(
            name=name, description=description
        )

    async def update_department(
        self,
        scope: Scope,
        department_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> Any:
        department = await self.get_department(scope, department_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationException("Department name is required", field="name")
            if await self.department_repo.get_by_name(name, exclude_id=department_id):
                raise ConflictException(
                    _MSG_DUPLICATE_DEPARTMENT, details={"name": name}
                )
            department.name = name
        if description is not None:
            department.description = description
        return await self.department_repo.update(department)

    async def toggle_active(self, scope: Scope, department_id: int) -> Any:
        department = await self.get_department(scope, department_id)
        return await self.department_repo.toggle_active(department)

    async def delete_department(
        self, scope: Scope, department_id: int, deleted_by: int | None = None
    ) -> Any:
        department = await self.get_department(scope, department_id)
        return await self.department_repo.soft_delete(department, deleted_by=deleted_by)
