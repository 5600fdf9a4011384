"""User administration and scope API schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.value_objects.scope import HotelDepartmentPair, Restricted


class UserResponse(BaseModel):
    """User list/detail response (no credentials)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None
    full_name: str | None
    is_active: bool
    roles: list[str] = Field(default_factory=list)


class UserRoleAssign(BaseModel):
    """Request body for POST /users/{id}/roles."""

    role_id: int = Field(..., gt=0)


class UserRoleResponse(BaseModel):
    """One role held by a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class HotelDeptPair(BaseModel):
    """Exact (hotel, department) assignment in the scope exchange shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hotel_id: int = Field(..., gt=0)
    department_id: int = Field(..., gt=0)


class ScopeBody(BaseModel):
    """Scope exchange shape: hotelIds, departmentIds, hotelDeptPairs (snake_case also accepted)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hotel_ids: list[int] = Field(default_factory=list, max_length=1000)
    department_ids: list[int] = Field(default_factory=list, max_length=1000)
    hotel_dept_pairs: list[HotelDeptPair] = Field(default_factory=list, max_length=5000)

    def pairs(self) -> set[HotelDepartmentPair]:
        return {
            HotelDepartmentPair(p.hotel_id, p.department_id)
            for p in self.hotel_dept_pairs
        }

    @classmethod
    def from_scope(cls, scope: Restricted) -> "ScopeBody":
        return cls(
            hotel_ids=sorted(scope.hotel_ids),
            department_ids=sorted(scope.department_ids),
            hotel_dept_pairs=[
                HotelDeptPair(hotel_id=p.hotel_id, department_id=p.department_id)
                for p in sorted(scope.hotel_dept_pairs)
            ],
        )
