from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GroupCreatorResponse(BaseModel):
    id: int
    name: str
    email: str
    type_user: Optional[str] = None


class TypeGroupResponse(BaseModel):
    id: int
    name: str
    type: str


class RepresentativeResponse(BaseModel):
    id: int
    email: str
    user_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class GroupResponse(BaseModel):
    id: int
    entity: str
    organ: str
    council: str
    acronym: str
    team: str
    unit: str
    email: str
    office_requested: Optional[str] = None
    office_indicated: Optional[str] = None
    internal_concierge: Optional[str] = None
    observations: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: GroupCreatorResponse
    type_group: TypeGroupResponse
    representative: Optional[RepresentativeResponse] = None

    @classmethod
    def from_model(cls, group) -> "GroupResponse":
        creator = group.creator
        return cls(
            id=group.id,
            entity=group.entity,
            organ=group.organ,
            council=group.council,
            acronym=group.acronym,
            team=group.team,
            unit=group.unit,
            email=group.email,
            office_requested=group.office_requested,
            office_indicated=group.office_indicated,
            internal_concierge=group.internal_concierge,
            observations=group.observations,
            status=group.status,
            created_at=group.created_at,
            updated_at=group.updated_at,
            created_by=GroupCreatorResponse(
                id=creator.id,
                name=creator.name,
                email=creator.email,
                type_user=creator.type_user.name if creator.type_user else None,
            ),
            type_group=TypeGroupResponse(
                id=group.type_group.id,
                name=group.type_group.name,
                type=group.type_group.type_group,
            ),
            representative=(
                RepresentativeResponse.model_validate(group.representative)
                if group.representative else None
            ),
        )


class MemberResponse(BaseModel):
    id: int
    group_id: int
    user_id: Optional[int] = None
    email: str
    role: str
    phone: Optional[str] = None
    entry_date: Optional[date] = None
    departure_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
