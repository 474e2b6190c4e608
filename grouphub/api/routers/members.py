"""Group member API endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from grouphub.api.deps import get_db, get_current_principal, get_notifier, get_policy
from grouphub.api.schemas.common import ERROR_RESPONSES, DataResponse
from grouphub.api.schemas.groups import MemberResponse
from grouphub.core.rbac import Action, PolicyEvaluator, Principal, Resource
from grouphub.core.validators import MemberRequestValidator, Mode
from grouphub.services import MemberService, RegistrationNotifier

router = APIRouter(prefix="/group/{group_id}/members", tags=["members"], responses=ERROR_RESPONSES)


@router.get("", response_model=DataResponse[List[MemberResponse]])
async def list_members(
    group_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    policy.enforce(principal, Action.VIEW, Resource.MEMBERS, group_id)
    members = MemberService(db).list(group_id)
    return DataResponse(data=[MemberResponse.model_validate(m) for m in members])


@router.post("", response_model=DataResponse[List[MemberResponse]], status_code=status.HTTP_201_CREATED)
async def create_members(
    group_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
    notifier: RegistrationNotifier = Depends(get_notifier),
):
    """Add members to a group. All entries are stored, or none."""
    data = MemberRequestValidator().validate(payload, Mode.CREATE).raise_for_errors()
    policy.enforce(principal, Action.CREATE, Resource.MEMBERS, group_id)

    members = await MemberService(db, notifier).create_many(group_id, data["members"])
    return DataResponse(data=[MemberResponse.model_validate(m) for m in members])


@router.put("/{member_id}", response_model=DataResponse[MemberResponse])
async def update_member(
    group_id: int,
    member_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    data = MemberRequestValidator().validate(payload, Mode.UPDATE).raise_for_errors()
    policy.enforce(principal, Action.UPDATE, Resource.MEMBERS, group_id)

    member = MemberService(db).edit(group_id, member_id, data)
    return DataResponse(data=MemberResponse.model_validate(member))


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    group_id: int,
    member_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    policy.enforce(principal, Action.DELETE, Resource.MEMBERS, group_id)
    MemberService(db).delete(group_id, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
