"""Group management API endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grouphub.api.deps import get_db, get_current_principal, get_notifier, get_policy
from grouphub.api.schemas.common import ERROR_RESPONSES, DataResponse, PaginatedResponse
from grouphub.api.schemas.groups import GroupResponse
from grouphub.core.config import get_settings
from grouphub.core.rbac import Action, PolicyEvaluator, Principal, Resource
from grouphub.core.validators import GroupRequestValidator, Mode
from grouphub.services import GroupService, RegistrationNotifier

router = APIRouter(prefix="/group", tags=["groups"], responses=ERROR_RESPONSES)
settings = get_settings()


@router.get("", response_model=PaginatedResponse[GroupResponse])
async def list_groups(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
    creator_user_id: Optional[int] = Query(None),
    group_status: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_page_size, ge=1, le=100),
):
    """List groups, optionally filtered by creator and status."""
    policy.enforce(principal, Action.VIEW, Resource.GROUPS)

    groups, total = GroupService(db).list(
        creator_user_id=creator_user_id,
        status=group_status,
        page=page,
        per_page=per_page,
    )
    return PaginatedResponse.create(
        data=[GroupResponse.from_model(g) for g in groups],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{group_id}", response_model=DataResponse[GroupResponse])
async def get_group(
    group_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    policy.enforce(principal, Action.VIEW, Resource.GROUPS, group_id)
    group = GroupService(db).get(group_id)
    return DataResponse(data=GroupResponse.from_model(group))


@router.post("", response_model=DataResponse[GroupResponse], status_code=status.HTTP_201_CREATED)
async def create_group(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
    notifier: RegistrationNotifier = Depends(get_notifier),
):
    """Create a group. Managers only; the caller becomes its creator."""
    data = GroupRequestValidator().validate(payload, Mode.CREATE).raise_for_errors()
    policy.enforce(principal, Action.CREATE, Resource.GROUPS)

    group = await GroupService(db, notifier).create(principal, data)
    return DataResponse(data=GroupResponse.from_model(group))


@router.put("/{group_id}", response_model=DataResponse[GroupResponse])
async def update_group(
    group_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
    notifier: RegistrationNotifier = Depends(get_notifier),
):
    """Update a group. Only the manager who created it may do so."""
    data = GroupRequestValidator().validate(payload, Mode.UPDATE).raise_for_errors()
    policy.enforce(principal, Action.UPDATE, Resource.GROUPS, group_id)

    group = await GroupService(db, notifier).update(group_id, data)
    return DataResponse(data=GroupResponse.from_model(group))


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    """Delete a group. Only the manager who created it may do so."""
    policy.enforce(principal, Action.DELETE, Resource.GROUPS, group_id)
    GroupService(db).delete(group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
