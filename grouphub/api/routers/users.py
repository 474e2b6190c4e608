"""User management API endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grouphub.api.deps import get_db, get_current_principal, get_policy
from grouphub.api.schemas.common import ERROR_RESPONSES, DataResponse, PaginatedResponse
from grouphub.api.schemas.users import UserResponse
from grouphub.core.config import get_settings
from grouphub.core.rbac import Action, PolicyEvaluator, Principal, Resource
from grouphub.core.validators import Mode, UserRequestValidator
from grouphub.services import UserService

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)
settings = get_settings()


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
    email: Optional[str] = Query(None),
    type_user_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_page_size, ge=1, le=100),
):
    """List users. Restricted to administrators, managers and representatives."""
    policy.enforce(principal, Action.VIEW, Resource.USERS)

    users, total = UserService(db).list(
        email=email, type_user_id=type_user_id, page=page, per_page=per_page
    )
    return PaginatedResponse.create(
        data=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post("", response_model=DataResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    """Create a user account."""
    service = UserService(db)
    data = UserRequestValidator(service.email_exists).validate(payload, Mode.CREATE).raise_for_errors()
    policy.enforce(principal, Action.CREATE, Resource.USERS)

    user = service.create(data)
    return DataResponse(data=UserResponse.model_validate(user))


@router.get("/{user_id}", response_model=DataResponse[UserResponse])
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Get a user by ID."""
    user = UserService(db).get(user_id)
    return DataResponse(data=UserResponse.model_validate(user))


@router.put("/{user_id}", response_model=DataResponse[UserResponse])
async def update_user(
    user_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    """Update a user. Users may only update themselves."""
    service = UserService(db)
    validator = UserRequestValidator(service.email_exists, exclude_id=user_id)
    data = validator.validate(payload, Mode.UPDATE).raise_for_errors()
    policy.enforce(principal, Action.UPDATE, Resource.USERS, user_id)

    user = service.update(user_id, data)
    return DataResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    """Soft-delete a user."""
    policy.enforce(principal, Action.DELETE, Resource.USERS, user_id)
    UserService(db).delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/restore/{user_id}", response_model=DataResponse[UserResponse])
async def restore_user(
    user_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    policy: PolicyEvaluator = Depends(get_policy),
):
    """Restore a soft-deleted user."""
    policy.enforce(principal, Action.RESTORE, Resource.USERS, user_id)
    user = UserService(db).restore(user_id)
    return DataResponse(data=UserResponse.model_validate(user))
