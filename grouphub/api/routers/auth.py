from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from grouphub.api.deps import get_db, get_current_principal
from grouphub.api.schemas.auth import Token, PrincipalResponse
from grouphub.core.exceptions import AuthenticationError
from grouphub.core.logger import get_logger
from grouphub.core.rbac import Principal
from grouphub.core.security import verify_password, create_access_token
from grouphub.services import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Exchange e-mail and password for a bearer token."""
    # E-mail addresses match case-insensitively
    user = UserService(db).find_active_by_email(form_data.username.strip())

    if not user or not user.password_hash or not verify_password(form_data.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Credenciais inválidas.")

    return Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=PrincipalResponse)
async def me(principal: Principal = Depends(get_current_principal)):
    """Return the authenticated principal."""
    return PrincipalResponse(
        id=principal.id,
        name=principal.name,
        email=principal.email,
        role=principal.role.name,
        type_user_id=principal.role.value,
    )
