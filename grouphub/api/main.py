from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import grouphub
from grouphub.api.middleware.audit import AuditMiddleware
from grouphub.api.routers import auth, groups, health, members, users
from grouphub.core.config import get_settings
from grouphub.core.exceptions import GroupHubError
from grouphub.core.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def grouphub_error_handler(request: Request, exc: GroupHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render framework-level request errors in the field-mapping shape."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("body", "path", "query")]
        field = ".".join(loc) or "payload"
        errors.setdefault(field, []).append(f"O campo {field} é inválido.")
    return JSONResponse(status_code=422, content={"errors": errors})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Group and member management with role-based policies",
        version=grouphub.__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Audit middleware - logs all API requests
    app.add_middleware(AuditMiddleware)

    app.add_exception_handler(GroupHubError, grouphub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(groups.router, prefix="/api")
    app.include_router(members.router, prefix="/api")
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": grouphub.__version__,
            "docs": "/docs" if settings.debug else None,
        }

    return app


app = create_app()
