from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = list(exc.base_error.details)
    logger.warning(f"Client error on {request.method} {request.url.path}: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} {exc.base_error.message}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Underneath API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from underneath.api.routes import (
        auth,
        connection,
        health_check,
        invitation,
        profile,
        progress,
        stage,
        stage_entity,
    )
    from underneath.api.utils.rate_limit import api_limiter

    limited = [Depends(api_limiter)]

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"], dependencies=limited)
    app.include_router(invitation.router, tags=["Invitations"], dependencies=limited)
    app.include_router(connection.router, tags=["Connections"], dependencies=limited)
    app.include_router(stage.router, tags=["Stages"], dependencies=limited)
    app.include_router(stage_entity.router, tags=["Stage Entities"], dependencies=limited)
    app.include_router(progress.router, tags=["Progress"], dependencies=limited)
    app.include_router(profile.router, tags=["Profile"], dependencies=limited)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
