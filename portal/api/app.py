import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError
from .utils.storage_files import StorageFiles

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code, content={"error": {**error_dict, **exc.extra}}
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"] if part != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": {"code": "VALIDATION_ERROR", "message": message}},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Chatbot Admin Portal API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from portal.api.routes import (
        activity,
        admin,
        auth,
        clients,
        functions,
        health_check,
        invitation,
        mfa,
        navigation,
        realtime,
        recovery,
        sources,
        stats,
        widget,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(mfa.router, tags=["MFA"])
    app.include_router(navigation.router, tags=["Navigation"])
    app.include_router(clients.router, tags=["Clients"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(recovery.router, tags=["Recovery"])
    app.include_router(widget.router, tags=["Widget"])
    app.include_router(sources.router, tags=["Sources"])
    app.include_router(activity.router, tags=["Activity"])
    app.include_router(stats.router, tags=["Stats"])
    app.include_router(admin.router, tags=["Admin"])
    app.include_router(functions.router, tags=["Functions"])
    app.include_router(realtime.router, tags=["Realtime"])

    app.mount(
        "/storage",
        StorageFiles(directory=ApplicationConfig.STORAGE_ROOT, check_dir=False),
        name="storage",
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
