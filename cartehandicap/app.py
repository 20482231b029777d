"""FastAPI app initialization, exception handling"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cartehandicap.config import Config, get_config
from cartehandicap.errors.base import ApplicationError
from cartehandicap.errors.common import StorageError, ValidationError
from cartehandicap.routes.admin import admin_router
from cartehandicap.routes.auth import auth_router
from cartehandicap.routes.registration import registration_router
from cartehandicap.routes.scan import scan_router
from cartehandicap.routes.user import user_router

logger = logging.getLogger(__name__)

config: Config = get_config()
app = FastAPI(title=config.app_name, version=config.app_version)
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApplicationError)
def application_exception_handler(request: Request, exc: ApplicationError):
    content = exc.content()
    logger.error(content)
    # Only print full traceback when in debug logging
    if logger.isEnabledFor(logging.DEBUG):
        traceback.print_exception(exc)
    return JSONResponse(status_code=exc.http_code or 500, content=content)


@app.exception_handler(RequestValidationError)
def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    fields = [".".join(str(part) for part in error["loc"][1:]) for error in exc.errors()]
    error = ValidationError(", ".join(field for field in fields if field) or None)
    logger.info(error.content())
    return JSONResponse(status_code=error.http_code, content=error.content())


@app.exception_handler(SQLAlchemyError)
def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    # details stay in the server log, the client gets a generic message
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    if logger.isEnabledFor(logging.DEBUG):
        traceback.print_exception(exc)
    error = StorageError()
    return JSONResponse(status_code=error.http_code, content=error.content())


app.include_router(registration_router)
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(admin_router)
app.include_router(scan_router)
