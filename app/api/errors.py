# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.exceptions import ErrorCode, HttpException
from app.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, error_code: int, errors=None) -> dict:
    return {"message": message, "errorCode": int(error_code), "errors": errors}


async def http_exception_handler(request: Request, exc: HttpException) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code.name}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.message, exc.error_code, exc.errors)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(
            error_body("Unprocessable entity!", ErrorCode.UNPROCESSABLE_ENTITY, exc.errors())
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # bez szczegolow dla klienta, pelny traceback tylko w logach
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body("Server error!", ErrorCode.INTERNAL_EXCEPTION),
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(HttpException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
