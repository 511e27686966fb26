import logging
from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import GENERIC_INTERNAL_MESSAGE, InternalError, StockError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StockError)
    async def stock_exception_handler(request: Request, exc: StockError):
        if isinstance(exc, InternalError):
            logger.error("%s %s failed: %s", request.method,
                         request.url.path, exc.message, exc_info=exc)
        return JSONResponse(content=exc.to_dict(), status_code=exc.http_status)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already puts a wrapped result in detail
        if isinstance(exc.detail, dict) and "status_code" in exc.detail:
            return JSONResponse(content=exc.detail, status_code=exc.status_code)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
            message=str(exc.detail)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data={"kind": "validation_error"},
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message="; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path, exc_info=exc)

        wrapped = JsonOutResult(
            data={"kind": InternalError.kind},
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message=GENERIC_INTERNAL_MESSAGE
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
