# shared/helpers/json_response_helper.py
from typing import Any, Optional
from fastapi import HTTPException

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )


def error_response(
    message: str,
    status_code: str = AppStatusCode.OPERATION_FAILED,
    http_status: int = 400,
    kind: Optional[str] = None,
):
    """Raise an HTTPException whose detail is already a failure envelope."""
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data={"kind": kind} if kind else None,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )
