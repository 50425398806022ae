from fastapi import HTTPException, Request
from starlette.responses import JSONResponse

from whiteboard.exceptions import BoardServiceError


def custom_exception_handler(_request: Request, exc: HTTPException):
    content = {"message": exc.detail}
    if isinstance(exc, BoardServiceError):
        content["error"] = exc.error
    return JSONResponse(
        status_code=exc.status_code, content=content, headers=exc.headers
    )
