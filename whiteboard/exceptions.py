from fastapi import HTTPException


class BoardServiceError(HTTPException):
    """
    board API가 던지는 에러의 공통 부모

    `error` 태그로 에러 종류를 구분하므로 호출하는 쪽은 message 문자열 대신
    태그로 분기할 수 있습니다.
    """

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, detail: str, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code, detail=detail, headers=headers
        )


class Unauthorized(BoardServiceError):
    status_code = 401
    error = "unauthorized"

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class ValidationError(BoardServiceError):
    status_code = 422
    error = "validation_error"


class NotFound(BoardServiceError):
    status_code = 404
    error = "not_found"


class AlreadyFavorited(BoardServiceError):
    status_code = 409
    error = "already_favorited"

    def __init__(self, detail: str = "Board already favorited"):
        super().__init__(detail)
