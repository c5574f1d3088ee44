from fastapi import HTTPException, status
from typing import Optional


class APIException(HTTPException):
    """API error carrying a machine code next to the human message."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: Optional[str] = None,
        headers: Optional[dict] = None,
    ):
        detail = {"code": code, "message": message or "An error occurred"}
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(APIException):
    """404 Not Found Error."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, code=code, message=message
        )


class BadRequestError(APIException):
    """400 Bad Request Error."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST, code=code, message=message
        )


class UnauthorizedError(APIException):
    """401 Unauthorized Error."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code=code,
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class BadGatewayError(APIException):
    """502 Bad Gateway: the inference endpoint failed us."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY, code=code, message=message
        )


class ServerError(APIException):
    """500 Internal Server Error."""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=code,
            message=message,
        )
