from fastapi import status
from libs.result import Error

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_ACTION": status.HTTP_400_BAD_REQUEST,
    "INVALID_SCHEDULE": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "SESSION_INVALID": status.HTTP_401_UNAUTHORIZED,
    "REFRESH_INVALID": status.HTTP_401_UNAUTHORIZED,
    "CREDENTIAL_REQUIRED": status.HTTP_401_UNAUTHORIZED,
    "LINK_INVALID": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_INACTIVE": status.HTTP_403_FORBIDDEN,
    "PANIC_ACTIVE": status.HTTP_403_FORBIDDEN,
    "SESSION_REQUIRED": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SEGMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LINK_EXPIRED": status.HTTP_410_GONE,
    "RATE_LIMITED": status.HTTP_429_TOO_MANY_REQUESTS,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Map a use case error code to the HTTP error it surfaces as"""
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
