from typing import Dict, Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """
    Base exception class for catalog errors that map to an HTTP status.
    Extends HTTPException with an error code that is logged by the handler.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            status_code: HTTP status code
            detail: Error detail message
            code: Error code
            headers: HTTP headers
        """
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code


class NotFoundException(APIException):
    """404 Not Found exception."""

    def __init__(
        self,
        detail: str = "Resource not found",
        code: Optional[str] = "not_found",
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            headers=headers,
        )


class NotImplementedException(APIException):
    """501 Not Implemented exception, raised by handlers that are extension points."""

    def __init__(
        self,
        detail: str = "Not implemented",
        code: Optional[str] = "not_implemented",
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail=detail,
            code=code,
            headers=headers,
        )


class StoreError(Exception):
    """Document store related exception."""

    pass


class StoreTimeoutError(StoreError):
    """A document store call did not finish within the configured timeout."""

    def __init__(self, operation: str, collection: str, timeout: float):
        super().__init__(
            f"Store operation '{operation}' on '{collection}' timed out after {timeout}s"
        )
        self.operation = operation
        self.collection = collection
        self.timeout = timeout
