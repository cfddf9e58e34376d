from fastapi import status


class StationServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Station service error"):
        super().__init__(message)
        self.message = message


class ValidationError(StationServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(StationServiceError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Station not found"):
        super().__init__(message)


class Unauthorized(StationServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class StorageError(StationServiceError):
    """Raised when the database cannot be reached or a statement fails.

    The message carries internal detail for the logs; clients only ever see a
    generic 500 body.
    """
