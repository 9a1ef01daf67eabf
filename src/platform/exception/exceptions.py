class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class BookingValidationError(DomainError):
    """Local validation failed; details live in the session's validation errors."""

    def __init__(self, message: str = 'Please correct the validation errors') -> None:
        super().__init__(message, 422)


class GatewayError(CustomBaseError):
    """Museum API answered with an error status."""

    def __init__(self, message: str, status_code: int, endpoint: str = '') -> None:
        self.endpoint = endpoint
        super().__init__(message, status_code)


class NotFoundError(GatewayError):
    def __init__(self, message: str, endpoint: str = '') -> None:
        super().__init__(message, 404, endpoint)


class GatewayValidationError(GatewayError):
    def __init__(self, message: str, status_code: int = 422, endpoint: str = '') -> None:
        super().__init__(message, status_code, endpoint)


class ServerError(GatewayError):
    def __init__(self, message: str, status_code: int = 500, endpoint: str = '') -> None:
        super().__init__(message, status_code, endpoint)


class NetworkError(CustomBaseError):
    """Museum API could not be reached (timeout, connection failure)."""

    def __init__(self, message: str, endpoint: str = '') -> None:
        self.endpoint = endpoint
        super().__init__(f'Network error calling {endpoint}: {message}', 503)
