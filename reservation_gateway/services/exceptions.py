class ServiceError(Exception):
    """Base exception for orchestration failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class BackendRequestError(ServiceError):
    """Raised when a downstream service rejects the call (HTTP 4xx)."""

    def __init__(self, message: str, status_code: int, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class BackendServiceError(ServiceError):
    """Raised for any other downstream failure: 5xx, transport or bad body."""

    def __init__(self, message: str, status_code: int | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class FeeParseError(ServiceError):
    """Raised when the fee service returns an amount that is not a number."""

    def __init__(self, raw_fee: str, *, cause: Exception | None = None):
        super().__init__(f"Invalid fee amount {raw_fee!r}", cause=cause)
        self.raw_fee = raw_fee
