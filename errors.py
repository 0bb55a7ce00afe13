from typing import Optional


class NetworkError(Exception):
    """Base class for failures raised by the transport client."""

    default_message = "Network request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class InvalidRequestError(NetworkError):
    default_message = "Invalid request"


class InvalidResponseError(NetworkError):
    default_message = "Invalid response"


class ServerError(NetworkError):
    default_message = "Server error"

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"Server error (HTTP {status_code})")
        self.status_code = status_code


class DecodeError(NetworkError):
    default_message = "Response body could not be decoded"


class TransportError(NetworkError):
    default_message = "Network connection failed"


class ApiError(Exception):
    """Failure reported by a use-case. Presentation code only reads ``message``."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.args[0]


class UnknownError(ApiError):
    pass
