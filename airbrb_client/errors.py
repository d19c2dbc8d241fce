"""
Client error hierarchy.

  TransportError    - the backend could not be reached
  ApiError          - the backend answered with a non-2xx status
  ProtocolError     - the backend answered 2xx with a payload we cannot parse
  PreconditionError - a local check failed before any request was sent

Every error carries a user-facing ``message``.
"""


class ClientError(Exception):
    """Base client error."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportError(ClientError):
    pass


class ApiError(ClientError):
    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProtocolError(ClientError):
    pass


class PreconditionError(ClientError):
    pass


class NotAuthenticatedError(PreconditionError):
    def __init__(self, message: str = "Please log in first.") -> None:
        super().__init__(message)
