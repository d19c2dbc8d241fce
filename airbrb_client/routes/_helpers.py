from fastapi import HTTPException, status

from airbrb_client.errors import (
    ApiError,
    ClientError,
    NotAuthenticatedError,
    PreconditionError,
    ProtocolError,
    TransportError,
)


def http_error(err: ClientError) -> HTTPException:
    """
    Map a client error to the HTTP error returned to the local caller.

    Backend rejections keep their status and message; transport and protocol
    failures become 502 since the local service itself is healthy.

    Args:
        err: Error raised by a service call

    Returns:
        HTTPException: Ready to raise
    """
    if isinstance(err, NotAuthenticatedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=err.message)
    if isinstance(err, PreconditionError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=err.message)
    if isinstance(err, ApiError):
        return HTTPException(status_code=err.status_code, detail=err.message)
    if isinstance(err, (TransportError, ProtocolError)):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=err.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=err.message)
