"""
HTTP client for the AirBrB backend.

Sends JSON requests with optional bearer auth, retries idempotent reads on
rate limiting and server errors, and turns every failure into a
``ClientError`` subclass so callers only handle one family of exceptions.
"""

import re
import time
from typing import Any, Dict, Optional, Type, TypeVar, cast

import requests
import structlog
from pydantic import BaseModel, ValidationError

from airbrb_client.config import BACKEND_URL, REQUEST_TIMEOUT
from airbrb_client.errors import ApiError, ProtocolError, TransportError
from airbrb_client.metrics import api_latency, api_requests

logger = structlog.get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "Request failed"
MAX_RETRIES = 2
RETRY_DELAY = 0.5

ModelT = TypeVar("ModelT", bound=BaseModel)


def should_retry(res: Optional[requests.Response], err: Optional[Exception]) -> bool:
    """
    Determine whether a request should be retried based on response or error.

    Args:
        res (Optional[requests.Response]): Response object if available.
        err (Optional[Exception]): Exception raised by the request, if any.

    Returns:
        bool: True if the request should be retried, False otherwise.
    """
    if res is not None and res.status_code == 429:
        return True
    if isinstance(err, requests.Timeout):
        return True
    if res is not None and 500 <= res.status_code < 600:
        return True
    return False


def endpoint_label(path: str) -> str:
    """Collapse numeric path segments so metrics stay low-cardinality."""
    return re.sub(r"/\d+(?=/|$)", "/:id", path)


def error_message(data: Any) -> str:
    """
    Extract the user-facing message from an error body.

    Args:
        data: Decoded JSON body (any shape)

    Returns:
        str: The body's ``error`` or ``message`` string, else "Request failed"
    """
    if isinstance(data, dict):
        for field in ("error", "message"):
            value = data.get(field)
            if isinstance(value, str) and value:
                return value
    return DEFAULT_ERROR_MESSAGE


def _decode(res: requests.Response) -> Any:
    try:
        return res.json()
    except ValueError:
        return {}


def request(
    method: str,
    path: str,
    token: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Send one request to the backend and return its decoded JSON object.

    Args:
        method (str): HTTP method.
        path (str): Backend path, e.g. '/bookings'.
        token (Optional[str]): Bearer token to send, if any.
        payload (Optional[Dict[str, Any]]): JSON body, if any.

    Returns:
        Dict[str, Any]: Decoded response body ({} when the body is empty).

    Raises:
        TransportError: The backend could not be reached.
        ApiError: The backend answered with a non-2xx status.
        ProtocolError: The backend answered 2xx with a non-object body.
    """
    method = method.upper()
    url = f"{BACKEND_URL.rstrip('/')}{path}"
    label = endpoint_label(path)
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    retries = 0

    while True:
        res: Optional[requests.Response] = None
        try:
            logger.debug("Requesting %s %s", method, path)

            start_time = time.time()
            res = requests.request(
                method, url, headers=headers, json=payload, timeout=REQUEST_TIMEOUT
            )
            latency = time.time() - start_time

            api_requests.labels(endpoint=label, method=method, status_code=str(res.status_code)).inc()
            api_latency.labels(endpoint=label).observe(latency)
        except requests.RequestException as err:
            api_requests.labels(endpoint=label, method=method, status_code="error").inc()
            logger.warning("Error requesting %s %s: %s", method, path, str(err))
            retries += 1
            if method != "GET" or retries > MAX_RETRIES or not should_retry(None, err):
                raise TransportError(f"Unable to reach the server: {err}") from err
            time.sleep(RETRY_DELAY * retries)
            continue

        if method == "GET" and should_retry(res, None) and retries < MAX_RETRIES:
            retries += 1
            logger.warning(
                "Retrying %s %s after status %s (attempt %d)",
                method,
                path,
                res.status_code,
                retries,
            )
            time.sleep(RETRY_DELAY * retries)
            continue

        data = _decode(res)

        if not 200 <= res.status_code < 300:
            message = error_message(data)
            logger.info("request_rejected", path=path, status_code=res.status_code, error=message)
            raise ApiError(message, res.status_code)

        if not isinstance(data, dict):
            raise ProtocolError(f"Unexpected response body from {label}")

        return cast(Dict[str, Any], data)


def parse_response(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """
    Validate a decoded response body against its schema.

    Args:
        model: Pydantic model describing the response envelope
        data: Decoded JSON body

    Returns:
        The validated model instance

    Raises:
        ProtocolError: If the body does not match the schema
    """
    try:
        return model.model_validate(data)
    except ValidationError as err:
        logger.warning("response_rejected", model=model.__name__, errors=err.error_count())
        raise ProtocolError(f"Malformed {model.__name__} from server") from err
