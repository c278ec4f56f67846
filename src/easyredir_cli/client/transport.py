"""EasyRedir HTTP transport.

Every call sends exactly one request and either returns the success
response or raises one typed error:

* 429 raises :class:`RateLimitError` from the ``X-Ratelimit-*`` headers,
  without looking at the body.
* Any other status outside ``[200, 400)`` raises :class:`APIError` when the
  body decodes as an API error, otherwise :class:`HTTPStatusError`.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from easyredir_cli.client.auth import MUTATING_METHODS, EasyredirAuth
from easyredir_cli.client.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    EasyredirConnectionError,
    HTTPStatusError,
    RateLimitError,
    RequestError,
)
from easyredir_cli.config.constants import IDEMPOTENCY_HEADER, MEDIA_TYPE
from easyredir_cli.config.models import CredentialProfile
from easyredir_cli.models.common import ErrorResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


class Request(BaseModel):
    """A single API call: method, path with query string, optional JSON body.

    ``idempotency_key`` pins the key for mutating requests so a retry can
    reuse it. When unset, a fresh key is generated for every send.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    body: Any = None
    idempotency_key: str | None = None


class Sender(Protocol):
    """Anything that can turn a :class:`Request` into a success response."""

    def send(self, request: Request, *, timeout: float | None = None) -> httpx.Response: ...


def decode(response: httpx.Response, model: type[M]) -> M:
    """Decode a success response body into *model*."""
    try:
        return model.model_validate_json(response.content)
    except PydanticValidationError as exc:
        target = f"{response.request.method} {response.request.url.path}"
        raise DecodeError(f"unable to decode response from {target}: {exc}") from exc


class EasyredirClient:
    """Synchronous HTTP client for the EasyRedir REST API."""

    def __init__(self, profile: CredentialProfile) -> None:
        credentials = profile.credentials
        if credentials is None:
            raise ConfigurationError(
                f"Profile '{profile.name}' has no API key and secret configured."
            )
        self.profile = profile
        self.base_url = profile.base_url
        # Retrying is left to the caller; see RateLimitError.
        transport = httpx.HTTPTransport(retries=0)
        self._client = httpx.Client(
            auth=EasyredirAuth(credentials),
            timeout=profile.timeout,
            transport=transport,
            headers={"Content-Type": MEDIA_TYPE, "Accept": MEDIA_TYPE},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> EasyredirClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        status = response.status_code
        if status == 429:
            err = RateLimitError(
                limit=response.headers.get("X-Ratelimit-Limit", ""),
                remaining=response.headers.get("X-Ratelimit-Remaining", ""),
                reset=response.headers.get("X-Ratelimit-Reset", ""),
            )
            logger.warning("%s", err)
            raise err
        if 200 <= status < 400:
            return response
        try:
            body = ErrorResponse.model_validate_json(response.content)
        except PydanticValidationError:
            logger.debug("Undecodable error body for status %d: %r", status, response.text[:200])
            raise HTTPStatusError(status) from None
        raise APIError(body.type, body.message, body.errors, status_code=status)

    def send(self, request: Request, *, timeout: float | None = None) -> httpx.Response:
        method = request.method.upper()
        if method not in METHODS:
            raise RequestError(f"unsupported method: {request.method}")
        headers: dict[str, str] = {}
        if request.idempotency_key and method in MUTATING_METHODS:
            headers[IDEMPOTENCY_HEADER] = request.idempotency_key
        try:
            http_request = self._client.build_request(
                method,
                f"{self.base_url}{request.path}",
                json=request.body,
                headers=headers,
                timeout=timeout if timeout is not None else self.profile.timeout,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise RequestError(f"unable to create a new request: {exc}") from exc

        logger.debug("%s %s", method, http_request.url)
        try:
            response = self._client.send(http_request)
        except httpx.UnsupportedProtocol as exc:
            raise RequestError(f"unable to create a new request: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise EasyredirConnectionError(
                f"Request to {self.base_url} timed out: {exc}"
            ) from exc
        except httpx.TransportError as exc:
            raise EasyredirConnectionError(
                f"Cannot connect to {self.base_url}: {exc}"
            ) from exc
        logger.debug("%s %s -> %d", method, http_request.url.path, response.status_code)
        return self._handle_response(response)

    def request(self, method: str, path: str, body: Any = None, **kwargs: Any) -> httpx.Response:
        return self.send(Request(method=method, path=path, body=body), **kwargs)

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, body: Any = None, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, body, **kwargs)

    def patch(self, path: str, body: Any = None, **kwargs: Any) -> httpx.Response:
        return self.request("PATCH", path, body, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", path, **kwargs)
