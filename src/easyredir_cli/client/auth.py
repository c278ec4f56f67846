"""Authentication and idempotency for EasyRedir API requests."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Generator

import httpx

from easyredir_cli.config.constants import IDEMPOTENCY_HEADER
from easyredir_cli.config.models import Credentials

logger = logging.getLogger(__name__)

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH"})


def new_idempotency_key() -> str:
    return str(uuid.uuid4())


class EasyredirAuth(httpx.BasicAuth):
    """HTTP Basic auth with the API key and secret.

    Mutating requests (POST, PUT, PATCH) also get a fresh
    ``Idempotency-Key`` header unless the caller already set one.
    """

    def __init__(self, credentials: Credentials) -> None:
        super().__init__(credentials.key, credentials.secret)

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        if request.method in MUTATING_METHODS and IDEMPOTENCY_HEADER not in request.headers:
            request.headers[IDEMPOTENCY_HEADER] = new_idempotency_key()
            logger.debug(
                "Attached %s %s to %s %s",
                IDEMPOTENCY_HEADER,
                request.headers[IDEMPOTENCY_HEADER],
                request.method,
                request.url.path,
            )
        yield from super().auth_flow(request)
