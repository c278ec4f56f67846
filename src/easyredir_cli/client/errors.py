"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

from easyredir_cli.models.common import ErrorDetail

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class EasyredirCLIError(Exception):
    """Base exception for easyredir-cli."""

    exit_code: int = 1


class EasyredirConnectionError(EasyredirCLIError):
    """Cannot reach the API (connection refused, DNS, timeout)."""

    exit_code = 2


class APIError(EasyredirCLIError):
    """Structured error returned by the API.

    Mirrors the error body ``{type, message, errors: [...]}``. Each entry
    of ``errors`` names the resource and parameter that was rejected.
    """

    exit_code = 3

    def __init__(
        self,
        type: str,
        message: str = "",
        errors: list[ErrorDetail] | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        self.type = type
        self.message = message
        self.errors = list(errors or [])
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message:
            return f"{self.type}: {self.message}"
        return self.type


class RateLimitError(EasyredirCLIError):
    """The API rejected the request with 429 Too Many Requests.

    Header values are kept as the raw strings the server sent.
    """

    exit_code = 4

    def __init__(self, limit: str = "", remaining: str = "", reset: str = "") -> None:
        self.limit = limit
        self.remaining = remaining
        self.reset = reset
        super().__init__(str(self))

    def __str__(self) -> str:
        return (
            f"rate limited with limit: {self.limit}, "
            f"remaining: {self.remaining}, reset: {self.reset}"
        )


class HTTPStatusError(EasyredirCLIError):
    """Non-success status whose body is not a decodable API error."""

    exit_code = 5

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"received status code: {status_code}")


class ConfigurationError(EasyredirCLIError):
    """Missing or invalid CLI configuration."""

    exit_code = 6


class ValidationError(EasyredirCLIError):
    """A response did not match what the request asked for."""

    exit_code = 7

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or "Validation error")


class DecodeError(EasyredirCLIError):
    """A success response body could not be decoded."""

    exit_code = 8


class RequestError(EasyredirCLIError):
    """The request could not be built (bad URL or method)."""

    exit_code = 9


class PaginationError(EasyredirCLIError):
    """Fetching one page of a multi-page listing failed.

    ``page`` is the zero-based index of the failing page. Records gathered
    from the pages before it are kept on ``partial``; they are never
    returned as a successful result.
    """

    def __init__(
        self,
        page: int,
        reason: str,
        *,
        partial: list[Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.page = page
        self.reason = reason
        self.partial = list(partial or [])
        self.cause = cause
        super().__init__(f"unable to get page {page}: {reason}")

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        if isinstance(self.cause, EasyredirCLIError):
            return self.cause.exit_code
        return 1


def error_handler(func: F) -> F:
    """Decorator that catches EasyredirCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except EasyredirCLIError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            cause = exc.cause if isinstance(exc, PaginationError) else exc
            if isinstance(cause, APIError):
                for detail in cause.errors:
                    err_console.print(f"  [red]-[/] {detail}")
            if isinstance(cause, RateLimitError) and cause.reset:
                err_console.print(f"[yellow]Retry after reset: {cause.reset}[/]")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
