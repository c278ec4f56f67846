"""Path and query string building for list endpoints."""

from __future__ import annotations

from urllib.parse import quote

from easyredir_cli.models.common import ListOptions


def _encode(value: str) -> str:
    return quote(value, safe=":/")


def list_path(base: str, options: ListOptions) -> str:
    """Append *options* to *base* as a query string.

    Parameters are emitted in a fixed order (``starting_after``,
    ``ending_before``, ``sq``, ``tq``, ``limit``) and empty values are
    left out, so the same options always build the same path.
    """
    params: list[str] = []
    if options.starting_after:
        params.append(f"starting_after={_encode(options.starting_after)}")
    if options.ending_before:
        params.append(f"ending_before={_encode(options.ending_before)}")
    if options.source_filter:
        params.append(f"sq={_encode(options.source_filter)}")
    if options.target_filter:
        params.append(f"tq={_encode(options.target_filter)}")
    if options.limit:
        params.append(f"limit={options.limit}")
    if not params:
        return base
    return f"{base}?{'&'.join(params)}"


def item_path(base: str, item_id: str) -> str:
    if not item_id:
        raise ValueError("id must not be empty")
    return f"{base}/{quote(item_id, safe='')}"
