"""Host endpoints."""

from __future__ import annotations

import functools

from easyredir_cli.client.errors import ValidationError
from easyredir_cli.client.pagination import paginate
from easyredir_cli.client.transport import Request, Sender, decode
from easyredir_cli.models.common import Collection, Item, ListOptions, Page
from easyredir_cli.models.host import Host
from easyredir_cli.resources.query import item_path, list_path

HOSTS_PATH = "/hosts"


def list_hosts(client: Sender, options: ListOptions | None = None) -> Page[Host]:
    path = list_path(HOSTS_PATH, options or ListOptions())
    response = client.send(Request(method="GET", path=path))
    return decode(response, Page[Host])


def list_all_hosts(
    client: Sender,
    options: ListOptions | None = None,
    *,
    max_pages: int | None = None,
) -> Collection[Host]:
    return paginate(functools.partial(list_hosts, client), options, max_pages=max_pages)


def get_host(client: Sender, host_id: str) -> Host:
    """Fetch one host, checking the API returned the one asked for."""
    response = client.send(Request(method="GET", path=item_path(HOSTS_PATH, host_id)))
    host = decode(response, Item[Host]).data
    if host.id != host_id:
        raise ValidationError(f"received incorrect host: {host.id}")
    return host
