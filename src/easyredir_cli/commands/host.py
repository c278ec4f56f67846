"""Host commands: list, show."""

from __future__ import annotations

from typing import Annotated

import typer

from easyredir_cli.client.errors import error_handler
from easyredir_cli.commands._common import (
    HOST_COLUMNS,
    AllOpt,
    ApiKeyOpt,
    ApiSecretOpt,
    EndingBeforeOpt,
    FormatOpt,
    LimitOpt,
    ProfileOpt,
    StartingAfterOpt,
    host_rows,
    make_client,
    more_caption,
)
from easyredir_cli.models.common import ListOptions
from easyredir_cli.output.formatter import output
from easyredir_cli.resources import hosts

app = typer.Typer(name="host", help="Inspect hosts.")


@app.command("list")
@error_handler
def list_hosts(
    limit: LimitOpt = 0,
    starting_after: StartingAfterOpt = "",
    ending_before: EndingBeforeOpt = "",
    fetch_all: AllOpt = False,
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List hosts."""
    options = ListOptions(
        starting_after=starting_after, ending_before=ending_before, limit=limit,
    )
    with make_client(profile, api_key, api_secret) as client:
        if fetch_all:
            result = hosts.list_all_hosts(client, options)
            has_more = False
        else:
            result = hosts.list_hosts(client, options)
            has_more = result.has_more
    output(
        result,
        fmt,
        columns=HOST_COLUMNS,
        rows=host_rows(result.data),
        title="Hosts",
        caption=more_caption(has_more, len(result.data)),
    )


@app.command()
@error_handler
def show(
    host_id: Annotated[str, typer.Argument(help="Host ID")],
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show host details."""
    with make_client(profile, api_key, api_secret) as client:
        host = hosts.get_host(client, host_id)
    output(host, fmt, title=f"Host: {host_id}")
