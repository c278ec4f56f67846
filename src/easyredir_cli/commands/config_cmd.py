"""Config commands: manage credential profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from easyredir_cli.client.errors import error_handler
from easyredir_cli.commands._common import FormatOpt
from easyredir_cli.config.constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from easyredir_cli.config.manager import ConfigManager
from easyredir_cli.config.models import CredentialProfile
from easyredir_cli.output.formatter import output

app = typer.Typer(name="config", help="Manage credential profiles and CLI configuration.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


def _mask(value: str) -> str:
    return value[:4] + "..." if len(value) > 8 else "***"


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    api_key: Annotated[str, typer.Option("--api-key", "-k", help="API key")],
    api_secret: Annotated[
        str, typer.Option("--api-secret", "-s", help="API secret", prompt=True, hide_input=True),
    ],
    base_url: Annotated[str, typer.Option("--base-url", help="API base URL")] = DEFAULT_BASE_URL,
    timeout: Annotated[float, typer.Option("--timeout", help="Request timeout in seconds")] = DEFAULT_TIMEOUT,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add a credential profile."""
    mgr = _get_manager()
    profile = CredentialProfile(
        name=name,
        api_key=api_key,
        api_secret=api_secret,
        base_url=base_url,
        timeout=timeout,
    )
    mgr.add_profile(profile)
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: FormatOpt = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'easyredir config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    columns = ["Name", "API Key", "Base URL", "Default"]
    rows = [
        [name, _mask(p.api_key) if p.api_key else "", p.base_url, "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    output(
        {"profiles": [p.model_dump(exclude={"api_secret"}, exclude_none=True) for p in profiles.values()]},
        fmt,
        columns=columns,
        rows=rows,
        title="Credential Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: FormatOpt = "table",
) -> None:
    """Show profile details. The API secret is never printed."""
    mgr = _get_manager()
    profile = mgr.get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    data = profile.model_dump(exclude_none=True)
    if "api_key" in data:
        data["api_key"] = _mask(data["api_key"])
    if "api_secret" in data:
        data["api_secret"] = "***"
    output(data, fmt, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default credential profile."""
    mgr = _get_manager()
    if mgr.set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Check the credentials by fetching one rule."""
    from easyredir_cli.client.transport import EasyredirClient
    from easyredir_cli.models.common import ListOptions
    from easyredir_cli.resources.rules import list_rules

    mgr = _get_manager()
    profile = mgr.resolve_profile(profile_name=name)
    console.print(f"Testing credentials against [bold]{profile.base_url}[/]...")

    with EasyredirClient(profile) as client:
        list_rules(client, ListOptions(limit=1))
    console.print("[green]Authenticated.[/]")


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
) -> None:
    """Remove a credential profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force and not Confirm.ask(f"Remove profile '{name}'?"):
        console.print("Cancelled.")
        return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
