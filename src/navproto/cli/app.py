"""Unified CLI entry point for navproto.

Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (NAVPROTO_* with double underscores).
"""

from __future__ import annotations

import typer

from navproto.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("navproto")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "navproto — fluent browser navigation chains. "
    "Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (NAVPROTO_* with __)."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context, version: bool = typer.Option(False, "--version", help="Show version and exit.")) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"navproto {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
