"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="dwatch",
    help="driftwatch - Find deployed artifacts that lag behind their registries.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    from driftwatch.cli.commands.outdated_cmd import app as outdated_app
    from driftwatch.cli.commands.available_cmd import app as available_app
    from driftwatch.cli.commands.artifacts_cmd import app as artifacts_app
    from driftwatch.cli.commands.watch_cmd import app as watch_app
    from driftwatch.cli.commands.check_version_cmd import app as check_version_app

    app.add_typer(outdated_app, name="outdated", help="List outdated artifacts")
    app.add_typer(available_app, name="available", help="Show available versions per artifact")
    app.add_typer(artifacts_app, name="artifacts", help="List tracked artifacts")
    app.add_typer(watch_app, name="watch", help="Refresh periodically until interrupted")
    app.add_typer(check_version_app, name="check-version", help="Analyze versions without a registry")


_register_commands()


def main() -> None:
    app()
