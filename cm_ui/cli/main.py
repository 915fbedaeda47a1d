"""
Command-line interface for camera-menu-lib.

Lists and imports cameras, prints and searches their settings menus, opens
the interactive browser and applies structural edits.
"""

from __future__ import annotations

import typer

from cm_ui.cli.commands.cameras import create_cameras_app
from cm_ui.cli.commands.edit import create_edit_app
from cm_ui.cli.commands.menu import create_menu_app
from cm_ui.wiring.dependencies import UIContext, configure_logging

# Initialize global context (lazy)
ctx_store = UIContext()

cameras_app = create_cameras_app(ctx_store)
menu_app = create_menu_app(ctx_store)
edit_app = create_edit_app(ctx_store)

app = typer.Typer(help="Browse, search and edit camera settings menus.", no_args_is_help=True)


@app.callback(invoke_without_command=True)
def entry(
    ctx: typer.Context,
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force headless output (useful in CI).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level."),
) -> None:
    """Global entry point handling interactive vs headless modes."""
    configure_logging(debug=debug, force=True)
    ctx_store.headless = headless

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(cameras_app, name="cameras")
app.add_typer(menu_app, name="menu")
app.add_typer(edit_app, name="edit")


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
