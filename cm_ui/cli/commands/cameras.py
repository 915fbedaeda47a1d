from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cm_app.api import create_record_from_archive, export_archive
from cm_common.errors import CMError
from cm_ui.cli.commands.helpers import fail, resolve_camera
from cm_ui.presenters.menu import build_catalog_table
from cm_ui.wiring.dependencies import UIContext


def create_cameras_app(ctx: UIContext) -> typer.Typer:
    """Build the cameras Typer app, wired to the given context."""
    app = typer.Typer(help="List, import, export and delete cameras.", no_args_is_help=True)

    @app.command("list")
    def cameras_list() -> None:
        """Show every camera grouped by brand."""
        table = build_catalog_table(ctx.catalog)
        if not table.rows:
            ctx.ui.present.warning("No cameras found.")
            return
        ctx.ui.tables.show(table)

    @app.command("import")
    def cameras_import(
        archive: Path = typer.Argument(..., help="Zip holding one .csv, one .css and an optional .png"),
        name: Optional[str] = typer.Option(
            None,
            "--name",
            "-n",
            help="Display name; 'Brand Model' also sets brand and model.",
        ),
    ) -> None:
        """Import a camera bundle as a custom camera."""
        try:
            with ctx.ui.progress.status(f"Importing {archive.name}"):
                record = create_record_from_archive(archive, name)
                entry = ctx.catalog.add(record)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Imported {entry.label} as {entry.id}")

    @app.command("export")
    def cameras_export(
        camera: str = typer.Argument(..., help="Camera id to export"),
        output: Path = typer.Option(
            Path("."),
            "--output",
            "-o",
            help="Zip file to write, or a directory to write <css>.zip into.",
        ),
    ) -> None:
        """Write a camera back out as a zip bundle."""
        camera_id = resolve_camera(ctx, camera)
        entry = ctx.catalog.require(camera_id)
        try:
            target = export_archive(entry.record, output)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Exported {entry.label} to {target}")

    @app.command("delete")
    def cameras_delete(
        camera: str = typer.Argument(..., help="Custom camera id to delete"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    ) -> None:
        """Delete a custom camera."""
        camera_id = resolve_camera(ctx, camera)
        label = ctx.catalog.require(camera_id).label
        if not yes and not ctx.ui.form.confirm(f"Delete {label}?", default=False):
            ctx.ui.present.info("Nothing deleted.")
            return
        try:
            ctx.catalog.remove(camera_id)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Deleted {label}")

    @app.command("default")
    def cameras_default(
        camera: str = typer.Argument(..., help="Camera id opened when --camera is omitted"),
    ) -> None:
        """Remember the camera that menu and edit commands use by default."""
        camera_id = resolve_camera(ctx, camera)
        settings = ctx.settings.model_copy(update={"default_camera": camera_id})
        path = ctx.settings_service.save(settings)
        ctx.settings = settings
        ctx.ui.present.success(f"Default camera set to {camera_id} ({path})")

    return app
