from __future__ import annotations

from typing import Optional

import typer

from cm_app.api import EditSession
from cm_common.errors import CMError
from cm_menu.api import SelectionPath
from cm_ui.cli.commands.helpers import camera_option, fail, parse_path, resolve_camera
from cm_ui.presenters.menu import format_path
from cm_ui.wiring.dependencies import UIContext


def create_edit_app(ctx: UIContext) -> typer.Typer:
    """Build the edit Typer app, wired to the given context.

    Every command opens an edit session, applies one change and saves it.
    Built-in cameras are saved as a new custom camera.
    """
    app = typer.Typer(help="Edit camera menus.", no_args_is_help=True)

    def _open(camera: Optional[str], selection: tuple[int, ...] = ()) -> EditSession:
        return EditSession(ctx.catalog, resolve_camera(ctx, camera), SelectionPath(list(selection)))

    def _save(session: EditSession, original_id: str) -> None:
        entry = session.save()
        if entry.id != original_id:
            ctx.ui.present.info(f"Built-in camera {original_id} saved as custom camera {entry.id}")

    @app.command("rename")
    def edit_rename(
        path: str = typer.Argument(..., help="Entry to rename, such as 0.2.1"),
        label: str = typer.Argument(..., help="New label; an empty label deletes the entry"),
        camera: Optional[str] = camera_option(),
    ) -> None:
        """Rename a menu entry, keeping its icon and children."""
        indices = parse_path(path)
        try:
            session = _open(camera)
            original_id = session.camera_id
            session.editor.rename_node(indices, label)
            _save(session, original_id)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Renamed {path}" if label.strip() else f"Deleted {path}")

    @app.command("add-child")
    def edit_add_child(
        path: Optional[str] = typer.Argument(None, help="Parent entry; omit for a top-level entry"),
        camera: Optional[str] = camera_option(),
    ) -> None:
        """Append a placeholder entry under PATH."""
        try:
            session = _open(camera)
            original_id = session.camera_id
            new_path = session.editor.add_child(parse_path(path))
            _save(session, original_id)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Added entry at {format_path(new_path)}")

    @app.command("add-sibling")
    def edit_add_sibling(
        path: str = typer.Argument(..., help="Entry to add a sibling next to, such as 0.2"),
        camera: Optional[str] = camera_option(),
    ) -> None:
        """Append a placeholder entry next to PATH."""
        indices = parse_path(path)
        try:
            session = _open(camera, indices)
            original_id = session.camera_id
            new_path = session.editor.add_sibling()
            _save(session, original_id)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Added entry at {format_path(new_path)}")

    @app.command("delete")
    def edit_delete(
        path: str = typer.Argument(..., help="Entry to delete, such as 0.2.1"),
        camera: Optional[str] = camera_option(),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    ) -> None:
        """Delete a menu entry and everything below it."""
        indices = parse_path(path)
        try:
            session = _open(camera)
            label = session.editor.node_at(indices).label if indices else ""
            if not yes and not ctx.ui.form.confirm(f"Delete {label!r} and its children?", default=False):
                ctx.ui.present.info("Nothing deleted.")
                return
            original_id = session.camera_id
            session.editor.delete_node(indices)
            _save(session, original_id)
        except CMError as exc:
            fail(ctx, exc)
        ctx.ui.present.success(f"Deleted {label!r}")

    return app
