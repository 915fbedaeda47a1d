from __future__ import annotations

from typing import Optional

import typer

from cm_app.api import MenuViewModel
from cm_common.errors import CMError
from cm_menu.api import SelectionPath, breadcrumb, node_at, search
from cm_ui.cli.commands.helpers import camera_option, fail, parse_path, resolve_camera
from cm_ui.presenters.menu import (
    build_levels_table,
    build_menu_tree,
    build_search_table,
    format_path,
)
from cm_ui.wiring.dependencies import UIContext


def create_menu_app(ctx: UIContext) -> typer.Typer:
    """Build the menu Typer app, wired to the given context."""
    app = typer.Typer(help="Browse and search camera menus.", no_args_is_help=True)

    def _document(camera: Optional[str]):
        return ctx.catalog.document(resolve_camera(ctx, camera))

    @app.command("show")
    def menu_show(
        camera: Optional[str] = camera_option(),
        with_help: bool = typer.Option(False, "--with-help", help="Append help text to items."),
    ) -> None:
        """Print the whole menu tree."""
        try:
            document = _document(camera)
            if document.is_empty:
                ctx.ui.present.warning(f"Camera {document.document_id} has no menu entries.")
                return
            ctx.ui.show_renderable(build_menu_tree(document, show_help=with_help))
        except CMError as exc:
            fail(ctx, exc)

    @app.command("levels")
    def menu_levels(
        path: Optional[str] = typer.Argument(None, help="Selection such as 0.2.1"),
        camera: Optional[str] = camera_option(),
    ) -> None:
        """Show the menu columns visible for a selection."""
        try:
            view = MenuViewModel(_document(camera))
        except CMError as exc:
            fail(ctx, exc)
        view.selection.jump_to(parse_path(path))
        levels = view.levels()
        if not levels:
            ctx.ui.present.warning("The menu is empty.")
            return
        ctx.ui.tables.show(build_levels_table(levels))
        crumbs = view.breadcrumb()
        if crumbs:
            ctx.ui.present.info(" > ".join(crumbs))

    @app.command("search")
    def menu_search(
        query: str = typer.Argument(..., help="Text to look for in menu labels"),
        camera: Optional[str] = camera_option(),
        case_sensitive: bool = typer.Option(False, "--case-sensitive", help="Match case exactly."),
    ) -> None:
        """Find menu entries whose label contains QUERY."""
        try:
            document = _document(camera)
            matches = search(document.tree, query, case_insensitive=not case_sensitive)
        except CMError as exc:
            fail(ctx, exc)
        if not matches:
            ctx.ui.present.info(f"No matches for {query!r}.")
            return
        ctx.ui.tables.show(build_search_table(query, matches))

    @app.command("help")
    def menu_help(
        path: str = typer.Argument(..., help="Selection such as 0.2.1"),
        camera: Optional[str] = camera_option(),
    ) -> None:
        """Print the help text of one menu entry."""
        try:
            document = _document(camera)
        except CMError as exc:
            fail(ctx, exc)
        indices = parse_path(path)
        if not indices or node_at(document.tree, indices) is None:
            ctx.ui.present.error(f"No menu entry at {path}")
            raise typer.Exit(1)
        labels = breadcrumb(document.tree, indices)
        text = document.help_for(labels)
        if text is None:
            ctx.ui.present.warning(f"No help for {' > '.join(labels)}")
            return
        ctx.ui.present.panel(text, title=" > ".join(labels))

    @app.command("browse")
    def menu_browse(
        camera: Optional[str] = camera_option(),
        help_mode: bool = typer.Option(False, "--help-mode", help="Start with help previews on."),
    ) -> None:
        """Open the interactive column browser."""
        try:
            document = _document(camera)
        except CMError as exc:
            fail(ctx, exc)
        view = MenuViewModel(document, SelectionPath(), help_mode=help_mode)
        title = document.config.display_name or document.document_id
        result = ctx.ui.browser.browse(view, title=title)
        if result is None:
            ctx.ui.present.info("Browser closed without a selection.")
            return
        labels = breadcrumb(document.tree, result)
        ctx.ui.present.success(f"{format_path(result)}: {' > '.join(labels)}")
        help_text = document.help_for(labels)
        if help_text:
            ctx.ui.present.info(help_text)

    return app
