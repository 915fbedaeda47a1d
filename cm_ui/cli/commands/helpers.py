"""Argument parsing and error reporting shared by the command groups."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer

from cm_common.errors import CMError, error_to_payload
from cm_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)


def parse_path(text: Optional[str]) -> tuple[int, ...]:
    """Parse ``"0.2.1"`` into ``(0, 2, 1)``; blank text addresses the root."""
    if text is None or not text.strip():
        return ()
    try:
        indices = tuple(int(part) for part in text.strip().split("."))
    except ValueError:
        raise typer.BadParameter(f"Expected dot-separated indices such as 0.2.1, got {text!r}")
    if any(index < 0 for index in indices):
        raise typer.BadParameter(f"Menu indices must be >= 0, got {text!r}")
    return indices


def fail(ctx: UIContext, exc: CMError) -> NoReturn:
    logger.debug("Command failed: %s", error_to_payload(exc), exc_info=exc)
    ctx.ui.present.error(str(exc))
    raise typer.Exit(1)


def resolve_camera(ctx: UIContext, camera: Optional[str]) -> str:
    """Return the camera to act on: explicit, then the configured default, then the first one."""
    catalog = ctx.catalog
    if camera:
        if catalog.get(camera) is None:
            ctx.ui.present.error(f"Unknown camera: {camera}")
            raise typer.Exit(1)
        return camera
    camera_id = catalog.default_id(ctx.settings.default_camera)
    if camera_id is None:
        ctx.ui.present.error("No cameras available. Import one with `cm cameras import`.")
        raise typer.Exit(1)
    return camera_id


def camera_option() -> Optional[str]:
    return typer.Option(
        None,
        "--camera",
        "-c",
        help="Camera id; defaults to the configured default camera.",
    )
