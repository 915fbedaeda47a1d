"""View models shared by the CLI and the interactive browser."""

from cm_app.viewmodels.menu_view import MenuViewModel

__all__ = ["MenuViewModel"]
