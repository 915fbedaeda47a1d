"""Rich console presenter for status messages and panels."""

from rich.console import Console
from rich.panel import Panel

from cm_ui.tui.core import theme
from cm_ui.tui.core.protocols import Presenter


class RichPresenter(Presenter):
    def __init__(self, console: Console) -> None:
        self._console = console

    def _emit(self, level: str, message: str) -> None:
        self._console.print(theme.presenter_message(level, message))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def panel(
        self,
        message: str,
        title: str | None = None,
        border_style: str | None = None,
    ) -> None:
        self._console.print(
            Panel(message, title=title, border_style=border_style or theme.RICH_BORDER_STYLE)
        )
