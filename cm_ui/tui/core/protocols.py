from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager, Protocol

from cm_ui.tui.system.models import TableModel

if TYPE_CHECKING:
    from cm_app.api import MenuViewModel


class TablePresenter(Protocol):
    def show(self, table: TableModel) -> None: ...


class Presenter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def panel(
        self,
        message: str,
        title: str | None = None,
        border_style: str | None = None,
    ) -> None: ...


class Form(Protocol):
    def ask(self, prompt: str, default: str | None = None) -> str: ...

    def confirm(self, prompt: str, default: bool = True) -> bool: ...


class Progress(Protocol):
    def status(self, message: str) -> ContextManager[None]: ...


class MenuBrowser(Protocol):
    def browse(self, view: "MenuViewModel", *, title: str) -> list[int] | None:
        """Run an interactive session; return the final selection or None on abort."""
        ...


class UI(Protocol):
    tables: TablePresenter
    present: Presenter
    form: Form
    progress: Progress
    browser: MenuBrowser

    def show_renderable(self, renderable: object) -> None: ...
