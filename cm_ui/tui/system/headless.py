import io
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import ContextManager, Sequence

from rich.console import Console

from cm_app.api import MenuViewModel
from cm_ui.tui.core.protocols import UI, Form, MenuBrowser, Presenter, Progress, TablePresenter
from cm_ui.tui.system.models import TableModel


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class HeadlessUI(UI):
    """Recording UI for tests and non-interactive runs."""

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)
    recorded_renderables: list[str] = field(default_factory=list)

    # Configuration for automated responses
    next_form_response: str = "default"
    next_confirm_response: bool = True
    next_browse_path: list[int] | None = None

    def __post_init__(self):
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)
        self.form = _HeadlessForm(self)
        self.progress = _HeadlessProgress(self)
        self.browser = _HeadlessMenuBrowser(self)

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        model = TableModel(title=title, columns=list(columns), rows=[list(r) for r in rows])
        self.tables.show(model)

    def show_renderable(self, renderable: object) -> None:
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(renderable)
        self.recorded_renderables.append(buffer.getvalue())


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def _record(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def info(self, message: str) -> None:
        self._record("info", message)

    def warning(self, message: str) -> None:
        self._record("warning", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def panel(
        self,
        message: str,
        title: str | None = None,
        border_style: str | None = None,
    ) -> None:
        self._ui.recorded_messages.append(f"PANEL: {title} - {message}")


class _HeadlessForm(Form):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def ask(self, prompt: str, default: str | None = None) -> str:
        return self._ui.next_form_response

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return self._ui.next_confirm_response


class _HeadlessProgress(Progress):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def status(self, message: str) -> ContextManager[None]:
        self._ui.recorded_messages.append(f"STATUS: {message}")
        return nullcontext()


class _HeadlessMenuBrowser(MenuBrowser):
    """Replay ``next_browse_path`` through the view model instead of reading keys."""

    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def browse(self, view: MenuViewModel, *, title: str) -> list[int] | None:
        self._ui.recorded_messages.append(f"BROWSE: {title}")
        if self._ui.next_browse_path is None:
            return None
        for level, index in enumerate(self._ui.next_browse_path):
            view.select(level, index)
        return list(view.selection.indices)
