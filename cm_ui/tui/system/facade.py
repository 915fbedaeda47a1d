from typing import Sequence

from rich.console import Console

from cm_ui.tui.core.protocols import UI, Form, MenuBrowser, Presenter, Progress, TablePresenter
from cm_ui.tui.system.components.form import RichForm
from cm_ui.tui.system.components.menu_browser import PromptToolkitMenuBrowser
from cm_ui.tui.system.components.presenter import RichPresenter
from cm_ui.tui.system.components.progress import RichProgress
from cm_ui.tui.system.components.table import RichTablePresenter
from cm_ui.tui.system.models import TableModel


class TUI(UI):
    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.tables: TablePresenter = RichTablePresenter(self.console)
        self.present: Presenter = RichPresenter(self.console)
        self.form: Form = RichForm(self.console)
        self.progress: Progress = RichProgress(self.console)
        self.browser: MenuBrowser = PromptToolkitMenuBrowser()

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        model = TableModel(title=title, columns=list(columns), rows=[list(r) for r in rows])
        self.tables.show(model)

    def show_renderable(self, renderable: object) -> None:
        self.console.print(renderable)
