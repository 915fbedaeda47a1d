from rich.console import Console

from cm_ui.tui.core import theme
from cm_ui.tui.core.protocols import TablePresenter
from cm_ui.tui.system.components.table_layout import build_rich_table
from cm_ui.tui.system.models import TableModel


class RichTablePresenter(TablePresenter):
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        self._console.print(
            build_rich_table(
                table,
                console=self._console,
                border_style=theme.RICH_BORDER_STYLE,
                header_style=theme.RICH_ACCENT_BOLD,
                title_style=theme.RICH_ACCENT_BOLD,
            )
        )
