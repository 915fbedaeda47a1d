from rich.console import Console
from rich.prompt import Confirm, Prompt

from cm_ui.tui.core.protocols import Form


class RichForm(Form):
    def __init__(self, console: Console):
        self._console = console

    def ask(self, prompt: str, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(prompt, console=self._console)
        return Prompt.ask(prompt, console=self._console, default=default)

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return Confirm.ask(prompt, console=self._console, default=default)
