from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

CATEGORY_MARKER = "▸"
LEAF_MARKER = "•"
HELP_STYLE = "italic dim"
ICON_STYLE = "magenta"


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def node_marker(is_leaf: bool) -> str:
    return LEAF_MARKER if is_leaf else CATEGORY_MARKER


def prompt_toolkit_browser_style() -> Mapping[str, str]:
    return {
        "selected": "bg:#0000aa fg:white bold",
        "category": "fg:#0000aa",
        "separator": "fg:#0000aa",
        "frame.border": "fg:#0000aa",
        "frame.label": "fg:#0000aa bold",
        "search": "bg:#eeeeee fg:#000000",
        "help": "fg:#888888 italic",
        "path": "fg:blue bold underline",
        "title": "bold",
    }
