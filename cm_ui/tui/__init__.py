"""
UI adapter package providing Rich-based and headless renderers.
"""

from cm_ui.tui.core.protocols import UI, Form, MenuBrowser, Presenter, Progress, TablePresenter
from cm_ui.tui.system.facade import TUI
from cm_ui.tui.system.headless import HeadlessUI

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "MenuBrowser",
    "TablePresenter",
    "Presenter",
    "Form",
    "Progress",
]
