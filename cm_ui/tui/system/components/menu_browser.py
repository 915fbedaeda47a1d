"""Full-screen prompt_toolkit browser for a camera menu, one column per level."""

from __future__ import annotations

import sys

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea

from cm_app.api import MenuViewModel
from cm_menu.api import MenuLevel, SearchMatch
from cm_ui.tui.core import theme
from cm_ui.tui.core.protocols import MenuBrowser

Fragments = list[tuple[str, str]]


class _MenuBrowserApp:
    """Full-screen column browser driven by a ``MenuViewModel``.

    The selection path always ends at the cursor: moving up and down
    re-selects at the deepest level, entering a category appends a level.
    """

    def __init__(self, view: MenuViewModel, title: str):
        self.view = view
        self.title = title
        self.match_cursor = 0
        if not view.selection.indices and view.tree.children:
            view.select(0, 0)

        self.search = TextArea(
            height=1,
            prompt="Search: ",
            multiline=False,
            style="class:search",
        )
        self.search.buffer.on_text_changed += lambda _: self._apply_query()

        body = HSplit(
            [
                Window(FormattedTextControl(self._render_path), height=1, style="class:path"),
                self.search,
                Window(height=1, char="-", style="class:separator"),
                VSplit(
                    [
                        Window(FormattedTextControl(self._render_list)),
                        Window(width=1, char="|", style="class:separator"),
                        Window(FormattedTextControl(self._render_preview), wrap_lines=True),
                    ],
                    padding=1,
                ),
                Window(FormattedTextControl(self._render_hints), height=1, style="class:help"),
            ]
        )
        self.app = Application(
            layout=Layout(Frame(body, title=title), focused_element=self.search),
            key_bindings=self._keybindings(),
            style=Style.from_dict(dict(theme.prompt_toolkit_browser_style())),
            full_screen=True,
        )

    def _current_level(self) -> MenuLevel | None:
        levels = self.view.levels()
        depth = len(self.view.selection) - 1
        if depth < 0 or depth >= len(levels):
            return levels[0] if levels else None
        return levels[depth]

    def _matches(self) -> list[SearchMatch]:
        return self.view.search_results() if self.view.query.strip() else []

    def _apply_query(self) -> None:
        self.view.set_query(self.search.text)
        self.match_cursor = 0
        self.app.invalidate()

    def _render_path(self) -> str:
        crumbs = self.view.breadcrumb()
        return "Path: " + (" > ".join(crumbs) if crumbs else self.title)

    def _render_list(self) -> Fragments:
        matches = self._matches()
        if self.view.query.strip():
            if not matches:
                return [("class:help", " No matches\n")]
            fragments: Fragments = []
            for idx, match in enumerate(matches):
                style = "class:selected" if idx == self.match_cursor else ""
                fragments.append((style, f" {' > '.join(match.breadcrumb)}\n"))
            return fragments

        level = self._current_level()
        if level is None:
            return [("class:help", " (empty menu)\n")]
        fragments = []
        for idx, node in enumerate(level.nodes):
            style = "class:selected" if idx == level.selected_index else ""
            if not style and not node.is_leaf:
                style = "class:category"
            fragments.append((style, f" {theme.node_marker(node.is_leaf)} {node.label}\n"))
        return fragments

    def _render_preview(self) -> Fragments:
        node = self.view.selected_node()
        if node is None:
            return []
        if self.view.help_mode:
            text = self.view.help_for_selected()
            return [("class:help", text or "No help for this item.")]
        if node.is_leaf:
            return [("class:title", node.label)]
        lines = [("class:title", f"{node.label}\n")]
        lines.extend(("", f"  {theme.node_marker(child.is_leaf)} {child.label}\n") for child in node.iter_children())
        return lines

    def _render_hints(self) -> str:
        mode = "on" if self.view.help_mode else "off"
        return f" ↑/↓ move  →/enter open  ←/backspace back  ? help ({mode})  esc quit"

    def _move(self, step: int) -> None:
        matches = self._matches()
        if matches:
            self.match_cursor = (self.match_cursor + step) % len(matches)
            return
        level = self._current_level()
        if level is None or not level.nodes:
            return
        current = level.selected_index or 0
        self.view.select(level.depth, (current + step) % len(level.nodes))

    def _open(self, event) -> None:
        matches = self._matches()
        if matches:
            self.view.jump_to_match(matches[self.match_cursor])
            self.search.text = ""
            return
        node = self.view.selected_node()
        if node is None:
            return
        if node.is_leaf:
            event.app.exit(result=list(self.view.selection.indices))
            return
        self.view.select(len(self.view.selection), 0)

    def _question_mark(self) -> None:
        """Toggle help on an empty query; otherwise type the character."""
        if self.search.text:
            self.search.buffer.insert_text("?")
        else:
            self.view.toggle_help()

    def _keybindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("down")
        def _(e) -> None:
            self._move(1)
            self.app.invalidate()

        @kb.add("up")
        def _(e) -> None:
            self._move(-1)
            self.app.invalidate()

        @kb.add("enter")
        @kb.add("right")
        def _(e) -> None:
            self._open(e)
            self.app.invalidate()

        @kb.add("backspace")
        @kb.add("left")
        def _(e) -> None:
            if self.search.text:
                self.search.text = self.search.text[:-1]
            elif len(self.view.selection) > 1:
                self.view.back()
            self.app.invalidate()

        @kb.add("?")
        def _(e) -> None:
            self._question_mark()
            self.app.invalidate()

        @kb.add("escape")
        @kb.add("c-c")
        def _(e) -> None:
            e.app.exit(result=None)

        return kb

    def run(self) -> list[int] | None:
        return self.app.run()


class PromptToolkitMenuBrowser(MenuBrowser):
    def browse(self, view: MenuViewModel, *, title: str) -> list[int] | None:
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            return None
        return _MenuBrowserApp(view, title).run()
