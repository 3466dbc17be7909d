# -*- coding: utf-8 -*-
"""Textual UI for PaperJournal.

This file contains ONLY the UI: the home screen, the settings modal, and the
App wrapper. All state lives in ``logic.EditorShell``; the UI forwards user
input to the shell's setters/transitions and redraws from the shell.

Paper preview:
    The shell pushes every config change to the app's ``PaperSurface``
    (which repaints the raster in full) and then to the home screen, which
    shows a half-block preview of the raster and restyles the text area
    with the derived text metrics.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Label,
    ListItem,
    ListView,
    Select,
    Static,
    TextArea,
)

from .layout import derive_text_metrics
from .logic import (
    EditorShell,
    default_paper,
    entry_date_label,
    entry_preview,
    load_config,
    request_font_resources,
    save_config,
    surface_size,
)
from .paper import FONT_NAMES, PaperConfig, Pattern
from .render import PaperSurface, terminal_preview

THEME_CSS_PATH = str(Path(__file__).with_name("theme.css"))

PREVIEW_COLUMNS = 40

# Settings rows shown only for patterns that use them.
FIELD_PATTERNS = {
    "line_color": {Pattern.LINED, Pattern.DOTTED, Pattern.GRID, Pattern.COLLEGE},
    "line_width": {Pattern.LINED, Pattern.GRID, Pattern.COLLEGE},
    "line_spacing": {Pattern.LINED, Pattern.DOTTED, Pattern.GRID},
}

TEXT_FIELDS = (
    ("font_size", "Font size"),
    ("text_color", "Text color"),
    ("paper_color", "Paper color"),
    ("line_color", "Line color"),
    ("line_width", "Line width"),
    ("line_spacing", "Line spacing"),
)


# ---------------------------------------------------------------------------
# Modals
# ---------------------------------------------------------------------------

class SettingsModal(ModalScreen[None]):
    """Paper customization. Every field goes through the shell's validated setters."""

    BINDINGS = [Binding("escape", "app.pop_screen", "Close")]

    def compose(self) -> ComposeResult:
        cfg = self.app.shell.config
        with Container(id="modal-card"):
            yield Static("CUSTOMIZATION", classes="title")
            with Horizontal(classes="row"):
                yield Label("Font")
                yield Select(
                    [(name, name) for name in FONT_NAMES],
                    value=cfg.font,
                    allow_blank=False,
                    id="font",
                )
            with Horizontal(classes="row"):
                yield Label("Pattern")
                yield Select(
                    [(p.label, p.value) for p in Pattern],
                    value=cfg.pattern.value,
                    allow_blank=False,
                    id="pattern",
                )
            for name, label in TEXT_FIELDS:
                with Horizontal(classes="row", id=f"row_{name}"):
                    yield Label(label)
                    yield Input(value=str(getattr(cfg, name)), id=name)
            yield Static("Enter applies a field. Font size 12-32, line width 0.5-3 (step 0.5), spacing 20-50.", classes="hint")
            yield Horizontal(
                Button("Apply", id="apply", classes="-primary"),
                Button("Save as default", id="save_default"),
                Button("Close", id="close"),
            )

    def on_mount(self) -> None:
        self._sync_rows(self.app.shell.config)

    def _sync_rows(self, cfg: PaperConfig) -> None:
        for name, patterns in FIELD_PATTERNS.items():
            self.query_one(f"#row_{name}").display = cfg.pattern in patterns

    def _apply(self, name: str, value) -> bool:
        try:
            cfg = self.app.shell.set_config_field(name, value)
        except ValueError as exc:
            self.app.notify(str(exc), severity="error")
            return False
        self._sync_rows(cfg)
        return True

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id:
            self._apply(event.select.id, event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id:
            self._apply(event.input.id, event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id or ""
        if bid == "apply":
            ok = all([self._apply(name, self.query_one(f"#{name}", Input).value) for name, _ in TEXT_FIELDS])
            if ok:
                self.app.notify("Settings applied.")
        elif bid == "save_default":
            cfg = load_config()
            cfg["paper"] = self.app.shell.config.to_dict()
            save_config(cfg)
            logger.info("Saved paper defaults")
            self.app.notify("Saved as default paper.")
        elif bid == "close":
            self.app.pop_screen()


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------

class JournalHomeScreen(Screen):
    """Sidebar of entries, title bar, and the paper-backed writing area."""

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+n", "new_entry", "New"),
        Binding("f2", "settings", "Settings"),
        Binding("ctrl+d", "delete_highlighted", "Delete"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            with Vertical(id="sidebar"):
                yield Static("My Journal", classes="title")
                yield Horizontal(
                    Button("New Entry", id="new_entry", classes="-primary"),
                    Button("Delete", id="delete"),
                    id="sidebar-actions",
                )
                self.list_view = ListView(id="entries")
                yield self.list_view
            with Vertical(id="editor"):
                with Horizontal(id="toolbar"):
                    self.title_in = Input(placeholder="Entry Title...", id="title")
                    yield self.title_in
                    yield Button("Settings", id="open_settings")
                    yield Button("Save", id="save", classes="-primary")
                with Horizontal(id="sheet"):
                    self.body_in = TextArea(id="body")
                    yield self.body_in
                    self.paper = Static("", id="paper")
                    yield self.paper
                self.status = Static("", id="status", classes="hint")
                yield self.status
        yield Footer()

    async def on_mount(self) -> None:
        self._unsubscribe = self.app.shell.subscribe(self.apply_paper)
        await self.refresh_list()
        self.set_focus(self.body_in)

    def on_unmount(self) -> None:
        self._unsubscribe()

    # -- shell -> widgets ------------------------------------------------

    def apply_paper(self, cfg: PaperConfig) -> None:
        """Show the repainted raster and restyle the text area to match it."""
        self.paper.update(terminal_preview(self.app.surface.image, PREVIEW_COLUMNS))
        metrics = derive_text_metrics(cfg)
        self.body_in.styles.padding = metrics.to_cells()
        self.body_in.styles.background = cfg.paper_color
        self.body_in.styles.color = cfg.text_color
        self.status.update(
            f"{cfg.pattern.label} | {cfg.font} {cfg.font_size}px | "
            f"line height {metrics.line_height}px | margins {metrics.left_padding}/{metrics.right_padding}px"
        )

    def load_draft(self) -> None:
        shell = self.app.shell
        self.title_in.value = shell.title
        self.body_in.text = shell.content

    async def refresh_list(self) -> None:
        await self.list_view.clear()
        entries = self.app.shell.store.list()
        if not entries:
            self.list_view.append(ListItem(Label("No entries yet")))
            return
        for entry in entries:
            marker = "> " if entry.id == self.app.shell.selected_id else ""
            item = ListItem(Label(
                f"{marker}{entry.title}\n{entry_date_label(entry)}\n{entry_preview(entry.content)}",
                markup=False,
            ))
            item.entry_id = entry.id
            self.list_view.append(item)

    # -- widgets -> shell ------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "title":
            self.app.shell.set_title(event.value)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id == "body":
            self.app.shell.set_content(event.text_area.text)

    async def on_list_view_selected(self, message: ListView.Selected) -> None:
        entry_id = getattr(message.item, "entry_id", None)
        if entry_id is None:
            return
        try:
            self.app.shell.load_entry(entry_id)
        except Exception as exc:
            self.app.notify(str(exc))
            return
        self.load_draft()
        await self.refresh_list()

    async def action_save(self) -> None:
        shell = self.app.shell
        # sync from widgets in case a change message is still queued
        shell.set_title(self.title_in.value)
        shell.set_content(self.body_in.text)
        try:
            entry = shell.save()
        except Exception as exc:
            self.app.notify(str(exc))
            return
        if entry is None:
            return
        self.title_in.value = entry.title
        await self.refresh_list()
        self.app.notify("Entry saved")

    def action_new_entry(self) -> None:
        self.app.shell.new_entry()
        self.load_draft()
        self.set_focus(self.title_in)

    def action_settings(self) -> None:
        self.app.push_screen(SettingsModal())

    async def action_delete_highlighted(self) -> None:
        item = self.list_view.highlighted_child
        entry_id = getattr(item, "entry_id", None)
        if entry_id is None:
            return
        was_open = entry_id == self.app.shell.selected_id
        self.app.shell.delete_entry(entry_id)
        if was_open:
            self.load_draft()
        await self.refresh_list()
        self.app.notify("Entry deleted.")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id or ""
        if bid == "save":
            await self.action_save()
        elif bid == "new_entry":
            self.action_new_entry()
        elif bid == "delete":
            await self.action_delete_highlighted()
        elif bid == "open_settings":
            self.action_settings()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

class PaperJournalApp(App):
    """Textual App wrapper. Owns the shell and the paper surface, requests fonts once."""

    TITLE = "PaperJournal"
    CSS_PATH = THEME_CSS_PATH
    BINDINGS = [Binding("ctrl+q", "quit", "Quit")]

    def __init__(self, cfg: Optional[Dict[str, object]] = None, shell: Optional[EditorShell] = None) -> None:
        super().__init__()
        self.cfg = cfg if cfg is not None else load_config()
        self.shell = shell or EditorShell(config=default_paper(self.cfg))
        self.surface = PaperSurface(*surface_size(self.cfg))
        # the surface subscribes first so screens always see a fresh raster
        self.shell.subscribe(self.surface.repaint)

    async def on_mount(self) -> None:
        if self.cfg.get("fetch_fonts", True):
            self.run_worker(self._load_fonts, thread=True, exit_on_error=False)
        await self.push_screen(JournalHomeScreen())

    def _load_fonts(self) -> None:
        try:
            request_font_resources()
        except Exception as exc:
            logger.warning(f"Font stylesheet unavailable, using fallback faces: {exc}")


if __name__ == "__main__":
    import asyncio
    asyncio.run(PaperJournalApp().run_async())
