# -*- coding: utf-8 -*-
"""Application logic that composes the store, paper config and renderer.

This module provides the public API used by the UI. It does not contain any
Textual UI code. All side effects (config file, log file, the one font
request) are explicit and local.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional
from pathlib import Path
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import quote_plus
from urllib.request import Request, urlopen
import json
import os
import time

from loguru import logger

from .paper import FIELD_VALIDATORS, FONT_NAMES, PaperConfig
from .store import Entry, EntryStore

# ---------------------------------------------------------------------
# Config management (JSON on disk)
# ---------------------------------------------------------------------

APP_NAME = "paperjournal"

DEFAULT_CONFIG: Dict[str, object] = {
    "paper": PaperConfig().to_dict(),
    "surface": [800, 1000],
    "fetch_fonts": True,
    "log_level": "INFO",
}

def _config_dir() -> Path:
    """Return the config directory path for this platform."""
    if os.name == "nt":
        base = os.environ.get("APPDATA", os.path.expanduser("~\\AppData\\Roaming"))
        return Path(base) / APP_NAME
    base = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(base) / APP_NAME

def _config_path() -> Path:
    return _config_dir() / "config.json"

def load_config() -> Dict[str, object]:
    """Load the merged configuration (defaults + file)."""
    path = _config_path()
    if not path.exists():
        save_config(DEFAULT_CONFIG)
        return json.loads(json.dumps(DEFAULT_CONFIG))
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    merged = json.loads(json.dumps(DEFAULT_CONFIG))
    merged.update(data)
    return merged

def save_config(cfg: Dict[str, object]) -> None:
    """Persist *cfg* to the JSON config file."""
    _config_dir().mkdir(parents=True, exist_ok=True)
    with _config_path().open("w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)

def default_paper(cfg: Dict[str, object]) -> PaperConfig:
    """Return the configured default paper, falling back to built-in defaults."""
    try:
        return PaperConfig.from_dict(dict(cfg.get("paper") or {}))
    except ValueError as exc:
        logger.warning(f"Ignoring invalid paper defaults in config: {exc}")
        return PaperConfig()

def surface_size(cfg: Dict[str, object]) -> tuple[int, int]:
    try:
        width, height = (int(v) for v in cfg.get("surface", DEFAULT_CONFIG["surface"]))
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid surface size in config")
        return tuple(DEFAULT_CONFIG["surface"])
    if width <= 0 or height <= 0:
        logger.warning(f"Ignoring non-positive surface size {width}x{height}")
        return tuple(DEFAULT_CONFIG["surface"])
    return width, height


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------

def setup_logging(level: str = "INFO") -> Path:
    """Send logs to a file in the config dir; stderr would draw over the TUI."""
    _config_dir().mkdir(parents=True, exist_ok=True)
    log_path = _config_dir() / f"{APP_NAME}.log"
    logger.remove()
    logger.add(log_path, level=level, rotation="1 MB", retention=3)
    return log_path


# ---------------------------------------------------------------------
# Font resources
# ---------------------------------------------------------------------

FONT_CSS_BASE = "https://fonts.googleapis.com/css2"

# Weight axes requested per family; families not listed use the default.
FONT_WEIGHTS: Dict[str, str] = {
    "Caveat": "wght@400;700",
    "Kalam": "wght@300;400;700",
}

def font_css_url(families=FONT_NAMES) -> str:
    """Build the stylesheet URL that requests every family at once."""
    parts = []
    for family in families:
        spec = quote_plus(family)
        if family in FONT_WEIGHTS:
            spec += ":" + FONT_WEIGHTS[family]
        parts.append(f"family={spec}")
    return f"{FONT_CSS_BASE}?{'&'.join(parts)}&display=swap"

FONT_CSS_URL = font_css_url()

def request_font_resources(url: str = FONT_CSS_URL, timeout: float = 10.0) -> int:
    """Fetch the font stylesheet once and return the byte count.

    Callers run this in the background and never wait on it; text simply
    falls back to the default face until it arrives.
    """
    req = Request(url, headers={"User-Agent": f"{APP_NAME}/1.0"})
    with urlopen(req, timeout=timeout) as resp:
        body = resp.read()
    logger.info(f"Loaded font stylesheet ({len(body)} bytes) from {url}")
    return len(body)


# ---------------------------------------------------------------------
# Entry helpers
# ---------------------------------------------------------------------

def entry_preview(content: str, limit: int = 80) -> str:
    """First *limit* characters, with an ellipsis only if something was cut."""
    if len(content) <= limit:
        return content
    return content[:limit] + "..."

def entry_date_label(entry: Entry) -> str:
    """Local calendar date of *entry* for list display."""
    return datetime.fromisoformat(entry.date).astimezone().date().isoformat()

def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class IdSource:
    """Millisecond timestamps, bumped when needed to stay strictly increasing."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> int:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


# ---------------------------------------------------------------------
# Editor shell
# ---------------------------------------------------------------------

class EditorState(str, Enum):
    IDLE_NEW = "idle-new"
    EDITING = "editing"


ConfigObserver = Callable[[PaperConfig], None]


class EditorShell:
    """Owns the live draft, the current selection and the entry store.

    The draft is title + content + paper config. It mirrors a loaded entry
    without aliasing it, and only reaches the store on ``save``. Any change
    of the draft's config is pushed to subscribers (the paper surface).
    """

    def __init__(
        self,
        store: Optional[EntryStore] = None,
        config: Optional[PaperConfig] = None,
        *,
        id_source: Optional[Callable[[], int]] = None,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self.store = store if store is not None else EntryStore()
        self.title = ""
        self.content = ""
        self.config = config.copy() if config is not None else PaperConfig()
        self.selected_id: Optional[int] = None
        self._next_id = id_source or IdSource()
        self._clock = clock
        self._observers: List[ConfigObserver] = []

    @property
    def state(self) -> EditorState:
        return EditorState.IDLE_NEW if self.selected_id is None else EditorState.EDITING

    # -- observers -----------------------------------------------------

    def subscribe(self, observer: ConfigObserver, *, notify_now: bool = True) -> Callable[[], None]:
        """Call *observer* with the config after every change; returns an unsubscriber."""
        self._observers.append(observer)
        if notify_now:
            observer(self.config)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _config_changed(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self.config)
            except Exception as exc:
                logger.warning(f"Config observer {observer!r} failed: {exc}")

    # -- draft edits ---------------------------------------------------

    def set_title(self, title: str) -> None:
        self.title = title

    def set_content(self, content: str) -> None:
        self.content = content

    def set_config_field(self, name: str, value) -> PaperConfig:
        """Validate and apply one config field, then notify subscribers."""
        try:
            validator = FIELD_VALIDATORS[name]
        except KeyError:
            raise ValueError(f"Unknown paper setting {name!r}") from None
        self.config = self.config.with_(**{name: validator(value)})
        self._config_changed()
        return self.config

    def set_paper_color(self, value: str) -> PaperConfig:
        return self.set_config_field("paper_color", value)

    def set_pattern(self, value) -> PaperConfig:
        return self.set_config_field("pattern", value)

    def set_line_color(self, value: str) -> PaperConfig:
        return self.set_config_field("line_color", value)

    def set_line_width(self, value) -> PaperConfig:
        return self.set_config_field("line_width", value)

    def set_line_spacing(self, value) -> PaperConfig:
        return self.set_config_field("line_spacing", value)

    def set_font(self, value: str) -> PaperConfig:
        return self.set_config_field("font", value)

    def set_font_size(self, value) -> PaperConfig:
        return self.set_config_field("font_size", value)

    def set_text_color(self, value: str) -> PaperConfig:
        return self.set_config_field("text_color", value)

    # -- transitions ---------------------------------------------------

    def _clear_draft(self) -> None:
        self.selected_id = None
        self.title = ""
        self.content = ""

    def new_entry(self) -> None:
        """Start a fresh draft; the paper config is kept."""
        self._clear_draft()

    def load_entry(self, entry_id: int) -> Entry:
        """Copy a stored entry into the draft and select it."""
        entry = self.store.get(entry_id)
        self.selected_id = entry.id
        self.title = entry.title
        self.content = entry.content
        self.config = entry.config.copy()
        self._config_changed()
        logger.debug(f"Loaded entry {entry_id} into draft")
        return entry

    def save(self) -> Optional[Entry]:
        """Store the draft. Blank content is skipped silently (returns None)."""
        if not self.content.strip():
            return None
        title = self.title if self.title.strip() else f"Entry {len(self.store) + 1}"
        if self.selected_id is None:
            entry = Entry(
                id=self._next_id(),
                title=title,
                content=self.content,
                date=self._clock(),
                config=self.config.copy(),
            )
            self.store.create(entry)
            self.selected_id = entry.id
        else:
            entry = self.store.update(
                self.selected_id,
                title=title,
                content=self.content,
                date=self._clock(),
                config=self.config.copy(),
            )
        self.title = title
        return entry

    def delete_entry(self, entry_id: int) -> None:
        """Remove an entry; deleting the open one discards the draft."""
        self.store.remove(entry_id)
        if entry_id == self.selected_id:
            self._clear_draft()
            logger.info(f"Deleted open entry {entry_id}; draft cleared")
