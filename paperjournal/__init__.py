# -*- coding: utf-8 -*-
"""PaperJournal package.

Modules:
    paper:     PaperConfig value type, patterns, fonts, field validation.
    render:    Pattern renderer (Pillow raster) and terminal preview.
    layout:    Text metrics derived from the paper config.
    store:     In-memory ordered entry store.
    logic:     Config/logging/fonts plus the EditorShell state machine.
    ui:        Textual-based UI (screens, modals, app).
    theme.css: Textual CSS theme (loaded by ui.py).
"""

__all__ = ["layout", "logic", "paper", "render", "store", "ui"]
