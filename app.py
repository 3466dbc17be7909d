#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Application entrypoint for PaperJournal.

This file is intentionally minimal. It sets up file logging and boots the
Textual UI app.
"""
from __future__ import annotations

import asyncio

from paperjournal.logic import load_config, setup_logging
from paperjournal.ui import PaperJournalApp


def main() -> None:
    """Run the Textual application."""
    cfg = load_config()
    setup_logging(str(cfg.get("log_level", "INFO")))
    asyncio.run(PaperJournalApp(cfg=cfg).run_async())


if __name__ == "__main__":
    main()
