"""Smoke tests for the Textual UI, driven through the app pilot."""

import asyncio

from paperjournal.paper import Pattern
from paperjournal.ui import JournalHomeScreen, PaperJournalApp, SettingsModal

APP_CFG = {"fetch_fonts": False, "surface": [200, 250], "paper": {"pattern": "dotted"}}


def _run(scenario):
    asyncio.run(scenario())


def test_home_screen_saves_draft(config_home):
    async def scenario():
        app = PaperJournalApp(cfg=dict(APP_CFG))
        async with app.run_test() as pilot:
            await pilot.pause()
            screen = app.screen
            assert isinstance(screen, JournalHomeScreen)
            assert app.surface.size == (200, 250)
            assert app.shell.config.pattern is Pattern.DOTTED

            screen.body_in.text = "hello"
            await pilot.pause()
            await screen.action_save()
            await pilot.pause()

            entries = app.shell.store.list()
            assert len(entries) == 1
            assert entries[0].title == "Entry 1"
            assert screen.title_in.value == "Entry 1"

    _run(scenario)


def test_config_change_repaints_surface(config_home):
    async def scenario():
        app = PaperJournalApp(cfg=dict(APP_CFG))
        async with app.run_test() as pilot:
            await pilot.pause()
            before = app.surface.repaints
            app.shell.set_pattern("grid")
            await pilot.pause()
            assert app.surface.repaints == before + 1
            assert app.surface.config.pattern is Pattern.GRID

            app.screen.action_settings()
            await pilot.pause()
            assert isinstance(app.screen, SettingsModal)

    _run(scenario)
