"""Test suite for the terminal front-end."""

import asyncio

from mailstream.app.app import MailstreamApp
from mailstream.app.app_config import AppConfig
from mailstream.app.widgets.results_table import ResultsTable
from mailstream.search.command import SearchConfig
from mailstream.search.session import short_query_notice
from tests.test_utils import line, sexp_record


def test_short_query_shows_prompt(search_config: SearchConfig):
    """Typing fewer characters than the minimum shows the prompt."""

    async def main() -> list[str]:
        app = MailstreamApp(AppConfig(search=search_config, debounce_delay=0.0))
        async with app.run_test() as pilot:
            await pilot.press("a", "b")
            await pilot.pause(0.2)
            return app.query_one(ResultsTable).candidates

    assert asyncio.run(main()) == [short_query_notice(3)]


def test_results_and_selection(fake_mu, search_config: SearchConfig):
    """Results stream in and Enter exits with the message-id."""
    fake_mu(chunks=[sexp_record("a@x", "Hello there") + sexp_record("b@x", "Hello again")])

    async def main() -> tuple[list[str], str | None]:
        app = MailstreamApp(AppConfig(search=search_config, debounce_delay=0.0), initial_query="hello")
        async with app.run_test() as pilot:
            table = app.query_one(ResultsTable)
            for _ in range(200):
                if len(table.candidates) == 2:
                    break
                await pilot.pause(0.05)
            candidates = list(table.candidates)
            await pilot.press("down", "enter")
            await pilot.pause(0.1)
        return candidates, app.return_value

    candidates, chosen = asyncio.run(main())
    assert candidates == [line("a@x", "Hello there"), line("b@x", "Hello again")]
    assert chosen == "b@x"
