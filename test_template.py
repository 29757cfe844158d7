from datetime import date

import httpx
import pytest

from config import load_settings
from template import compose_day, render_day, render_reminders

TODAY = date(2021, 12, 24)


def test_title_and_sections():
    page = render_day("Some title", TODAY, ["## Notes\n\n> notes\n", "", "## TODOs\n\n* [ ] a todo\n"])

    assert page == "# Some title on 2021-12-24\n\n## Notes\n\n> notes\n\n## TODOs\n\n* [ ] a todo\n"


def test_render_reminders():
    assert render_reminders(["Buy milk", "Send email"]) == (
        "## Your reminders for today:\n\n* [ ] Buy milk\n* [ ] Send email\n"
    )


PR_CONFIG = (
    "notes:\n"
    "  enabled: false\n"
    "todo:\n"
    "  enabled: false\n"
    "pull_requests:\n"
    "  auth:\n"
    "    personal_access_token: abc\n"
    "  select:\n"
    "    - repo: felipesere/journal\n"
)


@pytest.mark.asyncio
async def test_pull_requests_section(journal_env):
    journal_env(PR_CONFIG)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{
            "title": "Fix the thing",
            "html_url": "https://github.com/felipesere/journal/pull/1",
            "user": {"login": "felipe"},
            "labels": [],
            "base": {"repo": {"full_name": "felipesere/journal"}},
        }])

    page = await compose_day(load_settings(), "Some title", TODAY, transport=httpx.MockTransport(handler))

    assert page == (
        "# Some title on 2021-12-24\n"
        "\n"
        "## Pull Requests:\n"
        "\n"
        "* [ ] `Fix the thing` on [felipesere/journal](https://github.com/felipesere/journal/pull/1) by felipe\n"
    )


@pytest.mark.asyncio
async def test_github_failure_drops_only_that_section(journal_env):
    journal_env(PR_CONFIG.replace("todo:\n  enabled: false\n", ""))

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    page = await compose_day(load_settings(), "Some title", TODAY, transport=httpx.MockTransport(handler))

    assert page == "# Some title on 2021-12-24\n\n## TODOs\n"
