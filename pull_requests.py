"""GitHub pull request section for the day page.

Fetches open pull requests for the configured repositories and keeps the ones
matching the author/label filters.
IMPORTANT: A failed fetch never aborts page creation; the section is dropped.
"""

import asyncio
from typing import List, Optional, Set

import httpx
from pydantic import BaseModel, Field, SecretStr, field_serializer, field_validator

from logger_config import setup_logger
from rendering import fill_template

logger = setup_logger(__name__, 'pull_requests.log')

GITHUB_API_URL = "https://api.github.com"
GITHUB_TIMEOUT = 10.0
PER_PAGE = 50

DEFAULT_PRS_TEMPLATE = """## Pull Requests:

{prs}
"""
PR_LINE = "* [ ] `{title}` on [{repo}]({url}) by {author}"


class Auth(BaseModel):
    """GitHub credentials. The token is never printed."""
    personal_access_token: SecretStr

    @field_serializer("personal_access_token")
    def _mask(self, value: SecretStr) -> str:
        return "***"


class Pr(BaseModel):
    """The parts of a pull request shown in the journal."""
    author: str
    labels: Set[str] = Field(default_factory=set)
    repo: str
    title: str
    url: str

    @classmethod
    def from_api(cls, raw: dict) -> "Pr":
        """Build from one item of GitHub's `GET /repos/{owner}/{repo}/pulls`."""
        return cls(
            author=raw["user"]["login"],
            labels={label["name"] for label in raw.get("labels") or []},
            repo=raw["base"]["repo"]["full_name"],
            title=raw["title"],
            url=raw["html_url"],
        )


class LocalFilter(BaseModel):
    """Client-side filter; empty sets match everything."""
    authors: Set[str] = Field(default_factory=set)
    labels: Set[str] = Field(default_factory=set)

    def apply(self, pr: Pr) -> bool:
        applies = True
        if self.authors:
            applies = applies and pr.author in self.authors
        if self.labels:
            applies = applies and bool(self.labels & pr.labels)
        return applies


class PrSelector(LocalFilter):
    """One repository plus the filter applied to its open pull requests."""
    repo: str

    @field_validator("repo")
    def _owner_and_name(cls, v: str):  # noqa: N805
        parts = v.split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f'"{v}" did not have exactly 2 components')
        return v

    @property
    def owner(self) -> str:
        return self.repo.split("/")[0]

    @property
    def name(self) -> str:
        return self.repo.split("/")[1]


class PullRequestConfig(BaseModel):
    """Configuration for how journal gets outstanding pull requests."""
    enabled: bool = True
    auth: Auth
    select: List[PrSelector] = Field(default_factory=list)
    template: Optional[str] = None


async def get_prs(client: httpx.AsyncClient, selector: PrSelector) -> List[Pr]:
    """All open pull requests of one repository that pass its filter.

    Raises:
        httpx.HTTPError: On network failures or non-2xx responses
    """
    logger.info(f"Getting PRs for org={selector.owner} repo={selector.name}")

    url = f"/repos/{selector.owner}/{selector.name}/pulls"
    params = {"state": "open", "per_page": PER_PAGE}
    prs = []
    while url:
        response = await client.get(url, params=params)
        response.raise_for_status()
        prs.extend(pr for pr in map(Pr.from_api, response.json()) if selector.apply(pr))

        # The next link already carries the query string
        url = response.links.get("next", {}).get("url")
        params = None
        if url:
            logger.info(f"Getting next page of PRs for org={selector.owner} repo={selector.name}")

    return prs


async def get_matching_prs(
    config: PullRequestConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Pr]:
    """Fetch all selectors concurrently and concatenate their results in config order."""
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {config.auth.personal_access_token.get_secret_value()}",
    }
    logger.info(f"Selections for PRs: {[s.repo for s in config.select]}")

    async with httpx.AsyncClient(
        base_url=GITHUB_API_URL,
        headers=headers,
        timeout=GITHUB_TIMEOUT,
        transport=transport,
    ) as client:
        # Every fetch settles before the client closes; the first failure wins
        results = await asyncio.gather(
            *(get_prs(client, selector) for selector in config.select),
            return_exceptions=True,
        )

    for result in results:
        if isinstance(result, BaseException):
            raise result

    return [pr for prs in results for pr in prs]


async def fetch_pull_requests(
    config: PullRequestConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[List[Pr]]:
    """Like get_matching_prs, but returns None instead of raising on failure."""
    try:
        return await get_matching_prs(config, transport=transport)
    except httpx.TimeoutException:
        logger.error("Timeout while getting pull requests from GitHub")
        return None
    except httpx.HTTPError as e:
        logger.error(f"Failed to get pull requests from GitHub: {str(e)}")
        return None
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Unexpected pull request payload from GitHub: {str(e)}")
        return None


def render_pull_requests(prs: List[Pr], template: Optional[str] = None) -> str:
    """Markdown section listing the pull requests as checklist items."""
    lines = "\n".join(
        PR_LINE.format(title=pr.title, repo=pr.repo, url=pr.url, author=pr.author) for pr in prs
    )
    return fill_template(template or DEFAULT_PRS_TEMPLATE, "pull_requests", prs=lines)
