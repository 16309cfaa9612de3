"""Public GitHub repository lookup with a Redis cache in front."""

import logging

import httpx
import redis

from src.config import GITHUB_API_URL, GITHUB_CACHE_TTL, GITHUB_TIMEOUT, GITHUB_TOKEN
from src.db.redis_client import redis_client
from src.exceptions import GitHubFetchError, InvalidRequestError
from src.models.schemas import GitHubRepository
from src.services.interfaces import GitHubServiceInterface

logger = logging.getLogger(__name__)


class GitHubService(GitHubServiceInterface):
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.transport = transport

    def _cache_key(self, username: str) -> str:
        return f"github_repos:{username.lower()}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if GITHUB_TOKEN:
            headers["Authorization"] = f"Bearer {GITHUB_TOKEN}"
        return headers

    def _get_cached(self, username: str) -> list[GitHubRepository] | None:
        try:
            cached = redis_client.get_json(self._cache_key(username))
        except redis.RedisError as e:
            logger.warning(f"Redis unavailable, skipping GitHub cache read: {e}")
            return None

        if cached is None:
            return None
        return [GitHubRepository.model_validate(item) for item in cached]

    def _set_cached(self, username: str, repositories: list[GitHubRepository]) -> None:
        try:
            redis_client.set_json(
                self._cache_key(username),
                [repo.model_dump() for repo in repositories],
                ttl=GITHUB_CACHE_TTL,
            )
        except redis.RedisError as e:
            logger.warning(f"Redis unavailable, skipping GitHub cache write: {e}")

    async def get_repositories(self, username: str) -> list[GitHubRepository]:
        """
        Public repositories of a GitHub user.

        Args:
            username: GitHub login

        Returns:
            Repositories, one entry per repository id
        """
        username = (username or "").strip()
        if not username:
            raise InvalidRequestError("GitHub username is required.")

        cached = self._get_cached(username)
        if cached is not None:
            return cached

        url = f"{GITHUB_API_URL}/users/{username}/repos"
        try:
            async with httpx.AsyncClient(timeout=GITHUB_TIMEOUT, transport=self.transport) as client:
                resp = await client.get(url, headers=self._headers())
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GitHub API error {e.response.status_code} for {username}")
            raise GitHubFetchError(f"GitHub returned {e.response.status_code} for user `{username}`.")
        except httpx.RequestError as e:
            logger.error(f"GitHub API request failed: {e}")
            raise GitHubFetchError("Failed to connect to GitHub.")

        if not isinstance(payload, list):
            raise GitHubFetchError("Unexpected response from GitHub.")

        repositories: dict[int, GitHubRepository] = {}
        for item in payload:
            repo = GitHubRepository.model_validate(item)
            repositories.setdefault(repo.id, repo)

        result = list(repositories.values())
        self._set_cached(username, result)
        return result
