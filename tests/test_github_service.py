"""Tests for GitHubService."""

import asyncio
from unittest.mock import patch

import httpx
import pytest
import redis

from src.config import GITHUB_CACHE_TTL
from src.exceptions import GitHubFetchError, InvalidRequestError
from src.models.schemas import GitHubRepository
from src.services.github_service import GitHubService

REPOSITORIES = [
    {
        "id": 1,
        "name": "portfi",
        "full_name": "octocat/portfi",
        "html_url": "https://github.com/octocat/portfi",
        "description": "Portfolio builder",
        "language": "Python",
        "stargazers_count": 12,
    },
    {
        "id": 2,
        "name": "dotfiles",
        "full_name": "octocat/dotfiles",
        "html_url": "https://github.com/octocat/dotfiles",
        "description": None,
        "language": None,
    },
]


class TestGitHubService:
    @pytest.fixture
    def mock_redis(self):
        with patch("src.services.github_service.redis_client") as mock_redis:
            mock_redis.get_json.return_value = None
            yield mock_redis

    @pytest.fixture
    def requests(self):
        return []

    def make_service(self, requests, status_code=200, payload=None):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, json=REPOSITORIES if payload is None else payload)

        return GitHubService(transport=httpx.MockTransport(handler))

    def test_fetches_repositories(self, mock_redis, requests):
        service = self.make_service(requests)

        result = asyncio.run(service.get_repositories("octocat"))

        assert [repo.full_name for repo in result] == ["octocat/portfi", "octocat/dotfiles"]
        assert result[1].language is None
        assert requests[0].url.path == "/users/octocat/repos"
        mock_redis.set_json.assert_called_once_with(
            "github_repos:octocat",
            [repo.model_dump() for repo in result],
            ttl=GITHUB_CACHE_TTL,
        )

    def test_deduplicates_by_id(self, mock_redis, requests):
        service = self.make_service(requests, payload=REPOSITORIES + [REPOSITORIES[0]])

        result = asyncio.run(service.get_repositories("octocat"))

        assert [repo.id for repo in result] == [1, 2]

    def test_cache_hit_skips_github(self, mock_redis, requests):
        mock_redis.get_json.return_value = [
            GitHubRepository.model_validate(REPOSITORIES[0]).model_dump(),
        ]
        service = self.make_service(requests)

        result = asyncio.run(service.get_repositories("octocat"))

        assert [repo.id for repo in result] == [1]
        assert requests == []

    def test_unavailable_cache_is_bypassed(self, mock_redis, requests):
        mock_redis.get_json.side_effect = redis.ConnectionError("connection refused")
        mock_redis.set_json.side_effect = redis.ConnectionError("connection refused")
        service = self.make_service(requests)

        result = asyncio.run(service.get_repositories("octocat"))

        assert len(result) == 2
        assert len(requests) == 1

    def test_error_status_raises(self, mock_redis, requests):
        service = self.make_service(requests, status_code=404, payload={"message": "Not Found"})

        with pytest.raises(GitHubFetchError, match="404"):
            asyncio.run(service.get_repositories("nobody"))

        mock_redis.set_json.assert_not_called()

    def test_transport_error_raises(self, mock_redis):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = GitHubService(transport=httpx.MockTransport(handler))

        with pytest.raises(GitHubFetchError, match="Failed to connect"):
            asyncio.run(service.get_repositories("octocat"))

    def test_blank_username(self, mock_redis):
        with pytest.raises(InvalidRequestError):
            asyncio.run(GitHubService().get_repositories("  "))
