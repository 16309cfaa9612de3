"""Tests for the HTTP endpoints."""

import base64
import json
from unittest.mock import patch

import jwt
import pytest
from fastapi.testclient import TestClient

from src.config import AUTH_COOKIE_NAMES
from src.db.postgres_client import get_db
from src.main import app, get_current_user_id


@pytest.fixture
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = lambda: "u1"
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def portfolio_id(client):
    response = client.post(
        "/api/portfolio/createPortfolio",
        params={"userID": "u1", "biography": "Backend developer", "names": ["Ada", "Lovelace"]},
    )
    assert response.status_code == 200
    return response.json()["id"]


class TestApi:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_portfolio(self, client, portfolio_id):
        response = client.get("/api/portfolio/getPortfolioById", params={"portfolioID": portfolio_id})

        assert response.status_code == 200
        data = response.json()
        assert data["person_id"] == "u1"
        assert data["names"] == ["Ada", "Lovelace"]
        assert data["projects"] == []

    def test_create_portfolio_twice(self, client, portfolio_id):
        response = client.post(
            "/api/portfolio/createPortfolio",
            params={"userID": "u1", "biography": "Again", "names": ["Ada"]},
        )

        assert response.status_code == 400
        assert "already exists" in response.text
        assert response.headers["content-type"].startswith("text/plain")

    def test_create_portfolio_for_someone_else(self, client):
        response = client.post(
            "/api/portfolio/createPortfolio",
            params={"userID": "u2", "biography": "Not mine", "names": ["Bob"]},
        )

        assert response.status_code == 401

    def test_missing_cookie_is_unauthorized(self, client, portfolio_id):
        del app.dependency_overrides[get_current_user_id]

        response = client.patch(
            "/api/portfolio/editBiography",
            params={"portfolioID": portfolio_id, "biography": "Hijacked"},
        )

        assert response.status_code == 401
        assert response.text == "No cookie found"

    def test_cookie_authenticates_user(self, client, portfolio_id):
        del app.dependency_overrides[get_current_user_id]
        access_token = jwt.encode({"sub": "u1"}, "signing-key-for-the-test-suite-only!", algorithm="HS256")
        payload = json.dumps({"access_token": access_token, "refresh_token": "refresh"}).encode()
        encoded = "base64-" + base64.b64encode(payload).decode()
        client.cookies.set(AUTH_COOKIE_NAMES[0], encoded[:30])
        client.cookies.set(AUTH_COOKIE_NAMES[1], encoded[30:])

        with patch("src.utils.token_decoder.SUPABASE_JWT_SECRET", ""):
            response = client.patch(
                "/api/portfolio/editBiography",
                params={"portfolioID": portfolio_id, "biography": "Data engineer"},
            )

        assert response.status_code == 200
        assert response.json()["biography"] == "Data engineer"

    def test_get_portfolio_errors(self, client):
        assert client.get("/api/portfolio/getPortfolioById", params={"portfolioID": "nope"}).status_code == 400

        response = client.get(
            "/api/portfolio/getPortfolioById",
            params={"portfolioID": "6f1c2b9e-8a51-4f67-9c3d-1d2e3f4a5b6c"},
        )
        assert response.status_code == 404
        assert response.text == "Portfolio not found."

    def test_add_social_media_links(self, client, portfolio_id):
        links = json.dumps([{"type": "GitHub", "value": "https://github.com/u1"}])

        response = client.post(
            "/api/portfolio/addSocialMediaLinks",
            params={"portfolioID": portfolio_id, "socialMediaLinks": links},
        )

        assert response.status_code == 200
        assert [link["type"] for link in response.json()["social_media_links"]] == ["github"]

    def test_add_social_media_links_bad_json(self, client, portfolio_id):
        response = client.post(
            "/api/portfolio/addSocialMediaLinks",
            params={"portfolioID": portfolio_id, "socialMediaLinks": "[{not json"},
        )

        assert response.status_code == 400

    def test_projects_and_categories(self, client, portfolio_id):
        response = client.put(
            "/api/portfolio/addProjects",
            params={"portfolioID": portfolio_id, "projects": ["https://github.com/u1/portfi"]},
        )
        project_id = response.json()["projects"][0]["id"]

        response = client.post(
            "/api/project/addCategoriesToProject",
            params={"projectID": project_id, "categories": ["Web", "backend"]},
        )
        assert response.status_code == 200
        assert sorted(response.json()["categories"]) == ["backend", "web"]

        response = client.post(
            "/api/project/addCategoriesToProject",
            params={"projectID": project_id, "categories": ["spaceship"]},
        )
        assert response.status_code == 400

        response = client.delete("/api/project/removeProjectByProjectId", params={"projectID": project_id})
        assert response.status_code == 200
        assert response.json()["projects"] == []

    def test_public_endpoints_need_no_cookie(self, client, portfolio_id):
        del app.dependency_overrides[get_current_user_id]

        client.post("/api/portfolio/likePortfolio", params={"portfolioID": portfolio_id})
        client.post("/api/portfolio/recordView", params={"portfolioID": portfolio_id})
        response = client.post("/api/portfolio/recordDownload", params={"portfolioID": portfolio_id})

        assert response.status_code == 200
        data = response.json()
        assert data["likes"] == 1
        assert [view["viewer_id"] for view in data["views"]] == ["anonymous"]
        assert len(data["downloads"]) == 1

    def test_share_links(self, client, portfolio_id):
        response = client.post(
            "/api/portfolio/createShareLink",
            params={"portfolioID": portfolio_id, "lifetimeHours": 2},
        )
        assert response.status_code == 200
        assert response.json()["is_expired"] is False

        response = client.get("/api/portfolio/getShareLinks", params={"portfolioID": portfolio_id})
        assert len(response.json()) == 1

    def test_unexpected_error_is_generic_500(self, client, portfolio_id):
        with patch(
            "src.services.portfolio_service.PortfolioService.like_portfolio",
            side_effect=RuntimeError("connection reset"),
        ):
            response = client.post("/api/portfolio/likePortfolio", params={"portfolioID": portfolio_id})

        assert response.status_code == 500
        assert response.text == "Internal server error"
