"""Tests for the generic Repository."""

import asyncio
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import Query

from src.models import Portfolio, Project
from src.repositories.repository import Repository


class TestRepository:
    @pytest.fixture
    def portfolios(self, session):
        return Repository(session, Portfolio)

    @pytest.fixture
    def saved_portfolio(self, portfolios):
        portfolio = Portfolio(person_id="u1", biography="Backend developer", person_names=["Ada", "Lovelace"])
        portfolios.add(portfolio)
        return portfolio

    def test_get_by_id_returns_added_entity(self, portfolios, saved_portfolio):
        found = portfolios.get_by_id(saved_portfolio.id)

        assert found is saved_portfolio
        assert found.person_names == ["Ada", "Lovelace"]

    def test_get_by_id_missing_returns_none(self, portfolios):
        assert portfolios.get_by_id(uuid.uuid4()) is None

    def test_add_applies_column_defaults(self, saved_portfolio):
        assert saved_portfolio.likes == 0
        assert saved_portfolio.is_public is True
        assert saved_portfolio.avatar == "default-avatar.jpg"
        assert saved_portfolio.created_on is not None

    def test_first_or_default(self, portfolios, saved_portfolio):
        assert portfolios.first_or_default(lambda p: p.person_id == "u1") is saved_portfolio
        assert portfolios.first_or_default(lambda p: p.person_id == "nobody") is None

    def test_first_or_default_where(self, portfolios, saved_portfolio):
        assert portfolios.first_or_default_where(Portfolio.person_id == "u1") is saved_portfolio
        assert portfolios.first_or_default_where(Portfolio.person_id == "nobody") is None

    def test_get_all_and_add_range(self, portfolios):
        portfolios.add_range(
            [
                Portfolio(person_id="u1", biography="first"),
                Portfolio(person_id="u2", biography="second"),
            ]
        )

        assert {p.person_id for p in portfolios.get_all()} == {"u1", "u2"}

    def test_get_all_attached_is_composable_query(self, portfolios, saved_portfolio):
        portfolios.add(Portfolio(person_id="u2", biography="second"))

        query = portfolios.get_all_attached()

        assert isinstance(query, Query)
        assert query.filter(Portfolio.person_id == "u2").one().biography == "second"

    def test_update_persists_changes(self, session, portfolios, saved_portfolio):
        saved_portfolio.biography = "Full-stack developer"

        assert portfolios.update(saved_portfolio) is True

        session.expire_all()
        assert portfolios.get_by_id(saved_portfolio.id).biography == "Full-stack developer"

    def test_add_rolls_back_and_reraises_when_commit_fails(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("database is gone")
        repository = Repository(session, Portfolio)

        with pytest.raises(RuntimeError, match="database is gone"):
            repository.add(Portfolio(person_id="u1", biography="bio"))

        session.rollback.assert_called_once()

    def test_add_range_rolls_back_and_reraises_when_commit_fails(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("database is gone")
        repository = Repository(session, Project)

        with pytest.raises(RuntimeError):
            repository.add_range([Project(source_code_link="https://github.com/u1/a")])

        session.rollback.assert_called_once()

    def test_update_returns_false_when_commit_fails(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("database is gone")
        repository = Repository(session, Portfolio)

        result = repository.update(Portfolio(person_id="u1", biography="bio"))

        assert result is False
        session.rollback.assert_called_once()

    def test_delete_removes_entity(self, session, saved_portfolio):
        projects = Repository(session, Project)
        project = Project(portfolio_id=saved_portfolio.id, source_code_link="https://github.com/u1/app")
        projects.add(project)
        project_id = project.id

        assert projects.delete(project) is True
        assert projects.get_by_id(project_id) is None

    def test_delete_returns_false_when_commit_fails(self):
        session = MagicMock()
        session.commit.side_effect = RuntimeError("database is gone")
        repository = Repository(session, Portfolio)

        assert repository.delete(Portfolio(person_id="u1", biography="bio")) is False
        session.rollback.assert_called_once()

    def test_async_variants(self, portfolios, saved_portfolio):
        async def run():
            found = await portfolios.get_by_id_async(saved_portfolio.id)
            everything = await portfolios.get_all_async()
            by_criteria = await portfolios.first_or_default_where_async(Portfolio.person_id == "u1")
            return found, everything, by_criteria

        found, everything, by_criteria = asyncio.run(run())

        assert found is saved_portfolio
        assert everything == [saved_portfolio]
        assert by_criteria is saved_portfolio
