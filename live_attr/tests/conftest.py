"""
Fixtures for live_attr unit tests.
"""

import pytest

from live_attr.manager import LiveAttrManager
from live_attr.persistence.memory import InMemoryRepository
from shared.test_helpers import DummyMetrics, InMemoryRedis

from live_models import Article


@pytest.fixture
def redis_client():
    """Create an in-memory Redis double."""
    return InMemoryRedis()


@pytest.fixture
def metrics():
    """Create a metrics collector stub."""
    return DummyMetrics()


@pytest.fixture
def repository():
    """Create an empty article repository."""
    return InMemoryRepository(Article)


@pytest.fixture
def manager(redis_client, repository, metrics):
    """Create a manager for articles."""
    return LiveAttrManager(Article, redis_client, repository, metrics=metrics)


@pytest.fixture
def article(repository):
    """Create an article persisted straight into the repository."""
    document = Article(id="a1", url="https://example.com/a1", view=50, rating=2.5, title="Hello")
    repository.save(document)
    return document
