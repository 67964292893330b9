"""
Unit tests for writing live attributes back to the repository.
"""

from unittest.mock import MagicMock

from live_attr.cache.hash_store import HashStore
from live_attr.cache.keys import KeyDeriver
from live_attr.manager import LiveAttrManager
from live_attr.persistence.memory import InMemoryRepository
from live_attr.sync.reconcile import ReconciliationEngine

from live_models import Article, Status, Story


class TestUpdateDb:
    """Test cases for update_db."""

    def test_copies_cached_values_and_saves(self, manager, article, repository, redis_client):
        """Test cached values land in the document and the repository."""
        manager.incr_document(article, "view", 10)
        manager.incr_document(article, "rating", 0.5)
        assert redis_client.raw("Article", "a1_view") != str(article.view)

        assert manager.update_db(article) is True

        assert article.view == 60
        assert article.rating == 3.0
        assert repository.find("a1").view == 60
        assert redis_client.raw("Article", "a1_view") == str(article.view)

    def test_single_read_and_single_write(self, redis_client, article):
        """Test one HMGET and one save regardless of field count."""
        for field, value in (("view", 1), ("rating", 2.0), ("title", "t"), ("likes", 4)):
            redis_client.hset("Article", f"a1_{field}", value)
        redis_client.commands.clear()
        persist = MagicMock(return_value=True)
        engine = ReconciliationEngine(HashStore(redis_client, "Article"), KeyDeriver(Article), persist)

        engine.reconcile(article)

        assert [command[0] for command in redis_client.commands] == ["HMGET"]
        persist.assert_called_once_with(article)
        assert (article.view, article.rating, article.title, article.likes) == (1, 2.0, "t", 4)

    def test_absent_keys_leave_attributes_alone(self, manager, article, redis_client):
        """Test uncached attributes keep their in-memory value."""
        redis_client.hset("Article", "a1_view", 7)

        manager.update_db(article)

        assert article.view == 7
        assert article.rating == 2.5
        assert article.title == "Hello"

    def test_refreshes_snapshot(self, manager, article, redis_client):
        """Test the save hook rewrites the snapshot."""
        redis_client.hset("Article", "a1_view", 7)

        manager.update_db(article)

        assert Article.model_validate_json(redis_client.raw("Article", "a1")).view == 7

    def test_refused_save(self, redis_client, article, metrics):
        """Test a refused save reports failure and skips the snapshot."""
        repository = MagicMock()
        repository.save.return_value = False
        manager = LiveAttrManager(Article, redis_client, repository, metrics=metrics)
        redis_client.hset("Article", "a1_view", 7)

        assert manager.update_db(article) is False
        assert redis_client.raw("Article", "a1") is None
        assert metrics.count("live_attr_reconciliations_total", status="failed") == 1

    def test_writes_back_enum_attribute(self, redis_client):
        """Test an enum filled by a read is written back intact."""
        repository = InMemoryRepository(Story)
        manager = LiveAttrManager(Story, redis_client, repository)
        story = Story(id="s1", status=Status.PUBLISHED)
        repository.save(story)
        manager.get(story, "status")

        assert manager.update_db(story) is True
        assert repository.find("s1").status is Status.PUBLISHED
