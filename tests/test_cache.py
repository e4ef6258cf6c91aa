import pytest
import redis
from unittest.mock import MagicMock, patch

from skillforge.utils.cache import CacheService


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def cache(client):
    with patch("skillforge.utils.cache.redis.from_url", return_value=client):
        return CacheService("redis://test:6379/0")


def test_connection_pinged_on_init(cache, client):
    client.ping.assert_called_once()
    assert cache.enabled


def test_unreachable_redis_disables_cache():
    client = MagicMock()
    client.ping.side_effect = redis.ConnectionError("refused")
    with patch("skillforge.utils.cache.redis.from_url", return_value=client):
        cache = CacheService("redis://nowhere:6379/0")

    assert not cache.enabled
    assert cache.get("k") is None
    assert cache.set("k", [1]) is False


def test_get_hit(cache, client):
    client.get.return_value = '[{"question": "x"}]'
    assert cache.get("k") == [{"question": "x"}]
    client.get.assert_called_once_with("k")


def test_get_miss(cache, client):
    client.get.return_value = None
    assert cache.get("k") is None


def test_get_error(cache, client):
    client.get.side_effect = redis.TimeoutError("slow")
    assert cache.get("k") is None


def test_set_uses_ttl(cache, client):
    assert cache.set("k", {"a": 1}, ttl=30) is True
    client.setex.assert_called_once_with("k", 30, '{"a": 1}')


def test_set_error(cache, client):
    client.setex.side_effect = redis.ConnectionError("gone")
    assert cache.set("k", {"a": 1}) is False


def test_questions_key_ignores_topic_case(cache):
    assert cache.questions_key(" React Hooks ", "Advanced", 3) == "questions:react hooks:Advanced:3"
