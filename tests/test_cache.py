from trophy_cards.cache import KVCacheStore, MemoryCacheStore, get_cache_store
from trophy_cards.config import Settings


class FakeRedis:
    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail
        self.expiries = {}

    def get(self, key):
        if self.fail:
            raise ConnectionError("kv down")
        return self.data.get(key)

    def set(self, key, value):
        if self.fail:
            raise ConnectionError("kv down")
        self.data[key] = value

    def setex(self, key, ttl, value):
        self.expiries[key] = ttl
        self.set(key, value)


def test_memory_store_roundtrip():
    store = MemoryCacheStore()
    assert store.get("k") is None
    assert store.set("k", "v") is True
    assert store.get("k") == "v"
    assert len(store) == 1


def test_kv_store_without_ttl_uses_set():
    redis = FakeRedis()
    store = KVCacheStore(redis)
    assert store.set("v1-a", '{"x": 1}')
    assert store.get("v1-a") == '{"x": 1}'
    assert redis.expiries == {}


def test_kv_store_with_ttl_uses_setex():
    redis = FakeRedis()
    KVCacheStore(redis, ttl=60).set("v1-a", "{}")
    assert redis.expiries == {"v1-a": 60}


def test_kv_store_decodes_non_string_payloads():
    redis = FakeRedis()
    redis.data = {"bytes": b'{"a": 1}', "dict": {"a": 1}}
    store = KVCacheStore(redis)
    assert store.get("bytes") == '{"a": 1}'
    assert store.get("dict") == '{"a": 1}'


def test_kv_failures_degrade_to_miss():
    store = KVCacheStore(FakeRedis(fail=True))
    assert store.get("k") is None
    assert store.set("k", "v") is False


def test_store_selection():
    assert isinstance(get_cache_store(Settings()), MemoryCacheStore)
    configured = Settings(kv_url="https://kv.example.com", kv_token="secret", cache_ttl=30)
    store = get_cache_store(configured)
    assert isinstance(store, KVCacheStore)
    assert store.ttl == 30
