from query_cache import Mutation, QueryCache


class Counter:
    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        value = self.values.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


def test_query_caches_until_invalidated():
    cache = QueryCache()
    fetch = Counter([1, 2])
    assert cache.query(("k",), fetch).data == 1
    assert cache.query(("k",), fetch).data == 1
    assert fetch.calls == 1

    cache.invalidate(("k",))
    assert cache.is_stale(("k",))
    assert cache.query(("k",), fetch).data == 2


def test_disabled_query_stays_idle():
    cache = QueryCache()
    fetch = Counter([1])
    result = cache.query(("k",), fetch, enabled=False)
    assert result.is_idle
    assert fetch.calls == 0


def test_errors_are_returned_with_previous_data():
    cache = QueryCache()
    fetch = Counter(["old", RuntimeError("boom")])
    cache.query(("k",), fetch)
    cache.invalidate(("k",))
    result = cache.query(("k",), fetch)
    assert result.is_error
    assert str(result.error) == "boom"
    assert result.data == "old"


def test_invalidate_matches_prefixes():
    cache = QueryCache()
    cache.query(("/api/orders",), lambda: [])
    cache.query(("/api/orders", 1), lambda: {})
    cache.query(("/api/settings", "store_name"), lambda: "x")
    cache.invalidate(("/api/orders",))
    assert cache.is_stale(("/api/orders",))
    assert cache.is_stale(("/api/orders", 1))
    assert not cache.is_stale(("/api/settings", "store_name"))


def test_observers_refetch_on_invalidation():
    cache = QueryCache()
    fetch = Counter(["a", "b"])
    seen = []
    unsubscribe = cache.subscribe(("k",), fetch, lambda r: seen.append((r.status, r.data)))
    assert seen == [("loading", None), ("success", "a")]

    cache.invalidate(("k",))
    assert seen[-2:] == [("loading", "a"), ("success", "b")]

    unsubscribe()
    cache.invalidate(("k",))
    assert fetch.calls == 2


def test_mutation_invalidates_only_on_success():
    cache = QueryCache()
    cache.query(("k",), lambda: 1)

    failing = Mutation(Counter([ValueError("rejected")]), invalidates=[("k",)])
    result = failing.run(cache)
    assert not result.ok
    assert not cache.is_stale(("k",))

    ok = Mutation(lambda x: x * 2, invalidates=[("k",)])
    result = ok.run(cache, 21)
    assert result.ok and result.data == 42
    assert cache.is_stale(("k",))
