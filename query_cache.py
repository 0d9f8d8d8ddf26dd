"""
Project: Cafe POS
Date: October 2026

Description:
Client-side query cache. Reads are cached under tuple keys until they are
invalidated; mutations declare which keys they invalidate on success.
Nothing is retried, and failures are handed back in the result instead of
being raised.
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple

log = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]

IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"


class QueryResult:
    def __init__(self, status: str, data: Any = None, error: Optional[BaseException] = None) -> None:
        self.status = status
        self.data = data
        self.error = error

    @property
    def is_idle(self) -> bool:
        return self.status == IDLE

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == ERROR

    def __repr__(self) -> str:
        return f"QueryResult(status={self.status!r}, data={self.data!r}, error={self.error!r})"


class MutationResult:
    def __init__(self, data: Any = None, error: Optional[BaseException] = None) -> None:
        self.data = data
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


def _matches(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


class _Entry:
    def __init__(self, result: QueryResult) -> None:
        self.result = result
        self.stale = False


class _Observer:
    def __init__(self, key: QueryKey, fetcher: Callable[[], Any], callback: Callable[[QueryResult], None]) -> None:
        self.key = key
        self.fetcher = fetcher
        self.callback = callback


class QueryCache:
    def __init__(self) -> None:
        self._entries: Dict[QueryKey, _Entry] = {}
        self._observers: List[_Observer] = []

    def is_stale(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def query(self, key: QueryKey, fetcher: Callable[[], Any], enabled: bool = True) -> QueryResult:
        """Cached data for `key`, fetching when missing, stale or previously failed."""
        if not enabled:
            return QueryResult(IDLE)
        entry = self._entries.get(key)
        if entry is not None and entry.result.is_success and not entry.stale:
            return entry.result
        return self._fetch(key, fetcher)

    def _fetch(self, key: QueryKey, fetcher: Callable[[], Any]) -> QueryResult:
        previous = self._entries.get(key)
        previous_data = previous.result.data if previous else None
        self._notify(key, QueryResult(LOADING, data=previous_data))
        try:
            result = QueryResult(SUCCESS, data=fetcher())
        except Exception as e:
            log.warning("Query %r failed: %s", key, e)
            result = QueryResult(ERROR, data=previous_data, error=e)
        self._entries[key] = _Entry(result)
        self._notify(key, result)
        return result

    def _notify(self, key: QueryKey, result: QueryResult) -> None:
        for obs in list(self._observers):
            if obs.key == key:
                obs.callback(result)

    def subscribe(self, key: QueryKey, fetcher: Callable[[], Any], callback: Callable[[QueryResult], None]) -> Callable[[], None]:
        """
        Observes `key`: the callback gets the current result right away and
        every result after that, including refetches caused by invalidation.
        Returns a function that ends the subscription.
        """
        obs = _Observer(key, fetcher, callback)
        self._observers.append(obs)
        entry = self._entries.get(key)
        if entry is not None and entry.result.is_success and not entry.stale:
            callback(entry.result)
        else:
            self._fetch(key, fetcher)

        def unsubscribe() -> None:
            if obs in self._observers:
                self._observers.remove(obs)

        return unsubscribe

    def invalidate(self, *prefixes: QueryKey) -> None:
        """Marks every entry under the given key prefixes stale and refetches the observed ones."""
        refetch: Dict[QueryKey, Callable[[], Any]] = {}
        for prefix in prefixes:
            for key, entry in self._entries.items():
                if _matches(key, prefix):
                    entry.stale = True
            for obs in self._observers:
                if _matches(obs.key, prefix):
                    refetch.setdefault(obs.key, obs.fetcher)
        for key, fetcher in refetch.items():
            self._fetch(key, fetcher)


class Mutation:
    """A write operation plus the query keys it invalidates when it succeeds."""

    def __init__(self, fn: Callable[..., Any], invalidates: Iterable[QueryKey] = ()) -> None:
        self.fn = fn
        self.invalidates = tuple(invalidates)

    def run(self, cache: QueryCache, *args: Any, **kwargs: Any) -> MutationResult:
        try:
            data = self.fn(*args, **kwargs)
        except Exception as e:
            log.warning("Mutation %s failed: %s", getattr(self.fn, "__name__", self.fn), e)
            return MutationResult(error=e)
        cache.invalidate(*self.invalidates)
        return MutationResult(data=data)
