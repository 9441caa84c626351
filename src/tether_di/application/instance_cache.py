import threading
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, Hashable, Tuple

from tether_di.domain import Binding, ScopeError, describe_identifier


class InstanceCache:
    """Caches instances built from singleton or scoped bindings.

    Entries remember the binding that produced them and only count as a hit
    while that exact binding is asked for again, so replacing a registration
    never serves an instance built by the old factory.

    Each identifier is built under its own re-entrant lock. A short map lock
    guards the dictionaries and is never held while a factory runs, so builds
    of different identifiers never wait on each other.

    Attributes:
        _entries: Identifier to (binding, instance) mapping.
        _build_locks: Identifier to the lock serialising its construction.
        _map_lock: Guards ``_entries``, ``_build_locks`` and ``_closed``.
        _closed: Whether the owning scope has been closed.
    """

    def __init__(self, thread_safe: bool = True) -> None:
        """Initialize an empty cache.

        Args:
            thread_safe: Whether construction is guarded by per-identifier locks.
        """
        self._thread_safe = thread_safe
        self._entries: Dict[Hashable, Tuple[Binding, Any]] = {}
        self._build_locks: Dict[Hashable, ContextManager[Any]] = {}
        self._map_lock: ContextManager[Any] = threading.Lock() if thread_safe else nullcontext()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _lookup(self, binding: Binding) -> Tuple[bool, Any]:
        entry = self._entries.get(binding.identifier)
        if entry is not None and entry[0] is binding:
            return True, entry[1]
        return False, None

    def _build_lock(self, identifier: Hashable) -> ContextManager[Any]:
        if not self._thread_safe:
            return nullcontext()
        with self._map_lock:
            lock = self._build_locks.get(identifier)
            if lock is None:
                lock = self._build_locks[identifier] = threading.RLock()
            return lock

    def _ensure_open(self, identifier: Hashable) -> None:
        if self._closed:
            raise ScopeError(f"Cannot cache {describe_identifier(identifier)}: the scope has been closed.")

    def get_or_create(self, binding: Binding, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for the binding or build and cache one.

        Construction happens under the identifier's lock and the cache is
        checked again once the lock is held, so concurrent callers racing on
        the same binding all receive the instance built by the single winning
        factory call. A factory that raises leaves nothing cached.

        Args:
            binding: The binding being resolved.
            factory: Zero-argument callable building a new instance.

        Returns:
            The cached or newly built instance.

        Raises:
            ScopeError: If the cache was closed before or during construction.

        Example:
            >>> cache = InstanceCache()
            >>> first = cache.get_or_create(binding, lambda: Clock())
            >>> assert cache.get_or_create(binding, lambda: Clock()) is first
        """
        found, instance = self._lookup(binding)
        if found:
            return instance

        with self._build_lock(binding.identifier):
            found, instance = self._lookup(binding)
            if found:
                return instance
            self._ensure_open(binding.identifier)
            instance = factory()
            with self._map_lock:
                # close() may have run while the factory was building
                self._ensure_open(binding.identifier)
                self._entries[binding.identifier] = (binding, instance)
            return instance

    def evict(self, identifier: Hashable) -> None:
        """Drop the cached instance for an identifier without waiting for its build."""
        with self._map_lock:
            self._entries.pop(identifier, None)

    def clear(self) -> None:
        """Drop every cached instance."""
        with self._map_lock:
            self._entries.clear()

    def close(self) -> None:
        """Drop every cached instance and refuse to cache any more."""
        with self._map_lock:
            self._closed = True
            self._entries.clear()

    def __contains__(self, identifier: Hashable) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
