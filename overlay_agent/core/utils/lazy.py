"""Keyed lazy instance cache.

A LazyMap builds one value per key on first use and hands the same value
back afterwards. The parser factory keeps one per process, keyed by channel.
reset_all() clears every map created so far; tests call it between cases
and the app calls it on shutdown.
"""

import threading
import weakref
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LazyMap(Generic[K, V]):
    """Thread-safe, lazily filled mapping.

    Usage:
        _parsers = LazyMap(lambda channel: CommandParser(CHANNEL_POLICIES[channel]))

        def get_parser(channel: Channel) -> CommandParser:
            return _parsers.get(channel)
    """

    _all_instances: list["weakref.ref[LazyMap]"] = []
    _registry_lock = threading.Lock()

    def __init__(self, factory: Callable[[K], V]) -> None:
        self._factory = factory
        self._values: dict[K, V] = {}
        self._lock = threading.Lock()
        with LazyMap._registry_lock:
            LazyMap._all_instances.append(weakref.ref(self))

    def get(self, key: K) -> V:
        """Return the value for ``key``, building it on first request.

        Double-checked so concurrent first requests for a key build it once.
        """
        try:
            return self._values[key]
        except KeyError:
            pass
        with self._lock:
            if key not in self._values:
                self._values[key] = self._factory(key)
            return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def reset(self, key: K | None = None) -> None:
        """Drop one key, or every key when none is given."""
        with self._lock:
            if key is None:
                self._values.clear()
            else:
                self._values.pop(key, None)

    @classmethod
    def reset_all(cls) -> None:
        """Reset every LazyMap created so far."""
        with cls._registry_lock:
            alive: list[weakref.ref[LazyMap]] = []
            for ref in cls._all_instances:
                obj = ref()
                if obj is not None:
                    obj.reset()
                    alive.append(ref)
            cls._all_instances = alive
