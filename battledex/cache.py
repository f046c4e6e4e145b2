"""A memo of resolved snapshots, shared by everything in one invocation.

Snapshots are immutable, so once one is stored any number of threads can read
it.  Filling a key is done under that key's lock, so each snapshot is computed
at most once.
"""

import threading


class SnapshotCache(object):
    """Remembers snapshots by `(kind, key, generation)`.

    Nothing is ever evicted; make a new cache for each invocation.
    """

    def __init__(self):
        self._snapshots = {}
        self._locks = {}
        self._locks_lock = threading.Lock()

    def __len__(self):
        return len(self._snapshots)

    def __contains__(self, key):
        return key in self._snapshots

    def _lock_for(self, key):
        with self._locks_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def get(self, kind, key, generation, create):
        """Returns the snapshot for `(kind, key, generation)`, calling
        `create()` to build it the first time.
        """
        cache_key = kind, key, generation
        try:
            return self._snapshots[cache_key]
        except KeyError:
            pass

        with self._lock_for(cache_key):
            # Somebody else may have filled it while we waited
            if cache_key not in self._snapshots:
                self._snapshots[cache_key] = create()
            return self._snapshots[cache_key]


def cached(cache, kind, key, generation, create):
    """Calls `create()` directly, or through `cache` if there is one."""
    if cache is None:
        return create()
    return cache.get(kind, key, generation, create)
