"""Per-identity serialization of read-modify-write commands.

A command handler's Unit of Work loads an aggregate, mutates it and commits on
exit, so the lock has to wrap the whole ``process`` call. Locks are created on
demand per key and discarded once no caller holds or waits on them.
"""

import threading
from contextlib import contextmanager

import structlog
from protean.utils.globals import current_domain


class KeyedLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # key -> [lock, holders]

    def _checkout(self, key):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _release(self, key):
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, *keys):
        """Acquire the locks for ``keys`` in sorted order, release in reverse."""
        ordered = sorted({str(k) for k in keys if k is not None})
        acquired = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._release(key)
                    raise
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._release(key)

    def __len__(self):
        with self._guard:
            return len(self._locks)


identity_locks = KeyedLocks()


def process_exclusively(command, *keys):
    """Process ``command`` synchronously while holding the locks for ``keys``.

    Log lines emitted while the command runs carry its name and lock keys.
    """
    lock_keys = sorted(str(k) for k in keys if k is not None)
    with (
        identity_locks.hold(*keys),
        structlog.contextvars.bound_contextvars(command=type(command).__name__, lock_keys=lock_keys),
    ):
        return current_domain.process(command, asynchronous=False)
