import threading


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        # holders + waiters
        self.users = 0


class ThreadLockBackend:
    """
    In-process lock backend.

    Holds one `threading.Lock` per key while at least one thread holds or
    waits for it. The entry is dropped once the last user leaves, so keys
    derived from request input (e.g. "stock:{product_id}") do not pile up.

    Only threads of the current process compete; a second worker process has
    its own locks and relies on the repository's conditional UPDATE.

    Timeout behavior
    ----------------
    - timeout=None:
        Blocks until the lock is acquired.

    - timeout=float:
        Waits at most `timeout` seconds, then gives up and returns False.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._registry = threading.Lock()

    def __len__(self) -> int:
        with self._registry:
            return len(self._entries)

    def _checkout(self, key: str) -> _Entry:
        with self._registry:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1
            return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        with self._registry:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    def acquire(self, key: str, timeout: float | None) -> bool:
        """
        Attempt to acquire the lock for the given key.

        Returns
        -------
        bool
            True if the lock was acquired.
            False if the timeout expired first.
        """
        entry = self._checkout(key)

        if timeout is None:
            acquired = entry.lock.acquire()
        else:
            acquired = entry.lock.acquire(timeout=max(timeout, 0))

        if not acquired:
            self._checkin(key, entry)
        return acquired

    def release(self, key: str) -> None:
        """
        Release the lock for the given key.

        Must only be called by the holder, after a successful `acquire`.
        """
        with self._registry:
            entry = self._entries[key]
        entry.lock.release()
        self._checkin(key, entry)
