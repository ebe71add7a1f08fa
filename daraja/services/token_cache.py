"""
Token Cache
Holds the current bearer token and its absolute expiry for one client.
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReadWriteLock:
    """
    Many concurrent readers, one exclusive writer.

    Writers take priority: once a writer is waiting, new readers queue
    behind it, so a steady stream of readers cannot starve a token refresh.
    Not reentrant.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self):
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class TokenCache:
    """
    Bearer token + expiry owned by a single client instance.

    Only in-memory assignments happen under the lock; callers must never
    hold it across network I/O.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._lock = ReadWriteLock()
        self._token = ""
        self._expiry = _EPOCH

    def has_valid_token(self) -> bool:
        with self._lock.read():
            return bool(self._token) and self._clock() < self._expiry

    def read_token(self) -> str:
        with self._lock.read():
            return self._token

    def write_token(self, token: str, expiry: datetime) -> None:
        with self._lock.write():
            self._token = token
            self._expiry = expiry

    @property
    def expiry(self) -> datetime:
        with self._lock.read():
            return self._expiry

    def now(self) -> datetime:
        return self._clock()

    def __repr__(self):
        return f"<TokenCache valid={self.has_valid_token()} expiry={self.expiry.isoformat()}>"
