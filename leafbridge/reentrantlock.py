"""A reentrant wrapper around a non-reentrant lock."""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class Locker(Protocol):
    """A lock that can be made reentrant."""

    def lock(self) -> None: ...

    def try_lock(self) -> bool: ...

    def unlock(self) -> None: ...

    def close(self) -> None: ...


L = TypeVar("L", bound=Locker)


class ReentrantLock(Generic[L]):
    """Allows the holder of an underlying lock to acquire it repeatedly.

    The underlying lock is acquired on the first acquisition and released
    when every acquisition has been released.
    """

    def __init__(self, mutex: L) -> None:
        self._mutex = mutex
        self._count = 0

    @property
    def depth(self) -> int:
        """The number of outstanding acquisitions."""
        return self._count

    def lock(self) -> None:
        """Acquire the lock, blocking on the underlying lock if not yet held."""
        if self._count == 0:
            self._mutex.lock()
        self._count += 1

    def try_lock(self) -> bool:
        """Try to acquire the lock without blocking."""
        if self._count == 0 and not self._mutex.try_lock():
            return False
        self._count += 1
        return True

    def unlock(self) -> None:
        """Release one acquisition; the underlying lock is released on the last."""
        if self._count == 0:
            raise RuntimeError("unlock of a lock that is not held")
        self._count -= 1
        if self._count == 0:
            self._mutex.unlock()

    def close(self) -> None:
        """Close the underlying lock."""
        self._mutex.close()

    def __enter__(self) -> ReentrantLock[L]:
        self.lock()
        return self

    def __exit__(self, *exc_info) -> None:
        self.unlock()