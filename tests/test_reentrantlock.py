import pytest

from leafbridge.reentrantlock import Locker, ReentrantLock


class CountingMutex:
    def __init__(self, available=True):
        self.available = available
        self.locks = 0
        self.unlocks = 0
        self.closed = False

    def lock(self):
        self.locks += 1

    def try_lock(self):
        if self.available:
            self.locks += 1
        return self.available

    def unlock(self):
        self.unlocks += 1

    def close(self):
        self.closed = True


def test_wrapped_mutex_starts_unlocked():
    mutex = CountingMutex()
    assert isinstance(mutex, Locker)
    lock = ReentrantLock(mutex)
    assert lock.depth == 0
    lock.lock()
    assert (mutex.locks, lock.depth) == (1, 1)


def test_nested_64_times():
    mutex = CountingMutex()
    lock = ReentrantLock(mutex)
    for _ in range(64):
        lock.lock()
    assert mutex.locks == 1
    assert lock.depth == 64
    for _ in range(63):
        lock.unlock()
    assert mutex.unlocks == 0
    lock.unlock()
    assert mutex.unlocks == 1
    lock.close()
    assert mutex.closed


def test_try_lock_failure_leaves_state():
    mutex = CountingMutex(available=False)
    lock = ReentrantLock(mutex)
    assert lock.try_lock() is False
    assert lock.depth == 0


def test_try_lock_reentry_skips_underlying():
    mutex = CountingMutex()
    lock = ReentrantLock(mutex)
    assert lock.try_lock() is True
    mutex.available = False
    assert lock.try_lock() is True
    assert mutex.locks == 1
    assert lock.depth == 2


def test_unlock_unheld_raises():
    lock = ReentrantLock(CountingMutex())
    with pytest.raises(RuntimeError):
        lock.unlock()


def test_context_manager():
    mutex = CountingMutex()
    lock = ReentrantLock(mutex)
    with lock:
        with lock:
            assert lock.depth == 2
    assert (mutex.locks, mutex.unlocks) == (1, 1)