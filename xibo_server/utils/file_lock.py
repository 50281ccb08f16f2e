"""Exclusive file locks for read-modify-write of shared JSON state.

The image-generation history can be updated by several generation requests
and by several server processes at once. Each update runs inside
``file_lock`` which serializes threads with a per-path ``threading.Lock`` and
processes with ``fcntl.flock`` on a sibling ``.lock`` file.
"""

import fcntl
import os
import threading
from collections.abc import Generator
from contextlib import contextmanager

_lock_registry: dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def _get_thread_lock(path: str) -> threading.Lock:
    normalized = os.path.normpath(os.path.abspath(path))
    with _registry_lock:
        return _lock_registry.setdefault(normalized, threading.Lock())


@contextmanager
def file_lock(path: str | os.PathLike[str], *, timeout: float | None = 30.0) -> Generator[None]:
    """Hold an exclusive lock on ``path`` for the duration of the block.

    Raises:
        TimeoutError: the in-process lock was not acquired within ``timeout``
    """
    path = os.fspath(path)
    thread_lock = _get_thread_lock(path)
    if not thread_lock.acquire(timeout=timeout if timeout is not None else -1):
        raise TimeoutError(f"Could not acquire lock for {path} within {timeout}s")

    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        lock_fd = os.open(path + ".lock", os.O_CREAT | os.O_RDWR)
        try:
            fcntl.flock(lock_fd, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_fd, fcntl.LOCK_UN)
        finally:
            os.close(lock_fd)
    finally:
        thread_lock.release()
