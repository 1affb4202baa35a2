# turntable/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


class CallTimeout(Exception):
    """
    Raised by call_with_timeout when the callable does not finish in time.
    """

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Call did not complete within {timeout} seconds")
        self.timeout = timeout


def get_lock() -> threading.RLock:
    """
    Provide a new re-entrant lock. The machine's convenience helpers call
    back into ``execute`` while already holding it.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock):
    """
    A convenience context manager that acquires the given lock upon entry and
    releases it upon exit, ensuring safe access to shared resources.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


def call_with_timeout(
    fn: Callable[[], T],
    timeout: Optional[float],
    executor: Optional[Executor] = None,
) -> T:
    """
    Run ``fn`` on a worker thread and wait at most ``timeout`` seconds for its
    result. Exceptions raised by ``fn`` propagate unchanged.

    A call that overruns is abandoned, not interrupted: the worker thread is
    left to finish on its own and its result is discarded. Without an
    ``executor`` each call gets a throwaway single-thread pool, so every
    abandoned call holds one thread until ``fn`` returns. Pass a shared,
    bounded executor to cap that; a call still queued behind a stuck worker is
    cancelled when its wait runs out.

    :param fn: Zero-argument callable.
    :param timeout: Seconds to wait; None waits indefinitely.
    :param executor: Pool to run ``fn`` on; owned by the caller.
    :raises CallTimeout: If ``fn`` does not return in time.
    """
    if timeout is None:
        return fn()

    owned = executor is None
    if owned:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="turntable-call")
    try:
        future = executor.submit(fn)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            raise CallTimeout(timeout)
    finally:
        if owned:
            executor.shutdown(wait=False)
