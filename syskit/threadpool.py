"""Two small thread pools: one handing out futures, one running queued tasks."""

from __future__ import annotations

import argparse
import functools
import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable

from syskit.textcase import swap_case


class PoolStoppedError(RuntimeError):
    """Raised when work is handed to a pool that has been shut down."""


class ThreadPool:
    """Fixed set of worker threads; ``submit`` returns a Future for each call.

    On shutdown the workers finish every task still queued before they exit.
    """

    def __init__(self, threads: int) -> None:
        self._tasks: deque[Callable[[], None]] = deque()
        self._condition = threading.Condition()
        self._stopped = False
        self._workers = [
            threading.Thread(target=self._work, daemon=True) for _ in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stopped or self._tasks)
                if self._stopped and not self._tasks:
                    return
                job = self._tasks.popleft()
            job()

    def submit(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a Future for its result."""
        future: Future = Future()

        def job() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except BaseException as exc:  # noqa: BLE001 - handed to the caller
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._condition:
            if self._stopped:
                raise PoolStoppedError("submit on stopped ThreadPool")
            self._tasks.append(job)
            self._condition.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting work, let queued tasks finish and join the workers."""
        with self._condition:
            self._stopped = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


class Task:
    """A callable bound to its arguments, ready to run later."""

    def __init__(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self.func = functools.partial(func, *args, **kwargs)

    def run(self) -> Any:
        """Run the bound call and return what it returns."""
        return self.func()


class TaskPool:
    """Worker threads that take Task objects from a queue and run them.

    On shutdown the workers stop at once; tasks still queued are not run.
    """

    def __init__(self, workers: int) -> None:
        self._queue: deque[Task] = deque()
        self._condition = threading.Condition()
        self._running = True
        self._threads = [
            threading.Thread(target=self._work, daemon=True) for _ in range(workers)
        ]
        for thread in self._threads:
            thread.start()

    def _next_task(self) -> Task | None:
        with self._condition:
            while self._running and not self._queue:
                self._condition.wait()
            if not self._running:
                return None
            return self._queue.popleft()

    def _work(self) -> None:
        while True:
            task = self._next_task()
            if task is None:
                break
            task.run()

    def add_task(self, task: Task) -> None:
        """Queue a task and wake one worker."""
        with self._condition:
            if not self._running:
                raise PoolStoppedError("add_task on stopped TaskPool")
            self._queue.append(task)
            self._condition.notify()

    def shutdown(self) -> None:
        """Stop the workers and join them."""
        with self._condition:
            self._running = False
            self._condition.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def __enter__(self) -> TaskPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()


def _square_after_delay(i: int, delay: float) -> int:
    print(f"hello {i}", flush=True)
    time.sleep(delay)
    print(f"world {i}", flush=True)
    return i * i


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Thread pool demonstration.")
    parser.add_argument("--demo", choices=("futures", "tasks"), default="futures")
    parser.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)

    if args.demo == "futures":
        with ThreadPool(4) as pool:
            futures = [pool.submit(_square_after_delay, i, args.delay) for i in range(8)]
            print(" ".join(str(f.result()) for f in futures))
        return 0

    results: dict[str, str] = {}
    done = threading.Semaphore(0)
    words = ["leacock", "ABCDEFG", "1a2B3C4d"]

    def convert(word: str) -> None:
        results[word] = swap_case(word)
        done.release()

    with TaskPool(5) as pool:
        for word in words:
            pool.add_task(Task(convert, word))
        for _ in words:
            done.acquire()
    for word in words:
        print(f"convert_string {word} = {results[word]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())