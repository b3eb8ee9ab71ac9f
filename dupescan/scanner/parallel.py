"""
Parallel processing module for the scanner package.

Runs one task per item on a bounded thread pool and funnels every result
through a single queue to one consumer. A WorkGroup counts outstanding tasks;
a monitor thread closes the queue only after the last one has finished, so
the consumer neither drops results nor waits forever.
"""

from __future__ import annotations

import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Iterator, Optional, TypeVar, Union, Any

from ..config import DEFAULT_WORKERS
from ..dct import DCTEngine, get_default_engine
from ..errors import ConfigurationError
from ..models import HashMethod, HashedImage, HashFailure
from .dependencies import HAS_TQDM, _tqdm_class, _logger
from .hashing import hash_image_file

T = TypeVar('T')
R = TypeVar('R')

# Marks the end of the result stream
_CLOSED = object()


class _WorkerError:
    """An unexpected exception raised inside a task, carried to the consumer."""

    def __init__(self, item, error: BaseException):
        self.item = item
        self.error = error


class WorkGroup:
    """
    Countdown of outstanding tasks.

    ``add`` before spawning, ``done`` when a task finishes, ``wait`` blocks
    until the count is back to zero.
    """

    def __init__(self):
        self._count = 0
        self._cond = threading.Condition()

    @property
    def pending(self) -> int:
        with self._cond:
            return self._count

    def add(self, n: int = 1) -> None:
        with self._cond:
            if self._count + n < 0:
                raise ValueError("WorkGroup counter went negative")
            self._count += n
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: Optional[float] = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


def fan_out(
    items: Iterable[T],
    worker: Callable[[T], Optional[R]],
    max_workers: int = DEFAULT_WORKERS,
) -> Iterator[R]:
    """
    Run worker(item) for every item concurrently and yield the results.

    Results arrive in completion order. A worker returning None contributes
    nothing. If a worker raises, the exception is re-raised here.

    Args:
        items: Inputs, one task each
        worker: Function run on the pool
        max_workers: Pool size

    Yields:
        Non-None worker results

    Raises:
        ConfigurationError: If max_workers is less than 1
    """
    if max_workers < 1:
        raise ConfigurationError(f"Worker count must be at least 1, got {max_workers}")

    results: queue.Queue = queue.Queue()
    group = WorkGroup()

    def task(item):
        try:
            result = worker(item)
        except Exception as e:
            results.put(_WorkerError(item, e))
        else:
            if result is not None:
                results.put(result)
        finally:
            group.done()

    def monitor():
        group.wait()
        results.put(_CLOSED)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for item in items:
            group.add(1)
            executor.submit(task, item)

        threading.Thread(target=monitor, name='fan-out-monitor', daemon=True).start()

        while True:
            result = results.get()
            if result is _CLOSED:
                break
            if isinstance(result, _WorkerError):
                _logger.error(f"Task failed for {result.item}: {result.error}")
                raise result.error
            yield result


def hash_images_parallel(
    filepaths: list[str],
    method: Union[HashMethod, str],
    max_workers: int = DEFAULT_WORKERS,
    engine: Optional[DCTEngine] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> Iterator[Union[HashedImage, HashFailure]]:
    """
    Hash multiple images in parallel.

    Args:
        filepaths: Candidate image paths
        method: Hash method for every file in this run
        max_workers: Number of parallel workers
        engine: DCT engine for the perceptual method (default: shared engine)
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar

    Yields:
        One HashedImage or HashFailure per path, in completion order
    """
    method = HashMethod.from_name(method)
    if method is HashMethod.PERCEPTUAL and engine is None:
        engine = get_default_engine()

    total = len(filepaths)
    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None and total:
        pbar = _tqdm_class(
            total=total,
            desc="Hashing images",
            unit="img",
            ncols=80,
        )

    try:
        for i, result in enumerate(
            fan_out(filepaths, lambda path: hash_image_file(path, method, engine), max_workers)
        ):
            if pbar is not None:
                pbar.update(1)
            if progress_callback:
                progress_callback(i + 1, total)
            yield result
    finally:
        if pbar is not None:
            pbar.close()


__all__ = ['WorkGroup', 'fan_out', 'hash_images_parallel']
