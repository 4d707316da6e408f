"""
Parallel elementwise execution.

An elementwise operation is a length function ``nfun(*tensors) -> int`` and a
per-index function ``fun(idx, *tensors)``. ``fun`` must be safe to call
concurrently for different ``idx`` values: it may only write the outputs for
its own index and must not depend on the order in which indexes run.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from .tensor import Tensor

logger = logging.getLogger(__name__)

LengthFunc = Callable[..., int]
IndexFunc = Callable[..., None]


@dataclass
class ThreadingConfig:
    """
    Switches for :func:`vectorize_threaded`.

    * ``threshold``: work runs on the calling thread while
      ``flops * n < threshold``. The cost estimate ``flops`` is per element, so
      cheap assignments need many more elements than heavy math before the
      scheduling overhead of the worker pool pays off.
    * ``num_workers``: pool size; ``None`` uses ``os.cpu_count()``.
    * ``min_chunk``: smallest number of indexes handed to one worker.
    """

    threshold: int = 100_000
    num_workers: Optional[int] = None
    min_chunk: int = 64

    def normalized(self) -> "ThreadingConfig":
        threshold = int(self.threshold)
        if threshold < 0:
            raise ValueError("threshold must be non-negative")
        workers = self.num_workers
        if workers is not None:
            workers = int(workers)
            if workers <= 0:
                raise ValueError("num_workers must be positive when provided")
        min_chunk = int(self.min_chunk)
        if min_chunk <= 0:
            raise ValueError("min_chunk must be positive")
        return replace(self, threshold=threshold, num_workers=workers, min_chunk=min_chunk)

    def workers(self) -> int:
        if self.num_workers is not None:
            return self.num_workers
        return os.cpu_count() or 1


_config = ThreadingConfig()


def get_threading_config() -> ThreadingConfig:
    return _config


def set_threading_config(config: ThreadingConfig) -> ThreadingConfig:
    """Install ``config`` as the process default, returning the previous one."""
    global _config
    previous = _config
    _config = config.normalized()
    return previous


def n_first_len(*tensors: Tensor) -> int:
    return len(tensors[0])


def n_min_len(*tensors: Tensor) -> int:
    return min(len(t) for t in tensors)


def n_max_len(*tensors: Tensor) -> int:
    return max(len(t) for t in tensors)


def vectorize(nfun: LengthFunc, fun: IndexFunc, *tensors: Tensor) -> None:
    """Apply ``fun`` to every index in ``range(nfun(*tensors))`` on this thread."""
    n = nfun(*tensors)
    for idx in range(n):
        fun(idx, *tensors)


def vectorize_threaded(
    flops: int,
    nfun: LengthFunc,
    fun: IndexFunc,
    *tensors: Tensor,
    config: Optional[ThreadingConfig] = None,
) -> None:
    """
    Apply ``fun`` to every index, in parallel chunks when the estimated cost
    ``flops * n`` reaches the configured threshold.

    Blocks until every chunk has finished. If a chunk raises, the first error
    (in chunk order) is re-raised after all chunks complete.
    """
    cfg = (config or _config).normalized()
    n = nfun(*tensors)
    if n <= 0:
        return
    workers = cfg.workers()
    cost = max(int(flops), 1) * n
    if cost < cfg.threshold or workers <= 1 or n < 2 * cfg.min_chunk:
        for idx in range(n):
            fun(idx, *tensors)
        return
    chunks = _chunk_ranges(n, workers, cfg.min_chunk)
    logger.debug(
        "vectorize_threaded: n=%d flops=%d running %d chunks on %d workers",
        n,
        flops,
        len(chunks),
        min(workers, len(chunks)),
    )
    with ThreadPoolExecutor(max_workers=min(workers, len(chunks))) as executor:
        futures = [
            executor.submit(_run_chunk, fun, start, end, tensors) for start, end in chunks
        ]
    for future in futures:
        future.result()


def _run_chunk(fun: IndexFunc, start: int, end: int, tensors: Tuple[Tensor, ...]) -> None:
    for idx in range(start, end):
        fun(idx, *tensors)


def _chunk_ranges(n: int, workers: int, min_chunk: int) -> List[Tuple[int, int]]:
    nchunks = max(1, min(workers, -(-n // min_chunk)))
    # multiples of 8 keep chunks on separate bytes of bit-packed outputs
    size = -(-n // nchunks)
    size = -(-size // 8) * 8
    return [(start, min(start + size, n)) for start in range(0, n, size)]
