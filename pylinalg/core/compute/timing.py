"""
Wall-clock timing for the eigen pipeline.

Backends time each stage (Hessenberg reduction, QR iteration, inverse
iteration) under a named section. Repeated sections add up, so a stage
run once per deflated block reports its total.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator


class Timer:
    """
    Stage timer reported in Result.timing.

        timer = Timer().start()
        with timer.section('hessenberg'):
            ...
        with timer.section('qr_iteration'):
            ...
        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'hessenberg': 0.01, 'qr_iteration': 0.04}
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._stages: dict[str, float] = {}
        self._began: float | None = None
        self._total: float | None = None

    def start(self) -> 'Timer':
        self._began = self._clock()
        self._total = None
        return self

    def stop(self) -> float:
        """Freeze the total; returns it in seconds."""
        if self._began is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = self._clock() - self._began
        return self._total

    @contextmanager
    def section(self, stage: str) -> Iterator[None]:
        """Add the time spent in the block to `stage`."""
        began = self._clock()
        try:
            yield
        finally:
            self._stages[stage] = self._stages.get(stage, 0.0) + self._clock() - began

    def result(self) -> dict[str, float]:
        """
        'total_seconds' followed by each stage in first-seen order.

        Raises:
            RuntimeError: If the timer is still running
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._stages}


@contextmanager
def timed() -> Iterator[Timer]:
    """Time a block of caller code: ``with timed() as t: eig(A)``."""
    timer = Timer().start()
    try:
        yield timer
    finally:
        timer.stop()
