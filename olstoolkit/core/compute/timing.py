"""
Execution timing utilities.

Backends record a per-section timing breakdown on every Result so that
slow fits can be attributed to the decomposition, the solve, or the
covariance step.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating timer with named sections.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('qr_decomposition'):
            Q, R, piv = qr(X, mode='economic', pivoting=True)

        with timer.section('solve'):
            beta = solve_triangular(R, Q.T @ y)

        timer.stop()
        result = timer.result()
        # {'total_seconds': 0.05, 'qr_decomposition': 0.03, 'solve': 0.02}
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        """Start the overall timer."""
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section.

        Sections accumulate if entered more than once and may overlap
        with each other and with the total time.
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result

