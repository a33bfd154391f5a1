"""
Wall-clock timing for fits and for the command-line run.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Times a block as a whole and named stages inside it.

    Usage:
        with Timer() as timer:
            with timer.section('gram'):
                XtX = X.T @ X
            with timer.section('inverse'):
                XtX_inv = np.linalg.inv(XtX)
        timer.result()
        # {'total_seconds': 0.0002, 'gram': 0.0001, 'inverse': 0.0001}
    """

    def __init__(self) -> None:
        self._sections: dict[str, float] = {}
        self._began: float | None = None
        self._total: float | None = None

    def __enter__(self) -> 'Timer':
        self._began = time.perf_counter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._total = time.perf_counter() - self._began

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time a named stage. Repeated names accumulate."""
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = self._sections.get(name, 0.0) + time.perf_counter() - began

    @property
    def total_seconds(self) -> float:
        """Seconds spent inside the ``with`` block."""
        if self._total is None:
            raise RuntimeError("Timer is still running or was never entered")
        return self._total

    def result(self) -> dict[str, float]:
        """'total_seconds' plus one entry per section."""
        return {'total_seconds': self.total_seconds, **self._sections}
