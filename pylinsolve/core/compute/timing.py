"""
Wall-clock timing of pipeline stages.

Each stage of a solve (forward elimination, consistency sweep,
back-substitution, verification) is timed as a named section. A stage
that ran under its own Timer, such as a backend's forward pass, can be
folded into the caller's timer so the final report has one flat dict.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Mapping


class Timer:
    """
    Stopwatch with named, accumulating sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('back_substitution'):
            x = back_substitute(a, tol)
        timer.include(elimination.timing, total_as='elimination_seconds')
        timer.stop()
        timer.result()
        # {'total_seconds': ..., 'back_substitution': ...,
        #  'forward_elimination': ..., 'elimination_seconds': ...}
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None
        self._included = 0.0

    def start(self) -> None:
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time the body of the with-block under ``name``.

        Re-entering a section adds to its previous time. The section is
        recorded even if the body raises.
        """
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - t0
            )

    def include(self, timing: Mapping[str, float] | None, total_as: str) -> None:
        """
        Fold in the result() of a timer that ran outside this one.

        Its sections are copied over, its total is stored under
        ``total_as`` and added to this timer's total.

        Args:
            timing: Another timer's result(), or None (nothing to fold)
            total_as: Key for the other timer's total_seconds
        """
        if not timing:
            return
        for name, seconds in timing.items():
            if name == 'total_seconds':
                continue
            self._sections[name] = self._sections.get(name, 0.0) + seconds
        subtotal = timing.get('total_seconds', 0.0)
        self._sections[total_as] = self._sections.get(total_as, 0.0) + subtotal
        self._included += subtotal

    def result(self) -> dict[str, float]:
        """
        Sections plus 'total_seconds' (own span and included totals).

        Raises:
            RuntimeError: Timer still running or never started
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total + self._included, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Started Timer for the duration of a with-block.

        with timed() as timer:
            solution = solve(matrix)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
