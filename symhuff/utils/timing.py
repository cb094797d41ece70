import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

PhaseHook = Callable[[str, float], None]


class PhaseTimer:
    """
    Wall-clock instrumentation around pipeline phases.

    Each completed phase is accumulated in `timings`, optionally printed, and
    forwarded to `hook(phase, seconds)`. Failed phases are not recorded.
    """

    def __init__(self, hook: Optional[PhaseHook] = None, report: bool = False):
        self.hook = hook
        self.report = report
        self.timings: Dict[str, float] = {}

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start
        self.timings[name] = self.timings.get(name, 0.0) + elapsed
        if self.report:
            print(f"{name.capitalize()} time {elapsed:.3f} seconds")
        if self.hook is not None:
            self.hook(name, elapsed)

    @property
    def total(self) -> float:
        return sum(self.timings.values())
