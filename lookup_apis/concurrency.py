"""Run independent calls in parallel and collect a result or error for each."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional


@dataclass
class Settled:
    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def settle_all(*calls: Callable[[], Any]) -> List[Settled]:
    """
    Run every call concurrently and wait for all of them.

    One call failing never cancels the others. Results come back in the
    order the calls were given.
    """
    if not calls:
        return []

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        futures = [executor.submit(call) for call in calls]
        settled: List[Settled] = []
        for future in futures:
            try:
                settled.append(Settled(value=future.result()))
            except Exception as e:
                settled.append(Settled(error=e))
    return settled
