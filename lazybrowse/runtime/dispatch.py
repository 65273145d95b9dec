"""Request dispatch between controllers and the filesystem service.

Service calls may block, so ``ThreadedDispatcher`` runs them on background
worker threads (one FIFO lane per concern) and queues their completions.
The owning thread drains that queue and runs the success/failure callbacks
itself, which keeps every state mutation on one logical thread.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

logger = logging.getLogger(__name__)

NAVIGATION_LANE = "navigation"
SEARCH_LANE = "search"


@dataclass(frozen=True)
class ServiceRequest:
    """One submitted service call plus its completion callbacks."""

    request_id: int
    lane: str
    call: Callable[[], object]
    on_success: Callable[[object], None]
    on_failure: Callable[[Exception], None]


@dataclass(frozen=True)
class ServiceCompletion:
    """Outcome of a service call, waiting to be delivered."""

    request: ServiceRequest
    value: object = None
    error: Exception | None = None

    def deliver(self) -> None:
        if self.error is not None:
            self.request.on_failure(self.error)
        else:
            self.request.on_success(self.value)


class ImmediateDispatcher:
    """Runs each call inline and delivers its completion before returning."""

    def __init__(self) -> None:
        self._next_request_id = 1

    def submit(
        self,
        lane: str,
        call: Callable[[], object],
        on_success: Callable[[object], None],
        on_failure: Callable[[Exception], None],
    ) -> int:
        request_id = self._next_request_id
        self._next_request_id += 1
        request = ServiceRequest(request_id, lane, call, on_success, on_failure)
        try:
            value = call()
        except Exception as exc:
            completion = ServiceCompletion(request=request, error=exc)
        else:
            completion = ServiceCompletion(request=request, value=value)
        completion.deliver()
        return request_id


class ThreadedDispatcher:
    """Per-lane background workers with completions delivered on drain.

    Requests in the same lane run strictly in submission order; different
    lanes run concurrently.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, deque[ServiceRequest]] = {}
        self._running: set[str] = set()
        self._next_request_id = 1
        self._outstanding = 0
        self._results: Queue[ServiceCompletion] = Queue()

    def _worker(self, lane: str) -> None:
        while True:
            with self._lock:
                queue = self._pending.get(lane)
                if not queue:
                    self._running.discard(lane)
                    return
                request = queue.popleft()

            try:
                value = request.call()
            except Exception as exc:
                self._results.put(ServiceCompletion(request=request, error=exc))
                continue
            self._results.put(ServiceCompletion(request=request, value=value))

    def submit(
        self,
        lane: str,
        call: Callable[[], object],
        on_success: Callable[[object], None],
        on_failure: Callable[[Exception], None],
    ) -> int:
        """Queue ``call`` on ``lane`` and return its request id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
            self._pending.setdefault(lane, deque()).append(
                ServiceRequest(request_id, lane, call, on_success, on_failure)
            )
            self._outstanding += 1
            if lane in self._running:
                return request_id
            self._running.add(lane)

        logger.debug("starting %s worker for request %d", lane, request_id)
        worker = threading.Thread(
            target=self._worker,
            args=(lane,),
            name=f"lazybrowse-{lane}",
            daemon=True,
        )
        worker.start()
        return request_id

    @property
    def idle(self) -> bool:
        with self._lock:
            return self._outstanding == 0

    def drain_completions(self) -> list[ServiceCompletion]:
        """Drain all completed calls without delivering them."""
        out: list[ServiceCompletion] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    def deliver_completions(self) -> int:
        """Run callbacks for every completed call; return how many ran."""
        completions = self.drain_completions()
        for completion in completions:
            with self._lock:
                self._outstanding -= 1
            completion.deliver()
        return len(completions)

    def run_until_idle(self, timeout_seconds: float = 5.0, poll_seconds: float = 0.01) -> bool:
        """Deliver completions until nothing is outstanding or time runs out.

        Callbacks may submit follow-up requests; those are waited for too.
        """
        deadline = time.monotonic() + timeout_seconds
        while True:
            self.deliver_completions()
            if self.idle:
                return True
            if time.monotonic() >= deadline:
                return False
            time.sleep(poll_seconds)


__all__ = [
    "ImmediateDispatcher",
    "NAVIGATION_LANE",
    "SEARCH_LANE",
    "ServiceCompletion",
    "ServiceRequest",
    "ThreadedDispatcher",
]
