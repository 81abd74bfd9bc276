"""Off-loop execution of the synchronous action runner."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from ..domain.catalog import ActionDescriptor
from ..services.error_mapper import map_exception
from ..services.errors import WatchmanError
from ..services.runner import ActionRunner, RunOutcome

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunCompleted:
    """Completion event for one run, tagged with the generation that started it."""

    generation: int
    outcome: RunOutcome


class RunInProgressError(WatchmanError):
    """Raised when a run is started while another is still outstanding."""


class RunHandle:
    """Caller-side handle for a run executing on the worker thread."""

    def __init__(
        self,
        generation: int,
        action: ActionDescriptor,
        runner: ActionRunner,
    ) -> None:
        self.generation = generation
        self.action = action
        self._runner = runner
        self._future: Optional[Future] = None
        # Queued behind a cancelled run that still holds the worker.
        self.waiting = False
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def cancel(self) -> None:
        """Stop caring about this run and stop its process if one is running."""
        if self._cancelled or self._done:
            return
        self._cancelled = True
        future = self._future
        if future is None or future.cancel():
            return
        if future.running():
            self._runner.terminate_active()


class RunOrchestrator:
    """Bridges ``ActionRunner.invoke`` into the event loop.

    Runs execute on a single worker thread so the runner is never invoked
    concurrently. Every ``start`` produces exactly one ``RunCompleted`` passed
    to ``deliver`` on the event loop thread, whether the run succeeded, failed
    or was cancelled.
    """

    def __init__(
        self,
        runner: ActionRunner,
        deliver: Callable[[RunCompleted], None],
        *,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._runner = runner
        self._deliver = deliver
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="watchman-run"
        )
        self._active: Optional[RunHandle] = None

    @property
    def active(self) -> Optional[RunHandle]:
        return self._active

    def start(
        self,
        action: ActionDescriptor,
        target: str,
        parameter: str,
        generation: int,
    ) -> RunHandle:
        active = self._active
        if active is not None and not active.done and not active.cancelled:
            raise RunInProgressError(
                f"Run {active.generation} ({active.action.name}) is still in progress"
            )

        loop = asyncio.get_running_loop()
        handle = RunHandle(generation, action, self._runner)
        if active is not None and not active.done:
            handle.waiting = True
            logger.info(
                "Run queued behind cancelled run",
                generation=generation,
                previous_generation=active.generation,
            )
        future = self._executor.submit(self._execute, action, target, parameter)
        handle._future = future
        self._active = handle
        future.add_done_callback(lambda done: self._schedule_finish(loop, handle, done))
        logger.info("Run submitted", generation=generation, action=action.name)
        return handle

    def _schedule_finish(
        self, loop: asyncio.AbstractEventLoop, handle: RunHandle, future: Future
    ) -> None:
        try:
            loop.call_soon_threadsafe(self._finish, handle, future)
        except RuntimeError:
            logger.debug("Event loop closed before run finished", generation=handle.generation)

    def _execute(self, action: ActionDescriptor, target: str, parameter: str) -> RunOutcome:
        try:
            return self._runner.invoke(action, target, parameter)
        except Exception as exc:
            mapped = map_exception(exc)
            logger.error("Run crashed", action=action.name, code=mapped.code, error=str(exc))
            return RunOutcome(text=f"[Error] {mapped.describe()}\n", succeeded=False)

    def _finish(self, handle: RunHandle, future: Future) -> None:
        handle._done = True
        if self._active is handle:
            self._active = None
        if future.cancelled():
            outcome = RunOutcome(text="[Cancelled before start]\n", succeeded=False)
        else:
            outcome = future.result()
        self._deliver(RunCompleted(handle.generation, outcome))

    def shutdown(self) -> None:
        """Cancel outstanding work and release the worker thread."""
        if self._active is not None:
            self._active.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)
