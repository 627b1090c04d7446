# recall_app/games/name_recall/client/controller.py
"""Asyncio controller that owns one recall session.

It applies ``machine.transition`` and runs the effects that come back:
timers become tasks, network calls run in a worker thread, and every
outcome is fed back in as an event stamped with the epoch it started under.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set

from recall_app.errors import RecallError
from ..logic import machine as m

logger = logging.getLogger(__name__)

Listener = Callable[[m.SessionState], None]

FETCH_FLOOR_SECONDS = 2.5


async def at_least(seconds: float, awaitable: Awaitable[Any]) -> Any:
    """Await ``awaitable`` but take no less than ``seconds`` overall.

    A failure is held back until the floor has passed, then re-raised.
    """
    result, _ = await asyncio.gather(awaitable, asyncio.sleep(max(0.0, seconds)),
                                     return_exceptions=True)
    if isinstance(result, BaseException):
        raise result
    return result


class RecallController:
    def __init__(self, api, *, settings: m.MachineSettings = m.DEFAULT_SETTINGS,
                 fetch_floor: float = FETCH_FLOOR_SECONDS, tick_seconds: float = 1.0) -> None:
        self.api = api
        self.settings = settings
        self.fetch_floor = fetch_floor
        self.tick_seconds = tick_seconds
        self.state = m.SessionState(time_left=settings.memorize_seconds)
        self._listeners: List[Listener] = []
        self._timers: Set[asyncio.Task] = set()     # countdown / scoring / reset
        self._requests: Set[asyncio.Task] = set()   # fetch / submit, never cancelled mid-flight

    # ---- observers ----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # ---- core loop ----
    def dispatch(self, event) -> m.SessionState:
        prev = self.state
        self.state, effects = m.transition(prev, event, self.settings)
        if self.state is not prev:
            logger.debug("%s: %s -> %s (epoch %d)", type(event).__name__,
                         prev.stage.value, self.state.stage.value, self.state.epoch)
            self._notify()
        for effect in effects:
            self._run(effect)
        return self.state

    def _run(self, effect) -> None:
        if isinstance(effect, m.CancelTimers):
            self._cancel_timers()
        elif isinstance(effect, m.FetchNames):
            self._spawn(self._fetch(effect), self._requests)
        elif isinstance(effect, m.StartCountdown):
            self._spawn(self._countdown(effect), self._timers)
        elif isinstance(effect, m.StartScoring):
            self._spawn(self._later(effect.delay, m.ScoringDue(effect.epoch)), self._timers)
        elif isinstance(effect, m.SubmitResult):
            self._spawn(self._submit(effect), self._requests)
        elif isinstance(effect, m.ScheduleReset):
            self._spawn(self._later(effect.delay, m.ResetTimeout(effect.epoch)), self._timers)
        else:
            raise TypeError(f"unknown effect: {effect!r}")

    def _spawn(self, coro, bucket: Set[asyncio.Task]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        bucket.add(task)
        task.add_done_callback(bucket.discard)
        return task

    def _cancel_timers(self) -> None:
        for task in list(self._timers):
            task.cancel()
        self._timers.clear()

    # ---- effect runners ----
    async def _fetch(self, effect: m.FetchNames) -> None:
        try:
            payload = await at_least(self.fetch_floor, asyncio.to_thread(self.api.fetch_names))
        except RecallError as exc:
            logger.warning("Failed to fetch names: %s", exc)
            self.dispatch(m.NamesFailed(effect.epoch, exc.user_message))
            return
        except Exception:
            logger.exception("Failed to fetch names")
            self.dispatch(m.NamesFailed(effect.epoch))
            return
        self.dispatch(m.NamesLoaded(effect.epoch, tuple(payload.names), payload.pool_size))

    async def _countdown(self, effect: m.StartCountdown) -> None:
        for _ in range(effect.seconds):
            await asyncio.sleep(self.tick_seconds)
            self.dispatch(m.Tick(effect.epoch))
            if self.state.epoch != effect.epoch:
                return

    async def _later(self, delay: float, event) -> None:
        await asyncio.sleep(max(0.0, delay))
        self.dispatch(event)

    async def _submit(self, effect: m.SubmitResult) -> None:
        try:
            await asyncio.to_thread(self.api.submit_result, effect.payload)
        except RecallError as exc:
            logger.warning("Failed to save result: %s", exc)
            self.dispatch(m.ResultSaveFailed(effect.epoch, exc.user_message))
            return
        except Exception:
            logger.exception("Failed to save result")
            self.dispatch(m.ResultSaveFailed(effect.epoch))
            return
        self.dispatch(m.ResultSaved(effect.epoch))

    # ---- convenience ----
    def start(self, email: Optional[str] = None) -> m.SessionState:
        return self.dispatch(m.StartRequested(email))

    def skip(self) -> m.SessionState:
        return self.dispatch(m.SkipRequested())

    def submit(self, text: Optional[str] = None) -> m.SessionState:
        return self.dispatch(m.RecallSubmitted(text))

    def reset(self) -> m.SessionState:
        return self.dispatch(m.ResetRequested())

    async def wait_for(self, predicate: Callable[[m.SessionState], bool],
                       timeout: Optional[float] = None) -> m.SessionState:
        """Resolve once ``predicate(state)`` holds (checked on every change)."""
        if predicate(self.state):
            return self.state
        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()

        def _check(state: m.SessionState) -> None:
            if not fut.done() and predicate(state):
                fut.set_result(state)

        unsubscribe = self.subscribe(_check)
        try:
            return await asyncio.wait_for(fut, timeout)
        finally:
            unsubscribe()

    async def idle(self) -> None:
        """Wait for in-flight network calls to settle."""
        while self._requests:
            await asyncio.gather(*list(self._requests), return_exceptions=True)

    async def close(self) -> None:
        self._cancel_timers()
        for task in list(self._requests):
            task.cancel()
        await asyncio.gather(*list(self._requests), return_exceptions=True)
        self._requests.clear()
