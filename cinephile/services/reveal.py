"""Cancellable slot-machine reveal sequence."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Sequence

from ..models import Movie

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]
MovieCallback = Callable[[Movie], None]


class RevealSequence:
    """Shuffle through candidates for a fixed number of ticks, then settle.

    The final movie is decided by the caller before the sequence starts and is
    never re-rolled. Each tick draws independently from ``candidates`` (with
    replacement, the final movie included). After ``steps`` ticks the sequence
    waits one more interval and reports ``final`` through ``on_settle``.

    ``cancel()`` may be called any number of times; once cancelled neither
    ``on_tick`` nor ``on_settle`` runs again.
    """

    def __init__(
        self,
        candidates: Sequence[Movie],
        final: Movie,
        *,
        steps: int,
        interval: float,
        rng: random.Random,
        on_tick: MovieCallback,
        on_settle: MovieCallback,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        if not candidates:
            raise ValueError("A reveal sequence needs at least one candidate")
        if steps < 1:
            raise ValueError("A reveal sequence needs at least one step")
        self.candidates = tuple(candidates)
        self.final = final
        self.steps = steps
        self.interval = interval
        self._rng = rng
        self._on_tick = on_tick
        self._on_settle = on_settle
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None
        self._cancelled = False
        self.ticks_run = 0

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def start(self) -> "RevealSequence":
        """Schedule the sequence on the running event loop."""

        if self._task is not None:
            raise RuntimeError("Reveal sequence already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the sequence has settled or been cancelled."""

        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> None:
        for _ in range(self.steps):
            await self._sleep(self.interval)
            if self._cancelled:
                return
            self.ticks_run += 1
            self._on_tick(self._rng.choice(self.candidates))

        await self._sleep(self.interval)
        if self._cancelled:
            return
        self._on_settle(self.final)
