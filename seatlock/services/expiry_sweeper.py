"""
Expiry handling for temporary seat locks

The sweep is lazy: the registry runs it at the start of every operation, inside
its critical section, so an expired lock is never observed or acted upon.
ExpiryReclaimer additionally triggers the sweep on a timer; it goes through the
same registry lock and is optional.
"""

import asyncio
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from seatlock.core.metrics import record_expired_locks
from seatlock.models.seat import Seat

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Reclaims seats whose lock has reached its expiry time"""

    def sweep(self, seats: Iterable[Seat], now: datetime) -> List[str]:
        reclaimed = []
        for seat in seats:
            if not seat.is_lock_expired(now):
                continue
            holder = seat.holder
            seat.clear()
            reclaimed.append(seat.id)
            logger.info(f"Lock on seat {seat.id} held by {holder} expired, seat released")

        record_expired_locks(len(reclaimed))
        return reclaimed


class ExpiryReclaimer:
    """
    Background task that sweeps the registry every `interval` seconds
    """

    def __init__(self, registry, interval: float):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.registry = registry
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Expiry reclaimer started (every {self.interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Expiry reclaimer stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.registry.sweep_expired()
            except Exception as e:
                logger.error(f"Expiry sweep failed: {e}", exc_info=True)
