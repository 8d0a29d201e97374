from typing import Callable, Optional

import anyio
from anyio.abc import TaskGroup

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.sweep_expired_events_use_case import (
    SweepExpiredEventsUseCase,
)


class ExpirySweepScheduler:
    """Run the expired-event sweep on a fixed interval inside the app's task group"""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        interval_seconds: Optional[float] = None,
    ) -> None:
        self.uow_factory = uow_factory
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.EXPIRY_SWEEP_INTERVAL_SECONDS
        )

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self._sweep_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(
            f'⏰ [Sweep Scheduler] Started, interval={self.interval_seconds}s'
        )

    async def run_once(self) -> list[int]:
        # Fresh unit of work per run; a UoW is not reentrant
        use_case = SweepExpiredEventsUseCase(uow=self.uow_factory())
        return await use_case.sweep()

    async def _sweep_loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception as e:
                # A failed run must not stop later runs
                Logger.base.error(f'❌ [Sweep Scheduler] Sweep failed: {type(e).__name__}: {e}')
            await anyio.sleep(self.interval_seconds)
