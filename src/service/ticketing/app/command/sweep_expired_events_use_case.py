from datetime import datetime, timedelta, timezone
from typing import Optional

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.domain.rule.timestamp_parser import ensure_utc


class SweepExpiredEventsUseCase:
    """
    Soft-delete every live event that ended more than the grace period ago.

    Tickets and income are left untouched. Running it twice is harmless.
    """

    def __init__(
        self, *, uow: AbstractUnitOfWork, grace: Optional[timedelta] = None
    ) -> None:
        self.uow = uow
        self.grace = grace if grace is not None else timedelta(days=settings.EVENT_EXPIRY_GRACE_DAYS)

    @Logger.io
    async def sweep(self, *, now: Optional[datetime] = None) -> list[int]:
        now = ensure_utc(now) if now else datetime.now(timezone.utc)
        cutoff = now - self.grace

        async with self.uow:
            swept_ids = await self.uow.event_command_repo.soft_delete_ended_before(cutoff=cutoff)
            await self.uow.commit()

        metrics.record_sweep(swept=len(swept_ids))
        if swept_ids:
            Logger.base.info(f'🧹 [SWEEP] Soft-deleted {len(swept_ids)} expired events: {swept_ids}')
        return swept_ids
