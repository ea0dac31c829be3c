"""Roster assignment.

A wrestler is active on at most one show at a time. Assignment rows are
history: they are deactivated, never deleted, and a repeat assignment to the
same show reactivates the existing row instead of appending a duplicate.

The module-level functions operate inside a caller's transaction; the
RosterManager wraps each of them in one Store transaction.
"""

from datetime import datetime, timezone

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.models import Show, ShowRoster, Store, Wrestler
from ringside.services.lookups import fetch_required

logger = structlog.get_logger(__name__)


async def assign_wrestler(
    db: AsyncSession, wrestler_id: int, show_id: int
) -> ShowRoster:
    """
    Make show_id the wrestler's only active show.

    Order matters: any other active row is closed before the target row is
    opened, so the partial unique index on active rows never sees two.
    """
    await fetch_required(db, Wrestler, wrestler_id)
    await fetch_required(db, Show, show_id)

    rows = (
        await db.execute(
            select(ShowRoster).where(ShowRoster.wrestler_id == wrestler_id)
        )
    ).scalars().all()

    target = next((row for row in rows if row.show_id == show_id), None)
    if target is not None and target.is_active:
        return target

    previous = [row for row in rows if row.is_active]
    for row in previous:
        row.is_active = False
    await db.flush()

    now = datetime.now(timezone.utc)
    if target is None:
        target = ShowRoster(
            show_id=show_id, wrestler_id=wrestler_id, assigned_at=now, is_active=True
        )
        db.add(target)
    else:
        target.is_active = True
        target.assigned_at = now
    await db.flush()

    logger.info(
        "wrestler_assigned",
        wrestler_id=wrestler_id,
        show_id=show_id,
        previous_show_ids=[row.show_id for row in previous],
    )
    return target


async def release_wrestler(db: AsyncSession, wrestler_id: int, show_id: int) -> bool:
    """Deactivate the (show, wrestler) row. Returns False if nothing was active."""
    result = await db.execute(
        update(ShowRoster)
        .where(
            ShowRoster.show_id == show_id,
            ShowRoster.wrestler_id == wrestler_id,
            ShowRoster.is_active == True,
        )
        .values(is_active=False)
    )
    released = result.rowcount > 0
    if released:
        logger.info("wrestler_released", wrestler_id=wrestler_id, show_id=show_id)
    return released


async def active_show_id(db: AsyncSession, wrestler_id: int) -> int | None:
    return await db.scalar(
        select(ShowRoster.show_id).where(
            ShowRoster.wrestler_id == wrestler_id,
            ShowRoster.is_active == True,
        )
    )


class RosterManager:
    """Exclusive show roster assignment."""

    def __init__(self, store: Store):
        self.store = store

    async def assign(self, wrestler_id: int, show_id: int) -> ShowRoster:
        """
        Assign a wrestler to a show, leaving any other show's roster.

        Raises NotFound for an unknown wrestler or show, Conflict if the
        transaction cannot complete.
        """
        async with self.store.transaction() as db:
            return await assign_wrestler(db, wrestler_id, show_id)

    async def release(self, wrestler_id: int, show_id: int) -> bool:
        """Take a wrestler off a show's roster. Releasing twice is not an error."""
        async with self.store.transaction() as db:
            return await release_wrestler(db, wrestler_id, show_id)

    async def active_show_for(self, wrestler_id: int) -> int | None:
        async with self.store.session() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            return await active_show_id(db, wrestler_id)

    async def roster_of(self, show_id: int) -> list[Wrestler]:
        """Wrestlers currently active on a show, by name."""
        async with self.store.session() as db:
            await fetch_required(db, Show, show_id)
            result = await db.execute(
                select(Wrestler)
                .join(ShowRoster, ShowRoster.wrestler_id == Wrestler.id)
                .where(ShowRoster.show_id == show_id, ShowRoster.is_active == True)
                .order_by(Wrestler.name, Wrestler.id)
            )
            return list(result.scalars().all())

    async def unassigned_wrestlers(self) -> list[Wrestler]:
        """Wrestlers with no active roster row anywhere."""
        active = select(ShowRoster.wrestler_id).where(ShowRoster.is_active == True)
        async with self.store.session() as db:
            result = await db.execute(
                select(Wrestler)
                .where(Wrestler.id.not_in(active))
                .order_by(Wrestler.name, Wrestler.id)
            )
            return list(result.scalars().all())

    async def roster_history(self, wrestler_id: int) -> list[ShowRoster]:
        """Every roster row for a wrestler, most recent assignment first."""
        async with self.store.session() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            result = await db.execute(
                select(ShowRoster)
                .where(ShowRoster.wrestler_id == wrestler_id)
                .order_by(ShowRoster.assigned_at.desc(), ShowRoster.id.desc())
            )
            return list(result.scalars().all())
