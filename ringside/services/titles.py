"""Championship holder history.

Each reign is one title_holders row. For any title at most one row is open
(held_until IS NULL), and titles.current_holder_id names that row's
wrestler, or is null when the title is vacant. A title change closes the
open reign before opening the next, and moves the pointer in the same
transaction.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.config import BookingPolicy, get_policy
from ringside.errors import InvalidState
from ringside.models import Store, Title, TitleHolder, Wrestler
from ringside.services.lookups import fetch_required

logger = structlog.get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class TitleStanding:
    """A title with its current reign, as shown on title listings."""
    title: Title
    reign: TitleHolder | None
    holder_name: str | None
    holder_gender: str | None
    days_held: int | None


async def open_reign(db: AsyncSession, title_id: int) -> TitleHolder | None:
    return await db.scalar(
        select(TitleHolder).where(
            TitleHolder.title_id == title_id,
            TitleHolder.held_until.is_(None),
        )
    )


async def crown_wrestler(
    db: AsyncSession,
    title_id: int,
    wrestler_id: int,
    *,
    event_name: str | None = None,
    event_location: str | None = None,
    change_method: str | None = None,
    policy: BookingPolicy | None = None,
) -> TitleHolder:
    """
    Start a new reign inside the caller's transaction.

    Closes the open reign (if any), opens one for wrestler_id and points the
    title at it. Crowning the wrestler who already holds the open reign
    returns that reign unchanged.

    Raises NotFound for an unknown title or wrestler and InvalidState for a
    retired title unless the policy allows it.
    """
    policy = policy or get_policy()
    title = await fetch_required(db, Title, title_id)
    await fetch_required(db, Wrestler, wrestler_id)

    if not title.is_active and not policy.titles.allow_crowning_inactive:
        raise InvalidState(
            f"title {title_id} is inactive and cannot change hands",
            title_id=title_id,
        )

    current = await open_reign(db, title_id)
    if current is not None and current.wrestler_id == wrestler_id:
        title.current_holder_id = wrestler_id
        await db.flush()
        return current

    now = datetime.now(timezone.utc)
    if current is not None:
        current.held_until = now
        await db.flush()

    reign = TitleHolder(
        title_id=title_id,
        wrestler_id=wrestler_id,
        held_since=now,
        held_until=None,
        event_name=event_name,
        event_location=event_location,
        change_method=change_method,
    )
    db.add(reign)
    title.current_holder_id = wrestler_id
    await db.flush()

    logger.info(
        "title_crowned",
        title_id=title_id,
        wrestler_id=wrestler_id,
        previous_holder_id=current.wrestler_id if current is not None else None,
        change_method=change_method,
    )
    return reign


async def vacate_title(db: AsyncSession, title_id: int) -> TitleHolder | None:
    """Close the open reign (if any) and clear the holder pointer."""
    title = await fetch_required(db, Title, title_id)
    current = await open_reign(db, title_id)
    if current is not None:
        current.held_until = datetime.now(timezone.utc)
    title.current_holder_id = None
    await db.flush()

    logger.info(
        "title_vacated",
        title_id=title_id,
        previous_holder_id=current.wrestler_id if current is not None else None,
    )
    return current


class TitleHistoryTracker:
    """Championship changes and reign history."""

    def __init__(self, store: Store, policy: BookingPolicy | None = None):
        self.store = store
        self.policy = policy or get_policy()

    async def crown(
        self,
        title_id: int,
        wrestler_id: int,
        event_name: str | None = None,
        event_location: str | None = None,
        change_method: str | None = None,
    ) -> TitleHolder:
        """Make wrestler_id the champion. See crown_wrestler."""
        async with self.store.transaction() as db:
            return await crown_wrestler(
                db,
                title_id,
                wrestler_id,
                event_name=event_name,
                event_location=event_location,
                change_method=change_method,
                policy=self.policy,
            )

    async def vacate(self, title_id: int) -> TitleHolder | None:
        """Strip the title. Returns the reign that was closed, if any."""
        async with self.store.transaction() as db:
            return await vacate_title(db, title_id)

    async def current_holder(self, title_id: int) -> int | None:
        """The wrestler of the open reign, read from history."""
        async with self.store.session() as db:
            await fetch_required(db, Title, title_id)
            reign = await open_reign(db, title_id)
            return reign.wrestler_id if reign is not None else None

    async def history(self, title_id: int) -> list[TitleHolder]:
        """All reigns, oldest first, including the open one."""
        async with self.store.session() as db:
            await fetch_required(db, Title, title_id)
            result = await db.execute(
                select(TitleHolder)
                .where(TitleHolder.title_id == title_id)
                .order_by(TitleHolder.held_since, TitleHolder.id)
            )
            return list(result.scalars().all())

    async def reigns_for_wrestler(self, wrestler_id: int) -> list[TitleHolder]:
        """Every reign a wrestler has had, oldest first."""
        async with self.store.session() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            result = await db.execute(
                select(TitleHolder)
                .where(TitleHolder.wrestler_id == wrestler_id)
                .order_by(TitleHolder.held_since, TitleHolder.id)
            )
            return list(result.scalars().all())

    async def standings(self) -> list[TitleStanding]:
        """Every active title with its current reign."""
        return await self._standings(None, filter_show=False)

    async def titles_for_show(self, show_id: int) -> list[TitleStanding]:
        """Active titles reserved to a show."""
        return await self._standings(show_id, filter_show=True)

    async def unassigned_titles(self) -> list[TitleStanding]:
        """Active titles not reserved to any show."""
        return await self._standings(None, filter_show=True)

    async def _standings(
        self, show_id: int | None, filter_show: bool
    ) -> list[TitleStanding]:
        query = (
            select(Title, TitleHolder, Wrestler.name, Wrestler.gender)
            .outerjoin(
                TitleHolder,
                (TitleHolder.title_id == Title.id) & TitleHolder.held_until.is_(None),
            )
            .outerjoin(Wrestler, Wrestler.id == TitleHolder.wrestler_id)
            .where(Title.is_active == True)
        )
        if filter_show:
            if show_id is None:
                query = query.where(Title.show_id.is_(None))
            else:
                query = query.where(Title.show_id == show_id)
        query = query.order_by(Title.prestige_tier, Title.name, Title.id)

        now = datetime.now(timezone.utc)
        async with self.store.session() as db:
            rows = (await db.execute(query)).all()

        return [
            TitleStanding(
                title=title,
                reign=reign,
                holder_name=holder_name,
                holder_gender=holder_gender,
                days_held=(
                    (now - _as_utc(reign.held_since)).days if reign is not None else None
                ),
            )
            for title, reign, holder_name, holder_gender in rows
        ]
