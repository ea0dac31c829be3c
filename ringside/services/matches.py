"""Match booking and result recording.

A match is Scheduled until a winner is recorded, then Resolved for good.
Recording the result of a title match also settles the championship: when
the winner is not the reigning champion, the title changes hands in the
same transaction that stores the winner, so the match record and the title
history cannot disagree.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.config import BookingPolicy, get_policy
from ringside.errors import AlreadyResolved, Conflict, InvalidParticipant, InvalidState
from ringside.models import (
    Match,
    MatchParticipant,
    MatchStatus,
    Show,
    Store,
    Title,
    TitleHolder,
    Wrestler,
)
from ringside.services.lookups import fetch_required
from ringside.services.titles import crown_wrestler, open_reign

logger = structlog.get_logger(__name__)


@dataclass
class ParticipantSpec:
    """One entry on a match card."""
    wrestler_id: int
    team_number: int | None = None
    entrance_order: int | None = None

    @classmethod
    def coerce(cls, value: Any) -> "ParticipantSpec":
        """Accept a ParticipantSpec, a mapping, a tuple or a bare wrestler id."""
        if isinstance(value, ParticipantSpec):
            return replace(value)
        if isinstance(value, dict):
            return cls(**value)
        if isinstance(value, (tuple, list)):
            return cls(*value)
        return cls(wrestler_id=int(value))


@dataclass
class MatchResult:
    """Outcome of record_result."""
    match: Match
    new_reign: TitleHolder | None = None

    @property
    def title_changed(self) -> bool:
        return self.new_reign is not None


def _normalize_participants(participants: Iterable[Any]) -> list[ParticipantSpec]:
    specs = [ParticipantSpec.coerce(p) for p in participants]
    if not specs:
        raise InvalidParticipant("a match needs at least one participant")

    seen: set[int] = set()
    for spec in specs:
        if spec.wrestler_id in seen:
            raise Conflict(
                f"wrestler {spec.wrestler_id} appears more than once in the match",
                wrestler_id=spec.wrestler_id,
            )
        seen.add(spec.wrestler_id)

    # Unspecified slots default to card position: own side, own entrance
    for position, spec in enumerate(specs, start=1):
        if spec.team_number is None:
            spec.team_number = position
        if spec.entrance_order is None:
            spec.entrance_order = position
    return specs


async def _participant_rows(db: AsyncSession, match_id: int) -> list[MatchParticipant]:
    result = await db.execute(
        select(MatchParticipant)
        .where(MatchParticipant.match_id == match_id)
        .order_by(MatchParticipant.entrance_order, MatchParticipant.id)
    )
    return list(result.scalars().all())


async def _apply_win_loss(
    db: AsyncSession, participants: list[MatchParticipant], winner_id: int
) -> None:
    winner_slot = next(p for p in participants if p.wrestler_id == winner_id)
    if winner_slot.team_number is None:
        winners = {winner_id}
    else:
        winners = {
            p.wrestler_id for p in participants if p.team_number == winner_slot.team_number
        }
    losers = {p.wrestler_id for p in participants} - winners

    await db.execute(
        update(Wrestler)
        .where(Wrestler.id.in_(winners))
        .values(wins=Wrestler.wins + 1)
        .execution_options(synchronize_session=False)
    )
    if losers:
        await db.execute(
            update(Wrestler)
            .where(Wrestler.id.in_(losers))
            .values(losses=Wrestler.losses + 1)
            .execution_options(synchronize_session=False)
        )


async def book_match(
    db: AsyncSession,
    show_id: int,
    match_type: str,
    participants: Iterable[Any],
    *,
    stipulation: str | None = None,
    title_id: int | None = None,
    match_name: str | None = None,
    scheduled_date: date | None = None,
    match_order: int | None = None,
) -> Match:
    """Insert a match and its participant slots inside the caller's transaction."""
    specs = _normalize_participants(participants)
    await fetch_required(db, Show, show_id)
    for spec in specs:
        await fetch_required(db, Wrestler, spec.wrestler_id)

    if title_id is not None:
        title = await fetch_required(db, Title, title_id)
        if not title.is_active:
            raise InvalidState(
                f"title {title_id} is inactive and cannot be defended",
                title_id=title_id,
            )
        if title.show_id is not None and title.show_id != show_id:
            raise Conflict(
                f"title {title_id} is reserved to show {title.show_id}",
                title_id=title_id,
                show_id=show_id,
            )

    if match_order is None:
        last = await db.scalar(
            select(func.max(Match.match_order)).where(Match.show_id == show_id)
        )
        match_order = (last or 0) + 1

    match = Match(
        show_id=show_id,
        match_name=match_name,
        match_type=match_type,
        match_stipulation=stipulation,
        scheduled_date=scheduled_date,
        match_order=match_order,
        winner_id=None,
        status=MatchStatus.SCHEDULED.value,
        is_title_match=title_id is not None,
        title_id=title_id,
    )
    db.add(match)
    await db.flush()

    db.add_all(
        MatchParticipant(
            match_id=match.id,
            wrestler_id=spec.wrestler_id,
            team_number=spec.team_number,
            entrance_order=spec.entrance_order,
        )
        for spec in specs
    )
    await db.flush()
    await db.refresh(match)

    logger.info(
        "match_booked",
        match_id=match.id,
        show_id=show_id,
        match_type=match_type,
        title_id=title_id,
        participants=[spec.wrestler_id for spec in specs],
    )
    return match


async def record_match_result(
    db: AsyncSession,
    match_id: int,
    winner_id: int,
    policy: BookingPolicy | None = None,
) -> MatchResult:
    """Store the winner and settle records and championship in one unit."""
    policy = policy or get_policy()
    match = await fetch_required(db, Match, match_id)
    if match.is_resolved:
        raise AlreadyResolved(
            f"match {match_id} is already resolved",
            match_id=match_id,
            winner_id=match.winner_id,
        )

    participants = await _participant_rows(db, match_id)
    if winner_id not in {p.wrestler_id for p in participants}:
        raise InvalidParticipant(
            f"wrestler {winner_id} is not a participant of match {match_id}",
            match_id=match_id,
            wrestler_id=winner_id,
        )

    result = await db.execute(
        update(Match)
        .where(Match.id == match_id, Match.status == MatchStatus.SCHEDULED.value)
        .values(winner_id=winner_id, status=MatchStatus.RESOLVED.value)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise AlreadyResolved(f"match {match_id} is already resolved", match_id=match_id)
    await db.refresh(match)

    if policy.matches.update_win_loss:
        await _apply_win_loss(db, participants, winner_id)

    new_reign = None
    if match.is_title_match and match.title_id is not None:
        reign = await open_reign(db, match.title_id)
        if reign is None or reign.wrestler_id != winner_id:
            show = await fetch_required(db, Show, match.show_id)
            new_reign = await crown_wrestler(
                db,
                match.title_id,
                winner_id,
                event_name=show.name,
                change_method=policy.matches.title_change_method,
                policy=policy,
            )

    logger.info(
        "match_resolved",
        match_id=match_id,
        winner_id=winner_id,
        title_id=match.title_id,
        title_changed=new_reign is not None,
    )
    return MatchResult(match=match, new_reign=new_reign)


class MatchRecorder:
    """Match cards and results."""

    def __init__(self, store: Store, policy: BookingPolicy | None = None):
        self.store = store
        self.policy = policy or get_policy()

    async def book(
        self,
        show_id: int,
        match_type: str,
        participants: Iterable[Any],
        stipulation: str | None = None,
        title_id: int | None = None,
        *,
        match_name: str | None = None,
        scheduled_date: date | None = None,
        match_order: int | None = None,
    ) -> Match:
        """
        Book a match on a show.

        participants is a sequence of (wrestler_id, team_number,
        entrance_order) entries; team and entrance default to card position.
        Passing title_id makes it a title match.

        Raises InvalidParticipant for an empty card, Conflict for a wrestler
        listed twice or a title reserved to another show, NotFound for
        unknown ids and InvalidState for a retired title.
        """
        async with self.store.transaction() as db:
            return await book_match(
                db,
                show_id,
                match_type,
                participants,
                stipulation=stipulation,
                title_id=title_id,
                match_name=match_name,
                scheduled_date=scheduled_date,
                match_order=match_order,
            )

    async def add_participant(
        self,
        match_id: int,
        wrestler_id: int,
        team_number: int | None = None,
        entrance_order: int | None = None,
    ) -> MatchParticipant:
        """Add a wrestler to a scheduled match."""
        async with self.store.transaction() as db:
            match = await fetch_required(db, Match, match_id)
            if match.is_resolved:
                raise AlreadyResolved(
                    f"match {match_id} is resolved; the card is closed",
                    match_id=match_id,
                )
            await fetch_required(db, Wrestler, wrestler_id)

            participants = await _participant_rows(db, match_id)
            if any(p.wrestler_id == wrestler_id for p in participants):
                raise Conflict(
                    f"wrestler {wrestler_id} is already in match {match_id}",
                    match_id=match_id,
                    wrestler_id=wrestler_id,
                )

            # A late entrant defaults to a side and entrance of their own
            if team_number is None:
                team_number = (
                    max((p.team_number or 0 for p in participants), default=0) + 1
                )
            if entrance_order is None:
                entrance_order = (
                    max((p.entrance_order or 0 for p in participants), default=0) + 1
                )
            participant = MatchParticipant(
                match_id=match_id,
                wrestler_id=wrestler_id,
                team_number=team_number,
                entrance_order=entrance_order,
            )
            db.add(participant)
            await db.flush()

        logger.info("participant_added", match_id=match_id, wrestler_id=wrestler_id)
        return participant

    async def record_result(self, match_id: int, winner_id: int) -> MatchResult:
        """
        Record the winner of a match.

        Single-shot: a second call raises AlreadyResolved and leaves the
        stored winner alone. For a title match whose winner is not the
        champion, the title changes hands atomically with the result.
        """
        async with self.store.transaction() as db:
            return await record_match_result(db, match_id, winner_id, self.policy)

    async def get(self, match_id: int) -> Match:
        async with self.store.session() as db:
            return await fetch_required(db, Match, match_id)

    async def participants(self, match_id: int) -> list[MatchParticipant]:
        """Participant slots in entrance order."""
        async with self.store.session() as db:
            await fetch_required(db, Match, match_id)
            return await _participant_rows(db, match_id)

    async def matches_for_show(self, show_id: int) -> list[Match]:
        """The show's card in match order."""
        async with self.store.session() as db:
            await fetch_required(db, Show, show_id)
            result = await db.execute(
                select(Match)
                .where(Match.show_id == show_id)
                .order_by(Match.match_order, Match.id)
            )
            return list(result.scalars().all())
