"""Catalog of wrestlers, shows and titles.

Plain create/read/update/delete for the global entities. Nothing here
touches roster assignments or title history; those belong to the roster
manager and the title tracker. Deletes go through the foreign keys, so
deleting a wrestler removes their roster rows, reigns and participant slots
in the same statement.
"""

from typing import Any

import structlog
from sqlalchemy import delete, func, select

from ringside.config import BookingPolicy, get_policy
from ringside.errors import Conflict
from ringside.models import (
    POWER_RATINGS,
    Gender,
    MoveType,
    Show,
    SignatureMove,
    Store,
    Title,
    Wrestler,
)
from ringside.services.lookups import fetch_required

logger = structlog.get_logger(__name__)

WRESTLER_PROFILE_FIELDS = frozenset({
    "name",
    "gender",
    "wins",
    "losses",
    "real_name",
    "nickname",
    "height",
    "weight",
    "debut_year",
    "promotion",
    "biography",
    *POWER_RATINGS,
})

SHOW_FIELDS = frozenset({"name", "description"})

# current_holder_id is written only by the title tracker, is_active only by
# set_title_active.
TITLE_FIELDS = frozenset({
    "name",
    "title_type",
    "division",
    "prestige_tier",
    "gender",
    "show_id",
})


def _check_fields(fields: dict[str, Any], allowed: frozenset[str], entity: str) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise TypeError(f"unknown {entity} field(s): {', '.join(sorted(unknown))}")


class Catalog:
    """
    CRUD for the global entities.

    Constraint violations (power ratings outside 1-10, negative records,
    prestige outside 1-5) are rejected by the store and surface as Conflict.
    """

    def __init__(self, store: Store, policy: BookingPolicy | None = None):
        self.store = store
        self.policy = policy or get_policy()

    # ----- Wrestlers -----

    async def create_wrestler(
        self,
        name: str,
        gender: str | Gender,
        *,
        is_user_created: bool = False,
        **profile: Any,
    ) -> Wrestler:
        """Create a wrestler. Extra keyword arguments fill the profile."""
        _check_fields(profile, WRESTLER_PROFILE_FIELDS, "wrestler")
        async with self.store.transaction() as db:
            wrestler = Wrestler(
                name=name,
                gender=Gender.parse(gender).value,
                is_user_created=is_user_created,
                **profile,
            )
            db.add(wrestler)
            await db.flush()
            await db.refresh(wrestler)

        logger.info("wrestler_created", wrestler_id=wrestler.id, name=wrestler.name)
        return wrestler

    async def get_wrestler(self, wrestler_id: int) -> Wrestler:
        async with self.store.session() as db:
            return await fetch_required(db, Wrestler, wrestler_id)

    async def list_wrestlers(self) -> list[Wrestler]:
        async with self.store.session() as db:
            result = await db.execute(select(Wrestler).order_by(Wrestler.id))
            return list(result.scalars().all())

    async def update_wrestler(self, wrestler_id: int, **fields: Any) -> Wrestler:
        """Update profile fields, power ratings or the win/loss record."""
        _check_fields(fields, WRESTLER_PROFILE_FIELDS, "wrestler")
        if "gender" in fields:
            fields["gender"] = Gender.parse(fields["gender"]).value

        async with self.store.transaction() as db:
            wrestler = await fetch_required(db, Wrestler, wrestler_id)
            for key, value in fields.items():
                setattr(wrestler, key, value)
            await db.flush()
            await db.refresh(wrestler)

        logger.info(
            "wrestler_updated", wrestler_id=wrestler_id, fields=sorted(fields)
        )
        return wrestler

    async def update_power_ratings(self, wrestler_id: int, **ratings: int) -> Wrestler:
        """Update any subset of the six power ratings."""
        unknown = set(ratings) - set(POWER_RATINGS)
        if unknown:
            raise TypeError(f"unknown power rating(s): {', '.join(sorted(unknown))}")
        return await self.update_wrestler(wrestler_id, **ratings)

    async def delete_wrestler(self, wrestler_id: int) -> None:
        """Delete a wrestler and, by cascade, everything that references them.

        Titles they hold become vacant: the open reign is deleted with them
        and titles.current_holder_id is set null by the store.
        """
        async with self.store.transaction() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            await db.execute(delete(Wrestler).where(Wrestler.id == wrestler_id))
        logger.info("wrestler_deleted", wrestler_id=wrestler_id)

    # ----- Signature moves -----

    async def add_signature_move(
        self, wrestler_id: int, move_name: str, move_type: str | MoveType
    ) -> SignatureMove:
        """Add a move, respecting the per-type limit from the booking policy."""
        move_type = MoveType(move_type).value
        limit = self.policy.signature_moves.limit_for(move_type)

        async with self.store.transaction() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            existing = await db.scalar(
                select(func.count(SignatureMove.id)).where(
                    SignatureMove.wrestler_id == wrestler_id,
                    SignatureMove.move_type == move_type,
                )
            )
            if existing >= limit:
                raise Conflict(
                    f"wrestler {wrestler_id} already has {existing} {move_type} "
                    f"move(s); the limit is {limit}",
                    wrestler_id=wrestler_id,
                    move_type=move_type,
                )
            move = SignatureMove(
                wrestler_id=wrestler_id, move_name=move_name, move_type=move_type
            )
            db.add(move)
            await db.flush()
            await db.refresh(move)

        logger.info(
            "signature_move_added",
            wrestler_id=wrestler_id,
            move_id=move.id,
            move_type=move_type,
        )
        return move

    async def signature_moves(self, wrestler_id: int) -> list[SignatureMove]:
        """Moves for a wrestler, primaries first."""
        async with self.store.session() as db:
            await fetch_required(db, Wrestler, wrestler_id)
            result = await db.execute(
                select(SignatureMove)
                .where(SignatureMove.wrestler_id == wrestler_id)
                .order_by(SignatureMove.move_type, SignatureMove.id)
            )
            return list(result.scalars().all())

    async def remove_signature_move(self, move_id: int) -> None:
        async with self.store.transaction() as db:
            await fetch_required(db, SignatureMove, move_id)
            await db.execute(delete(SignatureMove).where(SignatureMove.id == move_id))
        logger.info("signature_move_removed", move_id=move_id)

    # ----- Shows -----

    async def create_show(self, name: str, description: str = "") -> Show:
        async with self.store.transaction() as db:
            show = Show(name=name, description=description)
            db.add(show)
            await db.flush()
            await db.refresh(show)

        logger.info("show_created", show_id=show.id, name=show.name)
        return show

    async def get_show(self, show_id: int) -> Show:
        async with self.store.session() as db:
            return await fetch_required(db, Show, show_id)

    async def list_shows(self) -> list[Show]:
        async with self.store.session() as db:
            result = await db.execute(select(Show).order_by(Show.id))
            return list(result.scalars().all())

    async def update_show(self, show_id: int, **fields: Any) -> Show:
        _check_fields(fields, SHOW_FIELDS, "show")
        async with self.store.transaction() as db:
            show = await fetch_required(db, Show, show_id)
            for key, value in fields.items():
                setattr(show, key, value)
            await db.flush()
            await db.refresh(show)

        logger.info("show_updated", show_id=show_id, fields=sorted(fields))
        return show

    async def delete_show(self, show_id: int) -> None:
        """Delete a show with its roster rows and matches.

        Titles reserved to the show become unassigned.
        """
        async with self.store.transaction() as db:
            await fetch_required(db, Show, show_id)
            await db.execute(delete(Show).where(Show.id == show_id))
        logger.info("show_deleted", show_id=show_id)

    # ----- Titles -----

    async def create_title(
        self,
        name: str,
        *,
        title_type: str = "Singles",
        division: str = "World",
        gender: str = "Mixed",
        show_id: int | None = None,
        prestige_tier: int | None = None,
        is_user_created: bool = False,
    ) -> Title:
        """
        Create a vacant title.

        prestige_tier defaults to the policy's tier for the division. A title
        starts without a holder; the first champion is crowned through the
        title tracker so the history table records the reign.
        """
        if prestige_tier is None:
            prestige_tier = self.policy.titles.prestige_for_division(division)

        async with self.store.transaction() as db:
            if show_id is not None:
                await fetch_required(db, Show, show_id)
            title = Title(
                name=name,
                title_type=title_type,
                division=division,
                prestige_tier=prestige_tier,
                gender=gender,
                show_id=show_id,
                is_active=True,
                is_user_created=is_user_created,
            )
            db.add(title)
            await db.flush()
            await db.refresh(title)

        logger.info(
            "title_created",
            title_id=title.id,
            name=title.name,
            prestige_tier=title.prestige_tier,
        )
        return title

    async def get_title(self, title_id: int) -> Title:
        async with self.store.session() as db:
            return await fetch_required(db, Title, title_id)

    async def list_titles(self, active_only: bool = True) -> list[Title]:
        """Titles ordered by prestige tier, then name."""
        query = select(Title)
        if active_only:
            query = query.where(Title.is_active == True)
        query = query.order_by(Title.prestige_tier, Title.name)

        async with self.store.session() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def update_title(self, title_id: int, **fields: Any) -> Title:
        _check_fields(fields, TITLE_FIELDS, "title")
        async with self.store.transaction() as db:
            title = await fetch_required(db, Title, title_id)
            if fields.get("show_id") is not None:
                await fetch_required(db, Show, fields["show_id"])
            for key, value in fields.items():
                setattr(title, key, value)
            await db.flush()
            await db.refresh(title)

        logger.info("title_updated", title_id=title_id, fields=sorted(fields))
        return title

    async def set_title_active(self, title_id: int, is_active: bool) -> Title:
        """Retire or reinstate a title. The holder history is left untouched."""
        async with self.store.transaction() as db:
            title = await fetch_required(db, Title, title_id)
            title.is_active = is_active
            await db.flush()
            await db.refresh(title)

        logger.info("title_activity_changed", title_id=title_id, is_active=is_active)
        return title

    async def delete_title(self, title_id: int) -> None:
        """Delete a title and its history. Matches for it keep a null title_id."""
        async with self.store.transaction() as db:
            await fetch_required(db, Title, title_id)
            await db.execute(delete(Title).where(Title.id == title_id))
        logger.info("title_deleted", title_id=title_id)

