"""Integration tests for exclusive roster assignment."""

import asyncio

import pytest
from sqlalchemy import func, select

from ringside.errors import NotFound
from ringside.models import ShowRoster


async def _active_rows(store, wrestler_id):
    async with store.session() as db:
        return await db.scalar(
            select(func.count(ShowRoster.id)).where(
                ShowRoster.wrestler_id == wrestler_id,
                ShowRoster.is_active == True,
            )
        )


class TestAssign:
    """Assignment moves a wrestler between shows."""

    async def test_first_assignment(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw = promotion["raw"]

        entry = await roster.assign(cody.id, raw.id)

        assert entry.is_active
        assert await roster.active_show_for(cody.id) == raw.id
        assert [w.id for w in await roster.roster_of(raw.id)] == [cody.id]

    async def test_reassignment_moves_wrestler(self, store, roster, promotion):
        """Assign to S1 then S2: only S2 is active."""
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw, smackdown = promotion["raw"], promotion["smackdown"]

        await roster.assign(cody.id, raw.id)
        await roster.assign(cody.id, smackdown.id)

        assert await roster.active_show_for(cody.id) == smackdown.id
        assert await roster.roster_of(raw.id) == []
        assert [w.id for w in await roster.roster_of(smackdown.id)] == [cody.id]
        assert await _active_rows(store, cody.id) == 1

    async def test_same_show_is_idempotent(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw = promotion["raw"]

        first = await roster.assign(cody.id, raw.id)
        second = await roster.assign(cody.id, raw.id)

        assert first.id == second.id
        assert len(await roster.roster_history(cody.id)) == 1

    async def test_return_to_previous_show_reactivates_row(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw, smackdown = promotion["raw"], promotion["smackdown"]

        first = await roster.assign(cody.id, raw.id)
        await roster.assign(cody.id, smackdown.id)
        back = await roster.assign(cody.id, raw.id)

        assert back.id == first.id
        history = await roster.roster_history(cody.id)
        assert len(history) == 2
        assert [row.show_id for row in history if row.is_active] == [raw.id]

    async def test_unknown_ids(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]

        with pytest.raises(NotFound):
            await roster.assign(cody.id, 9999)
        with pytest.raises(NotFound):
            await roster.assign(9999, promotion["raw"].id)

        assert await roster.active_show_for(cody.id) is None

    async def test_concurrent_assignments_leave_one_active(self, store, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw, smackdown = promotion["raw"], promotion["smackdown"]

        await asyncio.gather(
            roster.assign(cody.id, raw.id),
            roster.assign(cody.id, smackdown.id),
        )

        assert await _active_rows(store, cody.id) == 1
        assert await roster.active_show_for(cody.id) in (raw.id, smackdown.id)


class TestRelease:
    """Releasing a wrestler from a roster."""

    async def test_release(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw = promotion["raw"]
        await roster.assign(cody.id, raw.id)

        assert await roster.release(cody.id, raw.id) is True
        assert await roster.active_show_for(cody.id) is None
        assert await roster.release(cody.id, raw.id) is False

    async def test_release_keeps_history(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        raw = promotion["raw"]
        await roster.assign(cody.id, raw.id)
        await roster.release(cody.id, raw.id)

        history = await roster.roster_history(cody.id)

        assert len(history) == 1
        assert history[0].is_active is False

    async def test_release_from_other_show_is_noop(self, roster, promotion):
        cody = promotion["wrestlers"]["Cody Rhodes"]
        await roster.assign(cody.id, promotion["raw"].id)

        assert await roster.release(cody.id, promotion["smackdown"].id) is False
        assert await roster.active_show_for(cody.id) == promotion["raw"].id


class TestRosterQueries:
    """Roster listings."""

    async def test_roster_sorted_by_name(self, roster, promotion):
        raw = promotion["raw"]
        for name in ("Seth Rollins", "Bianca Belair", "Cody Rhodes"):
            await roster.assign(promotion["wrestlers"][name].id, raw.id)

        names = [w.name for w in await roster.roster_of(raw.id)]

        assert names == ["Bianca Belair", "Cody Rhodes", "Seth Rollins"]

    async def test_unassigned_wrestlers(self, roster, promotion):
        wrestlers = promotion["wrestlers"]
        await roster.assign(wrestlers["Cody Rhodes"].id, promotion["raw"].id)
        await roster.assign(wrestlers["Rhea Ripley"].id, promotion["smackdown"].id)
        await roster.release(wrestlers["Rhea Ripley"].id, promotion["smackdown"].id)

        names = [w.name for w in await roster.unassigned_wrestlers()]

        assert names == ["Bianca Belair", "Rhea Ripley", "Seth Rollins"]

    async def test_roster_of_unknown_show(self, roster):
        with pytest.raises(NotFound):
            await roster.roster_of(9999)
