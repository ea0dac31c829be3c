"""Randomized operation sequences never break the history invariants."""

import random

import pytest
from sqlalchemy import func, select

from ringside.errors import RingsideError
from ringside.models import Match, ShowRoster, Title, TitleHolder


async def _check_invariants(store):
    async with store.session() as db:
        active_per_wrestler = (
            await db.execute(
                select(ShowRoster.wrestler_id, func.count(ShowRoster.id))
                .where(ShowRoster.is_active == True)
                .group_by(ShowRoster.wrestler_id)
            )
        ).all()
        assert all(count == 1 for _, count in active_per_wrestler)

        open_per_title = dict(
            (
                await db.execute(
                    select(TitleHolder.title_id, TitleHolder.wrestler_id).where(
                        TitleHolder.held_until.is_(None)
                    )
                )
            ).all()
        )
        open_counts = (
            await db.execute(
                select(func.count(TitleHolder.id))
                .where(TitleHolder.held_until.is_(None))
                .group_by(TitleHolder.title_id)
            )
        ).scalars().all()
        assert all(count == 1 for count in open_counts)

        for title in (await db.execute(select(Title))).scalars():
            assert title.current_holder_id == open_per_title.get(title.id)

        for match in (await db.execute(select(Match))).scalars():
            if match.is_title_match and match.winner_id is not None:
                # a title match winner holds or has held that title
                reigns = await db.scalar(
                    select(func.count(TitleHolder.id)).where(
                        TitleHolder.title_id == match.title_id,
                        TitleHolder.wrestler_id == match.winner_id,
                    )
                )
                assert reigns >= 1


@pytest.mark.parametrize("seed", [1, 7, 42])
async def test_random_operations_keep_invariants(
    seed, store, catalog, roster, tracker, recorder
):
    rng = random.Random(seed)
    shows = [await catalog.create_show(f"Show {i}") for i in range(3)]
    wrestlers = [
        await catalog.create_wrestler(f"Wrestler {i}", rng.choice(["Male", "Female"]))
        for i in range(6)
    ]
    titles = [
        await catalog.create_title(f"Title {i}", show_id=rng.choice([None, shows[0].id]))
        for i in range(3)
    ]
    matches = []

    for _ in range(60):
        operation = rng.choice(
            ["assign", "release", "crown", "vacate", "book", "result", "retire"]
        )
        wrestler = rng.choice(wrestlers)
        show = rng.choice(shows)
        title = rng.choice(titles)
        try:
            if operation == "assign":
                await roster.assign(wrestler.id, show.id)
            elif operation == "release":
                await roster.release(wrestler.id, show.id)
            elif operation == "crown":
                await tracker.crown(title.id, wrestler.id)
            elif operation == "vacate":
                await tracker.vacate(title.id)
            elif operation == "book":
                card = rng.sample(wrestlers, rng.randint(1, 4))
                matches.append(
                    await recorder.book(
                        show.id,
                        "Singles",
                        [w.id for w in card],
                        title_id=title.id if rng.random() < 0.5 else None,
                    )
                )
            elif operation == "result" and matches:
                match = rng.choice(matches)
                participants = await recorder.participants(match.id)
                winner = rng.choice(participants).wrestler_id
                if rng.random() < 0.2:
                    winner = wrestler.id
                await recorder.record_result(match.id, winner)
            elif operation == "retire":
                await catalog.set_title_active(title.id, rng.random() < 0.5)
        except RingsideError:
            pass

        await _check_invariants(store)
