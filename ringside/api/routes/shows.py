"""Show, roster and match card endpoints."""

from fastapi import APIRouter, Depends, Response

from ringside.api.dependencies import (
    get_catalog,
    get_match_recorder,
    get_roster_manager,
    get_title_tracker,
)
from ringside.api.schemas import (
    MatchCreate,
    MatchOut,
    RosterEntryOut,
    ShowCreate,
    ShowOut,
    ShowUpdate,
    TitleStandingOut,
    WrestlerOut,
)
from ringside.services import Catalog, MatchRecorder, RosterManager, TitleHistoryTracker

router = APIRouter(prefix="/api/shows", tags=["shows"])


@router.get("", response_model=list[ShowOut])
async def list_shows(catalog: Catalog = Depends(get_catalog)):
    return await catalog.list_shows()


@router.post("", response_model=ShowOut, status_code=201)
async def create_show(body: ShowCreate, catalog: Catalog = Depends(get_catalog)):
    return await catalog.create_show(body.name, body.description)


@router.get("/{show_id}", response_model=ShowOut)
async def get_show(show_id: int, catalog: Catalog = Depends(get_catalog)):
    return await catalog.get_show(show_id)


@router.patch("/{show_id}", response_model=ShowOut)
async def update_show(
    show_id: int,
    body: ShowUpdate,
    catalog: Catalog = Depends(get_catalog),
):
    return await catalog.update_show(show_id, **body.model_dump(exclude_unset=True))


@router.delete("/{show_id}", status_code=204)
async def delete_show(show_id: int, catalog: Catalog = Depends(get_catalog)):
    """Delete a show with its roster and card. Its titles become unassigned."""
    await catalog.delete_show(show_id)
    return Response(status_code=204)


# ----- Roster -----


@router.get("/{show_id}/roster", response_model=list[WrestlerOut])
async def get_roster(
    show_id: int,
    roster: RosterManager = Depends(get_roster_manager),
):
    """Wrestlers currently active on the show, by name."""
    return await roster.roster_of(show_id)


@router.put("/{show_id}/roster/{wrestler_id}", response_model=RosterEntryOut)
async def assign_wrestler(
    show_id: int,
    wrestler_id: int,
    roster: RosterManager = Depends(get_roster_manager),
):
    """
    Assign a wrestler to the show.

    The wrestler leaves whichever show they were on. Re-assigning to the
    current show changes nothing.
    """
    return await roster.assign(wrestler_id, show_id)


@router.delete("/{show_id}/roster/{wrestler_id}")
async def release_wrestler(
    show_id: int,
    wrestler_id: int,
    roster: RosterManager = Depends(get_roster_manager),
):
    released = await roster.release(wrestler_id, show_id)
    return {"show_id": show_id, "wrestler_id": wrestler_id, "released": released}


# ----- Card -----


@router.get("/{show_id}/matches", response_model=list[MatchOut])
async def list_matches(
    show_id: int,
    recorder: MatchRecorder = Depends(get_match_recorder),
):
    """The show's card in match order."""
    return await recorder.matches_for_show(show_id)


@router.post("/{show_id}/matches", response_model=MatchOut, status_code=201)
async def book_match(
    show_id: int,
    body: MatchCreate,
    recorder: MatchRecorder = Depends(get_match_recorder),
):
    """Book a match. Supplying title_id makes it a title match."""
    return await recorder.book(
        show_id,
        body.match_type,
        [p.model_dump() for p in body.participants],
        stipulation=body.stipulation,
        title_id=body.title_id,
        match_name=body.match_name,
        scheduled_date=body.scheduled_date,
        match_order=body.match_order,
    )


@router.get("/{show_id}/titles", response_model=list[TitleStandingOut])
async def list_show_titles(
    show_id: int,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    """Active titles reserved to the show, with their champions."""
    standings = await tracker.titles_for_show(show_id)
    return [TitleStandingOut.model_validate(s) for s in standings]
