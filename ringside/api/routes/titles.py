"""Championship endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from ringside.api.dependencies import get_catalog, get_title_tracker
from ringside.api.schemas import (
    CrownRequest,
    CurrentHolderOut,
    ReignOut,
    TitleActivity,
    TitleCreate,
    TitleOut,
    TitleStandingOut,
    TitleUpdate,
)
from ringside.services import Catalog, TitleHistoryTracker

router = APIRouter(prefix="/api/titles", tags=["titles"])


@router.get("", response_model=list[TitleOut])
async def list_titles(
    catalog: Catalog = Depends(get_catalog),
    active_only: bool = Query(True, description="Only show active titles"),
):
    """Titles by prestige tier, then name."""
    return await catalog.list_titles(active_only=active_only)


@router.get("/standings", response_model=list[TitleStandingOut])
async def get_standings(
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
    unassigned_only: bool = Query(False, description="Only titles with no show"),
):
    """Active titles with their current champion and days held."""
    if unassigned_only:
        standings = await tracker.unassigned_titles()
    else:
        standings = await tracker.standings()
    return [TitleStandingOut.model_validate(s) for s in standings]


@router.post("", response_model=TitleOut, status_code=201)
async def create_title(body: TitleCreate, catalog: Catalog = Depends(get_catalog)):
    """Create a vacant title. Prestige defaults from the division."""
    return await catalog.create_title(
        body.name,
        title_type=body.title_type,
        division=body.division,
        gender=body.gender,
        show_id=body.show_id,
        prestige_tier=body.prestige_tier,
        is_user_created=body.is_user_created,
    )


@router.get("/{title_id}", response_model=TitleOut)
async def get_title(title_id: int, catalog: Catalog = Depends(get_catalog)):
    return await catalog.get_title(title_id)


@router.patch("/{title_id}", response_model=TitleOut)
async def update_title(
    title_id: int,
    body: TitleUpdate,
    catalog: Catalog = Depends(get_catalog),
):
    return await catalog.update_title(title_id, **body.model_dump(exclude_unset=True))


@router.put("/{title_id}/active", response_model=TitleOut)
async def set_title_active(
    title_id: int,
    body: TitleActivity,
    catalog: Catalog = Depends(get_catalog),
):
    """Retire or reinstate a title."""
    return await catalog.set_title_active(title_id, body.is_active)


@router.delete("/{title_id}", status_code=204)
async def delete_title(title_id: int, catalog: Catalog = Depends(get_catalog)):
    await catalog.delete_title(title_id)
    return Response(status_code=204)


# ----- Holder history -----


@router.post("/{title_id}/crown", response_model=ReignOut, status_code=201)
async def crown(
    title_id: int,
    body: CrownRequest,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    """
    Change the champion outside of a match.

    Closes the current reign and opens a new one for the given wrestler.
    """
    return await tracker.crown(
        title_id,
        body.wrestler_id,
        event_name=body.event_name,
        event_location=body.event_location,
        change_method=body.change_method,
    )


@router.post("/{title_id}/vacate", response_model=ReignOut | None)
async def vacate(
    title_id: int,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    """Strip the title; returns the reign that ended, or null if already vacant."""
    return await tracker.vacate(title_id)


@router.get("/{title_id}/holder", response_model=CurrentHolderOut)
async def get_current_holder(
    title_id: int,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    wrestler_id = await tracker.current_holder(title_id)
    return CurrentHolderOut(title_id=title_id, wrestler_id=wrestler_id)


@router.get("/{title_id}/history", response_model=list[ReignOut])
async def get_history(
    title_id: int,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    """Every reign, oldest first, including the current one."""
    return await tracker.history(title_id)
