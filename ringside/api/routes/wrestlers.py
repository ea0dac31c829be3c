"""Wrestler API endpoints."""

from fastapi import APIRouter, Depends, Response

from ringside.api.dependencies import get_catalog, get_roster_manager, get_title_tracker
from ringside.api.schemas import (
    ActiveShowOut,
    PowerRatings,
    ReignOut,
    RosterEntryOut,
    SignatureMoveCreate,
    SignatureMoveOut,
    WrestlerCreate,
    WrestlerOut,
    WrestlerUpdate,
)
from ringside.services import Catalog, RosterManager, TitleHistoryTracker

router = APIRouter(prefix="/api/wrestlers", tags=["wrestlers"])


@router.get("", response_model=list[WrestlerOut])
async def list_wrestlers(catalog: Catalog = Depends(get_catalog)):
    """List all wrestlers by id."""
    return await catalog.list_wrestlers()


@router.get("/unassigned", response_model=list[WrestlerOut])
async def list_unassigned_wrestlers(
    roster: RosterManager = Depends(get_roster_manager),
):
    """Wrestlers not active on any show roster."""
    return await roster.unassigned_wrestlers()


@router.post("", response_model=WrestlerOut, status_code=201)
async def create_wrestler(
    body: WrestlerCreate,
    catalog: Catalog = Depends(get_catalog),
):
    profile = body.model_dump(exclude={"name", "gender", "is_user_created"}, exclude_none=True)
    return await catalog.create_wrestler(
        body.name,
        body.gender,
        is_user_created=body.is_user_created,
        **profile,
    )


@router.get("/{wrestler_id}", response_model=WrestlerOut)
async def get_wrestler(wrestler_id: int, catalog: Catalog = Depends(get_catalog)):
    return await catalog.get_wrestler(wrestler_id)


@router.patch("/{wrestler_id}", response_model=WrestlerOut)
async def update_wrestler(
    wrestler_id: int,
    body: WrestlerUpdate,
    catalog: Catalog = Depends(get_catalog),
):
    """Update any subset of the profile, ratings and record."""
    return await catalog.update_wrestler(wrestler_id, **body.model_dump(exclude_unset=True))


@router.put("/{wrestler_id}/power-ratings", response_model=WrestlerOut)
async def update_power_ratings(
    wrestler_id: int,
    body: PowerRatings,
    catalog: Catalog = Depends(get_catalog),
):
    return await catalog.update_power_ratings(
        wrestler_id, **body.model_dump(exclude_none=True)
    )


@router.delete("/{wrestler_id}", status_code=204)
async def delete_wrestler(wrestler_id: int, catalog: Catalog = Depends(get_catalog)):
    """Delete a wrestler; roster rows, reigns and match slots go with them."""
    await catalog.delete_wrestler(wrestler_id)
    return Response(status_code=204)


@router.get("/{wrestler_id}/show", response_model=ActiveShowOut)
async def get_active_show(
    wrestler_id: int,
    roster: RosterManager = Depends(get_roster_manager),
):
    """The show the wrestler is currently active on, if any."""
    show_id = await roster.active_show_for(wrestler_id)
    return ActiveShowOut(wrestler_id=wrestler_id, show_id=show_id)


@router.get("/{wrestler_id}/roster-history", response_model=list[RosterEntryOut])
async def get_roster_history(
    wrestler_id: int,
    roster: RosterManager = Depends(get_roster_manager),
):
    return await roster.roster_history(wrestler_id)


@router.get("/{wrestler_id}/reigns", response_model=list[ReignOut])
async def get_reigns(
    wrestler_id: int,
    tracker: TitleHistoryTracker = Depends(get_title_tracker),
):
    """Championship reigns held by the wrestler, oldest first."""
    return await tracker.reigns_for_wrestler(wrestler_id)


@router.get("/{wrestler_id}/signature-moves", response_model=list[SignatureMoveOut])
async def list_signature_moves(wrestler_id: int, catalog: Catalog = Depends(get_catalog)):
    return await catalog.signature_moves(wrestler_id)


@router.post(
    "/{wrestler_id}/signature-moves", response_model=SignatureMoveOut, status_code=201
)
async def add_signature_move(
    wrestler_id: int,
    body: SignatureMoveCreate,
    catalog: Catalog = Depends(get_catalog),
):
    return await catalog.add_signature_move(wrestler_id, body.move_name, body.move_type)


@router.delete("/signature-moves/{move_id}", status_code=204)
async def remove_signature_move(move_id: int, catalog: Catalog = Depends(get_catalog)):
    await catalog.remove_signature_move(move_id)
    return Response(status_code=204)
