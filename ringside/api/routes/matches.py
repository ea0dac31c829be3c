"""Match endpoints. Booking lives under /api/shows/{id}/matches."""

from fastapi import APIRouter, Depends

from ringside.api.dependencies import get_match_recorder
from ringside.api.schemas import (
    MatchOut,
    MatchResultOut,
    ParticipantIn,
    ParticipantOut,
    ResultRequest,
)
from ringside.services import MatchRecorder

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("/{match_id}", response_model=MatchOut)
async def get_match(match_id: int, recorder: MatchRecorder = Depends(get_match_recorder)):
    return await recorder.get(match_id)


@router.get("/{match_id}/participants", response_model=list[ParticipantOut])
async def list_participants(
    match_id: int,
    recorder: MatchRecorder = Depends(get_match_recorder),
):
    """Participants in entrance order."""
    return await recorder.participants(match_id)


@router.post("/{match_id}/participants", response_model=ParticipantOut, status_code=201)
async def add_participant(
    match_id: int,
    body: ParticipantIn,
    recorder: MatchRecorder = Depends(get_match_recorder),
):
    return await recorder.add_participant(
        match_id, body.wrestler_id, body.team_number, body.entrance_order
    )


@router.post("/{match_id}/result", response_model=MatchResultOut)
async def record_result(
    match_id: int,
    body: ResultRequest,
    recorder: MatchRecorder = Depends(get_match_recorder),
):
    """
    Record the winner.

    One shot: a second call is rejected with 409. Winning a title match
    from the champion changes the title in the same step.
    """
    result = await recorder.record_result(match_id, body.winner_id)
    return MatchResultOut.model_validate(result)
