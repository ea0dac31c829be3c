"""FastAPI dependencies for Ringside."""

from fastapi import Depends, Request

from ringside.config import BookingPolicy
from ringside.models import Store
from ringside.services import Catalog, MatchRecorder, RosterManager, TitleHistoryTracker


def get_store(request: Request) -> Store:
    """The Store attached to the application at startup."""
    return request.app.state.store


def get_policy(request: Request) -> BookingPolicy:
    return request.app.state.policy


def get_catalog(
    store: Store = Depends(get_store),
    policy: BookingPolicy = Depends(get_policy),
) -> Catalog:
    return Catalog(store, policy)


def get_roster_manager(store: Store = Depends(get_store)) -> RosterManager:
    return RosterManager(store)


def get_title_tracker(
    store: Store = Depends(get_store),
    policy: BookingPolicy = Depends(get_policy),
) -> TitleHistoryTracker:
    return TitleHistoryTracker(store, policy)


def get_match_recorder(
    store: Store = Depends(get_store),
    policy: BookingPolicy = Depends(get_policy),
) -> MatchRecorder:
    return MatchRecorder(store, policy)
