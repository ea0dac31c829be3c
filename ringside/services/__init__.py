"""Consistency services for Ringside."""

from ringside.services.catalog import Catalog
from ringside.services.matches import MatchRecorder, MatchResult, ParticipantSpec
from ringside.services.roster import RosterManager
from ringside.services.titles import TitleHistoryTracker, TitleStanding

__all__ = [
    "Catalog",
    "RosterManager",
    "TitleHistoryTracker",
    "TitleStanding",
    "MatchRecorder",
    "MatchResult",
    "ParticipantSpec",
]
