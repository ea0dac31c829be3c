"""Database models for Ringside."""

from ringside.models.base import Base, Store, get_engine, get_session_factory
from ringside.models.domain import (
    POWER_RATINGS,
    Gender,
    Match,
    MatchParticipant,
    MatchStatus,
    MoveType,
    Show,
    ShowRoster,
    SignatureMove,
    Title,
    TitleHolder,
    Wrestler,
)

__all__ = [
    # Base
    "Base",
    "Store",
    "get_engine",
    "get_session_factory",
    # Domain models
    "Wrestler",
    "SignatureMove",
    "Show",
    "ShowRoster",
    "Title",
    "TitleHolder",
    "Match",
    "MatchParticipant",
    # Enums and constants
    "Gender",
    "MoveType",
    "MatchStatus",
    "POWER_RATINGS",
]
