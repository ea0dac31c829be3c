"""Request and response bodies.

snake_case on both sides of the wire; the models read straight from ORM
rows.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from ringside.models import Gender, MatchStatus, MoveType


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ----- Wrestlers -----


class PowerRatings(BaseModel):
    strength: int | None = Field(default=None, ge=1, le=10)
    speed: int | None = Field(default=None, ge=1, le=10)
    agility: int | None = Field(default=None, ge=1, le=10)
    stamina: int | None = Field(default=None, ge=1, le=10)
    charisma: int | None = Field(default=None, ge=1, le=10)
    technique: int | None = Field(default=None, ge=1, le=10)


class WrestlerCreate(PowerRatings):
    name: str = Field(min_length=1)
    gender: Gender
    real_name: str | None = None
    nickname: str | None = None
    height: str | None = None
    weight: str | None = None
    debut_year: int | None = None
    promotion: str | None = None
    biography: str | None = None
    is_user_created: bool = True


class WrestlerUpdate(PowerRatings):
    name: str | None = Field(default=None, min_length=1)
    gender: Gender | None = None
    wins: int | None = Field(default=None, ge=0)
    losses: int | None = Field(default=None, ge=0)
    real_name: str | None = None
    nickname: str | None = None
    height: str | None = None
    weight: str | None = None
    debut_year: int | None = None
    promotion: str | None = None
    biography: str | None = None


class WrestlerOut(ORMModel):
    id: int
    name: str
    gender: str
    wins: int
    losses: int
    real_name: str | None
    nickname: str | None
    height: str | None
    weight: str | None
    debut_year: int | None
    promotion: str | None
    strength: int | None
    speed: int | None
    agility: int | None
    stamina: int | None
    charisma: int | None
    technique: int | None
    biography: str | None
    is_user_created: bool | None
    created_at: datetime
    updated_at: datetime


class SignatureMoveCreate(BaseModel):
    move_name: str = Field(min_length=1)
    move_type: MoveType


class SignatureMoveOut(ORMModel):
    id: int
    wrestler_id: int
    move_name: str
    move_type: str


# ----- Shows and rosters -----


class ShowCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class ShowUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class ShowOut(ORMModel):
    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class RosterEntryOut(ORMModel):
    id: int
    show_id: int
    wrestler_id: int
    assigned_at: datetime
    is_active: bool


class ActiveShowOut(BaseModel):
    wrestler_id: int
    show_id: int | None


# ----- Titles -----


class TitleCreate(BaseModel):
    name: str = Field(min_length=1)
    title_type: str = "Singles"
    division: str = "World"
    gender: str = "Mixed"
    show_id: int | None = None
    prestige_tier: int | None = Field(default=None, ge=1, le=5)
    is_user_created: bool = True


class TitleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    title_type: str | None = None
    division: str | None = None
    gender: str | None = None
    show_id: int | None = None
    prestige_tier: int | None = Field(default=None, ge=1, le=5)


class TitleActivity(BaseModel):
    is_active: bool


class TitleOut(ORMModel):
    id: int
    name: str
    title_type: str
    division: str
    prestige_tier: int
    gender: str
    show_id: int | None
    current_holder_id: int | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CrownRequest(BaseModel):
    wrestler_id: int
    event_name: str | None = None
    event_location: str | None = None
    change_method: str | None = None


class ReignOut(ORMModel):
    id: int
    title_id: int
    wrestler_id: int
    held_since: datetime
    held_until: datetime | None
    event_name: str | None
    event_location: str | None
    change_method: str | None


class CurrentHolderOut(BaseModel):
    title_id: int
    wrestler_id: int | None


class TitleStandingOut(ORMModel):
    title: TitleOut
    reign: ReignOut | None
    holder_name: str | None
    holder_gender: str | None
    days_held: int | None


# ----- Matches -----


class ParticipantIn(BaseModel):
    wrestler_id: int
    team_number: int | None = None
    entrance_order: int | None = None


class MatchCreate(BaseModel):
    match_type: str = "Singles"
    participants: list[ParticipantIn] = Field(min_length=1)
    stipulation: str | None = None
    title_id: int | None = None
    match_name: str | None = None
    scheduled_date: date | None = None
    match_order: int | None = None


class MatchOut(ORMModel):
    id: int
    show_id: int
    match_name: str | None
    match_type: str
    match_stipulation: str | None
    scheduled_date: date | None
    match_order: int | None
    winner_id: int | None
    is_title_match: bool
    title_id: int | None
    status: MatchStatus


class ParticipantOut(ORMModel):
    id: int
    match_id: int
    wrestler_id: int
    team_number: int | None
    entrance_order: int | None


class ResultRequest(BaseModel):
    winner_id: int


class MatchResultOut(ORMModel):
    match: MatchOut
    title_changed: bool
    new_reign: ReignOut | None
