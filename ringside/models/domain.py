"""Domain models for Ringside.

Wrestlers, shows, championships and matches. Two history tables carry the
invariants the rest of the system relies on:

- show_rosters: at most one ACTIVE row per wrestler across all shows.
- title_holders: at most one OPEN row (held_until IS NULL) per title, and
  titles.current_holder_id always names the wrestler of that row.

Both are enforced by partial unique indexes as well as by the services, so a
bug in application code surfaces as an IntegrityError instead of silently
corrupting history.
"""

from datetime import date, datetime
from enum import Enum

from sqlalchemy import (
    DDL,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    event,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ringside.models.base import Base, TimestampMixin

POWER_RATINGS = ("strength", "speed", "agility", "stamina", "charisma", "technique")


class Gender(str, Enum):
    """Wrestler gender."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | Gender") -> "Gender":
        """Lenient parse: 'm', 'male', 'Female', ... Anything else is Other."""
        if isinstance(value, Gender):
            return value
        normalized = value.strip().lower()
        if normalized in ("male", "m"):
            return cls.MALE
        if normalized in ("female", "f"):
            return cls.FEMALE
        return cls.OTHER


class MoveType(str, Enum):
    """Signature move classification."""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class MatchStatus(str, Enum):
    """Match lifecycle. Resolved is terminal."""
    SCHEDULED = "Scheduled"
    RESOLVED = "Resolved"


def _rating_check(column: str) -> CheckConstraint:
    return CheckConstraint(
        f"{column} >= 1 AND {column} <= 10", name=f"ck_wrestlers_{column}_range"
    )


class Wrestler(Base, TimestampMixin):
    """
    A performer. Global: not owned by any show.

    Show membership lives in show_rosters, championships in title_holders.
    """

    __tablename__ = "wrestlers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    gender: Mapped[str] = mapped_column(Text, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    # Enhanced profile
    real_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    nickname: Mapped[str | None] = mapped_column(Text, nullable=True)
    height: Mapped[str | None] = mapped_column(Text, nullable=True)
    weight: Mapped[str | None] = mapped_column(Text, nullable=True)
    debut_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    promotion: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Power ratings (1-10)
    strength: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    speed: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    agility: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    stamina: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    charisma: Mapped[int] = mapped_column(Integer, default=5, server_default="5")
    technique: Mapped[int] = mapped_column(Integer, default=5, server_default="5")

    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_user_created: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="0"
    )

    # Relationships
    signature_moves: Mapped[list["SignatureMove"]] = relationship(
        "SignatureMove", back_populates="wrestler", passive_deletes=True
    )
    roster_entries: Mapped[list["ShowRoster"]] = relationship(
        "ShowRoster", back_populates="wrestler", passive_deletes=True
    )
    reigns: Mapped[list["TitleHolder"]] = relationship(
        "TitleHolder", back_populates="wrestler", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("wins >= 0", name="ck_wrestlers_wins_nonnegative"),
        CheckConstraint("losses >= 0", name="ck_wrestlers_losses_nonnegative"),
        *(_rating_check(column) for column in POWER_RATINGS),
    )

    def __repr__(self) -> str:
        return f"<Wrestler {self.name} ({self.wins}-{self.losses})>"


class SignatureMove(Base, TimestampMixin):
    """Finisher or signature. Limits per wrestler come from the booking policy."""

    __tablename__ = "signature_moves"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    wrestler_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="CASCADE"), nullable=False
    )
    move_name: Mapped[str] = mapped_column(Text, nullable=False)
    move_type: Mapped[str] = mapped_column(Text, nullable=False)

    wrestler: Mapped["Wrestler"] = relationship(
        "Wrestler", back_populates="signature_moves"
    )

    __table_args__ = (
        CheckConstraint(
            "move_type IN ('primary', 'secondary')", name="ck_signature_moves_type"
        ),
        Index("idx_signature_moves_wrestler_id", "wrestler_id"),
    )

    def __repr__(self) -> str:
        return f"<SignatureMove {self.move_name} ({self.move_type})>"


class Show(Base, TimestampMixin):
    """
    A wrestling program (e.g. a weekly TV show).

    Owns roster assignments and matches.
    """

    __tablename__ = "shows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    roster_entries: Mapped[list["ShowRoster"]] = relationship(
        "ShowRoster", back_populates="show", passive_deletes=True
    )
    matches: Mapped[list["Match"]] = relationship(
        "Match", back_populates="show", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Show {self.name}>"


class ShowRoster(Base):
    """
    Roster assignment record.

    Never deleted by the roster manager, only deactivated. One row per
    (show, wrestler) pair; repeat assignment reactivates it.
    """

    __tablename__ = "show_rosters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    show_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False
    )
    wrestler_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="CASCADE"), nullable=False
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )

    show: Mapped["Show"] = relationship("Show", back_populates="roster_entries")
    wrestler: Mapped["Wrestler"] = relationship(
        "Wrestler", back_populates="roster_entries"
    )

    __table_args__ = (
        UniqueConstraint("show_id", "wrestler_id", name="uq_show_rosters_show_wrestler"),
        # Exclusivity: one active show per wrestler
        Index(
            "uq_show_rosters_active_wrestler",
            "wrestler_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
        Index("idx_show_rosters_show_active", "show_id", "is_active"),
    )

    def __repr__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"<ShowRoster show={self.show_id} wrestler={self.wrestler_id} {state}>"


class Title(Base, TimestampMixin):
    """
    A championship.

    current_holder_id is a denormalized pointer to the open reign in
    title_holders. Only the title tracker writes it, in the same transaction
    that writes the history row.
    """

    __tablename__ = "titles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    title_type: Mapped[str] = mapped_column(Text, nullable=False, default="Singles")
    division: Mapped[str] = mapped_column(Text, nullable=False, default="World")
    prestige_tier: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    gender: Mapped[str] = mapped_column(Text, nullable=False, default="Mixed")
    show_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("shows.id", ondelete="SET NULL"), nullable=True
    )
    current_holder_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="SET NULL"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )
    is_user_created: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="0"
    )

    reigns: Mapped[list["TitleHolder"]] = relationship(
        "TitleHolder", back_populates="title", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(
            "prestige_tier >= 1 AND prestige_tier <= 5",
            name="ck_titles_prestige_tier_range",
        ),
        Index("idx_titles_show_id", "show_id"),
    )

    @property
    def is_vacant(self) -> bool:
        return self.current_holder_id is None

    def __repr__(self) -> str:
        return f"<Title {self.name} (holder={self.current_holder_id})>"


class TitleHolder(Base, TimestampMixin):
    """One reign: a continuous holding period of a title by one wrestler."""

    __tablename__ = "title_holders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("titles.id", ondelete="CASCADE"), nullable=False
    )
    wrestler_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="CASCADE"), nullable=False
    )
    held_since: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    held_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    event_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_location: Mapped[str | None] = mapped_column(Text, nullable=True)
    change_method: Mapped[str | None] = mapped_column(Text, nullable=True)

    title: Mapped["Title"] = relationship("Title", back_populates="reigns")
    wrestler: Mapped["Wrestler"] = relationship("Wrestler", back_populates="reigns")

    __table_args__ = (
        # Single open reign per title
        Index(
            "uq_title_holders_open_reign",
            "title_id",
            unique=True,
            sqlite_where=text("held_until IS NULL"),
            postgresql_where=text("held_until IS NULL"),
        ),
        Index("idx_title_holders_title_id", "title_id"),
        Index("idx_title_holders_wrestler_id", "wrestler_id"),
    )

    @property
    def is_open(self) -> bool:
        return self.held_until is None

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<TitleHolder title={self.title_id} wrestler={self.wrestler_id} {state}>"


class Match(Base, TimestampMixin):
    """A contest on a show. Scheduled until a winner is recorded."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    show_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False
    )
    match_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    match_type: Mapped[str] = mapped_column(Text, nullable=False, default="Singles")
    match_stipulation: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    match_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    winner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="SET NULL"), nullable=True
    )
    is_title_match: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    title_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("titles.id", ondelete="SET NULL"), nullable=True
    )
    # Recorded independently of winner_id, which is nulled if the winner is deleted
    status: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=MatchStatus.SCHEDULED.value,
        server_default=MatchStatus.SCHEDULED.value,
    )

    show: Mapped["Show"] = relationship("Show", back_populates="matches")
    participants: Mapped[list["MatchParticipant"]] = relationship(
        "MatchParticipant", back_populates="match", passive_deletes=True
    )

    __table_args__ = (
        Index("idx_matches_show_id", "show_id"),
        Index("idx_matches_winner_id", "winner_id"),
        Index("idx_matches_title_id", "title_id"),
        Index("idx_matches_scheduled_date", "scheduled_date"),
        CheckConstraint(
            "status IN ('Scheduled', 'Resolved')", name="ck_matches_status"
        ),
    )

    @property
    def is_resolved(self) -> bool:
        return self.status == MatchStatus.RESOLVED

    def __repr__(self) -> str:
        return f"<Match {self.id} {self.match_type} ({self.status})>"


class MatchParticipant(Base):
    """One wrestler's slot in a match; team_number groups the sides."""

    __tablename__ = "match_participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    match_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    )
    wrestler_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wrestlers.id", ondelete="CASCADE"), nullable=False
    )
    team_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    entrance_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    match: Mapped["Match"] = relationship("Match", back_populates="participants")

    __table_args__ = (
        UniqueConstraint(
            "match_id", "wrestler_id", name="uq_match_participants_match_wrestler"
        ),
        Index("idx_match_participants_wrestler_id", "wrestler_id"),
        Index("idx_match_participants_team", "match_id", "team_number"),
    )

    def __repr__(self) -> str:
        return (
            f"<MatchParticipant match={self.match_id} wrestler={self.wrestler_id} "
            f"team={self.team_number}>"
        )


# updated_at triggers, so raw UPDATEs keep timestamps current too
TIMESTAMPED_TABLES = (
    Wrestler.__table__,
    SignatureMove.__table__,
    Show.__table__,
    Title.__table__,
    TitleHolder.__table__,
    Match.__table__,
)


def updated_at_trigger_sql(table_name: str) -> str:
    return (
        f"CREATE TRIGGER IF NOT EXISTS update_{table_name}_updated_at "
        f"AFTER UPDATE ON {table_name} "
        f"FOR EACH ROW "
        f"BEGIN "
        f"UPDATE {table_name} SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id; "
        f"END"
    )


for _table in TIMESTAMPED_TABLES:
    event.listen(
        _table,
        "after_create",
        DDL(updated_at_trigger_sql(_table.name)).execute_if(dialect="sqlite"),
    )
