"""Booking policy.

Business rules that are deliberately configurable rather than hard-coded:
whether retired titles can change hands, how divisions map to prestige
tiers, what a recorded result does to win/loss records, and how many
signature moves a wrestler may carry.

Values come from defaults.yaml (see Settings.config_path).
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from ringside.config.settings import Settings, get_settings

MIN_PRESTIGE_TIER = 1
MAX_PRESTIGE_TIER = 5


@dataclass
class TitlePolicy:
    """Rules for championship changes."""
    allow_crowning_inactive: bool = False
    default_prestige_tier: int = 4
    prestige_tiers: dict[str, int] = field(default_factory=dict)

    def prestige_for_division(self, division: str) -> int:
        """Prestige tier for a division, falling back to the default tier."""
        return self.prestige_tiers.get(division, self.default_prestige_tier)


@dataclass
class MatchPolicy:
    """Rules applied when a match result is recorded."""
    update_win_loss: bool = True
    title_change_method: str = "Match Result"


@dataclass
class SignatureMovePolicy:
    """Per-wrestler signature move limits."""
    max_primary: int = 2
    max_secondary: int = 2

    def limit_for(self, move_type: str) -> int:
        return self.max_primary if move_type == "primary" else self.max_secondary


@dataclass
class BookingPolicy:
    """Complete policy bundle handed to the services."""
    titles: TitlePolicy = field(default_factory=TitlePolicy)
    matches: MatchPolicy = field(default_factory=MatchPolicy)
    signature_moves: SignatureMovePolicy = field(default_factory=SignatureMovePolicy)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BookingPolicy":
        """Build a policy from the parsed YAML mapping.

        Unknown keys are ignored; missing sections keep their defaults.
        """
        titles = data.get("titles") or {}
        matches = data.get("matches") or {}
        moves = data.get("signature_moves") or {}

        default_tier = int(titles.get("default_prestige_tier", 4))
        tiers = {
            str(division): int(tier)
            for division, tier in (titles.get("prestige_tiers") or {}).items()
        }
        for division, tier in [("default", default_tier), *tiers.items()]:
            if not MIN_PRESTIGE_TIER <= tier <= MAX_PRESTIGE_TIER:
                raise ValueError(
                    f"prestige tier for {division!r} must be between "
                    f"{MIN_PRESTIGE_TIER} and {MAX_PRESTIGE_TIER}, got {tier}"
                )

        return cls(
            titles=TitlePolicy(
                allow_crowning_inactive=bool(
                    titles.get("allow_crowning_inactive", False)
                ),
                default_prestige_tier=default_tier,
                prestige_tiers=tiers,
            ),
            matches=MatchPolicy(
                update_win_loss=bool(matches.get("update_win_loss", True)),
                title_change_method=str(
                    matches.get("title_change_method", "Match Result")
                ),
            ),
            signature_moves=SignatureMovePolicy(
                max_primary=int(moves.get("max_primary", 2)),
                max_secondary=int(moves.get("max_secondary", 2)),
            ),
        )


def load_policy(settings: Settings | None = None) -> BookingPolicy:
    """Load the booking policy from the configured defaults file."""
    settings = settings or get_settings()
    return BookingPolicy.from_dict(settings.load_defaults_config())


@lru_cache
def get_policy() -> BookingPolicy:
    """Get the cached booking policy."""
    return load_policy()
