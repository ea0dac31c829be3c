"""Unit tests for the booking policy and settings."""

import pytest

from ringside.config import BookingPolicy, Settings, load_policy


class TestBookingPolicyDefaults:
    """Policy loaded from the shipped defaults.yaml."""

    def test_defaults_file_loads(self):
        policy = load_policy(Settings())

        assert policy.titles.allow_crowning_inactive is False
        assert policy.matches.update_win_loss is True
        assert policy.matches.title_change_method == "Match Result"
        assert policy.signature_moves.max_primary == 2

    def test_world_titles_are_top_tier(self):
        policy = load_policy(Settings())

        assert policy.titles.prestige_for_division("World") == 1
        assert policy.titles.prestige_for_division("Intercontinental") == 2
        assert policy.titles.prestige_for_division("World Tag Team") == 3

    def test_unknown_division_gets_default_tier(self):
        policy = load_policy(Settings())

        assert policy.titles.prestige_for_division("Hardcore") == 4


class TestBookingPolicyFromDict:
    """Parsing of partial or invalid policy mappings."""

    def test_empty_mapping_uses_dataclass_defaults(self):
        policy = BookingPolicy.from_dict({})

        assert policy.titles.default_prestige_tier == 4
        assert policy.titles.prestige_tiers == {}
        assert policy.matches.update_win_loss is True
        assert policy.signature_moves.max_secondary == 2

    def test_sections_override_independently(self):
        policy = BookingPolicy.from_dict(
            {
                "titles": {"allow_crowning_inactive": True},
                "matches": {"update_win_loss": False},
            }
        )

        assert policy.titles.allow_crowning_inactive is True
        assert policy.matches.update_win_loss is False
        assert policy.matches.title_change_method == "Match Result"

    def test_out_of_range_tier_rejected(self):
        with pytest.raises(ValueError, match="between 1 and 5"):
            BookingPolicy.from_dict({"titles": {"prestige_tiers": {"World": 0}}})

    def test_out_of_range_default_tier_rejected(self):
        with pytest.raises(ValueError):
            BookingPolicy.from_dict({"titles": {"default_prestige_tier": 6}})

    def test_move_limits_by_type(self):
        policy = BookingPolicy.from_dict(
            {"signature_moves": {"max_primary": 1, "max_secondary": 3}}
        )

        assert policy.signature_moves.limit_for("primary") == 1
        assert policy.signature_moves.limit_for("secondary") == 3


class TestSettings:
    """Environment driven settings."""

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("RINGSIDE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("RINGSIDE_DB_BEGIN_IMMEDIATE", "false")

        settings = Settings()

        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.db_begin_immediate is False

    def test_missing_config_file_is_empty(self, tmp_path):
        settings = Settings(config_path=tmp_path / "absent.yaml")

        assert settings.load_defaults_config() == {}
        assert load_policy(settings) == BookingPolicy()

    def test_custom_config_file(self, tmp_path):
        path = tmp_path / "policy.yaml"
        path.write_text("titles:\n  allow_crowning_inactive: true\n")

        policy = load_policy(Settings(config_path=path))

        assert policy.titles.allow_crowning_inactive is True
