"""Unit tests for enums, error kinds and small helpers."""

import pytest

from ringside.api.errors import status_for
from ringside.errors import (
    AlreadyResolved,
    Conflict,
    InvalidParticipant,
    InvalidState,
    NotFound,
    RingsideError,
)
from ringside.models import Gender, Match, MatchStatus, Title
from ringside.services import ParticipantSpec
from ringside.services.matches import _normalize_participants


class TestGenderParse:
    """Lenient gender parsing."""

    @pytest.mark.parametrize("value", ["Male", "male", "M", " m "])
    def test_male(self, value):
        assert Gender.parse(value) is Gender.MALE

    @pytest.mark.parametrize("value", ["Female", "FEMALE", "f"])
    def test_female(self, value):
        assert Gender.parse(value) is Gender.FEMALE

    def test_anything_else_is_other(self):
        assert Gender.parse("non-binary") is Gender.OTHER

    def test_enum_passes_through(self):
        assert Gender.parse(Gender.FEMALE) is Gender.FEMALE


class TestParticipantSpec:
    """Coercion of the accepted participant shapes."""

    def test_bare_id(self):
        assert ParticipantSpec.coerce(7) == ParticipantSpec(wrestler_id=7)

    def test_tuple(self):
        assert ParticipantSpec.coerce((7, 2, 1)) == ParticipantSpec(7, 2, 1)

    def test_mapping(self):
        spec = ParticipantSpec.coerce({"wrestler_id": 7, "team_number": 2})
        assert spec == ParticipantSpec(7, 2, None)

    def test_defaults_follow_card_position(self):
        specs = _normalize_participants([3, (5, 1), 9])

        assert [(s.wrestler_id, s.team_number, s.entrance_order) for s in specs] == [
            (3, 1, 1),
            (5, 1, 2),
            (9, 3, 3),
        ]

    def test_caller_specs_left_untouched(self):
        card = [ParticipantSpec(3), ParticipantSpec(5)]

        first = _normalize_participants(card)
        second = _normalize_participants(list(reversed(card)))

        assert [(s.team_number, s.entrance_order) for s in card] == [
            (None, None),
            (None, None),
        ]
        assert [(s.wrestler_id, s.team_number) for s in first] == [(3, 1), (5, 2)]
        assert [(s.wrestler_id, s.team_number) for s in second] == [(5, 1), (3, 2)]

    def test_empty_card_rejected(self):
        with pytest.raises(InvalidParticipant):
            _normalize_participants([])

    def test_duplicate_wrestler_rejected(self):
        with pytest.raises(Conflict):
            _normalize_participants([1, 2, 1])


class TestErrors:
    """Error payloads and HTTP status mapping."""

    def test_not_found_payload(self):
        error = NotFound.for_entity("Wrestler", 42)

        assert error.to_dict() == {
            "kind": "not_found",
            "detail": "Wrestler 42 does not exist",
            "entity": "Wrestler",
            "id": 42,
        }

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (NotFound("x"), 404),
            (Conflict("x"), 409),
            (AlreadyResolved("x"), 409),
            (InvalidState("x"), 409),
            (InvalidParticipant("x"), 422),
            (RingsideError("x"), 400),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert status_for(error) == status_code


class TestModelProperties:
    """Derived properties on the models."""

    def test_match_resolution_follows_status_not_winner(self):
        assert not Match(status=MatchStatus.SCHEDULED.value, winner_id=None).is_resolved
        assert Match(status=MatchStatus.RESOLVED.value, winner_id=3).is_resolved
        # the winner row was deleted after the result was recorded
        assert Match(status=MatchStatus.RESOLVED.value, winner_id=None).is_resolved

    def test_title_vacancy(self):
        assert Title(current_holder_id=None).is_vacant
        assert not Title(current_holder_id=1).is_vacant
