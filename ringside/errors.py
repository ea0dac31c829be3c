"""Error kinds raised by the consistency layer.

Every failure is scoped to the single requested operation. The caller layer
decides how to present them; see ringside.api.errors for the HTTP mapping.
"""


class RingsideError(Exception):
    """Base class for all domain errors."""

    kind = "error"

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"kind": self.kind, "detail": self.message, **self.context}


class NotFound(RingsideError):
    """A referenced id does not exist."""

    kind = "not_found"

    @classmethod
    def for_entity(cls, entity: str, entity_id: int) -> "NotFound":
        return cls(f"{entity} {entity_id} does not exist", entity=entity, id=entity_id)


class Conflict(RingsideError):
    """The operation would violate an invariant or its transaction failed."""

    kind = "conflict"


class InvalidParticipant(RingsideError):
    """The named wrestler is not a participant of the match."""

    kind = "invalid_participant"


class AlreadyResolved(RingsideError):
    """The match already has a recorded result."""

    kind = "already_resolved"


class InvalidState(RingsideError):
    """The operation is not permitted given the entity's activity flag."""

    kind = "invalid_state"
