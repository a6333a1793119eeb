"""Exceptions raised by conquest services.

Only fatal preconditions are modelled here.  Failures inside best-effort
cascade steps are recorded as side effects and never raised.
"""

from __future__ import annotations


class ConquestError(Exception):
    """Base class for engine errors surfaced to callers."""


class EntityNotFoundError(ConquestError, LookupError):
    """A required document does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.entity_id = entity_id


class OwnershipConflictError(ConquestError, ValueError):
    """The attacker already owns the target territory."""


class PreconditionError(ConquestError, ValueError):
    """The request is invalid for the current state of the entities."""


class StaleWriteError(ConquestError):
    """A conditional update lost against a concurrent writer."""

    def __init__(self, collection: str, entity_id: str, expected: int, found: int) -> None:
        super().__init__(
            f"{collection}/{entity_id} changed concurrently "
            f"(expected version {expected}, found {found})"
        )
        self.collection = collection
        self.entity_id = entity_id
        self.expected = expected
        self.found = found
