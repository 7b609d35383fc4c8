"""Domain exceptions raised by the Guildhall services.

The HTTP layer maps these onto the ``{"success": false, "reason": ...}``
envelope; nothing below the routes knows about status codes.
"""

from __future__ import annotations


class GuildhallError(Exception):
    """Base class for every error raised by the domain layer."""


class ModelNotFoundError(GuildhallError):
    """An entity could not be resolved by its public identifier.

    Also raised when an ownership assertion does not match the clan's current
    owner, so callers cannot tell "not the owner" apart from "no such clan".
    """

    def __init__(self, entity: str, public_id: str) -> None:
        self.entity = entity
        self.public_id = public_id
        super().__init__(f"{entity} was not found with id: {public_id}")


class PolicyValidationError(GuildhallError):
    """A game policy violated one or more ordering rules.

    Attributes:
        reasons: Every violated rule message, in evaluation order
    """

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons))


class MembershipError(GuildhallError):
    """A membership ledger rule rejected the requested change."""
