"""Error taxonomy shared by the timeline and notification use cases."""

from __future__ import annotations


class ValidationError(ValueError):
    """Malformed input for a synchronous operation (append, settings, paging)."""


class NotFoundError(LookupError):
    """A requested record does not exist or is not owned by the caller."""

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class DuplicateEventError(Exception):
    """An event already exists for the ``(complaint_id, idempotency_key)`` pair.

    Raised only by the persistence adapter; the append use case converts it
    into a benign duplicate outcome.
    """

    def __init__(self, complaint_id: str, idempotency_key: str) -> None:
        super().__init__(
            f"Timeline event already recorded for complaint {complaint_id} "
            f"with key {idempotency_key!r}"
        )
        self.complaint_id = complaint_id
        self.idempotency_key = idempotency_key


class TransientStoreError(RuntimeError):
    """I/O failure while the dispatcher talked to a store."""


class ResolutionError(RuntimeError):
    """Recipients or display text for an event could not be resolved."""


__all__ = [
    "ValidationError",
    "NotFoundError",
    "DuplicateEventError",
    "TransientStoreError",
    "ResolutionError",
]
