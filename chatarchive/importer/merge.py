"""Merge policy: how an incoming record combines with the stored one.

Same id means same logical conversation. The incoming record replaces the
stored metadata and full message list; only the timestamps reconcile:

- created_at: incoming value if set, else the stored value, else now.
- updated_at: incoming value if set, else now.
"""

from datetime import UTC, datetime

from chatarchive.models import Conversation


def merge_conversation(
    incoming: Conversation,
    existing: Conversation | None,
    *,
    now: datetime | None = None,
) -> Conversation:
    """Return the value to persist for incoming, given what is stored."""
    now = now or datetime.now(UTC)

    created_at = incoming.created_at
    if created_at is None:
        created_at = existing.created_at if existing is not None else None
    if created_at is None:
        created_at = now

    updated_at = incoming.updated_at or now

    return incoming.model_copy(
        update={"created_at": created_at, "updated_at": updated_at}
    )
