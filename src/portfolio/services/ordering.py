"""Atomic reordering of ordered rows."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.services.errors import ConflictError, NotFoundError


def reorder(session: Session, model: type, ids: Sequence[str]) -> None:
    """Set ``order`` of each row to its position in ids.

    Either every row is updated or none is: unknown or repeated ids raise
    before anything is written.

    Args:
        session: Open session; the caller's transaction commits the change
        model: Mapped class with ``id`` and ``order`` columns
        ids: Row ids in the desired order

    Raises:
        ConflictError: If ids contains duplicates
        NotFoundError: If any id does not exist
    """
    if len(set(ids)) != len(ids):
        raise ConflictError("Duplicate ids in reorder request")

    rows: dict[str, Any] = {
        row.id: row for row in session.scalars(select(model).where(model.id.in_(ids)))
    }
    missing = [item_id for item_id in ids if item_id not in rows]
    if missing:
        raise NotFoundError(f"Unknown ids: {', '.join(missing)}")

    for position, item_id in enumerate(ids):
        rows[item_id].order = position
    session.flush()
