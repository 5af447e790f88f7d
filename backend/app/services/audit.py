from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.models.audit import AuditLog

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

    from app.models.enums import AuditAction, AuditEntityType


def model_to_audit_dict(model: SQLModel) -> dict[str, Any]:
    """Snapshot a row as JSON-safe values (UUIDs, dates and day amounts as strings)."""
    return model.model_dump(mode="json")


async def write_audit_log(
    session: AsyncSession,
    *,
    actor_id: uuid.UUID,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID | str,
    action: AuditAction,
    before_json: dict[str, Any] | None = None,
    after_json: dict[str, Any] | None = None,
) -> AuditLog:
    """Stage an audit entry in the caller's transaction.

    ``entity_id`` is stored as text so rows keyed by an employment term can
    share the table with UUID-keyed leave and balance rows.
    """
    entry = AuditLog(
        actor_id=actor_id,
        entity_type=entity_type.value,
        entity_id=str(entity_id),
        action=action.value,
        before_json=before_json,
        after_json=after_json,
    )
    session.add(entry)
    return entry
