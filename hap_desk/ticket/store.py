# hap_desk/ticket/store.py
import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from hap_desk.ticket.models import Ticket
from hap_desk.ticket.schemas import TicketOut
from hap_desk.ticket.states import TicketState

logger = logging.getLogger(__name__)

RECENT_TICKETS_LIMIT = 50


def utcnow_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def decode_document(raw: str | None, *, ticket_id: str, field: str) -> Any:
    """Parse a stored JSON column, falling back to ``None`` on bad text.

    A malformed field only blanks that field; the rest of the row is still
    returned.
    """
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ticket %s has malformed %s; returning null", ticket_id, field)
        return None


def encode_document(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def to_ticket_out(row: Ticket) -> TicketOut:
    return TicketOut(
        id=row.id,
        from_=row.from_,
        to=row.to,
        intent=decode_document(row.intent, ticket_id=row.id, field="intent"),
        artifact=decode_document(row.artifact, ticket_id=row.id, field="artifact"),
        lease=decode_document(row.lease, ticket_id=row.id, field="lease"),
        risk=row.risk,
        priority=row.priority,
        state=row.state,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _newest_first(query):
    return query.order_by(Ticket.created_at.desc(), Ticket.id)


def query_by_states(db: Session, states: Iterable[str], to: str | None = None) -> list[TicketOut]:
    labels = sorted({getattr(s, "value", s) for s in states})
    if not labels:
        raise ValueError("states must not be empty")
    query = db.query(Ticket).filter(Ticket.state.in_(labels))
    if to is not None:
        query = query.filter(Ticket.to == to)
    return [to_ticket_out(row) for row in _newest_first(query).all()]


def query_recent(db: Session, limit: int = RECENT_TICKETS_LIMIT) -> list[TicketOut]:
    rows = _newest_first(db.query(Ticket)).limit(limit).all()
    return [to_ticket_out(row) for row in rows]


def query_by_id(db: Session, ticket_id: str) -> TicketOut | None:
    row = db.get(Ticket, ticket_id)
    return to_ticket_out(row) if row else None


def get_state(db: Session, ticket_id: str) -> str | None:
    return db.query(Ticket.state).filter(Ticket.id == ticket_id).scalar()


def insert_ticket(
    db: Session,
    *,
    ticket_id: str,
    from_: str,
    to: str,
    intent: Any,
    lease: Any,
    risk: float,
    priority: str,
    artifact: Any = None,
    state: str = TicketState.PENDING.value,
    created_at: str | None = None,
    updated_at: str | None = None,
) -> TicketOut:
    now = utcnow_iso()
    created_at = created_at or now
    db_ticket = Ticket(
        id=ticket_id,
        from_=from_,
        to=to,
        intent=encode_document(intent),
        artifact=encode_document(artifact) if artifact is not None else None,
        lease=encode_document(lease),
        risk=risk,
        priority=priority,
        state=state,
        created_at=created_at,
        updated_at=max(updated_at or now, created_at),
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    return to_ticket_out(db_ticket)


def set_state(db: Session, ticket_id: str, state: str) -> None:
    db_ticket = db.get(Ticket, ticket_id)
    db_ticket.state = state
    # Millisecond resolution: a decision in the same millisecond as the insert
    # leaves updated_at equal to created_at. It never moves backwards.
    db_ticket.updated_at = max(utcnow_iso(), db_ticket.updated_at, db_ticket.created_at)
    db.commit()
