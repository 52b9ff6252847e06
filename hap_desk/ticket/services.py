# hap_desk/ticket/services.py
import logging
import secrets

from hap_desk.core.database import Database
from hap_desk.ticket import store
from hap_desk.ticket.errors import (
    TerminalStateConflictError,
    TicketAlreadyExistsError,
    TicketNotFoundError,
)
from hap_desk.ticket.schemas import TicketCreate, TicketOut
from hap_desk.ticket.states import ACTIVE_STATES, TicketState, is_terminal

logger = logging.getLogger(__name__)


def new_ticket_id() -> str:
    return f"tk_{secrets.token_hex(6)}"


class TicketWorkflow:
    """Listing and approval operations over one :class:`Database`.

    Each method runs inside a single ``Database.session()`` block, so the
    state check in approve/reject and the write that follows cannot be
    interleaved with another caller.
    """

    def __init__(self, database: Database):
        self.database = database

    def list_pending(self, to: str | None = None) -> list[TicketOut]:
        with self.database.session() as db:
            return store.query_by_states(db, ACTIVE_STATES, to=to)

    def list_all(self) -> list[TicketOut]:
        with self.database.session() as db:
            return store.query_recent(db)

    def get_ticket(self, ticket_id: str) -> TicketOut | None:
        with self.database.session() as db:
            return store.query_by_id(db, ticket_id)

    def create_ticket(self, payload: TicketCreate, from_: str) -> TicketOut:
        ticket_id = payload.id or new_ticket_id()
        with self.database.session() as db:
            if store.get_state(db, ticket_id) is not None:
                raise TicketAlreadyExistsError(ticket_id)
            ticket = store.insert_ticket(
                db,
                ticket_id=ticket_id,
                from_=from_,
                to=payload.to,
                intent=payload.intent.model_dump(),
                artifact=payload.artifact,
                lease=payload.lease.model_dump(),
                risk=payload.risk,
                priority=payload.priority,
            )
        logger.info("Created ticket %s from %s to %s", ticket_id, from_, payload.to)
        return ticket

    def approve_ticket(self, ticket_id: str, comment: str | None = None) -> str:
        self._resolve(ticket_id, TicketState.APPROVED, comment)
        return f"Ticket {ticket_id} approved"

    def reject_ticket(self, ticket_id: str, comment: str | None = None) -> str:
        self._resolve(ticket_id, TicketState.REJECTED, comment)
        return f"Ticket {ticket_id} rejected"

    def _resolve(self, ticket_id: str, target: TicketState, comment: str | None) -> None:
        with self.database.session() as db:
            current = store.get_state(db, ticket_id)
            if current is None:
                raise TicketNotFoundError(ticket_id)
            if is_terminal(current):
                raise TerminalStateConflictError(ticket_id, current)
            store.set_state(db, ticket_id, target.value)
        # comment is not stored anywhere
        logger.info("Ticket %s %s -> %s", ticket_id, current, target.value)
