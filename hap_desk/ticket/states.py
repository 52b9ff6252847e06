# hap_desk/ticket/states.py
from enum import Enum


class TicketState(str, Enum):
    PENDING = "PENDING"
    DELIVERED = "DELIVERED"
    ACKED = "ACKED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CANCELED = "CANCELED"


# The "needs attention" view
ACTIVE_STATES = frozenset({TicketState.PENDING, TicketState.DELIVERED, TicketState.ACKED})
TERMINAL_STATES = frozenset(
    {TicketState.APPROVED, TicketState.REJECTED, TicketState.EXPIRED, TicketState.CANCELED}
)


def is_terminal(state: str) -> bool:
    """True when no further transition may leave ``state``."""
    return state in TERMINAL_STATES
