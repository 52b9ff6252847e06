# hap_desk/ticket/errors.py


class TicketError(Exception):
    """Base class for recoverable ticket workflow errors."""


class TicketNotFoundError(TicketError):
    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket {ticket_id} not found")


class TerminalStateConflictError(TicketError):
    def __init__(self, ticket_id: str, state: str):
        self.ticket_id = ticket_id
        self.state = state
        super().__init__(f"Ticket {ticket_id} is already in terminal state: {state}")


class TicketAlreadyExistsError(TicketError):
    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket {ticket_id} already exists")
