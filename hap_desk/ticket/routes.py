# hap_desk/ticket/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from hap_desk.ticket.errors import (
    TerminalStateConflictError,
    TicketAlreadyExistsError,
    TicketNotFoundError,
)
from hap_desk.ticket.schemas import (
    AGENT_ID_PATTERN,
    DecisionIn,
    DecisionOut,
    TicketCreate,
    TicketOut,
)
from hap_desk.ticket.services import TicketWorkflow

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def get_workflow(request: Request) -> TicketWorkflow:
    return request.app.state.workflow


@router.post("/", response_model=TicketOut, status_code=201)
def create(
    ticket: TicketCreate,
    from_: str = Query(default="agent:desk", alias="from", pattern=AGENT_ID_PATTERN),
    workflow: TicketWorkflow = Depends(get_workflow),
):
    try:
        return workflow.create_ticket(ticket, from_)
    except TicketAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.get("/", response_model=list[TicketOut])
def list_all(workflow: TicketWorkflow = Depends(get_workflow)):
    return workflow.list_all()


@router.get("/pending", response_model=list[TicketOut])
def list_pending(
    to: str | None = Query(default=None, description="Only tickets addressed to this party"),
    workflow: TicketWorkflow = Depends(get_workflow),
):
    return workflow.list_pending(to=to)


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: str, workflow: TicketWorkflow = Depends(get_workflow)):
    ticket = workflow.get_ticket(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.post("/{ticket_id}/approve", response_model=DecisionOut)
def approve(
    ticket_id: str,
    decision: DecisionIn | None = None,
    workflow: TicketWorkflow = Depends(get_workflow),
):
    comment = decision.comment if decision else None
    try:
        return {"message": workflow.approve_ticket(ticket_id, comment)}
    except TicketNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except TerminalStateConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/{ticket_id}/reject", response_model=DecisionOut)
def reject(
    ticket_id: str,
    decision: DecisionIn | None = None,
    workflow: TicketWorkflow = Depends(get_workflow),
):
    comment = decision.comment if decision else None
    try:
        return {"message": workflow.reject_ticket(ticket_id, comment)}
    except TicketNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except TerminalStateConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
