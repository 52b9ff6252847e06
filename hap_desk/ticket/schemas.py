# hap_desk/ticket/schemas.py
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


TICKET_ID_PATTERN = r"^tk_[a-z0-9]{3,}$"
HUMAN_ID_PATTERN = r"^human:[a-z0-9_-]+$"
AGENT_ID_PATTERN = r"^(agent|system):[a-z0-9_-]+$"


class Intent(BaseModel):
    kind: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1, max_length=200)
    details: dict[str, Any] = Field(default_factory=dict)


class Lease(BaseModel):
    ttl_seconds: int = Field(..., ge=1, le=604800)
    on_timeout: Literal["auto_approve", "auto_reject", "cancel"]

    # Extra grant fields (e.g. holder) are kept as given
    model_config = ConfigDict(extra="allow")


class TicketCreate(BaseModel):
    id: str | None = Field(default=None, pattern=TICKET_ID_PATTERN)
    to: str = Field(..., pattern=HUMAN_ID_PATTERN)
    intent: Intent
    artifact: dict[str, Any] | None = None
    lease: Lease
    risk: float = Field(..., ge=0, le=1)
    priority: Literal["low", "normal", "high", "critical"] = "normal"


class TicketOut(BaseModel):
    """A stored ticket with its JSON columns decoded.

    ``intent``, ``artifact`` and ``lease`` are ``None`` when the stored text
    is missing or cannot be parsed.
    """

    id: str
    from_: str = Field(..., alias="from")
    to: str
    intent: Any = None
    artifact: Any = None
    lease: Any = None
    risk: float
    priority: str
    state: str
    created_at: str
    updated_at: str

    model_config = ConfigDict(populate_by_name=True)


class DecisionIn(BaseModel):
    # Accepted and discarded; decisions carry no persisted comment
    comment: str | None = None


class DecisionOut(BaseModel):
    message: str
