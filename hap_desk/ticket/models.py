# hap_desk/ticket/models.py
from sqlalchemy import Column, Float, Index, String, Text, text
from hap_desk.core.database import Base

# ISO-8601 UTC with milliseconds, same shape as store.utcnow_iso()
NOW_ISO = text("(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))")


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        Index("idx_tickets_to_state", "to", "state"),
        Index("idx_tickets_state_created", "state", "created_at"),
    )

    id = Column(String, primary_key=True)
    from_ = Column("from", String, nullable=False)
    to = Column(String, nullable=False)
    intent = Column(Text, nullable=False)
    artifact = Column(Text, nullable=True)
    lease = Column(Text, nullable=False)
    risk = Column(Float, nullable=False)
    priority = Column(String, nullable=False)
    state = Column(String, nullable=False, server_default="PENDING")
    created_at = Column(String, nullable=False, server_default=NOW_ISO)
    updated_at = Column(String, nullable=False, server_default=NOW_ISO)
