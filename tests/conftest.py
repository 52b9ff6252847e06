# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from hap_desk.core.config import Settings
from hap_desk.core.database import open_database
from hap_desk.main import create_app
from hap_desk.ticket import store
from hap_desk.ticket.services import TicketWorkflow

PAST = "2026-01-01T00:00:00.000Z"


@pytest.fixture
def database(tmp_path):
    db = open_database(tmp_path / "hap" / "hap.db")
    yield db
    db.dispose()


@pytest.fixture
def workflow(database):
    return TicketWorkflow(database)


@pytest.fixture
def make_ticket(database):
    """Insert a ticket directly through the store, as an external producer would."""

    def _make(ticket_id, state="PENDING", created_at=PAST, **overrides):
        fields = {
            "from_": "agent:builder",
            "to": "human:alex",
            "intent": {"kind": "modify_file", "summary": "edit config", "details": {}},
            "lease": {"ttl_seconds": 300, "on_timeout": "auto_reject"},
            "risk": 0.2,
            "priority": "normal",
        }
        fields.update(overrides)
        with database.session() as db:
            return store.insert_ticket(
                db,
                ticket_id=ticket_id,
                state=state,
                created_at=created_at,
                updated_at=created_at,
                **fields,
            )

    return _make


@pytest.fixture
def raw_row(database):
    def _row(ticket_id):
        with database.session() as db:
            row = db.execute(
                text("SELECT * FROM tickets WHERE id = :id"), {"id": ticket_id}
            ).one()
            return tuple(row)

    return _row


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(HAP_DB_PATH=str(tmp_path / "desk.db")))
    with TestClient(app) as c:
        yield c
