# hap_desk/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hap_desk.core.config import Settings, get_settings
from hap_desk.core.database import open_database
from hap_desk.ticket.routes import router as ticket_router
from hap_desk.ticket.services import TicketWorkflow

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # StoreInitializationError propagates and aborts startup
        database = open_database(settings.db_path())
        app.state.database = database
        app.state.workflow = TicketWorkflow(database)
        try:
            yield
        finally:
            database.dispose()
            logger.info("Ticket store closed")

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(ticket_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()
