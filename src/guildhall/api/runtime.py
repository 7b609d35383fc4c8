"""Runtime primitives backing the Guildhall HTTP API."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from guildhall.config import Settings, get_settings
from guildhall.database import build_session_factory, create_db_engine, init_db

logger = logging.getLogger(__name__)


class ApiState:
    """Store handles shared by the FastAPI layer.

    No domain state lives here between requests; every request opens its own
    session and the relational store is the only source of truth.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        engine: Engine | None = None,
        create_schema: bool = True,
    ) -> None:
        self.settings = settings or get_settings()
        self.engine = engine or create_db_engine(self.settings)
        self.session_factory: sessionmaker[Session] = build_session_factory(self.engine)
        if create_schema:
            init_db(self.engine)

    def shutdown(self) -> None:
        logger.info("disposing database engine")
        self.engine.dispose()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
