"""Post-response bookkeeping for granted scans.

Runs after the decision has been sent, on its own session, so a failing
update can neither delay nor change the answer given to the card reader.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from cartehandicap.config import Config
from cartehandicap.db import DatabaseConnection
from cartehandicap.dependencies.services import ServiceContainer
from cartehandicap.uow import UnitOfWork

logger = logging.getLogger(__name__)


def record_scan(card_id: int, config: Config) -> None:
    try:
        db_conn = DatabaseConnection(config)
        with UnitOfWork(db_conn.get_session()) as uow:
            ServiceContainer(uow, config).verification_service.record_scan(card_id)
    except SQLAlchemyError:
        logger.exception("Could not record scan time for card id=%s", card_id)
