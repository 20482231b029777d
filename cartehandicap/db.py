"""Database connection and initialization"""

import logging
import os
from typing import Any, Generator, List, Type

from fastapi import Depends
from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from cartehandicap.bootstrap import BOOTSTRAP
from cartehandicap.config import Config, get_config
from cartehandicap.models.access_card import AccessCard  # noqa: F401
from cartehandicap.models.base import BaseModel

logger = logging.getLogger(__name__)


class DatabaseConnection:
    engine: Engine
    session_local: sessionmaker[Session]
    # Class-level flag ensures bootstrapping runs only once per process.
    _bootstrapped: bool = False

    def __init__(self, config: Config = Depends(get_config)) -> None:
        connect_args = {}
        if config.database_url.startswith("sqlite"):
            # Ensure the database folder exists.
            os.makedirs(config.database_path.parent, exist_ok=True)
            connect_args = {"check_same_thread": False}
        self.engine = create_engine(config.database_url, connect_args=connect_args)
        self.session_local = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        # Seed reference data only once per process.
        if not self.__class__._bootstrapped:
            self.create_tables()
            self.seed_bootstrap_data()
            self.__class__._bootstrapped = True

    def create_tables(self) -> None:
        """Create all database tables defined in models."""
        logger.info("Creating database tables...")
        BaseModel.metadata.create_all(bind=self.engine)
        logger.info("Database tables created.")

    def get_session(self) -> Session:
        """Return a new SQLAlchemy session."""
        return self.session_local()

    def seed_bootstrap_data(self) -> None:
        """Seed the accommodation catalog, disability types and the mapping between them."""
        with self.get_session() as session:
            for model, seeds in BOOTSTRAP.items():
                try:
                    self._seed_model(session=session, model=model, seeds=seeds)
                    session.commit()
                except SQLAlchemyError as exc:
                    session.rollback()
                    logger.exception("Error occurred during reference data seeding.")
                    raise exc
        logger.info("Reference data seeding completed successfully.")

    def _seed_model(
        self, session: Session, model: Type[BaseModel], seeds: List[BaseModel]
    ) -> None:
        """
        Merge each detached seed instance into the session. This adds it if it
        does not exist or updates the existing record, so reseeding is safe.
        """
        table_name = model.__tablename__
        for seed in seeds:
            logger.debug("Merging seed with id %s for table '%s'", seed.id, table_name)
            session.merge(seed)
        session.flush()
        logger.info("Merged %d seed(s) for table '%s'", len(seeds), table_name)


def get_db(db_conn: DatabaseConnection = Depends()) -> Generator[Session, Any, None]:
    """
    Dependency for providing a SQLAlchemy session to services and tests.

    Yields:
        SQLAlchemy Session.
    """
    session = db_conn.get_session()
    try:
        yield session
    finally:
        session.close()
