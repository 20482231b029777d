from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from cartehandicap.db import get_db


class UnitOfWork:
    def __init__(self, db: Session):
        self.db = db

    def __getattr__(self, attr):
        """
        Delegate attribute access to the underlying session.
        This allows the UoW to be used as if it were a Session.
        """
        return getattr(self.db, attr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            # Roll back if an exception occurred.
            self.db.rollback()
        else:
            # Otherwise, commit the transaction.
            self.db.commit()
        self.db.close()


def get_uow(
    db: Session = Depends(get_db),
) -> Generator[UnitOfWork, None, None]:
    """
    Dependency that yields a UnitOfWork instance.

    FastAPI calls this dependency once per request, so the same UoW (and
    underlying session) is passed to all repositories and services.
    """
    with UnitOfWork(db) as uow:
        yield uow
