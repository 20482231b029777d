"""Base repository with CRUD methods, suitable for simple objects"""

from typing import Any, Generic, Mapping, Type, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Query, Session

from cartehandicap.errors.common import NotFoundError
from cartehandicap.models.base import BaseModel
from cartehandicap.schemas.base import BaseFilterSchema, PaginationSchema
from cartehandicap.uow import get_uow

_M = TypeVar("_M", bound=BaseModel)  # model
_F = TypeVar("_F", bound=BaseFilterSchema)  # filters


class BaseRepository(Generic[_M]):
    model: Type[_M]
    db: Session

    def __init__(self, db: Session = Depends(get_uow)):
        self.db = db

    def create(self, obj: _M) -> _M:
        self.db.add(obj)
        self.db.flush()
        self.db.refresh(obj)
        return obj

    def get(self, obj_id: int) -> _M:
        db_obj = self.db.query(self.model).filter(self.model.id == obj_id).first()
        if not db_obj:
            raise NotFoundError(f"{self.model.__name__} id={obj_id}")
        return db_obj

    def _apply_filters(self, query: Query[_M], filters: _F) -> Query[_M]:
        """Filters for a particular model. To be overridden by child class."""
        return query

    def get_all(
        self, filters: _F | None = None, skip: int = 0, limit: int = 100
    ) -> PaginationSchema[_M]:
        query = self.db.query(self.model)
        if filters:
            if filters.comment is not None:
                query = query.filter(self.model.comment.ilike(f"%{filters.comment}%"))
            query = self._apply_filters(query, filters)
        query = query.order_by(self.model.id)
        total = query.count()
        items = query.offset(skip).limit(limit).all()
        return PaginationSchema[_M](items=items, total=total, skip=skip, limit=limit)

    def update(self, obj_id: int, new_attrs: Mapping[str, Any]) -> _M:
        obj = self.get(obj_id)
        for key, value in new_attrs.items():
            setattr(obj, key, value)
        self.db.flush()
        self.db.refresh(obj)
        return obj
