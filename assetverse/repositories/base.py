# assetverse/repositories/base.py
from typing import Generic, List, Optional, Type, TypeVar
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from assetverse.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Typed find/insert/update/count access to one table

    Repositories never commit; the calling service owns the transaction.
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def _where(self, filters: dict):
        return [getattr(self.model, field) == value for field, value in filters.items()]

    def get(self, record_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, record_id)

    def find_one(self, **filters) -> Optional[ModelT]:
        stmt = select(self.model).where(*self._where(filters)).limit(1)
        return self.db.execute(stmt).scalars().first()

    def find(self, *criteria, order_by=None, skip: int = 0, limit: Optional[int] = None, **filters) -> List[ModelT]:
        stmt = select(self.model).where(*criteria, *self._where(filters))
        if order_by is not None:
            stmt = stmt.order_by(*order_by) if isinstance(order_by, (list, tuple)) else stmt.order_by(order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def count(self, *criteria, **filters) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria, *self._where(filters))
        return self.db.execute(stmt).scalar_one()

    def insert(self, **values) -> ModelT:
        record = self.model(**values)
        self.db.add(record)
        self.db.flush()
        return record

    def update_where(self, criteria: list, values: dict) -> int:
        """Conditional update; the returned row count tells whether the guard held"""
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def delete(self, record: ModelT) -> None:
        self.db.delete(record)
        self.db.flush()
